# src/phasorsim_core/schematic/__init__.py
from .raw_data import ConnectionPoint, GraphicalNode, Wire, Schematic
from .parser import SchematicParser, ANALYSIS_METHODS
from .exceptions import ParsingError, SchemaValidationError

__all__ = [
    # IR Data Structures
    "ConnectionPoint",
    "GraphicalNode",
    "Wire",
    "Schematic",
    # Parser and Exceptions
    "SchematicParser",
    "ANALYSIS_METHODS",
    "ParsingError",
    "SchemaValidationError",
]
