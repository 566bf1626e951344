# src/phasorsim_core/__init__.py
import logging
from .log_config import setup_logging

setup_logging()
logger = logging.getLogger(__name__)
logger.info("PhasorSim Core package initialized.")

from .units import ureg, pint, Quantity
from .components import ComponentKind, GraphicalKind, HANDLES
from .schematic import ConnectionPoint, GraphicalNode, Wire, Schematic, SchematicParser
from .data_structures import Netlist, NetlistComponent
from .topology import TopologyExtractor, TopologyExtractionResults
from .reporting import SolverStep, StepKind, PhasorValue
from .simulation import (
    AnalysisMethod, SolverResult,
    solve_circuit, solve_schematic_document, solve_schematic_file,
)
from .errors import PhasorSimError, SchematicBuildError, SimulationRunError

__all__ = [
    # Units
    "ureg", "pint", "Quantity",
    # Component kinds
    "ComponentKind", "GraphicalKind", "HANDLES",
    # Schematic snapshot and parser
    "ConnectionPoint", "GraphicalNode", "Wire", "Schematic", "SchematicParser",
    # Netlist
    "Netlist", "NetlistComponent", "TopologyExtractor", "TopologyExtractionResults",
    # Results
    "SolverStep", "StepKind", "PhasorValue", "SolverResult",
    # Simulation
    "AnalysisMethod", "solve_circuit", "solve_schematic_document", "solve_schematic_file",
    # Top-Level Errors (Actionable Diagnostics)
    "PhasorSimError", "SchematicBuildError", "SimulationRunError",
]
