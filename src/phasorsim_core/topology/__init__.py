# src/phasorsim_core/topology/__init__.py
from .union_find import DisjointSet
from .extractor import TopologyExtractor, TopologyExtractionResults
from .exceptions import TopologyError

__all__ = [
    "DisjointSet",
    "TopologyExtractor",
    "TopologyExtractionResults",
    "TopologyError",
]
