# src/phasorsim_core/schematic/raw_data.py
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from ..components.kinds import GraphicalKind

# The classes in this module are the immutable snapshot of the editor's canvas
# that a solve request reads. They form the contract between the SchematicParser
# (or any in-process editor) and the TopologyExtractor.

@dataclass(frozen=True, order=True)
class ConnectionPoint:
    """One visual handle of one graphical node, e.g. ('R1', 'left')."""
    node_id: str
    handle: str

    def __str__(self) -> str:
        return f"{self.node_id}-{self.handle}"


@dataclass(frozen=True)
class GraphicalNode:
    """A component symbol placed on the canvas. Values are already in SI units."""
    node_id: str
    kind: GraphicalKind
    value: float = 0.0
    phase_deg: float = 0.0
    label: Optional[str] = None

    def connection_point(self, handle: str) -> ConnectionPoint:
        return ConnectionPoint(self.node_id, handle)


@dataclass(frozen=True)
class Wire:
    """A point-to-point wire joining exactly two connection points."""
    source: ConnectionPoint
    target: ConnectionPoint
    wire_id: Optional[str] = None


@dataclass(frozen=True)
class Schematic:
    """
    Snapshot of the graphical nodes and wires for one solve request.
    `analysis` carries the raw analysis block (frequency, method) when the
    schematic was loaded from a document.
    """
    nodes: Tuple[GraphicalNode, ...]
    wires: Tuple[Wire, ...]
    name: str = "schematic"
    source_path: Optional[Path] = None
    analysis: Dict[str, Any] = field(default_factory=dict)

    def node_by_id(self) -> Dict[str, GraphicalNode]:
        return {node.node_id: node for node in self.nodes}
