# src/phasorsim_core/topology/extractor.py
"""
Derives the electrical netlist from a schematic snapshot.

Connection points are grouped into electrical nodes with a disjoint-set forest:
intra-component unions encode each kind's internal terminal layout, every wire
unions its two endpoints, and every ground symbol is unioned into a single
reference node. Roots are then labelled in discovery order ("0" for the
reference) and each non-wiring symbol is emitted as a `NetlistComponent`.
"""
import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from ..components.kinds import (
    ComponentKind, GraphicalKind, HANDLES,
    TWO_TERMINAL_POS_HANDLE, TWO_TERMINAL_NEG_HANDLE,
    OP_AMP_INVERTING_HANDLE, OP_AMP_NON_INVERTING_HANDLE, OP_AMP_OUTPUT_HANDLE,
)
from ..constants import REFERENCE_NODE_LABEL
from ..data_structures import Netlist, NetlistComponent
from ..schematic.raw_data import ConnectionPoint, GraphicalNode, Schematic, Wire
from .exceptions import TopologyError
from .union_find import DisjointSet

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TopologyExtractionResults:
    """
    The outcome of one extraction. `point_labels` maps every electrical
    connection point to its node label; `ignored_wires` lists wires attached to
    handles that carry no terminal (the op-amp's top handle).
    """
    netlist: Netlist
    point_labels: Dict[ConnectionPoint, str]
    ground_node_ids: Tuple[str, ...]
    ignored_wires: Tuple[Wire, ...]

    @property
    def has_reference(self) -> bool:
        return self.netlist.reference_node is not None


class TopologyExtractor:
    """
    Converts a `Schematic` into a `Netlist`. Stateless apart from its inputs; a
    new extractor is created for every solve request.
    """
    def __init__(self, schematic: Schematic):
        if not isinstance(schematic, Schematic):
            raise TypeError("TopologyExtractor requires a Schematic snapshot.")
        self.schematic: Schematic = schematic

    def extract(self, frequency_hz: float) -> TopologyExtractionResults:
        nodes_by_id = self._index_nodes()
        dsu: DisjointSet[ConnectionPoint] = DisjointSet()

        ground_nodes = [n for n in self.schematic.nodes if n.kind is GraphicalKind.GROUND]
        self._union_internal_terminals(dsu)
        self._union_grounds(dsu, ground_nodes)
        ignored_wires = self._union_wires(dsu, nodes_by_id)

        ground_root = dsu.find(ground_nodes[0].connection_point("top")) if ground_nodes else None
        root_labels = self._label_roots(dsu, ground_root)

        point_labels: Dict[ConnectionPoint, str] = {}
        for node in self.schematic.nodes:
            for handle in node.kind.electrical_handles:
                cp = node.connection_point(handle)
                point_labels[cp] = root_labels[dsu.find(cp)]

        components = tuple(
            self._emit_component(node, point_labels)
            for node in self.schematic.nodes
            if not node.kind.is_wiring_only
        )

        netlist = Netlist(
            nodes=tuple(root_labels.values()),
            components=components,
            frequency_hz=frequency_hz,
            reference_node=REFERENCE_NODE_LABEL if ground_root is not None else None,
        )
        logger.info(
            f"Extracted netlist from '{self.schematic.name}': {len(netlist.nodes)} electrical nodes, "
            f"{len(components)} components, reference={'present' if ground_root is not None else 'absent'}."
        )
        return TopologyExtractionResults(
            netlist=netlist,
            point_labels=point_labels,
            ground_node_ids=tuple(n.node_id for n in ground_nodes),
            ignored_wires=tuple(ignored_wires),
        )

    def _index_nodes(self) -> Dict[str, GraphicalNode]:
        nodes_by_id: Dict[str, GraphicalNode] = {}
        for node in self.schematic.nodes:
            if node.node_id in nodes_by_id:
                raise TopologyError(details=f"Duplicate graphical node id '{node.node_id}'.", component_id=node.node_id)
            nodes_by_id[node.node_id] = node
        return nodes_by_id

    def _union_internal_terminals(self, dsu: DisjointSet[ConnectionPoint]):
        for node in self.schematic.nodes:
            for handle in HANDLES:
                dsu.add(node.connection_point(handle))
            for group in node.kind.terminal_groups:
                first = node.connection_point(group[0])
                for handle in group[1:]:
                    dsu.union(first, node.connection_point(handle))

    def _union_grounds(self, dsu: DisjointSet[ConnectionPoint], ground_nodes: List[GraphicalNode]):
        if len(ground_nodes) > 1:
            logger.debug(f"Merging {len(ground_nodes)} ground symbols into one reference node.")
        for other in ground_nodes[1:]:
            dsu.union(ground_nodes[0].connection_point("top"), other.connection_point("top"))

    def _union_wires(self, dsu: DisjointSet[ConnectionPoint], nodes_by_id: Dict[str, GraphicalNode]) -> List[Wire]:
        ignored: List[Wire] = []
        for wire in self.schematic.wires:
            endpoints_live = True
            for cp in (wire.source, wire.target):
                node = nodes_by_id.get(cp.node_id)
                if node is None:
                    raise TopologyError(
                        details=f"Wire {wire.source} -> {wire.target} references graphical node '{cp.node_id}', which does not exist.",
                        connection_point=str(cp),
                    )
                if cp.handle not in HANDLES:
                    raise TopologyError(
                        details=f"Wire references handle '{cp.handle}' on '{cp.node_id}'; valid handles are {list(HANDLES)}.",
                        component_id=cp.node_id,
                        connection_point=str(cp),
                    )
                if cp.handle not in node.kind.electrical_handles:
                    endpoints_live = False
            if endpoints_live:
                dsu.union(wire.source, wire.target)
            else:
                logger.warning(f"Ignoring wire {wire.source} -> {wire.target}: it touches a handle with no electrical terminal.")
                ignored.append(wire)
        return ignored

    def _label_roots(self, dsu: DisjointSet[ConnectionPoint], ground_root: Optional[int]) -> Dict[int, str]:
        """Assigns "0" to the ground root and "1", "2", ... to other roots in discovery order."""
        root_labels: Dict[int, str] = {}
        counter = 1
        for node in self.schematic.nodes:
            for handle in node.kind.electrical_handles:
                root = dsu.find(node.connection_point(handle))
                if root in root_labels:
                    continue
                if root == ground_root:
                    root_labels[root] = REFERENCE_NODE_LABEL
                else:
                    root_labels[root] = str(counter)
                    counter += 1
        return root_labels

    @staticmethod
    def _resolve(node: GraphicalNode, handle: str, point_labels: Dict[ConnectionPoint, str]) -> str:
        label = point_labels.get(node.connection_point(handle))
        if label is None:
            raise TopologyError(
                details=f"Terminal '{handle}' of component '{node.node_id}' did not resolve to an electrical node.",
                component_id=node.node_id,
                connection_point=f"{node.node_id}-{handle}",
            )
        return label

    def _emit_component(self, node: GraphicalNode, point_labels: Dict[ConnectionPoint, str]) -> NetlistComponent:
        kind = node.kind.component_kind
        if kind is ComponentKind.OP_AMP:
            return NetlistComponent(
                component_id=node.node_id,
                kind=kind,
                value=node.value,
                node_pos=self._resolve(node, OP_AMP_NON_INVERTING_HANDLE, point_labels),
                node_neg=self._resolve(node, OP_AMP_INVERTING_HANDLE, point_labels),
                node_out=self._resolve(node, OP_AMP_OUTPUT_HANDLE, point_labels),
            )
        return NetlistComponent(
            component_id=node.node_id,
            kind=kind,
            value=node.value,
            node_pos=self._resolve(node, TWO_TERMINAL_POS_HANDLE, point_labels),
            node_neg=self._resolve(node, TWO_TERMINAL_NEG_HANDLE, point_labels),
            phase_deg=node.phase_deg,
        )
