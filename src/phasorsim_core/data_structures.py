# src/phasorsim_core/data_structures.py
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace
from typing import Dict, Iterator, Optional, Tuple

from .components.kinds import ComponentKind
from .constants import REFERENCE_NODE_LABEL

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NetlistComponent:
    """
    A typed netlist entry whose terminals are resolved to electrical node labels.

    For two-terminal kinds `node_pos`/`node_neg` are the A/B terminals. For an
    OpAmp, `node_pos` is the non-inverting input, `node_neg` the inverting input
    and `node_out` the output.
    """
    component_id: str
    kind: ComponentKind
    value: float
    node_pos: str
    node_neg: str
    node_out: Optional[str] = None
    phase_deg: float = 0.0

    @property
    def terminals(self) -> Tuple[str, ...]:
        if self.kind is ComponentKind.OP_AMP:
            return (self.node_pos, self.node_neg, self.node_out)
        return (self.node_pos, self.node_neg)

    def touches(self, node: str) -> bool:
        return node in self.terminals

    def with_value(self, value: float) -> NetlistComponent:
        return replace(self, value=value)


@dataclass(frozen=True)
class Netlist:
    """
    The electrical netlist derived from a schematic. Immutable once extracted;
    variants for superposition sub-problems are built with `deactivate_sources_except`.

    `nodes` lists every electrical node label in discovery order. The reference
    label is included when a ground exists.
    """
    nodes: Tuple[str, ...]
    components: Tuple[NetlistComponent, ...]
    frequency_hz: float
    reference_node: Optional[str] = REFERENCE_NODE_LABEL

    @property
    def omega(self) -> float:
        return 2.0 * math.pi * self.frequency_hz

    @property
    def unknown_nodes(self) -> Tuple[str, ...]:
        """Non-reference node labels, in discovery order."""
        return tuple(n for n in self.nodes if n != self.reference_node)

    @property
    def branch_current_components(self) -> Tuple[NetlistComponent, ...]:
        """Components that carry an auxiliary current unknown, in netlist order."""
        return tuple(c for c in self.components if c.kind.has_branch_current)

    @property
    def independent_sources(self) -> Tuple[NetlistComponent, ...]:
        return tuple(c for c in self.components if c.kind.is_independent_source)

    def component_map(self) -> Dict[str, NetlistComponent]:
        return {c.component_id: c for c in self.components}

    def components_touching(self, node: str) -> Iterator[NetlistComponent]:
        return (c for c in self.components if c.touches(node))

    def deactivate_sources_except(self, active_source_id: str) -> Netlist:
        """
        Returns a copy in which every independent source other than `active_source_id`
        has its value forced to zero. Components are never removed, so the node set
        and the branch-current bookkeeping stay identical to this netlist.
        """
        components = tuple(
            c.with_value(0.0) if c.kind.is_independent_source and c.component_id != active_source_id else c
            for c in self.components
        )
        return replace(self, components=components)
