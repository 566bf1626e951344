# src/phasorsim_core/components/kinds.py
"""
The closed set of component kinds known to the solver, and the mapping from the
editor's graphical kind tags to electrical terminals.

Two vocabularies meet here. `GraphicalKind` is what the editor places on the
canvas (including ground and junction symbols, which are pure wiring). `ComponentKind`
is what ends up in the netlist. Every graphical kind declares its four visual
handles and how those handles group into electrical terminals.
"""
from enum import Enum
from typing import Dict, Optional, Tuple

#: Visual handle order. Label discovery walks handles in exactly this order.
HANDLES: Tuple[str, ...] = ("top", "right", "bottom", "left")


class ComponentKind(Enum):
    """Kinds of components that appear in a netlist."""
    RESISTOR = "Resistor"
    CAPACITOR = "Capacitor"
    INDUCTOR = "Inductor"
    VOLTAGE_SOURCE = "VoltageSource"
    CURRENT_SOURCE = "CurrentSource"
    OP_AMP = "OpAmp"

    def __str__(self):
        return self.value

    @property
    def is_passive(self) -> bool:
        return self in PASSIVE_KINDS

    @property
    def is_independent_source(self) -> bool:
        return self in INDEPENDENT_SOURCE_KINDS

    @property
    def has_branch_current(self) -> bool:
        """True for kinds that need an auxiliary current unknown in the MNA vector."""
        return self in BRANCH_CURRENT_KINDS

    @property
    def si_unit(self) -> str:
        return _SI_UNITS[self]


PASSIVE_KINDS = frozenset({ComponentKind.RESISTOR, ComponentKind.CAPACITOR, ComponentKind.INDUCTOR})
INDEPENDENT_SOURCE_KINDS = frozenset({ComponentKind.VOLTAGE_SOURCE, ComponentKind.CURRENT_SOURCE})
BRANCH_CURRENT_KINDS = frozenset({ComponentKind.VOLTAGE_SOURCE, ComponentKind.OP_AMP})

_SI_UNITS: Dict[ComponentKind, str] = {
    ComponentKind.RESISTOR: "ohm",
    ComponentKind.CAPACITOR: "farad",
    ComponentKind.INDUCTOR: "henry",
    ComponentKind.VOLTAGE_SOURCE: "volt",
    ComponentKind.CURRENT_SOURCE: "ampere",
    # An ideal op-amp has no value of its own; the field is carried but unused.
    ComponentKind.OP_AMP: "dimensionless",
}


class GraphicalKind(Enum):
    """Kind tags used by the schematic editor."""
    RESISTOR = "resistor"
    CAPACITOR = "capacitor"
    INDUCTOR = "inductor"
    VOLTAGE_SOURCE = "voltage_source"
    CURRENT_SOURCE = "current_source"
    OP_AMP = "op_amp"
    GROUND = "ground"
    JUNCTION = "junction"

    def __str__(self):
        return self.value

    @property
    def component_kind(self) -> Optional[ComponentKind]:
        """The netlist kind, or None for ground and junction symbols."""
        return _GRAPHICAL_TO_COMPONENT.get(self)

    @property
    def is_wiring_only(self) -> bool:
        return self in (GraphicalKind.GROUND, GraphicalKind.JUNCTION)

    @property
    def terminal_groups(self) -> Tuple[Tuple[str, ...], ...]:
        """
        Groups of handles that are internally the same electrical terminal.
        Handles within a group are unioned; distinct groups are not.
        """
        return _TERMINAL_GROUPS[self]

    @property
    def electrical_handles(self) -> Tuple[str, ...]:
        """Handles that carry an electrical terminal, in `HANDLES` order."""
        grouped = {h for group in self.terminal_groups for h in group}
        return tuple(h for h in HANDLES if h in grouped)


_GRAPHICAL_TO_COMPONENT: Dict[GraphicalKind, ComponentKind] = {
    GraphicalKind.RESISTOR: ComponentKind.RESISTOR,
    GraphicalKind.CAPACITOR: ComponentKind.CAPACITOR,
    GraphicalKind.INDUCTOR: ComponentKind.INDUCTOR,
    GraphicalKind.VOLTAGE_SOURCE: ComponentKind.VOLTAGE_SOURCE,
    GraphicalKind.CURRENT_SOURCE: ComponentKind.CURRENT_SOURCE,
    GraphicalKind.OP_AMP: ComponentKind.OP_AMP,
}

_TWO_TERMINAL_GROUPS = (("left", "top"), ("right", "bottom"))
_FULLY_SHORTED_GROUPS = (HANDLES,)

_TERMINAL_GROUPS: Dict[GraphicalKind, Tuple[Tuple[str, ...], ...]] = {
    GraphicalKind.RESISTOR: _TWO_TERMINAL_GROUPS,
    GraphicalKind.CAPACITOR: _TWO_TERMINAL_GROUPS,
    GraphicalKind.INDUCTOR: _TWO_TERMINAL_GROUPS,
    GraphicalKind.VOLTAGE_SOURCE: _TWO_TERMINAL_GROUPS,
    GraphicalKind.CURRENT_SOURCE: _TWO_TERMINAL_GROUPS,
    GraphicalKind.GROUND: _FULLY_SHORTED_GROUPS,
    GraphicalKind.JUNCTION: _FULLY_SHORTED_GROUPS,
    # Inverting input, non-inverting input and output are three distinct terminals.
    # The top handle is drawn but carries no terminal.
    GraphicalKind.OP_AMP: (("left",), ("bottom",), ("right",)),
}

# Handle that resolves each netlist terminal, per graphical kind.
TWO_TERMINAL_POS_HANDLE = "left"
TWO_TERMINAL_NEG_HANDLE = "right"
OP_AMP_INVERTING_HANDLE = "left"
OP_AMP_NON_INVERTING_HANDLE = "bottom"
OP_AMP_OUTPUT_HANDLE = "right"
