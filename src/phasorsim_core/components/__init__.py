# src/phasorsim_core/components/__init__.py
from .kinds import (
    ComponentKind, GraphicalKind, HANDLES,
    PASSIVE_KINDS, INDEPENDENT_SOURCE_KINDS, BRANCH_CURRENT_KINDS,
)
from .impedance import impedance, admittance, phasor, INFINITE_IMPEDANCE
from .exceptions import ComponentError

__all__ = [
    "ComponentKind",
    "GraphicalKind",
    "HANDLES",
    "PASSIVE_KINDS",
    "INDEPENDENT_SOURCE_KINDS",
    "BRANCH_CURRENT_KINDS",
    "impedance",
    "admittance",
    "phasor",
    "INFINITE_IMPEDANCE",
    "ComponentError",
]
