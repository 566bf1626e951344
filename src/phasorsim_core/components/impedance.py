# src/phasorsim_core/components/impedance.py
"""
Impedance model for the passive component kinds.

Sources and op-amps have no scalar impedance; they stamp the MNA system
directly. Capacitors at zero angular frequency (or with zero capacitance) are
open circuits: their impedance is infinite and their admittance is exactly zero.
"""
import logging

import numpy as np

from ..constants import LARGE_ADMITTANCE_SIEMENS
from .exceptions import ComponentError
from .kinds import ComponentKind

logger = logging.getLogger(__name__)

INFINITE_IMPEDANCE = complex(np.inf, 0.0)


def impedance(kind: ComponentKind, value: float, omega: float, component_id: str = "?") -> complex:
    """
    Returns the complex impedance of a passive component at angular frequency `omega`.

    Raises:
        ComponentError: If `kind` is not a passive kind.
    """
    if kind is ComponentKind.RESISTOR:
        return complex(value, 0.0)
    if kind is ComponentKind.INDUCTOR:
        return complex(0.0, omega * value)
    if kind is ComponentKind.CAPACITOR:
        wc = omega * value
        if wc == 0:
            return INFINITE_IMPEDANCE
        return 1.0 / complex(0.0, wc)
    raise ComponentError(
        component_id=component_id,
        details=f"Component kind '{kind}' has no scalar impedance; it contributes to the MNA system directly.",
    )


def admittance(kind: ComponentKind, value: float, omega: float, component_id: str = "?") -> complex:
    """
    Returns `1/Z` for a passive component, without ever dividing by zero.

    An infinite impedance maps to zero admittance (open). A zero impedance, i.e.
    R=0 or an inductor at DC, is an ideal short and maps to LARGE_ADMITTANCE_SIEMENS.
    """
    z = impedance(kind, value, omega, component_id)
    if np.isinf(z):
        return 0j
    if z == 0:
        logger.debug(f"Component '{component_id}' is an ideal short at omega={omega:.4e} rad/s.")
        return complex(LARGE_ADMITTANCE_SIEMENS, 0.0)
    return 1.0 / z


def phasor(magnitude: float, phase_deg: float = 0.0) -> complex:
    """Converts a magnitude and a phase in degrees into a complex phasor."""
    return complex(magnitude * np.exp(1j * np.deg2rad(phase_deg)))
