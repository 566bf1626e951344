# src/phasorsim_core/reporting/formatting.py
"""
Presentation helpers: phasor values in polar/rectangular form and LaTeX
rendering of MNA equations with SymPy.
"""
import cmath
import math
from dataclasses import dataclass
from typing import Optional

import sympy as sp

from ..components.kinds import ComponentKind
from ..constants import DISPLAY_PRECISION
from ..data_structures import NetlistComponent

OMEGA = sp.Symbol("omega")


@dataclass(frozen=True)
class PhasorValue:
    """A complex result exposable in polar and rectangular form."""
    value: complex
    unit: str = "V"

    @property
    def magnitude(self) -> float:
        return abs(self.value)

    @property
    def angle_deg(self) -> float:
        return math.degrees(cmath.phase(self.value))

    @property
    def real(self) -> float:
        return self.value.real

    @property
    def imag(self) -> float:
        return self.value.imag

    @property
    def display_angle(self) -> float:
        """Angle rounded for display, without a negative zero."""
        return round(self.angle_deg, 2) + 0.0

    @property
    def polar(self) -> str:
        return f"{self.magnitude:.{DISPLAY_PRECISION}g} ∠ {self.display_angle:.2f}° {self.unit}"

    @property
    def rect(self) -> str:
        sign = "-" if self.imag < 0 else "+"
        return f"{self.real:.{DISPLAY_PRECISION}g} {sign} {abs(self.imag):.{DISPLAY_PRECISION}g}j"

    def __str__(self) -> str:
        return self.polar


def latex_polar(value: complex, unit: str) -> str:
    pv = PhasorValue(value, unit)
    return f"{pv.magnitude:.{DISPLAY_PRECISION}g} \\angle {pv.display_angle:.2f}^\\circ\\,\\mathrm{{{unit}}}"


def voltage_symbol(node: str, reference: Optional[str]) -> sp.Expr:
    """Node voltage as a SymPy symbol; the reference node is identically zero."""
    if node == reference:
        return sp.Integer(0)
    return sp.Symbol(f"V_{node}")


def current_symbol(component: NetlistComponent) -> sp.Symbol:
    return sp.Symbol(f"I_{component.component_id}")


def source_symbol(component: NetlistComponent) -> sp.Symbol:
    prefix = "V" if component.kind is ComponentKind.VOLTAGE_SOURCE else "I"
    return sp.Symbol(f"{prefix}_{component.component_id}")


def impedance_expr(component: NetlistComponent) -> sp.Expr:
    """Symbolic impedance of a passive component."""
    cid = component.component_id
    if component.kind is ComponentKind.RESISTOR:
        return sp.Symbol(f"R_{cid}")
    if component.kind is ComponentKind.INDUCTOR:
        return sp.I * OMEGA * sp.Symbol(f"L_{cid}")
    if component.kind is ComponentKind.CAPACITOR:
        return 1 / (sp.I * OMEGA * sp.Symbol(f"C_{cid}"))
    raise ValueError(f"'{component.kind}' has no symbolic impedance.")


def render_equation(lhs: sp.Expr, rhs: sp.Expr, prefix: str = "") -> str:
    """Renders `lhs = rhs` without letting SymPy collapse it to True/False."""
    body = sp.latex(sp.Eq(lhs, rhs, evaluate=False))
    return f"\\text{{{prefix}}} {body}" if prefix else body
