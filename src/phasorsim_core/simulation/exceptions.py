# src/phasorsim_core/simulation/exceptions.py
"""
Defines diagnosable exceptions specific to MNA assembly and solving.

All exceptions here inherit from `DiagnosableError`, so the solve facade can
catch them as one family and turn each into a single terminal error step.
`SingularMatrixError` additionally derives from `numpy.linalg.LinAlgError` so
that numerical callers can catch it the usual way.
"""
from dataclasses import dataclass
from typing import Optional

import numpy as np

from ..errors import DiagnosableError, format_diagnostic_report


@dataclass()
class MnaInputError(DiagnosableError):
    """
    Raised for structural errors found while setting up the MNA system,
    before any numeric work (e.g., a component terminal that is not a node).
    """
    details: str
    component_id: Optional[str] = None

    def __str__(self):
        return f"MNA input error: {self.details}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="MNA Input Error",
            details=self.details,
            suggestion="The netlist handed to the assembler is inconsistent. Rebuild it from the schematic.",
            context={'component': self.component_id}
        )


@dataclass()
class EmptyCircuitError(DiagnosableError):
    """Raised when there are no non-reference nodes and no branch currents to solve for."""
    details: str = "Empty Circuit"

    def __str__(self):
        return self.details

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Empty Circuit",
            details="The circuit has no unknowns: no non-reference nodes and no sources or op-amps carrying a branch current.",
            suggestion="Place at least one component between a node and ground before solving.",
            context={}
        )


@dataclass()
class SingularMatrixError(DiagnosableError, np.linalg.LinAlgError):
    """
    Raised when the assembled MNA matrix is not invertible.
    """
    details: str
    frequency: Optional[float] = None

    def __str__(self):
        freq_str = f" at {self.frequency:.4e} Hz" if self.frequency is not None else ""
        return f"The network is not solvable as given{freq_str}: {self.details}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Singular Matrix Encountered",
            details=f"The network is not solvable as given.\n{self.details}",
            suggestion="This is usually a floating node with no path to ground, a loop of ideal voltage sources, an ideal source shorted by a wire, or an op-amp without feedback. Check the wiring of the highlighted region.",
            context={'frequency': f"{self.frequency:.4e} Hz" if self.frequency is not None else None}
        )
