# src/phasorsim_core/components/exceptions.py
"""
Defines the diagnosable exception for the components subsystem.
"""
from dataclasses import dataclass
from typing import Optional

from ..errors import DiagnosableError, format_diagnostic_report

@dataclass()
class ComponentError(DiagnosableError):
    """
    The diagnosable exception for component-level errors, such as asking a
    source for a scalar impedance or a value with the wrong physical dimension.
    """
    component_id: str
    details: str
    frequency: Optional[float] = None

    def __str__(self):
        return f"Component '{self.component_id}': {self.details}"

    def get_diagnostic_report(self) -> str:
        """Generates the diagnostic report for a component error."""
        return format_diagnostic_report(
            error_type="Component Error",
            details=self.details,
            suggestion="Check the component's kind and value (e.g., non-negative resistance, a unit compatible with the component kind).",
            context={
                'component': self.component_id,
                'frequency': f"{self.frequency:.4e} Hz" if self.frequency is not None else None
            }
        )
