# src/phasorsim_core/topology/exceptions.py
"""
Defines the diagnosable exception for topology extraction.
"""
from dataclasses import dataclass
from typing import Optional

from ..errors import DiagnosableError, format_diagnostic_report


@dataclass()
class TopologyError(DiagnosableError):
    """
    Raised when the schematic graph cannot be turned into a consistent netlist:
    a wire names a missing node or handle, or a component terminal does not
    resolve to an electrical node. Always fatal for the current solve request.
    """
    details: str
    component_id: Optional[str] = None
    connection_point: Optional[str] = None

    def __str__(self):
        return f"Topology defect: {self.details}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Topology Defect",
            details=self.details,
            suggestion="Every wire must join two existing handles of existing components. Remove dangling wires and check that the schematic snapshot is complete.",
            context={'component': self.component_id, 'user_input': self.connection_point}
        )
