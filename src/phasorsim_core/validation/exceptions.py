# src/phasorsim_core/validation/exceptions.py
"""
Defines the diagnosable exception raised when semantic validation finds
error-level issues in an extracted netlist.
"""
from typing import List

from .issues import ValidationIssue, ValidationIssueLevel
from ..errors import DiagnosableError, format_diagnostic_report


class SemanticValidationError(DiagnosableError):
    """
    Container for every error-level `ValidationIssue` of one validation pass,
    formatted into a single diagnostic report.
    """
    def __init__(self, issues: List[ValidationIssue]):
        self.issues: List[ValidationIssue] = [
            issue for issue in issues if issue.level == ValidationIssueLevel.ERROR
        ]
        if not self.issues:
            summary_message = "SemanticValidationError was raised with no error-level issues."
        else:
            summary_message = (
                f"Semantic validation failed with {len(self.issues)} error(s):\n"
                + "\n".join(f"  - {issue}" for issue in self.issues)
            )
        super().__init__(summary_message)

    def get_diagnostic_report(self) -> str:
        details = (
            f"One or more logical errors were found in the schematic.\n"
            f"Found {len(self.issues)} error(s). See details below:\n\n"
            + "\n".join(f"  - {issue}" for issue in self.issues)
        )
        first_issue = self.issues[0] if self.issues else None
        context = {}
        if first_issue:
            context['component'] = first_issue.component_id
            context['node'] = first_issue.node
        return format_diagnostic_report(
            error_type="Circuit Semantic Validation Error",
            details=details,
            suggestion="Correct every error listed above in the schematic, then solve again.",
            context=context
        )
