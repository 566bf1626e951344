# src/phasorsim_core/errors.py
import logging
from abc import abstractmethod
from typing import Any, Dict, Protocol, runtime_checkable

logger = logging.getLogger(__name__)

# --- User-Facing Exception Hierarchy ---

class PhasorSimError(Exception):
    """Base class for all custom, user-facing errors in PhasorSim Core."""
    pass

class SchematicBuildError(PhasorSimError):
    """
    Raised when turning a schematic document into a netlist fails, from schema
    validation to topology extraction. The message is a pre-formatted diagnostic report.
    """
    pass

class SimulationRunError(PhasorSimError):
    """
    Raised when a solve request fails after the netlist was built, such as a
    semantic validation error, an empty circuit or a singular system.
    The message is a pre-formatted, user-friendly diagnostic report.
    """
    pass

class FrameworkLogicError(PhasorSimError):
    """Raised when an internal contract between subsystems is violated. Always a bug."""
    pass


# --- Diagnostic Protocol & Base Exception ---

@runtime_checkable
class Diagnosable(Protocol):
    """
    A protocol for exceptions that can generate their own diagnostic report.
    """
    def get_diagnostic_report(self) -> str:
        """Generates a complete, user-friendly, multi-line report string."""
        ...

class DiagnosableError(Exception, Diagnosable):
    """
    A common, concrete base class for all internal exceptions that are diagnosable.

    Subclasses are catchable as plain exceptions and must implement
    `get_diagnostic_report`, which the solve facade uses to build the terminal
    error step of a failed request.
    """
    @abstractmethod
    def get_diagnostic_report(self) -> str:
        """
        Abstract method to generate the diagnostic report.
        Subclasses MUST implement this.
        """
        raise NotImplementedError


# --- Stateless Formatting Utility ---

def format_diagnostic_report(
    error_type: str,
    details: str,
    suggestion: str,
    context: Dict[str, Any]
) -> str:
    """
    Formats the final multi-line report string so every user-facing diagnostic
    has the same layout.

    Args:
        error_type: The high-level category of the error (e.g., "Singular Matrix").
        details: A detailed, potentially multi-line description of the problem.
        suggestion: Actionable advice for the user to resolve the issue.
        context: Contextual information (component id, node label, source file, frequency).

    Returns:
        A formatted diagnostic report string ready for display.
    """
    lines = [
        "\n",
        "============== PhasorSim Core: Actionable Diagnostic Report ==============",
        f"Error Type:     {error_type}",
    ]
    if component := context.get('component'):
        lines.append(f"Component:      {component}")
    if node := context.get('node'):
        lines.append(f"Node:           {node}")
    if source_file := context.get('source_file'):
        lines.append(f"Source File:    {source_file}")
    if user_input := context.get('user_input'):
        lines.append(f"User Input:     '{user_input}'")
    if frequency := context.get('frequency'):
        lines.append(f"Frequency:      {frequency}")

    lines.append("\nDetails:")
    for line in details.splitlines():
        lines.append(f"  {line}")

    if suggestion:
        lines.append("\nSuggestion:")
        for line in suggestion.splitlines():
            lines.append(f"  {line}")

    lines.append("==========================================================================")
    return "\n".join(lines)
