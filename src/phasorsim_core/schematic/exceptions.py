# src/phasorsim_core/schematic/exceptions.py
"""
Defines diagnosable exceptions for loading and schema-validating schematic documents.

`ParsingError` covers file-level problems (missing file, invalid YAML, a value
that cannot be read as a physical quantity). `SchemaValidationError` covers
documents that load but do not match the Cerberus schema.
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from ..errors import DiagnosableError, format_diagnostic_report


class BaseParsingError(DiagnosableError):
    """
    A local base class for all schematic parsing and schema validation errors.
    """
    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Generic Parsing Error",
            details=str(self),
            suggestion="Please check the format and content of the schematic document.",
            context={}
        )


@dataclass(frozen=True)
class ParsingError(BaseParsingError):
    """
    Raised for file-system issues, invalid YAML syntax, or values that cannot be
    interpreted as physical quantities of the expected dimension.
    """
    details: str
    file_path: Optional[Path] = None
    user_input: Optional[str] = None

    def __str__(self):
        where = f" in file '{self.file_path}'" if self.file_path else ""
        return f"Parsing error{where}: {self.details}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Schematic Parsing Error",
            details=self.details,
            suggestion="Ensure the file exists and is valid YAML, and that every value is a number or a quantity with a compatible unit (e.g. '4.7 kohm', '10 uF').",
            context={'source_file': self.file_path, 'user_input': self.user_input}
        )


@dataclass(frozen=True)
class SchemaValidationError(BaseParsingError):
    """
    Raised when a schematic mapping does not conform to the required structure
    (missing keys, unknown component kinds, duplicate node ids, bad handles).
    """
    errors: Dict[str, Any]
    file_path: Optional[Path] = None

    def _error_lines(self) -> str:
        return "\n".join(
            f"  - Field '{k}': {v[0] if isinstance(v, list) and v else v}"
            for k, v in sorted(self.errors.items(), key=lambda item: str(item[0]))
        )

    def __str__(self):
        return f"Schematic schema validation failed:\n{self._error_lines()}"

    def get_diagnostic_report(self) -> str:
        details = (
            "The schematic document does not conform to the required schema.\n"
            f"See details for {len(self.errors)} issue(s) below:\n\n{self._error_lines()}"
        )
        return format_diagnostic_report(
            error_type="Schematic Schema Validation Error",
            details=details,
            suggestion="Correct the listed fields. Check for unknown component types, duplicate node ids, invalid handle names, or a missing 'nodes' section.",
            context={'source_file': self.file_path}
        )
