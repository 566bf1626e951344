# src/phasorsim_core/simulation/execution.py
"""
Provides the public entry points for solving a schematic.

This module is a thin Facade over the pipeline
`TopologyExtractor -> SemanticValidator -> SimulationEngine`. It owns the
step log of a request and is the single place where failures are turned into
a result: any `DiagnosableError` from the pipeline becomes one terminal
`Error` step plus empty result mappings. Steps recorded before the failure
are kept.
"""
import logging
from pathlib import Path
from typing import Any, Dict, Union

from ..errors import DiagnosableError, SchematicBuildError, format_diagnostic_report
from ..reporting.steps import StepKind, StepLog
from ..schematic.exceptions import BaseParsingError
from ..schematic.parser import SchematicParser
from ..schematic.raw_data import Schematic
from ..topology.extractor import TopologyExtractor
from ..validation import SemanticValidator, SemanticValidationError, ValidationIssueLevel
from .config import AnalysisMethod, ConfigParsingError, parse_analysis_config, parse_frequency
from .context import SimulationContext
from .engine import SimulationEngine
from .results import SolverResult

logger = logging.getLogger(__name__)


def solve_circuit(
    schematic: Schematic,
    frequency_hz: Union[float, str],
    method: Union[AnalysisMethod, str, None] = AnalysisMethod.NODAL,
) -> SolverResult:
    """
    Solves one schematic snapshot at a single frequency.

    Args:
        schematic: The immutable snapshot of graphical nodes and wires.
        frequency_hz: Analysis frequency in Hz, or a unit string such as "1 kHz".
        method: Analysis method label. Only superposition changes what is
                computed; every other label runs nodal MNA.

    Returns:
        A `SolverResult`. It never raises for circuit problems: a failed request
        returns the steps recorded so far, a terminal `Error` step, empty
        mappings and the diagnostic report in `result.error`.

    Raises:
        ConfigParsingError: The frequency or method label is malformed.
    """
    frequency = parse_frequency(frequency_hz)
    analysis_method = AnalysisMethod.coerce(method)
    steps = StepLog()

    try:
        logger.info(f"--- Solving '{schematic.name}' at {frequency:g} Hz ({analysis_method}) ---")
        extraction = TopologyExtractor(schematic).extract(frequency)

        issues = SemanticValidator(schematic, extraction).validate()
        for issue in issues:
            if issue.level == ValidationIssueLevel.WARNING:
                logger.warning(str(issue))
        if any(issue.level == ValidationIssueLevel.ERROR for issue in issues):
            raise SemanticValidationError(issues)

        context = SimulationContext(netlist=extraction.netlist, method=analysis_method, steps=steps)
        total, partials = SimulationEngine(context).execute()

        logger.info(f"Solve of '{schematic.name}' succeeded.")
        return SolverResult.success(
            steps, total, partials,
            method=analysis_method, frequency_hz=frequency,
        )

    except DiagnosableError as e:
        logger.error(f"A diagnosable error occurred during the solve: {e}")
        report = e.get_diagnostic_report()
        steps.record(title="Error", description=str(e), kind=StepKind.ERROR)
        return SolverResult.failure(steps, report, method=analysis_method, frequency_hz=frequency)

    except Exception as e:
        logger.critical(f"An unexpected internal error occurred during the solve: {e}", exc_info=True)
        report = format_diagnostic_report(
            error_type=f"An Unexpected Solver Error Occurred ({type(e).__name__})",
            details=f"The solver encountered an unexpected internal error: {e}",
            suggestion="This may be a bug. Review the traceback and consider filing a bug report.",
            context={'frequency': f"{frequency:g} Hz"}
        )
        steps.record(title="Error", description=f"Unexpected error: {e}", kind=StepKind.ERROR)
        return SolverResult.failure(steps, report, method=analysis_method, frequency_hz=frequency)


def solve_schematic_document(
    document: Dict[str, Any],
    frequency_hz: Union[float, str, None] = None,
    method: Union[AnalysisMethod, str, None] = None,
) -> SolverResult:
    """
    Parses an editor snapshot mapping and solves it. Explicit `frequency_hz`
    and `method` arguments override the document's `analysis` block.

    Raises:
        SchematicBuildError: The document fails parsing or schema validation,
                             or no frequency is available.
    """
    schematic = _build_schematic(lambda parser: parser.parse_document(document))
    return _solve_with_analysis(schematic, frequency_hz, method)


def solve_schematic_file(
    path: Union[str, Path],
    frequency_hz: Union[float, str, None] = None,
    method: Union[AnalysisMethod, str, None] = None,
) -> SolverResult:
    """Same as `solve_schematic_document`, reading the snapshot from a YAML file."""
    schematic = _build_schematic(lambda parser: parser.parse_file(path))
    return _solve_with_analysis(schematic, frequency_hz, method)


def _build_schematic(parse) -> Schematic:
    try:
        return parse(SchematicParser())
    except BaseParsingError as e:
        logger.error(f"Schematic document could not be parsed: {e}")
        raise SchematicBuildError(e.get_diagnostic_report()) from e


def _solve_with_analysis(
    schematic: Schematic,
    frequency_hz: Union[float, str, None],
    method: Union[AnalysisMethod, str, None],
) -> SolverResult:
    raw = dict(schematic.analysis)
    if frequency_hz is not None:
        raw['frequency'] = frequency_hz
    if method is not None:
        raw['method'] = method.value if isinstance(method, AnalysisMethod) else method
    try:
        config = parse_analysis_config(raw)
    except ConfigParsingError as e:
        report = format_diagnostic_report(
            error_type="Analysis Configuration Error",
            details=str(e),
            suggestion="Provide a non-negative frequency (e.g. 1000 or '1 kHz') and a known analysis method.",
            context={'source_file': schematic.source_path}
        )
        raise SchematicBuildError(report) from e
    return solve_circuit(schematic, config.frequency_hz, config.method)
