from .exceptions import (
    MnaInputError,
    EmptyCircuitError,
    SingularMatrixError,
)
from .config import AnalysisMethod, AnalysisConfig, ConfigParsingError, parse_analysis_config
from .mna import MnaAssembler, MnaSystem
from .solver import solve_mna_system
from .results import MnaSolution, SolverResult
from .superposition import SuperpositionDriver
from .execution import solve_circuit, solve_schematic_document, solve_schematic_file

__all__ = [
    # Exceptions
    "MnaInputError",
    "EmptyCircuitError",
    "SingularMatrixError",
    "ConfigParsingError",
    # Configuration
    "AnalysisMethod",
    "AnalysisConfig",
    "parse_analysis_config",
    # Core Classes
    "MnaAssembler",
    "MnaSystem",
    "solve_mna_system",
    "SuperpositionDriver",
    # Results
    "MnaSolution",
    "SolverResult",
    # Facade
    "solve_circuit",
    "solve_schematic_document",
    "solve_schematic_file",
]
