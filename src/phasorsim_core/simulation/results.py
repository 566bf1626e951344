# src/phasorsim_core/simulation/results.py
"""
Result contracts handed from the simulation engine to its consumers.

`MnaSolution` is the internal outcome of one assemble-and-solve pass;
`SolverResult` is the public, user-facing outcome of a whole solve request.
"""
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

import numpy as np

from ..errors import SimulationRunError
from ..reporting.formatting import PhasorValue
from ..reporting.steps import SolverStep, StepKind
from .config import AnalysisMethod


def _frozen(mapping) -> Mapping:
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True)
class MnaSolution:
    """
    The numeric outcome of one MNA solve.

    Attributes:
        node_voltages: Complex voltage per node label; includes the reference
                       node ("0") with an exact 0 when one exists.
        branch_currents: Complex branch current per VoltageSource/OpAmp id.
        solution_vector: The raw unknown vector `x`.
    """
    node_voltages: Mapping[str, complex]
    branch_currents: Mapping[str, complex]
    solution_vector: np.ndarray


@dataclass(frozen=True)
class SolverResult:
    """
    The public result of a solve request.

    On success `error` is None and every mapping is populated. On failure the
    last step is an `Error` step, `error` holds the diagnostic report and every
    mapping is empty; a partially populated mapping is never returned.
    """
    steps: Tuple[SolverStep, ...]
    node_voltages: Mapping[str, PhasorValue] = field(default_factory=lambda: _frozen({}))
    branch_currents: Mapping[str, PhasorValue] = field(default_factory=lambda: _frozen({}))
    partials: Mapping[str, Mapping[str, PhasorValue]] = field(default_factory=lambda: _frozen({}))
    method: AnalysisMethod = AnalysisMethod.NODAL
    frequency_hz: Optional[float] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def error_step(self) -> Optional[SolverStep]:
        if self.steps and self.steps[-1].kind is StepKind.ERROR:
            return self.steps[-1]
        return None

    def raise_for_error(self) -> "SolverResult":
        """Raises `SimulationRunError` carrying the diagnostic report if the request failed."""
        if self.error is not None:
            raise SimulationRunError(self.error)
        return self

    @classmethod
    def success(cls, steps, solution: MnaSolution, partials=None,
                method: AnalysisMethod = AnalysisMethod.NODAL,
                frequency_hz: Optional[float] = None) -> "SolverResult":
        voltages = {label: PhasorValue(v, "V") for label, v in solution.node_voltages.items()}
        currents = {cid: PhasorValue(i, "A") for cid, i in solution.branch_currents.items()}
        partial_views = {
            source_id: _frozen({label: PhasorValue(v, "V") for label, v in partial.node_voltages.items()})
            for source_id, partial in (partials or {}).items()
        }
        return cls(
            steps=tuple(steps),
            node_voltages=_frozen(voltages),
            branch_currents=_frozen(currents),
            partials=_frozen(partial_views),
            method=method,
            frequency_hz=frequency_hz,
        )

    @classmethod
    def failure(cls, steps, report: str,
                method: AnalysisMethod = AnalysisMethod.NODAL,
                frequency_hz: Optional[float] = None) -> "SolverResult":
        return cls(steps=tuple(steps), method=method, frequency_hz=frequency_hz, error=report)
