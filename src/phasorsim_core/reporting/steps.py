# src/phasorsim_core/reporting/steps.py
"""
The append-only derivation log handed to the reporting UI.

Steps are produced strictly in assembly/solve order. A `StepLog` only grows:
there is no API to remove, reorder or edit a recorded step, and `SolverStep`
itself is frozen.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, Tuple

logger = logging.getLogger(__name__)


class StepKind(Enum):
    """Tags a step so the UI can tell derivations from numeric results."""
    INFO = "info"
    EQUATIONS = "equations"
    RESULT = "result"
    ERROR = "error"

    def __str__(self):
        return self.value


@dataclass(frozen=True)
class SolverStep:
    title: str
    description: str = ""
    latex_lines: Tuple[str, ...] = ()
    kind: StepKind = StepKind.INFO

    @property
    def latex(self) -> str:
        """All math lines joined for display as a single block."""
        return "<br/>".join(self.latex_lines)


class StepLog:
    def __init__(self):
        self._steps: list = []

    def append(self, step: SolverStep) -> SolverStep:
        if not isinstance(step, SolverStep):
            raise TypeError(f"StepLog only accepts SolverStep entries, got {type(step).__name__}.")
        self._steps.append(step)
        logger.debug(f"Step recorded: {step.title}")
        return step

    def record(self, title: str, description: str = "", latex_lines: Iterable[str] = (),
               kind: StepKind = StepKind.INFO) -> SolverStep:
        return self.append(SolverStep(title=title, description=description,
                                      latex_lines=tuple(latex_lines), kind=kind))

    def extend(self, steps: Iterable[SolverStep]):
        for step in steps:
            self.append(step)

    @property
    def steps(self) -> Tuple[SolverStep, ...]:
        return tuple(self._steps)

    def __iter__(self) -> Iterator[SolverStep]:
        return iter(tuple(self._steps))

    def __len__(self) -> int:
        return len(self._steps)
