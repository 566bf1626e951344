# src/phasorsim_core/simulation/context.py
from dataclasses import dataclass

from ..data_structures import Netlist
from ..reporting.steps import StepLog
from .config import AnalysisMethod


@dataclass(frozen=True)
class SimulationContext:
    """
    Everything one solve request operates on: the extracted netlist, the
    requested method and the step log owned by the outermost request.

    The binding is frozen; the step log itself is append-only and is the only
    state that grows while the engine runs, including during nested sub-solves.
    """
    netlist: Netlist
    method: AnalysisMethod
    steps: StepLog
