# src/phasorsim_core/reporting/__init__.py
from .steps import SolverStep, StepKind, StepLog
from .formatting import PhasorValue, latex_polar, render_equation

__all__ = [
    "SolverStep",
    "StepKind",
    "StepLog",
    "PhasorValue",
    "latex_polar",
    "render_equation",
]
