from __future__ import annotations

from .recorder import StepRecorder
from .types import COST_TABLE, Number, Step, StepKind, Trace, UnknownStepKindError, step_cost

__all__ = [
    "COST_TABLE",
    "Number",
    "Step",
    "StepKind",
    "StepRecorder",
    "Trace",
    "UnknownStepKindError",
    "step_cost",
]
