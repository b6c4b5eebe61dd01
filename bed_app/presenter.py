from __future__ import annotations

from dataclasses import replace
from typing import Union

from bed_app.errors import GENERIC_DISPATCH_MESSAGE, DispatchError, ValidationError
from bed_app.models import CalculationResult, DisplayResult, UIState

DOSE_UNIT = "Gy"

Outcome = Union[CalculationResult, ValidationError, DispatchError]


def format_dose(value: float) -> str:
    return f"{value:.2f} {DOSE_UNIT}"


def format_percentage(value: float) -> str:
    return f"{value:.2f}%"


def to_display_result(result: CalculationResult) -> DisplayResult:
    return DisplayResult(
        bed=format_dose(result.bed),
        a9=format_dose(result.a9),
        relative_difference=format_percentage(result.relative_difference),
        warning=result.warning or None,
    )


def present(state: UIState, outcome: Outcome) -> UIState:
    """
    Map the outcome of one submission onto the next UI state.

    Errors replace the message but keep whatever result was shown before;
    a successful calculation clears the error and replaces the result.
    """
    if isinstance(outcome, ValidationError):
        return replace(state, error=outcome.message)
    if isinstance(outcome, DispatchError):
        return replace(state, error=GENERIC_DISPATCH_MESSAGE)
    if isinstance(outcome, CalculationResult):
        return UIState(error=None, result=to_display_result(outcome))
    raise TypeError(f"Unsupported outcome type: {type(outcome).__name__}")
