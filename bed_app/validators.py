from __future__ import annotations

import math
import re

from bed_app.config import MAX_ISOCENTRES, MIN_ISOCENTRES
from bed_app.errors import ValidationError
from bed_app.models import FormInput, GapMode, GapTime, ScalarGap, SequenceGap, ValidatedRequest

TOTAL_DOSE_MESSAGE = "Total dose must be a non-negative number."
TOTAL_BEAM_ON_MESSAGE = "Total beam-on time must be a non-negative number."
ISOCENTRES_MESSAGE = (
    f"Isocentres must be a positive integer between {MIN_ISOCENTRES} and {MAX_ISOCENTRES}."
)
AVG_GAP_TIME_MESSAGE = "Average gap time must be a non-negative number."
GAP_ARRAY_VALUES_MESSAGE = "Gap array must contain only non-negative numbers."

# Plain ASCII decimals only; float() and int() would also take "1_000" or "nan".
DECIMAL_PATTERN = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")


def gap_array_length_message(expected: int) -> str:
    return f"Gap time array should have {expected} values."


def parse_non_negative(raw: str | None) -> float | None:
    """Return the value typed into a numeric field, or None when it is not a finite number >= 0."""
    if raw is None:
        return None
    text = str(raw).strip()
    if not DECIMAL_PATTERN.fullmatch(text):
        return None
    value = float(text)
    if not math.isfinite(value) or value < 0:
        return None
    return value


def parse_isocentres(raw: str | None) -> int | None:
    if raw is None:
        return None
    text = str(raw).strip()
    if not INTEGER_PATTERN.fullmatch(text):
        return None
    try:
        value = int(text)
    except ValueError:
        # Longer than the interpreter's integer string limit.
        return None
    if value < MIN_ISOCENTRES or value > MAX_ISOCENTRES:
        return None
    return value


def split_gap_sequence(raw: str | None) -> list[str]:
    """Split comma separated gap times; a blank field holds zero values, not one empty value."""
    if raw is None or not raw.strip():
        return []
    return [token.strip() for token in raw.split(",")]


def parse_gap_sequence(raw: str | None, isocentres: int) -> tuple[float, ...]:
    tokens = split_gap_sequence(raw)
    expected = isocentres - 1
    if len(tokens) != expected:
        raise ValidationError(gap_array_length_message(expected))

    values = [parse_non_negative(token) for token in tokens]
    if any(value is None for value in values):
        raise ValidationError(GAP_ARRAY_VALUES_MESSAGE)
    return tuple(values)


def validate_form_input(form: FormInput) -> ValidatedRequest:
    total_dose = parse_non_negative(form.total_dose)
    if total_dose is None:
        raise ValidationError(TOTAL_DOSE_MESSAGE)

    total_beam_on = parse_non_negative(form.total_beam_on)
    if total_beam_on is None:
        raise ValidationError(TOTAL_BEAM_ON_MESSAGE)

    isocentres = parse_isocentres(form.isocentres)
    if isocentres is None:
        raise ValidationError(ISOCENTRES_MESSAGE)

    gap_time: GapTime
    if GapMode(form.gap_mode) == GapMode.SEQUENCE:
        gap_time = SequenceGap(parse_gap_sequence(form.gap_sequence, isocentres))
    else:
        avg_gap_time = parse_non_negative(form.avg_gap_time)
        if avg_gap_time is None:
            raise ValidationError(AVG_GAP_TIME_MESSAGE)
        gap_time = ScalarGap(avg_gap_time)

    return ValidatedRequest(
        total_dose=total_dose,
        total_beam_on=total_beam_on,
        isocentres=isocentres,
        gap_time=gap_time,
    )
