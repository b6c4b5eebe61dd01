from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Union


class GapMode(str, Enum):
    SCALAR = "scalar"
    SEQUENCE = "sequence"


@dataclass(frozen=True)
class FormInput:
    """Raw text exactly as typed into the calculator form."""

    total_dose: str = ""
    total_beam_on: str = ""
    isocentres: str = ""
    gap_mode: GapMode = GapMode.SCALAR
    avg_gap_time: str = ""
    gap_sequence: str = ""


@dataclass(frozen=True)
class ScalarGap:
    value: float


@dataclass(frozen=True)
class SequenceGap:
    values: tuple[float, ...]


GapTime = Union[ScalarGap, SequenceGap]


@dataclass(frozen=True)
class ValidatedRequest:
    total_dose: float
    total_beam_on: float
    isocentres: int
    gap_time: GapTime

    @property
    def gap_mode(self) -> GapMode:
        if isinstance(self.gap_time, SequenceGap):
            return GapMode.SEQUENCE
        return GapMode.SCALAR

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "totalDose": self.total_dose,
            "totalBeamOn": self.total_beam_on,
            "isocentres": self.isocentres,
        }
        if isinstance(self.gap_time, SequenceGap):
            payload["gapArray"] = list(self.gap_time.values)
        else:
            payload["avgGapTime"] = self.gap_time.value
        return payload

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> ValidatedRequest:
        has_scalar = "avgGapTime" in payload
        has_sequence = "gapArray" in payload
        if has_scalar == has_sequence:
            raise ValueError("Payload must contain exactly one of avgGapTime or gapArray.")

        gap_time: GapTime
        if has_sequence:
            gap_time = SequenceGap(tuple(float(value) for value in payload["gapArray"]))
        else:
            gap_time = ScalarGap(float(payload["avgGapTime"]))

        return cls(
            total_dose=float(payload["totalDose"]),
            total_beam_on=float(payload["totalBeamOn"]),
            isocentres=int(payload["isocentres"]),
            gap_time=gap_time,
        )


@dataclass(frozen=True)
class CalculationResult:
    bed: float
    a9: float
    relative_difference: float
    warning: str | None = None

    @classmethod
    def from_response(cls, body: Any) -> CalculationResult:
        if not isinstance(body, dict):
            raise ValueError("Response body must be a JSON object.")

        values: dict[str, float] = {}
        for key in ("BED", "A9", "rel_diff"):
            raw = body.get(key)
            # bool is an int subclass and is never a dose.
            if isinstance(raw, bool) or not isinstance(raw, (int, float)):
                raise ValueError(f"Response field '{key}' must be a number.")
            try:
                value = float(raw)
            except OverflowError as exc:
                raise ValueError(f"Response field '{key}' is out of range.") from exc
            if not math.isfinite(value):
                raise ValueError(f"Response field '{key}' must be finite.")
            values[key] = value

        warning = body.get("warning")
        return cls(
            bed=values["BED"],
            a9=values["A9"],
            relative_difference=values["rel_diff"],
            warning=str(warning) if warning else None,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "BED": self.bed,
            "A9": self.a9,
            "rel_diff": self.relative_difference,
            "warning": self.warning,
        }


@dataclass(frozen=True)
class DisplayResult:
    bed: str
    a9: str
    relative_difference: str
    warning: str | None = None


@dataclass(frozen=True)
class UIState:
    error: str | None = None
    result: DisplayResult | None = None
