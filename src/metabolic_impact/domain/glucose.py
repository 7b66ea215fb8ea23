"""Domain models for glucose readings."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum

MG_DL_PER_MMOL_L = 18.0182


class GlucoseUnit(StrEnum):
    """Supported blood glucose units."""

    MG_DL = "mg/dL"
    MMOL_L = "mmol/L"


@dataclass(frozen=True)
class GlucoseReading:
    """A glucose reading in mg/dL."""

    value: float
    timestamp: datetime


def to_mg_dl(value: float, unit: GlucoseUnit) -> float:
    """Convert a glucose value to mg/dL."""
    if unit == GlucoseUnit.MMOL_L:
        return value * MG_DL_PER_MMOL_L
    return value

