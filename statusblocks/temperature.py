"""System temperature readings and the state they put the block in."""

from __future__ import annotations

import enum
import math
import sys
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

DEFAULT_GOOD = 20.0
DEFAULT_IDLE = 45.0
DEFAULT_INFO = 60.0
DEFAULT_WARN = 80.0

_MIN_VALID = -100.0
_MAX_VALID = 150.0


class State(enum.Enum):
    """The visual state of a block."""

    IDLE = "idle"
    INFO = "info"
    GOOD = "good"
    WARNING = "warning"
    CRITICAL = "critical"


class TemperatureScale(enum.Enum):
    """The scale temperatures are shown in."""

    CELSIUS = "celsius"
    FAHRENHEIT = "fahrenheit"

    def from_celsius(self, value: float) -> float:
        """Convert a Celsius value into this scale."""
        if self is TemperatureScale.FAHRENHEIT:
            return value * 1.8 + 32.0
        return value


@dataclass(frozen=True)
class Thresholds:
    """Upper bounds of the good, idle, info and warning states."""

    good: float
    idle: float
    info: float
    warning: float


def temperature_thresholds(
    scale: TemperatureScale = TemperatureScale.CELSIUS,
    good: float | None = None,
    idle: float | None = None,
    info: float | None = None,
    warning: float | None = None,
) -> Thresholds:
    """Fill unset thresholds with the defaults converted to ``scale``."""

    def pick(value: float | None, default: float) -> float:
        return scale.from_celsius(default) if value is None else value

    return Thresholds(
        good=pick(good, DEFAULT_GOOD),
        idle=pick(idle, DEFAULT_IDLE),
        info=pick(info, DEFAULT_INFO),
        warning=pick(warning, DEFAULT_WARN),
    )


def temperature_state(max_temp: float, thresholds: Thresholds) -> State:
    """The block state for the hottest reading."""
    if max_temp <= thresholds.good:
        return State.GOOD
    if max_temp <= thresholds.idle:
        return State.IDLE
    if max_temp <= thresholds.info:
        return State.INFO
    if max_temp <= thresholds.warning:
        return State.WARNING
    return State.CRITICAL


def filter_readings(values: Iterable[float], scale: TemperatureScale) -> list[float]:
    """Drop implausible Celsius readings and convert the rest to ``scale``."""
    readings = []
    for value in values:
        if _MIN_VALID <= value <= _MAX_VALID:
            readings.append(scale.from_celsius(value))
        else:
            print(
                f"Temperature ({value}) outside of range ([-100, 150])",
                file=sys.stderr,
            )
    return readings


def summarize(readings: Sequence[float]) -> tuple[float, float, float]:
    """Return the minimum, average and maximum of the readings.

    With no readings the minimum and maximum are 0 and the average is NaN.
    """
    if not readings:
        return 0.0, math.nan, 0.0
    return min(readings), sum(readings) / len(readings), max(readings)