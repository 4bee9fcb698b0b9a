"""X11 screen information (name, brightness, resolution) through ``xrandr``."""

from __future__ import annotations

import math
import re
import subprocess
from dataclasses import dataclass

from statusblocks.errors import other_error

DEFAULT_FORMAT = " $icon $display $brightness_icon $brightness "
DEFAULT_STEP_WIDTH = 5
DEFAULT_INTERVAL = 5

_MAX_BRIGHTNESS = 100
_U32_MAX = 2**32 - 1
_PARSE_FAILURE = "Failed to parse xrandr output"


def _float_text(value: float) -> str:
    text = repr(float(value))
    return text[:-2] if text.endswith(".0") else text


@dataclass
class Monitor:
    """An active monitor as reported by ``xrandr --verbose``."""

    name: str
    brightness: int
    resolution: str

    def set_brightness(self, brightness: int) -> None:
        """Ask xrandr to change this monitor's gamma brightness, in percent."""
        command = (
            f"xrandr --output {self.name} --brightness  {_float_text(brightness / 100.0)}"
        )
        try:
            subprocess.Popen(["sh", "-c", command])
        except OSError:
            pass
        self.brightness = brightness


def _compile_patterns(active_output: str) -> list[re.Pattern[str]]:
    sources = [f"{line.split()[-1]} connected" for line in active_output.splitlines() if line.split()]
    sources.append("Brightness:")
    try:
        return [re.compile(source) for source in sources]
    except re.error as exc:
        raise other_error("Failed to create RegexSet", exc) from exc


def _to_u32(value: float) -> int:
    if math.isnan(value):
        return 0
    if value <= 0:
        return 0
    if value >= _U32_MAX:
        return _U32_MAX
    return int(value)


def _parse_brightness(line: str) -> int:
    parts = line.split(":")
    if len(parts) < 2:
        raise other_error(_PARSE_FAILURE)
    try:
        value = float(parts[1].strip())
    except ValueError as exc:
        raise other_error(_PARSE_FAILURE, exc) from exc
    return _to_u32(value * 100.0)


def parse_monitors(active_output: str, verbose_output: str) -> list[Monitor]:
    """Build the monitor list from ``--listactivemonitors`` and ``--verbose`` output."""
    patterns = _compile_patterns(active_output)
    matching = iter(
        [
            line
            for line in verbose_output.splitlines()
            if any(pattern.search(line) for pattern in patterns)
        ]
    )
    monitors = []
    for header in matching:
        brightness_line = next(matching, None)
        if brightness_line is None:
            break
        tokens = header.split()
        if not tokens:
            raise other_error(_PARSE_FAILURE)
        if len(tokens) < 3:
            raise other_error(_PARSE_FAILURE)
        monitors.append(
            Monitor(
                name=tokens[0],
                brightness=_parse_brightness(brightness_line),
                resolution=tokens[2].split("+", 1)[0],
            )
        )
    return monitors


def _xrandr(arg: str, failure: str) -> str:
    try:
        completed = subprocess.run(["xrandr", arg], capture_output=True, check=False)
    except OSError as exc:
        raise other_error(failure, exc) from exc
    try:
        return completed.stdout.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise other_error("xrandr produced non-UTF8 output", exc) from exc


def get_monitors() -> list[Monitor]:
    """Query xrandr for the active monitors."""
    active = _xrandr("--listactivemonitors", "Failed to collect active xrandr monitors")
    verbose = _xrandr("--verbose", "Failed to collect xrandr monitors info")
    return parse_monitors(active, verbose)


def brightness_up(brightness: int, step: int) -> int:
    """Raise the brightness by ``step`` percent, up to full brightness."""
    return min(brightness + step, _MAX_BRIGHTNESS)


def brightness_down(brightness: int, step: int) -> int:
    """Lower the brightness by ``step`` percent, not below zero."""
    return max(brightness - step, 0)