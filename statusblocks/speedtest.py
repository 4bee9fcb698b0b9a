"""Ping, download and upload speeds measured by ``speedtest-cli``."""

from __future__ import annotations

import json
import subprocess
from dataclasses import dataclass
from typing import Any

from statusblocks.errors import other_error

DEFAULT_FORMAT = " ^icon_ping $ping ^icon_net_down $speed_down ^icon_net_up $speed_up "
DEFAULT_INTERVAL = 1800

_WRONG_JSON = "'speedtest-cli' produced wrong JSON"


@dataclass(frozen=True)
class SpeedtestResult:
    """Download and upload speed in bits per second, ping in milliseconds."""

    download: float
    upload: float
    ping: float


def _number(data: dict[str, Any], key: str) -> float:
    value = data.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise other_error(_WRONG_JSON, f"invalid or missing field `{key}`")
    return float(value)


def parse_speedtest_output(output: bytes | str) -> SpeedtestResult:
    """Read the result from the output of ``speedtest-cli --json``."""
    if isinstance(output, bytes):
        try:
            output = output.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise other_error("'speedtest-cli' produced non-UTF8 output", exc) from exc
    try:
        data = json.loads(output)
    except ValueError as exc:
        raise other_error(_WRONG_JSON, exc) from exc
    if not isinstance(data, dict):
        raise other_error(_WRONG_JSON, "expected a JSON object")
    return SpeedtestResult(
        download=_number(data, "download"),
        upload=_number(data, "upload"),
        ping=_number(data, "ping"),
    )


def run_speedtest() -> SpeedtestResult:
    """Run ``speedtest-cli --json`` and parse its result."""
    try:
        completed = subprocess.run(
            ["speedtest-cli", "--json"], capture_output=True, check=False
        )
    except OSError as exc:
        raise other_error("failed to run 'speedtest-cli'", exc) from exc
    return parse_speedtest_output(completed.stdout)