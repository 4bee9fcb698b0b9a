"""System uptime, shown in its two largest units."""

from __future__ import annotations

import re
from pathlib import Path

from statusblocks.errors import other_error

UPTIME_PATH = "/proc/uptime"

_WEEK = 604_800
_DAY = 86_400
_HOUR = 3_600
_MINUTE = 60
_UNSIGNED = re.compile(r"\+?[0-9]+")


def parse_uptime(content: str) -> int:
    """The whole seconds of uptime from the contents of ``/proc/uptime``."""
    whole = content.split(".", 1)[0]
    if not _UNSIGNED.fullmatch(whole):
        raise other_error("/proc/uptime has invalid content")
    return int(whole)


def format_uptime(seconds: int) -> str:
    """Render the uptime using its two largest non-empty units."""
    weeks, rest = divmod(seconds, _WEEK)
    days, rest = divmod(rest, _DAY)
    hours, rest = divmod(rest, _HOUR)
    minutes, secs = divmod(rest, _MINUTE)
    if weeks > 0:
        return f"{weeks}w {days}d"
    if days > 0:
        return f"{days}d {hours}h"
    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{minutes}m {secs}s"


def read_uptime(path: str | Path = UPTIME_PATH) -> int:
    """Read the uptime in whole seconds from ``path``."""
    try:
        content = Path(path).read_text()
    except (OSError, UnicodeDecodeError) as exc:
        raise other_error("Failed to read /proc/uptime", exc) from exc
    return parse_uptime(content)