"""Watson time-tracking state: parsing the state file and describing the activity."""

from __future__ import annotations

import json
import os
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any

from statusblocks.errors import other_error

_MICROSECOND = timedelta(microseconds=1)


def _whole_units(delta: timedelta, unit: timedelta) -> int:
    """Number of whole ``unit``s in ``delta``, truncated toward zero."""
    total = delta // _MICROSECOND
    step = unit // _MICROSECOND
    count = abs(total) // step
    return count if total >= 0 else -count


def _spans(delta: timedelta, with_seconds: bool) -> list[tuple[str, int]]:
    spans = [
        ("week", _whole_units(delta, timedelta(weeks=1))),
        ("day", _whole_units(delta, timedelta(days=1))),
        ("hour", _whole_units(delta, timedelta(hours=1))),
        ("minute", _whole_units(delta, timedelta(minutes=1))),
    ]
    if with_seconds:
        spans.append(("second", _whole_units(delta, timedelta(seconds=1))))
    return spans


def _plural(count: int) -> str:
    return "s" if count > 1 else ""


def format_delta_past(delta: timedelta) -> str:
    """Describe how long ago something started, in its largest whole unit."""
    for label, count in _spans(delta, with_seconds=False):
        if count != 0:
            return f"{count} {label}{_plural(count)} ago"
    return "now"


def format_delta_after(delta: timedelta) -> str:
    """Describe how long something lasted, in its largest whole unit."""
    for label, count in _spans(delta, with_seconds=True):
        if count != 0:
            return f"after {count} {label}{_plural(count)}"
    return "now"


@dataclass(frozen=True)
class WatsonActivity:
    """An active Watson frame: its project, start time and tags."""

    project: str
    start: datetime
    tags: tuple[str, ...] = field(default_factory=tuple)

    def format(
        self,
        show_time: bool,
        verb: str,
        formatter: Callable[[timedelta], str],
        now: datetime | None = None,
    ) -> str:
        """Render the project and tags, followed by the elapsed time if asked for."""
        text = self.project
        if self.tags:
            text += f" [{' '.join(self.tags)}]"
        if show_time:
            current = datetime.now(timezone.utc) if now is None else now
            text += f" {verb} {formatter(current - self.start)}"
        return text


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def parse_state(text: str) -> WatsonActivity | None:
    """Read a Watson state file; ``None`` means no activity is being tracked."""
    try:
        data = json.loads(text)
    except ValueError:
        return None
    if not isinstance(data, dict):
        return None
    project = data.get("project")
    start = data.get("start")
    tags = data.get("tags")
    if not isinstance(project, str) or not _is_int(start) or not isinstance(tags, list):
        return None
    if not all(isinstance(tag, str) for tag in tags):
        return None
    try:
        started = datetime.fromtimestamp(start, tz=timezone.utc).astimezone()
    except (OverflowError, OSError, ValueError) as exc:
        raise other_error("Invalid start timestamp in watson state", exc) from exc
    return WatsonActivity(project=project, start=started, tags=tuple(tags))


def default_state_path() -> Path:
    """The state file in the user's configuration directory."""
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg and os.path.isabs(xdg):
        config_dir = Path(xdg)
    else:
        try:
            config_dir = Path.home() / ".config"
        except (KeyError, RuntimeError) as exc:
            raise other_error("xdg config directory not found", exc) from exc
    return config_dir / "watson" / "state"