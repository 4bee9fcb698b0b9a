"""Number of tasks matching taskwarrior filters."""

from __future__ import annotations

import itertools
import re
import subprocess
from collections.abc import Iterator, Sequence
from dataclasses import dataclass

from statusblocks.errors import other_error
from statusblocks.temperature import State

DEFAULT_INTERVAL = 600
DEFAULT_WARNING_THRESHOLD = 10
DEFAULT_CRITICAL_THRESHOLD = 20
DEFAULT_FORMAT = " $icon $count.eng(w:1) "
DEFAULT_DATA_LOCATION = "~/.task"

_U32_MAX = 2**32 - 1
_UNSIGNED = re.compile(r"\+?[0-9]+")


@dataclass(frozen=True)
class TaskFilter:
    """A named taskwarrior filter expression."""

    name: str
    filter: str


DEFAULT_FILTERS = (TaskFilter(name="pending", filter="-COMPLETED -DELETED"),)


def parse_task_count(output: bytes | str) -> int:
    """Read the count printed by ``task ... count``."""
    if isinstance(output, bytes):
        try:
            output = output.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise other_error(
                "failed to get the number of tasks from taskwarrior (invalid UTF-8)", exc
            ) from exc
    text = output.strip()
    if not _UNSIGNED.fullmatch(text) or int(text) > _U32_MAX:
        raise other_error("could not parse the result of taskwarrior", text)
    return int(text)


def get_number_of_tasks(filter_: str) -> int:
    """Ask taskwarrior how many tasks match ``filter_``."""
    try:
        completed = subprocess.run(
            ["task", "rc.gc=off", filter_, "count"], capture_output=True, check=False
        )
    except OSError as exc:
        raise other_error(
            "failed to run taskwarrior for getting the number of tasks", exc
        ) from exc
    return parse_task_count(completed.stdout)


def task_state(
    count: int,
    warning_threshold: int = DEFAULT_WARNING_THRESHOLD,
    critical_threshold: int = DEFAULT_CRITICAL_THRESHOLD,
) -> State:
    """The block state for a task count."""
    if count >= critical_threshold:
        return State.CRITICAL
    if count >= warning_threshold:
        return State.WARNING
    return State.IDLE


def cycle_filters(filters: Sequence[TaskFilter]) -> Iterator[TaskFilter]:
    """Endlessly cycle through the filters; at least one is required."""
    if not filters:
        raise other_error("`filters` is empty")
    return itertools.cycle(list(filters))