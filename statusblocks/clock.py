"""The current time, optionally cycling through a list of time zones."""

from __future__ import annotations

import time
from collections.abc import Iterable
from datetime import datetime, timezone
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from statusblocks.errors import BlockError, ErrorKind

DEFAULT_FORMAT = " $icon $timestamp.datetime() "
DEFAULT_INTERVAL = 1


def _zone(name: Any) -> ZoneInfo:
    if not isinstance(name, str):
        raise BlockError(
            f"invalid timezone {name!r}: expected a string", ErrorKind.CONFIG
        )
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise BlockError(f"unknown timezone '{name}'", ErrorKind.CONFIG, exc) from exc


def parse_timezones(value: Any) -> list[ZoneInfo]:
    """Read the ``timezone`` option: unset, one zone name or a list of them."""
    if value is None:
        return []
    if isinstance(value, str):
        return [_zone(value)]
    if isinstance(value, (list, tuple)):
        return [_zone(name) for name in value]
    raise BlockError(
        "`timezone` must be a timezone name or a list of them", ErrorKind.CONFIG
    )


class TimezoneCycle:
    """The selected time zone, stepped forwards and backwards by clicks."""

    def __init__(self, timezones: Iterable[ZoneInfo] = ()) -> None:
        self.timezones = list(timezones)
        self._index = 0

    @property
    def current(self) -> ZoneInfo | None:
        """The selected zone; ``None`` stands for the local time zone."""
        return self.timezones[self._index] if self.timezones else None

    def next(self) -> ZoneInfo | None:
        """Select and return the following zone, wrapping around."""
        if self.timezones:
            self._index = (self._index + 1) % len(self.timezones)
        return self.current

    def prev(self) -> ZoneInfo | None:
        """Select and return the preceding zone, wrapping around."""
        if self.timezones:
            step = max(len(self.timezones) - 2, 0) + 1
            self._index = (self._index + step) % len(self.timezones)
        return self.current

    def now(self, when: datetime | None = None) -> datetime:
        """``when`` (default: now) expressed in the selected zone."""
        moment = datetime.now(timezone.utc) if when is None else when
        zone = self.current
        if zone is None:
            if hasattr(time, "tzset"):
                time.tzset()
            return moment.astimezone()
        return moment.astimezone(zone)