"""A countdown timer that is extended, shortened and reset by clicks."""

from __future__ import annotations

import subprocess
from datetime import datetime, timedelta, timezone

from statusblocks.errors import other_error

DEFAULT_FORMAT = " $icon {$minutes:$seconds |}"
DEFAULT_INCREMENT = 30


def split_remaining(seconds: float) -> tuple[int, int, int]:
    """Split whole seconds into hours, minutes within the hour and seconds within the minute."""
    total = int(seconds)
    return total // 3600, (total // 60) % 60, total % 60


def _now(now: datetime | None) -> datetime:
    return datetime.now(timezone.utc) if now is None else now


class TeaTimer:
    """The timer's end time and the transitions between running and stopped."""

    def __init__(self, increment: int | None = None, done_cmd: str | None = None) -> None:
        self.increment = timedelta(
            seconds=DEFAULT_INCREMENT if increment is None else increment
        )
        self.done_cmd = done_cmd
        self.timer_end: datetime | None = None
        self._was_active = False

    def remaining(self, now: datetime | None = None) -> timedelta:
        """Time left on the timer; zero when it is not running."""
        if self.timer_end is None:
            return timedelta(0)
        return max(self.timer_end - _now(now), timedelta(0))

    def values(self, now: datetime | None = None) -> dict[str, str]:
        """Placeholder values; the time fields are present only while running."""
        values = {"icon": "tea"}
        left = self.remaining(now)
        if left > timedelta(0):
            hours, minutes, seconds = split_remaining(left.total_seconds())
            values["hours"] = f"{hours:02}"
            values["minutes"] = f"{minutes:02}"
            values["seconds"] = f"{seconds:02}"
        return values

    def handle_action(self, action: str, now: datetime | None = None) -> None:
        """Apply an ``increment``, ``decrement`` or ``reset`` click."""
        current = _now(now)
        active = self.remaining(current) > timedelta(0)
        if action == "increment":
            if active and self.timer_end is not None:
                self.timer_end += self.increment
            else:
                self.timer_end = current + self.increment
        elif action == "decrement":
            if active and self.timer_end is not None:
                self.timer_end -= self.increment
        elif action == "reset":
            self.timer_end = current

    def tick(self, now: datetime | None = None) -> bool:
        """Note the timer's state, running ``done_cmd`` when it has just run out.

        Returns whether the timer is still running.
        """
        active = self.remaining(now) > timedelta(0)
        if not active and self._was_active and self.done_cmd is not None:
            try:
                subprocess.Popen(["sh", "-c", self.done_cmd])
            except OSError as exc:
                self._was_active = active
                raise other_error("done_cmd error", exc) from exc
        self._was_active = active
        return active