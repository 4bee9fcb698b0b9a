"""Mouse buttons and per-block click handlers."""

from __future__ import annotations

import enum
import subprocess
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from statusblocks.errors import BlockError, ErrorKind, other_error


class MouseButton(enum.Enum):
    """A mouse button as reported by the bar."""

    LEFT = "Left"
    MIDDLE = "Middle"
    RIGHT = "Right"
    WHEEL_UP = "WheelUp"
    WHEEL_DOWN = "WheelDown"
    FORWARD = "Forward"
    BACK = "Back"
    UNKNOWN = "Unknown"
    DOUBLE_LEFT = "DoubleLeft"


_BUTTON_NAMES = {
    "left": MouseButton.LEFT,
    "middle": MouseButton.MIDDLE,
    "right": MouseButton.RIGHT,
    "up": MouseButton.WHEEL_UP,
    "down": MouseButton.WHEEL_DOWN,
    "forward": MouseButton.FORWARD,
    "back": MouseButton.BACK,
    "double_left": MouseButton.DOUBLE_LEFT,
}

_BUTTON_NUMBERS = {
    1: MouseButton.LEFT,
    2: MouseButton.MIDDLE,
    3: MouseButton.RIGHT,
    4: MouseButton.WHEEL_UP,
    5: MouseButton.WHEEL_DOWN,
    9: MouseButton.FORWARD,
    8: MouseButton.BACK,
}

_ENTRY_FIELDS = {"button", "widget", "cmd", "action", "sync", "update"}


def parse_mouse_button(value: Any) -> MouseButton:
    """Read a button from a configuration name or an X11 button number."""
    if isinstance(value, MouseButton):
        return value
    if isinstance(value, str):
        return _BUTTON_NAMES.get(value, MouseButton.UNKNOWN)
    if isinstance(value, int) and not isinstance(value, bool):
        return _BUTTON_NUMBERS.get(value, MouseButton.UNKNOWN)
    raise BlockError(
        f"invalid type: {type(value).__name__}, expected u64 or string",
        ErrorKind.CONFIG,
    )


@dataclass(frozen=True)
class PostActions:
    """What to do after a click was handled."""

    action: str | None
    update: bool


@dataclass(frozen=True)
class ClickConfigEntry:
    """One configured reaction to a mouse button."""

    button: MouseButton
    widget: str | None = None
    cmd: str | None = None
    action: str | None = None
    sync: bool = False
    update: bool = False


def _optional_str(data: Mapping[str, Any], key: str) -> str | None:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise BlockError(f"`{key}` must be a string", ErrorKind.CONFIG)
    return value


def _flag(data: Mapping[str, Any], key: str) -> bool:
    value = data.get(key, False)
    if not isinstance(value, bool):
        raise BlockError(f"`{key}` must be a boolean", ErrorKind.CONFIG)
    return value


def parse_click_entry(data: Mapping[str, Any]) -> ClickConfigEntry:
    """Build a click entry from a configuration table."""
    unknown = sorted(set(data) - _ENTRY_FIELDS)
    if unknown:
        raise BlockError(f"unknown field `{unknown[0]}`", ErrorKind.CONFIG)
    if "button" not in data:
        raise BlockError("missing field `button`", ErrorKind.CONFIG)
    return ClickConfigEntry(
        button=parse_mouse_button(data["button"]),
        widget=_optional_str(data, "widget"),
        cmd=_optional_str(data, "cmd"),
        action=_optional_str(data, "action"),
        sync=_flag(data, "sync"),
        update=_flag(data, "update"),
    )


class ClickHandler:
    """The list of click entries configured for a block."""

    def __init__(
        self, entries: Iterable[ClickConfigEntry | Mapping[str, Any]] = ()
    ) -> None:
        self.entries = [
            entry if isinstance(entry, ClickConfigEntry) else parse_click_entry(entry)
            for entry in entries
        ]

    def find(self, button: MouseButton, instance: str | None) -> ClickConfigEntry | None:
        """Return the first entry for this button and widget instance."""
        return next(
            (e for e in self.entries if e.button == button and e.widget == instance),
            None,
        )

    def handle(self, button: MouseButton, instance: str | None) -> PostActions | None:
        """Run the matching entry's command and report its follow-up actions."""
        entry = self.find(button, instance)
        if entry is None:
            return None
        if entry.cmd is not None:
            try:
                if entry.sync:
                    subprocess.run(["sh", "-c", entry.cmd], check=False)
                else:
                    subprocess.Popen(["sh", "-c", entry.cmd])
            except OSError as exc:
                raise other_error(
                    f"'{button.value}' button handler: Failed to run '{entry.cmd}",
                    exc,
                ) from exc
        return PostActions(action=entry.action, update=entry.update)