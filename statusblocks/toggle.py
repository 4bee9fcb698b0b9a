"""A toggle driven by shell commands: one reads its state, two switch it."""

from __future__ import annotations

import os
import subprocess

from statusblocks.errors import other_error
from statusblocks.temperature import State

DEFAULT_FORMAT = " $icon "
DEFAULT_ICON_ON = "toggle_on"
DEFAULT_ICON_OFF = "toggle_off"


def default_shell() -> str:
    """The shell named by ``$SHELL``, or ``sh`` when it is unset."""
    return os.environ.get("SHELL", "sh")


class Toggle:
    """Runs the configured commands to read and flip the toggle's state."""

    def __init__(
        self,
        command_on: str,
        command_off: str,
        command_state: str,
        icon_on: str | None = None,
        icon_off: str | None = None,
        shell: str | None = None,
    ) -> None:
        self.command_on = command_on
        self.command_off = command_off
        self.command_state = command_state
        self.icon_on = DEFAULT_ICON_ON if icon_on is None else icon_on
        self.icon_off = DEFAULT_ICON_OFF if icon_off is None else icon_off
        self.shell = default_shell() if shell is None else shell

    def _run(self, command: str, failure: str) -> subprocess.CompletedProcess[bytes]:
        try:
            return subprocess.run(
                [self.shell, "-c", command], capture_output=True, check=False
            )
        except OSError as exc:
            raise other_error(failure, exc) from exc

    def is_toggled(self) -> bool:
        """Whether ``command_state`` printed anything besides whitespace."""
        completed = self._run(self.command_state, "Failed to run command_state")
        try:
            output = completed.stdout.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise other_error("The output of command_state is invalid UTF-8", exc) from exc
        return bool(output.strip())

    def icon(self, toggled: bool) -> str:
        """The icon name for the given state."""
        return self.icon_on if toggled else self.icon_off

    def toggle(self, toggled: bool) -> State:
        """Run the command that flips the current state.

        Returns the block state: idle on success, critical when the command failed.
        """
        command = self.command_off if toggled else self.command_on
        completed = self._run(command, "Failed to run command")
        return State.IDLE if completed.returncode == 0 else State.CRITICAL