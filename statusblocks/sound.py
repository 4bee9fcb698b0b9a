"""Volume level of a sound device, read and changed through ALSA's amixer."""

from __future__ import annotations

import enum
import subprocess
from collections.abc import Mapping
from types import TracebackType

from statusblocks.errors import other_error

_MAX_STEP_WIDTH = 50
_HEADPHONE_FORM_FACTORS = frozenset({"headset", "headphone", "hands-free", "portable"})
_BRACKET_CHARS = "[]%"


class DeviceKind(enum.Enum):
    """Whether the device plays sound or records it."""

    SINK = "sink"
    SOURCE = "source"


class SoundDriver(enum.Enum):
    """Which sound system to talk to."""

    AUTO = "auto"
    ALSA = "alsa"


def choose_icon(
    muted: bool,
    device_kind: DeviceKind,
    headphones_indicator: bool,
    form_factor: str | None,
    active_port: str | None,
) -> str:
    """Pick the icon name for the device's current state."""
    if headphones_indicator and device_kind is DeviceKind.SINK:
        if form_factor is None:
            headphones = active_port is not None and "headphones" in active_port
        else:
            headphones = form_factor in _HEADPHONE_FORM_FACTORS
        if headphones:
            return "headphones"
    if device_kind is DeviceKind.SOURCE:
        return "microphone_muted" if muted else "microphone"
    return "volume_muted" if muted else "volume"


def clamp_step_width(step_width: int) -> int:
    """Limit the scrolling step to the range the block allows."""
    return max(0, min(step_width, _MAX_STEP_WIDTH))


def apply_mapping(output_name: str, mappings: Mapping[str, str] | None) -> str:
    """Replace an output name by its configured alias, if there is one."""
    if mappings is None:
        return output_name
    return mappings.get(output_name, output_name)


def parse_amixer_output(output: str) -> tuple[int, bool]:
    """Read the volume percentage and mute flag from ``amixer get`` output."""
    lines = output.strip().splitlines()
    if not lines:
        raise other_error("could not get sound info")
    fields = (
        word.strip(_BRACKET_CHARS)
        for word in lines[-1].split()
        if word.startswith("[") and "dB" not in word
    )
    volume_text = next(fields, None)
    if volume_text is None:
        raise other_error("could not get volume")
    try:
        volume = int(volume_text)
    except ValueError as exc:
        raise other_error("could not parse volume to u32", exc) from exc
    if volume < 0:
        raise other_error("could not parse volume to u32", volume_text)
    muted = next(fields, None) == "off"
    return volume, muted


class AlsaDevice:
    """A mixer control on an ALSA device."""

    def __init__(self, name: str, device: str, natural_mapping: bool) -> None:
        self.name = name
        self.device = device
        self.natural_mapping = natural_mapping
        self.volume = 0
        self.muted = False
        self.output_description: str | None = None
        self.active_port: str | None = None
        self.form_factor: str | None = None
        self._monitor: subprocess.Popen[bytes] | None = None

    @property
    def output_name(self) -> str:
        return self.name

    def amixer_args(self, *args: str) -> list[str]:
        """The amixer arguments addressing this control, followed by ``args``."""
        prefix = ["-M"] if self.natural_mapping else []
        return [*prefix, "-D", self.device, *args]

    def _amixer(self, args: list[str], failure: str) -> bytes:
        try:
            completed = subprocess.run(["amixer", *args], capture_output=True, check=False)
        except OSError as exc:
            raise other_error(failure, exc) from exc
        return completed.stdout

    def get_info(self) -> None:
        """Refresh the volume and mute state from amixer."""
        failure = "could not run amixer to get sound info"
        raw = self._amixer(self.amixer_args("get", self.name), failure)
        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise other_error(failure, exc) from exc
        self.volume, self.muted = parse_amixer_output(text)

    def set_volume(self, step: int, max_vol: int | None = None) -> None:
        """Change the volume by ``step`` percent, capped at ``max_vol``."""
        new_volume = max(0, self.volume + step)
        if max_vol is not None:
            new_volume = min(new_volume, max_vol)
        self._amixer(
            self.amixer_args("set", self.name, f"{new_volume}%"), "failed to set volume"
        )
        self.volume = new_volume

    def toggle(self) -> None:
        """Toggle the mute switch."""
        self._amixer(self.amixer_args("set", self.name, "toggle"), "failed to toggle mute")
        self.muted = not self.muted

    def wait_for_update(self) -> None:
        """Block until ``alsactl monitor`` reports a change."""
        if self._monitor is None:
            try:
                self._monitor = subprocess.Popen(
                    ["alsactl", "monitor"], stdout=subprocess.PIPE
                )
            except OSError as exc:
                raise other_error("Failed to start alsactl monitor", exc) from exc
        stdout = self._monitor.stdout
        if stdout is None:
            raise other_error("Failed to pipe alsactl monitor output")
        try:
            stdout.read1(1024)
        except OSError as exc:
            raise other_error("Failed to read stdbuf output", exc) from exc

    def __enter__(self) -> AlsaDevice:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if self._monitor is not None:
            self._monitor.terminate()
            self._monitor.wait()
            self._monitor = None