"""VPN connection status through the nordvpn command line client."""

from __future__ import annotations

import enum
import re
import subprocess
from dataclasses import dataclass

from statusblocks.errors import other_error

_REGIONAL_INDICATOR_A = 0x1F1E6


class VpnState(enum.Enum):
    """Whether the VPN is connected."""

    CONNECTED = "connected"
    DISCONNECTED = "disconnected"
    ERROR = "error"


_ICONS = {
    VpnState.CONNECTED: "net_vpn",
    VpnState.DISCONNECTED: "net_wired",
    VpnState.ERROR: "net_down",
}


@dataclass(frozen=True)
class Status:
    """The VPN status, with the country when connected."""

    state: VpnState
    country: str = ""
    country_flag: str = ""

    def icon(self) -> str:
        """The icon name for this status."""
        return _ICONS[self.state]


_COUNTRY_CODE = re.compile(r"^.*Hostname:\s+([a-z]{2}).*$")


def _country_flag(code: str) -> str:
    if len(code) != 2 or not all("A" <= ch <= "Z" for ch in code):
        return ""
    return "".join(chr(_REGIONAL_INDICATOR_A + ord(ch) - ord("A")) for ch in code)


def _find_line(lines: list[str], needle: str) -> str | None:
    return next((line for line in lines if needle in line), None)


def parse_nordvpn_status(stdout: str) -> Status:
    """Read the status from the output of ``nordvpn status``."""
    lines = stdout.splitlines()
    line_status = _find_line(lines, "Status:")
    if line_status is None:
        return Status(VpnState.ERROR)
    if line_status.endswith("Disconnected"):
        return Status(VpnState.DISCONNECTED)
    if not line_status.endswith("Connected"):
        return Status(VpnState.ERROR)

    line_country = _find_line(lines, "Country:")
    country = line_country.rsplit(": ", 1)[-1] if line_country is not None else ""

    country_flag = ""
    line_host = _find_line(lines, "Hostname:")
    if line_host is not None:
        match = _COUNTRY_CODE.search(line_host)
        if match:
            country_flag = _country_flag(match.group(1).upper())
    return Status(VpnState.CONNECTED, country, country_flag)


class NordVpnDriver:
    """Queries and toggles the connection with the ``nordvpn`` client."""

    def get_status(self) -> Status:
        """Run ``nordvpn status`` and parse what it reports."""
        try:
            completed = subprocess.run(
                ["nordvpn", "status"], capture_output=True, check=False
            )
        except OSError as exc:
            raise other_error("Problem running nordvpn command", exc) from exc
        try:
            stdout = completed.stdout.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise other_error("nordvpn produced non-UTF8 output", exc) from exc
        return parse_nordvpn_status(stdout)

    def toggle_connection(self, status: Status) -> None:
        """Disconnect when connected, connect when disconnected."""
        if status.state is VpnState.CONNECTED:
            self._run_network_command("disconnect")
        elif status.state is VpnState.DISCONNECTED:
            self._run_network_command("connect")

    @staticmethod
    def _run_network_command(arg: str) -> None:
        try:
            subprocess.run(
                ["nordvpn", arg],
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                check=False,
            )
        except OSError as exc:
            raise other_error(f"Problem running nordvpn command: {arg}", exc) from exc