"""Current weather: shared result type, wind and temperature helpers, IP location."""

from __future__ import annotations

import enum
import json
import math
import urllib.error
import urllib.request
from dataclasses import dataclass
from typing import Any

from statusblocks.errors import BlockError, ErrorKind, other_error

IP_API_URL = "https://ipapi.co/json"
_TIMEOUT = 30.0
_USER_AGENT = "statusblocks"


class WeatherIcon(enum.Enum):
    """Icon categories for weather conditions, valued by their icon names."""

    SUN = "weather_sun"
    RAIN = "weather_rain"
    CLOUDS = "weather_clouds"
    THUNDER = "weather_thunder"
    SNOW = "weather_snow"
    DEFAULT = "weather_default"


class UnitSystem(enum.Enum):
    """The unit system a weather service reports in."""

    METRIC = "metric"
    IMPERIAL = "imperial"


@dataclass(frozen=True)
class Coordinates:
    """A geographic position in decimal degrees."""

    latitude: float
    longitude: float


@dataclass(frozen=True)
class WeatherResult:
    """Weather data as returned by a provider."""

    location: str
    temp: float
    apparent: float
    humidity: float
    weather: str
    weather_verbose: str
    wind: float
    wind_kmh: float
    wind_direction: str
    icon: WeatherIcon

    def to_values(self) -> dict[str, Any]:
        """The placeholder values the block's format is rendered with."""
        return {
            "icon": self.icon.value,
            "location": self.location,
            "temp": self.temp,
            "apparent": self.apparent,
            "humidity": self.humidity,
            "weather": self.weather,
            "weather_verbose": self.weather_verbose,
            "wind": self.wind,
            "wind_kmh": self.wind_kmh,
            "direction": self.wind_direction,
        }


def _round_half_away(value: float) -> int:
    if math.isnan(value):
        return 0
    if math.isinf(value):
        return 0
    magnitude = math.floor(abs(value) + 0.5)
    return int(-magnitude if value < 0 else magnitude)


def convert_wind_direction(direction: float | None) -> str:
    """Abbreviate an azimuth in degrees as a compass direction."""
    if direction is None:
        return "-"
    degrees = _round_half_away(direction)
    if 24 <= degrees <= 68:
        return "NE"
    if 69 <= degrees <= 113:
        return "E"
    if 114 <= degrees <= 158:
        return "SE"
    if 159 <= degrees <= 203:
        return "S"
    if 204 <= degrees <= 248:
        return "SW"
    if 249 <= degrees <= 293:
        return "W"
    if 294 <= degrees <= 338:
        return "NW"
    return "N"


def australian_apparent_temp(temp: float, humidity: float, wind_speed: float) -> float:
    """Compute the Australian Apparent Temperature from metric units."""
    exponent = 17.27 * temp / (237.7 + temp)
    water_vapor_pressure = humidity * 0.06105 * math.exp(exponent)
    return temp + 0.33 * water_vapor_pressure - 0.7 * wind_speed - 4.0


def _as_float(value: Any) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)


def parse_ip_location(data: Any) -> Coordinates:
    """Read coordinates from an ipapi.co response, raising on API errors."""
    failure = "Failed while parsing location API result"
    if not isinstance(data, dict):
        raise other_error(failure)
    if data.get("error", False) is True:
        reason = data.get("reason")
        cause = reason if isinstance(reason, str) else "Unknown Error"
        raise BlockError("ipapi.co error", ErrorKind.OTHER, cause)
    latitude = _as_float(data.get("latitude"))
    longitude = _as_float(data.get("longitude"))
    if latitude is None or longitude is None:
        raise other_error(failure)
    return Coordinates(latitude, longitude)


def find_ip_location() -> Coordinates:
    """Locate this machine through the ipapi.co service."""
    request = urllib.request.Request(IP_API_URL, headers={"User-Agent": _USER_AGENT})
    try:
        with urllib.request.urlopen(request, timeout=_TIMEOUT) as response:
            body = response.read()
    except (urllib.error.URLError, OSError) as exc:
        raise other_error("Failed during request for current location", exc) from exc
    try:
        data = json.loads(body)
    except (ValueError, UnicodeDecodeError) as exc:
        raise other_error("Failed while parsing location API result", exc) from exc
    return parse_ip_location(data)