"""Weather from the met.no location forecast service."""

from __future__ import annotations

import enum
import json
import urllib.error
import urllib.parse
import urllib.request
from collections.abc import Mapping
from typing import Any

from statusblocks.errors import other_error
from statusblocks.weather import (
    Coordinates,
    WeatherIcon,
    WeatherResult,
    australian_apparent_temp,
    convert_wind_direction,
)

LEGENDS_URL = "https://api.met.no/weatherapi/weathericon/2.0/legends"
FORECAST_URL = "https://api.met.no/weatherapi/locationforecast/2.0/compact"
_TIMEOUT = 30.0
_USER_AGENT = "statusblocks"


class ApiLanguage(enum.Enum):
    """Languages met.no describes the weather in."""

    ENGLISH = "en"
    NORWEGIAN_NYNORSK = "nn"
    NORWEGIAN_BOKMAAL = "nb"


_DESCRIPTION_KEYS = {
    ApiLanguage.ENGLISH: "desc_en",
    ApiLanguage.NORWEGIAN_NYNORSK: "desc_nn",
    ApiLanguage.NORWEGIAN_BOKMAAL: "desc_nb",
}

_CLOUDS = {"cloudy", "partlycloudy", "fair", "fog"}
_RAIN = {
    "heavyrain",
    "heavyrainshowers",
    "lightrain",
    "lightrainshowers",
    "rain",
    "rainshowers",
}
_THUNDER = {
    "rainandthunder",
    "heavyrainandthunder",
    "rainshowersandthunder",
    "sleetandthunder",
    "sleetshowersandthunder",
    "snowandthunder",
    "snowshowersandthunder",
    "heavyrainshowersandthunder",
    "heavysleetandthunder",
    "heavysleetshowersandthunder",
    "heavysnowandthunder",
    "heavysnowshowersandthunder",
    "lightsleetandthunder",
    "lightrainandthunder",
    "lightsnowandthunder",
    "lightssleetshowersandthunder",
    "lightssnowshowersandthunder",
    "lightrainshowersandthunder",
}
_SNOW = {
    "heavysleet",
    "heavysleetshowers",
    "heavysnow",
    "heavysnowshowers",
    "lightsleet",
    "lightsleetshowers",
    "lightsnow",
    "lightsnowshowers",
    "sleet",
    "sleetshowers",
    "snow",
    "snowshowers",
}


def weather_to_icon(weather: str) -> WeatherIcon:
    """Map a met.no symbol name to an icon category."""
    if weather in _CLOUDS:
        return WeatherIcon.CLOUDS
    if weather == "clearsky":
        return WeatherIcon.SUN
    if weather in _RAIN:
        return WeatherIcon.RAIN
    if weather in _THUNDER:
        return WeatherIcon.THUNDER
    if weather in _SNOW:
        return WeatherIcon.SNOW
    return WeatherIcon.DEFAULT


def translate(
    legend: Mapping[str, Mapping[str, str]], summary: str, lang: ApiLanguage
) -> str:
    """Describe a symbol in ``lang``, falling back to the symbol itself."""
    entry = legend.get(summary)
    if entry is None:
        return summary
    return entry[_DESCRIPTION_KEYS[lang]]


def _number(details: Mapping[str, Any], key: str) -> float | None:
    value = details.get(key)
    if value is None:
        return None
    return float(value)


def parse_forecast(
    data: Mapping[str, Any],
    legend: Mapping[str, Mapping[str, str]],
    lang: ApiLanguage = ApiLanguage.ENGLISH,
) -> WeatherResult:
    """Build a weather result from the first step of a forecast response."""
    try:
        first = data["properties"]["timeseries"][0]["data"]
        details = first["instant"]["details"]
        symbol_code = first["next_1_hours"]["summary"]["symbol_code"]
    except (KeyError, IndexError, TypeError) as exc:
        raise other_error("Forecast request failed", exc) from exc

    summary = symbol_code.split("_")[0]
    translated = translate(legend, summary, lang)

    temp = _number(details, "air_temperature") or 0.0
    humidity = _number(details, "relative_humidity") or 0.0
    wind_speed = _number(details, "wind_speed") or 0.0

    return WeatherResult(
        location="Unknown",
        temp=temp,
        apparent=australian_apparent_temp(temp, humidity, wind_speed),
        humidity=humidity,
        weather=translated,
        weather_verbose=translated,
        wind=wind_speed,
        wind_kmh=wind_speed * 3.6,
        wind_direction=convert_wind_direction(_number(details, "wind_from_direction")),
        icon=weather_to_icon(summary),
    )


def _get_json(url: str, failure: str, parse_failure: str) -> Any:
    request = urllib.request.Request(
        url,
        headers={"User-Agent": _USER_AGENT, "Content-Type": "application/json"},
    )
    try:
        with urllib.request.urlopen(request, timeout=_TIMEOUT) as response:
            body = response.read()
    except (urllib.error.URLError, OSError) as exc:
        raise other_error(failure, exc) from exc
    try:
        return json.loads(body)
    except (ValueError, UnicodeDecodeError) as exc:
        raise other_error(parse_failure, exc) from exc


def _fetch_legend() -> dict[str, dict[str, str]]:
    legend = _get_json(
        LEGENDS_URL,
        "Failed to fetch legend from met.no",
        "Legend replied in unknown format",
    )
    if not isinstance(legend, dict):
        raise other_error("Legend replied in unknown format")
    return legend


def _coordinate_text(value: float) -> str:
    text = repr(float(value))
    return text[:-2] if text.endswith(".0") else text


class MetNoService:
    """A weather provider backed by met.no."""

    def __init__(
        self,
        coordinates: tuple[str, str] | None = None,
        altitude: str | None = None,
        lang: ApiLanguage = ApiLanguage.ENGLISH,
        legend: Mapping[str, Mapping[str, str]] | None = None,
    ) -> None:
        self.coordinates = coordinates
        self.altitude = altitude
        self.lang = lang
        self.legend = _fetch_legend() if legend is None else legend

    def get_weather(self, location: Coordinates | None = None) -> WeatherResult:
        """Fetch the current forecast for ``location`` or the configured coordinates."""
        if location is not None:
            lat, lon = _coordinate_text(location.latitude), _coordinate_text(location.longitude)
        elif self.coordinates is not None:
            lat, lon = self.coordinates
        else:
            raise other_error("No location given")

        query = {"lat": lat, "lon": lon}
        if self.altitude is not None:
            query["altitude"] = self.altitude
        url = f"{FORECAST_URL}?{urllib.parse.urlencode(query)}"
        data = _get_json(url, "Forecast request failed", "Forecast request failed")
        return parse_forecast(data, self.legend, self.lang)