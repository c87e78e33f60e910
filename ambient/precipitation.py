"""Display strings for the weather, location and clock cards."""

from __future__ import annotations

import datetime as dt
import math
from typing import Dict, Optional, Tuple

from ambient.domain import Location, PrecipitationDisplay, WeatherSnapshot
from ambient.solar import parse_local_timestamp

CLEAR_SKY = PrecipitationDisplay(icon="umbrella", label="Sky", value="Clear")


def _format_amount(value: float) -> str:
    """Render a number at its native precision (2.0 -> "2", 0.25 -> "0.25")."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_precipitation(weather: Optional[WeatherSnapshot]) -> PrecipitationDisplay:
    """Snow takes priority over rain; no precipitation shows a clear sky."""
    if weather is None:
        return CLEAR_SKY
    if weather.snowfall is not None and weather.snowfall > 0:
        return PrecipitationDisplay(icon="snowflake", label="Snow", value=f"{_format_amount(weather.snowfall)} mm")
    if weather.rain is not None and weather.rain > 0:
        return PrecipitationDisplay(icon="droplet", label="Rain", value=f"{_format_amount(weather.rain)} mm")
    return CLEAR_SKY


def _round_half_up(val: float) -> int:
    """2.5 -> 3, -2.5 -> -2 (halves go toward +inf, not to even)."""
    return math.floor(val + 0.5)


def _fmt(val, template: str) -> str:
    """Format a rounded value into template or return an empty string."""
    if val is None:
        return ""
    return template.format(_round_half_up(val))


def _fmt_clock(raw: Optional[str]) -> str:
    """HH:MM for a provider timestamp, empty when it does not parse."""
    parsed = parse_local_timestamp(raw)
    return parsed.strftime("%H:%M") if parsed else ""


def format_weather_display(weather: WeatherSnapshot) -> Dict[str, str]:
    """Return the display-friendly strings for the weather card."""
    precip = format_precipitation(weather)
    return {
        "temperature": _fmt(weather.temperature, "{}° C"),
        "humidity": "" if weather.humidity is None else f"{_format_amount(weather.humidity)}%",
        "wind_speed": _fmt(weather.wind_speed, "{} km/h"),
        "cloudiness": "" if weather.cloud_cover is None else f"{_format_amount(weather.cloud_cover)}%",
        "precipitation_icon": precip.icon,
        "precipitation_label": precip.label,
        "precipitation": precip.value,
        "sunrise": _fmt_clock(weather.sunrise),
        "sunset": _fmt_clock(weather.sunset),
    }


def format_location_label(location: Optional[Location]) -> str:
    """City name when known, otherwise the coordinates to two decimals."""
    if location is None:
        return "Unknown"
    if location.city:
        return location.city
    return f"{location.latitude:.2f}°, {location.longitude:.2f}°"


def format_clock(now: dt.datetime) -> Tuple[str, str]:
    """Return ("HH:MM", "Nov 16, 2025") for the clock card."""
    return now.strftime("%H:%M"), f"{now.strftime('%b')} {now.day}, {now.year}"
