"""Helpers for fetching current weather and today's sun times from Open-Meteo."""
from __future__ import annotations

from typing import Optional

import requests

from ambient.config import settings
from ambient.data_sources.base import ProviderError
from ambient.data_sources.session import build_cached_session
from ambient.domain import WeatherSnapshot
from utils.logging_utils import get_tagged_logger
logger = get_tagged_logger(__name__, tag="open_meteo_client")

session = build_cached_session()

CURRENT_VARS = ["temperature_2m", "relative_humidity_2m", "rain", "snowfall", "cloudcover", "wind_speed_10m"]
DAILY_VARS = ["sunrise", "sunset"]

EXPECTED_UNITS = {
    "temperature_2m": "°C",
    "relative_humidity_2m": "%",
    "rain": "mm",
    "snowfall": "cm",
    "cloudcover": "%",
    "wind_speed_10m": "km/h",
}

# Acceptable alternative units that should not trigger warnings (API/localized differences).
ALLOWED_UNIT_SYNONYMS = {
    "temperature_2m": {"°C"},
    "relative_humidity_2m": {"%", "percent"},
    "rain": {"mm"},
    "snowfall": {"cm", "mm"},
    "cloudcover": {"%", "percent"},
    "wind_speed_10m": {"km/h", "kmh"},
}


def _warn_on_unexpected_units(units: dict, *, context: str):
    """Log a warning if Open-Meteo returns units we did not request/expect."""
    if not units:
        return
    for field, expected in EXPECTED_UNITS.items():
        actual = units.get(field)
        if actual and actual != expected and actual not in ALLOWED_UNIT_SYNONYMS.get(field, set()):
            logger.warning(
                "Unexpected Open-Meteo unit",
                extra={"context": context, "field": field, "unit": actual, "expected": expected},
            )


def _first(values) -> Optional[str]:
    """First element of a daily series, or None."""
    if isinstance(values, list) and values:
        return values[0]
    return None


def parse_weather_payload(data: dict) -> WeatherSnapshot:
    """Turn an Open-Meteo forecast response into a WeatherSnapshot.

    Only `current` is required; missing fields stay None, which downstream
    code reads as "no precipitation" and "unknown solar window".
    """
    current = data["current"]
    _warn_on_unexpected_units(data.get("current_units") or {}, context="weather_current")
    daily = data.get("daily") or {}
    return WeatherSnapshot(
        temperature=current.get("temperature_2m"),
        humidity=current.get("relative_humidity_2m"),
        wind_speed=current.get("wind_speed_10m"),
        cloud_cover=current.get("cloudcover", current.get("cloud_cover")),
        rain=current.get("rain"),
        snowfall=current.get("snowfall"),
        sunrise=_first(daily.get("sunrise")),
        sunset=_first(daily.get("sunset")),
        timezone=data.get("timezone"),
    )


def fetch_weather_snapshot(latitude: float, longitude: float, *, timezone: str = "auto") -> WeatherSnapshot:
    """Fetch current conditions plus today's sunrise/sunset for the coordinates."""
    params = {
        "latitude": latitude,
        "longitude": longitude,
        "current": ",".join(CURRENT_VARS),
        "daily": ",".join(DAILY_VARS),
        "timezone": timezone,
    }

    try:
        resp = session.get(settings.open_meteo_url, params=params, timeout=settings.request_timeout_seconds)
        resp.raise_for_status()
    except requests.RequestException as exc:
        raise ProviderError(f"Failed to fetch weather: {exc}") from exc

    try:
        snapshot = parse_weather_payload(resp.json())
    except (ValueError, KeyError, TypeError) as exc:
        raise ProviderError(f"Failed to parse weather data: {exc}") from exc

    logger.debug("Fetched weather snapshot", extra={"timezone": snapshot.timezone})
    return snapshot
