"""Compose the background-photo search query from the current context.

Term order is relevance order for the photo search, so terms are appended in
a fixed sequence: base (holiday or season), time of day, precipitation,
cloud. The holiday extras are the only random part of the query.
"""

from __future__ import annotations

import datetime as dt
import random
from typing import Dict, List, Optional, Protocol, Sequence, Tuple

from ambient.calendar_context import classify_holiday, classify_season
from ambient.domain import Holiday, SolarWindow, TimeOfDay, WeatherSnapshot
from ambient.solar import classify_time_of_day, parse_solar_window, to_local_naive
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="photo_query")

HOLIDAY_TERM_POOLS: Dict[Holiday, Tuple[str, ...]] = {
    Holiday.CHRISTMAS: (
        "decorated", "tree", "lights", "fireplace", "cozy",
        "festive", "ornaments", "wreath", "gift", "warm",
    ),
    Holiday.NEW_YEAR: (
        "fireworks", "celebration", "champagne", "countdown", "sparklers",
        "confetti", "midnight", "party", "glitter",
    ),
    Holiday.HALLOWEEN: (
        "pumpkin", "spooky", "lantern", "candles", "haunted",
        "foggy", "costume", "moonlit", "autumn",
    ),
    Holiday.EASTER: (
        "eggs", "blossoms", "bunny", "tulips", "pastel",
        "meadow", "daffodils", "spring",
    ),
}
HOLIDAY_EXTRA_TERMS = 2

TIME_OF_DAY_TERMS: Dict[TimeOfDay, str] = {
    TimeOfDay.DAWN: "dawn",
    TimeOfDay.DUSK: "dusk",
    TimeOfDay.NIGHT: "night",
}

CLOUDY_THRESHOLD_PERCENT = 70


class RandomSource(Protocol):
    """Anything that can sample without replacement (random.Random does)."""

    def sample(self, population: Sequence[str], k: int) -> List[str]:
        """Return k distinct elements of population."""
        ...


_default_rng = random.Random()


def _amount(value: Optional[float]) -> float:
    """Missing weather amounts count as zero."""
    return value if value is not None else 0


def holiday_terms(holiday: Holiday, rng: Optional[RandomSource] = None) -> List[str]:
    """Holiday name followed by two distinct words from its pool."""
    pool = HOLIDAY_TERM_POOLS.get(holiday, ())
    k = min(HOLIDAY_EXTRA_TERMS, len(pool))
    extras = list((rng or _default_rng).sample(list(pool), k)) if k else []
    return [holiday.query_term, *extras]


def weather_terms(cloud_cover: Optional[float], rain: Optional[float], snowfall: Optional[float]) -> List[str]:
    """Precipitation term (snow beats rain), else "cloudy" for heavy cover."""
    rain_mm = _amount(rain)
    snow_mm = _amount(snowfall)
    if snow_mm > 0:
        return ["snow"]
    if rain_mm > 0:
        return ["rain"]
    if rain_mm == 0 and snow_mm == 0 and _amount(cloud_cover) >= CLOUDY_THRESHOLD_PERCENT:
        return ["cloudy"]
    return []


def compose_query_terms(
    now: dt.datetime,
    *,
    cloud_cover: Optional[float] = None,
    rain: Optional[float] = None,
    snowfall: Optional[float] = None,
    solar_window: Optional[SolarWindow] = None,
    rng: Optional[RandomSource] = None,
) -> List[str]:
    """Return the ordered search terms for `now` and the given weather."""
    now = to_local_naive(now)
    terms: List[str] = []

    holiday = classify_holiday(now.month, now.day)
    if holiday is not None:
        terms.extend(holiday_terms(holiday, rng))
    else:
        terms.append(classify_season(now.month).value)

    reading = classify_time_of_day(now, solar_window)
    tod_term = TIME_OF_DAY_TERMS.get(reading.time_of_day)
    if tod_term:
        terms.append(tod_term)

    terms.extend(weather_terms(cloud_cover, rain, snowfall))
    return terms


def build_photo_query(
    now: dt.datetime,
    *,
    cloud_cover: Optional[float] = None,
    rain: Optional[float] = None,
    snowfall: Optional[float] = None,
    solar_window: Optional[SolarWindow] = None,
    rng: Optional[RandomSource] = None,
) -> str:
    """Join the composed terms into the photo search query string."""
    terms = compose_query_terms(
        now,
        cloud_cover=cloud_cover,
        rain=rain,
        snowfall=snowfall,
        solar_window=solar_window,
        rng=rng,
    )
    query = " ".join(terms)
    logger.debug("Composed photo query", extra={"query": query})
    return query


def compose_query_for_snapshot(
    now: dt.datetime,
    weather: Optional[WeatherSnapshot],
    rng: Optional[RandomSource] = None,
) -> str:
    """Build the photo query from a weather snapshot (or none at all)."""
    if weather is None:
        return build_photo_query(now, rng=rng)
    return build_photo_query(
        to_local_naive(now, weather.timezone),
        cloud_cover=weather.cloud_cover,
        rain=weather.rain,
        snowfall=weather.snowfall,
        solar_window=parse_solar_window(weather.sunrise, weather.sunset),
        rng=rng,
    )
