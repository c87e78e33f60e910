"""Tie the providers, the snapshot store and the context composer together.

Each resolve_* helper consults the snapshot store first and only calls the
provider when nothing usable is cached. Freshness is judged by
`ambient.freshness`; the providers themselves never cache or retry here.
"""
from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Callable, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ambient.calendar_context import classify_holiday, classify_season
from ambient.data_sources.base import AmbientDataSource, ProviderError
from ambient.domain import AmbientContext, Location, Photo, WeatherSnapshot
from ambient.freshness import DEFAULT_TTL_MS, CacheEntry, current_time_ms, is_fresh
from ambient.photo_query import RandomSource, compose_query_for_snapshot
from ambient.snapshot_store import LOCATION_KEY, PHOTO_KEY, WEATHER_KEY, InMemorySnapshotStore
from ambient.solar import classify_snapshot_time_of_day, to_local_naive
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="ambient_service")


@dataclass
class PhotoResult:
    """Photo to display plus how it was obtained."""
    photo: Photo
    query: Optional[str]
    captured_at_ms: int
    from_cache: bool
    stale: bool = False


def local_now(timezone: Optional[str] = None) -> dt.datetime:
    """Current time in the viewer's zone (system local time when unknown)."""
    if timezone:
        try:
            return dt.datetime.now(ZoneInfo(timezone))
        except (ZoneInfoNotFoundError, ValueError):
            logger.debug("Unknown timezone; falling back to system local time", extra={"timezone": timezone})
    return dt.datetime.now().astimezone()


def build_ambient_context(
    now: dt.datetime,
    weather: Optional[WeatherSnapshot],
    rng: Optional[RandomSource] = None,
) -> AmbientContext:
    """Classify the moment and compose the matching photo query."""
    local = to_local_naive(now, weather.timezone if weather else None)
    reading = classify_snapshot_time_of_day(now, weather)
    return AmbientContext(
        season=classify_season(local.month),
        holiday=classify_holiday(local.month, local.day),
        time_of_day=reading.time_of_day,
        time_of_day_source=reading.source,
        query=compose_query_for_snapshot(now, weather, rng),
    )


def resolve_location(store: InMemorySnapshotStore, data_source: AmbientDataSource) -> Location:
    """Look the location up once per process and reuse it afterwards."""
    entry = store.get(LOCATION_KEY)
    if entry is not None:
        return entry.payload
    location = data_source.fetch_location()
    store.put(LOCATION_KEY, CacheEntry(payload=location, captured_at_ms=current_time_ms()))
    return location


def resolve_weather(
    store: InMemorySnapshotStore,
    data_source: AmbientDataSource,
    location: Location,
    *,
    ttl_ms: int = DEFAULT_TTL_MS,
    force_refresh: bool = False,
    now_ms: Optional[int] = None,
) -> CacheEntry:
    """Return a cached weather entry while fresh, otherwise fetch a new one."""
    now_ms = current_time_ms() if now_ms is None else now_ms
    entry = store.get(WEATHER_KEY)
    if entry is not None and not force_refresh and is_fresh(entry.captured_at_ms, now_ms, ttl_ms):
        logger.debug("Using cached weather")
        return entry

    weather = data_source.fetch_weather(location.latitude, location.longitude, timezone="auto")
    entry = CacheEntry(payload=weather, captured_at_ms=now_ms)
    store.put(WEATHER_KEY, entry)
    logger.info("Fetched weather", extra={"latitude": location.latitude, "longitude": location.longitude})
    return entry


def resolve_background_photo(
    store: InMemorySnapshotStore,
    data_source: AmbientDataSource,
    weather: Optional[WeatherSnapshot] = None,
    *,
    width: int,
    height: int,
    access_key: str,
    ttl_ms: int = DEFAULT_TTL_MS,
    force_refresh: bool = False,
    now: Optional[dt.datetime] = None,
    now_ms: Optional[int] = None,
    rng: Optional[RandomSource] = None,
    load_weather: Optional[Callable[[], Optional[WeatherSnapshot]]] = None,
) -> PhotoResult:
    """Return the background photo, reusing a fresh cached one when allowed.

    If the provider fails, any cached photo (fresh or not) is returned instead
    and only a cold cache lets the ProviderError propagate.

    `load_weather` is only called when a new query has to be composed and
    no `weather` was passed.
    """
    now_ms = current_time_ms() if now_ms is None else now_ms
    cached = store.get(PHOTO_KEY)
    if cached is not None and not force_refresh and is_fresh(cached.captured_at_ms, now_ms, ttl_ms):
        logger.info("Using cached photo")
        return PhotoResult(photo=cached.payload, query=cached.query,
                           captured_at_ms=cached.captured_at_ms, from_cache=True)

    if weather is None and load_weather is not None:
        weather = load_weather()
    now = now or local_now(weather.timezone if weather else None)
    query = compose_query_for_snapshot(now, weather, rng)
    logger.info(f"Fetching new photo for {width}x{height} with query: \"{query}\"")

    try:
        photo = data_source.fetch_photo(width, height, query, access_key=access_key)
    except ProviderError as exc:
        if cached is None:
            raise
        logger.warning("Photo fetch failed; using cached photo as fallback", extra={"error": str(exc)})
        return PhotoResult(photo=cached.payload, query=cached.query, captured_at_ms=cached.captured_at_ms,
                           from_cache=True, stale=not is_fresh(cached.captured_at_ms, now_ms, ttl_ms))

    store.put(PHOTO_KEY, CacheEntry(payload=photo, captured_at_ms=now_ms, query=query))
    return PhotoResult(photo=photo, query=query, captured_at_ms=now_ms, from_cache=False)
