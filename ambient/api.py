"""HTTP API consumed by the ambient display front end."""

from typing import Optional

from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel

from ambient.ambient_service import (
    build_ambient_context,
    local_now,
    resolve_background_photo,
    resolve_location,
    resolve_weather,
)
from ambient.config import settings
from ambient.data_sources import ProviderError, UntrustedUrlError, build_data_source
from ambient.domain import AmbientContext, Location, Photo, WeatherSnapshot
from ambient.freshness import CacheEntry, current_time_ms, describe
from ambient.precipitation import format_clock, format_location_label, format_weather_display
from ambient.snapshot_store import WEATHER_KEY, InMemorySnapshotStore
from ambient.data_sources.sensors import read_cpu_temperature
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="ambient/api")

router = APIRouter()
DATA_SOURCE = build_data_source(settings)
STORE = InMemorySnapshotStore()


class Freshness(BaseModel):
    """Age/validity of a cached snapshot."""
    fresh: bool
    age: str
    remaining: str


class LocationResponse(BaseModel):
    """Resolved location and its display label."""
    location: Location
    label: str


class WeatherDisplay(BaseModel):
    """Display strings for the weather card."""
    temperature: str = ""
    humidity: str = ""
    wind_speed: str = ""
    cloudiness: str = ""
    precipitation_icon: str
    precipitation_label: str
    precipitation: str
    sunrise: str = ""
    sunset: str = ""


class WeatherResponse(BaseModel):
    """Current weather, its display strings and cache freshness."""
    weather: WeatherSnapshot
    display: WeatherDisplay
    freshness: Freshness


class PhotoResponse(BaseModel):
    """Background photo with the query used and cache metadata."""
    photo: Photo
    query: Optional[str] = None
    from_cache: bool
    stale: bool = False
    freshness: Freshness


class DownloadRequest(BaseModel):
    """Photo download_location to report to the provider."""
    download_url: str


class CpuTemperatureResponse(BaseModel):
    """CPU temperature; available is False when the host has no sensor."""
    celsius: float
    available: bool


class ClockResponse(BaseModel):
    """Clock card strings."""
    time: str
    date: str


def _provider_failure(exc: ProviderError) -> HTTPException:
    """Map a provider failure onto a 502 for the caller."""
    logger.error("Provider call failed", extra={"error": str(exc)})
    return HTTPException(status_code=502, detail=str(exc))


def _current_weather(force_refresh: bool = False):
    """Resolve location then weather, translating provider failures."""
    try:
        location = resolve_location(STORE, DATA_SOURCE)
        return resolve_weather(
            STORE,
            DATA_SOURCE,
            location,
            ttl_ms=settings.weather_ttl_seconds * 1000,
            force_refresh=force_refresh,
        )
    except ProviderError as exc:
        raise _provider_failure(exc)


def _weather_or_none() -> Optional[WeatherSnapshot]:
    """Current weather, or None when the providers are unreachable."""
    try:
        location = resolve_location(STORE, DATA_SOURCE)
        return resolve_weather(STORE, DATA_SOURCE, location, ttl_ms=settings.weather_ttl_seconds * 1000).payload
    except ProviderError as exc:
        logger.warning("Weather unavailable; composing context without it", extra={"error": str(exc)})
        return None


@router.get("/location", response_model=LocationResponse)
def get_location():
    """Return the viewer's location."""
    try:
        location = resolve_location(STORE, DATA_SOURCE)
    except ProviderError as exc:
        raise _provider_failure(exc)
    return LocationResponse(location=location, label=format_location_label(location))


@router.get("/weather", response_model=WeatherResponse)
def get_weather(force_refresh: bool = False):
    """Return current weather, refetching once the cached snapshot goes stale."""
    entry = _current_weather(force_refresh)
    report = describe(entry, current_time_ms(), settings.weather_ttl_seconds * 1000)
    return WeatherResponse(
        weather=entry.payload,
        display=WeatherDisplay(**format_weather_display(entry.payload)),
        freshness=Freshness(**vars(report)),
    )


@router.get("/context", response_model=AmbientContext)
def get_context():
    """Return season/holiday/time-of-day labels and a freshly composed query."""
    weather = _weather_or_none()
    return build_ambient_context(local_now(weather.timezone if weather else None), weather)


@router.get("/photo", response_model=PhotoResponse)
def get_photo(
    width: int = Query(default=settings.default_photo_width, gt=0),
    height: int = Query(default=settings.default_photo_height, gt=0),
    force_refresh: bool = False,
):
    """Return the background photo, cached for the photo TTL."""
    ttl_ms = settings.photo_ttl_seconds * 1000
    try:
        result = resolve_background_photo(
            STORE,
            DATA_SOURCE,
            load_weather=_weather_or_none,
            width=width,
            height=height,
            access_key=settings.unsplash_access_key,
            ttl_ms=ttl_ms,
            force_refresh=force_refresh,
        )
    except ProviderError as exc:
        raise _provider_failure(exc)

    report = describe(CacheEntry(payload=result.photo, captured_at_ms=result.captured_at_ms), current_time_ms(), ttl_ms)
    return PhotoResponse(
        photo=result.photo,
        query=result.query,
        from_cache=result.from_cache,
        stale=result.stale,
        freshness=Freshness(**vars(report)),
    )


@router.post("/photo/download", status_code=204)
def trigger_photo_download(req: DownloadRequest):
    """Report a photo download, as required by the photo provider's terms."""
    try:
        DATA_SOURCE.trigger_download(req.download_url, access_key=settings.unsplash_access_key)
    except ProviderError as exc:
        raise _provider_failure(exc)
    except UntrustedUrlError as exc:
        logger.warning("Rejected download URL", extra={"error": str(exc)})
        raise HTTPException(status_code=400, detail=str(exc))


@router.get("/system/cpu-temperature", response_model=CpuTemperatureResponse)
def get_cpu_temperature():
    """Return the CPU temperature (0 / unavailable off Linux)."""
    try:
        celsius = read_cpu_temperature()
    except ProviderError as exc:
        raise _provider_failure(exc)
    return CpuTemperatureResponse(celsius=celsius, available=celsius > 0)


@router.get("/clock", response_model=ClockResponse)
def get_clock():
    """Return the clock card's time and date strings."""
    entry = STORE.get(WEATHER_KEY)
    tz = entry.payload.timezone if entry is not None else None
    time_str, date_str = format_clock(local_now(tz))
    return ClockResponse(time=time_str, date=date_str)
