"""Approximate viewer location from the ip-api.com geolocation service."""
from __future__ import annotations

import requests

from ambient.config import settings
from ambient.data_sources.base import ProviderError
from ambient.data_sources.session import build_cached_session
from ambient.domain import Location
from utils.logging_utils import get_tagged_logger
logger = get_tagged_logger(__name__, tag="ip_api_client")

session = build_cached_session()


def fetch_location(*, url: str | None = None) -> Location:
    """Resolve the caller's public IP to coordinates and, when known, city/country."""
    try:
        resp = session.get(url or settings.location_url, timeout=settings.request_timeout_seconds)
        resp.raise_for_status()
    except requests.RequestException as exc:
        raise ProviderError(f"Failed to fetch location: {exc}") from exc

    try:
        data = resp.json()
        location = Location(
            latitude=float(data["lat"]),
            longitude=float(data["lon"]),
            city=data.get("city") or None,
            country=data.get("country") or None,
        )
    except (ValueError, KeyError, TypeError) as exc:
        raise ProviderError(f"Failed to parse location data: {exc}") from exc

    logger.info("Resolved location", extra={"city": location.city, "country": location.country})
    return location
