"""Random background photos and download reporting via the Unsplash API."""
from __future__ import annotations

from urllib.parse import urlparse

import requests

from ambient.config import settings
from ambient.data_sources.base import ProviderError, UntrustedUrlError
from ambient.data_sources.session import build_uncached_session
from ambient.domain import Photo
from utils.logging_utils import get_tagged_logger, mask_url

logger = get_tagged_logger(__name__, tag="unsplash_client")

# The random endpoint must not be served from a response cache.
session = build_uncached_session()


def _auth_headers(access_key: str) -> dict:
    """Authorization header for Unsplash public (Client-ID) access."""
    return {"Authorization": f"Client-ID {access_key}"}


def sized_photo_url(regular_url: str, width: int, height: int) -> str:
    """Ask the image CDN for a crop matching the display exactly."""
    return f"{regular_url}?w={width}&h={height}&fit=crop&q=85"


def parse_photo_payload(data: dict, width: int, height: int) -> Photo:
    """Extract the fields the display needs from a photos/random response."""
    return Photo(
        url=sized_photo_url(data["urls"]["regular"], width, height),
        author=data["user"]["name"],
        author_url=data["user"]["links"]["html"],
        download_location=data["links"]["download_location"],
    )


def fetch_random_photo(width: int, height: int, query: str, *, access_key: str | None = None) -> Photo:
    """Fetch one random landscape photo matching query."""
    params = {
        "orientation": "landscape",
        "query": query,
        "w": width,
        "h": height,
    }
    url = f"{settings.unsplash_base_url}/photos/random"
    logger.info("Fetching Unsplash photo", extra={"width": width, "height": height, "query": query})

    try:
        resp = session.get(
            url,
            params=params,
            headers=_auth_headers(access_key or settings.unsplash_access_key),
            timeout=settings.request_timeout_seconds,
        )
        resp.raise_for_status()
    except requests.RequestException as exc:
        raise ProviderError(f"Failed to fetch photo: {exc}") from exc

    try:
        return parse_photo_payload(resp.json(), width, height)
    except (ValueError, KeyError, TypeError) as exc:
        raise ProviderError(f"Failed to parse photo data: {exc}") from exc


def _check_download_url(download_url: str) -> None:
    """Only the configured API origin may receive the access key."""
    expected = urlparse(settings.unsplash_base_url)
    actual = urlparse(download_url)
    if (actual.scheme, actual.netloc) != (expected.scheme, expected.netloc):
        raise UntrustedUrlError(f"Download URL must start with {expected.scheme}://{expected.netloc}")


def trigger_download(download_url: str, *, access_key: str | None = None) -> None:
    """Hit the photo's download_location, as the Unsplash API guidelines require.

    Raises UntrustedUrlError (before any request) when the URL is not on the
    configured API origin. A non-2xx answer raises ProviderError.
    """
    _check_download_url(download_url)
    try:
        resp = session.get(
            download_url,
            headers=_auth_headers(access_key or settings.unsplash_access_key),
            timeout=settings.request_timeout_seconds,
        )
        resp.raise_for_status()
    except requests.RequestException as exc:
        raise ProviderError(f"Failed to trigger download: {exc}") from exc
    logger.debug("Triggered Unsplash download", extra={"download_url": mask_url(download_url)})
