"""Shared HTTP sessions for the provider clients."""
from __future__ import annotations

import requests
import requests_cache
from retry_requests import retry

from ambient.config import settings
from utils.logging_utils import get_tagged_logger
logger = get_tagged_logger(__name__, tag="data_sources/session")


def build_cached_session(cache_path: str | None = None, expire_after: int | None = None) -> requests.Session:
    """Cached, retrying session for location and weather lookups."""
    cache_session = requests_cache.CachedSession(
        cache_path or settings.request_cache_path,
        expire_after=expire_after if expire_after is not None else settings.request_cache_expire_seconds,
    )
    logger.info("Using requests_cache and retry_requests", extra={"cache_path": cache_path or settings.request_cache_path})
    return retry(cache_session, retries=5, backoff_factor=0.2)


def build_uncached_session() -> requests.Session:
    """Retrying session without a response cache (random photo endpoints)."""
    return retry(requests.Session(), retries=5, backoff_factor=0.2)
