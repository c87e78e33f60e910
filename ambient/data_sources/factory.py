"""Factory helpers for choosing the provider backend at startup."""

from __future__ import annotations

from ambient import config
from ambient.data_sources.base import AmbientDataSource, CallableAmbientDataSource
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="data_sources/factory")


DEFAULT_SOURCE_NAME = "live"


def build_data_source(settings: config.Settings | None = None) -> AmbientDataSource:
    """Instantiate the configured data source."""
    settings = settings or config.settings
    source = (settings.data_source or DEFAULT_SOURCE_NAME).lower()

    if source == "live":
        from .ip_api_client import fetch_location
        from .open_meteo_client import fetch_weather_snapshot
        from .unsplash_client import fetch_random_photo, trigger_download

        logger.info("Using live ip-api / Open-Meteo / Unsplash data source")
        return CallableAmbientDataSource(
            location=fetch_location,
            weather=fetch_weather_snapshot,
            photo=fetch_random_photo,
            download=trigger_download,
        )

    raise ValueError(f"Unknown data source '{source}'")
