"""Interfaces and helpers for the ambient display's external providers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Protocol

from ambient.domain import Location, Photo, WeatherSnapshot


class ProviderError(RuntimeError):
    """A provider call failed (network, HTTP status or undecodable payload)."""


class UntrustedUrlError(ValueError):
    """A caller-supplied URL does not point at the provider it claims to."""


class AmbientDataSource(Protocol):
    """Interface for anything that can provide location, weather and photos."""

    def fetch_location(self) -> Location:
        """Return the viewer's approximate location."""
        ...

    def fetch_weather(self, latitude: float, longitude: float, *, timezone: str = "auto") -> WeatherSnapshot:
        """Return the current weather snapshot."""
        ...

    def fetch_photo(self, width: int, height: int, query: str, *, access_key: str) -> Photo:
        """Return a random photo matching query, sized to width x height."""
        ...

    def trigger_download(self, download_url: str, *, access_key: str) -> None:
        """Report a photo download to the photo provider."""
        ...


@dataclass
class CallableAmbientDataSource(AmbientDataSource):
    """Wrap four callables so they can be swapped for different backends."""

    location: Callable[..., Location]
    weather: Callable[..., WeatherSnapshot]
    photo: Callable[..., Photo]
    download: Callable[..., None]

    def fetch_location(self, *args, **kwargs) -> Location:
        """Delegate to the configured location callable."""
        return self.location(*args, **kwargs)

    def fetch_weather(self, *args, **kwargs) -> WeatherSnapshot:
        """Delegate to the configured weather callable."""
        return self.weather(*args, **kwargs)

    def fetch_photo(self, *args, **kwargs) -> Photo:
        """Delegate to the configured photo callable."""
        return self.photo(*args, **kwargs)

    def trigger_download(self, *args, **kwargs) -> None:
        """Delegate to the configured download-trigger callable."""
        return self.download(*args, **kwargs)
