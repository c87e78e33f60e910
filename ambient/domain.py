"""Domain vocabulary and schemas for the ambient display context.

This module defines the labels the classifiers produce and the Pydantic models
for the records that flow between the provider clients, the context composer
and the API. No interpretation logic lives here.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict


class _FrozenModel(BaseModel):
    """Base model for read-only value records."""

    model_config = ConfigDict(extra="forbid", frozen=True)


class Season(str, Enum):
    """Northern-hemisphere meteorological season."""
    SPRING = "spring"
    SUMMER = "summer"
    AUTUMN = "autumn"
    WINTER = "winter"


class Holiday(str, Enum):
    """Holiday periods that override the season in photo queries."""
    CHRISTMAS = "christmas"
    NEW_YEAR = "new_year"
    HALLOWEEN = "halloween"
    EASTER = "easter"

    @property
    def query_term(self) -> str:
        """Search term for the holiday ("new_year" -> "new year")."""
        return self.value.replace("_", " ")


class TimeOfDay(str, Enum):
    """Coarse time-of-day bucket derived from sunrise/sunset."""
    DAWN = "dawn"
    DAY = "day"
    DUSK = "dusk"
    NIGHT = "night"


class TimeOfDaySource(str, Enum):
    """Whether a time-of-day label came from solar data or the fallback."""
    FROM_SOLAR_DATA = "from_solar_data"
    FALLBACK = "fallback"


class SolarWindow(_FrozenModel):
    """Today's sunrise and sunset as naive local datetimes."""
    sunrise: datetime
    sunset: datetime


class TimeOfDayReading(_FrozenModel):
    """Time-of-day label with its provenance."""
    time_of_day: TimeOfDay
    source: TimeOfDaySource


class Location(_FrozenModel):
    """Viewer location resolved from the IP geolocation provider."""
    latitude: float
    longitude: float
    city: str | None = None
    country: str | None = None


class WeatherSnapshot(_FrozenModel):
    """Current weather for the viewer's location.

    Sunrise/sunset are kept as the provider's raw local strings so that an
    absent value and an unparsable one stay distinguishable.
    """
    temperature: float | None = None
    humidity: float | None = None
    wind_speed: float | None = None
    cloud_cover: float | None = None
    rain: float | None = None
    snowfall: float | None = None
    sunrise: str | None = None
    sunset: str | None = None
    timezone: str | None = None


class Photo(_FrozenModel):
    """Background photo returned by the photo-search provider."""
    url: str
    author: str
    author_url: str
    download_location: str


class PrecipitationDisplay(_FrozenModel):
    """Icon id, label and value string for the precipitation card."""
    icon: str
    label: str
    value: str


class AmbientContext(_FrozenModel):
    """Contextual labels for the current moment plus the composed photo query."""
    season: Season
    holiday: Holiday | None = None
    time_of_day: TimeOfDay
    time_of_day_source: TimeOfDaySource
    query: str
