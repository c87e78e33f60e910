"""Time-of-day classification from sunrise/sunset.

Dawn and dusk are fixed two-hour windows centred on sunrise and sunset. Day
and night fill whatever is left, so for a normal day the 24 hours split into
four contiguous regions:

    night | dawn [sr-1h, sr+1h) | day [sr+1h, ss-1h) | dusk [ss-1h, ss+1h) | night

When the weather provider gives no usable sunrise/sunset the classifier
answers "night" with a fallback provenance. This is deliberately simple: no
hour-of-day guess is attempted, which biases the photo towards night imagery
when solar data is missing.
"""

from __future__ import annotations

import datetime as dt
import re
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ambient.domain import SolarWindow, TimeOfDay, TimeOfDayReading, TimeOfDaySource, WeatherSnapshot
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="solar")

TWILIGHT_MARGIN = dt.timedelta(hours=1)

# Open-Meteo returns local times without an offset when timezone=auto.
_LOCAL_TIMESTAMP_RE = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}(:\d{2})?$")
_LOCAL_TIMESTAMP_FORMATS = ("%Y-%m-%dT%H:%M:%S", "%Y-%m-%dT%H:%M")

FALLBACK_READING = TimeOfDayReading(time_of_day=TimeOfDay.NIGHT, source=TimeOfDaySource.FALLBACK)


def parse_local_timestamp(raw: Optional[str]) -> Optional[dt.datetime]:
    """Parse `YYYY-MM-DDTHH:MM[:SS]` as a naive local datetime, or return None."""
    if not isinstance(raw, str):
        return None
    value = raw.strip()
    if not _LOCAL_TIMESTAMP_RE.match(value):
        return None
    fmt = _LOCAL_TIMESTAMP_FORMATS[0] if value.count(":") == 2 else _LOCAL_TIMESTAMP_FORMATS[1]
    try:
        return dt.datetime.strptime(value, fmt)
    except ValueError:
        # well-formed but impossible, e.g. 2024-02-30T06:00
        return None


def parse_solar_window(sunrise_raw: Optional[str], sunset_raw: Optional[str]) -> Optional[SolarWindow]:
    """Build a SolarWindow from raw provider strings; None if either is unusable."""
    sunrise = parse_local_timestamp(sunrise_raw)
    sunset = parse_local_timestamp(sunset_raw)
    if sunrise is None or sunset is None:
        if sunrise_raw is not None or sunset_raw is not None:
            logger.debug(
                "Unparsable sunrise/sunset; solar window unavailable",
                extra={"sunrise": sunrise_raw, "sunset": sunset_raw},
            )
        return None
    return SolarWindow(sunrise=sunrise, sunset=sunset)


def _shift(moment: dt.datetime, delta: dt.timedelta) -> dt.datetime:
    """Add delta to moment, clamping to the datetime range instead of overflowing."""
    try:
        return moment + delta
    except OverflowError:
        bound = dt.datetime.max if delta > dt.timedelta(0) else dt.datetime.min
        return bound.replace(tzinfo=moment.tzinfo)


def to_local_naive(now: dt.datetime, timezone: Optional[str] = None) -> dt.datetime:
    """Express `now` as a naive wall-clock time comparable with provider timestamps.

    Naive datetimes are already local. Aware ones are converted into
    `timezone` when it names a real zone; otherwise their own wall-clock
    reading is used.
    """
    if now.tzinfo is None:
        return now
    if timezone:
        try:
            return now.astimezone(ZoneInfo(timezone)).replace(tzinfo=None)
        except (ZoneInfoNotFoundError, ValueError, OverflowError):
            logger.debug("Unknown timezone; using the instant's own offset", extra={"timezone": timezone})
    return now.replace(tzinfo=None)


def classify_time_of_day(now: dt.datetime, solar_window: Optional[SolarWindow]) -> TimeOfDayReading:
    """Classify `now` (naive local) against the solar window.

    Dawn is checked before dusk, and both before day, so overlapping windows on
    very short days or nights resolve to dawn/dusk.
    """
    if solar_window is None:
        return FALLBACK_READING

    now = to_local_naive(now)
    dawn_start = _shift(solar_window.sunrise, -TWILIGHT_MARGIN)
    dawn_end = _shift(solar_window.sunrise, TWILIGHT_MARGIN)
    dusk_start = _shift(solar_window.sunset, -TWILIGHT_MARGIN)
    dusk_end = _shift(solar_window.sunset, TWILIGHT_MARGIN)

    if dawn_start <= now < dawn_end:
        label = TimeOfDay.DAWN
    elif dusk_start <= now < dusk_end:
        label = TimeOfDay.DUSK
    elif dawn_end <= now < dusk_start:
        label = TimeOfDay.DAY
    else:
        label = TimeOfDay.NIGHT
    return TimeOfDayReading(time_of_day=label, source=TimeOfDaySource.FROM_SOLAR_DATA)


def classify_snapshot_time_of_day(now: dt.datetime, weather: Optional[WeatherSnapshot]) -> TimeOfDayReading:
    """Classify `now` using the sunrise/sunset carried by a weather snapshot."""
    if weather is None:
        return FALLBACK_READING
    window = parse_solar_window(weather.sunrise, weather.sunset)
    return classify_time_of_day(to_local_naive(now, weather.timezone), window)
