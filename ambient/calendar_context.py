"""Season and holiday labels for a calendar date."""

from __future__ import annotations

import datetime as dt
from typing import Optional, Tuple

from ambient.domain import Holiday, Season


def classify_season(month: int) -> Season:
    """Map a month (1-12) to its northern-hemisphere season."""
    if 3 <= month <= 5:
        return Season.SPRING
    if 6 <= month <= 8:
        return Season.SUMMER
    if 9 <= month <= 11:
        return Season.AUTUMN
    return Season.WINTER


def classify_holiday(month: int, day: int) -> Optional[Holiday]:
    """Return the holiday period covering month/day, if any.

    Ranges are checked in priority order and do not overlap:
    christmas Dec 1-26, new year Dec 27-Jan 5, halloween Oct 25-31,
    easter Mar 20-Apr 20 (rough window, the date itself moves).
    """
    if month == 12 and day <= 26:
        return Holiday.CHRISTMAS
    if (month == 12 and day >= 27) or (month == 1 and day <= 5):
        return Holiday.NEW_YEAR
    if month == 10 and day >= 25:
        return Holiday.HALLOWEEN
    if (month == 3 and day >= 20) or (month == 4 and day <= 20):
        return Holiday.EASTER
    return None


def classify_date(date: dt.date) -> Tuple[Season, Optional[Holiday]]:
    """Classify a date (or datetime) into its season and optional holiday."""
    return classify_season(date.month), classify_holiday(date.month, date.day)
