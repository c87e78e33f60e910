"""Local hardware sensors shown on the display (CPU temperature)."""
from __future__ import annotations

import sys
from pathlib import Path

from ambient.config import settings
from ambient.data_sources.base import ProviderError
from utils.logging_utils import get_tagged_logger
logger = get_tagged_logger(__name__, tag="sensors")


def read_cpu_temperature(path: str | None = None) -> float:
    """CPU temperature in Celsius from a Linux thermal zone.

    Returns 0.0 when no thermal zone is available (non-Linux hosts, boards
    without the sensor), which the display treats as "hide the card".
    """
    if not sys.platform.startswith("linux"):
        return 0.0
    zone = Path(path or settings.cpu_thermal_path)
    try:
        raw = zone.read_text()
    except OSError:
        logger.debug("Thermal zone not readable", extra={"path": str(zone)})
        return 0.0
    try:
        millidegrees = int(raw.strip())
    except ValueError as exc:
        raise ProviderError(f"Failed to parse temperature: {exc}") from exc
    return millidegrees / 1000.0
