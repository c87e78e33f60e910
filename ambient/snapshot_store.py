"""In-memory snapshot store for the cached location, weather and photo."""

import threading
from typing import Optional

from ambient.freshness import CacheEntry
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="snapshot_store")

LOCATION_KEY = "location"
WEATHER_KEY = "weather"
PHOTO_KEY = "photo"


class InMemorySnapshotStore:
    """Thread-safe key -> CacheEntry map; contents do not survive a restart."""

    def __init__(self) -> None:
        """Initialize an empty store."""
        logger.debug("Initializing InMemorySnapshotStore")
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[CacheEntry]:
        """Return the entry for key, or None."""
        with self._lock:
            return self._entries.get(key)

    def put(self, key: str, entry: CacheEntry) -> None:
        """Store or replace the entry for key."""
        with self._lock:
            self._entries[key] = entry

    def delete(self, key: str) -> None:
        """Remove an entry if it exists."""
        with self._lock:
            self._entries.pop(key, None)

    def clear(self) -> None:
        """Clear all entries."""
        with self._lock:
            self._entries.clear()
