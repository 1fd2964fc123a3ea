import logging
import threading
import time
from typing import Callable, Dict, List, Optional

from weedclient.common.interfaces import ILookupCache
from weedclient.models.schemas import Location

logger = logging.getLogger(__name__)


class TimeBasedLookupCache(ILookupCache):
    """Volume location cache whose entries go stale after ``ttl_seconds``.

    An entry is fresh while less than ``ttl_seconds`` have passed since it was
    last populated; at exactly ``ttl_seconds`` it is stale. ``lookup`` checks
    and evicts under one lock shared by all volume ids. ``set_location`` does
    not take that lock: it only ever replaces an entry with a fresher one.
    """

    def __init__(
        self, ttl_seconds: float, clock: Callable[[], float] = time.monotonic
    ):
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._lock = threading.Lock()
        self._cache: Dict[int, List[Location]] = {}
        self._populated_at: Dict[int, float] = {}

    def invalidate(self, volume_id: Optional[int] = None) -> None:
        if volume_id is None:
            self._cache = {}
            self._populated_at = {}
            logger.debug("Invalidated all cached volume locations")
        else:
            self._cache.pop(volume_id, None)
            self._populated_at.pop(volume_id, None)

    def lookup(self, volume_id: int) -> Optional[List[Location]]:
        with self._lock:
            populated_at = self._populated_at.get(volume_id)
            if populated_at is None:
                return None

            elapsed = self._clock() - populated_at
            if elapsed < self.ttl_seconds:
                locations = self._cache.get(volume_id)
                return list(locations) if locations is not None else None

            logger.debug(
                f"Invalidating location for volume {volume_id} "
                f"(populated {elapsed:.1f}s ago, ttl={self.ttl_seconds}s)"
            )
            self._cache.pop(volume_id, None)
            self._populated_at.pop(volume_id, None)
            return None

    def set_location(
        self, volume_id: int, locations: Optional[List[Location]]
    ) -> None:
        if locations:
            self._cache[volume_id] = list(locations)
            self._populated_at[volume_id] = self._clock()
