import logging
from typing import Dict, List, Optional

from weedclient.common.interfaces import ILookupCache
from weedclient.models.schemas import Location

logger = logging.getLogger(__name__)


class MapLookupCache(ILookupCache):
    """Keeps every volume location until it is invalidated.

    Use it when volumes never move for the lifetime of the process. Single
    dict operations are atomic, so readers and writers take no lock.
    """

    def __init__(self):
        self._cache: Dict[int, List[Location]] = {}

    def invalidate(self, volume_id: Optional[int] = None) -> None:
        if volume_id is None:
            self._cache = {}
            logger.debug("Invalidated all cached volume locations")
        else:
            self._cache.pop(volume_id, None)

    def lookup(self, volume_id: int) -> Optional[List[Location]]:
        locations = self._cache.get(volume_id)
        return list(locations) if locations is not None else None

    def set_location(
        self, volume_id: int, locations: Optional[List[Location]]
    ) -> None:
        if locations:
            self._cache[volume_id] = list(locations)
