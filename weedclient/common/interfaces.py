from abc import ABC, abstractmethod
from typing import List, Optional

from weedclient.models.schemas import Location


class ILookupCache(ABC):
    @abstractmethod
    def invalidate(self, volume_id: Optional[int] = None) -> None:
        """Drop the entry for ``volume_id``, or every entry when omitted"""
        pass

    @abstractmethod
    def lookup(self, volume_id: int) -> Optional[List[Location]]:
        """Cached locations, or None when the master must be asked"""
        pass

    @abstractmethod
    def set_location(
        self, volume_id: int, locations: Optional[List[Location]]
    ) -> None:
        """Store locations for a volume; empty or missing locations are ignored"""
        pass
