import logging
from typing import Optional

import httpx

from weedclient.caching.map_cache import MapLookupCache
from weedclient.caching.time_based_cache import TimeBasedLookupCache
from weedclient.client.weed_client import WeedFSClient
from weedclient.common.config import Settings, settings as default_settings
from weedclient.common.interfaces import ILookupCache

logger = logging.getLogger(__name__)


def create_lookup_cache(kind: str, ttl_seconds: float = 60) -> Optional[ILookupCache]:
    """Build the lookup cache named by ``kind``: "none", "map" or "ttl"."""
    if kind == "none":
        return None
    if kind == "map":
        return MapLookupCache()
    if kind == "ttl":
        return TimeBasedLookupCache(ttl_seconds)
    raise ValueError(f"Unknown lookup cache kind: {kind}")


def create_client(
    settings: Optional[Settings] = None, http_client: Optional[httpx.Client] = None
) -> WeedFSClient:
    """Build a client from settings; without an ``http_client`` the client owns its transport"""
    settings = settings or default_settings
    lookup_cache = create_lookup_cache(settings.LOOKUP_CACHE, settings.LOOKUP_CACHE_TTL)
    client = WeedFSClient(
        settings.MASTER_URL, http_client, lookup_cache, timeout=settings.HTTP_TIMEOUT
    )

    logger.info(
        f"Created weed-fs client for {settings.MASTER_URL} "
        f"(lookup cache: {settings.LOOKUP_CACHE})"
    )
    return client
