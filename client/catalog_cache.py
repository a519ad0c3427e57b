# client/catalog_cache.py
"""Stale-while-revalidate cache of the public catalog for one client session.

A read never waits on the network once something is cached:

* EMPTY  - nothing cached; the read blocks on a fetch.
* FRESH  - cached for less than ``lifetime`` seconds; served as is.
* STALE  - cached for ``lifetime`` seconds or more; served as is while one
  background refresh replaces it.

Staleness is only evaluated when the cache is read; there is no timer.
"""
import asyncio
import json
import logging
import time
from enum import Enum
from typing import Any, Dict, Optional

import httpx

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

CACHE_LIFETIME = 5 * 60


class CacheState(str, Enum):
    EMPTY = "EMPTY"
    FRESH = "FRESH"
    STALE = "STALE"


class SessionStorage:
    """String key/value slots that live as long as the client session."""

    def __init__(self):
        self._items: Dict[str, str] = {}

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str):
        self._items[key] = value

    def remove_item(self, key: str):
        self._items.pop(key, None)

    def clear(self):
        self._items.clear()


def empty_catalog(error: str) -> Dict[str, Any]:
    return {"success": False, "data": {"categories": [], "products": []}, "error": error}


class CatalogCache:
    CACHE_KEY = "fullCatalog"
    VERSION_KEY = "cacheVersion"
    TIMESTAMP_KEY = "cacheTimestamp"

    def __init__(self, central_url: str, http_client: httpx.AsyncClient, storage: SessionStorage = None,
                 lifetime: float = CACHE_LIFETIME, clock=time.time):
        self.central_url = central_url
        self.http_client = http_client
        self.storage = storage if storage is not None else SessionStorage()
        self.lifetime = lifetime
        self.clock = clock
        self._refresh_task: Optional[asyncio.Task] = None

    @property
    def cached_version(self) -> Optional[str]:
        return self.storage.get_item(self.VERSION_KEY)

    def state(self) -> CacheState:
        if self.storage.get_item(self.CACHE_KEY) is None:
            return CacheState.EMPTY
        stamp = self.storage.get_item(self.TIMESTAMP_KEY)
        if stamp is None or self.clock() - float(stamp) >= self.lifetime:
            return CacheState.STALE
        return CacheState.FRESH

    async def fetch_catalog(self) -> Dict[str, Any]:
        response = await self.http_client.get(self.central_url, params={"action": "getPublicCatalog"})
        if response.status_code != 200:
            raise RuntimeError(f"Erreur réseau: {response.status_code}")
        result = response.json()
        if not isinstance(result, dict) or not result.get("success"):
            if not isinstance(result, dict):
                raise RuntimeError("Réponse inattendue du catalogue.")
            raise RuntimeError(result.get("error") or "L'API a retourné une erreur.")
        data = result.get("data")
        if not isinstance(data, dict) or not all(isinstance(data.get(k), list) for k in ("categories", "products")):
            raise RuntimeError("Catalogue mal formé.")
        return result

    def _store(self, result: Dict[str, Any]):
        self.storage.set_item(self.CACHE_KEY, json.dumps(result))
        self.storage.set_item(self.VERSION_KEY, str(result.get("cacheVersion")))
        self.storage.set_item(self.TIMESTAMP_KEY, str(self.clock()))

    async def get_full_catalog(self) -> Dict[str, Any]:
        """Blocking network load; an unreachable catalog yields an empty one."""
        logger.info("Loading the full catalog from the network")
        try:
            result = await self.fetch_catalog()
        except (httpx.HTTPError, ValueError, RuntimeError) as e:
            logger.error(f"Failed to load the full catalog: {str(e)}")
            return empty_catalog(str(e))
        self._store(result)
        logger.info(f"Catalog cached ({len(result['data']['products'])} products)")
        return result

    async def _refresh(self):
        try:
            result = await self.fetch_catalog()
        except (httpx.HTTPError, ValueError, RuntimeError) as e:
            logger.error(f"Background catalog refresh failed: {str(e)}")
            return
        self._store(result)
        logger.info("Catalog refreshed in the background")

    def refresh_in_background(self) -> asyncio.Task:
        if self._refresh_task is None or self._refresh_task.done():
            self._refresh_task = asyncio.create_task(self._refresh())
        return self._refresh_task

    async def wait_for_refresh(self):
        if self._refresh_task is not None:
            await self._refresh_task

    async def get_catalog(self) -> Dict[str, Any]:
        state = self.state()
        if state is CacheState.EMPTY:
            return await self.get_full_catalog()
        if state is CacheState.STALE:
            self.refresh_in_background()
        return json.loads(self.storage.get_item(self.CACHE_KEY))

    async def check_version(self) -> bool:
        """Poll the server token; schedule a refresh when it differs from ours.

        Returns True when a refresh was scheduled.
        """
        try:
            response = await self.http_client.get(self.central_url, params={"action": "getCacheVersion"})
            result = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"Cache version check failed: {str(e)}")
            return False
        if not isinstance(result, dict) or not result.get("success") or result.get("cacheVersion") is None:
            logger.warning(f"Cache version unavailable: {result.get('error') if isinstance(result, dict) else result}")
            return False
        server_version = str(result["cacheVersion"])
        if self.state() is CacheState.EMPTY or server_version == self.cached_version:
            return False
        logger.info(f"Catalog version changed ({self.cached_version} -> {server_version})")
        self.refresh_in_background()
        return True
