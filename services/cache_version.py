# services/cache_version.py
import logging
import time

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

CACHE_VERSION_KEY = "cacheVersion"


class CacheVersion:
    """Catalog staleness token kept in the durable property table.

    The token only ever moves forward and is meant for inequality checks;
    callers must not read meaning into its value.
    """

    def __init__(self, store, clock=time.time):
        self.store = store
        self.clock = clock

    async def get(self) -> str:
        value = await self.store.get_property(CACHE_VERSION_KEY)
        return str(value) if value is not None else "0"

    async def bump(self) -> str:
        current = await self.store.get_property(CACHE_VERSION_KEY)
        candidate = int(self.clock() * 1000)
        if current is not None and candidate <= int(current):
            candidate = int(current) + 1
        stored = await self.store.advance_property(CACHE_VERSION_KEY, candidate)
        logger.info(f"Cache version advanced to {stored}")
        return str(stored)
