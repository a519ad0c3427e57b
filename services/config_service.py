# services/config_service.py
import json
import logging
import time
from typing import Any, Dict

from config import CONFIG_CACHE_TTL

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

CONFIG_TABLE = "Config"

# One entry per cache key: (stored_at, config)
_cache: Dict[str, tuple] = {}


def clear_config_cache():
    _cache.clear()


class ConfigService:
    """Key/value settings read from a ``Config`` table (``Clé``/``Valeur``).

    Values are cached in-process for ``ttl`` seconds under ``cache_key``.
    Keys missing from the table fall back to ``defaults``; an unreadable
    table yields the defaults unchanged.
    """

    def __init__(self, store, cache_key: str, defaults: Dict[str, str], ttl: int = CONFIG_CACHE_TTL,
                 table: str = CONFIG_TABLE):
        self.store = store
        self.cache_key = cache_key
        self.defaults = defaults
        self.ttl = ttl
        self.table = table

    async def get_config(self) -> Dict[str, str]:
        cached = _cache.get(self.cache_key)
        if cached and time.time() - cached[0] < self.ttl:
            return cached[1]

        try:
            rows = await self.store.read_table(self.table)
        except Exception as e:
            logger.warning(f"Config table unreadable for {self.cache_key}, using defaults: {str(e)}")
            return dict(self.defaults)

        config = dict(self.defaults)
        for row in rows:
            key, value = row.get("Clé"), row.get("Valeur")
            if key and value not in (None, ""):
                config[str(key)] = str(value)

        _cache[self.cache_key] = (time.time(), config)
        return config

    async def get(self, key: str, default: str = None) -> str:
        config = await self.get_config()
        return config.get(key, default)

    async def get_json(self, key: str, default: Any = None) -> Any:
        raw = await self.get(key)
        if raw is None:
            return default
        try:
            return json.loads(raw)
        except (TypeError, ValueError):
            logger.warning(f"Config key {key} is not valid JSON")
            return default

    async def seed_defaults(self, values: Dict[str, str]):
        """Append the keys of ``values`` that the table does not define yet."""
        rows = await self.store.read_table(self.table)
        existing = {row.get("Clé") for row in rows}
        for key, value in values.items():
            if key not in existing:
                await self.store.append_row(self.table, {"Clé": key, "Valeur": value})
        _cache.pop(self.cache_key, None)
