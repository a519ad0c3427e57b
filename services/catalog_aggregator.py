# services/catalog_aggregator.py
import asyncio
import logging
from typing import Any, Dict, List

import httpx

from config import FANOUT_TIMEOUT, UNCONFIGURED_PREFIX
from models.category import REGISTRY_TABLE, PLACEHOLDER_CATEGORIES, REGISTRY_HEADERS
from services.cache_version import CacheVersion
from services.errors import ServiceError

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

CATEGORY_TAG = "Catégorie"


def is_active(category: Dict[str, Any]) -> bool:
    url = str(category.get("ScriptURL") or "").strip()
    return bool(url) and not url.startswith(UNCONFIGURED_PREFIX)


class CatalogAggregator:
    """Central catalog: category registry, fan-out to category services, cache version."""

    def __init__(self, store, http_client: httpx.AsyncClient, timeout: float = FANOUT_TIMEOUT):
        self.store = store
        self.http_client = http_client
        self.timeout = timeout
        self.version = CacheVersion(store)

    async def list_categories(self) -> List[Dict[str, Any]]:
        return await self.store.read_table(REGISTRY_TABLE)

    async def fetch_category_products(self, category: Dict[str, Any]) -> List[Dict[str, Any]]:
        """Products of one category service, or [] when it cannot be reached or answers badly."""
        name = category.get("NomCategorie")
        url = str(category.get("ScriptURL")).strip()
        try:
            response = await self.http_client.get(url, params={"action": "getProducts"}, timeout=self.timeout)
            if response.status_code != 200:
                logger.warning(f"Category {name} answered {response.status_code}, skipped")
                return []
            result = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"Category {name} unreachable, skipped: {str(e)}")
            return []

        if not isinstance(result, dict) or not result.get("success") or not isinstance(result.get("data"), list):
            logger.warning(f"Category {name} returned no product list, skipped")
            return []
        return [{**course, CATEGORY_TAG: name} for course in result["data"] if isinstance(course, dict)]

    async def get_public_catalog(self) -> Dict[str, Any]:
        categories = await self.list_categories()
        active = [c for c in categories if is_active(c)]
        if not active:
            return {"categories": categories, "products": []}

        results = await asyncio.gather(*(self.fetch_category_products(c) for c in active))
        products = [course for batch in results for course in batch]
        logger.info(f"Public catalog: {len(active)} active categories, {len(products)} products")
        return {"categories": categories, "products": products}

    async def get_cache_version(self) -> str:
        return await self.version.get()

    async def invalidate_cache(self) -> str:
        return await self.version.bump()

    async def save_category(self, category: Dict[str, Any]) -> str:
        category_id = category["IDCategorie"]
        updated = await self.store.update_rows(REGISTRY_TABLE, {"IDCategorie": category_id}, category)
        if not updated:
            await self.store.append_row(REGISTRY_TABLE, category)
        logger.info(f"Category {category_id} {'updated' if updated else 'added'}")
        return await self.invalidate_cache()

    async def delete_category(self, category_id: str) -> str:
        deleted = await self.store.delete_rows(REGISTRY_TABLE, {"IDCategorie": category_id})
        if not deleted:
            raise ServiceError(f"Catégorie introuvable: {category_id}")
        return await self.invalidate_cache()

    async def setup_registry(self) -> int:
        await self.store.delete_rows(REGISTRY_TABLE)
        for values in PLACEHOLDER_CATEGORIES:
            await self.store.append_row(REGISTRY_TABLE, dict(zip(REGISTRY_HEADERS, values)))
        await self.invalidate_cache()
        return len(PLACEHOLDER_CATEGORIES)
