# services/cache_notifier.py
import logging

import httpx

from config import CENTRAL_API_URL

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


async def notify_catalog_changed(http_client: httpx.AsyncClient, central_url: str = CENTRAL_API_URL) -> bool:
    """Ask the catalog aggregator to bump its cache version.

    Fire-and-forget: a failed call is logged and otherwise ignored, so the
    aggregator may keep serving the previous version until its next bump.
    """
    try:
        response = await http_client.get(central_url, params={"action": "invalidateCache"})
        logger.info(f"Global cache invalidation sent ({response.status_code})")
        return response.status_code == 200
    except httpx.HTTPError as e:
        logger.warning(f"Global cache invalidation failed: {str(e)}")
        return False
