# routes/catalog.py
from fastapi import APIRouter, Depends
from typing import Optional
import logging

from database import get_store
from models.action import ActionRequest
from models.category import Category, CategoryRef
from routes.common import get_http_client, run_action
from services.app_logger import AppLogger
from services.catalog_aggregator import CatalogAggregator

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/catalog", tags=["catalog"])

SOURCE = "BACK-END (CATALOGUE)"


async def invalidate_cache(aggregator: CatalogAggregator, data=None):
    version = await aggregator.invalidate_cache()
    return {"success": True, "message": f"Cache invalidé. Nouvelle version: {version}", "cacheVersion": version}

async def get_cache_version(aggregator: CatalogAggregator, data=None):
    return {"success": True, "cacheVersion": await aggregator.get_cache_version()}

async def get_public_catalog(aggregator: CatalogAggregator, data=None):
    catalog = await aggregator.get_public_catalog()
    version = await aggregator.get_cache_version()
    return {"success": True, "data": catalog, "cacheVersion": version}

async def list_categories(aggregator: CatalogAggregator, data=None):
    return {"success": True, "data": await aggregator.list_categories()}

async def save_category(aggregator: CatalogAggregator, data=None):
    category = Category(**(data or {}))
    version = await aggregator.save_category(category.model_dump())
    return {"success": True, "id": category.IDCategorie, "cacheVersion": version}

async def delete_category(aggregator: CatalogAggregator, data=None):
    ref = CategoryRef(**(data or {}))
    version = await aggregator.delete_category(ref.IDCategorie)
    return {"success": True, "id": ref.IDCategorie, "cacheVersion": version}

async def setup_central_sheet(aggregator: CatalogAggregator, data=None):
    count = await aggregator.setup_registry()
    return {"success": True, "message": f"Initialisation terminée. {count} catégories de cours ont été ajoutées."}


GET_ACTIONS = {
    "invalidateCache": invalidate_cache,
    "getCacheVersion": get_cache_version,
    "getPublicCatalog": get_public_catalog,
    "listCategories": list_categories,
}

POST_ACTIONS = {
    "saveCategory": save_category,
    "deleteCategory": delete_category,
    "setupCentralSheet": setup_central_sheet,
}


@router.get("")
async def catalog_get(action: Optional[str] = None, store=Depends(get_store), http_client=Depends(get_http_client)):
    if not action:
        return {"success": True, "message": "API Centrale Catalogue - Active"}
    aggregator = CatalogAggregator(store, http_client)
    return await run_action(GET_ACTIONS, action, AppLogger(store, SOURCE), aggregator=aggregator)

@router.post("")
async def catalog_post(request: ActionRequest, store=Depends(get_store), http_client=Depends(get_http_client)):
    logger.info(f"Catalog action: {request.action}")
    aggregator = CatalogAggregator(store, http_client)
    return await run_action(POST_ACTIONS, request.action, AppLogger(store, SOURCE), aggregator=aggregator, data=request.data)
