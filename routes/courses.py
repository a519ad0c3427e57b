# routes/courses.py
from fastapi import APIRouter, Depends
from typing import Optional
import logging

from database import get_store
from models.action import ActionRequest
from models.course import SaveRowRequest, TABLE_KINDS, TABLE_KEYS, demo_rows, table_name
from routes.common import get_http_client, run_action
from services.app_logger import AppLogger
from services.cache_notifier import notify_catalog_changed
from services.course_assembly import assemble_category

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/categories/{category}", tags=["courses"])


def source_for(category: str) -> str:
    return f"BACK-END (COURS {category})"


async def get_products(store, category: str, http_client=None, data=None):
    return {"success": True, "data": await assemble_category(store, category)}

async def setup_course_sheets(store, category: str, http_client=None, data=None):
    for kind in TABLE_KINDS:
        name = table_name(kind, category)
        await store.delete_rows(name)
        for row in demo_rows(kind):
            await store.append_row(name, row)
    await notify_catalog_changed(http_client)
    return {"success": True, "message": f"Structure de cours pour la catégorie \"{category}\" initialisée avec des données de démo."}

async def clear_demo_data(store, category: str, http_client=None, data=None):
    cleared = 0
    for kind in TABLE_KINDS:
        if await store.delete_rows(table_name(kind, category)):
            cleared += 1
    await notify_catalog_changed(http_client)
    return {"success": True, "message": f"{cleared} feuille(s) ont été nettoyées.", "cleared": cleared}

async def save_row(store, category: str, http_client=None, data=None):
    request = SaveRowRequest(**(data or {}))
    name = table_name(request.table, category)
    key = request.key or TABLE_KEYS[request.table]
    updated = 0
    if key and request.row.get(key) not in (None, ""):
        updated = await store.update_rows(name, {key: request.row[key]}, request.row)
    if not updated:
        await store.append_row(name, request.row)
    logger.info(f"Row {'updated' if updated else 'added'} in {name}")
    # Every edit of a category table invalidates the central catalog
    await notify_catalog_changed(http_client)
    return {"success": True, "updated": bool(updated)}

async def invalidate_global_cache(store, category: str, http_client=None, data=None):
    sent = await notify_catalog_changed(http_client)
    return {"success": True, "notified": sent}


GET_ACTIONS = {
    "getProducts": get_products,
}

POST_ACTIONS = {
    "setupCourseSheets": setup_course_sheets,
    "clearDemoData": clear_demo_data,
    "saveRow": save_row,
    "invalidateGlobalCache": invalidate_global_cache,
}


@router.get("")
async def courses_get(category: str, action: Optional[str] = None, store=Depends(get_store)):
    if not action:
        return {"success": True, "message": f"API Cours {category} - Active"}
    return await run_action(GET_ACTIONS, action, AppLogger(store, source_for(category)), store=store, category=category)

@router.post("")
async def courses_post(category: str, request: ActionRequest, store=Depends(get_store), http_client=Depends(get_http_client)):
    return await run_action(POST_ACTIONS, request.action, AppLogger(store, source_for(category)),
                            store=store, category=category, http_client=http_client, data=request.data)
