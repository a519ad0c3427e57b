# routes/deliveries.py
from fastapi import APIRouter, Depends
from typing import Optional
import json

from database import get_store
from routes.common import run_action
from services.app_logger import AppLogger
from services.config_service import ConfigService

router = APIRouter(prefix="/api/deliveries", tags=["deliveries"])

SOURCE = "BACK-END (LIVRAISONS)"
CONFIG_TABLE = "Config_Livraisons"
CACHE_KEY = "script_config_delivery"
CONFIG_TTL = 300

DEFAULT_DELIVERY_OPTIONS = {
    "Dakar": {"Dakar - Plateau": {"Standard": 1500, "ABMCY Express": 2500}, "Rufisque": {"Standard": 3000}},
    "Thiès": {"Thiès Ville": {"Standard": 3500}},
}


def delivery_config(store) -> ConfigService:
    return ConfigService(store, CACHE_KEY, defaults={}, ttl=CONFIG_TTL, table=CONFIG_TABLE)


async def get_delivery_options(store, params=None):
    options = await delivery_config(store).get_json("delivery_options", {})
    return {"success": True, "data": options if isinstance(options, dict) else {}}

async def setup_delivery_options(store):
    await delivery_config(store).seed_defaults({"delivery_options": json.dumps(DEFAULT_DELIVERY_OPTIONS, ensure_ascii=False)})


GET_ACTIONS = {
    "getDeliveryOptions": get_delivery_options,
}


@router.get("")
async def deliveries_get(action: Optional[str] = None, store=Depends(get_store)):
    if not action:
        return {"success": True, "message": "API Gestion Livraisons - Active"}
    return await run_action(GET_ACTIONS, action, AppLogger(store, SOURCE), store=store)
