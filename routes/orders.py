# routes/orders.py
from fastapi import APIRouter, Depends
import asyncio
import logging
import time

from config import ORDER_LOCK_TIMEOUT
from database import get_store
from models.action import ActionRequest
from models.order import ORDERS_TABLE, OrderCreate
from routes.common import run_action
from services.app_logger import AppLogger, now_iso
from services.errors import ServiceError

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/orders", tags=["orders"])

SOURCE = "BACK-END (CMD)"
PENDING = "En attente"

# Serializes appends to the orders table
order_lock = asyncio.Lock()


def joined(value) -> str:
    return ", ".join(str(v) for v in value) if isinstance(value, list) else str(value)


async def enregistrer_commande(store, data, lock_timeout: float = ORDER_LOCK_TIMEOUT):
    order = OrderCreate(**data)
    try:
        await asyncio.wait_for(order_lock.acquire(), timeout=lock_timeout)
    except asyncio.TimeoutError:
        raise ServiceError("Service de commandes occupé, veuillez réessayer.")
    try:
        order_id = f"CMD-{int(time.time() * 1000)}"
        await store.append_row(ORDERS_TABLE, {
            "ID Commande": order_id,
            "ID Client": order.idClient,
            "Produits": joined(order.produits),
            "Quantités": joined(order.quantites),
            "Montant Total": order.total,
            "Statut": PENDING,
            "Date": now_iso(),
            "Adresse Livraison": order.adresseLivraison,
            "Moyen Paiement": order.moyenPaiement,
            "Notes": order.notes or "",
        })
        await AppLogger(store, SOURCE).log_action("enregistrerCommande", {"id": order_id, "client": order.idClient})
        return {"success": True, "id": order_id}
    finally:
        order_lock.release()


POST_ACTIONS = {
    "enregistrerCommande": enregistrer_commande,
}


@router.get("")
async def orders_get():
    return {"success": True, "message": "API Gestion Commandes - Active"}

@router.post("")
async def orders_post(request: ActionRequest, store=Depends(get_store)):
    return await run_action(POST_ACTIONS, request.action, AppLogger(store, SOURCE), store=store, data=request.data)
