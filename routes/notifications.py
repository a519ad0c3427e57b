# routes/notifications.py
from fastapi import APIRouter, Depends
from typing import Optional
import logging
import time

from database import get_store
from models.action import ActionRequest
from models.notification import NOTIFICATIONS_TABLE, UNREAD, READ, NotificationCreate, MarkAsRead
from routes.common import run_action
from services.app_logger import AppLogger, now_iso
from services.errors import ServiceError

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/notifications", tags=["notifications"])

SOURCE = "BACK-END (NOTIF)"


async def create_notification(store, data):
    notification = NotificationCreate(**data)
    notif_id = f"NOTIF-{int(time.time() * 1000)}"
    await store.append_row(NOTIFICATIONS_TABLE, {
        "ID Notification": notif_id,
        "ID Client": notification.userId,
        "Type": notification.type,
        "Message": notification.message,
        "Statut": UNREAD,
        "Date": now_iso(),
    })
    return {"success": True, "id": notif_id}

async def get_notifications(store, params):
    user_id = params.get("userId")
    if not user_id:
        raise ServiceError("ID utilisateur manquant.")
    rows = await store.read_table(NOTIFICATIONS_TABLE)
    # Most recent first
    return {"success": True, "data": [row for row in reversed(rows) if row.get("ID Client") == user_id]}

async def mark_as_read(store, data):
    request = MarkAsRead(**data)
    if request.ids is None:
        updated = await store.update_rows(NOTIFICATIONS_TABLE, {"ID Client": request.userId}, {"Statut": READ})
    else:
        updated = 0
        for notif_id in request.ids:
            updated += await store.update_rows(
                NOTIFICATIONS_TABLE, {"ID Client": request.userId, "ID Notification": notif_id}, {"Statut": READ}
            )
    logger.info(f"{updated} notifications marked as read for {request.userId}")
    return {"success": True, "message": "Notifications marquées comme lues.", "updated": updated}


GET_ACTIONS = {
    "getNotifications": get_notifications,
}

POST_ACTIONS = {
    "createNotification": create_notification,
    "markAsRead": mark_as_read,
}


@router.get("")
async def notifications_get(action: Optional[str] = None, userId: Optional[str] = None, store=Depends(get_store)):
    if not action:
        return {"success": True, "message": "API Gestion Notifications - Active"}
    return await run_action(GET_ACTIONS, action, AppLogger(store, SOURCE), store=store, params={"userId": userId})

@router.post("")
async def notifications_post(request: ActionRequest, store=Depends(get_store)):
    return await run_action(POST_ACTIONS, request.action, AppLogger(store, SOURCE), store=store, data=request.data)
