# models/notification.py
from pydantic import BaseModel
from typing import List, Optional

NOTIFICATIONS_TABLE = "Notifications"
UNREAD = "Non lue"
READ = "Lue"

class NotificationCreate(BaseModel):
    userId: str
    type: str
    message: str

class MarkAsRead(BaseModel):
    userId: str
    ids: Optional[List[str]] = None
