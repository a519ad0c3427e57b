# models/action.py
from pydantic import BaseModel
from typing import Any, Dict, Optional

class ActionRequest(BaseModel):
    action: Optional[str] = None
    data: Dict[str, Any] = {}
