# routes/common.py
import logging
import traceback
from typing import Any, Awaitable, Callable, Dict

import httpx
from pydantic import ValidationError

from config import FANOUT_TIMEOUT
from services.errors import ServiceError

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

Handler = Callable[..., Awaitable[Dict[str, Any]]]

SECRET_FIELDS = {"motDePasse", "password"}


async def get_http_client():
    async with httpx.AsyncClient(timeout=FANOUT_TIMEOUT) as client:
        yield client


def failure(message: str) -> Dict[str, Any]:
    return {"success": False, "error": message}


def redact(data):
    if not isinstance(data, dict):
        return data
    return {k: ("***" if k in SECRET_FIELDS else v) for k, v in data.items()}


def validation_message(error: ValidationError) -> str:
    parts = []
    for err in error.errors():
        field = ".".join(str(loc) for loc in err.get("loc", ())) or "data"
        parts.append(f"{field}: {err.get('msg')}")
    return "Données invalides - " + "; ".join(parts)


async def run_action(handlers: Dict[str, Handler], action: str, app_logger, **kwargs) -> Dict[str, Any]:
    """Request boundary shared by every service router.

    Refusals (bad payload, unknown id) become ``{success: False, error}``;
    anything unexpected is also written to the durable log table.
    """
    if not action:
        return failure("Action non spécifiée.")
    handler = handlers.get(action)
    if handler is None:
        logger.warning(f"Unknown action for {app_logger.source}: {action}")
        await app_logger.log_action("unknownAction", {"error": "Action non reconnue", "action": action})
        return failure(f"Action non reconnue: {action}")
    try:
        return await handler(**kwargs)
    except ValidationError as e:
        return failure(validation_message(e))
    except ServiceError as e:
        logger.info(f"{action} refused: {str(e)}")
        return failure(str(e))
    except Exception as e:
        logger.error(f"Unexpected error in {action}: {str(e)}\nTraceback: {traceback.format_exc()}")
        await app_logger.log_error({"action": action, "data": redact(kwargs.get("data") or kwargs.get("params"))}, e)
        return failure(f"Erreur serveur: {str(e)}")
