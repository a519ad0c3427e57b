# services/app_logger.py
import json
import logging
import traceback
from datetime import datetime, timezone

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

LOGS_TABLE = "Logs"
LOG_HEADERS = ["Timestamp", "Source", "Action", "Détails"]


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class AppLogger:
    """Writes action and error records to the durable ``Logs`` table.

    Writing a log row must never break the request that produced it, so
    store failures are only reported on the module logger.
    """

    def __init__(self, store, source: str):
        self.store = store
        self.source = source

    async def _append(self, action: str, details: dict, timestamp: str = None):
        try:
            await self.store.append_row(LOGS_TABLE, {
                "Timestamp": timestamp or now_iso(),
                "Source": self.source,
                "Action": action,
                "Détails": json.dumps(details, ensure_ascii=False, default=str),
            })
        except Exception as e:
            logger.error(f"Failed to write log row for {self.source}/{action}: {str(e)}")

    async def log_action(self, action: str, details: dict):
        await self._append(action, details)

    async def log_error(self, context, error: Exception):
        await self._append("ERROR", {
            "context": context,
            "message": str(error),
            "stack": "".join(traceback.format_exception(type(error), error, error.__traceback__)),
        })

    async def log_event(self, event_type: str, details: dict, timestamp: str = None):
        await self._append(event_type, details, timestamp)


async def recent_logs(store, limit: int = 100):
    rows = await store.read_table(LOGS_TABLE)
    return [[row.get(h) for h in LOG_HEADERS] for row in reversed(rows[-limit:])]
