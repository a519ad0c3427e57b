# database.py
import logging
from typing import Any, Dict, List, Optional

from motor.motor_asyncio import AsyncIOMotorClient
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError

from config import MONGODB_URI, MONGODB_DB

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

PROPERTIES_TABLE = "ScriptProperties"


class DuplicateRowError(Exception):
    """Raised when an append violates a unique column."""


class TableStore:
    """Sheet-like access to MongoDB: one collection per table, one document per row.

    Rows come back as plain dicts keyed by column header, in insertion order,
    without Mongo's ``_id``.
    """

    def __init__(self, db):
        self.db = db

    async def read_table(self, name: str) -> List[Dict[str, Any]]:
        return await self.db[name].find({}, {"_id": 0}).sort("_id", 1).to_list(None)

    async def append_row(self, name: str, row: Dict[str, Any]) -> None:
        try:
            # insert_one adds _id to the dict it is given
            await self.db[name].insert_one(dict(row))
        except DuplicateKeyError as e:
            raise DuplicateRowError(str(e)) from e

    async def update_rows(self, name: str, match: Dict[str, Any], values: Dict[str, Any]) -> int:
        result = await self.db[name].update_many(match, {"$set": values})
        return result.matched_count

    async def delete_rows(self, name: str, match: Optional[Dict[str, Any]] = None) -> int:
        result = await self.db[name].delete_many(match or {})
        return result.deleted_count

    async def ensure_unique(self, name: str, column: str) -> None:
        await self.db[name].create_index(column, unique=True)

    async def get_property(self, key: str) -> Optional[Any]:
        doc = await self.db[PROPERTIES_TABLE].find_one({"key": key})
        return doc["value"] if doc else None

    async def set_property(self, key: str, value: Any) -> None:
        await self.db[PROPERTIES_TABLE].update_one({"key": key}, {"$set": {"value": value}}, upsert=True)

    async def advance_property(self, key: str, candidate: int) -> int:
        """Store max(current, candidate) atomically and return the stored value."""
        doc = await self.db[PROPERTIES_TABLE].find_one_and_update(
            {"key": key},
            {"$max": {"value": candidate}},
            upsert=True,
            return_document=ReturnDocument.AFTER,
        )
        return doc["value"]


client = AsyncIOMotorClient(MONGODB_URI)
db = client[MONGODB_DB]
store = TableStore(db)


async def get_store() -> TableStore:
    return store


async def init_db():
    await store.ensure_unique("Utilisateurs", "Email")
    await db[PROPERTIES_TABLE].create_index("key", unique=True)
    logger.info("Database indexes ensured")
