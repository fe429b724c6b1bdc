"""MongoDB access for the items collection."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import MongoClient, ReturnDocument
from pymongo.errors import ConnectionFailure, ServerSelectionTimeoutError

from jobportal import config
from jobportal.log import get_logger
from jobportal.retry import retry

log = get_logger(__name__)

COLLECTION = "items"


@retry(max_attempts=3, base_delay=2.0, retryable=(ConnectionFailure, ServerSelectionTimeoutError))
def get_db():
    """
    Connect to MongoDB and return the portal database.

    Uses short timeouts so a missing server fails fast, and pings before
    returning so connection problems surface here rather than on first query.

    Raises:
        ServerSelectionTimeoutError: if the server is still unreachable after retries
    """
    client = MongoClient(
        config.mongo_uri(),
        serverSelectionTimeoutMS=5000,
        connectTimeoutMS=5000,
        socketTimeoutMS=5000,
    )
    client.admin.command("ping")
    log.info("MongoDB connected (%s)", config.mongo_db())
    return client[config.mongo_db()]


def serialize_item(item: Dict[str, Any]) -> Dict[str, Any]:
    """Make an item document JSON friendly (ObjectId and datetime to str)."""
    result = {}
    for key, value in item.items():
        if isinstance(value, ObjectId):
            result[key] = str(value)
        elif isinstance(value, datetime):
            result[key] = value.isoformat()
        else:
            result[key] = value
    return result


def _object_id(item_id: str) -> Optional[ObjectId]:
    try:
        return ObjectId(item_id)
    except (InvalidId, TypeError):
        return None


class ItemRepository:
    def __init__(self, collection) -> None:
        self.collection = collection

    @classmethod
    def from_config(cls) -> ItemRepository:
        return cls(get_db()[COLLECTION])

    def list(self) -> List[Dict[str, Any]]:
        return list(self.collection.find())

    def create(self, name: str, quantity: Optional[float] = None) -> Dict[str, Any]:
        doc: Dict[str, Any] = {
            "name": name,
            "quantity": quantity,
            "createdAt": datetime.now(timezone.utc),
        }
        inserted = self.collection.insert_one(doc)
        doc["_id"] = inserted.inserted_id
        return doc

    def update(self, item_id: str, changes: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Apply `changes` with $set; None when the id is malformed or unknown."""
        oid = _object_id(item_id)
        if oid is None:
            return None
        return self.collection.find_one_and_update(
            {"_id": oid},
            {"$set": changes},
            return_document=ReturnDocument.AFTER,
        )

    def delete(self, item_id: str) -> bool:
        oid = _object_id(item_id)
        if oid is None:
            return False
        return self.collection.delete_one({"_id": oid}).deleted_count > 0
