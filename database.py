import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence, Tuple

from bson import ObjectId
from bson.errors import InvalidId
from fastapi import Request
from pymongo import ASCENDING, MongoClient, ReturnDocument
from pymongo.database import Database

from config import Settings

logger = logging.getLogger(__name__)

USER = "user"
LECTURER = "lecturer"
CHALLENGE = "challenge"
RATING = "rating"
ASSIGNED_COURSE = "assigned_course"
REPORT = "report"
PRINCIPAL_REPORT = "principal_report"
TIMETABLE = "timetable"

TIMETABLE_KEY = ("program", "level", "year", "semester", "week", "day", "time")

Sort = Sequence[Tuple[str, int]]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def open_client(settings: Settings) -> MongoClient:
    logger.info("Connecting to document store %s", settings.database_name)
    return MongoClient(settings.database_url)


def ensure_indexes(db: Database) -> None:
    db[USER].create_index("email", unique=True)
    db[LECTURER].create_index("email", unique=True)
    db[TIMETABLE].create_index([(field, ASCENDING) for field in TIMETABLE_KEY], unique=True)


def get_db(request: Request) -> Database:
    return request.app.state.db


def is_connected(db: Optional[Database]) -> bool:
    if db is None:
        return False
    try:
        db.command("ping")
        return True
    except Exception:
        logger.warning("Document store ping failed", exc_info=True)
        return False


def _object_id(doc_id: str) -> Optional[ObjectId]:
    try:
        return ObjectId(doc_id)
    except (InvalidId, TypeError):
        return None


def serialize(doc: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    if not doc:
        return doc
    doc = dict(doc)
    if "_id" in doc:
        doc["_id"] = str(doc["_id"])
    return doc


def create_document(db: Database, collection_name: str, data: Dict[str, Any]) -> Dict[str, Any]:
    data = dict(data)
    result = db[collection_name].insert_one(data)
    data["_id"] = result.inserted_id
    return serialize(data)


def get_documents(
    db: Database,
    collection_name: str,
    filter_dict: Optional[Dict[str, Any]] = None,
    sort: Optional[Sort] = None,
    limit: int = 0,
) -> List[Dict[str, Any]]:
    cursor = db[collection_name].find(filter_dict or {})
    if sort:
        cursor = cursor.sort(list(sort))
    if limit:
        cursor = cursor.limit(int(limit))
    return [serialize(doc) for doc in cursor]


def get_document_by_id(db: Database, collection_name: str, doc_id: str) -> Optional[Dict[str, Any]]:
    oid = _object_id(doc_id)
    if oid is None:
        return None
    return serialize(db[collection_name].find_one({"_id": oid}))


def update_document_by_id(
    db: Database, collection_name: str, doc_id: str, updates: Dict[str, Any]
) -> Optional[Dict[str, Any]]:
    oid = _object_id(doc_id)
    if oid is None:
        return None
    if not updates:
        return serialize(db[collection_name].find_one({"_id": oid}))
    doc = db[collection_name].find_one_and_update(
        {"_id": oid}, {"$set": updates}, return_document=ReturnDocument.AFTER
    )
    return serialize(doc)


def delete_document_by_id(db: Database, collection_name: str, doc_id: str) -> Optional[Dict[str, Any]]:
    oid = _object_id(doc_id)
    if oid is None:
        return None
    return serialize(db[collection_name].find_one_and_delete({"_id": oid}))


def count_documents(db: Database, collection_name: str, filter_dict: Optional[Dict[str, Any]] = None) -> int:
    return db[collection_name].count_documents(filter_dict or {})
