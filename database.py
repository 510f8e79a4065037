"""
Database Helper Functions

MongoDB helpers shared by every route module. Each collection is named after
the lowercase schema class (MenuItem -> "menuitem").
"""

from pymongo import MongoClient
from bson import ObjectId
from bson.errors import InvalidId
from datetime import datetime, timezone
from typing import Union, Optional, Dict, Any, List
from pydantic import BaseModel

from config import Config

_client = None
db = None

if Config.DATABASE_URL and Config.DATABASE_NAME:
    _client = MongoClient(Config.DATABASE_URL)
    db = _client[Config.DATABASE_NAME]


class DatabaseUnavailable(Exception):
    pass


def _ensure_db():
    if db is None:
        raise DatabaseUnavailable("Database not available. Check DATABASE_URL and DATABASE_NAME environment variables.")


def _to_dict(data: Union[BaseModel, dict]) -> dict:
    if isinstance(data, BaseModel):
        return data.model_dump()
    return dict(data)


def _object_id(_id: str) -> Optional[ObjectId]:
    try:
        return ObjectId(_id)
    except (InvalidId, TypeError):
        return None


# CRUD helpers

def create_document(collection_name: str, data: Union[BaseModel, dict]) -> str:
    _ensure_db()
    payload = _to_dict(data)
    now = datetime.now(timezone.utc)
    payload['created_at'] = now
    payload['updated_at'] = now
    result = db[collection_name].insert_one(payload)
    return str(result.inserted_id)


def get_documents(collection_name: str, filter_dict: Optional[dict] = None, limit: Optional[int] = None, sort: Optional[list] = None, projection: Optional[dict] = None) -> List[dict]:
    _ensure_db()
    cursor = db[collection_name].find(filter_dict or {}, projection)
    if sort:
        cursor = cursor.sort(sort)
    if limit:
        cursor = cursor.limit(int(limit))
    return [serialize_doc(doc) for doc in cursor]


def get_document(collection_name: str, filter_dict: Optional[dict] = None) -> Optional[dict]:
    """First document matching the filter, or None."""
    _ensure_db()
    return serialize_doc(db[collection_name].find_one(filter_dict or {}))


def get_document_by_id(collection_name: str, _id: str) -> Optional[dict]:
    _ensure_db()
    oid = _object_id(_id)
    if oid is None:
        return None
    return serialize_doc(db[collection_name].find_one({"_id": oid}))


def update_document(collection_name: str, _id: str, update_data: Dict[str, Any], filter_extra: Optional[dict] = None) -> bool:
    """Apply $set to one document. Returns False when no document matched."""
    _ensure_db()
    oid = _object_id(_id)
    if oid is None:
        return False
    query = {"_id": oid}
    if filter_extra:
        query.update(filter_extra)
    update = {"$set": _to_dict(update_data)}
    update["$set"]["updated_at"] = datetime.now(timezone.utc)
    result = db[collection_name].update_one(query, update)
    return result.matched_count > 0


def delete_document(collection_name: str, _id: str) -> bool:
    _ensure_db()
    oid = _object_id(_id)
    if oid is None:
        return False
    result = db[collection_name].delete_one({"_id": oid})
    return result.deleted_count > 0


def ensure_indexes():
    """Unique keys: one account per email, one artist profile per user."""
    if db is None:
        return
    db["user"].create_index("email", unique=True)
    db["artist"].create_index("user_id", unique=True)


# Utility

def is_valid_id(_id: str) -> bool:
    return _object_id(_id) is not None


def serialize_doc(doc: Optional[dict]) -> Optional[dict]:
    if not doc:
        return None
    d = dict(doc)
    if "_id" in d:
        d["_id"] = str(d["_id"])  # convert ObjectId to string
    return d
