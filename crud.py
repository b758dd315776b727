import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from bson import ObjectId
from fastapi import HTTPException
from pydantic import BaseModel
from pymongo import ReturnDocument
from pymongo.collection import Collection

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def envelope(message: str, data: Any = None, **extra: Any) -> Dict[str, Any]:
    body = {"success": True, "message": message}
    if data is not None:
        body["data"] = data
    body.update(extra)
    return body


def parse_object_id(value: str, label: str) -> ObjectId:
    if not ObjectId.is_valid(value):
        raise HTTPException(status_code=400, detail=f"Invalid {label} id format")
    return ObjectId(value)


def object_id_param(label: str):
    """Path dependency that rejects malformed ids before any storage access."""

    def dependency(id: str) -> ObjectId:
        return parse_object_id(id, label)

    return dependency


def serialize_doc(doc: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    if not doc:
        return doc
    doc = dict(doc)
    _id = doc.pop("_id", None)
    if _id is not None:
        doc["id"] = str(_id)
    for k, v in list(doc.items()):
        if isinstance(v, ObjectId):
            doc[k] = str(v)
    return doc


def insert_document(col: Collection, data: Dict[str, Any]) -> Dict[str, Any]:
    payload = {**data, "created_at": utc_now()}
    res = col.insert_one(payload)
    payload["_id"] = res.inserted_id
    return serialize_doc(payload)


def find_documents(col: Collection, query: Optional[Dict[str, Any]] = None, sort=None, limit: Optional[int] = None):
    cursor = col.find(query or {})
    if sort:
        cursor = cursor.sort(sort)
    if limit:
        cursor = cursor.limit(limit)
    return [serialize_doc(d) for d in cursor]


def get_or_404(col: Collection, obj_id: ObjectId, label: str) -> Dict[str, Any]:
    doc = col.find_one({"_id": obj_id})
    if not doc:
        raise HTTPException(status_code=404, detail=f"{label.capitalize()} not found")
    return doc


def patch_document(col: Collection, obj_id: ObjectId, changes: BaseModel, label: str) -> Dict[str, Any]:
    """Overwrite only the supplied top-level fields and return the updated document."""
    update_dict = changes.model_dump(exclude_unset=True)
    if not update_dict:
        raise HTTPException(status_code=400, detail="No fields to update")
    update_dict["updated_at"] = utc_now()
    doc = col.find_one_and_update(
        {"_id": obj_id},
        {"$set": update_dict},
        return_document=ReturnDocument.AFTER,
    )
    if doc is None:
        raise HTTPException(status_code=404, detail=f"{label.capitalize()} not found")
    return serialize_doc(doc)


def delete_or_404(col: Collection, obj_id: ObjectId, label: str) -> None:
    res = col.delete_one({"_id": obj_id})
    if res.deleted_count == 0:
        raise HTTPException(status_code=404, detail=f"{label.capitalize()} not found")
    logger.info("Deleted %s %s", label, obj_id)
