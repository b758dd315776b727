from typing import Optional

from bson import ObjectId
from fastapi import APIRouter, Depends, HTTPException
from pymongo.collection import Collection

from crud import (
    delete_or_404,
    envelope,
    find_documents,
    get_or_404,
    insert_document,
    object_id_param,
    patch_document,
    serialize_doc,
    utc_now,
)
from database import collection
from schemas import SessionCreate, SessionStatus, SessionUpdate

router = APIRouter(tags=["session"])
sessions = collection("session")
session_id = object_id_param("session")


@router.get("/session")
def list_sessions(
    status: Optional[SessionStatus] = None,
    tutor_email: Optional[str] = None,
    col: Collection = Depends(sessions),
):
    query = {}
    if status:
        query["status"] = status
    if tutor_email:
        query["tutor_email"] = tutor_email
    return envelope("Sessions fetched successfully.", find_documents(col, query))


@router.post("/session", status_code=201)
def create_session(payload: SessionCreate, col: Collection = Depends(sessions)):
    created = insert_document(col, payload.model_dump())
    return envelope("Session created successfully.", created, inserted_id=created["id"])


# Static paths are registered before /session/{id}
@router.get("/session/approved")
def approved_sessions(col: Collection = Depends(sessions)):
    docs = find_documents(col, {"status": "approved"})
    return envelope("Approved sessions fetched successfully.", docs)


@router.get("/session/approved/{email}")
def approved_sessions_for_tutor(email: str, col: Collection = Depends(sessions)):
    docs = find_documents(col, {"tutor_email": email, "status": "approved"})
    return envelope("Approved sessions fetched successfully.", docs)


@router.get("/session/email/{email}")
def sessions_for_tutor(email: str, col: Collection = Depends(sessions)):
    return envelope("Sessions fetched successfully.", find_documents(col, {"tutor_email": email}))


@router.get("/session/{id}")
def get_session(obj_id: ObjectId = Depends(session_id), col: Collection = Depends(sessions)):
    return envelope("Session fetched successfully.", serialize_doc(get_or_404(col, obj_id, "session")))


@router.patch("/session/approve/{id}")
def approve_session(obj_id: ObjectId = Depends(session_id), col: Collection = Depends(sessions)):
    res = col.update_one({"_id": obj_id}, {"$set": {"status": "approved", "updated_at": utc_now()}})
    if res.matched_count == 0:
        raise HTTPException(status_code=404, detail="Session not found")
    return envelope("Session approved successfully.")


@router.patch("/session/{id}")
def update_session(
    payload: SessionUpdate,
    obj_id: ObjectId = Depends(session_id),
    col: Collection = Depends(sessions),
):
    updated = patch_document(col, obj_id, payload, "session")
    return envelope("Session updated successfully.", updated)


@router.delete("/session/{id}")
def delete_session(obj_id: ObjectId = Depends(session_id), col: Collection = Depends(sessions)):
    delete_or_404(col, obj_id, "session")
    return envelope("Session deleted successfully.")
