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
)
from database import collection
from schemas import MaterialCreate, MaterialUpdate
from security import get_current_user

router = APIRouter(tags=["material"])
materials = collection("material")
material_id = object_id_param("material")


@router.get("/material")
def list_materials(col: Collection = Depends(materials)):
    return envelope("Materials fetched successfully.", find_documents(col))


@router.post("/material", status_code=201)
def create_material(payload: MaterialCreate, col: Collection = Depends(materials)):
    created = insert_document(col, payload.model_dump())
    return envelope("Material created successfully.", created, inserted_id=created["id"])


# /material/{email} is the tutor lookup, so single documents live under /material/id
@router.get("/material/id/{id}")
def get_material(obj_id: ObjectId = Depends(material_id), col: Collection = Depends(materials)):
    return envelope("Material fetched successfully.", serialize_doc(get_or_404(col, obj_id, "material")))


@router.get("/material/session/{session_id}")
def materials_for_session(session_id: str, col: Collection = Depends(materials)):
    docs = find_documents(col, {"session_id": session_id})
    if not docs:
        raise HTTPException(status_code=404, detail="No material found for this session")
    return envelope("Materials fetched successfully.", docs)


@router.get("/material/{email}", dependencies=[Depends(get_current_user)])
def materials_for_tutor(email: str, col: Collection = Depends(materials)):
    return envelope("Materials fetched successfully.", find_documents(col, {"tutor_email": email}))


@router.patch("/material/{id}")
def update_material(
    payload: MaterialUpdate,
    obj_id: ObjectId = Depends(material_id),
    col: Collection = Depends(materials),
):
    updated = patch_document(col, obj_id, payload, "material")
    return envelope("Material updated successfully.", updated)


@router.delete("/material/{id}")
def delete_material(obj_id: ObjectId = Depends(material_id), col: Collection = Depends(materials)):
    delete_or_404(col, obj_id, "material")
    return envelope("Material deleted successfully.")
