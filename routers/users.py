import logging
from typing import Any, Dict, Optional

from bson import ObjectId
from fastapi import APIRouter, Depends, HTTPException
from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError

from config import Settings
from crud import envelope, find_documents, insert_document, object_id_param, patch_document, serialize_doc
from database import collection, get_settings
from schemas import LoginInput, Role, User as UserSchema, UserCreate, UserRoleUpdate
from security import create_access_token, get_current_user, hash_password, verify_password

logger = logging.getLogger(__name__)

router = APIRouter(tags=["user"])
users = collection("user")


def public_user(doc: Dict[str, Any]) -> Dict[str, Any]:
    # Never send password material
    user = serialize_doc(doc)
    user.pop("password_hash", None)
    user.pop("password", None)
    return user


@router.post("/create-user", status_code=201)
def create_user(payload: UserCreate, col: Collection = Depends(users)):
    if col.find_one({"email": payload.email}):
        raise HTTPException(status_code=409, detail="Email already exist in the database")
    user = UserSchema(
        name=payload.name,
        email=payload.email,
        password_hash=hash_password(payload.password),
        role=payload.role,
        photo_url=payload.photo_url,
    )
    try:
        created = insert_document(col, user.model_dump())
    except DuplicateKeyError:
        # lost the race against a concurrent registration
        raise HTTPException(status_code=409, detail="Email already exist in the database")
    logger.info("Created user %s with role %s", payload.email, payload.role)
    created.pop("password_hash", None)
    return envelope("User created successfully.", created)


@router.get("/user")
def list_users(role: Optional[Role] = None, col: Collection = Depends(users)):
    query = {"role": role} if role else {}
    docs = find_documents(col, query)
    return envelope("Users fetched successfully.", [public_user(d) for d in docs])


@router.patch("/user/{id}")
def update_user_role(
    payload: Optional[UserRoleUpdate] = None,
    obj_id: ObjectId = Depends(object_id_param("user")),
    col: Collection = Depends(users),
):
    # An empty body promotes the user to admin
    changes = UserRoleUpdate(role=payload.role if payload else "admin")
    updated = patch_document(col, obj_id, changes, "user")
    updated.pop("password_hash", None)
    return envelope("User role updated successfully.", updated)


@router.post("/login")
def login(payload: LoginInput, col: Collection = Depends(users), settings: Settings = Depends(get_settings)):
    user = col.find_one({"email": payload.email})
    if not user or not verify_password(payload.password, user.get("password_hash", "")):
        logger.warning("Failed login for %s", payload.email)
        raise HTTPException(status_code=401, detail="Invalid email or password")
    token = create_access_token({"email": user["email"], "role": user.get("role")}, settings)
    return envelope("Login successful", token=token, user=public_user(user))


@router.get("/me")
def me(claims: dict = Depends(get_current_user), col: Collection = Depends(users)):
    user = col.find_one({"email": claims["email"]})
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return envelope("User fetched successfully.", public_user(user))
