from typing import Any, Dict, Literal, Optional

from bson import ObjectId
from fastapi import APIRouter, Depends, Query
from pymongo import ASCENDING, DESCENDING
from pymongo.collection import Collection

from config import Settings
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
from database import collection, get_settings
from schemas import ProductCreate, ProductUpdate

router = APIRouter(tags=["product"])
products = collection("product")
product_id = object_id_param("product")

SORTS = {
    "price_asc": [("price", ASCENDING)],
    "price_desc": [("price", DESCENDING)],
    "rating": [("rating", DESCENDING)],
    "new": [("created_at", DESCENDING)],
}


@router.get("/product")
def list_products(
    category: Optional[str] = None,
    seller_email: Optional[str] = None,
    min_rating: Optional[float] = Query(None, ge=0, le=5),
    max_price: Optional[float] = Query(None, ge=0),
    sort: Optional[Literal["price_asc", "price_desc", "rating", "new"]] = None,
    limit: Optional[int] = Query(None, ge=1, le=100),
    col: Collection = Depends(products),
):
    query: Dict[str, Any] = {}
    if category:
        query["category"] = category
    if seller_email:
        query["seller_email"] = seller_email
    if min_rating is not None:
        query["rating"] = {"$gte": min_rating}
    if max_price is not None:
        query["price"] = {"$lte": max_price}
    docs = find_documents(col, query, sort=SORTS.get(sort) if sort else None, limit=limit)
    return envelope("Products fetched successfully.", docs)


@router.get("/product/top-rated")
def top_rated_products(col: Collection = Depends(products), settings: Settings = Depends(get_settings)):
    docs = find_documents(col, sort=SORTS["rating"], limit=settings.top_rated_limit)
    return envelope("Top rated products fetched successfully.", docs)


@router.post("/product", status_code=201)
def create_product(payload: ProductCreate, col: Collection = Depends(products)):
    created = insert_document(col, payload.model_dump())
    return envelope("Product created successfully.", created, inserted_id=created["id"])


@router.get("/product/{id}")
def get_product(obj_id: ObjectId = Depends(product_id), col: Collection = Depends(products)):
    return envelope("Product fetched successfully.", serialize_doc(get_or_404(col, obj_id, "product")))


@router.patch("/product/{id}")
def update_product(
    payload: ProductUpdate,
    obj_id: ObjectId = Depends(product_id),
    col: Collection = Depends(products),
):
    return envelope("Product updated successfully.", patch_document(col, obj_id, payload, "product"))


@router.delete("/product/{id}")
def delete_product(obj_id: ObjectId = Depends(product_id), col: Collection = Depends(products)):
    delete_or_404(col, obj_id, "product")
    return envelope("Product deleted successfully.")
