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
    parse_object_id,
    serialize_doc,
)
from database import collection
from schemas import WishlistCreate

router = APIRouter(tags=["wishlist"])
wishlists = collection("wishlist")
products = collection("product")
wishlist_id = object_id_param("wishlist")

SNAPSHOT_FIELDS = ("name", "price", "image", "category", "seller_email", "rating")


@router.post("/wishlist", status_code=201)
def add_to_wishlist(
    payload: WishlistCreate,
    col: Collection = Depends(wishlists),
    product_col: Collection = Depends(products),
):
    product = get_or_404(product_col, parse_object_id(payload.product_id, "product"), "product")
    if col.find_one({"customer_email": payload.customer_email, "product_id": payload.product_id}):
        raise HTTPException(status_code=409, detail="Product already in wishlist")
    snapshot = {k: product.get(k) for k in SNAPSHOT_FIELDS}
    created = insert_document(col, {**payload.model_dump(), "product": snapshot})
    return envelope("Product added to wishlist.", created, inserted_id=created["id"])


@router.get("/wishlist")
def list_wishlist(customer_email: Optional[str] = None, col: Collection = Depends(wishlists)):
    query = {"customer_email": customer_email} if customer_email else {}
    return envelope("Wishlist fetched successfully.", find_documents(col, query))


@router.get("/wishlist/{id}")
def get_wishlist_item(obj_id: ObjectId = Depends(wishlist_id), col: Collection = Depends(wishlists)):
    return envelope("Wishlist item fetched successfully.", serialize_doc(get_or_404(col, obj_id, "wishlist item")))


@router.delete("/wishlist/{id}")
def remove_from_wishlist(obj_id: ObjectId = Depends(wishlist_id), col: Collection = Depends(wishlists)):
    delete_or_404(col, obj_id, "wishlist item")
    return envelope("Product removed from wishlist.")
