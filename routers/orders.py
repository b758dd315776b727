import logging
from typing import Optional

from bson import ObjectId
from fastapi import APIRouter, Depends
from pymongo.collection import Collection

from crud import (
    delete_or_404,
    envelope,
    find_documents,
    get_or_404,
    insert_document,
    object_id_param,
    parse_object_id,
    patch_document,
    serialize_doc,
)
from database import collection
from schemas import OrderCreate, OrderStatus, OrderUpdate

logger = logging.getLogger(__name__)

router = APIRouter(tags=["order"])
orders = collection("order")
products = collection("product")
order_id = object_id_param("order")


@router.post("/order", status_code=201)
def create_order(
    payload: OrderCreate,
    col: Collection = Depends(orders),
    product_col: Collection = Depends(products),
):
    product = get_or_404(product_col, parse_object_id(payload.product_id, "product"), "product")
    amount = round(float(product.get("price", 0)) * payload.quantity, 2)
    created = insert_document(col, {**payload.model_dump(), "amount": amount, "status": "pending"})
    logger.info("Order %s placed by %s", created["id"], payload.customer_email)
    return envelope("Order placed successfully.", created, inserted_id=created["id"])


@router.get("/order")
def list_orders(
    customer_email: Optional[str] = None,
    status: Optional[OrderStatus] = None,
    col: Collection = Depends(orders),
):
    query = {}
    if customer_email:
        query["customer_email"] = customer_email
    if status:
        query["status"] = status
    return envelope("Orders fetched successfully.", find_documents(col, query))


@router.get("/order/{id}")
def get_order(obj_id: ObjectId = Depends(order_id), col: Collection = Depends(orders)):
    return envelope("Order fetched successfully.", serialize_doc(get_or_404(col, obj_id, "order")))


@router.patch("/order/{id}")
def update_order(
    payload: OrderUpdate,
    obj_id: ObjectId = Depends(order_id),
    col: Collection = Depends(orders),
):
    return envelope("Order updated successfully.", patch_document(col, obj_id, payload, "order"))


@router.delete("/order/{id}")
def delete_order(obj_id: ObjectId = Depends(order_id), col: Collection = Depends(orders)):
    delete_or_404(col, obj_id, "order")
    return envelope("Order deleted successfully.")
