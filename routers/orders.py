from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from config import Config
from database import create_document, get_documents, get_document_by_id, update_document, delete_document
from routers.auth import public_user
from schemas import Order, OrderItem, OrderStatus, PaymentStatus, ORDER_STATUSES
from security import get_current_user, require_admin, is_admin

router = APIRouter()

ITEM_COLLECTIONS = {"menu": "menuitem", "artwork": "artwork", "workshop": "workshop"}


class CreateOrderRequest(BaseModel):
    items: List[OrderItem]
    total_amount: Optional[float] = Field(None, ge=0)


class OrderUpdate(BaseModel):
    items: Optional[List[OrderItem]] = None
    total_amount: Optional[float] = Field(None, ge=0)
    order_status: Optional[OrderStatus] = None
    payment_status: Optional[PaymentStatus] = None


class OrderStatusUpdate(BaseModel):
    order_status: Optional[str] = Field(None, alias="orderStatus")

    model_config = {"populate_by_name": True}


def with_refs(order: dict) -> dict:
    """Attach the ordering user and the catalog document behind each line item."""
    if not order:
        return order
    user = get_document_by_id("user", order.get("user_id"))
    order["user"] = public_user(user) if user else None
    for item in order.get("items") or []:
        collection = ITEM_COLLECTIONS.get(item.get("item_type"))
        item["item"] = get_document_by_id(collection, item.get("item_id")) if collection else None
    return order


def get_visible_order(order_id: str, user: dict) -> dict:
    """The order if the caller owns it or is an admin; 404 otherwise."""
    order = get_document_by_id("order", order_id)
    if not order or (order.get("user_id") != user["_id"] and not is_admin(user)):
        raise HTTPException(404, "Order not found")
    return order


@router.get("")
def list_orders(admin: dict = Depends(require_admin)):
    return [with_refs(o) for o in get_documents("order", sort=[("created_at", -1)])]


@router.get("/me")
def my_orders(user: dict = Depends(get_current_user)):
    return [with_refs(o) for o in get_documents("order", {"user_id": user["_id"]}, sort=[("created_at", -1)])]


@router.get("/{order_id}")
def get_order(order_id: str, user: dict = Depends(get_current_user)):
    return with_refs(get_visible_order(order_id, user))


@router.post("", status_code=201)
def create_order(payload: CreateOrderRequest, user: dict = Depends(get_current_user)):
    if not payload.items:
        raise HTTPException(400, "Cart is empty")
    total = payload.total_amount
    if total is None:
        total = round(sum(i.price * i.quantity for i in payload.items), 2)
    order = Order(user_id=user["_id"], items=payload.items, total_amount=total, currency=Config.PAYMENT_CURRENCY)
    order_id = create_document("order", order)
    return with_refs(get_document_by_id("order", order_id))


@router.put("/{order_id}")
def update_order(order_id: str, payload: OrderUpdate, admin: dict = Depends(require_admin)):
    if not update_document("order", order_id, payload.model_dump(exclude_unset=True)):
        raise HTTPException(404, "Order not found")
    return with_refs(get_document_by_id("order", order_id))


@router.patch("/{order_id}/status")
def update_order_status(order_id: str, payload: OrderStatusUpdate, admin: dict = Depends(require_admin)):
    if payload.order_status not in ORDER_STATUSES:
        raise HTTPException(400, "Invalid status. Must be pending, processing, shipped, delivered, or cancelled.")
    if not update_document("order", order_id, {"order_status": payload.order_status}):
        raise HTTPException(404, "Order not found")
    return with_refs(get_document_by_id("order", order_id))


@router.delete("/{order_id}")
def delete_order(order_id: str, admin: dict = Depends(require_admin)):
    if not delete_document("order", order_id):
        raise HTTPException(404, "Order not found")
    return {"message": "Order deleted successfully"}
