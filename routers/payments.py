import math
import time
from typing import Any, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from config import Config
from database import create_document, get_document_by_id, update_document
from gateway import create_gateway_order, signature_matches, GatewayNotConfigured
from logger import get_logger
from routers.orders import get_visible_order, with_refs
from schemas import Order, OrderItem
from security import get_current_user

router = APIRouter()
logger = get_logger(__name__)


class CreatePaymentOrderRequest(BaseModel):
    items: Any = None
    total_amount: Any = Field(None, alias="totalAmount")

    model_config = {"populate_by_name": True}


class VerifyPaymentRequest(BaseModel):
    order_id: Optional[str] = Field(None, alias="orderId")
    payment_id: Optional[str] = Field(None, alias="paymentId")
    razorpay_signature: Optional[str] = Field(None, alias="razorpaySignature")

    model_config = {"populate_by_name": True}


class PaymentFailureRequest(BaseModel):
    order_id: Optional[str] = Field(None, alias="orderId")
    error: Optional[Any] = None

    model_config = {"populate_by_name": True}


def _positive_amount(value) -> Optional[float]:
    try:
        amount = float(value)
    except (TypeError, ValueError):
        return None
    return amount if math.isfinite(amount) and amount > 0 else None


@router.post("/create-order", status_code=201)
def create_payment_order(payload: CreatePaymentOrderRequest, user: dict = Depends(get_current_user)):
    if not isinstance(payload.items, list):
        raise HTTPException(400, "Items must be an array")
    if payload.total_amount in (None, ""):
        raise HTTPException(400, "Missing required field: totalAmount")
    amount = _positive_amount(payload.total_amount)
    if amount is None:
        raise HTTPException(400, "Total amount must be a valid number greater than 0")
    try:
        items = [OrderItem(**i) for i in payload.items]
    except (TypeError, ValueError) as e:
        raise HTTPException(400, {"message": "Invalid order items", "error": str(e)})

    try:
        gateway_order = create_gateway_order(
            amount,
            receipt=f"order_{int(time.time() * 1000)}",
            notes={"userId": user["_id"], "itemCount": len(items)},
        )
    except GatewayNotConfigured as e:
        logger.error("Payment order creation error: %s", e)
        raise HTTPException(503, {"message": "Payment gateway is not configured", "error": str(e)})
    except Exception as e:
        logger.exception("Payment order creation error")
        raise HTTPException(500, {"message": "Failed to create payment order", "error": str(e)})

    order = Order(
        user_id=user["_id"],
        items=items,
        total_amount=amount,
        currency=Config.PAYMENT_CURRENCY,
        payment_status="pending",
        razorpay_order_id=gateway_order["id"],
    )
    order_id = create_document("order", order)
    logger.info("Order %s saved with gateway order %s", order_id, gateway_order["id"])

    return {
        "success": True,
        "razorpayOrderId": gateway_order["id"],
        "orderId": order_id,
        "amount": amount,
        "currency": Config.PAYMENT_CURRENCY,
        "message": "Payment order created successfully",
    }


@router.post("/verify")
def verify_payment(payload: VerifyPaymentRequest, user: dict = Depends(get_current_user)):
    if not payload.order_id or not payload.payment_id or not payload.razorpay_signature:
        raise HTTPException(400, "Missing required fields: orderId, paymentId, razorpaySignature")

    order = get_visible_order(payload.order_id, user)

    try:
        valid = signature_matches(order.get("razorpay_order_id") or "", payload.payment_id, payload.razorpay_signature)
    except GatewayNotConfigured as e:
        raise HTTPException(503, {"message": "Payment gateway is not configured", "error": str(e)})

    if not valid:
        logger.warning("Signature verification failed for order %s", payload.order_id)
        raise HTTPException(400, "Payment verification failed - invalid signature")

    # Gateway retries after a recorded failure land here too
    update_document("order", payload.order_id, {
        "payment_status": "paid",
        "razorpay_payment_id": payload.payment_id,
        "razorpay_signature": payload.razorpay_signature,
    })
    logger.info("Order %s marked as paid", payload.order_id)
    return {
        "success": True,
        "message": "Payment verified successfully",
        "order": with_refs(get_document_by_id("order", payload.order_id)),
    }


@router.post("/failure")
def record_payment_failure(payload: PaymentFailureRequest, user: dict = Depends(get_current_user)):
    if not payload.order_id:
        raise HTTPException(400, "Missing orderId")

    order = get_visible_order(payload.order_id, user)
    if order.get("payment_status") == "paid":
        raise HTTPException(400, "Order is already paid")

    reason = payload.error if isinstance(payload.error, str) or payload.error is None else str(payload.error)
    update_document("order", payload.order_id, {"payment_status": "failed", "failure_reason": reason})
    logger.info("Recorded payment failure for order %s", payload.order_id)
    return {
        "success": True,
        "message": "Payment failure recorded",
        "order": with_refs(get_document_by_id("order", payload.order_id)),
    }


@router.get("/{order_id}")
def get_payment_status(order_id: str, user: dict = Depends(get_current_user)):
    order = get_visible_order(order_id, user)
    return {"success": True, "paymentStatus": order.get("payment_status"), "order": with_refs(order)}
