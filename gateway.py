"""
Razorpay bridge: gateway order creation and payment signature checks.
"""
import hmac
import hashlib
from typing import Optional

import razorpay

from config import Config
from logger import get_logger

logger = get_logger(__name__)

_client = None


class GatewayNotConfigured(Exception):
    pass


def get_gateway_client() -> razorpay.Client:
    global _client
    if _client is None:
        if not Config.RAZORPAY_KEY_ID or not Config.RAZORPAY_KEY_SECRET:
            raise GatewayNotConfigured("Razorpay credentials are not configured (RAZORPAY_KEY_ID / RAZORPAY_KEY_SECRET)")
        _client = razorpay.Client(auth=(Config.RAZORPAY_KEY_ID, Config.RAZORPAY_KEY_SECRET))
    return _client


def to_minor_units(amount: float) -> int:
    """Gateway amounts are in the smallest currency unit (paise for INR)."""
    return int(round(amount * 100))


def create_gateway_order(amount: float, receipt: str, notes: Optional[dict] = None) -> dict:
    order = get_gateway_client().order.create({
        "amount": to_minor_units(amount),
        "currency": Config.PAYMENT_CURRENCY,
        "receipt": receipt,
        "notes": notes or {},
    })
    logger.info("Razorpay order created: %s", order.get("id"))
    return order


def compute_signature(gateway_order_id: str, payment_id: str, secret: Optional[str] = None) -> str:
    secret = secret if secret is not None else Config.RAZORPAY_KEY_SECRET
    if not secret:
        raise GatewayNotConfigured("RAZORPAY_KEY_SECRET is not configured")
    return hmac.new(
        secret.encode(),
        f"{gateway_order_id}|{payment_id}".encode(),
        hashlib.sha256,
    ).hexdigest()


def signature_matches(gateway_order_id: str, payment_id: str, signature: str, secret: Optional[str] = None) -> bool:
    expected = compute_signature(gateway_order_id, payment_id, secret)
    return hmac.compare_digest(expected.encode(), signature.encode())
