# payments/services/preferences.py

"""
Mercado Pago checkout preference for an Order.

The preference links the hosted checkout back to us through:
- external_reference = str(order.id)   (resolved again by the webhook)
- notification_url   = {STOREFRONT_BASE_URL}/api/payments/mercadopago/webhook/
- back_urls          = storefront result pages carrying ?order_id=
"""

from __future__ import annotations

import logging
import re
from decimal import Decimal

from django.conf import settings

from orders.models import Order
from payments.gateway import get_gateway

logger = logging.getLogger(__name__)

WEBHOOK_PATH = "/api/payments/mercadopago/webhook/"

_NON_DIGITS = re.compile(r"\D+")


def _digits(value) -> str:
    return _NON_DIGITS.sub("", str(value or ""))


def _amount(value) -> float:
    # Mercado Pago expects JSON numbers for unit_price
    return float(Decimal(str(value or "0")))


def _payer(order: Order) -> dict:
    address = order.shipping_address or {}
    phone = _digits(order.customer_phone)

    payer = {
        "name": order.customer_first_name,
        "surname": order.customer_last_name,
        "email": order.customer_email,
        "phone": {"area_code": phone[:2], "number": phone[2:]},
        "address": {
            "zip_code": _digits(address.get("zip_code")),
            "street_name": str(address.get("street") or ""),
            "street_number": str(address.get("number") or ""),
        },
    }

    document = _digits(order.customer_document)
    if document:
        payer["identification"] = {"type": "CPF", "number": document}

    return payer


def _discounted_items(order: Order, currency: str) -> list[dict]:
    # Checkout Pro has no order-level discount field
    titles = ", ".join(f"{item.quantity}x {item.title}" for item in order.items.all())
    return [
        {
            "id": order.order_number,
            "title": f"Pedido {order.order_number}",
            "description": f"{titles} (cupom {order.coupon_code}: -{order.discount_amount})"[:256],
            "quantity": 1,
            "unit_price": _amount(order.total_price),
            "currency_id": currency,
        }
    ]


def _itemized(order: Order, currency: str) -> list[dict]:
    items = []
    for item in order.items.all():
        items.append(
            {
                "id": item.product_id,
                "title": item.title,
                "description": item.describe(),
                "picture_url": item.image or None,
                "quantity": int(item.quantity),
                "unit_price": _amount(Decimal(item.unit_price) + Decimal(item.customization_fee)),
                "currency_id": currency,
            }
        )

    if order.shipping_price and Decimal(order.shipping_price) > 0:
        items.append(
            {
                "id": "shipping",
                "title": "Frete",
                "quantity": 1,
                "unit_price": _amount(order.shipping_price),
                "currency_id": currency,
            }
        )

    return items


def build_preference_body(*, order: Order, base_url: str, currency: str) -> dict:
    """
    Item lines always add up to order.total_price; a discounted order is
    charged as one line for the whole total.
    """
    base_url = base_url.rstrip("/")

    if order.discount_amount and Decimal(order.discount_amount) > 0:
        items = _discounted_items(order, currency)
    else:
        items = _itemized(order, currency)

    body = {
        "items": items,
        "payer": _payer(order),
        "back_urls": {
            "success": f"{base_url}/pedido/sucesso?order_id={order.id}",
            "failure": f"{base_url}/pedido/erro?order_id={order.id}",
            "pending": f"{base_url}/pedido/pendente?order_id={order.id}",
        },
        "auto_return": "approved",
        "external_reference": str(order.id),
        "notification_url": f"{base_url}{WEBHOOK_PATH}",
        "statement_descriptor": "STOREFRONT",
    }

    return body


def create_order_preference(*, order: Order, client=None) -> dict:
    """
    Create a hosted checkout preference for the order.

    Returns {"preference_id", "init_point"}.
    Raises PaymentProviderError / GatewayConfigurationError.
    """
    client = client or get_gateway().client
    body = build_preference_body(
        order=order,
        base_url=settings.STOREFRONT_BASE_URL,
        currency=order.currency or settings.STORE_CURRENCY,
    )

    result = client.create_preference(body)

    logger.info(
        "Checkout preference created",
        extra={"order_id": str(order.id), "preference_id": result.get("id")},
    )
    return {"preference_id": str(result.get("id") or ""), "init_point": result["init_point"]}
