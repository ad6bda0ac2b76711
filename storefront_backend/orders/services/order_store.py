# orders/services/order_store.py

"""
ORDER STORE

Persistence operations shared by checkout, the payment reconciler and
admin edits. Views and other apps go through these functions instead of
writing Order fields directly.
"""

from __future__ import annotations

import logging
import uuid

from django.db import transaction
from django.utils import timezone

from orders.models import Order, OrderItem
from orders.services.exceptions import OrderNotFoundError
from orders.services.pricing import CheckoutTotals

logger = logging.getLogger(__name__)


def _as_uuid(value):
    try:
        return uuid.UUID(str(value).strip())
    except (ValueError, TypeError, AttributeError):
        return None


def find_order_by_external_reference(reference, *, for_update: bool = False) -> Order | None:
    """
    Resolve the provider's external_reference (our Order.id) to an order.
    Anything that is not a UUID cannot be one of ours.
    """
    order_id = _as_uuid(reference)
    if order_id is None:
        return None

    qs = Order.objects.all()
    if for_update:
        qs = qs.select_for_update()
    return qs.filter(id=order_id).first()


def update_order_status(
    order_id,
    status: str,
    payment_status: str | None = None,
    *,
    payment_id: str | None = None,
    payment_synced_at=None,
) -> Order:
    """
    Single-row status write. updated_at always advances.
    Raises OrderNotFoundError for unknown ids.
    """
    with transaction.atomic():
        order = find_order_by_external_reference(order_id, for_update=True)
        if order is None:
            raise OrderNotFoundError(f"Order '{order_id}' does not exist")

        fields = ["status", "updated_at"]
        order.status = status

        if payment_status is not None:
            order.payment_status = payment_status
            fields.append("payment_status")
            if payment_status == Order.PAYMENT_PAID and not order.paid_at:
                order.paid_at = timezone.now()
                fields.append("paid_at")

        if payment_id is not None:
            order.payment_id = str(payment_id)
            fields.append("payment_id")

        if payment_synced_at is not None:
            order.payment_synced_at = payment_synced_at
            fields.append("payment_synced_at")

        order.save(update_fields=fields)

    logger.info(
        "Order status updated",
        extra={"order_id": str(order.id), "status": order.status, "payment_status": order.payment_status},
    )
    return order


@transaction.atomic
def create_order(
    *,
    items: list[dict],
    customer: dict,
    address: dict,
    totals: CheckoutTotals,
    user_id: str = "",
    notes: str = "",
    currency: str = "BRL",
) -> Order:
    order = Order.objects.create(
        user_id=str(user_id or "").strip(),
        status=Order.STATUS_PENDING,
        payment_status=Order.PAYMENT_PENDING,
        currency=currency,
        subtotal=totals.subtotal,
        shipping_price=totals.shipping_price,
        customization_fee_total=totals.customization_fee_total,
        discount_amount=totals.discount_amount,
        total_price=totals.total_price,
        coupon_code=totals.coupon_code,
        customer_first_name=str(customer.get("first_name") or "").strip(),
        customer_last_name=str(customer.get("last_name") or "").strip(),
        customer_email=str(customer.get("email") or "").strip(),
        customer_phone=str(customer.get("phone") or "").strip(),
        customer_document=str(customer.get("document") or "").strip(),
        shipping_address=dict(address or {}),
        notes=str(notes or "").strip(),
    )

    for line in items:
        customization = line.get("customization") or {}
        OrderItem.objects.create(
            order=order,
            product_id=str(line["product_id"]),
            product_slug=str(line.get("product_slug") or ""),
            title=str(line["title"]),
            image=str(line.get("image") or ""),
            size=str(line["size"]),
            quantity=int(line["quantity"]),
            unit_price=line["unit_price"],
            customization_name=str(customization.get("name") or ""),
            customization_number=str(customization.get("number") or ""),
            customization_fee=line.get("customization_fee") or 0,
        )

    logger.info(
        "Order created",
        extra={"order_id": str(order.id), "order_number": order.order_number, "total": str(order.total_price)},
    )
    return order


def apply_admin_update(
    order_id,
    *,
    status: str | None = None,
    payment_status: str | None = None,
    tracking_code: str | None = None,
    notes: str | None = None,
) -> Order:
    """
    Explicit staff edit. Values are already normalized by the serializer;
    the payment lifecycle guard does not apply to manual corrections.
    """
    with transaction.atomic():
        order = find_order_by_external_reference(order_id, for_update=True)
        if order is None:
            raise OrderNotFoundError(f"Order '{order_id}' does not exist")

        fields = ["updated_at"]
        changes = {
            "status": status,
            "payment_status": payment_status,
            "tracking_code": tracking_code,
            "notes": notes,
        }
        for name, value in changes.items():
            if value is not None:
                setattr(order, name, value)
                fields.append(name)

        if order.payment_status == Order.PAYMENT_PAID and not order.paid_at:
            order.paid_at = timezone.now()
            fields.append("paid_at")

        order.save(update_fields=fields)

    logger.info(
        "Order updated by staff",
        extra={"order_id": str(order.id), "fields": fields},
    )
    return order
