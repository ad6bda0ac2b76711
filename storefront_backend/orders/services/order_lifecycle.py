# orders/services/order_lifecycle.py

"""
ORDER / PAYMENT LIFECYCLE DOMAIN RULES

Single source of truth for:
- the canonical status vocabulary (English)
- legacy aliases accepted at input boundaries
- which payment status transitions automated writers may apply

DESIGN PRINCIPLES:
- No database writes
- No side effects
"""

from __future__ import annotations

from orders.models import Order
from orders.services.exceptions import (
    OrderNotRepayableError,
    UnknownStatusError,
)

# ============================================================
# VOCABULARY
# ============================================================

ORDER_STATUSES = frozenset(value for value, _ in Order.STATUS_CHOICES)
PAYMENT_STATUSES = frozenset(value for value, _ in Order.PAYMENT_STATUS_CHOICES)

# Older storefront screens wrote Portuguese order statuses.
LEGACY_ORDER_STATUS_ALIASES = {
    "pendente": Order.STATUS_PENDING,
    "pago": Order.STATUS_PAID,
    "enviado": Order.STATUS_SHIPPED,
    "entregue": Order.STATUS_DELIVERED,
    "cancelado": Order.STATUS_CANCELLED,
}


def normalize_order_status(value) -> str:
    status = str(value or "").strip().lower()
    status = LEGACY_ORDER_STATUS_ALIASES.get(status, status)
    if status not in ORDER_STATUSES:
        raise UnknownStatusError(f"Unknown order status '{value}'")
    return status


def normalize_payment_status(value) -> str:
    status = str(value or "").strip().lower()
    if status not in PAYMENT_STATUSES:
        raise UnknownStatusError(f"Unknown payment status '{value}'")
    return status


# ============================================================
# PAYMENT TRANSITIONS
# ============================================================

TERMINAL_PAYMENT_STATES = {
    Order.PAYMENT_REFUNDED,
}

# Forward-only. A failed payment may be retried on the same preference,
# so failed can still move to pending or paid.
ALLOWED_PAYMENT_TRANSITIONS = {
    Order.PAYMENT_PENDING: {
        Order.PAYMENT_PAID,
        Order.PAYMENT_FAILED,
        Order.PAYMENT_REFUNDED,
    },
    Order.PAYMENT_FAILED: {
        Order.PAYMENT_PENDING,
        Order.PAYMENT_PAID,
    },
    Order.PAYMENT_PAID: {
        Order.PAYMENT_REFUNDED,
    },
}


def can_transition_payment(*, from_status: str, to_status: str) -> bool:
    if from_status in TERMINAL_PAYMENT_STATES:
        return False

    return to_status in ALLOWED_PAYMENT_TRANSITIONS.get(from_status, set())


# ============================================================
# REPAY
# ============================================================

def validate_repayable(*, order: Order):
    """
    Only orders still waiting for payment may get a new checkout preference.
    """
    if order.status != Order.STATUS_PENDING:
        raise OrderNotRepayableError(
            f"Order {order.order_number} is '{order.status}' and cannot be paid again"
        )
    if not order.items.exists():
        raise OrderNotRepayableError(f"Order {order.order_number} has no items")
