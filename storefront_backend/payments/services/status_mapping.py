# payments/services/status_mapping.py

"""
Mercado Pago payment status -> (order status, payment status).

| provider  | order     | payment  |
|-----------|-----------|----------|
| approved  | paid      | paid     |
| rejected  | cancelled | failed   |
| refunded  | cancelled | refunded |
| other     | pending   | pending  |

"other" includes pending, in_process, authorized, charged_back, cancelled...
Whether the pending pair may actually be written is decided by the
order lifecycle, not here.
"""

from __future__ import annotations

from typing import NamedTuple

from orders.models import Order


class StatusPair(NamedTuple):
    order_status: str
    payment_status: str


PROVIDER_STATUS_MAP = {
    "approved": StatusPair(Order.STATUS_PAID, Order.PAYMENT_PAID),
    "rejected": StatusPair(Order.STATUS_CANCELLED, Order.PAYMENT_FAILED),
    "refunded": StatusPair(Order.STATUS_CANCELLED, Order.PAYMENT_REFUNDED),
}

DEFAULT_STATUS_PAIR = StatusPair(Order.STATUS_PENDING, Order.PAYMENT_PENDING)


def map_provider_status(provider_status) -> StatusPair:
    key = str(provider_status or "").strip().lower()
    return PROVIDER_STATUS_MAP.get(key, DEFAULT_STATUS_PAIR)
