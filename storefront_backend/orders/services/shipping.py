# orders/services/shipping.py

"""
Flat shipping table by number of shirts in the order.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

FREE_SHIPPING_MIN_QUANTITY = 4

SHIPPING_TABLE = {
    1: Decimal("25.00"),
    2: Decimal("20.00"),
    3: Decimal("15.00"),
}


@dataclass(frozen=True)
class ShippingQuote:
    price: Decimal
    description: str
    is_free: bool


def calculate_shipping(total_quantity: int) -> ShippingQuote:
    qty = int(total_quantity or 0)

    if qty >= FREE_SHIPPING_MIN_QUANTITY:
        return ShippingQuote(Decimal("0.00"), "Frete grátis para 4+ camisas", True)

    if qty <= 0:
        return ShippingQuote(Decimal("0.00"), "Carrinho vazio", False)

    label = "camisa" if qty == 1 else "camisas"
    return ShippingQuote(SHIPPING_TABLE[qty], f"Frete para {qty} {label}", False)
