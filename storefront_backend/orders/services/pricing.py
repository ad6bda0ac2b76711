# orders/services/pricing.py

"""
CHECKOUT PRICING

Server-side totals for a checkout cart:
- subtotal               = sum(unit_price * quantity)
- customization_fee_total = sum(customization_fee * quantity)
- shipping               = quantity table (zeroed by free-shipping coupons)
- discount               = coupon discount on the subtotal
- total                  = subtotal + fees + shipping - discount (never below 0)
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from coupons.services import compute_discount, get_valid_coupon
from orders.services.shipping import calculate_shipping

TWOPLACES = Decimal("0.01")


def _money(v) -> Decimal:
    if v is None or v == "":
        return Decimal("0.00")
    return Decimal(str(v)).quantize(TWOPLACES, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class CheckoutTotals:
    subtotal: Decimal
    customization_fee_total: Decimal
    shipping_price: Decimal
    discount_amount: Decimal
    total_price: Decimal
    coupon_code: str = ""


def price_cart(*, items: list[dict], coupon_code: str = "") -> CheckoutTotals:
    """
    items: validated line dicts with unit_price, quantity, customization_fee.
    Raises coupons.services.CouponError for an unusable coupon code.
    """
    subtotal = Decimal("0.00")
    fees = Decimal("0.00")
    quantity = 0

    for line in items:
        qty = int(line["quantity"])
        subtotal += _money(line["unit_price"]) * qty
        fees += _money(line.get("customization_fee")) * qty
        quantity += qty

    subtotal = _money(subtotal)
    fees = _money(fees)
    shipping = calculate_shipping(quantity).price
    discount = Decimal("0.00")
    applied_code = ""

    if coupon_code:
        coupon = get_valid_coupon(coupon_code)
        result = compute_discount(coupon=coupon, subtotal=subtotal)
        discount = result.discount_amount
        if result.free_shipping:
            shipping = Decimal("0.00")
        applied_code = result.code

    total = max(subtotal + fees + shipping - discount, Decimal("0.00"))

    return CheckoutTotals(
        subtotal=subtotal,
        customization_fee_total=fees,
        shipping_price=_money(shipping),
        discount_amount=_money(discount),
        total_price=_money(total),
        coupon_code=applied_code,
    )
