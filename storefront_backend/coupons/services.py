# coupons/services.py

"""
COUPON SERVICES

Lookup/validation used by the public coupon check and by checkout pricing.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from coupons.models import Coupon, normalize_coupon_code

logger = logging.getLogger(__name__)

TWOPLACES = Decimal("0.01")


class CouponError(Exception):
    """Base exception for coupon validation failures."""


class CouponNotFoundError(CouponError):
    pass


class CouponInactiveError(CouponError):
    pass


class CouponExpiredError(CouponError):
    pass


@dataclass(frozen=True)
class CouponDiscount:
    code: str
    discount_amount: Decimal
    free_shipping: bool


def get_valid_coupon(code) -> Coupon:
    normalized = normalize_coupon_code(code)
    coupon = Coupon.objects.filter(code=normalized).first() if normalized else None

    if coupon is None:
        raise CouponNotFoundError("Cupom inválido ou não encontrado.")
    if not coupon.is_active:
        raise CouponInactiveError("Este cupom não está mais ativo.")
    if coupon.is_expired():
        raise CouponExpiredError("Este cupom expirou.")

    return coupon


def compute_discount(*, coupon: Coupon, subtotal: Decimal) -> CouponDiscount:
    """
    Percentage and fixed coupons discount the product subtotal (never below zero).
    Free shipping coupons zero the shipping line instead.
    """
    subtotal = Decimal(subtotal)

    if coupon.discount_type == Coupon.TYPE_FREE_SHIPPING:
        return CouponDiscount(code=coupon.code, discount_amount=Decimal("0.00"), free_shipping=True)

    if coupon.discount_type == Coupon.TYPE_PERCENTAGE:
        amount = subtotal * Decimal(coupon.value) / Decimal("100")
    else:
        amount = Decimal(coupon.value)

    amount = min(amount, subtotal).quantize(TWOPLACES, rounding=ROUND_HALF_UP)
    return CouponDiscount(code=coupon.code, discount_amount=amount, free_shipping=False)
