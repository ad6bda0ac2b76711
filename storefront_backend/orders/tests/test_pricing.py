# orders/tests/test_pricing.py

from __future__ import annotations

from datetime import timedelta
from decimal import Decimal

from django.test import SimpleTestCase, TestCase
from django.utils import timezone

from coupons.models import Coupon
from coupons.services import CouponExpiredError, CouponInactiveError, CouponNotFoundError
from orders.services.pricing import price_cart
from orders.services.shipping import calculate_shipping


def _line(qty, price="100.00", fee="0.00"):
    return {"quantity": qty, "unit_price": Decimal(price), "customization_fee": Decimal(fee)}


class ShippingTableTests(SimpleTestCase):
    def test_table(self):
        self.assertEqual(calculate_shipping(1).price, Decimal("25.00"))
        self.assertEqual(calculate_shipping(2).price, Decimal("20.00"))
        self.assertEqual(calculate_shipping(3).price, Decimal("15.00"))

    def test_free_from_four(self):
        for qty in (4, 5, 40):
            with self.subTest(qty=qty):
                quote = calculate_shipping(qty)
                self.assertEqual(quote.price, Decimal("0.00"))
                self.assertTrue(quote.is_free)

    def test_empty_cart(self):
        quote = calculate_shipping(0)
        self.assertEqual(quote.price, Decimal("0.00"))
        self.assertFalse(quote.is_free)


class PriceCartTests(TestCase):
    """
    GUARANTEES:
    - Totals are computed from line prices, never trusted from the client
    - Coupons discount the subtotal or remove shipping
    - Total never goes below zero
    """

    def test_without_coupon(self):
        totals = price_cart(items=[_line(2, fee="10.00")])

        self.assertEqual(totals.subtotal, Decimal("200.00"))
        self.assertEqual(totals.customization_fee_total, Decimal("20.00"))
        self.assertEqual(totals.shipping_price, Decimal("20.00"))
        self.assertEqual(totals.discount_amount, Decimal("0.00"))
        self.assertEqual(totals.total_price, Decimal("240.00"))
        self.assertEqual(totals.coupon_code, "")

    def test_shipping_uses_total_quantity_across_lines(self):
        totals = price_cart(items=[_line(2), _line(2)])
        self.assertEqual(totals.shipping_price, Decimal("0.00"))

    def test_percentage_coupon(self):
        Coupon.objects.create(code="DEZ", discount_type=Coupon.TYPE_PERCENTAGE, value=Decimal("10"))

        totals = price_cart(items=[_line(2, fee="10.00")], coupon_code=" dez ")

        self.assertEqual(totals.discount_amount, Decimal("20.00"))
        self.assertEqual(totals.total_price, Decimal("220.00"))
        self.assertEqual(totals.coupon_code, "DEZ")

    def test_fixed_coupon_is_capped_at_subtotal(self):
        Coupon.objects.create(code="MIL", discount_type=Coupon.TYPE_FIXED, value=Decimal("1000"))

        totals = price_cart(items=[_line(1, price="50.00")], coupon_code="MIL")

        self.assertEqual(totals.discount_amount, Decimal("50.00"))
        self.assertEqual(totals.total_price, Decimal("25.00"))

    def test_free_shipping_coupon(self):
        Coupon.objects.create(code="FRETE", discount_type=Coupon.TYPE_FREE_SHIPPING, value=Decimal("5"))

        totals = price_cart(items=[_line(1)], coupon_code="FRETE")

        self.assertEqual(totals.shipping_price, Decimal("0.00"))
        self.assertEqual(totals.discount_amount, Decimal("0.00"))
        self.assertEqual(totals.total_price, Decimal("100.00"))

    def test_unknown_coupon(self):
        with self.assertRaises(CouponNotFoundError):
            price_cart(items=[_line(1)], coupon_code="NOPE")

    def test_inactive_coupon(self):
        Coupon.objects.create(code="OFF", discount_type=Coupon.TYPE_FIXED, value=Decimal("5"), is_active=False)
        with self.assertRaises(CouponInactiveError):
            price_cart(items=[_line(1)], coupon_code="OFF")

    def test_expired_coupon(self):
        Coupon.objects.create(
            code="OLD",
            discount_type=Coupon.TYPE_FIXED,
            value=Decimal("5"),
            expiry_date=timezone.now() - timedelta(days=1),
        )
        with self.assertRaises(CouponExpiredError):
            price_cart(items=[_line(1)], coupon_code="OLD")
