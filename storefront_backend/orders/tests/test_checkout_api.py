# orders/tests/test_checkout_api.py

from __future__ import annotations

from decimal import Decimal
from unittest.mock import patch

from django.test import TestCase, override_settings
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from coupons.models import Coupon
from orders.models import Order
from orders.tests.helpers import checkout_payload, make_order
from payments.services.exceptions import PaymentProviderError
from payments.services.mercadopago import MercadoPagoClient

PREFERENCE = {"id": "pref-1", "init_point": "https://www.mercadopago.com.br/checkout/v1/redirect?pref_id=pref-1"}


@override_settings(STOREFRONT_BASE_URL="https://loja.test", STORE_CURRENCY="BRL")
class CheckoutApiTests(TestCase):
    """
    GUARANTEES:
    - Checkout creates a pending/pending order priced server-side
    - The preference points back to the new order
    - Provider failure answers 502 and keeps the order pending
    """

    def setUp(self):
        self.client = APIClient()
        self.url = reverse("checkout")

    @patch.object(MercadoPagoClient, "create_preference", return_value=PREFERENCE)
    def test_checkout_creates_order_and_preference(self, create_preference):
        res = self.client.post(self.url, checkout_payload(), format="json")

        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        self.assertEqual(res.data["init_point"], PREFERENCE["init_point"])

        order = Order.objects.get(id=res.data["order_id"])
        self.assertEqual(order.order_number, res.data["order_number"])
        self.assertEqual(order.status, Order.STATUS_PENDING)
        self.assertEqual(order.payment_status, Order.PAYMENT_PENDING)
        self.assertEqual(order.total_price, Decimal("240.00"))
        self.assertEqual(order.user_id, "user_123")
        self.assertEqual(order.items.count(), 1)

        body = create_preference.call_args.args[0]
        self.assertEqual(body["external_reference"], str(order.id))
        self.assertEqual(body["notification_url"], "https://loja.test/api/payments/mercadopago/webhook/")

    @patch.object(MercadoPagoClient, "create_preference", return_value=PREFERENCE)
    def test_client_totals_are_ignored(self, create_preference):
        payload = checkout_payload(total_price="1.00", subtotal="1.00")

        res = self.client.post(self.url, payload, format="json")

        order = Order.objects.get(id=res.data["order_id"])
        self.assertEqual(order.total_price, Decimal("240.00"))

    @patch.object(MercadoPagoClient, "create_preference", return_value=PREFERENCE)
    def test_checkout_with_coupon(self, create_preference):
        Coupon.objects.create(code="DEZ", discount_type=Coupon.TYPE_PERCENTAGE, value=Decimal("10"))

        res = self.client.post(self.url, checkout_payload(coupon_code="dez"), format="json")

        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        order = Order.objects.get(id=res.data["order_id"])
        self.assertEqual(order.coupon_code, "DEZ")
        self.assertEqual(order.discount_amount, Decimal("20.00"))
        self.assertEqual(order.total_price, Decimal("220.00"))

    @patch.object(MercadoPagoClient, "create_preference")
    def test_invalid_coupon_is_400_and_creates_nothing(self, create_preference):
        res = self.client.post(self.url, checkout_payload(coupon_code="NOPE"), format="json")

        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(res.data["error"]["code"], "invalid_coupon")
        self.assertFalse(Order.objects.exists())
        create_preference.assert_not_called()

    def test_empty_cart_is_400(self):
        res = self.client.post(self.url, checkout_payload(items=[]), format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("items", res.data)

    def test_missing_customer_is_400(self):
        payload = checkout_payload()
        del payload["customer"]
        res = self.client.post(self.url, payload, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)

    def test_zero_quantity_is_400(self):
        payload = checkout_payload()
        payload["items"][0]["quantity"] = 0
        res = self.client.post(self.url, payload, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)

    @patch.object(MercadoPagoClient, "create_preference", side_effect=PaymentProviderError("down", status_code=503))
    def test_provider_failure_is_502_and_order_stays_pending(self, create_preference):
        res = self.client.post(self.url, checkout_payload(), format="json")

        self.assertEqual(res.status_code, status.HTTP_502_BAD_GATEWAY)
        self.assertEqual(res.data["error"]["code"], "payment_provider_error")

        order = Order.objects.get()
        self.assertEqual(order.status, Order.STATUS_PENDING)
        self.assertEqual(order.payment_status, Order.PAYMENT_PENDING)


class RepayApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()

    @patch.object(MercadoPagoClient, "create_preference", return_value=PREFERENCE)
    def test_repay_pending_order(self, create_preference):
        order = make_order()

        res = self.client.post(reverse("orders:order-repay", args=[order.id]))

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["init_point"], PREFERENCE["init_point"])
        self.assertEqual(res.data["order_id"], str(order.id))

    @patch.object(MercadoPagoClient, "create_preference")
    def test_repay_paid_order_is_400(self, create_preference):
        order = make_order(status=Order.STATUS_PAID, payment_status=Order.PAYMENT_PAID)

        res = self.client.post(reverse("orders:order-repay", args=[order.id]))

        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(res.data["error"]["code"], "order_not_repayable")
        create_preference.assert_not_called()

    def test_repay_unknown_order_is_404(self):
        res = self.client.post(reverse("orders:order-repay", args=["00000000-0000-0000-0000-000000000000"]))
        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)
