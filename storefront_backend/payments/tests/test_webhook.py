# payments/tests/test_webhook.py

from __future__ import annotations

import json
from unittest.mock import patch

from django.db import DatabaseError
from django.test import TestCase, override_settings
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from orders.models import Order
from payments.models import PaymentEvent
from payments.services.exceptions import PaymentProviderError, PaymentProviderTimeout
from payments.services.mercadopago import MercadoPagoClient
from payments.tests.helpers import (
    DEV_PAYMENTS,
    ENFORCED_PAYMENTS,
    make_order,
    provider_payment,
    signed_webhook,
)


@override_settings(PAYMENTS=ENFORCED_PAYMENTS)
class WebhookAuthenticationTests(TestCase):
    """
    GUARANTEES:
    - Unsigned or mis-signed notifications are rejected with 401
      before the provider is contacted
    - Signature is checked before the event type filter
    """

    def setUp(self):
        self.client = APIClient()

    @patch.object(MercadoPagoClient, "get_payment")
    def test_missing_signature_is_401(self, get_payment):
        res = signed_webhook(self.client, signature="")
        self.assertEqual(res.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertIn("error", res.data)
        get_payment.assert_not_called()

    @patch.object(MercadoPagoClient, "get_payment")
    def test_missing_ts_is_401(self, get_payment):
        res = signed_webhook(self.client, signature="v1=abcdef")
        self.assertEqual(res.status_code, status.HTTP_401_UNAUTHORIZED)
        get_payment.assert_not_called()

    @patch.object(MercadoPagoClient, "get_payment")
    def test_missing_v1_is_401(self, get_payment):
        res = signed_webhook(self.client, signature="ts=1714568400")
        self.assertEqual(res.status_code, status.HTTP_401_UNAUTHORIZED)
        get_payment.assert_not_called()

    @patch.object(MercadoPagoClient, "get_payment")
    def test_wrong_secret_is_401(self, get_payment):
        res = signed_webhook(self.client, secret="not-the-secret")
        self.assertEqual(res.status_code, status.HTTP_401_UNAUTHORIZED)
        get_payment.assert_not_called()

    @patch.object(MercadoPagoClient, "get_payment")
    def test_unsigned_non_payment_event_is_still_401(self, get_payment):
        res = signed_webhook(self.client, event_type="merchant_order", signature="")
        self.assertEqual(res.status_code, status.HTTP_401_UNAUTHORIZED)

    @patch.object(MercadoPagoClient, "get_payment")
    def test_signed_non_payment_event_is_ignored(self, get_payment):
        res = signed_webhook(self.client, event_type="merchant_order")
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data, {"success": True, "detail": "ignored"})
        get_payment.assert_not_called()


class WebhookConfigurationTests(TestCase):
    def setUp(self):
        self.client = APIClient()

    @override_settings(PAYMENTS={"MERCADOPAGO": {**ENFORCED_PAYMENTS["MERCADOPAGO"], "WEBHOOK_SECRET": ""}})
    @patch.object(MercadoPagoClient, "get_payment")
    def test_missing_secret_while_enforced_is_500(self, get_payment):
        res = signed_webhook(self.client, signature="")
        self.assertEqual(res.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertIn("error", res.data)
        get_payment.assert_not_called()

    @override_settings(PAYMENTS={"MERCADOPAGO": {**ENFORCED_PAYMENTS["MERCADOPAGO"], "ACCESS_TOKEN": ""}})
    @patch.object(MercadoPagoClient, "get_payment")
    def test_missing_access_token_is_500(self, get_payment):
        res = signed_webhook(self.client)
        self.assertEqual(res.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        get_payment.assert_not_called()

    @override_settings(PAYMENTS=DEV_PAYMENTS)
    @patch.object(MercadoPagoClient, "get_payment")
    def test_development_mode_skips_signature(self, get_payment):
        order = make_order()
        get_payment.return_value = provider_payment(status="approved", external_reference=str(order.id))

        res = signed_webhook(self.client, signature="")

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        order.refresh_from_db()
        self.assertEqual(order.payment_status, Order.PAYMENT_PAID)

    @override_settings(PAYMENTS=ENFORCED_PAYMENTS)
    def test_invalid_json_body_is_500(self):
        res = self.client.post(
            reverse("payments:mercadopago-webhook"),
            data="{not json",
            content_type="application/json",
        )
        self.assertEqual(res.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertFalse(res.data["success"])
        self.assertIn("message", res.data)

    @override_settings(PAYMENTS=ENFORCED_PAYMENTS)
    def test_non_object_json_body_is_500(self):
        res = self.client.post(
            reverse("payments:mercadopago-webhook"),
            data=json.dumps([1, 2, 3]),
            content_type="application/json",
        )
        self.assertEqual(res.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)


@override_settings(PAYMENTS=ENFORCED_PAYMENTS)
class WebhookReconciliationFlowTests(TestCase):
    """
    GUARANTEES:
    - approved -> order paid/paid; rejected -> cancelled/failed
    - redelivery of the same state is a no-op
    - an older or backward event never regresses a paid order
    - resolution problems answer 200 without touching orders
    - provider and persistence failures answer 500 (provider retries)
    """

    def setUp(self):
        self.client = APIClient()
        self.order = make_order()
        self.ref = str(self.order.id)

    # =====================================================
    # END TO END
    # =====================================================

    @patch.object(MercadoPagoClient, "get_payment")
    def test_approved_payment_marks_order_paid(self, get_payment):
        get_payment.return_value = provider_payment(status="approved", external_reference=self.ref)

        res = signed_webhook(self.client, payment_id="9001")

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data, {"success": True, "detail": "applied"})
        get_payment.assert_called_once_with("9001")

        self.order.refresh_from_db()
        self.assertEqual(self.order.status, Order.STATUS_PAID)
        self.assertEqual(self.order.payment_status, Order.PAYMENT_PAID)
        self.assertEqual(self.order.payment_id, "9001")
        self.assertIsNotNone(self.order.paid_at)
        self.assertIsNotNone(self.order.payment_synced_at)

        event = PaymentEvent.objects.get()
        self.assertEqual(event.order_id, self.order.id)
        self.assertEqual(event.outcome, PaymentEvent.OUTCOME_APPLIED)
        self.assertEqual(event.request_id, "req-1")

    @patch.object(MercadoPagoClient, "get_payment")
    def test_rejected_payment_cancels_order(self, get_payment):
        get_payment.return_value = provider_payment(status="rejected", external_reference=self.ref)

        res = signed_webhook(self.client)

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.order.refresh_from_db()
        self.assertEqual(self.order.status, Order.STATUS_CANCELLED)
        self.assertEqual(self.order.payment_status, Order.PAYMENT_FAILED)
        self.assertIsNone(self.order.paid_at)

    # =====================================================
    # IDEMPOTENCY / ORDERING
    # =====================================================

    @patch.object(MercadoPagoClient, "get_payment")
    def test_duplicate_delivery_is_noop(self, get_payment):
        get_payment.return_value = provider_payment(status="approved", external_reference=self.ref)

        first = signed_webhook(self.client, request_id="req-1")
        self.order.refresh_from_db()
        updated_at = self.order.updated_at

        second = signed_webhook(self.client, request_id="req-2")

        self.assertEqual(first.data["detail"], "applied")
        self.assertEqual(second.status_code, status.HTTP_200_OK)
        self.assertEqual(second.data["detail"], "duplicate")
        self.assertEqual(PaymentEvent.objects.count(), 1)

        self.order.refresh_from_db()
        self.assertEqual(self.order.payment_status, Order.PAYMENT_PAID)
        self.assertEqual(self.order.updated_at, updated_at)

    @patch.object(MercadoPagoClient, "get_payment")
    def test_older_pending_after_approved_is_stale(self, get_payment):
        get_payment.return_value = provider_payment(
            status="approved", external_reference=self.ref, updated="2024-05-01T10:05:00.000-03:00"
        )
        signed_webhook(self.client)

        get_payment.return_value = provider_payment(
            status="pending", external_reference=self.ref, updated="2024-05-01T10:00:00.000-03:00"
        )
        res = signed_webhook(self.client)

        self.assertEqual(res.data["detail"], "stale")
        self.order.refresh_from_db()
        self.assertEqual(self.order.status, Order.STATUS_PAID)
        self.assertEqual(self.order.payment_status, Order.PAYMENT_PAID)

    @patch.object(MercadoPagoClient, "get_payment")
    def test_backward_transition_after_approved_is_rejected(self, get_payment):
        get_payment.return_value = provider_payment(
            status="approved", external_reference=self.ref, updated="2024-05-01T10:00:00.000-03:00"
        )
        signed_webhook(self.client)

        get_payment.return_value = provider_payment(
            status="charged_back", external_reference=self.ref, updated="2024-05-02T10:00:00.000-03:00"
        )
        res = signed_webhook(self.client)

        self.assertEqual(res.data["detail"], "rejected_transition")
        self.order.refresh_from_db()
        self.assertEqual(self.order.payment_status, Order.PAYMENT_PAID)
        self.assertEqual(PaymentEvent.objects.count(), 2)

    @patch.object(MercadoPagoClient, "get_payment")
    def test_refund_after_payment_is_applied(self, get_payment):
        get_payment.return_value = provider_payment(
            status="approved", external_reference=self.ref, updated="2024-05-01T10:00:00.000-03:00"
        )
        signed_webhook(self.client)

        get_payment.return_value = provider_payment(
            status="refunded", external_reference=self.ref, updated="2024-05-03T10:00:00.000-03:00"
        )
        res = signed_webhook(self.client)

        self.assertEqual(res.data["detail"], "applied")
        self.order.refresh_from_db()
        self.assertEqual(self.order.status, Order.STATUS_CANCELLED)
        self.assertEqual(self.order.payment_status, Order.PAYMENT_REFUNDED)

    # =====================================================
    # RESOLUTION ERRORS (200, NO WRITE)
    # =====================================================

    @patch.object(MercadoPagoClient, "get_payment")
    def test_missing_external_reference_is_200_without_write(self, get_payment):
        get_payment.return_value = provider_payment(status="approved", external_reference="")

        res = signed_webhook(self.client)

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["detail"], "unresolved")
        self.order.refresh_from_db()
        self.assertEqual(self.order.payment_status, Order.PAYMENT_PENDING)
        self.assertFalse(PaymentEvent.objects.exists())

    @patch.object(MercadoPagoClient, "get_payment")
    def test_unknown_order_is_200_without_write(self, get_payment):
        get_payment.return_value = provider_payment(
            status="approved", external_reference="00000000-0000-0000-0000-000000000000"
        )

        res = signed_webhook(self.client)

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["detail"], "unresolved")
        self.assertFalse(PaymentEvent.objects.exists())

    @patch.object(MercadoPagoClient, "get_payment")
    def test_non_uuid_reference_is_unresolved(self, get_payment):
        get_payment.return_value = provider_payment(status="approved", external_reference="ORDER42")

        res = signed_webhook(self.client)

        self.assertEqual(res.data["detail"], "unresolved")

    # =====================================================
    # RETRYABLE FAILURES (500)
    # =====================================================

    @patch.object(MercadoPagoClient, "get_payment", side_effect=PaymentProviderError("boom", status_code=503))
    def test_provider_error_is_500(self, get_payment):
        res = signed_webhook(self.client)

        self.assertEqual(res.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.order.refresh_from_db()
        self.assertEqual(self.order.payment_status, Order.PAYMENT_PENDING)

    @patch.object(MercadoPagoClient, "get_payment", side_effect=PaymentProviderTimeout("slow"))
    def test_provider_timeout_is_500(self, get_payment):
        res = signed_webhook(self.client)
        self.assertEqual(res.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)

    @patch("payments.services.reconciler.update_order_status", side_effect=DatabaseError("disk full"))
    @patch.object(MercadoPagoClient, "get_payment")
    def test_persistence_failure_is_500(self, get_payment, update_order_status):
        get_payment.return_value = provider_payment(status="approved", external_reference=self.ref)

        res = signed_webhook(self.client)

        self.assertEqual(res.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertFalse(PaymentEvent.objects.exists())
