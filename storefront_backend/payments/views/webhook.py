# payments/views/webhook.py

"""
MERCADO PAGO WEBHOOK

POST /api/payments/mercadopago/webhook/

Responses:
- 500 gateway misconfigured, body not JSON, provider/DB failure (provider retries)
- 401 signature missing or invalid
- 200 everything else, including events we deliberately ignore
"""

from __future__ import annotations

import logging

from django.db import DatabaseError
from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.throttling import AnonRateThrottle
from rest_framework.views import APIView

from payments.gateway import get_gateway
from payments.services.exceptions import InvalidNotificationError, PaymentProviderError
from payments.services.notifications import parse_notification
from payments.services.reconciler import WebhookReconciler
from payments.services.signature import verify_webhook_signature

logger = logging.getLogger(__name__)


class WebhookThrottle(AnonRateThrottle):
    scope = "webhook"


class MercadoPagoWebhookView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []
    throttle_classes = [WebhookThrottle]

    @extend_schema(
        request=None,
        responses={
            200: OpenApiResponse(description="Processed or ignored"),
            401: OpenApiResponse(description="Invalid signature"),
            500: OpenApiResponse(description="Retryable failure"),
        },
    )
    def post(self, request, *args, **kwargs):
        gateway = get_gateway()

        missing = gateway.config.missing_settings()
        if missing:
            logger.error("Webhook rejected: gateway not configured", extra={"missing": missing})
            return Response(
                {"error": "Payment gateway is not configured"},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        try:
            notification = parse_notification(
                request.body,
                signature=request.headers.get("x-signature"),
                request_id=request.headers.get("x-request-id"),
            )
        except InvalidNotificationError as exc:
            logger.warning("Webhook body could not be parsed", extra={"reason": str(exc)})
            return Response(
                {"success": False, "message": str(exc)},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        logger.info(
            "Mercado Pago webhook received",
            extra={
                "type": notification.event_type,
                "payment_id": notification.payment_id,
                "request_id": notification.request_id,
            },
        )

        if gateway.config.verification_enforced:
            valid = verify_webhook_signature(
                secret=gateway.config.webhook_secret,
                signature_header=notification.signature,
                request_id=notification.request_id,
                payment_id=notification.payment_id,
            )
            if not valid:
                logger.warning(
                    "Invalid Mercado Pago signature",
                    extra={"payment_id": notification.payment_id, "request_id": notification.request_id},
                )
                return Response({"error": "Invalid signature"}, status=status.HTTP_401_UNAUTHORIZED)
        else:
            logger.warning("Webhook signature NOT verified (development mode)")

        if not notification.is_payment:
            return Response({"success": True, "detail": "ignored"}, status=status.HTTP_200_OK)

        reconciler = WebhookReconciler(client=gateway.client)

        try:
            result = reconciler.reconcile(
                payment_id=notification.payment_id,
                request_id=notification.request_id,
            )
        except PaymentProviderError:
            logger.exception("Payment lookup failed", extra={"payment_id": notification.payment_id})
            return Response(
                {"error": "Payment provider unavailable"},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )
        except DatabaseError:
            logger.exception("Payment reconciliation could not be stored", extra={"payment_id": notification.payment_id})
            return Response(
                {"error": "Could not persist payment update"},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )
        except Exception:
            logger.exception("Unhandled webhook error", extra={"payment_id": notification.payment_id})
            return Response(
                {"error": "Internal error"},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        return Response({"success": True, "detail": result.outcome.value}, status=status.HTTP_200_OK)
