# orders/views/checkout.py

"""
PUBLIC CHECKOUT

POST /api/checkout/
- validate cart, customer and address
- price the cart server-side (shipping table + optional coupon)
- create Order (pending / pending)
- create Mercado Pago preference, return init_point for the redirect

POST /api/orders/<id>/repay/
- new preference for an order that is still pending
"""

from __future__ import annotations

import logging

from django.conf import settings
from django.shortcuts import get_object_or_404
from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.parsers import JSONParser
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.throttling import AnonRateThrottle
from rest_framework.views import APIView

from coupons.services import CouponError
from orders.models import Order
from orders.serializers import (
    CheckoutResponseSerializer,
    CheckoutSerializer,
    RepayResponseSerializer,
)
from orders.services.exceptions import OrderNotRepayableError
from orders.services.order_lifecycle import validate_repayable
from orders.services.order_store import create_order
from orders.services.pricing import price_cart
from payments.services.exceptions import PaymentServiceError
from payments.services.preferences import create_order_preference

logger = logging.getLogger(__name__)


class PublicWriteThrottle(AnonRateThrottle):
    """
    For public write endpoints (checkout, repay).
    Uses REST_FRAMEWORK['DEFAULT_THROTTLE_RATES']['public_write'].
    """

    scope = "public_write"


class PublicPollThrottle(AnonRateThrottle):
    """
    For public read endpoints (order detail, tracking).
    Uses REST_FRAMEWORK['DEFAULT_THROTTLE_RATES']['public_poll'].
    """

    scope = "public_poll"


def error_response(*, code: str, message: str, http_status: int):
    return Response(
        {"error": {"code": code, "message": message}},
        status=http_status,
    )


class CheckoutView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []
    parser_classes = [JSONParser]
    throttle_classes = [PublicWriteThrottle]

    @extend_schema(
        tags=["Checkout"],
        request=CheckoutSerializer,
        responses={
            201: CheckoutResponseSerializer,
            400: OpenApiResponse(description="Validation error / invalid coupon"),
            429: OpenApiResponse(description="Rate limited"),
            502: OpenApiResponse(description="Payment provider error"),
        },
    )
    def post(self, request, *args, **kwargs):
        s = CheckoutSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        data = s.validated_data

        try:
            totals = price_cart(items=data["items"], coupon_code=data.get("coupon_code") or "")
        except CouponError as exc:
            return error_response(code="invalid_coupon", message=str(exc), http_status=status.HTTP_400_BAD_REQUEST)

        order = create_order(
            items=data["items"],
            customer=data["customer"],
            address=data["address"],
            totals=totals,
            user_id=data.get("user_id") or "",
            notes=data.get("notes") or "",
            currency=settings.STORE_CURRENCY,
        )

        try:
            preference = create_order_preference(order=order)
        except PaymentServiceError as exc:
            # Order stays pending; the customer can retry through repay.
            logger.error(
                "Checkout preference failed",
                extra={"order_id": str(order.id), "error": str(exc)},
            )
            return error_response(
                code="payment_provider_error",
                message="Could not start the payment. Please try again.",
                http_status=status.HTTP_502_BAD_GATEWAY,
            )

        out = CheckoutResponseSerializer(
            {
                "order_id": order.id,
                "order_number": order.order_number,
                "init_point": preference["init_point"],
            }
        )
        return Response(out.data, status=status.HTTP_201_CREATED)


class RepayView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []
    throttle_classes = [PublicWriteThrottle]

    @extend_schema(
        tags=["Checkout"],
        request=None,
        responses={
            200: RepayResponseSerializer,
            400: OpenApiResponse(description="Order cannot be paid again"),
            404: OpenApiResponse(description="Order not found"),
            502: OpenApiResponse(description="Payment provider error"),
        },
    )
    def post(self, request, order_id, *args, **kwargs):
        order = get_object_or_404(Order, id=order_id)

        try:
            validate_repayable(order=order)
        except OrderNotRepayableError as exc:
            return error_response(code="order_not_repayable", message=str(exc), http_status=status.HTTP_400_BAD_REQUEST)

        try:
            preference = create_order_preference(order=order)
        except PaymentServiceError as exc:
            logger.error("Repay preference failed", extra={"order_id": str(order.id), "error": str(exc)})
            return error_response(
                code="payment_provider_error",
                message="Could not start the payment. Please try again.",
                http_status=status.HTTP_502_BAD_GATEWAY,
            )

        out = RepayResponseSerializer({"order_id": order.id, "init_point": preference["init_point"]})
        return Response(out.data, status=status.HTTP_200_OK)
