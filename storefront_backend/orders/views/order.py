# orders/views/order.py

from __future__ import annotations

from django.shortcuts import get_object_or_404
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from orders.models import Order
from orders.serializers import OrderSerializer, OrderTrackingSerializer
from orders.views.checkout import PublicPollThrottle, error_response


class OrderDetailView(APIView):
    """
    Order by internal id (the id the storefront receives back from checkout).
    """

    permission_classes = [AllowAny]
    authentication_classes = []
    throttle_classes = [PublicPollThrottle]

    @extend_schema(tags=["Orders"], responses={200: OrderSerializer, 404: OpenApiResponse(description="Not found")})
    def get(self, request, order_id, *args, **kwargs):
        order = get_object_or_404(Order.objects.prefetch_related("items"), id=order_id)
        return Response(OrderSerializer(order).data, status=status.HTTP_200_OK)


class CustomerOrderListView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []
    throttle_classes = [PublicPollThrottle]

    @extend_schema(
        tags=["Orders"],
        parameters=[OpenApiParameter("user_id", str, required=True)],
        responses={200: OrderSerializer(many=True), 400: OpenApiResponse(description="user_id missing")},
    )
    def get(self, request, *args, **kwargs):
        user_id = str(request.query_params.get("user_id") or "").strip()
        if not user_id:
            return error_response(
                code="user_id_required",
                message="user_id query parameter is required",
                http_status=status.HTTP_400_BAD_REQUEST,
            )

        orders = Order.objects.filter(user_id=user_id).prefetch_related("items").order_by("-created_at")
        return Response(OrderSerializer(orders, many=True).data, status=status.HTTP_200_OK)


class OrderTrackView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []
    throttle_classes = [PublicPollThrottle]

    @extend_schema(
        tags=["Orders"],
        responses={200: OrderTrackingSerializer, 404: OpenApiResponse(description="Not found")},
    )
    def get(self, request, order_number, *args, **kwargs):
        number = str(order_number or "").strip().upper()
        order = Order.objects.prefetch_related("items").filter(order_number=number).first()
        if order is None:
            return error_response(
                code="order_not_found",
                message="Order not found",
                http_status=status.HTTP_404_NOT_FOUND,
            )
        return Response(OrderTrackingSerializer(order).data, status=status.HTTP_200_OK)
