# orders/views/order_admin.py

"""
STAFF ORDER MANAGEMENT

- GET   /api/admin/orders/               list (filters: status, payment_status, user_id, order_number)
- GET   /api/admin/orders/<id>/          detail
- PATCH /api/admin/orders/<id>/          status / payment_status / tracking_code / notes
- PATCH /api/admin/orders/<id>/status/   status only (accepts legacy aliases)
- GET   /api/admin/stats/                dashboard aggregates

Security:
- Staff only (is_staff) via JWT
"""

from __future__ import annotations

from django.shortcuts import get_object_or_404
from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import generics, status
from rest_framework.permissions import IsAdminUser
from rest_framework.response import Response
from rest_framework.views import APIView

from orders.filters import OrderFilter
from orders.models import Order
from orders.serializers import (
    DashboardSerializer,
    OrderAdminUpdateSerializer,
    OrderSerializer,
    OrderStatusUpdateSerializer,
)
from orders.services.dashboard import get_dashboard_data
from orders.services.order_store import apply_admin_update


class AdminOrderListView(generics.ListAPIView):
    permission_classes = [IsAdminUser]
    serializer_class = OrderSerializer
    filterset_class = OrderFilter
    queryset = Order.objects.prefetch_related("items").order_by("-created_at")

    @extend_schema(tags=["Admin"])
    def get(self, request, *args, **kwargs):
        return super().get(request, *args, **kwargs)


class AdminOrderDetailView(APIView):
    permission_classes = [IsAdminUser]

    @extend_schema(tags=["Admin"], responses={200: OrderSerializer, 404: OpenApiResponse(description="Not found")})
    def get(self, request, order_id, *args, **kwargs):
        order = get_object_or_404(Order.objects.prefetch_related("items"), id=order_id)
        return Response(OrderSerializer(order).data, status=status.HTTP_200_OK)

    @extend_schema(
        tags=["Admin"],
        request=OrderAdminUpdateSerializer,
        responses={200: OrderSerializer, 400: OpenApiResponse(description="Validation error")},
    )
    def patch(self, request, order_id, *args, **kwargs):
        order = get_object_or_404(Order, id=order_id)

        s = OrderAdminUpdateSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        order = apply_admin_update(order.id, **s.validated_data)
        return Response(OrderSerializer(order).data, status=status.HTTP_200_OK)


class AdminOrderStatusView(APIView):
    permission_classes = [IsAdminUser]

    @extend_schema(
        tags=["Admin"],
        request=OrderStatusUpdateSerializer,
        responses={200: OrderSerializer, 400: OpenApiResponse(description="Unknown status")},
    )
    def patch(self, request, order_id, *args, **kwargs):
        order = get_object_or_404(Order, id=order_id)

        s = OrderStatusUpdateSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        order = apply_admin_update(order.id, status=s.validated_data["status"])
        return Response(OrderSerializer(order).data, status=status.HTTP_200_OK)


class DashboardStatsView(APIView):
    permission_classes = [IsAdminUser]

    @extend_schema(tags=["Admin"], responses={200: DashboardSerializer})
    def get(self, request, *args, **kwargs):
        return Response(DashboardSerializer(get_dashboard_data()).data, status=status.HTTP_200_OK)
