# orders/serializers/order_admin.py

"""
Admin write contracts for orders.

Status values are normalized here, so legacy Portuguese names sent by
older admin screens ("enviado", "cancelado"...) are stored in English.
"""

from rest_framework import serializers

from orders.services.exceptions import UnknownStatusError
from orders.services.order_lifecycle import normalize_order_status, normalize_payment_status


def _order_status(value):
    try:
        return normalize_order_status(value)
    except UnknownStatusError as exc:
        raise serializers.ValidationError(str(exc)) from exc


def _payment_status(value):
    try:
        return normalize_payment_status(value)
    except UnknownStatusError as exc:
        raise serializers.ValidationError(str(exc)) from exc


class OrderAdminUpdateSerializer(serializers.Serializer):
    status = serializers.CharField(required=False)
    payment_status = serializers.CharField(required=False)
    tracking_code = serializers.CharField(required=False, allow_blank=True, max_length=64)
    notes = serializers.CharField(required=False, allow_blank=True)

    def validate_status(self, value):
        return _order_status(value)

    def validate_payment_status(self, value):
        return _payment_status(value)

    def validate(self, attrs):
        if not attrs:
            raise serializers.ValidationError("No fields to update")
        return attrs


class OrderStatusUpdateSerializer(serializers.Serializer):
    status = serializers.CharField()

    def validate_status(self, value):
        return _order_status(value)
