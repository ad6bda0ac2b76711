# orders/serializers/checkout.py

"""
CHECKOUT SERIALIZERS

Transport layer only: request/response shapes for checkout and repay.
Totals are never accepted from the client; see orders/services/pricing.py.
"""

from __future__ import annotations

from decimal import Decimal

from rest_framework import serializers

MAX_LINE_QUANTITY = 99


class CustomizationSerializer(serializers.Serializer):
    name = serializers.CharField(required=False, allow_blank=True, max_length=40, default="")
    number = serializers.CharField(required=False, allow_blank=True, max_length=8, default="")


class CheckoutItemSerializer(serializers.Serializer):
    product_id = serializers.CharField(max_length=128)
    product_slug = serializers.CharField(required=False, allow_blank=True, max_length=255, default="")
    title = serializers.CharField(max_length=255)
    image = serializers.URLField(required=False, allow_blank=True, max_length=500, default="")
    size = serializers.CharField(max_length=16)
    quantity = serializers.IntegerField(min_value=1, max_value=MAX_LINE_QUANTITY)
    unit_price = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=Decimal("0.00"))
    customization = CustomizationSerializer(required=False, allow_null=True)
    customization_fee = serializers.DecimalField(
        max_digits=12,
        decimal_places=2,
        min_value=Decimal("0.00"),
        required=False,
        default=Decimal("0.00"),
    )


class CheckoutCustomerSerializer(serializers.Serializer):
    first_name = serializers.CharField(max_length=120)
    last_name = serializers.CharField(max_length=120)
    email = serializers.EmailField()
    phone = serializers.CharField(max_length=40)
    document = serializers.CharField(required=False, allow_blank=True, max_length=32, default="")


class CheckoutAddressSerializer(serializers.Serializer):
    street = serializers.CharField(max_length=255)
    number = serializers.CharField(max_length=32)
    complement = serializers.CharField(required=False, allow_blank=True, max_length=255, default="")
    neighborhood = serializers.CharField(max_length=120)
    city = serializers.CharField(max_length=120)
    state = serializers.CharField(max_length=64)
    zip_code = serializers.CharField(max_length=16)


class CheckoutSerializer(serializers.Serializer):
    items = CheckoutItemSerializer(many=True)
    customer = CheckoutCustomerSerializer()
    address = CheckoutAddressSerializer()
    notes = serializers.CharField(required=False, allow_blank=True, default="")
    user_id = serializers.CharField(required=False, allow_blank=True, max_length=128, default="")
    coupon_code = serializers.CharField(required=False, allow_blank=True, max_length=64, default="")

    def validate_items(self, value):
        if not value:
            raise serializers.ValidationError("Cart is empty")
        return value


class CheckoutResponseSerializer(serializers.Serializer):
    order_id = serializers.UUIDField()
    order_number = serializers.CharField()
    init_point = serializers.URLField()


class RepayResponseSerializer(serializers.Serializer):
    order_id = serializers.UUIDField()
    init_point = serializers.URLField()
