# coupons/serializers.py

from __future__ import annotations

from decimal import Decimal

from rest_framework import serializers

from coupons.models import Coupon, normalize_coupon_code


class CouponSerializer(serializers.ModelSerializer):
    class Meta:
        model = Coupon
        fields = [
            "code",
            "discount_type",
            "value",
            "is_active",
            "expiry_date",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["created_at", "updated_at"]
        # Duplicate codes are reported by the view (400 "Cupom já existe").
        extra_kwargs = {"code": {"validators": []}}

    def validate_code(self, value):
        code = normalize_coupon_code(value)
        if not code:
            raise serializers.ValidationError("code is required")
        return code

    def validate(self, attrs):
        discount_type = attrs.get("discount_type")
        value = attrs.get("value", Decimal("0.00"))

        if discount_type == Coupon.TYPE_FREE_SHIPPING:
            attrs["value"] = Decimal("0.00")
        elif discount_type == Coupon.TYPE_PERCENTAGE and value > Decimal("100"):
            raise serializers.ValidationError({"value": "Percentage discount cannot exceed 100."})

        return attrs


class CouponStatusSerializer(serializers.Serializer):
    is_active = serializers.BooleanField()


class CouponBulkDeleteSerializer(serializers.Serializer):
    codes = serializers.ListField(
        child=serializers.CharField(),
        allow_empty=False,
    )
