from rest_framework import serializers

from orders.models import Order, OrderItem


class OrderItemSerializer(serializers.ModelSerializer):
    line_total = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)

    class Meta:
        model = OrderItem
        fields = [
            "id",
            "product_id",
            "product_slug",
            "title",
            "image",
            "size",
            "quantity",
            "unit_price",
            "customization_name",
            "customization_number",
            "customization_fee",
            "line_total",
        ]
        read_only_fields = fields


class OrderSerializer(serializers.ModelSerializer):
    items = OrderItemSerializer(many=True, read_only=True)
    customer_name = serializers.CharField(read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "order_number",
            "user_id",
            "status",
            "payment_status",
            "currency",
            "subtotal",
            "shipping_price",
            "customization_fee_total",
            "discount_amount",
            "total_price",
            "coupon_code",
            "customer_name",
            "customer_first_name",
            "customer_last_name",
            "customer_email",
            "customer_phone",
            "customer_document",
            "shipping_address",
            "notes",
            "tracking_code",
            "payment_id",
            "paid_at",
            "created_at",
            "updated_at",
            "items",
        ]
        read_only_fields = fields


class OrderTrackingSerializer(serializers.ModelSerializer):
    """
    Public tracking view: no document, email, phone or user id.
    """

    items = OrderItemSerializer(many=True, read_only=True)
    customer_first_name = serializers.CharField(read_only=True)
    city = serializers.SerializerMethodField()
    state = serializers.SerializerMethodField()

    class Meta:
        model = Order
        fields = [
            "order_number",
            "status",
            "payment_status",
            "total_price",
            "tracking_code",
            "customer_first_name",
            "city",
            "state",
            "created_at",
            "updated_at",
            "items",
        ]
        read_only_fields = fields

    def get_city(self, obj) -> str:
        return str((obj.shipping_address or {}).get("city") or "")

    def get_state(self, obj) -> str:
        return str((obj.shipping_address or {}).get("state") or "")
