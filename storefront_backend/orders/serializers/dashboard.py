from rest_framework import serializers

from orders.serializers.order import OrderSerializer


class TopProductSerializer(serializers.Serializer):
    product_id = serializers.CharField()
    title = serializers.CharField()
    count = serializers.IntegerField()


class DashboardSerializer(serializers.Serializer):
    total_revenue = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_orders = serializers.IntegerField()
    paid_orders_count = serializers.IntegerField()
    average_ticket = serializers.DecimalField(max_digits=14, decimal_places=2)
    orders_by_status = serializers.DictField(child=serializers.IntegerField())
    recent_orders = OrderSerializer(many=True)
    top_selling_products = TopProductSerializer(many=True)
