# orders/services/dashboard.py

"""
ADMIN DASHBOARD STATISTICS

Read-only aggregates over orders. Revenue counts only orders whose
payment_status is paid.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from django.db.models import Count, Sum

from orders.models import Order, OrderItem

TWOPLACES = Decimal("0.01")
RECENT_ORDERS_LIMIT = 5
TOP_PRODUCTS_LIMIT = 5


def get_dashboard_data() -> dict:
    total_orders = Order.objects.count()

    paid = Order.objects.filter(payment_status=Order.PAYMENT_PAID)
    paid_agg = paid.aggregate(revenue=Sum("total_price"), count=Count("id"))
    total_revenue = paid_agg["revenue"] or Decimal("0.00")
    paid_orders_count = paid_agg["count"] or 0

    average_ticket = Decimal("0.00")
    if paid_orders_count:
        average_ticket = (total_revenue / paid_orders_count).quantize(TWOPLACES, rounding=ROUND_HALF_UP)

    orders_by_status = {value: 0 for value, _ in Order.STATUS_CHOICES}
    for row in Order.objects.values("status").annotate(count=Count("id")):
        orders_by_status[row["status"]] = row["count"]

    top_products = (
        OrderItem.objects.filter(order__payment_status=Order.PAYMENT_PAID)
        .values("product_id")
        .annotate(count=Sum("quantity"))
        .order_by("-count", "product_id")[:TOP_PRODUCTS_LIMIT]
    )

    top_selling_products = []
    for row in top_products:
        # Latest title snapshot for the product
        title = (
            OrderItem.objects.filter(product_id=row["product_id"])
            .order_by("-created_at")
            .values_list("title", flat=True)
            .first()
        )
        top_selling_products.append(
            {"product_id": row["product_id"], "title": title or "", "count": row["count"]}
        )

    return {
        "total_revenue": Decimal(total_revenue).quantize(TWOPLACES),
        "total_orders": total_orders,
        "paid_orders_count": paid_orders_count,
        "average_ticket": average_ticket,
        "orders_by_status": orders_by_status,
        "recent_orders": list(Order.objects.all()[:RECENT_ORDERS_LIMIT]),
        "top_selling_products": top_selling_products,
    }
