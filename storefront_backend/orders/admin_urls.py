from django.urls import path

from orders.views.order_admin import (
    AdminOrderDetailView,
    AdminOrderListView,
    AdminOrderStatusView,
    DashboardStatsView,
)

app_name = "orders_admin"

urlpatterns = [
    path("orders/", AdminOrderListView.as_view(), name="order-list"),
    path("orders/<uuid:order_id>/", AdminOrderDetailView.as_view(), name="order-detail"),
    path("orders/<uuid:order_id>/status/", AdminOrderStatusView.as_view(), name="order-status"),
    path("stats/", DashboardStatsView.as_view(), name="stats"),
]
