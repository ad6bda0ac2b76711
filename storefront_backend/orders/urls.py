from django.urls import path

from orders.views.checkout import RepayView
from orders.views.order import CustomerOrderListView, OrderDetailView

app_name = "orders"

urlpatterns = [
    path("", CustomerOrderListView.as_view(), name="customer-orders"),
    path("<uuid:order_id>/", OrderDetailView.as_view(), name="order-detail"),
    path("<uuid:order_id>/repay/", RepayView.as_view(), name="order-repay"),
]
