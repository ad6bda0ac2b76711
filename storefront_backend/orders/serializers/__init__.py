from .checkout import (
    CheckoutAddressSerializer,
    CheckoutCustomerSerializer,
    CheckoutItemSerializer,
    CheckoutResponseSerializer,
    CheckoutSerializer,
    RepayResponseSerializer,
)
from .order import OrderItemSerializer, OrderSerializer, OrderTrackingSerializer
from .order_admin import OrderAdminUpdateSerializer, OrderStatusUpdateSerializer
from .dashboard import DashboardSerializer

__all__ = [
    "CheckoutAddressSerializer",
    "CheckoutCustomerSerializer",
    "CheckoutItemSerializer",
    "CheckoutResponseSerializer",
    "CheckoutSerializer",
    "RepayResponseSerializer",
    "OrderItemSerializer",
    "OrderSerializer",
    "OrderTrackingSerializer",
    "OrderAdminUpdateSerializer",
    "OrderStatusUpdateSerializer",
    "DashboardSerializer",
]
