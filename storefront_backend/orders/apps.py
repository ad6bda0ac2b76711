# orders/apps.py

"""
ORDERS APP CONFIG

Storefront orders:
- Checkout (order snapshot + payment preference)
- Repay / tracking / customer order history
- Admin status edits + dashboard statistics
"""

from django.apps import AppConfig


class OrdersConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "orders"
    verbose_name = "Storefront Orders"
