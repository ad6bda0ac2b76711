# orders/models/order.py

"""
PATH: orders/models/order.py

STOREFRONT ORDER

Lifecycle:
- Created at checkout (status=pending, payment_status=pending)
- Payment status moves ONLY through the Mercado Pago reconciler
  or an explicit admin edit
- shipped / delivered are reached only through admin edits
- Never deleted through normal flow

Customer, address and line items are snapshots captured at checkout,
not live references.
"""

from __future__ import annotations

import uuid
from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone

from orders.services.order_numbers import generate_order_number

MAX_ORDER_NUMBER_ATTEMPTS = 8


class Order(models.Model):
    STATUS_PENDING = "pending"
    STATUS_PAID = "paid"
    STATUS_SHIPPED = "shipped"
    STATUS_DELIVERED = "delivered"
    STATUS_CANCELLED = "cancelled"

    STATUS_CHOICES = [
        (STATUS_PENDING, "Pending"),
        (STATUS_PAID, "Paid"),
        (STATUS_SHIPPED, "Shipped"),
        (STATUS_DELIVERED, "Delivered"),
        (STATUS_CANCELLED, "Cancelled"),
    ]

    PAYMENT_PENDING = "pending"
    PAYMENT_PAID = "paid"
    PAYMENT_FAILED = "failed"
    PAYMENT_REFUNDED = "refunded"

    PAYMENT_STATUS_CHOICES = [
        (PAYMENT_PENDING, "Pending"),
        (PAYMENT_PAID, "Paid"),
        (PAYMENT_FAILED, "Failed"),
        (PAYMENT_REFUNDED, "Refunded"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    order_number = models.CharField(
        max_length=16,
        unique=True,
        blank=True,
        help_text="Customer-facing order number (V-XXXXXX)",
    )

    # Opaque id from the storefront auth provider (may be empty for guests)
    user_id = models.CharField(max_length=128, blank=True, default="", db_index=True)

    status = models.CharField(
        max_length=16, choices=STATUS_CHOICES, default=STATUS_PENDING
    )
    payment_status = models.CharField(
        max_length=16, choices=PAYMENT_STATUS_CHOICES, default=PAYMENT_PENDING
    )

    # Money fields (server authoritative)
    currency = models.CharField(max_length=8, default="BRL")
    subtotal = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    shipping_price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    customization_fee_total = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    discount_amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    total_price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    coupon_code = models.CharField(max_length=64, blank=True, default="")

    # Customer snapshot
    customer_first_name = models.CharField(max_length=120, blank=True, default="")
    customer_last_name = models.CharField(max_length=120, blank=True, default="")
    customer_email = models.EmailField(blank=True, default="")
    customer_phone = models.CharField(max_length=40, blank=True, default="")
    customer_document = models.CharField(max_length=32, blank=True, default="")

    # Address snapshot:
    # {"street", "number", "complement", "neighborhood", "city", "state", "zip_code"}
    shipping_address = models.JSONField(default=dict, blank=True)

    notes = models.TextField(blank=True, default="")
    tracking_code = models.CharField(max_length=64, blank=True, default="")

    # Reconciliation markers (last payment event applied to this order)
    payment_id = models.CharField(max_length=64, blank=True, default="", db_index=True)
    payment_synced_at = models.DateTimeField(null=True, blank=True)
    paid_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(default=timezone.now, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["status", "created_at"], name="order_status_created_idx"),
            models.Index(fields=["payment_status", "created_at"], name="order_paystatus_created_idx"),
            models.Index(fields=["user_id", "created_at"], name="order_user_created_idx"),
        ]

    @property
    def customer_name(self) -> str:
        return f"{self.customer_first_name} {self.customer_last_name}".strip()

    def _allocate_order_number(self) -> str:
        for _ in range(MAX_ORDER_NUMBER_ATTEMPTS):
            candidate = generate_order_number()
            if not Order.objects.filter(order_number=candidate).exists():
                return candidate
        raise RuntimeError("Could not allocate a free order number")

    def save(self, *args, **kwargs):
        if not self.order_number:
            self.order_number = self._allocate_order_number()

        if self.payment_status == self.PAYMENT_PAID and not self.paid_at:
            self.paid_at = timezone.now()

        super().save(*args, **kwargs)

    def __str__(self):
        return f"{self.order_number} | {self.total_price} | {self.status}/{self.payment_status}"
