# coupons/models.py

"""
PATH: coupons/models.py

DISCOUNT COUPONS

- code is uppercased and used as the primary key
- free_shipping coupons always carry value 0
- independent lifecycle: CRUD only
"""

from __future__ import annotations

from decimal import Decimal

from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone


def normalize_coupon_code(code) -> str:
    return str(code or "").strip().upper()


class Coupon(models.Model):
    TYPE_PERCENTAGE = "percentage"
    TYPE_FIXED = "fixed"
    TYPE_FREE_SHIPPING = "free_shipping"

    TYPE_CHOICES = [
        (TYPE_PERCENTAGE, "Percentage"),
        (TYPE_FIXED, "Fixed amount"),
        (TYPE_FREE_SHIPPING, "Free shipping"),
    ]

    code = models.CharField(max_length=64, primary_key=True)
    discount_type = models.CharField(max_length=16, choices=TYPE_CHOICES)
    value = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0.00"))],
        help_text="Percent (10 = 10%) or currency amount, depending on type",
    )
    is_active = models.BooleanField(default=True)
    expiry_date = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]

    def is_expired(self, *, now=None) -> bool:
        if not self.expiry_date:
            return False
        return (now or timezone.now()) > self.expiry_date

    def clean(self):
        if self.discount_type == self.TYPE_PERCENTAGE and Decimal(self.value) > Decimal("100"):
            raise ValidationError({"value": "Percentage discount cannot exceed 100."})

    def save(self, *args, **kwargs):
        self.code = normalize_coupon_code(self.code)
        if self.discount_type == self.TYPE_FREE_SHIPPING:
            self.value = Decimal("0.00")
        super().save(*args, **kwargs)

    def __str__(self):
        return f"{self.code} ({self.discount_type})"
