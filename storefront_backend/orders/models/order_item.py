# orders/models/order_item.py

from decimal import Decimal

from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models


class OrderItem(models.Model):
    """
    Line item snapshot for an Order.

    product_id is the catalog document id at checkout time;
    it is not a foreign key.
    """

    order = models.ForeignKey(
        "orders.Order",
        on_delete=models.CASCADE,
        related_name="items",
    )

    product_id = models.CharField(max_length=128)
    product_slug = models.CharField(max_length=255, blank=True, default="")
    title = models.CharField(max_length=255)
    image = models.URLField(max_length=500, blank=True, default="")
    size = models.CharField(max_length=16)

    quantity = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    unit_price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.00"))],
    )

    # Optional name/number printed on the shirt
    customization_name = models.CharField(max_length=40, blank=True, default="")
    customization_number = models.CharField(max_length=8, blank=True, default="")
    customization_fee = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0.00"))],
        help_text="Per-unit fee for name/number printing",
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["created_at", "id"]
        indexes = [
            models.Index(fields=["product_id"], name="orderitem_product_idx"),
        ]

    @property
    def line_total(self) -> Decimal:
        return (
            (Decimal(self.unit_price) + Decimal(self.customization_fee))
            * Decimal(self.quantity)
        ).quantize(Decimal("0.01"))

    def describe(self) -> str:
        parts = [f"Tamanho: {self.size}"]
        if self.customization_name:
            parts.append(f"Nome: {self.customization_name}")
        if self.customization_number:
            parts.append(f"Nº: {self.customization_number}")
        return ", ".join(parts)

    def clean(self):
        if self.quantity is None or int(self.quantity) <= 0:
            raise ValidationError("quantity must be >= 1")

        if self.unit_price is None or Decimal(self.unit_price) < Decimal("0.00"):
            raise ValidationError("unit_price must be >= 0")

    def save(self, *args, **kwargs):
        self.full_clean()
        return super().save(*args, **kwargs)

    def __str__(self):
        return f"{self.title} ({self.size}) x{self.quantity}"
