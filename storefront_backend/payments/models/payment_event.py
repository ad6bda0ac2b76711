# payments/models/payment_event.py

"""
PATH: payments/models/payment_event.py

PAYMENT EVENT (idempotency + audit record)

One row per provider state observation that reached the reconciler:
    dedupe_key = "{payment_id}:{provider_status}:{provider_updated_at}"

Idempotency rule:
- dedupe_key is unique; a redelivered notification for a state we
  already processed is a duplicate and never writes the order again.
"""

import uuid

from django.db import models


class PaymentEvent(models.Model):
    OUTCOME_APPLIED = "applied"
    OUTCOME_UNCHANGED = "unchanged"
    OUTCOME_STALE = "stale"
    OUTCOME_REJECTED = "rejected_transition"

    OUTCOME_CHOICES = [
        (OUTCOME_APPLIED, "Applied"),
        (OUTCOME_UNCHANGED, "Unchanged"),
        (OUTCOME_STALE, "Stale"),
        (OUTCOME_REJECTED, "Rejected transition"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    dedupe_key = models.CharField(max_length=255, unique=True)
    payment_id = models.CharField(max_length=64, db_index=True)

    order = models.ForeignKey(
        "orders.Order",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="payment_events",
    )
    external_reference = models.CharField(max_length=128, blank=True, default="")

    provider_status = models.CharField(max_length=32)
    provider_updated_at = models.DateTimeField(null=True, blank=True)

    outcome = models.CharField(max_length=32, choices=OUTCOME_CHOICES)
    request_id = models.CharField(max_length=128, blank=True, default="")
    provider_payload = models.JSONField(default=dict, blank=True)

    received_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-received_at"]
        indexes = [
            models.Index(fields=["order", "received_at"], name="payevent_order_received_idx"),
        ]

    @staticmethod
    def build_dedupe_key(*, payment_id, provider_status, provider_updated_at) -> str:
        updated = provider_updated_at.isoformat() if provider_updated_at else ""
        return f"{payment_id}:{provider_status}:{updated}"

    def __str__(self):
        return f"{self.payment_id}:{self.provider_status} | {self.outcome}"
