# payments/services/reconciler.py

"""
WEBHOOK RECONCILER

"Something changed, go check": a payment notification only carries the
provider payment id. The reconciler:

1. fetches the authoritative payment from Mercado Pago
2. resolves external_reference -> Order
3. maps provider status -> (order status, payment status)
4. applies the transition under a row lock, unless the event is a
   duplicate, older than the last applied one, a no-op, or not allowed
   by the payment lifecycle

Every outcome except duplicates and unresolved references leaves a
PaymentEvent row.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass

from django.db import transaction

from orders.models import Order
from orders.services.order_lifecycle import can_transition_payment
from orders.services.order_store import find_order_by_external_reference, update_order_status
from payments.models import PaymentEvent
from payments.services.mercadopago import MercadoPagoClient, ProviderPayment
from payments.services.status_mapping import StatusPair, map_provider_status

logger = logging.getLogger(__name__)


class ReconcileOutcome(str, enum.Enum):
    APPLIED = PaymentEvent.OUTCOME_APPLIED
    UNCHANGED = PaymentEvent.OUTCOME_UNCHANGED
    STALE = PaymentEvent.OUTCOME_STALE
    REJECTED_TRANSITION = PaymentEvent.OUTCOME_REJECTED
    DUPLICATE = "duplicate"
    UNRESOLVED = "unresolved"


@dataclass(frozen=True)
class ReconcileResult:
    outcome: ReconcileOutcome
    payment_id: str
    order_id: str | None = None
    order_status: str | None = None
    payment_status: str | None = None


def decide_outcome(*, order: Order, payment: ProviderPayment, target: StatusPair) -> ReconcileOutcome:
    """
    Pure decision for a non-duplicate event against the locked order.
    """
    if (
        payment.date_last_updated is not None
        and order.payment_synced_at is not None
        and payment.date_last_updated < order.payment_synced_at
    ):
        return ReconcileOutcome.STALE

    if target.payment_status == order.payment_status:
        return ReconcileOutcome.UNCHANGED

    # Only the payment that settled the order may move it out of paid
    if (
        order.payment_status == Order.PAYMENT_PAID
        and order.payment_id
        and payment.id
        and payment.id != order.payment_id
    ):
        return ReconcileOutcome.REJECTED_TRANSITION

    if not can_transition_payment(from_status=order.payment_status, to_status=target.payment_status):
        return ReconcileOutcome.REJECTED_TRANSITION

    return ReconcileOutcome.APPLIED


class WebhookReconciler:
    def __init__(self, *, client: MercadoPagoClient):
        self.client = client

    def reconcile(self, *, payment_id, request_id: str = "") -> ReconcileResult:
        """
        Raises PaymentProviderError when the lookup fails and
        django.db.DatabaseError when the write fails; both are retryable.
        """
        payment = self.client.get_payment(payment_id)
        pid = payment.id or str(payment_id)

        logger.info(
            "Payment fetched from provider",
            extra={"payment_id": pid, "status": payment.status, "external_reference": payment.external_reference},
        )

        if not payment.external_reference:
            logger.warning("Payment has no external_reference; ignoring", extra={"payment_id": pid})
            return ReconcileResult(outcome=ReconcileOutcome.UNRESOLVED, payment_id=pid)

        target = map_provider_status(payment.status)
        dedupe_key = PaymentEvent.build_dedupe_key(
            payment_id=pid,
            provider_status=payment.status,
            provider_updated_at=payment.date_last_updated,
        )

        with transaction.atomic():
            order = find_order_by_external_reference(payment.external_reference, for_update=True)

            if order is None:
                logger.warning(
                    "Payment references an unknown order",
                    extra={"payment_id": pid, "external_reference": payment.external_reference},
                )
                return ReconcileResult(outcome=ReconcileOutcome.UNRESOLVED, payment_id=pid)

            if PaymentEvent.objects.filter(dedupe_key=dedupe_key).exists():
                logger.info("Duplicate payment event ignored", extra={"payment_id": pid, "order_id": str(order.id)})
                return ReconcileResult(
                    outcome=ReconcileOutcome.DUPLICATE,
                    payment_id=pid,
                    order_id=str(order.id),
                    order_status=order.status,
                    payment_status=order.payment_status,
                )

            outcome = decide_outcome(order=order, payment=payment, target=target)

            if outcome is ReconcileOutcome.APPLIED:
                order = update_order_status(
                    order.id,
                    target.order_status,
                    target.payment_status,
                    payment_id=pid,
                    payment_synced_at=payment.date_last_updated,
                )
                logger.info(
                    "Payment transition applied",
                    extra={
                        "payment_id": pid,
                        "order_id": str(order.id),
                        "status": order.status,
                        "payment_status": order.payment_status,
                    },
                )
            else:
                logger.warning(
                    "Payment event not applied",
                    extra={
                        "payment_id": pid,
                        "order_id": str(order.id),
                        "outcome": outcome.value,
                        "current_payment_status": order.payment_status,
                        "target_payment_status": target.payment_status,
                    },
                )

            PaymentEvent.objects.create(
                dedupe_key=dedupe_key,
                payment_id=pid,
                order=order,
                external_reference=payment.external_reference,
                provider_status=payment.status,
                provider_updated_at=payment.date_last_updated,
                outcome=outcome.value,
                request_id=str(request_id or "")[:128],
                provider_payload=payment.raw,
            )

        return ReconcileResult(
            outcome=outcome,
            payment_id=pid,
            order_id=str(order.id),
            order_status=order.status,
            payment_status=order.payment_status,
        )
