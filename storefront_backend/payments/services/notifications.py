# payments/services/notifications.py

from __future__ import annotations

import json
from dataclasses import dataclass

from payments.services.exceptions import InvalidNotificationError

PAYMENT_EVENT_TYPE = "payment"


@dataclass(frozen=True)
class PaymentNotification:
    """
    Inbound webhook as the provider delivered it.
    Only data.id is trusted, and only after the signature check.
    """

    event_type: str
    payment_id: str
    signature: str
    request_id: str

    @property
    def is_payment(self) -> bool:
        return self.event_type == PAYMENT_EVENT_TYPE and bool(self.payment_id)


def parse_notification(raw_body: bytes, *, signature=None, request_id=None) -> PaymentNotification:
    try:
        payload = json.loads((raw_body or b"").decode("utf-8"))
    except (UnicodeDecodeError, ValueError) as exc:
        raise InvalidNotificationError("Webhook body is not valid JSON") from exc

    if not isinstance(payload, dict):
        raise InvalidNotificationError("Webhook body must be a JSON object")

    data = payload.get("data")
    payment_id = data.get("id") if isinstance(data, dict) else None

    return PaymentNotification(
        event_type=str(payload.get("type") or payload.get("topic") or "").strip().lower(),
        payment_id="" if payment_id is None else str(payment_id).strip(),
        signature=str(signature or ""),
        request_id=str(request_id or ""),
    )
