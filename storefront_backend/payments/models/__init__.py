# payments/models/__init__.py

from .payment_event import PaymentEvent

__all__ = [
    "PaymentEvent",
]
