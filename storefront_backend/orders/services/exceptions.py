# orders/services/exceptions.py

"""
ORDER SERVICE ERRORS

Centralized domain errors for order services.
"""


class OrderServiceError(Exception):
    """Base exception for all order service failures."""


class OrderNotFoundError(OrderServiceError):
    """Raised when an order id does not exist."""


class UnknownStatusError(OrderServiceError):
    """Raised when a status value is outside the canonical vocabulary."""


class OrderNotRepayableError(OrderServiceError):
    """Raised when a new payment preference is requested for a non-pending order."""
