# payments/services/exceptions.py

"""
PAYMENT SERVICE ERRORS

Centralized domain errors for the Mercado Pago integration.
"""


class PaymentServiceError(Exception):
    """Base exception for all payment service failures."""


class GatewayConfigurationError(PaymentServiceError):
    """Raised when the gateway lacks a token/secret it needs."""


class PaymentProviderError(PaymentServiceError):
    """
    Raised when the provider API cannot be reached or rejects a request.
    Webhook handling treats this as retryable (5xx back to the provider).
    """

    def __init__(self, message: str, *, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class PaymentProviderTimeout(PaymentProviderError):
    """Raised when the provider API does not answer within the configured timeout."""


class InvalidNotificationError(PaymentServiceError):
    """Raised when a webhook body is not a JSON object."""
