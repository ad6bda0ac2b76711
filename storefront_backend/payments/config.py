# payments/config.py

"""
PATH: payments/config.py

Typed Mercado Pago configuration.

Source: settings.PAYMENTS["MERCADOPAGO"] (populated from env by django-environ).

Webhook verification mode is an explicit choice:
- enforced                  -> every webhook must carry a valid x-signature
- disabled_for_development  -> signature checks skipped (refused by prod settings)

A missing secret never turns verification off by itself.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

DEFAULT_API_BASE = "https://api.mercadopago.com"
DEFAULT_TIMEOUT_SECONDS = 10.0


class VerificationMode(str, enum.Enum):
    ENFORCED = "enforced"
    DISABLED_FOR_DEVELOPMENT = "disabled_for_development"


@dataclass(frozen=True)
class GatewayConfig:
    access_token: str
    webhook_secret: str
    verification_mode: VerificationMode = VerificationMode.ENFORCED
    api_base: str = DEFAULT_API_BASE
    timeout: float = DEFAULT_TIMEOUT_SECONDS

    @property
    def verification_enforced(self) -> bool:
        return self.verification_mode is VerificationMode.ENFORCED

    def missing_settings(self) -> list[str]:
        """
        Names of settings the webhook cannot run without.
        Empty list means the gateway is usable.
        """
        missing = []
        if not self.access_token:
            missing.append("ACCESS_TOKEN")
        if self.verification_enforced and not self.webhook_secret:
            missing.append("WEBHOOK_SECRET")
        return missing


def _mercadopago_settings() -> dict:
    payments = getattr(settings, "PAYMENTS", {}) or {}
    cfg = payments.get("MERCADOPAGO") if isinstance(payments, dict) else None
    return cfg if isinstance(cfg, dict) else {}


def parse_verification_mode(raw) -> VerificationMode:
    value = str(raw or VerificationMode.ENFORCED.value).strip().lower()
    try:
        return VerificationMode(value)
    except ValueError as exc:
        choices = ", ".join(m.value for m in VerificationMode)
        raise ImproperlyConfigured(
            f"MERCADOPAGO webhook verification must be one of: {choices} (got '{raw}')"
        ) from exc


def load_gateway_config() -> GatewayConfig:
    cfg = _mercadopago_settings()

    timeout = cfg.get("TIMEOUT") or DEFAULT_TIMEOUT_SECONDS
    try:
        timeout = float(timeout)
    except (TypeError, ValueError) as exc:
        raise ImproperlyConfigured("MERCADOPAGO TIMEOUT must be a number of seconds") from exc
    if timeout <= 0:
        raise ImproperlyConfigured("MERCADOPAGO TIMEOUT must be positive")

    return GatewayConfig(
        access_token=str(cfg.get("ACCESS_TOKEN") or "").strip(),
        webhook_secret=str(cfg.get("WEBHOOK_SECRET") or "").strip(),
        verification_mode=parse_verification_mode(cfg.get("WEBHOOK_VERIFICATION")),
        api_base=str(cfg.get("API_BASE") or DEFAULT_API_BASE).strip().rstrip("/"),
        timeout=timeout,
    )
