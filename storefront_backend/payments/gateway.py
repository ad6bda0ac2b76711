# payments/gateway.py

"""
Process-wide payment gateway: one GatewayConfig + one MercadoPagoClient.

Installed by PaymentsConfig.ready(); views read it through get_gateway().
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from payments.config import GatewayConfig, load_gateway_config
from payments.services.mercadopago import MercadoPagoClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PaymentGateway:
    config: GatewayConfig
    client: MercadoPagoClient


_gateway: PaymentGateway | None = None


def build_gateway(config: GatewayConfig | None = None) -> PaymentGateway:
    config = config or load_gateway_config()
    client = MercadoPagoClient(
        access_token=config.access_token,
        api_base=config.api_base,
        timeout=config.timeout,
    )
    return PaymentGateway(config=config, client=client)


def install_gateway(gateway: PaymentGateway | None = None) -> PaymentGateway:
    global _gateway
    _gateway = gateway or build_gateway()

    missing = _gateway.config.missing_settings()
    if missing:
        logger.warning("Mercado Pago gateway is missing settings", extra={"missing": missing})
    if not _gateway.config.verification_enforced:
        logger.warning("Mercado Pago webhook signature verification is DISABLED (development mode)")

    return _gateway


def get_gateway() -> PaymentGateway:
    if _gateway is None:
        return install_gateway()
    return _gateway


def reload_gateway_on_settings_change(*, setting, **kwargs):
    if setting == "PAYMENTS":
        install_gateway()
