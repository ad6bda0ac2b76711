# payments/apps.py

"""
PAYMENTS APP CONFIG

Mercado Pago integration:
- checkout preferences (redirect to hosted checkout)
- signed webhook -> authoritative payment lookup -> order reconciliation

The gateway (config + API client) is built once here at boot and
rebuilt only when the PAYMENTS setting changes (tests use override_settings).
"""

from django.apps import AppConfig


class PaymentsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "payments"
    verbose_name = "Payments (Mercado Pago)"

    def ready(self):
        from django.core.signals import setting_changed

        from payments.gateway import install_gateway, reload_gateway_on_settings_change

        install_gateway()
        setting_changed.connect(reload_gateway_on_settings_change, dispatch_uid="payments_gateway_reload")
