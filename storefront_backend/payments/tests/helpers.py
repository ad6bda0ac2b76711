# payments/tests/helpers.py

from __future__ import annotations

import json
from decimal import Decimal

from django.urls import reverse

from orders.models import Order, OrderItem
from payments.services.mercadopago import ProviderPayment
from payments.services.signature import build_manifest, compute_signature

WEBHOOK_SECRET = "test-webhook-secret"
ACCESS_TOKEN = "TEST-access-token"

ENFORCED_PAYMENTS = {
    "MERCADOPAGO": {
        "ACCESS_TOKEN": ACCESS_TOKEN,
        "WEBHOOK_SECRET": WEBHOOK_SECRET,
        "WEBHOOK_VERIFICATION": "enforced",
        "API_BASE": "https://api.mercadopago.test",
        "TIMEOUT": 5,
    }
}

DEV_PAYMENTS = {
    "MERCADOPAGO": {
        "ACCESS_TOKEN": ACCESS_TOKEN,
        "WEBHOOK_SECRET": "",
        "WEBHOOK_VERIFICATION": "disabled_for_development",
        "API_BASE": "https://api.mercadopago.test",
        "TIMEOUT": 5,
    }
}


def make_order(**kwargs) -> Order:
    defaults = dict(
        customer_first_name="Ana",
        customer_last_name="Souza",
        customer_email="ana@example.com",
        customer_phone="(11) 98765-4321",
        customer_document="123.456.789-09",
        shipping_address={
            "street": "Rua A",
            "number": "10",
            "complement": "",
            "neighborhood": "Centro",
            "city": "São Paulo",
            "state": "SP",
            "zip_code": "01000-000",
        },
        subtotal=Decimal("150.00"),
        shipping_price=Decimal("25.00"),
        total_price=Decimal("175.00"),
    )
    defaults.update(kwargs)
    order = Order.objects.create(**defaults)
    OrderItem.objects.create(
        order=order,
        product_id="prod-1",
        title="Camisa Titular 2024",
        size="M",
        quantity=1,
        unit_price=Decimal("150.00"),
    )
    return order


def provider_payment(*, payment_id="9001", status="approved", external_reference="", updated="2024-05-01T10:00:00.000-03:00"):
    return ProviderPayment.from_api(
        {
            "id": int(payment_id) if str(payment_id).isdigit() else payment_id,
            "status": status,
            "status_detail": "accredited" if status == "approved" else "",
            "external_reference": external_reference,
            "date_last_updated": updated,
            "transaction_amount": 175.0,
        }
    )


def signed_webhook(client, *, payment_id="9001", event_type="payment", request_id="req-1", ts="1714568400", secret=WEBHOOK_SECRET, signature=None):
    body = {"type": event_type, "action": f"{event_type}.updated", "data": {"id": payment_id}}
    if signature is None:
        manifest = build_manifest(payment_id=payment_id, request_id=request_id, ts=ts)
        signature = f"ts={ts},v1={compute_signature(secret=secret, manifest=manifest)}"

    headers = {"HTTP_X_REQUEST_ID": request_id}
    if signature:
        headers["HTTP_X_SIGNATURE"] = signature

    return client.post(
        reverse("payments:mercadopago-webhook"),
        data=json.dumps(body),
        content_type="application/json",
        **headers,
    )
