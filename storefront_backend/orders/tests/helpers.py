from __future__ import annotations

from decimal import Decimal

from orders.models import Order, OrderItem

ADDRESS = {
    "street": "Rua das Flores",
    "number": "100",
    "complement": "Apto 12",
    "neighborhood": "Centro",
    "city": "Curitiba",
    "state": "PR",
    "zip_code": "80000-000",
}

CUSTOMER = {
    "first_name": "Bruno",
    "last_name": "Lima",
    "email": "bruno@example.com",
    "phone": "(41) 99999-0000",
    "document": "529.982.247-25",
}


def make_order(*, items=None, **kwargs) -> Order:
    defaults = dict(
        customer_first_name=CUSTOMER["first_name"],
        customer_last_name=CUSTOMER["last_name"],
        customer_email=CUSTOMER["email"],
        customer_phone=CUSTOMER["phone"],
        customer_document=CUSTOMER["document"],
        shipping_address=dict(ADDRESS),
        subtotal=Decimal("100.00"),
        shipping_price=Decimal("25.00"),
        total_price=Decimal("125.00"),
    )
    defaults.update(kwargs)
    order = Order.objects.create(**defaults)

    for line in items or [{"product_id": "camisa-1", "title": "Camisa Home", "quantity": 1, "unit_price": "100.00"}]:
        OrderItem.objects.create(
            order=order,
            product_id=line["product_id"],
            title=line["title"],
            size=line.get("size", "M"),
            quantity=line["quantity"],
            unit_price=Decimal(line["unit_price"]),
        )
    return order


def checkout_payload(**overrides) -> dict:
    payload = {
        "items": [
            {
                "product_id": "camisa-1",
                "product_slug": "camisa-home",
                "title": "Camisa Home",
                "size": "M",
                "quantity": 2,
                "unit_price": "100.00",
                "customization": {"name": "LIMA", "number": "9"},
                "customization_fee": "10.00",
            }
        ],
        "customer": dict(CUSTOMER),
        "address": dict(ADDRESS),
        "notes": "Entregar na portaria",
        "user_id": "user_123",
    }
    payload.update(overrides)
    return payload
