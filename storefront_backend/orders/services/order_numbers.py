# orders/services/order_numbers.py

"""
Customer-facing order numbers: "V-" + 6 random digits.

Uniqueness is only guaranteed by retrying on collision (see Order.save).
"""

import secrets

ORDER_NUMBER_PREFIX = "V-"
ORDER_NUMBER_DIGITS = 6


def generate_order_number() -> str:
    return f"{ORDER_NUMBER_PREFIX}{secrets.randbelow(10 ** ORDER_NUMBER_DIGITS):0{ORDER_NUMBER_DIGITS}d}"
