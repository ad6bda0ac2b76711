# payments/services/signature.py

"""
Mercado Pago webhook signature verification.

Header format:
    x-signature: ts=<unix-seconds>,v1=<hex hmac-sha256>

Signed manifest (byte-exact):
    id:{data.id};request-id:{x-request-id};ts:{ts};

data.id comes from the parsed JSON body; the HMAC is computed over the
manifest string, not over the raw body.
"""

from __future__ import annotations

import hashlib
import hmac
import logging

logger = logging.getLogger(__name__)


def parse_signature_header(header) -> dict[str, str]:
    """
    "ts=1,v1=abc" -> {"ts": "1", "v1": "abc"}.
    Parts without "=" are ignored; later duplicates win.
    """
    parts: dict[str, str] = {}
    for chunk in str(header or "").split(","):
        key, sep, value = chunk.partition("=")
        if not sep:
            continue
        key = key.strip()
        if key:
            parts[key] = value.strip()
    return parts


def build_manifest(*, payment_id, request_id, ts) -> str:
    return f"id:{payment_id or ''};request-id:{request_id or ''};ts:{ts};"


def compute_signature(*, secret: str, manifest: str) -> str:
    return hmac.new(secret.encode("utf-8"), manifest.encode("utf-8"), hashlib.sha256).hexdigest()


def verify_webhook_signature(
    *,
    secret: str,
    signature_header: str | None,
    request_id: str | None,
    payment_id,
) -> bool:
    if not secret:
        # Callers decide about development mode; an empty secret never verifies.
        return False

    parts = parse_signature_header(signature_header)
    ts = parts.get("ts")
    provided = parts.get("v1")
    if not ts or not provided:
        logger.warning("Webhook signature header missing ts or v1")
        return False

    try:
        manifest = build_manifest(payment_id=payment_id, request_id=request_id, ts=ts)
        expected = compute_signature(secret=secret, manifest=manifest)
        return hmac.compare_digest(expected, provided.lower())
    except (TypeError, ValueError, UnicodeError):
        logger.warning("Webhook signature could not be decoded")
        return False
