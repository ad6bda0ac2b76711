# payments/services/mercadopago.py

"""
Minimal Mercado Pago REST client.

Endpoints used:
- GET  /v1/payments/{id}        authoritative payment state
- POST /checkout/preferences    hosted checkout preference (init_point)

Every call carries an explicit timeout; transport and HTTP failures are
normalized to PaymentProviderError.
"""

from __future__ import annotations

import json
import logging
import socket
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any
from urllib.error import HTTPError, URLError
from urllib.parse import quote
from urllib.request import Request, urlopen

from django.utils.dateparse import parse_datetime

from payments.services.exceptions import (
    GatewayConfigurationError,
    PaymentProviderError,
    PaymentProviderTimeout,
)

logger = logging.getLogger(__name__)


def _safe_preview(text: str, limit: int = 800) -> str:
    text = (text or "").strip()
    if len(text) <= limit:
        return text
    return text[:limit] + " …(truncated)"


def _parse_json_object(raw: str) -> dict[str, Any] | None:
    try:
        parsed = json.loads(raw or "")
    except ValueError:
        return None
    return parsed if isinstance(parsed, dict) else None


@dataclass(frozen=True)
class ProviderPayment:
    id: str
    status: str
    external_reference: str
    date_last_updated: datetime | None = None
    status_detail: str = ""
    transaction_amount: str = ""
    raw: dict = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_api(cls, data: dict) -> "ProviderPayment":
        updated_raw = data.get("date_last_updated") or data.get("date_approved") or ""
        updated = None
        if updated_raw:
            try:
                updated = parse_datetime(str(updated_raw))
            except ValueError:
                logger.warning("Unparseable payment date", extra={"value": updated_raw})

        # Offset-less provider dates are read as UTC so they compare with aware DB values
        if updated is not None and updated.tzinfo is None:
            updated = updated.replace(tzinfo=timezone.utc)

        amount = data.get("transaction_amount")
        return cls(
            id=str(data.get("id") or "").strip(),
            status=str(data.get("status") or "").strip().lower(),
            external_reference=str(data.get("external_reference") or "").strip(),
            date_last_updated=updated,
            status_detail=str(data.get("status_detail") or ""),
            transaction_amount="" if amount is None else str(amount),
            raw=data,
        )


class MercadoPagoClient:
    def __init__(self, *, access_token: str, api_base: str, timeout: float):
        self.access_token = access_token
        self.api_base = api_base.rstrip("/")
        self.timeout = timeout

    def _request_json(
        self,
        method: str,
        path: str,
        *,
        body: dict | None = None,
        idempotency_key: str | None = None,
    ) -> dict[str, Any]:
        if not self.access_token:
            raise GatewayConfigurationError("MERCADOPAGO access token is not configured.")

        data = None
        if body is not None:
            data = json.dumps(body, ensure_ascii=False, default=str).encode("utf-8")

        headers = {
            "Authorization": f"Bearer {self.access_token}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        if idempotency_key:
            headers["X-Idempotency-Key"] = idempotency_key

        req = Request(f"{self.api_base}{path}", data=data, headers=headers, method=method)

        try:
            with urlopen(req, timeout=self.timeout) as resp:
                raw = resp.read().decode("utf-8", errors="replace")
        except HTTPError as e:
            try:
                raw = e.read().decode("utf-8", errors="replace")
            except OSError:
                raw = ""
            parsed = _parse_json_object(raw) or {}
            msg = parsed.get("message") or parsed.get("error") or _safe_preview(raw) or str(e)
            raise PaymentProviderError(
                f"Mercado Pago HTTPError: {e.code} {msg}", status_code=e.code
            ) from e
        except (socket.timeout, TimeoutError) as e:
            raise PaymentProviderTimeout(
                f"Mercado Pago did not answer within {self.timeout}s"
            ) from e
        except URLError as e:
            if isinstance(e.reason, (socket.timeout, TimeoutError)):
                raise PaymentProviderTimeout(
                    f"Mercado Pago did not answer within {self.timeout}s"
                ) from e
            raise PaymentProviderError(f"Mercado Pago URLError: {e.reason}") from e

        parsed = _parse_json_object(raw)
        if parsed is None:
            raise PaymentProviderError(f"Mercado Pago returned non-JSON: {_safe_preview(raw)}")

        return parsed

    def get_payment(self, payment_id) -> ProviderPayment:
        pid = str(payment_id or "").strip()
        if not pid:
            raise PaymentProviderError("payment id is required")

        data = self._request_json("GET", f"/v1/payments/{quote(pid, safe='')}")
        return ProviderPayment.from_api(data)

    def create_preference(self, body: dict) -> dict:
        """
        Returns the provider response; callers use "id" and "init_point".
        """
        result = self._request_json(
            "POST",
            "/checkout/preferences",
            body=body,
            idempotency_key=str(uuid.uuid4()),
        )
        if not result.get("init_point"):
            raise PaymentProviderError("Mercado Pago preference has no init_point")
        return result
