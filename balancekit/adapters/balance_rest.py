from __future__ import annotations

import logging
from typing import Any, Optional

import requests

from balancekit.domain.entities import BalanceResponse
from balancekit.domain.ports import BalanceService

from .api_errors import (
    ApiClientError,
    ApiDecodeError,
    ApiError,
    ApiServerError,
    build_error_message,
    extract_error_hint,
    parse_error_payload,
)
from .http_client import HttpConfig, RetryingSession

_log = logging.getLogger(__name__)


class BalanceRestAdapter(BalanceService):
    """REST adapter that reads the account balance from a single JSON endpoint."""

    def __init__(
        self,
        url: str,
        *,
        api_key: Optional[str] = None,
        request_timeout_s: int = 10,
        retries: int = 0,
    ) -> None:
        cleaned = str(url or "").strip()
        if not cleaned:
            raise ValueError("BalanceRestAdapter requires a balance URL")
        self.url = cleaned
        self.cfg = HttpConfig(request_timeout_s=request_timeout_s, retries=retries)
        self.session = RetryingSession(api_key or None, self.cfg)

    def refresh_balance(self) -> BalanceResponse:
        ctx = "balance"
        _log.debug("GET %s", self.url)
        resp = self.session.get(self.url)
        self._ensure_ok(resp, ctx)
        payload = self._json_any(resp, ctx)
        try:
            return BalanceResponse.from_payload(payload)
        except ValueError as exc:
            raise ApiDecodeError(
                f"{ctx}: {exc}",
                status=resp.status_code,
                payload=payload,
                context=ctx,
            ) from exc

    # ------------------------------------------------------------------
    @staticmethod
    def _ensure_ok(resp: requests.Response, ctx: str) -> None:
        # The endpoint answers 200 only; any other status is a failure.
        if resp.status_code == 200:
            return
        status = resp.status_code
        payload = parse_error_payload(resp)
        message = build_error_message(ctx, status, payload)
        if 400 <= status < 500:
            raise ApiClientError(
                message,
                status=status,
                hint=extract_error_hint(payload),
                payload=payload,
                context=ctx,
            )
        if 500 <= status < 600:
            raise ApiServerError(message, status=status, payload=payload, context=ctx)
        raise ApiError(message, status=status, payload=payload, context=ctx)

    @staticmethod
    def _json_any(resp: requests.Response, ctx: str) -> Any:
        try:
            return resp.json()
        except ValueError as exc:
            snippet = (getattr(resp, "text", "") or "")[:400]
            raise ApiDecodeError(
                f"{ctx}: invalid JSON response: {snippet}",
                status=resp.status_code,
                payload=snippet,
                context=ctx,
            ) from exc


__all__ = ["BalanceRestAdapter"]
