"""Exceptions raised by the balance adapters, plus error-body helpers."""

from __future__ import annotations

from typing import Any, Optional


class ApiError(RuntimeError):
    """Base class for balance API failures.

    ``status`` is the HTTP status when a response arrived. ``payload`` keeps
    the decoded error body (or a text snippet) and ``context`` names the
    request that failed.
    """

    def __init__(
        self,
        message: str,
        *,
        status: Optional[int] = None,
        hint: Optional[str] = None,
        payload: Any = None,
        context: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.hint = hint
        self.payload = payload
        self.context = context


class ApiClientError(ApiError):
    """HTTP 4xx from the balance endpoint."""


class ApiServerError(ApiError):
    """HTTP 5xx from the balance endpoint."""


class ApiTimeoutError(ApiError):
    """Transport level timeout or connectivity failure."""


class ApiDecodeError(ApiError):
    """Response body was not a valid balance payload."""


def parse_error_payload(resp: Any) -> Any:
    """Best-effort decode of an error body; never raises."""
    try:
        return resp.json()
    except ValueError:
        return _clean(getattr(resp, "text", ""), limit=400)


def build_error_message(ctx: str, status: int, payload: Any) -> str:
    # jsonbin reports failures as {"success": false, "message": "..."}.
    detail = _field(payload, "message", "error") if isinstance(payload, dict) else _clean(payload)
    if detail:
        return f"{ctx}: {detail} (HTTP {status})"
    return f"{ctx}: HTTP {status}"


def extract_error_hint(payload: Any) -> Optional[str]:
    if isinstance(payload, dict):
        return _field(payload, "hint", "details")
    return None


def _field(payload: dict, *keys: str) -> Optional[str]:
    for key in keys:
        text = _clean(payload.get(key))
        if text:
            return text
    return None


def _clean(value: Any, *, limit: int = 200) -> Optional[str]:
    if not isinstance(value, str):
        return None
    text = value.strip()
    return text[:limit] or None
