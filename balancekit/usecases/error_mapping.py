"""Translate adapter errors into user-facing UseCaseError instances."""

from __future__ import annotations


from typing import Any, Dict, Optional

from balancekit.adapters.api_errors import (
    ApiClientError,
    ApiDecodeError,
    ApiError,
    ApiServerError,
    ApiTimeoutError,
    extract_error_hint,
)
from balancekit.domain.ports import UseCaseError


def map_api_error(
    exc: Exception,
    *,
    default_code: str,
    default_message: Optional[str] = None,
) -> UseCaseError:
    """Map adapter exceptions to stable UseCaseError codes.

    Args:
        exc: Exception raised by an adapter or port call.
        default_code: Code used for exceptions outside the API error family.
        default_message: Message used for those exceptions when ``str(exc)``
            is empty.

    Returns:
        UseCaseError: ``exc`` itself when it already is one, otherwise a new
        error carrying the mapped code.
    """
    if isinstance(exc, UseCaseError):
        return exc
    if isinstance(exc, ApiTimeoutError):
        return UseCaseError("REQUEST_TIMEOUT", "Request timed out. Check connection.")
    if isinstance(exc, ApiClientError):
        status = exc.status or 0
        hint = exc.hint or extract_error_hint(exc.payload)
        if status in (401, 403):
            return UseCaseError("AUTH_FAILED", "Auth failed / API key invalid.", _status_meta(exc))
        label = f"Request failed (HTTP {status})" if status else "Request failed"
        return UseCaseError("REQUEST_FAILED", _compose_error_message(label, hint), _status_meta(exc))
    if isinstance(exc, ApiServerError):
        return UseCaseError("SERVER_ERROR", "Balance service error, try again.", _status_meta(exc))
    if isinstance(exc, ApiDecodeError):
        return UseCaseError("DECODE_FAILED", "Unexpected response from balance service.")
    if isinstance(exc, ApiError):
        return UseCaseError("API_ERROR", str(exc))

    message = default_message or str(exc) or "Unexpected error."
    return UseCaseError(default_code, message)


def _status_meta(exc: ApiError) -> Optional[Dict[str, Any]]:
    if exc.status is None:
        return None
    return {"status": exc.status}


def _compose_error_message(base: str, hint: Optional[str]) -> str:
    hint_text = (hint or "").strip()
    if hint_text:
        return f"{base}: {hint_text}"
    if base.endswith("."):
        return base
    return f"{base}."


__all__ = ["map_api_error"]
