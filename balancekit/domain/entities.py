"""Typed domain objects for the balance screen.

``ViewState`` is the immutable snapshot the view renders. ``BalanceEvent`` and
``LifecycleSignal`` are the discrete inputs the view-model consumes, and
``FetchResult`` is the single outcome of one balance fetch.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from typing import Any, Mapping, Optional, Union

from .ports import UseCaseError

DATE_FORMAT = "%Y-%m-%d %H:%M:%S %z"


@dataclass(frozen=True)
class BalanceResponse:
    """Decoded balance payload returned by the fetch service."""

    balance: float
    date: datetime

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "BalanceResponse":
        """Decode ``{"balance": 12.5, "date": "2021-06-02 10:00:00 +0000"}``.

        Raises:
            ValueError: If a key is missing or has the wrong shape.
        """
        if not isinstance(payload, Mapping):
            raise ValueError("Balance payload must be an object.")
        if "balance" not in payload or "date" not in payload:
            raise ValueError("Balance payload requires 'balance' and 'date'.")

        raw_balance = payload["balance"]
        if isinstance(raw_balance, bool) or not isinstance(raw_balance, (int, float)):
            raise ValueError("balance must be a number.")

        raw_date = payload["date"]
        if not isinstance(raw_date, str):
            raise ValueError("date must be a string.")
        try:
            when = datetime.strptime(raw_date.strip(), DATE_FORMAT)
        except ValueError as exc:
            raise ValueError(f"date '{raw_date}' does not match {DATE_FORMAT}.") from exc
        return cls(balance=float(raw_balance), date=when)


@dataclass(frozen=True)
class ViewState:
    """Everything the balance view needs to render."""

    balance: Optional[float] = None
    fetched_at: Optional[datetime] = None
    is_refreshing: bool = False
    did_fail: bool = False
    is_redacted: bool = False

    @property
    def is_idle(self) -> bool:
        return not self.is_refreshing

    def refreshing(self) -> "ViewState":
        """Return the snapshot for a fetch that just started."""
        return replace(self, is_refreshing=True, did_fail=False)

    def succeeded(self, response: BalanceResponse) -> "ViewState":
        return replace(
            self,
            balance=response.balance,
            fetched_at=response.date,
            is_refreshing=False,
        )

    def failed(self) -> "ViewState":
        return replace(self, is_refreshing=False, did_fail=True)

    def redacted(self, value: bool) -> "ViewState":
        return replace(self, is_redacted=value)


class BalanceEvent(Enum):
    """User-driven triggers forwarded by the view."""

    VIEW_DID_APPEAR = "view_did_appear"
    REFRESH_BUTTON_WAS_TAPPED = "refresh_button_was_tapped"


class LifecycleSignal(Enum):
    """Application focus changes that control redaction."""

    WILL_RESIGN_ACTIVE = "will_resign_active"
    DID_BECOME_ACTIVE = "did_become_active"


@dataclass(frozen=True)
class FetchSucceeded:
    response: BalanceResponse


@dataclass(frozen=True)
class FetchFailed:
    error: UseCaseError


FetchResult = Union[FetchSucceeded, FetchFailed]


__all__ = [
    "DATE_FORMAT",
    "BalanceEvent",
    "BalanceResponse",
    "FetchFailed",
    "FetchResult",
    "FetchSucceeded",
    "LifecycleSignal",
    "ViewState",
]
