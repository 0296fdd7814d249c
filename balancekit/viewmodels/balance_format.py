"""View-facing text helpers derived from ``ViewState``."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, Optional

from ..domain.entities import ViewState

REDACTED_VALUE_ALPHA = 0.1
PLACEHOLDER = "--"
FAILED_TEXT = "Refresh failed. Tap refresh to try again."
REFRESHING_TEXT = "Refreshing..."

DateFormatter = Callable[[datetime], str]


def formatted_balance(state: ViewState) -> str:
    if state.balance is None:
        return PLACEHOLDER
    sign = "-" if state.balance < 0 else ""
    return f"{sign}${abs(state.balance):,.2f}"


def relative_date(when: datetime, now: Optional[datetime] = None) -> str:
    """Return a coarse "N units ago" label for ``when``."""
    if now is None:
        now = datetime.now(timezone.utc) if when.tzinfo else datetime.now()
    seconds = int((now - when).total_seconds())
    if seconds < 60:
        return "just now"
    for size, unit in ((86400, "day"), (3600, "hour"), (60, "minute")):
        if seconds >= size:
            count = seconds // size
            return f"{count} {unit}{'' if count == 1 else 's'} ago"
    return "just now"


def info_text(state: ViewState, format_date: DateFormatter = relative_date) -> str:
    if state.is_refreshing:
        return REFRESHING_TEXT
    if state.did_fail:
        return FAILED_TEXT
    if state.fetched_at is not None:
        return f"Last updated {format_date(state.fetched_at)}"
    return ""


def info_color(state: ViewState) -> str:
    return "red" if state.did_fail else "gray"


def value_alpha(state: ViewState) -> float:
    return REDACTED_VALUE_ALPHA if state.is_redacted else 1.0


__all__ = [
    "FAILED_TEXT",
    "PLACEHOLDER",
    "REDACTED_VALUE_ALPHA",
    "REFRESHING_TEXT",
    "formatted_balance",
    "info_color",
    "info_text",
    "relative_date",
    "value_alpha",
]
