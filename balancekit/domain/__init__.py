"""Domain types and ports for the balance screen."""

from .entities import (
    BalanceEvent,
    BalanceResponse,
    FetchFailed,
    FetchResult,
    FetchSucceeded,
    LifecycleSignal,
    ViewState,
)
from .ports import BalanceService, StoragePort, UseCaseError

__all__ = [
    "BalanceEvent",
    "BalanceResponse",
    "BalanceService",
    "FetchFailed",
    "FetchResult",
    "FetchSucceeded",
    "LifecycleSignal",
    "StoragePort",
    "UseCaseError",
    "ViewState",
]
