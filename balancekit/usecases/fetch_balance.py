"""Use case that runs one balance fetch off the UI thread.

``FetchBalance`` submits the blocking ``BalanceService.refresh_balance`` call to
an executor and hands back a ``Future`` that always resolves to exactly one
``FetchResult``. Adapter exceptions never escape the future; they are mapped to
``UseCaseError`` and wrapped in ``FetchFailed``.
"""

from __future__ import annotations

import logging
from concurrent.futures import Executor, Future
from dataclasses import dataclass

from balancekit.domain.entities import FetchFailed, FetchResult, FetchSucceeded
from balancekit.domain.ports import BalanceService
from balancekit.usecases.error_mapping import map_api_error

_log = logging.getLogger(__name__)


@dataclass
class FetchBalance:
    """Single-shot async balance retrieval through ``BalanceService``."""

    service: BalanceService
    executor: Executor

    def __call__(self) -> "Future[FetchResult]":
        return self.executor.submit(self.run)

    def run(self) -> FetchResult:
        """Fetch synchronously and fold every outcome into a ``FetchResult``."""
        try:
            response = self.service.refresh_balance()
        except Exception as exc:
            mapped = map_api_error(
                exc,
                default_code="BALANCE_FETCH_FAILED",
                default_message="Balance refresh failed.",
            )
            _log.debug("Balance fetch failed: %s", exc, exc_info=True)
            return FetchFailed(mapped)
        return FetchSucceeded(response)


__all__ = ["FetchBalance"]
