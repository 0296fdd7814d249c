from __future__ import annotations

from concurrent.futures import Future
from datetime import datetime, timezone
from typing import Callable, List

from balancekit.domain.entities import BalanceResponse, FetchFailed, FetchResult, FetchSucceeded
from balancekit.domain.ports import UseCaseError
from balancekit.viewmodels.balance_vm import BalanceVM

T1 = datetime(2021, 6, 2, 10, 0, 0, tzinfo=timezone.utc)


class ManualFetch:
    """Hands out unresolved futures the test completes explicitly."""

    def __init__(self) -> None:
        self.futures: List["Future[FetchResult]"] = []

    def __call__(self) -> "Future[FetchResult]":
        future: "Future[FetchResult]" = Future()
        self.futures.append(future)
        return future

    def succeed(self, balance: float = 42.0, when: datetime = T1, index: int = -1) -> None:
        self.futures[index].set_result(FetchSucceeded(BalanceResponse(balance=balance, date=when)))

    def fail(self, code: str = "REQUEST_TIMEOUT", index: int = -1) -> None:
        self.futures[index].set_result(FetchFailed(UseCaseError(code, "boom")))


class FakeUiQueue:
    """Collects posted callables until the test flushes them."""

    def __init__(self) -> None:
        self.tasks: List[Callable[[], None]] = []

    def post(self, fn: Callable[[], None]) -> None:
        self.tasks.append(fn)

    def flush(self) -> int:
        ran = 0
        while self.tasks:
            self.tasks.pop(0)()
            ran += 1
        return ran


def make_vm() -> tuple[BalanceVM, ManualFetch, FakeUiQueue]:
    fetch = ManualFetch()
    ui = FakeUiQueue()
    return BalanceVM(fetch, post=ui.post), fetch, ui


__all__ = ["FakeUiQueue", "ManualFetch", "T1", "make_vm"]
