"""Main-thread call queue used in place of a GUI toolkit's event loop.

Worker threads ``post`` callables; the owning (UI) thread executes them with
``run_pending`` or ``run_until``. This mirrors Tk's ``after(0, fn)`` hand-off
so view-model state is only touched from one thread.
"""

from __future__ import annotations

import logging
import queue
import threading
import time
from typing import Callable, Optional

Task = Callable[[], None]

_log = logging.getLogger(__name__)


class UiCallQueue:
    """Thread-safe queue of callables drained on the owning thread."""

    def __init__(self) -> None:
        self._tasks: "queue.SimpleQueue[Task]" = queue.SimpleQueue()
        self._owner = threading.get_ident()

    def post(self, fn: Task) -> None:
        """Schedule ``fn`` on the UI thread. Safe to call from any thread."""
        self._tasks.put(fn)

    def run_pending(self) -> int:
        """Run every callable queued so far and return how many ran."""
        self._check_owner()
        ran = 0
        while True:
            try:
                task = self._tasks.get_nowait()
            except queue.Empty:
                return ran
            task()
            ran += 1

    def run_until(
        self,
        predicate: Callable[[], bool],
        *,
        timeout_s: Optional[float] = None,
        poll_s: float = 0.05,
    ) -> bool:
        """Pump queued callables until ``predicate()`` holds.

        Returns ``False`` when ``timeout_s`` elapses first.
        """
        self._check_owner()
        deadline = None if timeout_s is None else time.monotonic() + timeout_s
        while not predicate():
            wait = poll_s
            if deadline is not None:
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    _log.debug("run_until timed out after %.2fs", timeout_s)
                    return False
                wait = min(wait, remaining)
            try:
                task = self._tasks.get(timeout=wait)
            except queue.Empty:
                continue
            task()
        return True

    def _check_owner(self) -> None:
        if threading.get_ident() != self._owner:
            raise RuntimeError("UiCallQueue must be drained on the thread that created it")


__all__ = ["UiCallQueue"]
