"""Single-consumer message channel bound to the thread that owns it."""

from __future__ import annotations

import logging
import threading
from collections import deque
from typing import Callable, Deque, Generic, Optional, TypeVar

M = TypeVar("M")

_log = logging.getLogger(__name__)


class EventChannel(Generic[M]):
    """FIFO queue feeding one handler.

    ``send`` enqueues and drains immediately. A message sent from inside the
    handler waits until the current one is fully handled, so the handler never
    runs re-entrantly. Sends from other threads raise ``RuntimeError``; worker
    threads marshal back through the UI post function first.
    """

    def __init__(self, handler: Callable[[M], None], *, name: str = "events") -> None:
        self._handler = handler
        self._name = name
        self._pending: Deque[M] = deque()
        self._draining = False
        self._closed = False
        self._owner = threading.get_ident()

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def pending(self) -> int:
        return len(self._pending)

    def send(self, message: M) -> None:
        if threading.get_ident() != self._owner:
            raise RuntimeError(
                f"{self._name}: send() called off the owning thread; post it to the UI thread"
            )
        if self._closed:
            _log.debug("%s: dropped %r after close", self._name, message)
            return
        self._pending.append(message)
        if self._draining:
            return
        self._drain()

    def close(self) -> None:
        self._closed = True
        self._pending.clear()

    def _drain(self) -> None:
        # Queued messages are still handled when one handler call raises; the
        # first error is re-raised to the sender once the queue is empty.
        error: Optional[Exception] = None
        self._draining = True
        try:
            while self._pending and not self._closed:
                message = self._pending.popleft()
                try:
                    self._handler(message)
                except Exception as exc:
                    if error is not None:
                        _log.exception("%s: handler failed on %r", self._name, message)
                        continue
                    error = exc
        finally:
            self._draining = False
        if error is not None:
            raise error


__all__ = ["EventChannel"]
