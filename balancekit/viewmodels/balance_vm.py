from __future__ import annotations

import logging
from concurrent.futures import Future
from typing import Callable, Optional, Union

from ..domain.entities import (
    BalanceEvent,
    FetchFailed,
    FetchResult,
    FetchSucceeded,
    LifecycleSignal,
    ViewState,
)
from ..domain.ports import UseCaseError
from .event_channel import EventChannel
from .observable import MutableObservable, Observable

Message = Union[BalanceEvent, LifecycleSignal, FetchSucceeded, FetchFailed]
FetchFn = Callable[[], "Future[FetchResult]"]
PostFn = Callable[[Callable[[], None]], None]

_log = logging.getLogger(__name__)


class BalanceVM:
    """Owns the balance ``ViewState`` and reacts to view and lifecycle events.

    All messages, including fetch completions, go through one ``EventChannel``
    on the UI thread. ``post`` must schedule a callable on that thread (for
    example Tk ``after(0, fn)`` or ``UiCallQueue.post``); fetch futures resolve
    on a worker thread and use it to re-enter.

    A refresh requested while a fetch is in flight is ignored.
    """

    def __init__(self, fetch_balance: FetchFn, *, post: PostFn) -> None:
        self._fetch_balance = fetch_balance
        self._post = post
        self._state: MutableObservable[ViewState] = MutableObservable(ViewState())
        self._channel: EventChannel[Message] = EventChannel(self._handle, name="BalanceVM")
        self.last_error: Optional[UseCaseError] = None
        self.fetch_count = 0

    @property
    def state(self) -> Observable[ViewState]:
        return self._state

    @property
    def closed(self) -> bool:
        return self._channel.closed

    # ------------------------------------------------------------------
    # Commands (view side)
    # ------------------------------------------------------------------
    def send(self, message: Message) -> None:
        self._channel.send(message)

    def view_did_appear(self) -> None:
        self.send(BalanceEvent.VIEW_DID_APPEAR)

    def refresh_button_was_tapped(self) -> None:
        self.send(BalanceEvent.REFRESH_BUTTON_WAS_TAPPED)

    def will_resign_active(self) -> None:
        self.send(LifecycleSignal.WILL_RESIGN_ACTIVE)

    def did_become_active(self) -> None:
        self.send(LifecycleSignal.DID_BECOME_ACTIVE)

    def close(self) -> None:
        self._channel.close()

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _handle(self, message: Message) -> None:
        if isinstance(message, BalanceEvent):
            self._refresh(message)
        elif isinstance(message, LifecycleSignal):
            redacted = message is LifecycleSignal.WILL_RESIGN_ACTIVE
            self._state.update(lambda state: state.redacted(redacted))
        elif isinstance(message, FetchSucceeded):
            self.last_error = None
            self._state.update(lambda state: state.succeeded(message.response))
        elif isinstance(message, FetchFailed):
            self.last_error = message.error
            _log.warning("Balance refresh failed [%s]: %s", message.error.code, message.error.message)
            self._state.update(lambda state: state.failed())
        else:
            raise TypeError(f"BalanceVM cannot handle {message!r}")

    def _refresh(self, event: BalanceEvent) -> None:
        if self._state.value.is_refreshing:
            _log.debug("Ignoring %s: refresh already in flight", event.value)
            return
        # The fetch is started before the state write so a raising subscriber
        # cannot leave is_refreshing set with nothing in flight to clear it.
        self.fetch_count += 1
        try:
            future = self._fetch_balance()
        except Exception as exc:
            _log.exception("Balance fetch could not be started")
            # Queued behind this message, so it lands after the refreshing state.
            self._channel.send(FetchFailed(_fetch_error(exc)))
        else:
            future.add_done_callback(self._on_fetch_done)
        self._state.update(lambda state: state.refreshing())

    def _on_fetch_done(self, future: "Future[FetchResult]") -> None:
        # Runs on the worker thread, or inline when the future is already done.
        if future.cancelled():
            result: FetchResult = FetchFailed(UseCaseError("FETCH_CANCELLED", "Balance refresh was cancelled."))
        else:
            exc = future.exception()
            result = FetchFailed(_fetch_error(exc)) if exc is not None else future.result()
        self._post(lambda: self._channel.send(result))


def _fetch_error(exc: BaseException) -> UseCaseError:
    return UseCaseError("BALANCE_FETCH_FAILED", str(exc) or "Balance refresh failed.")


__all__ = ["BalanceVM", "Message"]
