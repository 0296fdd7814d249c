"""Observable value store with explicit, disposable subscriptions.

``MutableObservable`` owns a single current value and a list of registered
callbacks. A new subscriber receives the current value immediately, then every
later value until its ``Subscription`` is cancelled. Delivery is synchronous,
in subscription order, on the thread that called ``set``. Only the latest
value is kept; late subscribers never see intermediate values.

The owner keeps the ``MutableObservable`` private and hands out the same object
typed as ``Observable`` so views can read and subscribe but not write.
"""

from __future__ import annotations

from typing import Any, Callable, Generic, List, Optional, TypeVar

T = TypeVar("T")
U = TypeVar("U")

Callback = Callable[[T], None]

_UNSET: Any = object()


class Subscription:
    """Handle for one registered callback. ``cancel`` is idempotent."""

    def __init__(self, on_cancel: Optional[Callable[["Subscription"], None]] = None) -> None:
        self._on_cancel = on_cancel
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def cancel(self) -> None:
        if not self._active:
            return
        self._active = False
        on_cancel, self._on_cancel = self._on_cancel, None
        if on_cancel is not None:
            on_cancel(self)

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.cancel()


class SubscriptionBag:
    """Collects subscriptions owned by one consumer and cancels them together."""

    def __init__(self) -> None:
        self._items: List[Subscription] = []

    def add(self, subscription: Subscription) -> Subscription:
        self._items.append(subscription)
        return subscription

    def cancel_all(self) -> None:
        items, self._items = self._items, []
        for subscription in items:
            subscription.cancel()

    def __len__(self) -> int:
        return sum(1 for item in self._items if item.active)


class Observable(Generic[T]):
    """Read side of an observable value."""

    def __init__(self, initial: T) -> None:
        self._value = initial
        self._subscribers: List[tuple[Subscription, Callback]] = []

    @property
    def value(self) -> T:
        return self._value

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def subscribe(self, callback: Callback) -> Subscription:
        """Register ``callback`` and deliver the current value to it right away."""
        subscription = Subscription(self._remove)
        self._subscribers.append((subscription, callback))
        callback(self._value)
        return subscription

    def observe(self, selector: Callable[[T], U], callback: Callable[[U], None]) -> Subscription:
        """Subscribe to ``selector(value)`` and skip repeats of the projection."""
        last: List[Any] = [_UNSET]

        def _deliver(value: T) -> None:
            projected = selector(value)
            if last[0] is not _UNSET and last[0] == projected:
                return
            last[0] = projected
            callback(projected)

        return self.subscribe(_deliver)

    def _remove(self, subscription: Subscription) -> None:
        self._subscribers = [
            entry for entry in self._subscribers if entry[0] is not subscription
        ]


class MutableObservable(Observable[T]):
    """Observable whose value is replaced by its owner through ``set``."""

    def set(self, value: T) -> None:
        self._value = value
        # Snapshot so subscribers added during delivery start with the next write.
        for subscription, callback in list(self._subscribers):
            if subscription.active:
                callback(value)

    def update(self, fn: Callable[[T], T]) -> None:
        self.set(fn(self._value))


__all__ = ["MutableObservable", "Observable", "Subscription", "SubscriptionBag"]
