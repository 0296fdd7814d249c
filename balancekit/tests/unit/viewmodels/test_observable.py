import pytest

from balancekit.viewmodels.observable import MutableObservable, Subscription, SubscriptionBag


def test_subscribe_delivers_current_value_then_updates_in_order():
    store = MutableObservable(1)
    calls = []

    store.subscribe(lambda v: calls.append(("first", v)))
    store.subscribe(lambda v: calls.append(("second", v)))
    store.set(2)

    assert calls == [("first", 1), ("second", 1), ("first", 2), ("second", 2)]
    assert store.value == 2


def test_late_subscriber_sees_only_latest_value():
    store = MutableObservable("a")
    store.set("b")
    store.set("c")
    seen = []

    store.subscribe(seen.append)

    assert seen == ["c"]


def test_cancel_stops_delivery_and_is_idempotent():
    store = MutableObservable(0)
    seen = []
    sub = store.subscribe(seen.append)

    sub.cancel()
    sub.cancel()
    store.set(5)

    assert seen == [0]
    assert sub.active is False
    assert store.subscriber_count == 0


def test_subscription_context_manager_cancels_on_exit():
    store = MutableObservable(0)
    seen = []
    with store.subscribe(seen.append):
        store.set(1)
    store.set(2)

    assert seen == [0, 1]


def test_cancel_during_delivery_skips_remaining_callback():
    store = MutableObservable(0)
    seen = []
    later: list[Subscription] = []

    def _first(value):
        if value == 1:
            later[0].cancel()

    store.subscribe(_first)
    later.append(store.subscribe(seen.append))
    store.set(1)

    assert seen == [0]


def test_subscriber_added_during_delivery_starts_with_next_write():
    store = MutableObservable(0)
    seen = []

    def _first(value):
        if value == 1 and not seen:
            store.subscribe(lambda v: seen.append(v))

    store.subscribe(_first)
    store.set(1)
    store.set(2)

    assert seen == [1, 2]


def test_observe_skips_duplicate_projections():
    store = MutableObservable({"n": 1, "other": "x"})
    seen = []

    store.observe(lambda s: s["n"], seen.append)
    store.set({"n": 1, "other": "y"})
    store.set({"n": 2, "other": "y"})
    store.set({"n": 2, "other": "z"})

    assert seen == [1, 2]


def test_update_applies_function_to_current_value():
    store = MutableObservable(3)
    store.update(lambda v: v * 2)
    assert store.value == 6


def test_subscriber_exception_propagates_to_writer():
    store = MutableObservable(0)

    def _boom(value):
        if value:
            raise RuntimeError("render failed")

    store.subscribe(_boom)
    with pytest.raises(RuntimeError):
        store.set(1)
    assert store.value == 1


def test_bag_cancels_everything_once():
    store = MutableObservable(0)
    bag = SubscriptionBag()
    seen = []
    bag.add(store.subscribe(seen.append))
    bag.add(store.observe(lambda v: v % 2, seen.append))
    assert len(bag) == 2

    bag.cancel_all()
    bag.cancel_all()
    store.set(3)

    assert len(bag) == 0
    assert store.subscriber_count == 0
    assert seen == [0, 0]
