import gc

import pytest

from core.events.domain_events import domain_events
from core.events.signal import Signal
from core.exceptions import BusinessRuleError


def test_domain_event_signal_connect_emit_disconnect():
    seen: list[str] = []

    def _handler(order_id: str) -> None:
        seen.append(order_id)

    domain_events.orders_changed.connect(_handler)
    domain_events.orders_changed.emit("o-1")
    domain_events.orders_changed.disconnect(_handler)
    domain_events.orders_changed.emit("o-2")

    assert seen == ["o-1"]


def test_signal_emit_prunes_dead_weak_callbacks():
    signal: Signal[str] = Signal()
    seen: list[str] = []

    class _DeadProxyCallback:
        def __init__(self) -> None:
            self.calls = 0

        def __call__(self, _payload: str) -> None:
            self.calls += 1
            raise ReferenceError("weakly-referenced object no longer exists")

    dead = _DeadProxyCallback()

    def _ok(payload: str) -> None:
        seen.append(payload)

    signal.connect(dead)
    signal.connect(_ok)

    signal.emit("c-1")
    signal.emit("c-2")

    assert dead.calls == 1
    assert seen == ["c-1", "c-2"]
    assert signal.subscriber_count() == 1


def test_weak_subscriber_is_dropped_once_its_owner_is_collected():
    signal: Signal[str] = Signal()
    seen: list[str] = []

    class _View:
        def refresh(self, chapter: str) -> None:
            seen.append(chapter)

    view = _View()
    signal.connect(view.refresh, weak=True)
    signal.emit("Roads")
    assert signal.subscriber_count() == 1

    del view
    gc.collect()
    signal.emit("Schools")

    assert seen == ["Roads"]
    assert signal.subscriber_count() == 0


def test_weak_subscriber_can_be_disconnected():
    signal: Signal[str] = Signal()

    class _View:
        def refresh(self, chapter: str) -> None:
            pass

    view = _View()
    signal.connect(view.refresh, weak=True)
    signal.connect(view.refresh, weak=True)
    assert signal.subscriber_count() == 1

    signal.disconnect(view.refresh)
    assert signal.subscriber_count() == 0


def test_signal_emit_keeps_other_errors_visible():
    signal: Signal[str] = Signal()

    def _boom(_payload: str) -> None:
        raise RuntimeError("boom")

    signal.connect(_boom)

    try:
        signal.emit("x")
        assert False, "Expected RuntimeError to propagate"
    except RuntimeError as exc:
        assert str(exc) == "boom"


def test_services_emit_funding_and_order_changes(services):
    chapters: list[str] = []
    orders: list[str] = []
    domain_events.funding_changed.connect(chapters.append)
    domain_events.orders_changed.connect(orders.append)
    try:
        inst = services["funding_service"].create_instrument("Roads", 500.0)
        order = services["work_order_service"].create_order("ORD-1", "", 100.0, [inst.id])
        services["work_order_service"].record_contract(order.id, 90.0)
    finally:
        domain_events.funding_changed.disconnect(chapters.append)
        domain_events.orders_changed.disconnect(orders.append)

    assert chapters == ["Roads"]
    assert orders == [order.id, order.id]


def test_refused_save_emits_nothing(services):
    orders: list[str] = []
    inst = services["funding_service"].create_instrument("Roads", 50.0)
    domain_events.orders_changed.connect(orders.append)
    try:
        with pytest.raises(BusinessRuleError):
            services["work_order_service"].create_order("ORD-1", "", 100.0, [inst.id])
    finally:
        domain_events.orders_changed.disconnect(orders.append)

    assert orders == []
