from __future__ import annotations

from livestock_monitor.shared.bus import EventBus


def test_event_bus_publish_and_unsubscribe() -> None:
    bus: EventBus[str] = EventBus()
    received: list[str] = []

    def listener(event: str) -> None:
        received.append(event)

    bus.subscribe("topic", listener)
    bus.publish("topic", "hello")
    assert received == ["hello"]

    bus.unsubscribe("topic", listener)
    bus.publish("topic", "ignored")
    assert received == ["hello"]


def test_listeners_run_in_subscription_order() -> None:
    bus: EventBus[int] = EventBus()
    calls: list[str] = []

    bus.subscribe("topic", lambda event: calls.append(f"first:{event}"))
    bus.subscribe("topic", lambda event: calls.append(f"second:{event}"))
    bus.subscribe("other", lambda event: calls.append("other"))
    bus.publish("topic", 7)

    assert calls == ["first:7", "second:7"]


def test_unsubscribing_unknown_listener_is_ignored() -> None:
    bus: EventBus[str] = EventBus()
    bus.unsubscribe("missing", print)
    bus.subscribe("topic", print)
    bus.unsubscribe("topic", len)
