from __future__ import annotations

from collections import defaultdict
from typing import Callable, DefaultDict, Generic, Hashable, Iterable, TypeVar

Event = TypeVar("Event")
Subscriber = Callable[[Event], None]


class EventBus(Generic[Event]):
    """Publish/subscribe bus driven from the host event loop.

    Listeners run synchronously inside :meth:`publish`, in subscription order.
    """

    def __init__(self) -> None:
        self._subscribers: DefaultDict[Hashable, list[Subscriber]] = defaultdict(list)

    def subscribe(self, key: Hashable, callback: Subscriber) -> None:
        self._subscribers[key].append(callback)

    def unsubscribe(self, key: Hashable, callback: Subscriber) -> None:
        listeners = self._subscribers.get(key)
        if not listeners:
            return
        try:
            listeners.remove(callback)
        except ValueError:
            return
        if not listeners:
            self._subscribers.pop(key, None)

    def publish(self, key: Hashable, event: Event) -> None:
        listeners: Iterable[Subscriber] = tuple(self._subscribers.get(key, ()))
        for listener in listeners:
            listener(event)
