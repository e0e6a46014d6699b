from __future__ import annotations
import contextlib
import threading
from typing import Awaitable, Protocol, Tuple


class Subscriber(Protocol):
    def receive(self, value: str) -> Awaitable[None] | None: ...


class SubscriberRegistry:
    """
    Copy-on-write set of subscribers.
    Writers swap in a new tuple under the lock; readers take the current tuple
    as their snapshot and never see it change underneath them.
    """

    def __init__(self) -> None:
        self._subscribers: Tuple[Subscriber, ...] = ()
        self._lock = threading.Lock()

    def add(self, subscriber: Subscriber) -> None:
        with self._lock:
            self._subscribers = self._subscribers + (subscriber,)

    def remove(self, subscriber: Subscriber) -> bool:
        """Drop one matching entry; False when it was not registered."""
        with self._lock:
            subs = list(self._subscribers)
            with contextlib.suppress(ValueError):
                subs.remove(subscriber)
                self._subscribers = tuple(subs)
                return True
        return False

    def snapshot(self) -> Tuple[Subscriber, ...]:
        # tuple assignment is atomic, no lock needed to read it
        return self._subscribers

    def clear(self) -> None:
        with self._lock:
            self._subscribers = ()

    def __len__(self) -> int:
        return len(self._subscribers)

    def __contains__(self, subscriber: object) -> bool:
        return subscriber in self._subscribers
