from __future__ import annotations

import logging
import weakref
from threading import RLock
from typing import Callable, Generic, TypeVar

T = TypeVar("T")

logger = logging.getLogger(__name__)


class _WeakCallback:
    """Calls a bound method through a weak reference; raises ReferenceError once its owner is gone."""

    def __init__(self, method: Callable) -> None:
        self._ref = weakref.WeakMethod(method)

    def __call__(self, payload) -> None:
        method = self._ref()
        if method is None:
            raise ReferenceError("subscriber owner was garbage collected")
        method(payload)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, _WeakCallback):
            return self._ref == other._ref
        return self._ref() is not None and self._ref() == other

    def __hash__(self) -> int:
        return hash(self._ref)


class Signal(Generic[T]):
    """
    Observer primitive behind the domain event hub.

    Subscribers run in connection order on the emitting thread. Bound methods
    connected with ``weak=True`` do not keep their owner alive (report views,
    caches); once the owner is collected the subscriber is dropped on the next
    emit. Any other exception raised by a subscriber propagates to the emitter.
    """

    def __init__(self) -> None:
        self._subscribers: list[Callable[[T], None]] = []
        self._lock: RLock = RLock()

    def connect(self, callback: Callable[[T], None], *, weak: bool = False) -> None:
        entry: Callable[[T], None] = _WeakCallback(callback) if weak else callback
        with self._lock:
            if entry not in self._subscribers:
                self._subscribers.append(entry)

    def disconnect(self, callback: Callable[[T], None]) -> None:
        with self._lock:
            for entry in list(self._subscribers):
                if entry == callback:
                    self._subscribers.remove(entry)
                    return

    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subscribers)

    def emit(self, payload: T) -> None:
        with self._lock:
            subscribers = list(self._subscribers)
        dead: list[Callable[[T], None]] = []
        for callback in subscribers:
            try:
                callback(payload)
            except ReferenceError:
                dead.append(callback)
        if dead:
            logger.debug("Pruning %d dead subscriber(s)", len(dead))
            with self._lock:
                self._subscribers = [s for s in self._subscribers if not any(s is d for d in dead)]
