"""
Minimal observable store.

State is an immutable dataclass; every change replaces it and notifies
subscribers synchronously, in subscription order.
"""

from dataclasses import replace
from typing import Callable, Generic, List, TypeVar

T = TypeVar("T")

Subscriber = Callable[[T], None]


class Store(Generic[T]):

    def __init__(self, initial: T):
        self._state = initial
        self._subscribers: List[Subscriber] = []

    @property
    def state(self) -> T:
        return self._state

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register ``callback``; returns a function that unsubscribes it."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _set(self, state: T) -> None:
        self._state = state
        for callback in list(self._subscribers):
            callback(state)

    def _update(self, **changes) -> None:
        self._set(replace(self._state, **changes))
