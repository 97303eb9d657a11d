"""Observable state holders and one-shot events.

:class:`Observable` is a small thread-safe value holder in the spirit of a
lifecycle-scoped live value: observers are told about every new value and,
on subscription, about the current one.  Each :meth:`Observable.observe`
call returns a :class:`Subscription` that must be released when the
observing surface is torn down.

:class:`EventSource` layers one-shot semantics on top: an emitted value is
delivered once, and :meth:`EventSource.acknowledge` clears it so that a
re-subscribing surface (for example after a configuration change) does not
trigger the action again.
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from typing import Generic, TypeVar

T = TypeVar("T")

Observer = Callable[[T], None]


class Subscription:
    """Handle returned by :meth:`Observable.observe`.

    Releasing is idempotent.  Once :meth:`release` returns the observer is
    never called again, even when the release happens during a
    notification.  Instances are context managers, so an observer can be
    scoped to a ``with`` block.
    """

    __slots__ = ("_observer", "_source", "_released")

    def __init__(self, source: Observable, observer: Observer) -> None:
        self._source = source
        self._observer = observer
        self._released = False

    @property
    def active(self) -> bool:
        return not self._released

    def release(self) -> None:
        """Detach the observer from its source."""
        # Waits for a notification running on another thread to finish.
        with self._source._lock:
            if self._released:
                return
            self._released = True
            self._source._remove(self)

    def _deliver(self, value: object) -> None:
        if not self._released:
            self._observer(value)

    def __enter__(self) -> Subscription:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.release()


class Observable(Generic[T]):
    """Thread-safe value holder that notifies observers on change.

    Observers run with the holder's lock held, so notifications from
    different threads never interleave and an observer may release any
    subscription, its own included, from inside a callback.

    Parameters
    ----------
    value:
        Initial value.  ``None`` means "no value yet" and is never
        delivered to observers.
    """

    def __init__(self, value: T | None = None) -> None:
        self._value: T | None = value
        self._subscriptions: list[Subscription] = []
        self._lock = threading.RLock()

    @property
    def value(self) -> T | None:
        return self._value

    @property
    def has_observers(self) -> bool:
        with self._lock:
            return bool(self._subscriptions)

    def set_value(self, value: T | None) -> None:
        """Store *value* and notify every observer, in subscription order."""
        with self._lock:
            self._value = value
            if value is None:
                return
            for sub in list(self._subscriptions):
                sub._deliver(value)

    def observe(self, observer: Observer) -> Subscription:
        """Attach *observer* and deliver the current value, if any."""
        with self._lock:
            sub = Subscription(self, observer)
            self._subscriptions.append(sub)
            if self._value is not None:
                sub._deliver(self._value)
        return sub

    def _remove(self, sub: Subscription) -> None:
        with self._lock:
            if sub in self._subscriptions:
                self._subscriptions.remove(sub)


class EventSource(Observable[T]):
    """One-shot event stream.

    :meth:`emit` delivers a value to current observers; a late observer
    still sees it until somebody calls :meth:`acknowledge`.  Acknowledging
    clears the pending value so the action is never re-triggered.
    """

    @property
    def pending(self) -> bool:
        return self._value is not None

    def emit(self, value: T) -> None:
        if value is None:
            raise ValueError("EventSource cannot emit None; use acknowledge()")
        self.set_value(value)

    def acknowledge(self) -> None:
        """Mark the current event as handled."""
        with self._lock:
            self._value = None
