"""Sleep night storage interface and an in-memory implementation.

Durable storage belongs to the host application; it only has to satisfy
:class:`SleepNightStore`.  :class:`InMemorySleepNightStore` backs tests
and headless use.
"""

from __future__ import annotations

import dataclasses
import threading
from typing import Protocol, runtime_checkable

from nightlist.errors import NightNotFoundError
from nightlist.models import SleepNight


@runtime_checkable
class SleepNightStore(Protocol):
    """Data access for recorded nights."""

    def insert(self, night: SleepNight) -> SleepNight:
        """Store *night* and return it with its assigned ``night_id``."""
        ...

    def update(self, night: SleepNight) -> None: ...

    def get(self, night_id: int) -> SleepNight | None: ...

    def clear(self) -> None: ...

    def get_tonight(self) -> SleepNight | None:
        """Return the most recently inserted night, if any."""
        ...

    def get_all_nights(self) -> list[SleepNight]:
        """Return every night, newest first."""
        ...


class InMemorySleepNightStore:
    """Thread-safe dict-backed store with auto-incrementing ids."""

    __slots__ = ("_lock", "_next_id", "_nights")

    def __init__(self) -> None:
        self._nights: dict[int, SleepNight] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    def insert(self, night: SleepNight) -> SleepNight:
        with self._lock:
            stored = dataclasses.replace(night, night_id=self._next_id)
            self._nights[stored.night_id] = stored
            self._next_id += 1
            return stored

    def update(self, night: SleepNight) -> None:
        with self._lock:
            if night.night_id not in self._nights:
                raise NightNotFoundError(
                    f"No sleep night with id {night.night_id}",
                    context={"night_id": night.night_id},
                )
            self._nights[night.night_id] = night

    def get(self, night_id: int) -> SleepNight | None:
        with self._lock:
            return self._nights.get(night_id)

    def clear(self) -> None:
        with self._lock:
            self._nights.clear()

    def get_tonight(self) -> SleepNight | None:
        with self._lock:
            if not self._nights:
                return None
            return self._nights[max(self._nights)]

    def get_all_nights(self) -> list[SleepNight]:
        with self._lock:
            return [self._nights[k] for k in sorted(self._nights, reverse=True)]
