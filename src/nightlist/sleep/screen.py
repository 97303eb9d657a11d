"""Wiring between a :class:`SleepTracker` and a host display.

:class:`SleepTrackerScreen` plays the part of the tracker screen: it
subscribes a :class:`SleepNightAdapter` to the tracker's night list and
forwards the one-shot events to host callbacks, acknowledging each so it
fires only once.  :meth:`SleepTrackerScreen.close` releases every
subscription when the display is torn down.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from nightlist.config import NightlistConfig
from nightlist.models import SleepNight
from nightlist.presentation import ItemCallback, ListAdapter, Subscription

from .formatting import format_duration, quality_to_string
from .tracker import SleepTracker

CLEARED_MESSAGE = "All your data is gone forever."

sleep_night_callback: ItemCallback[SleepNight] = ItemCallback(
    identity=lambda night: night.night_id,
)
"""Nights are the same entity when their ids match; contents are compared
with dataclass equality."""


def bind_sleep_night(view: Any, night: SleepNight) -> None:
    """Populate a list row *view* with the display strings of *night*."""
    view.sleep = night
    view.quality_string = quality_to_string(night.sleep_quality)
    view.sleep_length = format_duration(night.start_time_milli, night.end_time_milli)


class SleepNightAdapter(ListAdapter[SleepNight]):
    """List adapter preconfigured for :class:`SleepNight` rows."""

    def __init__(
        self,
        target: Any | None = None,
        config: NightlistConfig | None = None,
    ) -> None:
        super().__init__(
            sleep_night_callback,
            target=target,
            config=config,
            binder=bind_sleep_night,
        )


class SleepTrackerScreen:
    """Connects tracker state to a list surface and host side effects.

    Parameters
    ----------
    tracker:
        The view-model to observe.
    adapter:
        Receives every new night list.
    show_message:
        Called with :data:`CLEARED_MESSAGE` after the nights are cleared.
    navigate_to_quality:
        Called with the id of a night that just finished.
    """

    def __init__(
        self,
        tracker: SleepTracker,
        adapter: ListAdapter[SleepNight],
        show_message: Callable[[str], None],
        navigate_to_quality: Callable[[int], None],
    ) -> None:
        self._tracker = tracker
        self._adapter = adapter
        self._show_message = show_message
        self._navigate_to_quality = navigate_to_quality
        self._subscriptions: list[Subscription] = [
            tracker.nights.observe(adapter.submit_list),
            tracker.show_snackbar_event.observe(self._on_snackbar_event),
            tracker.navigate_to_sleep_quality.observe(self._on_navigate_event),
        ]

    @property
    def attached(self) -> bool:
        return any(sub.active for sub in self._subscriptions)

    def _on_snackbar_event(self, show: bool) -> None:
        if show:
            self._show_message(CLEARED_MESSAGE)
            self._tracker.done_showing_snackbar()

    def _on_navigate_event(self, night: SleepNight) -> None:
        self._navigate_to_quality(night.night_id)
        self._tracker.done_navigating()

    def close(self) -> None:
        """Release every subscription; safe to call more than once."""
        for sub in self._subscriptions:
            sub.release()

    def __enter__(self) -> SleepTrackerScreen:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
