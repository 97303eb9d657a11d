"""Sleep tracker state: the view-model behind the tracker screen.

:class:`SleepTracker` owns the observable state a tracker screen renders
(the list of nights, which buttons are enabled) and the two one-shot
events it reacts to (show a "cleared" message, navigate to the quality
screen for a night that just ended).
"""

from __future__ import annotations

import dataclasses
from collections.abc import Callable

from nightlist.errors import InvalidQualityError, NightNotFoundError
from nightlist.models import SleepNight, current_time_millis
from nightlist.observability import get_logger
from nightlist.presentation import EventSource, Observable

from .formatting import QUALITY_LABELS
from .store import SleepNightStore

log = get_logger("nightlist.tracker")


class SleepTracker:
    """View-model for recording nights and rating them.

    Parameters
    ----------
    store:
        Where nights are kept.
    clock:
        Returns the current time in epoch milliseconds.  Defaults to the
        wall clock.
    """

    def __init__(
        self,
        store: SleepNightStore,
        clock: Callable[[], int] | None = None,
    ) -> None:
        self._store = store
        self._clock = clock or current_time_millis

        self.nights: Observable[tuple[SleepNight, ...]] = Observable(())
        self.tonight: Observable[SleepNight] = Observable()
        self.show_snackbar_event: EventSource[bool] = EventSource()
        self.navigate_to_sleep_quality: EventSource[SleepNight] = EventSource()

        self._refresh()

    # ── Derived button state ────────────────────────────────────────────

    @property
    def start_button_visible(self) -> bool:
        return self.tonight.value is None

    @property
    def stop_button_visible(self) -> bool:
        return self.tonight.value is not None

    @property
    def clear_button_visible(self) -> bool:
        return bool(self.nights.value)

    # ── Actions ─────────────────────────────────────────────────────────

    def on_start_tracking(self) -> SleepNight:
        """Start a new night at the current time."""
        night = self._store.insert(SleepNight(start_time_milli=self._clock()))
        log.info(
            "tracking started",
            extra={"extra_fields": {"op": "start", "night_id": night.night_id}},
        )
        self._refresh()
        return night

    def on_stop_tracking(self) -> SleepNight | None:
        """Finish tonight's night and ask to navigate to its rating.

        Does nothing when no night is being tracked.
        """
        current = self.tonight.value
        if current is None:
            return None
        finished = dataclasses.replace(current, end_time_milli=self._clock())
        self._store.update(finished)
        log.info(
            "tracking stopped",
            extra={"extra_fields": {"op": "stop", "night_id": finished.night_id}},
        )
        self._refresh()
        self.navigate_to_sleep_quality.emit(finished)
        return finished

    def on_clear(self) -> None:
        """Delete every night and ask to show the "cleared" message."""
        self._store.clear()
        log.info("nights cleared", extra={"extra_fields": {"op": "clear"}})
        self._refresh()
        self.show_snackbar_event.emit(True)

    def on_set_sleep_quality(self, night_id: int, quality: int) -> SleepNight:
        """Rate the night *night_id* on the 0-5 scale."""
        if quality not in QUALITY_LABELS:
            raise InvalidQualityError(
                f"Sleep quality must be between 0 and 5, got {quality}",
                context={"night_id": night_id, "quality": quality},
            )
        night = self._store.get(night_id)
        if night is None:
            raise NightNotFoundError(
                f"No sleep night with id {night_id}",
                context={"night_id": night_id},
            )
        rated = dataclasses.replace(night, sleep_quality=quality)
        self._store.update(rated)
        self._refresh()
        return rated

    # ── Event acknowledgement ───────────────────────────────────────────

    def done_navigating(self) -> None:
        self.navigate_to_sleep_quality.acknowledge()

    def done_showing_snackbar(self) -> None:
        self.show_snackbar_event.acknowledge()

    def _refresh(self) -> None:
        tonight = self._store.get_tonight()
        # A finished night is no longer "tonight".
        if tonight is not None and tonight.is_finished:
            tonight = None
        self.tonight.set_value(tonight)
        self.nights.set_value(tuple(self._store.get_all_nights()))
