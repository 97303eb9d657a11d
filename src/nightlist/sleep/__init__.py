"""Sleep tracker: records, display strings, storage and screen wiring."""

from __future__ import annotations

from .formatting import QUALITY_LABELS, format_duration, quality_to_string
from .screen import (
    CLEARED_MESSAGE,
    SleepNightAdapter,
    SleepTrackerScreen,
    bind_sleep_night,
    sleep_night_callback,
)
from .store import InMemorySleepNightStore, SleepNightStore
from .tracker import SleepTracker

__all__ = [
    "CLEARED_MESSAGE",
    "QUALITY_LABELS",
    "InMemorySleepNightStore",
    "SleepNightAdapter",
    "SleepNightStore",
    "SleepTracker",
    "SleepTrackerScreen",
    "bind_sleep_night",
    "format_duration",
    "quality_to_string",
    "sleep_night_callback",
]
