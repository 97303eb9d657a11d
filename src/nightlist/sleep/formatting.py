"""Display strings for sleep nights."""

from __future__ import annotations

from datetime import datetime

ONE_MINUTE_MILLIS = 60 * 1000
ONE_HOUR_MILLIS = 60 * ONE_MINUTE_MILLIS

QUALITY_LABELS: dict[int, str] = {
    0: "Very bad",
    1: "Poor",
    2: "So-so",
    3: "OK",
    4: "Pretty good",
    5: "Excellent",
}
"""Labels for the 0-5 sleep quality scale."""

UNRATED_LABEL = "--"


def quality_to_string(quality: int) -> str:
    """Return the label for *quality*, or ``"--"`` outside the 0-5 scale."""
    return QUALITY_LABELS.get(quality, UNRATED_LABEL)


def weekday_name(epoch_millis: int) -> str:
    """Full weekday name of *epoch_millis* in local time, e.g. ``"Monday"``."""
    return datetime.fromtimestamp(epoch_millis / 1000).strftime("%A")


def format_duration(start_time_milli: int, end_time_milli: int) -> str:
    """Describe how long a night lasted and which day it started.

    Durations under a minute are given in seconds, under an hour in
    minutes, otherwise in whole hours (truncated).

    Examples
    --------
    ``format_duration(start, start + 90 * 60 * 1000)`` gives
    ``"1 hours on Tuesday"`` for a night starting on a Tuesday.
    """
    duration = end_time_milli - start_time_milli
    weekday = weekday_name(start_time_milli)
    if duration < ONE_MINUTE_MILLIS:
        return f"{duration // 1000} seconds on {weekday}"
    if duration < ONE_HOUR_MILLIS:
        return f"{duration // ONE_MINUTE_MILLIS} minutes on {weekday}"
    return f"{duration // ONE_HOUR_MILLIS} hours on {weekday}"
