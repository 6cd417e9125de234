"""Human readable rendering of elapsed time."""

from __future__ import annotations

from datetime import timedelta

MILLISECONDS_PER_SECOND = 1_000
SECONDS_PER_MINUTE = 60
MINUTES_PER_HOUR = 60
HOURS_PER_DAY = 24
SECONDS_PER_HOUR = SECONDS_PER_MINUTE * MINUTES_PER_HOUR
SECONDS_PER_DAY = SECONDS_PER_HOUR * HOURS_PER_DAY


def format_duration(duration: timedelta) -> str:
    """Render ``duration`` using the largest sensible units.

    Below one second the result is in milliseconds; past one day seconds are
    dropped. Every unit is truncated, never rounded.
    """
    milliseconds = duration // timedelta(milliseconds=1)
    seconds = milliseconds // MILLISECONDS_PER_SECOND
    minutes = seconds // SECONDS_PER_MINUTE
    hours = minutes // MINUTES_PER_HOUR
    days = seconds // SECONDS_PER_DAY

    if milliseconds < MILLISECONDS_PER_SECOND:
        return f"{milliseconds}ms"
    if seconds < SECONDS_PER_MINUTE:
        return f"{seconds}s"
    if seconds < SECONDS_PER_HOUR:
        return f"{minutes}m {seconds % SECONDS_PER_MINUTE}s"
    if seconds < SECONDS_PER_DAY:
        return f"{hours}h {minutes % MINUTES_PER_HOUR}m {seconds % SECONDS_PER_MINUTE}s"
    return f"{days}d {hours % HOURS_PER_DAY}h {minutes % MINUTES_PER_HOUR}m"
