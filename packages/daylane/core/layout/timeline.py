"""Time helpers for the minute-per-pixel day axis.

Instants are either ``datetime`` objects or integer epoch milliseconds.
Naive datetimes are read as UTC wall-clock values; no time-zone
conversion is performed anywhere.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

from daylane.core.config.models import VerticalConfig
from daylane.core.layout.vocabulary import SizeClass

MINUTE_MS = 60_000
HOUR_MS = 60 * MINUTE_MS
DAY_MS = 24 * HOUR_MS

Instant = datetime | int

_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)
_ONE_MS = timedelta(milliseconds=1)


def to_epoch_ms(instant: Instant) -> int:
    """Convert an instant to integer epoch milliseconds.

    Args:
        instant: ``datetime`` (naive values are treated as UTC) or epoch ms.

    Returns:
        Milliseconds since the Unix epoch.

    Raises:
        TypeError: If the value is neither a datetime nor an int.
    """
    if isinstance(instant, datetime):
        if instant.tzinfo is None:
            instant = instant.replace(tzinfo=UTC)
        return (instant - _EPOCH) // _ONE_MS
    if isinstance(instant, int) and not isinstance(instant, bool):
        return instant
    raise TypeError(f"Unsupported instant type: {type(instant).__name__}")


def minutes_from_midnight(instant: Instant) -> int:
    """Whole minutes between local midnight and the instant.

    Datetimes use their own wall clock; epoch milliseconds use the UTC day.
    """
    if isinstance(instant, datetime):
        return instant.hour * 60 + instant.minute
    return (to_epoch_ms(instant) % DAY_MS) // MINUTE_MS


def duration_minutes(start_ms: int, end_ms: int) -> float:
    """Duration between two epoch-ms values in (fractional) minutes."""
    return (end_ms - start_ms) / MINUTE_MS


def size_class_for(duration: float, vertical: VerticalConfig) -> SizeClass:
    """Classify an event by its duration in minutes."""
    if duration <= vertical.micro_duration_minutes:
        return SizeClass.MICRO
    if duration <= vertical.compact_duration_minutes:
        return SizeClass.COMPACT
    return SizeClass.NORMAL


def vertical_extent(
    top_minute: int,
    start_ms: int,
    end_ms: int,
    vertical: VerticalConfig,
) -> tuple[int, int, SizeClass]:
    """Compute ``(top, height, size_class)`` for an event.

    Short events keep their full duration so they stay visible; micro
    events are additionally held at ``min_height``. Events running past
    midnight end at the bottom of the day axis.

    Args:
        top_minute: Minutes from midnight of the start instant.
        start_ms: Start in epoch ms.
        end_ms: End in epoch ms.
        vertical: Vertical sizing rules.

    Returns:
        Tuple of top pixel, height in pixels, and size class.
    """
    duration = duration_minutes(start_ms, end_ms)
    size_class = size_class_for(duration, vertical)

    if size_class is SizeClass.MICRO:
        height = max(duration, vertical.min_height)
    elif size_class is SizeClass.COMPACT:
        height = duration
    else:
        height = duration - vertical.vertical_padding

    height = min(height, max(0, vertical.day_minutes - top_minute))
    return top_minute, int(height), size_class


__all__ = [
    "DAY_MS",
    "HOUR_MS",
    "Instant",
    "MINUTE_MS",
    "duration_minutes",
    "minutes_from_midnight",
    "size_class_for",
    "to_epoch_ms",
    "vertical_extent",
]
