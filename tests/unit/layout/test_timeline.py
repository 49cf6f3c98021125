"""Unit tests for day-axis time helpers."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta, timezone

import pytest

from daylane.core.config.models import VerticalConfig
from daylane.core.layout.timeline import (
    DAY_MS,
    MINUTE_MS,
    minutes_from_midnight,
    size_class_for,
    to_epoch_ms,
    vertical_extent,
)
from daylane.core.layout.vocabulary import SizeClass


class TestToEpochMs:
    """Tests for instant normalization."""

    def test_naive_datetime_is_utc(self) -> None:
        """Naive datetimes are read as UTC."""
        assert to_epoch_ms(datetime(1970, 1, 1, 0, 0, 1)) == 1000

    def test_aware_datetime(self) -> None:
        """Aware datetimes are converted using their offset."""
        plus_one = timezone(timedelta(hours=1))
        assert to_epoch_ms(datetime(1970, 1, 1, 1, 0, tzinfo=plus_one)) == 0

    def test_millisecond_precision(self) -> None:
        """Sub-second parts survive without float rounding."""
        instant = datetime(2026, 10, 18, 10, 0, 0, 123000, tzinfo=UTC)
        assert to_epoch_ms(instant) % 1000 == 123

    def test_int_passthrough(self) -> None:
        """Integers are already epoch milliseconds."""
        assert to_epoch_ms(1_760_000_000_000) == 1_760_000_000_000

    @pytest.mark.parametrize("value", [True, "10:00", 1.5, None])
    def test_rejects_other_types(self, value: object) -> None:
        """Anything but a datetime or int is refused."""
        with pytest.raises(TypeError, match="Unsupported instant type"):
            to_epoch_ms(value)  # type: ignore[arg-type]


class TestMinutesFromMidnight:
    """Tests for the top-offset computation."""

    def test_datetime_wall_clock(self) -> None:
        """Datetimes use their own hour and minute."""
        assert minutes_from_midnight(datetime(2026, 10, 18, 9, 30)) == 570

    def test_ignores_seconds(self) -> None:
        """Seconds do not move an event down the axis."""
        assert minutes_from_midnight(datetime(2026, 10, 18, 9, 30, 59)) == 570

    def test_epoch_ms_uses_utc_day(self) -> None:
        """Epoch milliseconds are reduced to the UTC day."""
        assert minutes_from_midnight(3 * DAY_MS + 90 * MINUTE_MS) == 90


class TestVerticalExtent:
    """Tests for duration-based height rules."""

    @pytest.mark.parametrize(
        ("duration", "expected"),
        [
            (5, SizeClass.MICRO),
            (15, SizeClass.MICRO),
            (16, SizeClass.COMPACT),
            (30, SizeClass.COMPACT),
            (31, SizeClass.NORMAL),
        ],
    )
    def test_size_class_thresholds(self, duration: int, expected: SizeClass) -> None:
        """Thresholds are inclusive at 15 and 30 minutes."""
        assert size_class_for(duration, VerticalConfig()) is expected

    @pytest.mark.parametrize(
        ("duration", "height"),
        [
            (5, 10),  # held at min height
            (15, 15),
            (20, 20),
            (30, 30),
            (45, 35),
            (60, 50),
        ],
    )
    def test_height(self, duration: int, height: int) -> None:
        """Height follows the size class of the duration."""
        top, h, _ = vertical_extent(600, 0, duration * MINUTE_MS, VerticalConfig())
        assert top == 600
        assert h == height

    def test_custom_vertical_config(self) -> None:
        """Padding and thresholds come from config."""
        vertical = VerticalConfig(vertical_padding=4, compact_duration_minutes=20)
        _, height, size_class = vertical_extent(0, 0, 25 * MINUTE_MS, vertical)
        assert size_class is SizeClass.NORMAL
        assert height == 21

    def test_past_midnight_ends_at_day_bottom(self) -> None:
        """An event crossing midnight stops at the end of the day axis."""
        _, height, size_class = vertical_extent(23 * 60, 0, 120 * MINUTE_MS, VerticalConfig())
        assert size_class is SizeClass.NORMAL
        assert height == 60

    def test_day_minutes_from_config(self) -> None:
        """A shorter day axis caps heights earlier."""
        vertical = VerticalConfig(day_minutes=720)
        _, height, _ = vertical_extent(700, 0, 60 * MINUTE_MS, vertical)
        assert height == 20

    def test_micro_event_at_day_end(self) -> None:
        """The minimum height never pushes an event past the day."""
        _, height, _ = vertical_extent(1435, 0, 5 * MINUTE_MS, VerticalConfig())
        assert height == 5
