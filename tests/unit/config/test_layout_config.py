"""Tests for layout configuration models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from daylane.core.config.models import (
    AppConfig,
    DuplicatePolicy,
    LaneThresholds,
    LayoutConfig,
    LoggingConfig,
    OverflowPolicy,
    VerticalConfig,
)


class TestLayoutConfig:
    """Tests for LayoutConfig defaults and validation."""

    def test_defaults(self) -> None:
        """Defaults match the standard day view."""
        config = LayoutConfig()
        assert config.base_left == 65
        assert config.reserved_left == 65
        assert config.gap == 5
        assert config.min_gap == 2
        assert config.min_available_width == 100
        assert config.min_content_width == 20
        assert config.min_display_width == 40
        assert (config.padding.basic, config.padding.compact, config.padding.micro) == (10, 8, 6)
        assert config.overflow_policy is OverflowPolicy.ALLOW
        assert config.duplicate_policy is DuplicatePolicy.REPLACE

    def test_min_gap_cannot_exceed_gap(self) -> None:
        """The gap floor may not exceed the gap."""
        with pytest.raises(ValidationError, match="min_gap"):
            LayoutConfig(gap=2, min_gap=3)

    def test_frozen(self) -> None:
        """Configs are immutable once built."""
        config = LayoutConfig()
        with pytest.raises(ValidationError):
            config.gap = 10  # type: ignore[misc]

    def test_extra_fields_forbidden(self) -> None:
        """Unknown keys are rejected."""
        with pytest.raises(ValidationError):
            LayoutConfig(lane_gap=5)  # type: ignore[call-arg]

    def test_policies_from_strings(self) -> None:
        """Policies parse from their names."""
        config = LayoutConfig.model_validate(
            {"overflow_policy": "CLIP", "duplicate_policy": "REJECT"}
        )
        assert config.overflow_policy is OverflowPolicy.CLIP
        assert config.duplicate_policy is DuplicatePolicy.REJECT

    def test_negative_width_rejected(self) -> None:
        """Pixel settings are non-negative."""
        with pytest.raises(ValidationError):
            LayoutConfig(base_left=-1)


class TestNestedConfig:
    """Tests for the nested config sections."""

    def test_lane_threshold_order(self) -> None:
        """The micro threshold must follow the compact one."""
        with pytest.raises(ValidationError, match="micro lane threshold"):
            LaneThresholds(compact=4, micro=2)

    def test_vertical_threshold_order(self) -> None:
        """Duration thresholds must be increasing."""
        with pytest.raises(ValidationError, match="compact_duration_minutes"):
            VerticalConfig(micro_duration_minutes=30, compact_duration_minutes=15)

    def test_logging_level_pattern(self) -> None:
        """Only standard level names are accepted."""
        with pytest.raises(ValidationError):
            LoggingConfig(level="LOUD")

    def test_app_config_defaults(self) -> None:
        """AppConfig wraps default sections."""
        config = AppConfig()
        assert config.layout == LayoutConfig()
        assert config.logging.level == "INFO"
        assert config.logging.structured is False
