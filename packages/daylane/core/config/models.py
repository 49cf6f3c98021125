"""Configuration models for daylane.

Defines the layout engine configuration (spacing, padding tiers,
vertical sizing, policies) and the application-level config wrapper.
"""

from __future__ import annotations

from enum import Enum
from typing import Self

from pydantic import BaseModel, ConfigDict, Field, model_validator


class OverflowPolicy(str, Enum):
    """Policy for lane groups whose clamped lanes exceed the available width.

    Attributes:
        ALLOW: Keep the inflated lanes; rects are flagged as overflowing.
        CLIP: Clip rects at the right edge of the available width.
        ERROR: Raise on overflow (strict mode).
    """

    ALLOW = "ALLOW"
    CLIP = "CLIP"
    ERROR = "ERROR"


class DuplicatePolicy(str, Enum):
    """Policy for registering an id that is already active.

    Attributes:
        REPLACE: New record takes over the existing registration slot.
        REJECT: Raise a validation error.
    """

    REPLACE = "REPLACE"
    REJECT = "REJECT"


class PaddingConfig(BaseModel):
    """Per-side horizontal padding for each density tier (pixels)."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    basic: int = Field(default=10, ge=0, description="Padding when few lanes are needed")
    compact: int = Field(default=8, ge=0, description="Padding for compact lane groups")
    micro: int = Field(default=6, ge=0, description="Padding for very dense lane groups")


class LaneThresholds(BaseModel):
    """Lane counts above which a denser padding tier applies.

    Attributes:
        compact: Groups with more lanes than this use compact padding.
        micro: Groups with more lanes than this use micro padding.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    compact: int = Field(default=2, ge=1)
    micro: int = Field(default=4, ge=1)

    @model_validator(mode="after")
    def _check_order(self) -> Self:
        if self.micro < self.compact:
            raise ValueError(
                f"micro lane threshold ({self.micro}) must be >= compact threshold ({self.compact})"
            )
        return self


class VerticalConfig(BaseModel):
    """Vertical sizing on the minute-per-pixel day axis.

    Attributes:
        vertical_padding: Pixels deducted from normal-length events.
        min_height: Smallest height for micro events.
        micro_duration_minutes: Events at or under this length are micro.
        compact_duration_minutes: Events at or under this length are compact.
        day_minutes: Height of the full timeline in pixels.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    vertical_padding: int = Field(default=10, ge=0)
    min_height: int = Field(default=10, ge=0)
    micro_duration_minutes: int = Field(default=15, ge=0)
    compact_duration_minutes: int = Field(default=30, ge=0)
    day_minutes: int = Field(default=1440, gt=0)

    @model_validator(mode="after")
    def _check_order(self) -> Self:
        if self.compact_duration_minutes < self.micro_duration_minutes:
            raise ValueError("compact_duration_minutes must be >= micro_duration_minutes")
        return self


class LayoutConfig(BaseModel):
    """Configuration for the LayoutEngine.

    Attributes:
        base_left: Left edge of lane 0 (after time labels and margin).
        reserved_left: Pixels subtracted from the container width.
        gap: Preferred inter-lane gap.
        min_gap: Smallest gap when lanes are clamped to their minimum width.
        min_available_width: Floor for the available width.
        min_content_width: Smallest content width inside a lane.
        min_display_width: Narrower rects show the title only.
        padding: Padding per density tier.
        lane_thresholds: Lane counts selecting density tiers.
        vertical: Vertical sizing rules.
        overflow_policy: What to do when clamped lanes overflow.
        duplicate_policy: What to do when an active id is registered again.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    base_left: int = Field(default=65, ge=0, description="Left edge of lane 0 in pixels")
    reserved_left: int = Field(
        default=65,
        ge=0,
        description="Space reserved for time labels, subtracted from the container width",
    )
    gap: int = Field(default=5, ge=0, description="Preferred gap between lanes")
    min_gap: int = Field(default=2, ge=0, description="Minimum gap between clamped lanes")
    min_available_width: int = Field(default=100, ge=0)
    min_content_width: int = Field(default=20, ge=0)
    min_display_width: int = Field(
        default=40,
        ge=0,
        description="Rects narrower than this render the title without the time range",
    )
    padding: PaddingConfig = Field(default_factory=PaddingConfig)
    lane_thresholds: LaneThresholds = Field(default_factory=LaneThresholds)
    vertical: VerticalConfig = Field(default_factory=VerticalConfig)
    overflow_policy: OverflowPolicy = Field(default=OverflowPolicy.ALLOW)
    duplicate_policy: DuplicatePolicy = Field(default=DuplicatePolicy.REPLACE)

    @model_validator(mode="after")
    def _check_gaps(self) -> Self:
        if self.min_gap > self.gap:
            raise ValueError(f"min_gap ({self.min_gap}) must not exceed gap ({self.gap})")
        return self


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Logging level",
    )
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log format string (text mode only)",
    )
    structured: bool = Field(default=False, description="Emit JSON log lines")
    filename: str | None = Field(default=None, description="Log file path; stdout if unset")


class AppConfig(BaseModel):
    """Application configuration."""

    model_config = ConfigDict(extra="forbid")

    layout: LayoutConfig = Field(default_factory=LayoutConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
