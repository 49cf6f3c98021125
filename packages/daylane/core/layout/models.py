"""Layout models for the event layout engine.

EventRecord is the registry's unit of ownership. Everything downstream
of the registry (intervals, groups, lane assignments, rects) is rebuilt
from scratch on every layout pass and never persisted between passes.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from daylane.core.layout.timeline import to_epoch_ms
from daylane.core.layout.vocabulary import DensityTier, EventKind, SizeClass


class EventRecord(BaseModel):
    """A registered event and the render target it positions.

    Attributes:
        id: Identifier, unique among active records.
        start_time: Start instant (datetime or epoch ms).
        end_time: End instant, strictly after ``start_time``.
        render_target: Opaque handle owned by the caller.
        title: Display title.
        kind: Event source, if known.
        calendar_id: Source calendar id, carried through untouched.
    """

    model_config = ConfigDict(extra="forbid")

    id: str = Field(min_length=1, description="Event identifier")
    start_time: datetime | int = Field(description="Start instant")
    end_time: datetime | int = Field(description="End instant")
    render_target: Any = Field(description="Opaque positionable surface")
    title: str = Field(default="", description="Display title")
    kind: EventKind | None = Field(default=None, description="Event source")
    calendar_id: str | None = Field(default=None)

    @field_validator("id")
    @classmethod
    def _check_id(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("id must not be blank")
        return v

    @field_validator("render_target")
    @classmethod
    def _check_target(cls, v: Any) -> Any:
        if v is None:
            raise ValueError("render_target is required")
        return v

    @model_validator(mode="after")
    def _check_chronology(self) -> Self:
        if to_epoch_ms(self.start_time) >= to_epoch_ms(self.end_time):
            raise ValueError("start_time must be before end_time")
        return self

    @property
    def is_stale(self) -> bool:
        """True once the render target has been released."""
        return self.render_target is None


class TimedInterval(BaseModel):
    """Resolved time span of one event for a single layout pass.

    Attributes:
        event_id: Source event id.
        start_ms: Start in epoch ms.
        end_ms: End in epoch ms.
        start_minute: Minutes from midnight of the start instant.
        order: Registration position, used as the sort tie-breaker.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    event_id: str
    start_ms: int
    end_ms: int
    start_minute: int = Field(ge=0)
    order: int = Field(default=0, ge=0)

    def overlaps(self, other: TimedInterval) -> bool:
        """Half-open overlap test; back-to-back intervals do not overlap."""
        return not (self.end_ms <= other.start_ms or self.start_ms >= other.end_ms)


class OverlapGroup(BaseModel):
    """Maximal set of intervals connected through pairwise overlaps.

    Members are sorted by start time.
    """

    model_config = ConfigDict(extra="forbid")

    members: list[TimedInterval] = Field(default_factory=list)

    @property
    def event_ids(self) -> list[str]:
        return [m.event_id for m in self.members]

    @property
    def start_ms(self) -> int:
        return self.members[0].start_ms

    @property
    def end_ms(self) -> int:
        return max(m.end_ms for m in self.members)

    @property
    def size(self) -> int:
        return len(self.members)

    @property
    def is_singleton(self) -> bool:
        return len(self.members) == 1


class LaneAssignment(BaseModel):
    """Lane index per event id, scoped to one OverlapGroup.

    Attributes:
        lanes: Event id to lane index.
        lane_count: Number of distinct lanes used.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    lanes: dict[str, int] = Field(default_factory=dict)
    lane_count: int = Field(default=1, ge=1)

    def lane_of(self, event_id: str) -> int:
        return self.lanes[event_id]


class LaneMetrics(BaseModel):
    """Resolved horizontal metrics for a multi-lane group.

    Attributes:
        lane_count: Number of lanes.
        lane_width: Width of each lane in pixels.
        gap: Gap between adjacent lanes in pixels.
        padding: Per-side padding for the density tier.
        density: Density tier.
        total_width: Width spanned by all lanes and gaps.
        overflow: True when ``total_width`` exceeds the available width.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    lane_count: int = Field(ge=1)
    lane_width: int = Field(ge=0)
    gap: int = Field(ge=0)
    padding: int = Field(ge=0)
    density: DensityTier
    total_width: int = Field(ge=0)
    overflow: bool = False


class LayoutRect(BaseModel):
    """Computed rectangle for one event.

    Attributes:
        event_id: Event the rect belongs to.
        left: Left edge in pixels.
        width: Width in pixels.
        top: Top edge in pixels (minutes from midnight).
        height: Height in pixels.
        lane: Lane index within the event's group.
        lane_count: Lanes in the event's group.
        density: Density tier of the event's group.
        size_class: Duration-based size class.
        title_only: Render the title without the time range.
        overflow: Rect lies in a group wider than the available width.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    event_id: str
    left: int
    width: int = Field(ge=0)
    top: int
    height: int = Field(ge=0)
    lane: int = Field(default=0, ge=0)
    lane_count: int = Field(default=1, ge=1)
    density: DensityTier = DensityTier.BASIC
    size_class: SizeClass = SizeClass.NORMAL
    title_only: bool = False
    overflow: bool = False

    @property
    def right(self) -> int:
        """Exclusive right edge."""
        return self.left + self.width


class GroupLayout(BaseModel):
    """Lane assignment and metrics computed for one group."""

    model_config = ConfigDict(extra="forbid")

    group: OverlapGroup
    assignment: LaneAssignment
    metrics: LaneMetrics | None = Field(
        default=None,
        description="None for singleton groups, which take the full width",
    )

    @property
    def lane_count(self) -> int:
        return self.assignment.lane_count


class LayoutDiagnostic(BaseModel):
    """Diagnostic message from a layout pass or a layout check.

    Attributes:
        level: Severity: info, warning, error.
        message: Human-readable message.
        event_ids: Events the diagnostic refers to.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    level: str = Field(pattern="^(info|warning|error)$")
    message: str
    event_ids: list[str] = Field(default_factory=list)


class LayoutResult(BaseModel):
    """Value produced by one layout pass.

    Attributes:
        container_width: Host width the pass was computed for.
        available_width: Width available to lanes.
        base_left: Left edge of lane 0.
        groups: Group layouts in start-time order.
        rects: Rect per event id, in start-time order.
        diagnostics: Warnings raised while computing the pass.
    """

    model_config = ConfigDict(extra="forbid")

    container_width: int = 0
    available_width: int = 0
    base_left: int = 0
    groups: list[GroupLayout] = Field(default_factory=list)
    rects: dict[str, LayoutRect] = Field(default_factory=dict)
    diagnostics: list[LayoutDiagnostic] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.rects

    @property
    def max_lane_count(self) -> int:
        return max((g.lane_count for g in self.groups), default=0)

    def rect_for(self, event_id: str) -> LayoutRect:
        return self.rects[event_id]


__all__ = [
    "EventRecord",
    "GroupLayout",
    "LaneAssignment",
    "LaneMetrics",
    "LayoutDiagnostic",
    "LayoutRect",
    "LayoutResult",
    "OverlapGroup",
    "TimedInterval",
]
