"""Geometry stage: turns lane assignments into pixel rectangles.

Pure functions only. Nothing here touches a render target; the render
adapter applies the resulting rects.
"""

from __future__ import annotations

import logging

from daylane.core.config.models import LayoutConfig, OverflowPolicy
from daylane.core.layout.errors import LayoutComputationError
from daylane.core.layout.models import (
    LaneAssignment,
    LaneMetrics,
    LayoutRect,
    OverlapGroup,
    TimedInterval,
)
from daylane.core.layout.timeline import vertical_extent
from daylane.core.layout.vocabulary import DensityTier
from daylane.core.utils.math import clamp, floor_div

logger = logging.getLogger(__name__)


def compute_available_width(container_width: int, config: LayoutConfig) -> int:
    """Width left for lanes once the label column is reserved."""
    return max(config.min_available_width, int(container_width) - config.reserved_left)


def density_for(lane_count: int, config: LayoutConfig) -> DensityTier:
    """Select the density tier for a group with ``lane_count`` lanes."""
    thresholds = config.lane_thresholds
    if lane_count > thresholds.micro:
        return DensityTier.MICRO
    if lane_count > thresholds.compact:
        return DensityTier.COMPACT
    return DensityTier.BASIC


def padding_for(density: DensityTier, config: LayoutConfig) -> int:
    """Per-side padding for a density tier."""
    if density is DensityTier.MICRO:
        return config.padding.micro
    if density is DensityTier.COMPACT:
        return config.padding.compact
    return config.padding.basic


def resolve_lane_metrics(
    lane_count: int,
    available_width: int,
    config: LayoutConfig,
) -> LaneMetrics:
    """Compute lane width and gap for a multi-lane group.

    Lanes share the available width evenly after gaps. When that leaves
    a lane narrower than its content minimum plus padding, the lane is
    inflated to the minimum and the gap shrinks (never below
    ``min_gap``). The total may then exceed ``available_width``; the
    returned metrics report it through ``overflow``.

    Args:
        lane_count: Lanes required by the group (> 1).
        available_width: Width available to lanes.
        config: Layout configuration.

    Returns:
        Resolved lane metrics.
    """
    density = density_for(lane_count, config)
    padding = padding_for(density, config)
    gap = config.gap
    gaps = lane_count - 1

    usable = max(0, available_width - gap * gaps)
    lane_width = floor_div(usable, lane_count)

    min_lane_width = config.min_content_width + 2 * padding
    if lane_width < min_lane_width:
        lane_width = min_lane_width
        fitted_gap = floor_div(available_width - lane_count * lane_width, gaps) if gaps else gap
        gap = clamp(fitted_gap, config.min_gap, config.gap)

    total_width = lane_count * lane_width + gap * gaps
    return LaneMetrics(
        lane_count=lane_count,
        lane_width=lane_width,
        gap=gap,
        padding=padding,
        density=density,
        total_width=total_width,
        overflow=total_width > available_width,
    )


def layout_singleton(
    interval: TimedInterval,
    available_width: int,
    config: LayoutConfig,
) -> LayoutRect:
    """Full-width rect for an event that overlaps nothing."""
    top, height, size_class = vertical_extent(
        interval.start_minute, interval.start_ms, interval.end_ms, config.vertical
    )
    return LayoutRect(
        event_id=interval.event_id,
        left=config.base_left,
        width=available_width,
        top=top,
        height=height,
        size_class=size_class,
        title_only=available_width < config.min_display_width,
    )


def layout_group(
    group: OverlapGroup,
    assignment: LaneAssignment,
    available_width: int,
    config: LayoutConfig,
) -> tuple[list[LayoutRect], LaneMetrics | None]:
    """Compute rects for every member of one group.

    Args:
        group: Overlap group.
        assignment: Lane assignment for the group.
        available_width: Width available to lanes.
        config: Layout configuration.

    Returns:
        Rects in member order, and the lane metrics (None for singletons).

    Raises:
        LayoutComputationError: If the group overflows under
            ``OverflowPolicy.ERROR``.
    """
    if group.is_singleton:
        return [layout_singleton(group.members[0], available_width, config)], None

    metrics = resolve_lane_metrics(assignment.lane_count, available_width, config)

    if metrics.overflow:
        if config.overflow_policy is OverflowPolicy.ERROR:
            raise LayoutComputationError(
                reason=(
                    f"{metrics.lane_count} lanes need {metrics.total_width}px "
                    f"but only {available_width}px are available"
                ),
                event_ids=group.event_ids,
            )
        logger.warning(
            "Lane group of %d lanes overflows available width (%dpx > %dpx), policy=%s",
            metrics.lane_count,
            metrics.total_width,
            available_width,
            config.overflow_policy.value,
        )

    right_edge = config.base_left + available_width
    rects: list[LayoutRect] = []
    for interval in group.members:
        lane = assignment.lane_of(interval.event_id)
        left = config.base_left + lane * (metrics.lane_width + metrics.gap)
        width = metrics.lane_width
        if metrics.overflow and config.overflow_policy is OverflowPolicy.CLIP:
            width = clamp(right_edge - left, 0, width)

        top, height, size_class = vertical_extent(
            interval.start_minute, interval.start_ms, interval.end_ms, config.vertical
        )
        rects.append(
            LayoutRect(
                event_id=interval.event_id,
                left=left,
                width=width,
                top=top,
                height=height,
                lane=lane,
                lane_count=metrics.lane_count,
                density=metrics.density,
                size_class=size_class,
                title_only=width < config.min_display_width,
                overflow=metrics.overflow,
            )
        )

    return rects, metrics


__all__ = [
    "compute_available_width",
    "density_for",
    "layout_group",
    "layout_singleton",
    "padding_for",
    "resolve_lane_metrics",
]
