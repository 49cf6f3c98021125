"""Overlap grouping: partitions intervals into overlap-connected clusters.

Two intervals that never overlap directly still share a group when a
third interval overlaps both. Lane requirements depend on the whole
connected cluster, so grouping must be transitive.
"""

from __future__ import annotations

from collections.abc import Iterable

from daylane.core.layout.models import OverlapGroup, TimedInterval


def sort_intervals(intervals: Iterable[TimedInterval]) -> list[TimedInterval]:
    """Stable sort by start time, ties broken by registration order."""
    return sorted(intervals, key=lambda i: (i.start_ms, i.order))


def group_overlapping(intervals: Iterable[TimedInterval]) -> list[OverlapGroup]:
    """Split intervals into maximal overlap-connected groups.

    On start-sorted input, an interval overlaps some member of the current
    group exactly when it starts before the group's running maximum end,
    so a single comparison replaces a scan over every member.

    Args:
        intervals: Intervals in any order.

    Returns:
        Groups in start-time order, each internally sorted by start.
    """
    groups: list[OverlapGroup] = []
    current: list[TimedInterval] = []
    current_end = 0

    for interval in sort_intervals(intervals):
        if current and interval.start_ms < current_end:
            current.append(interval)
            current_end = max(current_end, interval.end_ms)
            continue

        if current:
            groups.append(OverlapGroup(members=current))
        current = [interval]
        current_end = interval.end_ms

    if current:
        groups.append(OverlapGroup(members=current))

    return groups


__all__ = [
    "group_overlapping",
    "sort_intervals",
]
