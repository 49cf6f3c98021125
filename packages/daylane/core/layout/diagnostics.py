"""Layout property checks.

Verifies a LayoutResult against the guarantees the engine makes:
lane counts equal peak concurrency, time-overlapping events never share
horizontal pixels, and isolated events take the full width.
"""

from __future__ import annotations

from collections.abc import Sequence
from itertools import combinations

import numpy as np

from daylane.core.layout.models import (
    GroupLayout,
    LayoutDiagnostic,
    LayoutResult,
    TimedInterval,
)


def peak_concurrency(intervals: Sequence[tuple[int, int]]) -> int:
    """Maximum number of half-open intervals active at any instant.

    Sweeps boundary points in time order; at equal instants ends are
    processed before starts so back-to-back intervals do not count as
    concurrent.

    Args:
        intervals: ``(start, end)`` pairs.

    Returns:
        Peak concurrency (0 for no intervals).
    """
    if not intervals:
        return 0

    bounds = np.asarray(intervals, dtype=np.int64)
    times = np.concatenate([bounds[:, 0], bounds[:, 1]])
    deltas = np.concatenate(
        [np.ones(len(bounds), dtype=np.int64), -np.ones(len(bounds), dtype=np.int64)]
    )
    # lexsort: last key is primary, so sort by time then delta (-1 before +1)
    order = np.lexsort((deltas, times))
    running = np.cumsum(deltas[order])
    return int(running.max())


def group_peak_concurrency(group_layout: GroupLayout) -> int:
    return peak_concurrency([(m.start_ms, m.end_ms) for m in group_layout.group.members])


def find_horizontal_collisions(result: LayoutResult) -> list[tuple[str, str]]:
    """Pairs of time-overlapping events whose horizontal spans intersect.

    Only members of the same group can overlap in time, so pairs are
    drawn per group.
    """
    collisions: list[tuple[str, str]] = []
    for group_layout in result.groups:
        members: list[TimedInterval] = group_layout.group.members
        for a, b in combinations(members, 2):
            if not a.overlaps(b):
                continue
            ra = result.rects[a.event_id]
            rb = result.rects[b.event_id]
            if ra.width == 0 or rb.width == 0:
                continue
            if ra.left < rb.right and rb.left < ra.right:
                collisions.append((a.event_id, b.event_id))
    return collisions


def check_layout(result: LayoutResult) -> list[LayoutDiagnostic]:
    """Run every property check on a layout result.

    Returns:
        Error diagnostics for each violated property (empty when valid).
    """
    diagnostics: list[LayoutDiagnostic] = []

    for group_layout in result.groups:
        peak = group_peak_concurrency(group_layout)
        if group_layout.lane_count != peak:
            diagnostics.append(
                LayoutDiagnostic(
                    level="error",
                    message=(
                        f"group uses {group_layout.lane_count} lanes "
                        f"but peak concurrency is {peak}"
                    ),
                    event_ids=group_layout.group.event_ids,
                )
            )

        if group_layout.group.is_singleton:
            only = group_layout.group.members[0].event_id
            rect = result.rects[only]
            if rect.left != result.base_left or rect.width != result.available_width:
                diagnostics.append(
                    LayoutDiagnostic(
                        level="error",
                        message=(
                            f"isolated event at left={rect.left} width={rect.width}, "
                            f"expected left={result.base_left} width={result.available_width}"
                        ),
                        event_ids=[only],
                    )
                )

    for a, b in find_horizontal_collisions(result):
        diagnostics.append(
            LayoutDiagnostic(
                level="error",
                message=f"events {a} and {b} overlap in time and share horizontal space",
                event_ids=[a, b],
            )
        )

    return diagnostics


__all__ = [
    "check_layout",
    "find_horizontal_collisions",
    "group_peak_concurrency",
    "peak_concurrency",
]
