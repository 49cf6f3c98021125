"""Lane assignment: greedy minimum-lane interval partitioning.

Within one overlap group, each event goes to the lowest-indexed lane
whose last event has ended by the time it starts. Processing events in
start order makes the lane count equal to the group's peak concurrency.
"""

from __future__ import annotations

from daylane.core.layout.models import LaneAssignment, OverlapGroup


def assign_lanes(group: OverlapGroup) -> LaneAssignment:
    """Assign every member of a start-sorted group to a lane.

    Singleton groups skip the scan: lane 0, one lane.

    Args:
        group: Overlap group with members sorted by start time.

    Returns:
        Lane index per event id and the number of lanes opened.
    """
    if group.is_singleton:
        only = group.members[0]
        return LaneAssignment(lanes={only.event_id: 0}, lane_count=1)

    lane_end_times: list[int] = []
    lanes: dict[str, int] = {}

    for interval in group.members:
        for index, lane_end in enumerate(lane_end_times):
            if lane_end <= interval.start_ms:
                lane_end_times[index] = interval.end_ms
                lanes[interval.event_id] = index
                break
        else:
            lanes[interval.event_id] = len(lane_end_times)
            lane_end_times.append(interval.end_ms)

    return LaneAssignment(lanes=lanes, lane_count=max(1, len(lane_end_times)))


__all__ = [
    "assign_lanes",
]
