"""Unit tests for layout property checks."""

from __future__ import annotations

from collections.abc import Callable

from daylane.core.layout.diagnostics import (
    check_layout,
    find_horizontal_collisions,
    peak_concurrency,
)
from daylane.core.layout.engine import LayoutEngine
from daylane.core.layout.models import (
    GroupLayout,
    LaneAssignment,
    LayoutRect,
    LayoutResult,
    OverlapGroup,
    TimedInterval,
)
from daylane.core.layout.render import InMemorySurface

MakeInterval = Callable[..., TimedInterval]


class TestPeakConcurrency:
    """Tests for peak_concurrency."""

    def test_empty(self) -> None:
        """No intervals means zero concurrency."""
        assert peak_concurrency([]) == 0

    def test_back_to_back(self) -> None:
        """Touching intervals never run at once."""
        assert peak_concurrency([(0, 10), (10, 20), (20, 30)]) == 1

    def test_nested(self) -> None:
        """Nested intervals stack up."""
        assert peak_concurrency([(0, 100), (10, 90), (20, 80), (85, 95)]) == 3

    def test_chain(self) -> None:
        """A chain peaks at two."""
        assert peak_concurrency([(0, 60), (30, 90), (75, 120)]) == 2


class TestCheckLayout:
    """Tests for check_layout."""

    def test_valid_engine_result(
        self, engine: LayoutEngine, scenario: dict[str, InMemorySurface]
    ) -> None:
        """Engine output passes every check."""
        assert check_layout(engine.calculate_layout()) == []

    def test_detects_lane_mismatch_and_collision(self, make_interval: MakeInterval) -> None:
        """Too few lanes and shared columns are both reported."""
        group = OverlapGroup(members=[make_interval("A", 0, 60), make_interval("B", 30, 90)])
        result = LayoutResult(
            container_width=265,
            available_width=200,
            base_left=65,
            groups=[
                GroupLayout(
                    group=group,
                    assignment=LaneAssignment(lanes={"A": 0, "B": 0}, lane_count=1),
                )
            ],
            rects={
                "A": LayoutRect(event_id="A", left=65, width=97, top=0, height=50),
                "B": LayoutRect(event_id="B", left=100, width=97, top=30, height=50),
            },
        )

        assert find_horizontal_collisions(result) == [("A", "B")]
        messages = [d.message for d in check_layout(result)]
        assert any("peak concurrency is 2" in m for m in messages)
        assert any("share horizontal space" in m for m in messages)

    def test_detects_narrow_singleton(self, make_interval: MakeInterval) -> None:
        """A singleton narrower than the available width is an error."""
        group = OverlapGroup(members=[make_interval("A", 0, 60)])
        result = LayoutResult(
            container_width=265,
            available_width=200,
            base_left=65,
            groups=[GroupLayout(group=group, assignment=LaneAssignment(lanes={"A": 0}))],
            rects={"A": LayoutRect(event_id="A", left=65, width=97, top=0, height=50)},
        )

        diagnostics = check_layout(result)
        assert len(diagnostics) == 1
        assert diagnostics[0].level == "error"
        assert diagnostics[0].event_ids == ["A"]

    def test_adjacent_rects_do_not_collide(self, make_interval: MakeInterval) -> None:
        """Exclusive right edges: touching spans are not a collision."""
        group = OverlapGroup(members=[make_interval("A", 0, 60), make_interval("B", 30, 90)])
        result = LayoutResult(
            available_width=200,
            base_left=65,
            groups=[
                GroupLayout(
                    group=group,
                    assignment=LaneAssignment(lanes={"A": 0, "B": 1}, lane_count=2),
                )
            ],
            rects={
                "A": LayoutRect(event_id="A", left=65, width=100, top=0, height=50),
                "B": LayoutRect(event_id="B", left=165, width=100, top=30, height=50),
            },
        )
        assert find_horizontal_collisions(result) == []
