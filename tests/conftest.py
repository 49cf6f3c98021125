"""Shared pytest fixtures for daylane tests."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from datetime import datetime

import pytest

from daylane.core.config.models import LayoutConfig
from daylane.core.layout.engine import LayoutEngine
from daylane.core.layout.models import TimedInterval
from daylane.core.layout.render import InMemoryContainer, InMemorySurface
from daylane.core.layout.timeline import MINUTE_MS, to_epoch_ms

# ============================================================================
# Logging Isolation
# ============================================================================


@pytest.fixture
def restore_root_logging() -> Iterator[None]:
    """Undo configure_logging() calls made by a test."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


# ============================================================================
# Time Fixtures
# ============================================================================


@pytest.fixture
def day() -> datetime:
    """Midnight of the day under test."""
    return datetime(2026, 10, 18)


@pytest.fixture
def at(day: datetime) -> Callable[[int, int], datetime]:
    """Factory for wall-clock instants on the day under test."""

    def _at(hour: int, minute: int = 0) -> datetime:
        return day.replace(hour=hour, minute=minute)

    return _at


@pytest.fixture
def make_interval(day: datetime) -> Callable[..., TimedInterval]:
    """Factory for TimedIntervals given in minutes from midnight."""
    base = to_epoch_ms(day)

    def _make(event_id: str, start_min: int, end_min: int, order: int = 0) -> TimedInterval:
        return TimedInterval(
            event_id=event_id,
            start_ms=base + start_min * MINUTE_MS,
            end_ms=base + end_min * MINUTE_MS,
            start_minute=start_min,
            order=order,
        )

    return _make


# ============================================================================
# Engine Fixtures
# ============================================================================


@pytest.fixture
def host() -> InMemoryContainer:
    """Host container 265px wide (200px available to lanes)."""
    return InMemoryContainer(265)


@pytest.fixture
def engine(host: InMemoryContainer) -> LayoutEngine:
    """Engine with default config bound to the ``host`` container."""
    return LayoutEngine(host)


@pytest.fixture
def make_engine(host: InMemoryContainer) -> Callable[..., LayoutEngine]:
    """Factory for engines with config overrides."""

    def _make(**overrides: object) -> LayoutEngine:
        return LayoutEngine(host, config=LayoutConfig(**overrides))

    return _make


@pytest.fixture
def add_event(at: Callable[[int, int], datetime]) -> Callable[..., InMemorySurface]:
    """Register an event given ``(h, m)`` tuples; returns its surface."""

    def _add(
        engine: LayoutEngine,
        event_id: str,
        start: tuple[int, int],
        end: tuple[int, int],
        **fields: object,
    ) -> InMemorySurface:
        surface = InMemorySurface(event_id)
        engine.register_event(
            id=event_id,
            start_time=at(*start),
            end_time=at(*end),
            render_target=surface,
            **fields,
        )
        return surface

    return _add


@pytest.fixture
def scenario(
    engine: LayoutEngine, add_event: Callable[..., InMemorySurface]
) -> dict[str, InMemorySurface]:
    """Three events forming one transitive group on the 265px engine.

    A 10:00-11:00 and B 10:30-11:30 overlap; C 11:15-12:00 overlaps only
    B, and reuses lane 0 once A has ended.
    """
    return {
        "A": add_event(engine, "A", (10, 0), (11, 0), title="Standup"),
        "B": add_event(engine, "B", (10, 30), (11, 30), title="Review"),
        "C": add_event(engine, "C", (11, 15), (12, 0), title="Lunch prep"),
    }

