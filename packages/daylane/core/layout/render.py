"""Render adapter: applies a LayoutResult to positionable surfaces.

The layout engine never depends on a UI technology. Hosts implement the
small protocols below; ``InMemorySurface`` and ``InMemoryContainer`` are
reference implementations that simply record what was written.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

from daylane.core.layout.models import LayoutRect, LayoutResult
from daylane.core.layout.vocabulary import DensityTier

logger = logging.getLogger(__name__)

POSITION_ABSOLUTE = "absolute"


@runtime_checkable
class PositionableSurface(Protocol):
    """Visual object for one event; the engine owns its positioning."""

    def apply_geometry(self, *, position: str, left: int, width: int, top: int, height: int) -> None:
        """Write position and box geometry in pixels."""
        ...

    def set_density(self, density: DensityTier) -> None:
        """Toggle the ``compact`` / ``micro`` classes (neither for BASIC)."""
        ...

    def set_title_only(self, title_only: bool) -> None:
        """Show only the title (no time range) when True."""
        ...


@runtime_checkable
class LayoutContainer(Protocol):
    """Optional shared container hosting per-lane placeholders."""

    def clear_layout_container(self) -> None:
        """Remove the shared container and its placeholders."""
        ...

    def build_layout_container(self, lane_counts: list[int]) -> None:
        """Create the shared container with one placeholder set per multi-lane group."""
        ...


@runtime_checkable
class HostContainer(Protocol):
    """Host element whose width bounds the timeline."""

    @property
    def width(self) -> int:
        """Current width in pixels."""
        ...


class SurfaceRenderer:
    """Pushes computed rects onto render targets.

    Rendering is destructive-and-rebuild: the shared container (if any)
    is cleared and regenerated on every pass.

    Args:
        container: Optional shared layout container.
    """

    def __init__(self, container: LayoutContainer | None = None) -> None:
        self._container = container

    @property
    def container(self) -> LayoutContainer | None:
        return self._container

    def apply(self, result: LayoutResult, targets: Mapping[str, Any]) -> int:
        """Apply every rect in ``result`` to its target.

        Args:
            result: Layout pass result.
            targets: Render target per event id.

        Returns:
            Number of targets written.
        """
        if self._container is not None:
            self._container.clear_layout_container()
            lane_counts = [g.lane_count for g in result.groups if g.lane_count > 1]
            if lane_counts:
                self._container.build_layout_container(lane_counts)

        written = 0
        for event_id, rect in result.rects.items():
            target = targets.get(event_id)
            if target is None:
                continue
            self.apply_rect(target, rect)
            written += 1
        return written

    @staticmethod
    def apply_rect(target: PositionableSurface, rect: LayoutRect) -> None:
        target.apply_geometry(
            position=POSITION_ABSOLUTE,
            left=rect.left,
            width=rect.width,
            top=rect.top,
            height=rect.height,
        )
        target.set_density(rect.density)
        target.set_title_only(rect.title_only)

    def clear(self) -> None:
        if self._container is not None:
            self._container.clear_layout_container()


class InMemorySurface:
    """Surface that records the style it was given.

    Attributes:
        name: Label for debugging and CLI output.
        style: Last written position and geometry.
        classes: Density classes currently toggled on.
        title_only: Whether the time range is hidden.
        writes: Number of geometry writes received.
    """

    def __init__(self, name: str = "") -> None:
        self.name = name
        self.style: dict[str, Any] = {}
        self.classes: set[str] = set()
        self.title_only = False
        self.writes = 0

    def apply_geometry(self, *, position: str, left: int, width: int, top: int, height: int) -> None:
        self.style = {
            "position": position,
            "left": left,
            "width": width,
            "top": top,
            "height": height,
        }
        self.writes += 1

    def set_density(self, density: DensityTier) -> None:
        self.classes.difference_update({DensityTier.COMPACT.value, DensityTier.MICRO.value})
        if density.css_class:
            self.classes.add(density.css_class)

    def set_title_only(self, title_only: bool) -> None:
        self.title_only = title_only

    def __repr__(self) -> str:
        return f"InMemorySurface({self.name!r}, style={self.style})"


class InMemoryContainer:
    """Host container with a settable width and recorded placeholders.

    Args:
        width: Initial width in pixels.
    """

    def __init__(self, width: int) -> None:
        self._width = int(width)
        self.placeholders: list[int] | None = None
        self.clears = 0
        self.builds = 0

    @property
    def width(self) -> int:
        return self._width

    def resize(self, width: int) -> None:
        self._width = int(width)

    def clear_layout_container(self) -> None:
        self.placeholders = None
        self.clears += 1

    def build_layout_container(self, lane_counts: list[int]) -> None:
        self.placeholders = list(lane_counts)
        self.builds += 1


__all__ = [
    "HostContainer",
    "InMemoryContainer",
    "InMemorySurface",
    "LayoutContainer",
    "POSITION_ABSOLUTE",
    "PositionableSurface",
    "SurfaceRenderer",
]
