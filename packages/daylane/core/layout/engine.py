"""Layout engine: registry → grouping → lanes → geometry → render.

The LayoutEngine is the single entry point used by event display
managers. Every pass recomputes everything from the current registry
and container width; no derived state is carried between passes.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any

from daylane.core.config.models import LayoutConfig
from daylane.core.layout.geometry import compute_available_width, layout_group
from daylane.core.layout.grouping import group_overlapping
from daylane.core.layout.lanes import assign_lanes
from daylane.core.layout.models import (
    EventRecord,
    GroupLayout,
    LayoutDiagnostic,
    LayoutRect,
    LayoutResult,
    TimedInterval,
)
from daylane.core.layout.registry import EventRegistry, TimeCache
from daylane.core.layout.render import HostContainer, LayoutContainer, SurfaceRenderer
from daylane.core.layout.timeline import minutes_from_midnight
from daylane.core.layout.vocabulary import EventKind
from daylane.core.utils.logging import log_performance

logger = logging.getLogger(__name__)

WidthSource = int | Callable[[], int] | HostContainer


class LayoutEngine:
    """Positions overlapping events side by side on a day timeline.

    Args:
        container_width: Host width in pixels, a zero-argument accessor,
            or a host container exposing ``width``. Queried at
            construction and on every layout pass.
        config: Layout configuration.
        renderer: Render adapter. Defaults to a ``SurfaceRenderer`` that
            also drives the host as a ``LayoutContainer`` when it is one.
    """

    def __init__(
        self,
        container_width: WidthSource,
        config: LayoutConfig | None = None,
        renderer: SurfaceRenderer | None = None,
    ) -> None:
        self._config = config or LayoutConfig()
        self._registry = EventRegistry(self._config.duplicate_policy)
        self._width_source: WidthSource = container_width
        if renderer is None:
            container = container_width if isinstance(container_width, LayoutContainer) else None
            renderer = SurfaceRenderer(container)
        self._renderer = renderer
        self._container_width = self._query_container_width()
        self._last_result: LayoutResult | None = None

    @property
    def config(self) -> LayoutConfig:
        return self._config

    @property
    def events(self) -> tuple[EventRecord, ...]:
        return self._registry.events

    @property
    def time_cache(self) -> TimeCache:
        return self._registry.cache

    @property
    def renderer(self) -> SurfaceRenderer:
        return self._renderer

    @property
    def container_width(self) -> int:
        """Width seen by the most recent query of the host."""
        return self._container_width

    @property
    def available_width(self) -> int:
        return compute_available_width(self._container_width, self._config)

    @property
    def last_result(self) -> LayoutResult | None:
        """Result of the latest pass, for inspection only."""
        return self._last_result

    def __len__(self) -> int:
        return len(self._registry)

    def __contains__(self, event_id: object) -> bool:
        return event_id in self._registry

    def register_event(
        self,
        record: EventRecord | Mapping[str, Any] | None = None,
        /,
        **fields: Any,
    ) -> EventRecord:
        """Register an event for layout.

        Accepts an EventRecord, a mapping, or the fields as keywords.

        Raises:
            EventValidationError: If the registration is invalid.
        """
        data = record if record is not None else fields
        registered = self._registry.register(data)
        logger.debug("Registered event %s (%s)", registered.id, registered.title)
        return registered

    def remove_event(self, event_id: str | None) -> bool:
        """Remove an event; returns whether it was registered.

        Raises:
            MissingEventIdError: If ``event_id`` is empty or None.
        """
        removed = self._registry.remove(event_id)
        if removed:
            logger.debug("Removed event %s", event_id)
        return removed

    def remove_events_of_kind(self, kind: EventKind | str) -> int:
        """Remove every event of one kind, e.g. before refreshing calendar events."""
        ids = self._registry.ids_of_kind(kind)
        for event_id in ids:
            self._registry.remove(event_id)
        return len(ids)

    def clear_events(self) -> None:
        """Release all render targets, the time cache, and the shared container."""
        released = self._registry.clear()
        self._renderer.clear()
        self._last_result = None
        logger.debug("Cleared %d event(s)", released)

    def resize(self, container_width: WidthSource | None = None) -> LayoutResult:
        """Re-query (or replace) the container width and re-run layout."""
        if container_width is not None:
            self._width_source = container_width
        return self.calculate_layout()

    @log_performance
    def calculate_layout(self) -> LayoutResult:
        """Compute and apply the layout of every registered event.

        Returns:
            The computed LayoutResult. Empty when nothing is registered, in
            which case the shared container is cleared and no render target
            is touched.

        Raises:
            LayoutComputationError: On overflow under ``OverflowPolicy.ERROR``.
        """
        try:
            self._registry.cache.clear()
            self._container_width = self._query_container_width()

            stale = self._registry.prune_stale()
            records = self._registry.events
            if not records:
                self._renderer.clear()
                self._last_result = self._empty_result()
                return self._last_result

            result = self._compute(records)
            if stale:
                result.diagnostics.append(
                    LayoutDiagnostic(
                        level="info",
                        message=f"Dropped {len(stale)} event(s) with a released render target",
                        event_ids=stale,
                    )
                )

            written = self._renderer.apply(result, {r.id: r.render_target for r in records})
        except Exception:
            logger.exception("Event layout calculation failed")
            raise

        logger.info(
            "Layout pass: %d events, %d groups, max %d lanes, %d targets written, width %dpx",
            len(records),
            len(result.groups),
            result.max_lane_count,
            written,
            result.available_width,
        )
        self._last_result = result
        return result

    def _compute(self, records: tuple[EventRecord, ...]) -> LayoutResult:
        available_width = compute_available_width(self._container_width, self._config)

        intervals = [
            TimedInterval(
                event_id=record.id,
                start_ms=self._registry.start_ms(record),
                end_ms=self._registry.end_ms(record),
                start_minute=minutes_from_midnight(record.start_time),
                order=order,
            )
            for order, record in enumerate(records)
        ]

        group_layouts: list[GroupLayout] = []
        rects: dict[str, LayoutRect] = {}
        diagnostics: list[LayoutDiagnostic] = []

        for group in group_overlapping(intervals):
            assignment = assign_lanes(group)
            group_rects, metrics = layout_group(group, assignment, available_width, self._config)
            group_layouts.append(GroupLayout(group=group, assignment=assignment, metrics=metrics))
            for rect in group_rects:
                rects[rect.event_id] = rect

            if metrics is not None and metrics.overflow:
                diagnostics.append(
                    LayoutDiagnostic(
                        level="warning",
                        message=(
                            f"{metrics.lane_count} lanes span {metrics.total_width}px, "
                            f"wider than the available {available_width}px "
                            f"({self._config.overflow_policy.value})"
                        ),
                        event_ids=group.event_ids,
                    )
                )

        return LayoutResult(
            container_width=self._container_width,
            available_width=available_width,
            base_left=self._config.base_left,
            groups=group_layouts,
            rects=rects,
            diagnostics=diagnostics,
        )

    def _empty_result(self) -> LayoutResult:
        return LayoutResult(
            container_width=self._container_width,
            available_width=compute_available_width(self._container_width, self._config),
            base_left=self._config.base_left,
        )

    def _query_container_width(self) -> int:
        source = self._width_source
        if isinstance(source, bool):
            raise TypeError("container width must be a number, accessor, or host container")
        if isinstance(source, int | float):
            return int(source)
        if isinstance(source, HostContainer):
            return int(source.width)
        if callable(source):
            return int(source())
        raise TypeError(f"Unsupported container width source: {type(source).__name__}")


__all__ = [
    "LayoutEngine",
    "WidthSource",
]
