"""Event layout engine for a 24-hour vertical timeline."""

from daylane.core.layout.diagnostics import check_layout, peak_concurrency
from daylane.core.layout.engine import LayoutEngine
from daylane.core.layout.errors import (
    EventValidationError,
    LayoutComputationError,
    LayoutError,
    MissingEventIdError,
)
from daylane.core.layout.models import (
    EventRecord,
    GroupLayout,
    LaneAssignment,
    LaneMetrics,
    LayoutDiagnostic,
    LayoutRect,
    LayoutResult,
    OverlapGroup,
    TimedInterval,
)
from daylane.core.layout.render import (
    HostContainer,
    InMemoryContainer,
    InMemorySurface,
    LayoutContainer,
    PositionableSurface,
    SurfaceRenderer,
)
from daylane.core.layout.vocabulary import DensityTier, EventKind, SizeClass

__all__ = [
    # Engine
    "LayoutEngine",
    # Models
    "EventRecord",
    "GroupLayout",
    "LaneAssignment",
    "LaneMetrics",
    "LayoutDiagnostic",
    "LayoutRect",
    "LayoutResult",
    "OverlapGroup",
    "TimedInterval",
    # Vocabulary
    "DensityTier",
    "EventKind",
    "SizeClass",
    # Rendering
    "HostContainer",
    "InMemoryContainer",
    "InMemorySurface",
    "LayoutContainer",
    "PositionableSurface",
    "SurfaceRenderer",
    # Errors
    "EventValidationError",
    "LayoutComputationError",
    "LayoutError",
    "MissingEventIdError",
    # Diagnostics
    "check_layout",
    "peak_concurrency",
]
