"""Layout vocabulary enums.

Defines event kinds, density tiers and duration size classes shared by
the registry, the geometry stage and render adapters.
"""

from enum import Enum


class EventKind(str, Enum):
    """Source of a registered event.

    Attributes:
        GOOGLE: Event fetched from a connected calendar.
        LOCAL: Event created locally in the timetable.
    """

    GOOGLE = "google"
    LOCAL = "local"


class DensityTier(str, Enum):
    """Horizontal padding regime selected by a group's lane count.

    Attributes:
        BASIC: Few lanes; full padding.
        COMPACT: Many lanes; medium padding.
        MICRO: Very many lanes; smallest padding.
    """

    BASIC = "basic"
    COMPACT = "compact"
    MICRO = "micro"

    @property
    def css_class(self) -> str | None:
        """Class toggled on the render target (``None`` for BASIC)."""
        return None if self is DensityTier.BASIC else self.value


class SizeClass(str, Enum):
    """Vertical styling regime selected by event duration.

    Attributes:
        NORMAL: Long enough to deduct vertical padding.
        COMPACT: Short; rendered at its exact duration.
        MICRO: Very short; held at a minimum height.
    """

    NORMAL = "normal"
    COMPACT = "compact"
    MICRO = "micro"
