"""Exceptions raised by the layout engine."""

from __future__ import annotations


class LayoutError(Exception):
    """Base class for layout engine errors."""


class EventValidationError(LayoutError, ValueError):
    """Raised when an event registration is rejected.

    The record never enters the registry when this is raised.

    Attributes:
        event_id: Id of the rejected registration, if one was given.
        reason: What specifically was wrong.
    """

    def __init__(self, *, reason: str, event_id: str | None = None) -> None:
        self.event_id = event_id
        self.reason = reason
        label = f"event {event_id!r}" if event_id else "event"
        super().__init__(f"Invalid {label}: {reason}")


class MissingEventIdError(LayoutError, ValueError):
    """Raised when removal is requested without an event id."""

    def __init__(self) -> None:
        super().__init__("An event id is required to remove an event")


class LayoutComputationError(LayoutError):
    """Raised when a layout pass cannot produce a valid result.

    Attributes:
        event_ids: Events involved in the failure.
        reason: What specifically went wrong.
    """

    def __init__(self, *, reason: str, event_ids: list[str] | None = None) -> None:
        self.event_ids = list(event_ids or [])
        self.reason = reason
        super().__init__(reason)


__all__ = [
    "EventValidationError",
    "LayoutComputationError",
    "LayoutError",
    "MissingEventIdError",
]
