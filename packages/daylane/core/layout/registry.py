"""Event registry and time cache.

The registry owns every active EventRecord. The time cache memoizes
start/end instants in epoch milliseconds; its entries never outlive
the record they belong to.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from typing import Any, Literal

from pydantic import ValidationError

from daylane.core.config.models import DuplicatePolicy
from daylane.core.layout.errors import EventValidationError, MissingEventIdError
from daylane.core.layout.models import EventRecord
from daylane.core.layout.timeline import to_epoch_ms
from daylane.core.layout.vocabulary import EventKind

logger = logging.getLogger(__name__)

Boundary = Literal["start", "end"]

_REQUIRED_FIELDS = ("id", "start_time", "end_time", "render_target")


class TimeCache:
    """Memoized epoch-ms values keyed by ``(event_id, "start"|"end")``."""

    def __init__(self) -> None:
        self._entries: dict[tuple[str, Boundary], int] = {}

    def get(self, record: EventRecord, boundary: Boundary) -> int:
        """Return the cached value, computing it on a miss."""
        key = (record.id, boundary)
        cached = self._entries.get(key)
        if cached is None:
            instant = record.start_time if boundary == "start" else record.end_time
            cached = to_epoch_ms(instant)
            self._entries[key] = cached
        return cached

    def prime(self, record: EventRecord) -> None:
        """Populate both entries for a record."""
        self.get(record, "start")
        self.get(record, "end")

    def invalidate(self, event_id: str) -> None:
        """Drop both entries for one event."""
        self._entries.pop((event_id, "start"), None)
        self._entries.pop((event_id, "end"), None)

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def has_event(self, event_id: str) -> bool:
        return (event_id, "start") in self._entries or (event_id, "end") in self._entries


class EventRegistry:
    """Ordered collection of active event records.

    Registration order is preserved and used as the tie-breaker when
    events share a start time.

    Args:
        duplicate_policy: How to treat a registration whose id is already active.
    """

    def __init__(self, duplicate_policy: DuplicatePolicy = DuplicatePolicy.REPLACE) -> None:
        self._duplicate_policy = duplicate_policy
        self._events: list[EventRecord] = []
        self._cache = TimeCache()

    @property
    def cache(self) -> TimeCache:
        return self._cache

    @property
    def events(self) -> tuple[EventRecord, ...]:
        return tuple(self._events)

    def __len__(self) -> int:
        return len(self._events)

    def __iter__(self) -> Iterator[EventRecord]:
        return iter(list(self._events))

    def __contains__(self, event_id: object) -> bool:
        return any(e.id == event_id for e in self._events)

    def get(self, event_id: str) -> EventRecord | None:
        for event in self._events:
            if event.id == event_id:
                return event
        return None

    def ids_of_kind(self, kind: EventKind | str) -> list[str]:
        """Ids of all active events of one kind, in registration order."""
        kind = EventKind(kind)
        return [e.id for e in self._events if e.kind is kind]

    def register(self, data: EventRecord | Mapping[str, Any]) -> EventRecord:
        """Validate and add an event.

        Args:
            data: An EventRecord or a mapping of its fields.

        Returns:
            The registered record.

        Raises:
            EventValidationError: If a required field is missing, the times
                are not chronological, the kind is unknown, or the id is
                already active under ``DuplicatePolicy.REJECT``.
        """
        record = self._validate(data)

        index = self._index_of(record.id)
        if index is None:
            self._events.append(record)
        elif self._duplicate_policy is DuplicatePolicy.REJECT:
            raise EventValidationError(event_id=record.id, reason="id is already registered")
        else:
            previous = self._events[index]
            previous.render_target = None
            self._cache.invalidate(record.id)
            self._events[index] = record
            logger.debug("Replaced registration for event %s", record.id)

        self._cache.prime(record)
        return record

    def remove(self, event_id: str | None) -> bool:
        """Remove an event and its cache entries.

        Returns:
            True if a record was found and removed.

        Raises:
            MissingEventIdError: If ``event_id`` is empty or None.
        """
        if not event_id:
            raise MissingEventIdError()

        before = len(self._events)
        self._events = [e for e in self._events if e.id != event_id]
        self._cache.invalidate(event_id)
        return len(self._events) < before

    def clear(self) -> int:
        """Release every render target reference and drop all records.

        Returns:
            Number of records released.
        """
        released = len(self._events)
        for event in self._events:
            event.render_target = None
        self._events = []
        self._cache.clear()
        return released

    def prune_stale(self) -> list[str]:
        """Drop records whose render target has been released externally.

        Returns:
            Ids of the dropped records.
        """
        stale = [e.id for e in self._events if e.is_stale]
        if stale:
            self._events = [e for e in self._events if not e.is_stale]
            for event_id in stale:
                self._cache.invalidate(event_id)
            logger.debug("Dropped %d stale event(s): %s", len(stale), ", ".join(stale))
        return stale

    def start_ms(self, record: EventRecord) -> int:
        return self._cache.get(record, "start")

    def end_ms(self, record: EventRecord) -> int:
        return self._cache.get(record, "end")

    def _index_of(self, event_id: str) -> int | None:
        for i, event in enumerate(self._events):
            if event.id == event_id:
                return i
        return None

    @staticmethod
    def _validate(data: EventRecord | Mapping[str, Any]) -> EventRecord:
        if isinstance(data, EventRecord):
            data = dict(data)

        if not isinstance(data, Mapping):
            raise EventValidationError(reason=f"expected a mapping, got {type(data).__name__}")

        raw_id = data.get("id")
        event_id = str(raw_id) if raw_id else None

        missing = [name for name in _REQUIRED_FIELDS if _is_blank(data.get(name))]
        if missing:
            raise EventValidationError(
                event_id=event_id,
                reason=f"missing required field(s): {', '.join(missing)}",
            )

        try:
            return EventRecord.model_validate(dict(data))
        except ValidationError as e:
            reasons = "; ".join(
                f"{'.'.join(str(p) for p in err['loc']) or 'event'}: {err['msg']}"
                for err in e.errors()
            )
            raise EventValidationError(event_id=event_id, reason=reasons) from e


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


__all__ = [
    "Boundary",
    "EventRegistry",
    "TimeCache",
]
