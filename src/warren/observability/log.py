"""Event log — queryable, thread-safe event store.

Stores a bounded ring buffer of ``RouteEvent`` objects for inspection.

Thread Safety:
    All methods are protected by a ``threading.Lock``.

"""

import threading
from collections import deque
from typing import Any

from warren.observability.events import RouteEvent


class EventLog:
    """Bounded event store with query support.

    Args:
        max_events: Maximum number of events to retain; the oldest are
            discarded first.

    """

    __slots__ = ("_events", "_lock", "_max_events")

    def __init__(self, max_events: int = 10_000) -> None:
        self._max_events = max_events
        self._events: deque[RouteEvent] = deque(maxlen=max_events)
        self._lock = threading.Lock()

    def append(self, event: RouteEvent) -> None:
        """Record an event in the log."""
        with self._lock:
            self._events.append(event)

    def query(
        self,
        *,
        event_type: type | None = None,
        path: str | None = None,
        limit: int = 100,
    ) -> list[RouteEvent]:
        """Query events, most recent first.

        Args:
            event_type: Only return events of this type.
            path: Only return events whose page path contains this string.
            limit: Maximum number of events to return.

        """
        with self._lock:
            snapshot = list(self._events)

        results: list[RouteEvent] = []
        for event in reversed(snapshot):
            if len(results) >= limit:
                break
            if event_type is not None and not isinstance(event, event_type):
                continue
            if path is not None and path not in getattr(event, "path", ""):
                continue
            results.append(event)
        return results

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)

    def stats(self) -> dict[str, Any]:
        """Return event counts by type."""
        with self._lock:
            events = list(self._events)

        type_counts: dict[str, int] = {}
        for event in events:
            name = type(event).__name__
            type_counts[name] = type_counts.get(name, 0) + 1

        return {
            "total": len(events),
            "max_events": self._max_events,
            "by_type": type_counts,
        }
