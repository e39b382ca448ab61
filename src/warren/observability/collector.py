"""Route collector — records generation events into an EventLog.

Thread Safety:
    The collector delegates to ``EventLog`` which is internally locked.

"""

from __future__ import annotations

from typing import Literal

from warren.observability.events import (
    ExtractionFailed,
    GenerationFinished,
    LayoutConflict,
    PageProcessed,
    PageSkipped,
    now_ns,
)
from warren.observability.log import EventLog


class RouteCollector:
    """Records route generation events.

    Args:
        log: The EventLog to store events in.

    """

    __slots__ = ("_log",)

    def __init__(self, log: EventLog | None = None) -> None:
        self._log = log if log is not None else EventLog()

    @property
    def log(self) -> EventLog:
        """The underlying event log."""
        return self._log

    def record_processed(self, path: str, route_path: str, parent_path: str | None) -> None:
        self._log.append(PageProcessed(
            path=path,
            route_path=route_path,
            parent_path=parent_path,
            timestamp_ns=now_ns(),
        ))

    def record_skipped(self, path: str, reason: str) -> None:
        self._log.append(PageSkipped(path=path, reason=reason, timestamp_ns=now_ns()))

    def record_extraction_failed(
        self,
        path: str,
        source: Literal["block", "sibling"],
        reason: str,
    ) -> None:
        self._log.append(ExtractionFailed(
            path=path,
            source=source,
            reason=reason,
            timestamp_ns=now_ns(),
        ))

    def record_layout_conflict(
        self,
        path: str,
        parent_path: str,
        *,
        chosen: str,
        requested: str,
    ) -> None:
        self._log.append(LayoutConflict(
            path=path,
            parent_path=parent_path,
            chosen=chosen,
            requested=requested,
            timestamp_ns=now_ns(),
        ))

    def record_finished(
        self,
        *,
        page_count: int,
        route_count: int,
        skipped: int,
        duration_ms: float,
    ) -> None:
        """Record the end of a generation pass."""
        self._log.append(GenerationFinished(
            page_count=page_count,
            route_count=route_count,
            skipped=skipped,
            duration_ms=duration_ms,
            timestamp_ns=now_ns(),
        ))
