"""Route generation events.

All events are frozen dataclasses with:
- ``timestamp_ns``: Monotonic nanosecond timestamp
- Descriptive fields for the specific event type

Thread Safety:
    All events are frozen (immutable) and safe to share across threads.

"""

import time
from dataclasses import dataclass
from typing import Literal


@dataclass(frozen=True, slots=True)
class PageProcessed:
    """A page was placed in the route tree.

    Attributes:
        path: Page file path.
        route_path: Route path the page was placed at.
        parent_path: Path of the node it was nested under, if any.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    path: str
    route_path: str
    parent_path: str | None
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class PageSkipped:
    """A page was dropped from the route tree.

    Attributes:
        path: Page file path.
        reason: Error message that caused the page to be dropped.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    path: str
    reason: str
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class ExtractionFailed:
    """A per-page config source could not be used and was treated as empty.

    Attributes:
        path: Page file path.
        source: Which config source failed.
        reason: Error message.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    path: str
    source: Literal["block", "sibling"]
    reason: str
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class LayoutConflict:
    """A page asked for a different layout than its parent already has.

    Attributes:
        path: Page file path.
        parent_path: Route path of the synthesized parent.
        chosen: Layout the parent was created with.
        requested: Layout the page's meta asked for.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    path: str
    parent_path: str
    chosen: str
    requested: str
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class GenerationFinished:
    """A generation pass completed.

    Attributes:
        page_count: Pages handed to the pass.
        route_count: Top-level routes produced.
        skipped: Pages dropped from the tree.
        duration_ms: Wall-clock time of the pass.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    page_count: int
    route_count: int
    skipped: int
    duration_ms: float
    timestamp_ns: int


type RouteEvent = PageProcessed | PageSkipped | ExtractionFailed | LayoutConflict | GenerationFinished


def now_ns() -> int:
    """Return the current monotonic time in nanoseconds."""
    return time.monotonic_ns()
