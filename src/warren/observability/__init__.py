"""Route generation observability.

Every generation pass records what happened to each page:

- **PageProcessed**: page placed in the tree
- **PageSkipped**: page dropped after an error
- **ExtractionFailed**: a config source was unusable and treated as empty
- **LayoutConflict**: a page disagreed with its parent's layout
- **GenerationFinished**: pass summary

Quick Start:
    >>> from warren.observability import EventLog, RouteCollector
    >>> collector = RouteCollector(EventLog())
    >>> # routes = await generate_routes(pages, layouts, collector=collector)
    >>> # collector.log.query(event_type=PageSkipped)

"""

from warren.observability.collector import RouteCollector
from warren.observability.events import (
    ExtractionFailed,
    GenerationFinished,
    LayoutConflict,
    PageProcessed,
    PageSkipped,
    RouteEvent,
    now_ns,
)
from warren.observability.log import EventLog

__all__ = [
    "EventLog",
    "ExtractionFailed",
    "GenerationFinished",
    "LayoutConflict",
    "PageProcessed",
    "PageSkipped",
    "RouteCollector",
    "RouteEvent",
    "now_ns",
]
