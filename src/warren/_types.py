"""Shared type definitions for warren."""

from collections.abc import Awaitable, Callable
from typing import Any, Literal

# Layout identifier (e.g., "DefaultLayout")
type LayoutName = str

# Merged route metadata
type Meta = dict[str, Any]

# Deferred accessor for a page's raw text
type ContentLoader = Callable[[], Awaitable[str | None]]

# Deferred accessor for the unit a runtime mounts for a route
type ComponentLoader = Callable[[], Awaitable[Any]]

# Which per-page config source a value came from
type ConfigSource = Literal["block", "sibling"]
