"""Route manifest — the route tree as a JSON file.

Components are written as their source paths, so the manifest can be
read by a runtime that resolves them itself::

    [
      {"path": "/admin", "component": "layouts/AdminLayout.vue",
       "layout": "AdminLayout", "children": [...]},
      {"path": "/", "redirect": "/home", "meta": {"requiresAuth": false},
       "children": []}
    ]
"""

from __future__ import annotations

import json
import time
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

from warren._errors import ExportError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from warren.routes.tree import RouteNode


@dataclass(frozen=True, slots=True)
class ExportResult:
    """Result of writing a route manifest.

    Attributes:
        output_path: Absolute path of the written manifest.
        route_count: Number of routes in the tree, nested ones included.
        size_bytes: Size of the written file.
        duration_ms: Time taken to serialize and write.

    """

    output_path: Path
    route_count: int
    size_bytes: int
    duration_ms: float


def routes_to_data(routes: Sequence[RouteNode]) -> list[dict[str, Any]]:
    """Render top-level routes as JSON-compatible data."""
    return [route.to_dict() for route in routes]


def routes_to_json(routes: Sequence[RouteNode], *, indent: int | None = 2) -> str:
    """Serialize the route tree to a JSON string.

    Raises:
        ExportError: If a route carries props or meta that JSON cannot encode.

    """
    try:
        return json.dumps(routes_to_data(routes), indent=indent, ensure_ascii=False)
    except (TypeError, ValueError) as exc:
        msg = f"Route tree is not JSON serializable: {exc}"
        raise ExportError(msg) from exc


def write_manifest(routes: Sequence[RouteNode], output_path: Path) -> ExportResult:
    """Write the route tree to *output_path* as JSON.

    Parent directories are created as needed.

    Raises:
        ExportError: If the tree cannot be serialized or written.

    """
    t0 = time.perf_counter()
    payload = routes_to_json(routes) + "\n"
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(payload, encoding="utf-8")
    except OSError as exc:
        msg = f"Failed to write route manifest {output_path}: {exc}"
        raise ExportError(msg) from exc

    return ExportResult(
        output_path=output_path.resolve(),
        route_count=sum(1 for route in routes for _ in route.walk()),
        size_bytes=len(payload.encode("utf-8")),
        duration_ms=(time.perf_counter() - t0) * 1000,
    )
