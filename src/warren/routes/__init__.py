"""Route tree generation from a views directory.

Public API::

    from warren.routes import generate_routes, normalize_page_path

    routes = await generate_routes(pages, layouts, config=config)
    normalize_page_path("views/users/[id].vue").path   # "/users/:id"
"""

from warren.routes.extract import Failed, Ok
from warren.routes.generate import generate_routes, process_page
from warren.routes.meta import RouteDescriptor, merge_descriptor, merge_meta
from warren.routes.paths import NormalizedPath, normalize_page_path
from warren.routes.tree import (
    DuplicateRouteError,
    LayoutConflictError,
    RouteNode,
    RouteTreeBuilder,
)

__all__ = [
    "DuplicateRouteError",
    "Failed",
    "LayoutConflictError",
    "NormalizedPath",
    "Ok",
    "RouteDescriptor",
    "RouteNode",
    "RouteTreeBuilder",
    "generate_routes",
    "merge_descriptor",
    "merge_meta",
    "normalize_page_path",
    "process_page",
]
