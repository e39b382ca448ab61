"""Plain-text outline of a route tree, for the ``warren routes`` command."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from warren.routes.tree import RouteNode


def format_tree(routes: Sequence[RouteNode]) -> str:
    """Render routes as an indented outline.

    ``/admin  [AdminLayout]`` for synthesized parents,
    ``/admin/users  views/admin/users.vue  (auth)`` for pages,
    ``/  -> /home`` for redirects.
    """
    lines: list[str] = []
    for route in routes:
        _format_node(route, depth=0, lines=lines)
    return "\n".join(lines)


def _format_node(node: RouteNode, *, depth: int, lines: list[str]) -> None:
    parts = ["  " * depth + node.path]
    if node.synthesized:
        parts.append(f"[{node.layout}]")
    elif node.source is not None:
        parts.append(node.source)
    if node.redirect:
        parts.append(f"-> {node.redirect}")
    if node.meta and node.meta.get("requiresAuth"):
        parts.append("(auth)")
    lines.append("  ".join(parts))
    for child in node.children:
        _format_node(child, depth=depth + 1, lines=lines)
