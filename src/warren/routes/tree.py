"""Route tree assembly.

Folds processed pages into a nested route tree, in discovery order::

    views/admin/users.vue  ─┐
    views/admin/roles.vue  ─┴─>  /admin  (AdminLayout)
                                  ├── /admin/users
                                  └── /admin/roles

A page nested under a directory with no route of its own gets a
synthesized parent bound to the layout its meta names.  The first page
to create a parent picks that layout; later siblings keep it.  After all
pages are placed, ``complete_root`` guarantees a single node at ``/``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from warren._errors import RouteError

if TYPE_CHECKING:
    from collections.abc import Iterator

    from warren._types import ComponentLoader
    from warren.observability.collector import RouteCollector
    from warren.routes.meta import RouteDescriptor
    from warren.routes.paths import NormalizedPath
    from warren.sources import LayoutRegistry

logger = logging.getLogger("warren.routes")

ROOT_PATH = "/"


class DuplicateRouteError(RouteError):
    """Two pages resolved to the same route path."""


class LayoutConflictError(RouteError):
    """Sibling pages disagree on their parent's layout (strict mode)."""


@dataclass(slots=True)
class RouteNode:
    """One node of the route tree.

    Leaf nodes carry the page's component loader and merged descriptor.
    Synthesized parents carry the resolved layout as ``component`` and the
    layout identifier as ``layout``; they have no ``source``.

    Attributes:
        path: Absolute route path.
        component: Page component loader or resolved layout.
        children: Nested routes in discovery order.
        redirect: Redirect target.
        name: Route name.
        props: Passed through to the runtime.
        meta: Merged route metadata.
        layout: Layout identifier of a synthesized parent.
        source: Page file the node came from.

    """

    path: str
    component: Any = None
    children: list[RouteNode] = field(default_factory=list)
    redirect: str | None = None
    name: str | None = None
    props: Any = None
    meta: dict[str, Any] | None = None
    layout: str | None = None
    source: str | None = None

    @property
    def synthesized(self) -> bool:
        """True for parents created to host children, with no page of their own."""
        return self.source is None and self.layout is not None

    def walk(self) -> Iterator[RouteNode]:
        """Yield this node and all descendants, depth first."""
        yield self
        for child in self.children:
            yield from child.walk()

    def to_dict(self) -> dict[str, Any]:
        """Render the node as JSON-compatible data.

        Components are rendered as their source path; unset fields are
        omitted.

        """
        data: dict[str, Any] = {"path": self.path}
        component = _component_ref(self.component)
        if component is not None:
            data["component"] = component
        for key in ("redirect", "name", "props", "meta", "layout"):
            value = getattr(self, key)
            if value is not None:
                data[key] = value
        data["children"] = [child.to_dict() for child in self.children]
        return data


class RouteTreeBuilder:
    """Accumulates the route tree for one generation pass.

    Only the coordinating pass mutates the builder; it is not safe for
    concurrent writers.

    Args:
        layouts: Read-only layout registry for synthesized parents.
        strict_layouts: Raise ``LayoutConflictError`` when a page asks for
            a different layout than its already-synthesized parent.
        collector: Optional event collector.

    """

    def __init__(
        self,
        layouts: LayoutRegistry,
        *,
        strict_layouts: bool = False,
        collector: RouteCollector | None = None,
    ) -> None:
        self._layouts = layouts
        self._strict = strict_layouts
        self._collector = collector
        self._routes: list[RouteNode] = []
        self._index: dict[str, RouteNode] = {}

    @property
    def routes(self) -> list[RouteNode]:
        """Top-level routes assembled so far."""
        return self._routes

    def get(self, path: str) -> RouteNode | None:
        """Look up any node in the tree by path."""
        return self._index.get(path)

    def add(
        self,
        source: str,
        normalized: NormalizedPath,
        descriptor: RouteDescriptor,
        component: ComponentLoader,
    ) -> RouteNode:
        """Place one page in the tree.

        Raises:
            DuplicateRouteError: If another page already occupies the path.
            LayoutConflictError: In strict mode, on a parent layout conflict.

        """
        path = normalized.path
        existing = self._index.get(path)
        if existing is not None and not existing.synthesized:
            msg = f"Duplicate route path {path!r}: defined by {existing.source} and {source}"
            raise DuplicateRouteError(msg)

        parent_path = normalized.parent_path
        parent = None
        if parent_path is not None:
            parent = self._index.get(parent_path)
            if parent is None:
                parent = self._synthesize_parent(parent_path, descriptor.layout)
            elif parent.synthesized and parent.layout != descriptor.layout:
                self._layout_conflict(source, parent, descriptor.layout)

        if existing is not None:
            # The page supplies a route for a directory that was synthesized
            # earlier; it takes over that node and its children.
            self._routes.remove(existing)
            node = existing
            node.layout = None
        else:
            node = RouteNode(path=path)
            self._index[path] = node

        node.component = component
        node.redirect = descriptor.redirect
        node.name = descriptor.name
        node.props = descriptor.props
        node.meta = descriptor.meta
        node.source = source

        if parent is None:
            self._routes.append(node)
        else:
            parent.children.append(node)

        if self._collector is not None:
            self._collector.record_processed(source, path, parent_path)
        return node

    def complete_root(self, redirect: str) -> RouteNode | None:
        """Append a redirecting root route unless one already exists.

        Returns the synthesized node, or None if a root was already present.

        """
        if any(route.path == ROOT_PATH for route in self._routes):
            return None
        root = RouteNode(path=ROOT_PATH, redirect=redirect, meta={"requiresAuth": False})
        self._routes.append(root)
        self._index.setdefault(ROOT_PATH, root)
        return root

    def _synthesize_parent(self, parent_path: str, layout: str) -> RouteNode:
        component = self._layouts.get(layout)
        if component is None:
            logger.warning("Layout %r not found for %s", layout, parent_path)
        parent = RouteNode(path=parent_path, component=component, layout=layout)
        self._routes.append(parent)
        self._index[parent_path] = parent
        return parent

    def _layout_conflict(self, source: str, parent: RouteNode, requested: str) -> None:
        chosen = parent.layout or ""
        if self._collector is not None:
            self._collector.record_layout_conflict(
                source, parent.path, chosen=chosen, requested=requested,
            )
        if self._strict:
            msg = (
                f"Layout conflict under {parent.path}: {source} asks for "
                f"{requested!r} but the parent already uses {chosen!r}"
            )
            raise LayoutConflictError(msg)
        logger.warning(
            "%s asks for layout %r; keeping %r for %s",
            source, requested, chosen, parent.path,
        )


def _component_ref(component: Any) -> str | None:
    if component is None:
        return None
    source = getattr(component, "source", None)
    if isinstance(source, str):
        return source
    return getattr(component, "__qualname__", None) or repr(component)
