"""Tests for warren.routes.tree — tree assembly and root completion."""

from __future__ import annotations

import pytest

from tests.conftest import make_layouts
from warren.config import WarrenConfig
from warren.observability import EventLog, LayoutConflict, PageProcessed, RouteCollector
from warren.routes.meta import RouteDescriptor, merge_descriptor
from warren.routes.paths import normalize_page_path
from warren.routes.tree import (
    DuplicateRouteError,
    LayoutConflictError,
    RouteNode,
    RouteTreeBuilder,
)

_CONFIG = WarrenConfig()


async def _component() -> str:
    return "component"


def _add(builder: RouteTreeBuilder, file_path: str, *, block: dict | None = None) -> RouteNode:
    normalized = normalize_page_path(file_path)
    descriptor = merge_descriptor(normalized, {}, block or {}, _CONFIG)
    return builder.add(file_path, normalized, descriptor, _component)


@pytest.fixture
def builder() -> RouteTreeBuilder:
    return RouteTreeBuilder(make_layouts("AdminLayout", "DefaultLayout"))


# ---------------------------------------------------------------------------
# RouteNode
# ---------------------------------------------------------------------------


class TestRouteNode:

    def test_defaults(self) -> None:
        node = RouteNode(path="/a")
        assert node.children == []
        assert node.synthesized is False

    def test_synthesized(self) -> None:
        assert RouteNode(path="/a", layout="DefaultLayout").synthesized is True

    def test_walk_depth_first(self) -> None:
        leaf = RouteNode(path="/a/b")
        root = RouteNode(path="/a", children=[leaf, RouteNode(path="/a/c")])
        assert [n.path for n in root.walk()] == ["/a", "/a/b", "/a/c"]

    def test_to_dict_omits_unset_fields(self) -> None:
        node = RouteNode(path="/", redirect="/home", meta={"requiresAuth": False})
        assert node.to_dict() == {
            "path": "/",
            "redirect": "/home",
            "meta": {"requiresAuth": False},
            "children": [],
        }


# ---------------------------------------------------------------------------
# RouteTreeBuilder.add
# ---------------------------------------------------------------------------


class TestAdd:
    """Placing pages in the tree."""

    def test_top_level_page(self, builder: RouteTreeBuilder) -> None:
        node = _add(builder, "views/about.vue")
        assert builder.routes == [node]
        assert node.source == "views/about.vue"
        assert node.component is _component

    def test_admin_index_is_single_node(self, builder: RouteTreeBuilder) -> None:
        _add(builder, "views/admin/index.vue")
        assert [r.path for r in builder.routes] == ["/admin"]
        assert builder.routes[0].children == []
        assert builder.routes[0].meta == {"requiresAuth": False, "layout": "AdminLayout"}

    def test_siblings_share_synthesized_parent(self, builder: RouteTreeBuilder) -> None:
        _add(builder, "views/admin/users.vue")
        _add(builder, "views/admin/roles.vue")

        assert len(builder.routes) == 1
        parent = builder.routes[0]
        assert parent.path == "/admin"
        assert parent.synthesized
        assert parent.layout == "AdminLayout"
        assert parent.component.name == "AdminLayout"
        assert [c.path for c in parent.children] == ["/admin/users", "/admin/roles"]

    def test_first_child_chooses_parent_layout(self, builder: RouteTreeBuilder) -> None:
        _add(builder, "views/shop/cart.vue", block={"meta": {"layout": "AdminLayout"}})
        _add(builder, "views/shop/list.vue")
        parent = builder.get("/shop")
        assert parent is not None
        assert parent.layout == "AdminLayout"
        assert len(parent.children) == 2

    def test_page_nests_under_existing_page(self, builder: RouteTreeBuilder) -> None:
        index = _add(builder, "views/admin/index.vue")
        _add(builder, "views/admin/users.vue")
        assert builder.routes == [index]
        assert [c.path for c in index.children] == ["/admin/users"]

    def test_page_adopts_synthesized_parent(self, builder: RouteTreeBuilder) -> None:
        _add(builder, "views/admin/[id].vue")
        index = _add(builder, "views/admin/index.vue")

        assert [r.path for r in builder.routes] == ["/admin"]
        assert builder.routes[0] is index
        assert index.synthesized is False
        assert index.source == "views/admin/index.vue"
        assert index.component is _component
        assert [c.path for c in index.children] == ["/admin/:id"]

    def test_deep_nesting_uses_nested_parent(self, builder: RouteTreeBuilder) -> None:
        _add(builder, "views/admin/users.vue")
        _add(builder, "views/admin/users/[id].vue")
        users = builder.get("/admin/users")
        assert users is not None
        assert [c.path for c in users.children] == ["/admin/users/:id"]
        assert [r.path for r in builder.routes] == ["/admin"]

    def test_duplicate_path_raises(self, builder: RouteTreeBuilder) -> None:
        _add(builder, "views/about.vue")
        with pytest.raises(DuplicateRouteError, match="Duplicate route path '/about'"):
            _add(builder, "views/about/index.vue")
        assert len(builder.routes) == 1

    def test_missing_layout_leaves_component_empty(self) -> None:
        builder = RouteTreeBuilder(make_layouts())
        _add(builder, "views/docs/intro.vue")
        parent = builder.get("/docs")
        assert parent is not None
        assert parent.component is None
        assert parent.layout == "DefaultLayout"

    def test_records_processed_events(self) -> None:
        collector = RouteCollector(EventLog())
        builder = RouteTreeBuilder(make_layouts(), collector=collector)
        _add(builder, "views/admin/users.vue")
        events = collector.log.query(event_type=PageProcessed)
        assert len(events) == 1
        assert events[0].route_path == "/admin/users"
        assert events[0].parent_path == "/admin"


class TestLayoutConflict:
    """Sibling pages disagreeing on the parent layout."""

    def test_lenient_keeps_first_layout(self) -> None:
        collector = RouteCollector(EventLog())
        builder = RouteTreeBuilder(make_layouts("AdminLayout"), collector=collector)
        _add(builder, "views/admin/users.vue")
        _add(builder, "views/admin/roles.vue", block={"meta": {"layout": "DefaultLayout"}})

        parent = builder.get("/admin")
        assert parent is not None
        assert parent.layout == "AdminLayout"
        assert len(parent.children) == 2

        conflicts = collector.log.query(event_type=LayoutConflict)
        assert len(conflicts) == 1
        assert conflicts[0].chosen == "AdminLayout"
        assert conflicts[0].requested == "DefaultLayout"

    def test_strict_raises(self) -> None:
        builder = RouteTreeBuilder(make_layouts(), strict_layouts=True)
        _add(builder, "views/admin/users.vue")
        with pytest.raises(LayoutConflictError, match="Layout conflict under /admin"):
            _add(builder, "views/admin/roles.vue", block={"meta": {"layout": "Other"}})

    def test_no_conflict_with_page_parent(self) -> None:
        builder = RouteTreeBuilder(make_layouts(), strict_layouts=True)
        _add(builder, "views/admin/index.vue")
        _add(builder, "views/admin/roles.vue", block={"meta": {"layout": "Other"}})
        assert len(builder.routes[0].children) == 1


# ---------------------------------------------------------------------------
# Root completion
# ---------------------------------------------------------------------------


class TestCompleteRoot:

    def test_adds_redirect_when_missing(self, builder: RouteTreeBuilder) -> None:
        _add(builder, "views/about.vue")
        root = builder.complete_root("/home")
        assert root is not None
        assert builder.routes[-1] is root
        assert root.path == "/"
        assert root.redirect == "/home"
        assert root.meta == {"requiresAuth": False}
        assert root.component is None
        assert root.children == []

    def test_keeps_existing_root(self, builder: RouteTreeBuilder) -> None:
        _add(builder, "views/index.vue")
        assert builder.complete_root("/home") is None
        assert [r.path for r in builder.routes] == ["/"]

    def test_idempotent(self, builder: RouteTreeBuilder) -> None:
        builder.complete_root("/home")
        builder.complete_root("/home")
        assert [r.path for r in builder.routes] == ["/"]

    def test_empty_descriptor_page_at_root(self, builder: RouteTreeBuilder) -> None:
        normalized = normalize_page_path("views/index.vue")
        builder.add("views/index.vue", normalized, RouteDescriptor(), _component)
        builder.complete_root("/home")
        assert len(builder.routes) == 1
