"""Tests for warren.watcher — change detection and categorization."""

from __future__ import annotations

from pathlib import Path

import pytest

from warren.config import WarrenConfig
from warren.watcher import ChangeEvent, RouteWatcher, categorize_change


@pytest.fixture
def config(tmp_path: Path) -> WarrenConfig:
    """A WarrenConfig rooted at a temp directory."""
    return WarrenConfig(root=tmp_path)


class TestChangeEvent:
    """Verify ChangeEvent is frozen and well-behaved."""

    def test_frozen(self) -> None:
        event = ChangeEvent(path=Path("/tmp/a.vue"), kind="modified", category="view")
        with pytest.raises(AttributeError):
            event.kind = "created"  # type: ignore[misc]

    def test_hashable(self) -> None:
        event = ChangeEvent(path=Path("/a.vue"), kind="created", category="layout")
        assert isinstance(hash(event), int)


class TestCategorizeChange:
    """Unit tests for categorize_change()."""

    def test_view_page(self, config: WarrenConfig) -> None:
        path = config.root / "views" / "admin" / "users.vue"
        assert categorize_change(path, config) == "view"

    def test_sibling_config(self, config: WarrenConfig) -> None:
        path = config.root / "views" / "admin" / "route.json"
        assert categorize_change(path, config) == "view"

    def test_other_file_in_views(self, config: WarrenConfig) -> None:
        path = config.root / "views" / "notes.txt"
        assert categorize_change(path, config) is None

    def test_layout(self, config: WarrenConfig) -> None:
        path = config.root / "layouts" / "AdminLayout.vue"
        assert categorize_change(path, config) == "layout"

    def test_config_file(self, config: WarrenConfig) -> None:
        assert categorize_change(config.root / "warren.yaml", config) == "config"
        assert categorize_change(config.root / "warren.toml", config) == "config"

    def test_manifest_is_ignored(self, config: WarrenConfig) -> None:
        assert categorize_change(config.output_path, config) is None

    def test_hidden_ignored(self, config: WarrenConfig) -> None:
        path = config.root / "views" / ".cache" / "a.vue"
        assert categorize_change(path, config) is None

    def test_outside_root(self, config: WarrenConfig) -> None:
        assert categorize_change(Path("/elsewhere/views/a.vue"), config) is None

    def test_custom_dirs(self, tmp_path: Path) -> None:
        config = WarrenConfig(root=tmp_path, views_dir="pages", layouts_dir="shells")
        assert categorize_change(tmp_path / "pages" / "a.vue", config) == "view"
        assert categorize_change(tmp_path / "shells" / "b.vue", config) == "layout"
        assert categorize_change(tmp_path / "views" / "a.vue", config) is None

    def test_nested_dirs(self, tmp_path: Path) -> None:
        config = WarrenConfig(root=tmp_path, views_dir="src/views", layouts_dir="src/layouts")
        assert categorize_change(tmp_path / "src" / "views" / "admin" / "a.vue", config) == "view"
        assert categorize_change(tmp_path / "src" / "views" / "route.json", config) == "view"
        assert categorize_change(tmp_path / "src" / "layouts" / "b.vue", config) == "layout"
        assert categorize_change(tmp_path / "src" / "main.vue", config) is None


class TestRouteWatcher:

    def test_not_running_initially(self, config: WarrenConfig) -> None:
        assert RouteWatcher(config).is_running is False

    def test_stop_without_start(self, config: WarrenConfig) -> None:
        RouteWatcher(config).stop()
