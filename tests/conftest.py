"""Shared test fixtures for warren."""

from __future__ import annotations

from pathlib import Path
from types import MappingProxyType
from typing import Any

import pytest

from warren.sources import Layout, SourcePage


@pytest.fixture
def tmp_project(tmp_path: Path) -> Path:
    """Create a minimal project with views/ and layouts/.

    views/
        index.vue
        AuthLogin.vue
        admin/index.vue       (+ route.json)
        admin/users.vue
        admin/roles.vue
        users/[id].vue
    layouts/
        AdminLayout.vue
        DefaultLayout.vue
    """
    views = tmp_path / "views"
    (views / "admin").mkdir(parents=True)
    (views / "users").mkdir()
    (views / "index.vue").write_text("<template><h1>Home</h1></template>\n")
    (views / "AuthLogin.vue").write_text("<template><form /></template>\n")
    (views / "admin" / "index.vue").write_text("<template><h1>Admin</h1></template>\n")
    (views / "admin" / "route.json").write_text('{"name": "admin-home"}\n')
    (views / "admin" / "users.vue").write_text(
        "<template><ul /></template>\n"
        '<route>{"meta": {"title": "Users"}}</route>\n'
    )
    (views / "admin" / "roles.vue").write_text("<template><ul /></template>\n")
    (views / "users" / "[id].vue").write_text("<template><p /></template>\n")

    layouts = tmp_path / "layouts"
    layouts.mkdir()
    (layouts / "AdminLayout.vue").write_text("<template><aside /><slot /></template>\n")
    (layouts / "DefaultLayout.vue").write_text("<template><slot /></template>\n")
    return tmp_path


def make_page(
    file_path: str,
    content: str | None = "<template />",
    *,
    config_file: str | None = None,
    config_text: str | None = None,
) -> SourcePage:
    """Create an in-memory SourcePage for unit testing."""

    async def load_content() -> str | None:
        return content

    async def load_component() -> Any:
        return file_path

    async def load_config_text() -> str | None:
        return config_text

    return SourcePage(
        file_path=file_path,
        content_loader=load_content,
        component_loader=load_component,
        config_file=config_file,
        config_loader=load_config_text if config_file is not None else None,
    )


def make_layouts(*names: str) -> MappingProxyType[str, Layout]:
    """Create a layout registry with one empty layout per name."""
    return MappingProxyType({
        name: Layout(name=name, source=f"layouts/{name}.vue", content="<template />")
        for name in names
    })
