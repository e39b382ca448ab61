"""Metadata merger — one route descriptor per page.

``meta`` precedence, lowest first, key by key::

    computed defaults  <  sibling file meta  <  <route> block meta

``redirect``, ``name`` and ``props`` take the sibling file's value when it
is set, otherwise the block's.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from warren._types import Meta
    from warren.config import WarrenConfig
    from warren.routes.paths import NormalizedPath

_PASSTHROUGH_FIELDS = ("redirect", "name", "props")


@dataclass(frozen=True, slots=True)
class RouteDescriptor:
    """Merged per-page route config.

    Attributes:
        meta: Always carries ``requiresAuth`` and ``layout``, plus any
            extra keys from either config source.
        redirect: Redirect target path.
        name: Route name (uniqueness is the caller's concern).
        props: Passed through unmodified.

    """

    meta: dict[str, Any] = field(default_factory=dict)
    redirect: str | None = None
    name: str | None = None
    props: Any = None

    @property
    def layout(self) -> str:
        return str(self.meta.get("layout", ""))


def default_meta(normalized: NormalizedPath, config: WarrenConfig) -> Meta:
    """Compute the default meta for a page from its location."""
    admin = config.admin_segment in normalized.directories
    return {
        "requiresAuth": normalized.leaf_name.startswith(config.auth_prefix),
        "layout": config.admin_layout if admin else config.default_layout,
    }


def merge_meta(*sources: Mapping[str, Any] | None) -> Meta:
    """Merge meta mappings; later sources win on key collisions."""
    merged: Meta = {}
    for source in sources:
        if isinstance(source, Mapping):
            merged.update(source)
    return merged


def merge_descriptor(
    normalized: NormalizedPath,
    sibling: Mapping[str, Any],
    block: Mapping[str, Any],
    config: WarrenConfig,
) -> RouteDescriptor:
    """Merge defaults, sibling file config and block config for one page."""
    meta = merge_meta(
        default_meta(normalized, config),
        sibling.get("meta"),
        block.get("meta"),
    )
    picked = {key: sibling.get(key) or block.get(key) or None for key in _PASSTHROUGH_FIELDS}
    return RouteDescriptor(meta=meta, **picked)
