"""Path normalizer — page file path to route path.

Conventions::

    views/index.vue          -> /
    views/about.vue          -> /about
    views/admin/index.vue    -> /admin
    views/admin/users.vue    -> /admin/users   (nested under /admin)
    views/users/[id].vue     -> /users/:id

A trailing ``index`` collapses onto its directory, so a directory index
page lives at the directory's own path and is nested under the
directory's parent, never under a wrapper at its own path.
"""

from __future__ import annotations

import posixpath
import re
from dataclasses import dataclass

# Regex matching [param] leaf names and directory names
_PARAM_RE = re.compile(r"^\[(.+)\]$")

_INDEX = "index"


@dataclass(frozen=True, slots=True)
class NormalizedPath:
    """Route placement derived from a page's file path.

    Attributes:
        path: Absolute route path (no trailing slash except ``/``).
        segments: Directory segments the route is nested under, with
            dynamic markers applied. Empty for top-level routes.
        leaf_name: Raw name of the leaf (file stem, or directory name
            for index pages).
        directories: Raw directory names of the file, including the
            page's own directory for index pages.
        is_index: Whether the file is an ``index`` page.

    """

    path: str
    segments: tuple[str, ...]
    leaf_name: str
    directories: tuple[str, ...]
    is_index: bool

    @property
    def parent_path(self) -> str | None:
        """Path of the node this route nests under, or None at top level."""
        if not self.segments:
            return None
        return "/" + "/".join(self.segments)


def strip_page_path(file_path: str, *, views_dir: str = "views", suffix: str = ".vue") -> str:
    """Strip the views root and file extension from a page path.

    ``views/admin/users.vue``    -> ``/admin/users``
    ``../views/index.vue``       -> ``/index``

    *views_dir* may span several directories (``src/views``); it is
    stripped only when the whole prefix matches.

    """
    parts = _split(file_path)
    while parts and parts[0] == "..":
        parts.pop(0)
    prefix = _split(views_dir)
    while prefix and prefix[0] == "..":
        prefix.pop(0)
    if prefix and parts[: len(prefix)] == prefix:
        del parts[: len(prefix)]
    stripped = "/" + "/".join(parts)
    if stripped.endswith(suffix):
        return stripped[: -len(suffix)]
    return posixpath.splitext(stripped)[0]


def dynamic_segment(name: str) -> str:
    """Convert ``[id]`` to the parameter marker ``:id``; other names pass through."""
    match = _PARAM_RE.match(name)
    if match:
        return ":" + match.group(1)
    return name


def normalize_page_path(
    file_path: str,
    *,
    views_dir: str = "views",
    suffix: str = ".vue",
) -> NormalizedPath:
    """Derive the route placement of a page from its file path.

    Pure function of its arguments.

    """
    stripped = strip_page_path(file_path, views_dir=views_dir, suffix=suffix)
    is_index = stripped == "/" + _INDEX or stripped.endswith("/" + _INDEX)
    if is_index:
        stripped = stripped[: -len(_INDEX)]

    parts = [p for p in stripped.split("/") if p]
    directories = tuple(parts) if is_index else tuple(parts[:-1])
    leaf_name = parts.pop() if parts else _INDEX
    segments = tuple(dynamic_segment(p) for p in parts)

    return NormalizedPath(
        path=join_route_path(segments, leaf_name),
        segments=segments,
        leaf_name=leaf_name,
        directories=directories,
        is_index=is_index,
    )


def join_route_path(segments: tuple[str, ...] | list[str], leaf_name: str) -> str:
    """Join directory segments and a leaf name into a route path.

    ``(), "index"``            -> ``/``
    ``("admin",), "index"``    -> ``/admin``
    ``("users",), "[id]"``     -> ``/users/:id``

    """
    if leaf_name == _INDEX:
        final = "" if segments else "/"
    else:
        final = dynamic_segment(leaf_name)

    path = "/" + "/".join(segments) + "/" + final
    path = re.sub(r"/{2,}", "/", path)
    if path != "/":
        path = path.rstrip("/")
    return path


def _split(path: str) -> list[str]:
    return [p for p in path.replace("\\", "/").split("/") if p and p != "."]
