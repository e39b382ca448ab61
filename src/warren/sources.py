"""Source enumeration — pages and layouts on disk.

Scans a project's ``views/`` directory for page files and its
``layouts/`` directory for wrapping layouts::

    views/index.vue              -> SourcePage("views/index.vue")
    views/admin/index.vue        -> SourcePage(..., config_file="views/admin/route.json")
    layouts/AdminLayout.vue      -> Layout("AdminLayout")

Pages are enumerated fresh on every call and load their text lazily.
Layouts are read eagerly into a read-only registry.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING

from warren._errors import ConfigError
from warren.routes.extract import SIBLING_FORMATS

if TYPE_CHECKING:
    from collections.abc import Mapping

    from warren._types import ComponentLoader, ContentLoader, LayoutName
    from warren.config import WarrenConfig

logger = logging.getLogger("warren.sources")

type LayoutRegistry = Mapping[LayoutName, Layout]


@dataclass(frozen=True, slots=True)
class SourcePage:
    """One discovered page.

    Attributes:
        file_path: Slash-separated path rooted at the views directory
            (e.g., ``views/admin/users.vue``).
        content_loader: Returns the page's raw text.
        component_loader: Returns the unit a runtime mounts for the route.
            Never invoked during generation.
        config_file: Path of the sibling declarative file, if any.
        config_loader: Returns the sibling file's raw text.

    """

    file_path: str
    content_loader: ContentLoader
    component_loader: ComponentLoader
    config_file: str | None = None
    config_loader: ContentLoader | None = None


@dataclass(slots=True)
class PageComponent:
    """Deferred reference to a page file.

    Reads the file on first call and returns the cached text afterwards.
    Two references to the same file compare equal.
    """

    source: str
    path: Path
    _loaded: str | None = field(default=None, repr=False, compare=False)

    async def __call__(self) -> str:
        if self._loaded is None:
            self._loaded = await _read_text(self.path)
        return self._loaded


@dataclass(frozen=True, slots=True)
class Layout:
    """An eagerly loaded wrapping layout.

    Attributes:
        name: Layout identifier (file stem, e.g. ``AdminLayout``).
        source: Slash-separated path rooted at the project root.
        content: Raw layout text.

    """

    name: str
    source: str
    content: str = field(repr=False)


def discover_pages(config: WarrenConfig) -> tuple[SourcePage, ...]:
    """Enumerate the page files under the views directory.

    Pages are returned in sorted path order.  Hidden files and directories
    are skipped.  Index pages are paired with the first sibling
    declarative file found next to them.

    Raises:
        ConfigError: If the views directory does not exist.

    """
    views = config.views_path
    if not views.is_dir():
        msg = f"Views directory not found: {views}"
        raise ConfigError(msg)

    pages: list[SourcePage] = []
    for file in sorted(views.rglob("*" + config.page_suffix)):
        if not file.is_file():
            continue
        rel = file.relative_to(views)
        if any(part.startswith(".") for part in rel.parts):
            continue

        file_path = Path(config.views_dir, rel).as_posix()
        config_file, config_loader = _sibling_config(file, config)
        pages.append(SourcePage(
            file_path=file_path,
            content_loader=_text_loader(file),
            component_loader=PageComponent(source=file_path, path=file),
            config_file=config_file,
            config_loader=config_loader,
        ))

    logger.debug("Discovered %d page(s) under %s", len(pages), views)
    return tuple(pages)


def discover_layouts(config: WarrenConfig) -> LayoutRegistry:
    """Read every layout file into a read-only registry keyed by stem.

    Returns an empty registry when the layouts directory does not exist.

    """
    layouts_dir = config.layouts_path
    registry: dict[str, Layout] = {}
    if not layouts_dir.is_dir():
        logger.debug("No layouts directory at %s", layouts_dir)
        return MappingProxyType(registry)

    for file in sorted(layouts_dir.glob("*" + config.page_suffix)):
        if not file.is_file() or file.name.startswith("."):
            continue
        source = Path(config.layouts_dir, file.name).as_posix()
        registry[file.stem] = Layout(
            name=file.stem,
            source=source,
            content=file.read_text(encoding="utf-8"),
        )

    return MappingProxyType(registry)


def _sibling_config(file: Path, config: WarrenConfig) -> tuple[str | None, ContentLoader | None]:
    """Find the declarative file next to an index page."""
    if file.stem != "index":
        return None, None
    for suffix in SIBLING_FORMATS:
        candidate = file.with_name(config.route_file + suffix)
        if candidate.is_file():
            rel = candidate.relative_to(config.views_path)
            return Path(config.views_dir, rel).as_posix(), _text_loader(candidate)
    return None, None


def _text_loader(path: Path) -> ContentLoader:
    async def load() -> str:
        return await _read_text(path)

    return load


async def _read_text(path: Path) -> str:
    return await asyncio.to_thread(path.read_text, encoding="utf-8")
