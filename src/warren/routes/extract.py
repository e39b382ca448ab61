"""Per-route config extraction.

Two independent, optional sources feed a page's route descriptor:

- the embedded ``<route>`` block of the page itself (JSON by default,
  YAML with ``lang="yaml"``)
- the sibling declarative file (``route.json``, ``route.yaml``,
  ``route.yml`` or ``route.toml``) next to a directory's index page

Every extraction returns ``Ok(mapping)`` or ``Failed(reason)``; nothing
here raises to the caller.  Absence of a source is ``Ok({})``.
"""

from __future__ import annotations

import json
import tomllib
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import yaml

from warren._errors import ExtractionError
from warren.routes.blocks import find_block, parse_blocks

if TYPE_CHECKING:
    from collections.abc import Mapping

    from warren.sources import SourcePage

ROUTE_BLOCK = "route"

# Sibling file suffix -> decoder format, in lookup order
SIBLING_FORMATS: dict[str, str] = {
    ".json": "json",
    ".yaml": "yaml",
    ".yml": "yaml",
    ".toml": "toml",
}

_BLOCK_LANGS: dict[str, str] = {
    "json": "json",
    "yaml": "yaml",
    "yml": "yaml",
}


@dataclass(frozen=True, slots=True)
class Ok:
    """A successful extraction; *value* is empty when the source is absent."""

    value: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class Failed:
    """A failed extraction with the error that caused it."""

    reason: ExtractionError


type Extraction = Ok | Failed


def or_empty(result: Extraction) -> dict[str, Any]:
    """Collapse a result to its mapping, treating failure as empty."""
    if isinstance(result, Ok):
        return dict(result.value)
    return {}


def decode_config(text: str, fmt: str) -> Extraction:
    """Decode *text* as ``json``, ``yaml`` or ``toml`` into a mapping."""
    try:
        if fmt == "json":
            data = json.loads(text) if text.strip() else {}
        elif fmt == "yaml":
            data = yaml.safe_load(text) or {}
        elif fmt == "toml":
            data = tomllib.loads(text)
        else:
            return Failed(ExtractionError(f"Unsupported config format {fmt!r}"))
    except (ValueError, yaml.YAMLError) as exc:
        return Failed(ExtractionError(f"Malformed {fmt} payload: {exc}"))

    if not isinstance(data, dict):
        return Failed(ExtractionError(f"Expected a mapping, got {type(data).__name__}"))
    return Ok(data)


def decode_route_block(raw: str | None) -> Extraction:
    """Extract and decode the first ``<route>`` block of a page source."""
    if raw is None:
        return Failed(ExtractionError("Page content is missing"))
    try:
        blocks = parse_blocks(raw)
    except ExtractionError as exc:
        return Failed(exc)

    block = find_block(blocks, ROUTE_BLOCK)
    if block is None:
        return Ok()

    lang = (block.lang or "json").lower()
    fmt = _BLOCK_LANGS.get(lang)
    if fmt is None:
        return Failed(ExtractionError(f"Unsupported <route> block lang {lang!r}"))
    return decode_config(block.content, fmt)


async def extract_route_block(page: SourcePage) -> Extraction:
    """Load a page's raw text and decode its ``<route>`` block.

    Exceptions from the content loader propagate; the caller drops the page.
    """
    raw = await page.content_loader()
    return decode_route_block(raw)


async def load_sibling_config(page: SourcePage) -> Extraction:
    """Load and decode the page's sibling declarative file, if it has one."""
    if page.config_file is None or page.config_loader is None:
        return Ok()

    suffix = page.config_file[page.config_file.rfind("."):]
    fmt = SIBLING_FORMATS.get(suffix)
    if fmt is None:
        return Failed(ExtractionError(f"Unsupported config file {page.config_file}"))

    text = await page.config_loader()
    if text is None:
        return Ok()
    return decode_config(text, fmt)
