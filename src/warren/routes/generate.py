"""Route generation pass.

Turns an explicit page list and layout registry into a route tree::

    pages = discover_pages(config)
    layouts = discover_layouts(config)
    routes = await generate_routes(pages, layouts, config=config)

Each page is processed independently (config extraction, path
normalization, meta merge) and concurrently.  Placement in the tree then
happens in discovery order on the coordinating coroutine.  A page that
fails is logged and dropped; the rest of the pass continues.
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from warren.config import WarrenConfig
from warren.routes.extract import Failed, extract_route_block, load_sibling_config, or_empty
from warren.routes.meta import RouteDescriptor, merge_descriptor
from warren.routes.paths import NormalizedPath, normalize_page_path
from warren.routes.tree import LayoutConflictError, RouteNode, RouteTreeBuilder

if TYPE_CHECKING:
    from collections.abc import Sequence

    from warren._types import ConfigSource
    from warren.observability.collector import RouteCollector
    from warren.routes.extract import Extraction
    from warren.sources import LayoutRegistry, SourcePage

logger = logging.getLogger("warren.routes")


@dataclass(frozen=True, slots=True)
class ProcessedPage:
    """A page ready for placement in the tree."""

    page: SourcePage
    normalized: NormalizedPath
    descriptor: RouteDescriptor


async def generate_routes(
    pages: Sequence[SourcePage],
    layouts: LayoutRegistry,
    *,
    config: WarrenConfig | None = None,
    collector: RouteCollector | None = None,
) -> list[RouteNode]:
    """Build the route tree for *pages*.

    Args:
        pages: Pages in discovery order.
        layouts: Layout registry for synthesized parents.
        config: Naming conventions and defaults.
        collector: Optional event collector.

    Returns:
        Top-level routes, with exactly one route at ``/``.

    Raises:
        LayoutConflictError: In strict mode, when sibling pages disagree
            on their parent's layout.

    """
    config = config if config is not None else WarrenConfig()
    t0 = time.perf_counter()

    processed = await asyncio.gather(
        *(process_page(page, config, collector) for page in pages),
    )

    builder = RouteTreeBuilder(
        layouts,
        strict_layouts=config.strict_layouts,
        collector=collector,
    )
    skipped = sum(1 for item in processed if item is None)

    for item in processed:
        if item is None:
            continue
        try:
            builder.add(
                item.page.file_path,
                item.normalized,
                item.descriptor,
                item.page.component_loader,
            )
        except LayoutConflictError:
            raise
        except Exception as exc:
            skipped += 1
            _skip(item.page, exc, collector)

    builder.complete_root(config.default_redirect)
    routes = builder.routes

    duration_ms = (time.perf_counter() - t0) * 1000
    logger.debug(
        "Generated %d route(s) from %d page(s) in %.1fms (%d skipped)",
        len(routes), len(pages), duration_ms, skipped,
    )
    if collector is not None:
        collector.record_finished(
            page_count=len(pages),
            route_count=len(routes),
            skipped=skipped,
            duration_ms=duration_ms,
        )
    return routes


async def process_page(
    page: SourcePage,
    config: WarrenConfig,
    collector: RouteCollector | None = None,
) -> ProcessedPage | None:
    """Extract, normalize and merge one page.

    Returns None (after logging) if processing the page fails.

    """
    try:
        normalized = normalize_page_path(
            page.file_path,
            views_dir=config.views_dir,
            suffix=config.page_suffix,
        )
        block_result, sibling_result = await asyncio.gather(
            extract_route_block(page),
            load_sibling_config(page),
        )
        block = _settle(page, "block", block_result, collector)
        sibling = _settle(page, "sibling", sibling_result, collector)
        descriptor = merge_descriptor(normalized, sibling, block, config)
    except Exception as exc:
        _skip(page, exc, collector)
        return None

    return ProcessedPage(page=page, normalized=normalized, descriptor=descriptor)


def _settle(
    page: SourcePage,
    source: ConfigSource,
    result: Extraction,
    collector: RouteCollector | None,
) -> dict[str, Any]:
    """Log a failed extraction and fall back to an empty mapping."""
    if isinstance(result, Failed):
        logger.warning("Ignoring %s config for %s: %s", source, page.file_path, result.reason)
        if collector is not None:
            collector.record_extraction_failed(page.file_path, source, str(result.reason))
    return or_empty(result)


def _skip(page: SourcePage, exc: Exception, collector: RouteCollector | None) -> None:
    logger.error("Failed to process route %s: %s", page.file_path, exc)
    if collector is not None:
        collector.record_skipped(page.file_path, str(exc))
