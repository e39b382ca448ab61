"""Warren application — generate, build, watch.

``generate`` returns the route tree, ``build`` writes it as a JSON
manifest, ``watch`` rewrites the manifest whenever the views, layouts or
config change.
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from warren.config_loader import load_config
from warren.routes.generate import generate_routes
from warren.sources import discover_layouts, discover_pages

if TYPE_CHECKING:
    from warren.config import WarrenConfig
    from warren.export.manifest import ExportResult
    from warren.observability.collector import RouteCollector
    from warren.routes.tree import RouteNode


async def generate_from_config(
    config: WarrenConfig,
    collector: RouteCollector | None = None,
) -> list[RouteNode]:
    """Enumerate the project's pages and layouts and run one generation pass."""
    pages = discover_pages(config)
    layouts = discover_layouts(config)
    return await generate_routes(pages, layouts, config=config, collector=collector)


def generate(root: str | Path = ".", **kwargs: object) -> list[RouteNode]:
    """Generate the route tree for the project at *root*.

    Args:
        root: Project root directory.
        **kwargs: Override WarrenConfig fields.

    """
    config = load_config(Path(root), **kwargs)
    return asyncio.run(generate_from_config(config))


def build(root: str | Path = ".", **kwargs: object) -> ExportResult:
    """Generate the route tree and write it as a JSON manifest.

    Args:
        root: Project root directory.
        **kwargs: Override WarrenConfig fields.

    """
    from warren.export.manifest import write_manifest
    from warren.observability import EventLog, RouteCollector

    config = load_config(Path(root), **kwargs)
    collector = RouteCollector(EventLog())
    routes = asyncio.run(generate_from_config(config, collector))
    result = write_manifest(routes, config.output_path)
    _print_build_summary(result, collector)
    return result


def routes(root: str | Path = ".", **kwargs: object) -> None:
    """Print the route tree for the project at *root* to stdout."""
    from warren.export.outline import format_tree

    print(format_tree(generate(root, **kwargs)))


def watch(root: str | Path = ".", **kwargs: object) -> None:
    """Rebuild the route manifest on every relevant change until interrupted."""
    config = load_config(Path(root), **kwargs)
    try:
        asyncio.run(_watch(config))
    except KeyboardInterrupt:
        print("\n  Stopped watching.", file=sys.stderr)


async def _watch(config: WarrenConfig) -> None:
    from warren.export.manifest import write_manifest
    from warren.observability import EventLog, RouteCollector
    from warren.watcher import RouteWatcher

    async def rebuild() -> None:
        collector = RouteCollector(EventLog())
        tree = await generate_from_config(config, collector)
        result = write_manifest(tree, config.output_path)
        _print_build_summary(result, collector)

    await rebuild()

    watcher = RouteWatcher(config)
    watcher.start()
    print(f"  Watching {config.root} for changes...", file=sys.stderr)
    try:
        async for batch in watcher.changes():
            names = ", ".join(sorted({event.path.name for event in batch}))
            print(f"  Changed: {names}", file=sys.stderr)
            try:
                await rebuild()
            except Exception as exc:
                print(f"  Generation error: {exc}", file=sys.stderr)
    finally:
        watcher.stop()


def _print_build_summary(result: ExportResult, collector: RouteCollector) -> None:
    """Print build completion summary to stderr."""
    from warren.observability.events import (
        ExtractionFailed,
        GenerationFinished,
        LayoutConflict,
        PageSkipped,
    )

    log = collector.log
    counts = log.stats()["by_type"]
    skipped = log.query(event_type=PageSkipped, limit=len(log) or 1)
    conflicts = log.query(event_type=LayoutConflict, limit=len(log) or 1)
    failed = counts.get(ExtractionFailed.__name__, 0)

    lines = [
        "",
        "─" * 41,
        f"  Generated {result.route_count} route{'s' if result.route_count != 1 else ''}",
    ]
    for event in reversed(skipped):
        lines.append(f"  Skipped {event.path}: {event.reason}")
    if failed:
        lines.append(f"  Ignored {failed} unreadable config{'s' if failed != 1 else ''}")
    for event in reversed(conflicts):
        lines.append(
            f"  Layout conflict: {event.path} wants {event.requested}, "
            f"{event.parent_path} uses {event.chosen}"
        )
    lines.append(f"  Output: {result.output_path}")
    finished = log.query(event_type=GenerationFinished, limit=1)
    total_ms = result.duration_ms + (finished[0].duration_ms if finished else 0.0)
    lines.append(f"  Done in {total_ms:.0f}ms")

    print("\n".join(lines), file=sys.stderr)
