"""File watcher — triggers a fresh generation pass on source changes.

Monitors the views directory, the layouts directory and the project
config file.  Every relevant change means the whole route tree is
regenerated; no state is carried between passes.
"""

from __future__ import annotations

import asyncio
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Literal

from watchfiles import Change

from warren.config_loader import CONFIG_FILES

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from warren.config import WarrenConfig

type ChangeCategory = Literal["view", "layout", "config"]


@dataclass(frozen=True, slots=True)
class ChangeEvent:
    """A file change detected by the watcher.

    Attributes:
        path: Absolute path to the changed file.
        kind: Type of filesystem change.
        category: Which part of the project changed.

    """

    path: Path
    kind: Literal["created", "modified", "deleted"]
    category: ChangeCategory


_CHANGE_KIND_MAP: dict[Change, Literal["created", "modified", "deleted"]] = {
    Change.added: "created",
    Change.modified: "modified",
    Change.deleted: "deleted",
}


def categorize_change(path: Path, config: WarrenConfig) -> ChangeCategory | None:
    """Determine the category of a changed file based on its location.

    Returns None if the file does not affect the route tree.

    """
    try:
        rel = path.relative_to(config.root)
    except ValueError:
        return None

    parts = rel.parts
    if not parts:
        return None

    if len(parts) == 1:
        return "config" if parts[0] in CONFIG_FILES else None

    if any(part.startswith(".") for part in parts):
        return None

    if path.is_relative_to(config.views_path):
        if path.suffix == config.page_suffix or path.stem == config.route_file:
            return "view"
        return None
    if path.is_relative_to(config.layouts_path) and path.suffix == config.page_suffix:
        return "layout"
    return None


class RouteWatcher:
    """Watches the project for changes that affect the route tree.

    Runs watchfiles in a background thread and bridges events to an
    asyncio queue.  Must be started from within a running event loop.

    """

    def __init__(self, config: WarrenConfig) -> None:
        self._config = config
        self._queue: asyncio.Queue[ChangeEvent] = asyncio.Queue()
        self._loop: asyncio.AbstractEventLoop | None = None
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def is_running(self) -> bool:
        """Whether the watcher background thread is active."""
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start watching in a background thread."""
        if self.is_running:
            return

        self._loop = asyncio.get_running_loop()
        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._watch_loop,
            name="warren-watcher",
            daemon=True,
        )
        self._thread.start()

    def stop(self) -> None:
        """Signal the watcher to stop and wait for the thread to finish."""
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout=5.0)
            self._thread = None

    async def changes(self) -> AsyncIterator[list[ChangeEvent]]:
        """Yield batches of changes, one batch per debounced burst."""
        while self.is_running or not self._queue.empty():
            try:
                first = await asyncio.wait_for(self._queue.get(), timeout=0.5)
            except TimeoutError:
                continue
            batch = [first]
            while not self._queue.empty():
                batch.append(self._queue.get_nowait())
            yield batch

    def _watch_loop(self) -> None:
        """Background thread: run watchfiles and push events to the queue."""
        from watchfiles import watch

        loop = self._loop
        if loop is None:
            return

        for raw_changes in watch(
            self._config.root,
            stop_event=self._stop_event,
            debounce=300,
            step=100,
        ):
            for change_type, path_str in raw_changes:
                path = Path(path_str)
                category = categorize_change(path, self._config)
                if category is None:
                    continue

                kind = _CHANGE_KIND_MAP.get(change_type, "modified")
                event = ChangeEvent(path=path, kind=kind, category=category)
                loop.call_soon_threadsafe(self._queue.put_nowait, event)
