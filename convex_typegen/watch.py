"""Watch mode: regenerate on change with request coalescing.

A producer task forwards change batches from ``watchfiles.awatch`` onto an
asyncio.Queue. A single consumer task takes one batch, drains whatever
queued up meanwhile, and runs the synchronous generation in a worker
thread. Only one run is ever in flight, and a burst of changes arriving
during a run collapses into exactly one follow-up run.
"""

import asyncio
from collections.abc import AsyncIterator, Callable, Iterable
from pathlib import Path
from typing import Any

from watchfiles import DefaultFilter, awatch

from convex_typegen.config_runtime import GenerationConfig
from convex_typegen.indexer.core import is_reserved_dir
from convex_typegen.indexer.exceptions import TypegenError
from convex_typegen.runner import generate_types
from convex_typegen.utils.logging import logger

_STOP = object()


class ConvexSourceFilter(DefaultFilter):
    """Accept changes that can alter the generated module.

    That is the generation marker, the schema file, and function source
    files outside reserved directories.
    """

    def __init__(self, config: GenerationConfig):
        super().__init__()
        self.convex_dir = config.convex_dir.resolve()
        self.marker_path = config.marker_path.resolve()
        self.schema_file = config.schema_file
        self.extensions = config.extensions

    def __call__(self, change, path: str) -> bool:
        resolved = Path(path).resolve()
        if resolved == self.marker_path:
            return True
        if not super().__call__(change, path):
            return False
        try:
            relative = resolved.relative_to(self.convex_dir)
        except ValueError:
            return False
        if any(is_reserved_dir(part) for part in relative.parts[:-1]):
            return False
        name = relative.name
        return name == self.schema_file or (name.endswith(self.extensions) and not name.endswith(".d.ts"))


async def _produce(changes: AsyncIterator[Iterable[Any]], queue: asyncio.Queue) -> None:
    try:
        async for batch in changes:
            paths = {path for _change, path in batch}
            await queue.put(paths)
    finally:
        await queue.put(_STOP)


async def _consume(queue: asyncio.Queue, run: Callable[[], Any]) -> int:
    """Serve triggers one run at a time; returns the number of runs."""
    runs = 0
    stopping = False
    while not stopping:
        item = await queue.get()
        if item is _STOP:
            break

        changed = set(item)
        while not queue.empty():
            extra = queue.get_nowait()
            if extra is _STOP:
                stopping = True
                break
            changed |= extra

        if changed:
            logger.info(f"Convex files changed, regenerating types ({len(changed)} paths)")
            for path in sorted(changed):
                logger.debug(f"  changed: {path}")

        runs += 1
        try:
            await asyncio.to_thread(run)
        except TypegenError as e:
            logger.error(f"Type generation failed: {e}")
        except Exception:
            logger.opt(exception=True).error("Type generation crashed; waiting for the next change")
    return runs


async def coalesce(
    changes: AsyncIterator[Iterable[Any]],
    run: Callable[[], Any],
    initial_run: bool = True,
) -> int:
    """Run ``run`` once up front and then once per burst of ``changes``.

    Args:
        changes: Async stream of change batches (``(change, path)`` pairs)
        run: Synchronous generation callable
        initial_run: Queue one run before the first change arrives

    Returns:
        Number of runs performed once ``changes`` is exhausted
    """
    queue: asyncio.Queue = asyncio.Queue()
    if initial_run:
        queue.put_nowait(set())
    producer = asyncio.create_task(_produce(changes, queue))
    try:
        return await _consume(queue, run)
    finally:
        producer.cancel()
        try:
            await producer
        except asyncio.CancelledError:
            pass


def watch_and_regenerate(config: GenerationConfig, stop_event: asyncio.Event | None = None) -> int:
    """Generate once, then regenerate on every relevant change until interrupted."""
    changes = awatch(
        config.convex_dir,
        watch_filter=ConvexSourceFilter(config),
        debounce=config.debounce_ms,
        stop_event=stop_event,
    )
    logger.info(f"Watching {config.convex_dir} for changes")
    return asyncio.run(coalesce(changes, lambda: generate_types(config)))
