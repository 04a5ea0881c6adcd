"""Concurrent per-file extraction.

Workers pull relative paths from a shared work queue and publish SourceUnits
to a shared result queue. A coordinator thread joins every worker and only
then posts the completion marker, so the consumer knows the result set is
complete before any graph analysis starts.
"""

from __future__ import annotations

import logging
import queue
import threading
from collections.abc import Callable, Sequence
from pathlib import Path

from contextify.context.models import SourceUnit
from contextify.corpus.reader import read_unit

logger = logging.getLogger("contextify.corpus")

_DONE = object()

ReadFn = Callable[[Path, str], SourceUnit]


def extract_units(
    root: Path,
    rel_paths: Sequence[str],
    workers: int,
    strip: bool = False,
    summarize: bool = False,
    read_fn: ReadFn | None = None,
    progress_callback: Callable[[str, int, int], None] | None = None,
) -> list[SourceUnit]:
    """Read every path on a pool of `workers` threads.

    Args:
        root: Project root the paths are relative to.
        rel_paths: Files to read.
        workers: Number of worker threads (must be positive).
        strip: Strip comments from content.
        summarize: Attach structural summaries to Go units.
        read_fn: Override for reading one file; defaults to read_unit.
        progress_callback: Optional callback(path, done, total), called from
            the consuming thread.

    Returns:
        The extracted units sorted by path. Files that fail to read are
        logged and left out.
    """
    if workers <= 0:
        raise ValueError(f"workers must be positive, got {workers}")

    if read_fn is None:
        def read_fn(r: Path, p: str) -> SourceUnit:
            return read_unit(r, p, strip=strip, summarize=summarize)

    work: queue.Queue = queue.Queue()
    results: queue.Queue = queue.Queue()
    for path in rel_paths:
        work.put(path)

    def worker() -> None:
        while True:
            try:
                path = work.get_nowait()
            except queue.Empty:
                return
            try:
                unit = read_fn(root, path)
            except Exception as e:
                logger.warning("Failed to process %s: %s", path, e)
                continue
            results.put(unit)

    threads = [
        threading.Thread(target=worker, name=f"contextify-worker-{i}", daemon=True)
        for i in range(min(workers, max(len(rel_paths), 1)))
    ]
    for t in threads:
        t.start()

    def coordinator() -> None:
        for t in threads:
            t.join()
        results.put(_DONE)

    threading.Thread(target=coordinator, name="contextify-coordinator", daemon=True).start()

    units: list[SourceUnit] = []
    total = len(rel_paths)
    while True:
        item = results.get()
        if item is _DONE:
            break
        units.append(item)
        if progress_callback:
            progress_callback(item.path, len(units), total)

    units.sort(key=lambda u: u.path)
    return units
