"""Context extraction pipeline.

  1. Scan the project tree (include/exclude, .gitignore)
  2. Read files on a worker pool; wait for every worker (barrier)
  3. Build the symbol/call graph from Go units        [--ast or --focus]
  4. Trace focus relevance onto unit weights          [--focus]
  5. Estimate tokens for the whole package
  6. Greedy budget selection                          [--max-tokens, if over]

Steps 3-6 run single-threaded on the complete unit list.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from contextify.config import ExtractConfig
from contextify.context.budget import Selection, select_within_budget
from contextify.context.models import ContextPackage, SourceUnit
from contextify.context.tracer import FocusTracer, TraceResult
from contextify.corpus.pool import extract_units
from contextify.corpus.scanner import scan_project
from contextify.graph.builder import GraphBuilder
from contextify.graph.index import SymbolGraph

logger = logging.getLogger("contextify.engine")


class ContextExtractor:
    """Runs the full extraction for one project.

    Usage:
        extractor = ContextExtractor(ExtractConfig(path=".", focus="Parse"))
        package = extractor.extract()
    """

    def __init__(self, config: ExtractConfig) -> None:
        self.config = config
        self.graph: SymbolGraph | None = None
        self.trace: TraceResult | None = None
        self.selection: Selection | None = None

    def extract(
        self, progress_callback: Callable[[str, int, int], None] | None = None
    ) -> ContextPackage:
        """Extract a context package from the configured project path."""
        cfg = self.config
        scan = scan_project(cfg.path, exclude=cfg.exclude, include=cfg.include)
        logger.debug("Scanned %s: %d files", scan.root, len(scan.files))

        units = extract_units(
            scan.root,
            scan.files,
            workers=cfg.workers,
            strip=cfg.strip_comments,
            summarize=cfg.ast,
            progress_callback=progress_callback,
        )

        package = ContextPackage(
            project_path=str(scan.root),
            tree_structure=scan.tree,
            files=units,
        )

        if cfg.ast or cfg.focus:
            self.graph, self.trace = analyze_units(units, cfg.focus, cfg.depth)

        package.refresh_totals()

        if cfg.max_tokens > 0 and package.estimated_tokens > cfg.max_tokens:
            self.selection = apply_budget(package, cfg.max_tokens)

        return package


def analyze_units(
    units: list[SourceUnit], focus: str, depth: int
) -> tuple[SymbolGraph, TraceResult | None]:
    """Build the symbol graph and, when a focus is given, apply its weights."""
    graph = GraphBuilder().build(units)
    if not focus:
        return graph, None

    trace = FocusTracer(graph).apply(units, focus, depth)
    if not trace.found:
        logger.warning("Focus symbol %r matched no declarations", focus)
    return graph, trace


def apply_budget(package: ContextPackage, max_tokens: int) -> Selection:
    """Replace the package's files with a selection that fits `max_tokens`."""
    selection = select_within_budget(package.files, max_tokens)
    package.files = list(selection.units)
    package.truncated = selection.truncated
    package.refresh_totals()
    return selection
