"""Build the symbol/call graph from extracted Go units."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from contextify.graph.index import SymbolGraph
from contextify.parser.go_parser import parse_go_unit
from contextify.parser.models import Declaration, ParsedUnit

if TYPE_CHECKING:
    from contextify.context.models import SourceUnit

logger = logging.getLogger("contextify.graph")

ANALYZED_LANGUAGE = "go"


class GraphBuilder:
    """Builds the symbol graph for one run.

    Only units tagged as Go are analyzed. A unit that fails to parse is left
    out of the graph and keeps its baseline weight; nothing here raises.
    """

    def __init__(self, language: str = ANALYZED_LANGUAGE) -> None:
        self.language = language

    def build(self, units: Iterable[SourceUnit]) -> SymbolGraph:
        """Parse every analyzable unit and assemble the graph.

        Units are processed in path order so that declaration key collisions
        resolve the same way on every run (the later path wins).
        """
        graph = SymbolGraph()
        analyzable = sorted(
            (u for u in units if u.language == self.language),
            key=lambda u: u.path,
        )

        for unit in analyzable:
            graph.unit_count += 1
            parsed = parse_go_unit(unit.path, unit.source_bytes())
            if not parsed.ok:
                logger.debug("Skipping %s from graph: %s", unit.path, "; ".join(parsed.errors))
                graph.failed_units.append(unit.path)
                continue
            self._add_unit(graph, parsed)

        stats = graph.get_stats()
        logger.debug(
            "Symbol graph: %d declarations, %d call edges, %d collisions",
            stats["declarations"], stats["call_edges"], stats["collisions"],
        )
        return graph

    def _add_unit(self, graph: SymbolGraph, parsed: ParsedUnit) -> None:
        for decl in parsed.declarations:
            if not graph.add_declaration(decl):
                logger.debug(
                    "Declaration %s in %s overwrites an earlier one",
                    decl.qualified_name, decl.path,
                )

        for call in parsed.calls:
            enclosing = find_enclosing(parsed.declarations, call.offset)
            if enclosing is None:
                # e.g. a call in a package-level var initializer
                continue
            graph.add_call(enclosing.qualified_name, call.callee)


def find_enclosing(declarations: list[Declaration], offset: int) -> Declaration | None:
    """Return the top-level declaration whose byte range contains offset.

    Linear scan; per-file declaration counts are small.
    """
    for decl in declarations:
        if decl.contains(offset):
            return decl
    return None
