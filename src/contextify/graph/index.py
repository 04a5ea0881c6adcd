"""Symbol graph: declaration index plus textual call graph."""

from __future__ import annotations

from bisect import bisect_left

import networkx as nx

from contextify.parser.models import Declaration


class SymbolGraph:
    """Declarations and caller -> callee edges for one run.

    Nodes are qualified declaration names and raw callee strings. Declaration
    nodes carry `type="declaration"` plus their location; callee strings that
    never resolved to a declaration are bare nodes. Edges are `kind="calls"`.

    Lookups follow the focus matching rule: a candidate name matches every
    declaration key that ends with it, so "Start" matches "Start",
    "*Server.Start" and "Restart". That is served from a sorted list of
    reversed keys, which turns each suffix lookup into a prefix range search.
    """

    def __init__(self, graph: nx.DiGraph | None = None) -> None:
        self.graph = graph if graph is not None else nx.DiGraph()
        self.collisions: list[str] = []
        self.failed_units: list[str] = []
        self.unit_count = 0
        self._reversed_keys: list[str] | None = None

    # -------------------------------------------------------------------
    # Construction (used by the builder)
    # -------------------------------------------------------------------

    def add_declaration(self, decl: Declaration) -> bool:
        """Add or overwrite a declaration. Returns False on a key collision."""
        key = decl.qualified_name
        collided = self.is_declaration(key)
        # Last write wins; edges already recorded under this key are kept.
        self.graph.add_node(
            key,
            type="declaration",
            path=decl.path,
            start=decl.start,
            end=decl.end,
        )
        self._reversed_keys = None
        if collided:
            self.collisions.append(key)
        return not collided

    def add_call(self, caller: str, callee: str) -> None:
        self.graph.add_edge(caller, callee, kind="calls")

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------

    def is_declaration(self, name: str) -> bool:
        return self.graph.nodes.get(name, {}).get("type") == "declaration"

    def declarations(self) -> list[str]:
        """All declaration keys, sorted."""
        return sorted(
            n for n, data in self.graph.nodes(data=True)
            if data.get("type") == "declaration"
        )

    def owner(self, name: str) -> str | None:
        """Path of the unit owning a declaration key."""
        data = self.graph.nodes.get(name)
        if not data or data.get("type") != "declaration":
            return None
        return data["path"]

    def callees(self, name: str) -> list[str]:
        """Callee names recorded for a caller, sorted for stable traversal."""
        if not self.graph.has_node(name):
            return []
        return sorted(self.graph.successors(name))

    def calls(self) -> list[tuple[str, str]]:
        """Every (caller, callee) pair in the call graph, sorted."""
        return sorted(self.graph.edges())

    def match(self, candidate: str) -> list[str]:
        """Declaration keys matching a candidate name by exact or suffix match."""
        if not candidate:
            return []
        if self._reversed_keys is None:
            self._reversed_keys = sorted(key[::-1] for key in self.declarations())

        prefix = candidate[::-1]
        keys = self._reversed_keys
        matches = []
        i = bisect_left(keys, prefix)
        while i < len(keys) and keys[i].startswith(prefix):
            matches.append(keys[i][::-1])
            i += 1
        return sorted(matches)

    def get_stats(self) -> dict:
        """Get graph statistics."""
        declarations = self.declarations()
        resolved = sum(
            1 for _, callee in self.graph.edges() if self.is_declaration(callee)
        )
        return {
            "units": self.unit_count,
            "failed_units": len(self.failed_units),
            "declarations": len(declarations),
            "methods": sum(1 for d in declarations if "." in d),
            "call_edges": self.graph.number_of_edges(),
            "resolved_calls": resolved,
            "collisions": len(self.collisions),
        }
