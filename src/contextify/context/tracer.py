"""Focus relevance tracing.

Starting from a focus symbol, relevance spreads along the call graph:

  Forward (bounded): rounds 0..depth of breadth-first expansion over callees.
    Every newly visited declaration adds FORWARD_BONUS to the weight of the
    unit that owns it.
  Backward (unbounded): once forward propagation is done, every
    (caller, callee) edge whose callee matches a visited declaration adds
    BACKWARD_BONUS to the caller's unit. This is counted per edge, so a caller
    of N visited functions gets N bonuses, at any distance from the focus.

Weights only go up. A unit owning no matched declaration keeps its weight.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass, field

from contextify.context.models import SourceUnit
from contextify.graph.index import SymbolGraph

logger = logging.getLogger("contextify.tracer")

FORWARD_BONUS = 1000
BACKWARD_BONUS = 500


@dataclass
class TraceResult:
    """What a trace touched, and the weight it handed out per unit path."""

    focus: str
    depth: int
    visited: dict[str, int] = field(default_factory=dict)  # key -> round reached
    forward: Counter = field(default_factory=Counter)  # path -> bonus
    backward: Counter = field(default_factory=Counter)  # path -> bonus
    rounds: int = 0

    @property
    def found(self) -> bool:
        return bool(self.visited)

    def increments(self) -> Counter:
        """Total weight increment per unit path."""
        total = Counter(self.forward)
        total.update(self.backward)
        return total


class FocusTracer:
    """Propagates focus relevance over a complete symbol graph."""

    def __init__(self, graph: SymbolGraph) -> None:
        self.graph = graph

    def trace(self, focus: str, depth: int) -> TraceResult:
        """Compute bonuses without touching any unit."""
        if depth < 0:
            raise ValueError(f"depth must be non-negative, got {depth}")

        result = TraceResult(focus=focus, depth=depth)
        if not focus:
            return result

        self._forward(result)
        self._backward(result)

        logger.debug(
            "Traced %r to depth %d: %d declarations visited in %d round(s)",
            focus, depth, len(result.visited), result.rounds,
        )
        return result

    def apply(self, units: Iterable[SourceUnit], focus: str, depth: int) -> TraceResult:
        """Trace and add the resulting bonuses to the owning units' weights."""
        result = self.trace(focus, depth)
        if not result.found:
            return result

        by_path = {u.path: u for u in units}
        for path, bonus in result.increments().items():
            unit = by_path.get(path)
            if unit is not None:
                unit.weight += bonus
        return result

    def _forward(self, result: TraceResult) -> None:
        frontier = [result.focus]
        for round_no in range(result.depth + 1):
            if not frontier:
                break
            result.rounds = round_no + 1
            next_frontier: list[str] = []
            for name in frontier:
                for key in self.graph.match(name):
                    if key in result.visited:
                        continue
                    result.visited[key] = round_no
                    result.forward[self.graph.owner(key)] += FORWARD_BONUS
                    next_frontier.extend(self.graph.callees(key))
            frontier = next_frontier

    def _backward(self, result: TraceResult) -> None:
        for caller, callee in self.graph.calls():
            owner = self.graph.owner(caller)
            if owner is None:
                continue
            if any(key in result.visited for key in self.graph.match(callee)):
                result.backward[owner] += BACKWARD_BONUS
