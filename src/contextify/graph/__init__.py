"""Symbol and call graph for focus tracing."""

from contextify.graph.builder import GraphBuilder
from contextify.graph.index import SymbolGraph

__all__ = ["GraphBuilder", "SymbolGraph"]
