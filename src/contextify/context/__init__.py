"""Relevance tracing and token budgeting over extracted source units.

The end-to-end pipeline lives in `contextify.context.engine`:

    from contextify.config import ExtractConfig
    from contextify.context.engine import ContextExtractor

    extractor = ContextExtractor(ExtractConfig(path=".", focus="Parse", max_tokens=8000))
    package = extractor.extract()
"""

from contextify.context.budget import Selection, select_within_budget
from contextify.context.models import ContextPackage, SourceUnit, TokenEstimator
from contextify.context.tracer import FocusTracer, TraceResult

__all__ = [
    "ContextPackage",
    "FocusTracer",
    "Selection",
    "SourceUnit",
    "TokenEstimator",
    "TraceResult",
    "select_within_budget",
]
