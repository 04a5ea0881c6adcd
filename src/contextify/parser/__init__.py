"""Go source parsing for Contextify."""

from contextify.parser.go_parser import parse_go_unit, summarize_go_source
from contextify.parser.models import (
    ASTSummary,
    CallSite,
    Declaration,
    ParsedUnit,
    detect_language,
)

__all__ = [
    "ASTSummary",
    "CallSite",
    "Declaration",
    "ParsedUnit",
    "detect_language",
    "parse_go_unit",
    "summarize_go_source",
]
