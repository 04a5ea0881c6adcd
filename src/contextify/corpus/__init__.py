"""Corpus provider: find, read and pre-process project files."""

from contextify.corpus.pool import extract_units
from contextify.corpus.reader import is_binary, read_unit
from contextify.corpus.scanner import ScanResult, scan_project, should_exclude
from contextify.corpus.transforms import strip_comments

__all__ = [
    "ScanResult",
    "extract_units",
    "is_binary",
    "read_unit",
    "scan_project",
    "should_exclude",
    "strip_comments",
]
