"""Read a single file into a SourceUnit."""

from __future__ import annotations

from pathlib import Path

from contextify.context.models import BINARY_WEIGHT, SourceUnit
from contextify.corpus.transforms import strip_comments
from contextify.parser.go_parser import summarize_go_source
from contextify.parser.models import detect_language

# Larger files are listed but their content is not embedded; their raw bytes
# are still kept for the symbol graph
MAX_CONTENT_BYTES = 1 << 20


def is_binary(data: bytes) -> bool:
    """Guess whether data is binary.

    Checks for ELF/PE headers, a NUL byte in the first 512 bytes, then the
    share of control characters in the first 1024 bytes (over 10% = binary).
    """
    if data[:4] == b"\x7fELF":
        return True
    if data[:2] == b"MZ":
        return True
    if b"\x00" in data[:512]:
        return True

    sample = data[:1024]
    if not sample:
        return False
    non_text = sum(1 for b in sample if b < 0x20 and b not in (0x09, 0x0A, 0x0D))
    return non_text * 100 // len(sample) > 10


def read_unit(
    root: Path,
    rel_path: str,
    strip: bool = False,
    summarize: bool = False,
) -> SourceUnit:
    """Read `root / rel_path` into a SourceUnit.

    Raises OSError if the file can't be read; the worker pool logs and skips.
    """
    data = (root / rel_path).read_bytes()
    size = len(data)

    if is_binary(data):
        return SourceUnit(
            path=rel_path,
            language="binary",
            content=f"<binary file omitted, {size} bytes>",
            size=size,
            weight=BINARY_WEIGHT,
        )

    language = detect_language(rel_path)

    if size > MAX_CONTENT_BYTES:
        return SourceUnit(
            path=rel_path,
            language=language,
            content=f"<file too large, {size} bytes, omitted>",
            size=size,
            raw=data,
        )

    content = data.decode("utf-8", errors="replace")
    if strip:
        content = strip_comments(content, language)

    unit = SourceUnit(
        path=rel_path,
        language=language,
        content=content,
        size=size,
        raw=data,
    )
    if summarize and language == "go":
        unit.ast = summarize_go_source(content.encode("utf-8"))
    return unit
