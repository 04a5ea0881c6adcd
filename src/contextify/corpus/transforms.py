"""Textual transforms applied to file content before rendering."""

from __future__ import annotations

import re

_C_LINE = re.compile(r"//.*$", re.MULTILINE)
_C_BLOCK = re.compile(r"/\*.*?\*/", re.DOTALL)
_HASH_LINE = re.compile(r"#.*$", re.MULTILINE)
_MARKUP = re.compile(r"<!--.*?-->", re.DOTALL)
_SQL_LINE = re.compile(r"--.*$", re.MULTILINE)

_C_FAMILY = {
    "go", "java", "javascript", "typescript", "c", "cpp", "csharp",
    "rust", "swift", "kotlin", "scala",
}
_HASH_FAMILY = {"python", "ruby", "shell", "bash", "zsh", "powershell", "yaml", "r"}
_MARKUP_FAMILY = {"html", "xml"}
_CSS_FAMILY = {"css", "scss", "sass", "less"}


def strip_comments(content: str, language: str) -> str:
    """Remove comments with per-language regex heuristics, then drop blank lines.

    Deliberately naive: comment markers inside string literals are stripped
    too (e.g. a URL's `//`).
    """
    if language in _C_FAMILY:
        content = _C_LINE.sub("", content)
        content = _C_BLOCK.sub("", content)
    elif language in _HASH_FAMILY:
        content = _HASH_LINE.sub("", content)
    elif language in _MARKUP_FAMILY:
        content = _MARKUP.sub("", content)
    elif language in _CSS_FAMILY:
        content = _C_BLOCK.sub("", content)
    elif language == "sql":
        content = _SQL_LINE.sub("", content)
        content = _C_BLOCK.sub("", content)

    lines = (line.rstrip(" \t") for line in content.split("\n"))
    return "\n".join(line for line in lines if line.strip())
