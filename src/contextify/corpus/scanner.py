"""Project traversal: which files to extract, and the directory tree string."""

from __future__ import annotations

import fnmatch
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath

logger = logging.getLogger("contextify.corpus")


@dataclass
class ScanResult:
    """Files selected for extraction, relative to `root` (posix-style)."""

    root: Path
    files: list[str] = field(default_factory=list)
    tree: str = ""


def scan_project(
    root: str | Path,
    exclude: list[str] | None = None,
    include: list[str] | None = None,
) -> ScanResult:
    """Walk a project in sorted order, applying include/exclude patterns.

    Patterns from the project's .gitignore are added to `exclude`. Excluded
    directories are not descended into.
    """
    root = Path(root).resolve()
    patterns = list(exclude or []) + read_gitignore(root)
    result = ScanResult(root=root)
    tree_lines: list[str] = []

    _walk(root, PurePosixPath(), patterns, list(include or []), result, tree_lines)

    result.tree = "".join(tree_lines)
    return result


def _walk(
    directory: Path,
    rel_dir: PurePosixPath,
    exclude: list[str],
    include: list[str],
    result: ScanResult,
    tree_lines: list[str],
) -> None:
    try:
        entries = sorted(os.scandir(directory), key=lambda e: e.name)
    except OSError as e:
        logger.warning("Cannot read directory %s: %s", directory, e)
        return

    for entry in entries:
        rel = rel_dir / entry.name
        rel_str = str(rel)
        try:
            is_dir = entry.is_dir(follow_symlinks=False)
        except OSError as e:
            logger.warning("Cannot stat %s: %s", rel_str, e)
            continue

        if should_exclude(rel_str, exclude, include):
            continue

        indent = "  " * (len(rel.parts) - 1)
        if is_dir:
            tree_lines.append(f"{indent}{entry.name}/\n")
            _walk(Path(entry.path), rel, exclude, include, result, tree_lines)
        else:
            tree_lines.append(f"{indent}{entry.name}\n")
            result.files.append(rel_str)


def _matches(pattern: str, path: str) -> bool:
    """Glob against the full path or any path component.

    Patterns containing a slash also match as a plain substring, so
    "src/generated" catches everything below that directory.
    """
    if fnmatch.fnmatch(path, pattern):
        return True
    for part in PurePosixPath(path).parts:
        if fnmatch.fnmatch(part, pattern):
            return True
    return "/" in pattern and pattern in path


def should_exclude(path: str, exclude: list[str], include: list[str]) -> bool:
    """Check if a relative path should be skipped.

    Include patterns, when given, act as a whitelist. Exclude patterns
    starting with "!" are negations that rescue an otherwise excluded path.
    """
    if include and not any(_matches(p, path) for p in include):
        return True

    negations = [p[1:] for p in exclude if p.startswith("!")]

    excluded = False
    for pattern in exclude:
        if not pattern or pattern.startswith("!"):
            continue
        if _matches(pattern, path):
            excluded = True
            break

    if not excluded:
        return False

    return not any(_matches(p, path) for p in negations)


def read_gitignore(root: Path) -> list[str]:
    """Read .gitignore patterns from the project root."""
    gitignore = root / ".gitignore"
    if not gitignore.exists():
        return []

    patterns = []
    try:
        for line in gitignore.read_text(encoding="utf-8", errors="replace").splitlines():
            line = line.strip()
            if line and not line.startswith("#"):
                # "build/" and "/build" should both match the path "build"
                line = line.rstrip("/")
                if line.startswith("/"):
                    line = line[1:]
                if line:
                    patterns.append(line)
    except OSError as e:
        logger.warning("Cannot read %s: %s", gitignore, e)
    return patterns
