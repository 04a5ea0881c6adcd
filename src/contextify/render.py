"""Serialize a context package to Markdown, JSON or YAML."""

from __future__ import annotations

import json
from datetime import datetime, timezone

import yaml

from contextify.context.models import ContextPackage, SourceUnit
from contextify.exceptions import RenderError

_EXTENSIONS = {
    "markdown": "md",
    "md": "md",
    "json": "json",
    "yaml": "yaml",
    "yml": "yaml",
}


def render(package: ContextPackage, fmt: str) -> str:
    """Render the package in the requested format (case-insensitive)."""
    fmt = fmt.lower()
    if fmt in ("markdown", "md"):
        return render_markdown(package)
    if fmt == "json":
        return render_json(package)
    if fmt in ("yaml", "yml"):
        return render_yaml(package)
    raise RenderError(f"unsupported format: {fmt}")


def default_output_name(fmt: str, now: datetime | None = None) -> str:
    """Timestamped file name used when no --output is given."""
    ext = _EXTENSIONS.get(fmt.lower(), "md")
    stamp = (now or datetime.now(timezone.utc)).strftime("%Y%m%d_%H%M%S")
    return f"contextify-{stamp}.{ext}"


def render_json(package: ContextPackage) -> str:
    return json.dumps(package.to_dict(), indent=2, ensure_ascii=False)


def render_yaml(package: ContextPackage) -> str:
    return yaml.safe_dump(
        package.to_dict(), sort_keys=False, allow_unicode=True, default_flow_style=False
    )


def render_markdown(package: ContextPackage, now: datetime | None = None) -> str:
    """Render a human-friendly Markdown document.

    Layout: header stats, directory tree, then one section per language with
    each file's optional summary and content in a fenced block.
    """
    sections: list[str] = []

    sections.append("# Project Context (Contextify)\n")
    sections.append(f"**Project Path:** `{package.project_path}`\n")
    sections.append(f"**Total Files:** {package.total_files}\n")
    sections.append(f"**Total Size:** {package.total_size} bytes\n")
    sections.append(f"**Estimated Tokens:** {package.estimated_tokens}\n")
    if package.truncated:
        sections.append("> **Note:** context was truncated to satisfy token limits.\n")

    sections.append("## Directory Structure\n")
    sections.append(f"```\n{package.tree_structure}```\n")

    by_language: dict[str, list[SourceUnit]] = {}
    for unit in package.files:
        by_language.setdefault(unit.language, []).append(unit)

    for language in sorted(by_language):
        sections.append(f"### {language.title()} Files\n")
        for unit in sorted(by_language[language], key=lambda u: u.path):
            sections.append(_render_unit(unit))

    stamp = (now or datetime.now(timezone.utc)).strftime("%Y-%m-%dT%H:%M:%SZ")
    sections.append(f"_Generated by Contextify on {stamp}_\n")
    return "\n".join(sections)


def _render_unit(unit: SourceUnit) -> str:
    lines = [f"#### `{unit.path}` - {unit.size} bytes", ""]

    if unit.ast is not None:
        lines.append("**AST Summary:**")
        lines.append("")
        if unit.ast.package:
            lines.append(f"- Package: `{unit.ast.package}`")
        if unit.ast.imports:
            lines.append(f"- Imports: `{', '.join(unit.ast.imports)}`")
        if unit.ast.structs:
            lines.append(f"- Structs: `{', '.join(unit.ast.structs)}`")
        if unit.ast.functions:
            lines.append(f"- Functions: `{', '.join(unit.ast.functions)}`")
        lines.append("")

    fence_lang = "" if unit.language == "plaintext" else unit.language
    content = unit.content if unit.content.endswith("\n") else unit.content + "\n"
    lines.append(f"```{fence_lang}\n{content}```")
    lines.append("")
    return "\n".join(lines)
