"""Command-line interface for Contextify."""

from __future__ import annotations

import sys
import time
from pathlib import Path

import click

from contextify import __version__
from contextify.config import (
    DEFAULT_DEPTH,
    DEFAULT_IGNORE_PATTERNS,
    DEFAULT_WORKERS,
    ExtractConfig,
    config_file_path,
    load_config_file,
)
from contextify.context.engine import ContextExtractor
from contextify.exceptions import ConfigError, ContextifyError, OutputError
from contextify.render import default_output_name, render
from contextify.ui.console import Console, configure_logging

console = Console()


def _split_patterns(values: tuple[str, ...]) -> list[str]:
    """Accept both repeated flags and comma-separated lists."""
    patterns: list[str] = []
    for value in values:
        patterns.extend(p.strip() for p in value.split(",") if p.strip())
    return patterns


def _build_config(root: Path, **options) -> ExtractConfig:
    """Compose CLI options with the project's .ai-context.yaml, if any."""
    config = ExtractConfig(
        path=str(root),
        output=options["output"] or "",
        format=options["fmt"] or "",
        exclude=list(DEFAULT_IGNORE_PATTERNS) + _split_patterns(options["exclude"]),
        include=_split_patterns(options["include"]),
        strip_comments=options["strip_comments"],
        max_tokens=options["max_tokens"],
        ast=options["ast"],
        focus=options["focus"] or "",
        depth=options["depth"],
        workers=options["workers"],
    )

    cfg_file = config_file_path(root)
    if cfg_file.exists():
        try:
            config = load_config_file(cfg_file, config)
        except ConfigError as e:
            console.warning(f"Failed to load config file: {e}")

    return config.normalized()


def _write_output(text: str, config: ExtractConfig, root: Path) -> Path | None:
    """Write rendered output. Returns the path written, or None for stdout."""
    if config.output:
        destination = Path(config.output)
        try:
            destination.write_text(text, encoding="utf-8")
        except OSError as e:
            raise OutputError(f"failed to write output file: {e}") from e
        return destination

    name = default_output_name(config.format)
    for directory in (root, Path.cwd()):
        destination = directory / name
        try:
            destination.write_text(text, encoding="utf-8")
            return destination
        except OSError:
            continue

    console.warning("Failed to write to project dir or cwd; printing to stdout")
    click.echo(text)
    return None


@click.group()
@click.version_option(version=__version__, prog_name="contextify")
def main():
    """Contextify - extract project code context optimized for AI prompts."""
    pass


@main.command()
@click.option("--path", "-p", default=".", help="Path to the project directory.")
@click.option("--output", "-o", default=None, help="Output file (default: auto-generated in project dir).")
@click.option("--format", "-f", "fmt", default=None, help="Output format: markdown, json, yaml.")
@click.option("--exclude", "-e", multiple=True, help="Glob patterns to exclude (repeatable, comma-separated).")
@click.option("--include", "-i", multiple=True, help="Glob patterns to include (repeatable, comma-separated).")
@click.option("--strip-comments", is_flag=True, help="Strip comments from code.")
@click.option("--max-tokens", default=0, type=int, help="Maximum tokens (0 for unlimited).")
@click.option("--ast", is_flag=True, help="Enable AST summaries for Go files.")
@click.option("--focus", default=None, help="Focus symbol (e.g. FuncName or Type.Method) for definition tracing.")
@click.option("--depth", default=DEFAULT_DEPTH, type=int, help="Call-graph depth for focus tracing.")
@click.option("--workers", default=DEFAULT_WORKERS, type=int, help="Number of concurrent file workers.")
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging.")
def extract(path: str, verbose: bool, **options):
    """Extract code context from a project."""
    configure_logging(console, verbose)

    root = Path(path).resolve()
    if not root.is_dir():
        console.error(f"Path is not a directory: {path}")
        sys.exit(1)

    config = _build_config(root, **options)
    extractor = ContextExtractor(config)
    start_time = time.time()

    try:
        with console.extraction_progress() as progress:
            task = progress.add_task("Extracting...", total=None)

            def on_progress(file_path: str, current: int, total: int):
                progress.update(
                    task, total=total, completed=current,
                    description=f"Reading {file_path}",
                )

            package = extractor.extract(on_progress)

        text = render(package, config.format)
        destination = _write_output(text, config, root)
    except ContextifyError as e:
        console.error(str(e))
        sys.exit(1)

    elapsed = time.time() - start_time
    if extractor.trace is not None:
        console.show_trace(extractor.trace)
    if verbose:
        graph_stats = extractor.graph.get_stats() if extractor.graph else None
        console.show_stats(package, graph_stats)

    if destination is not None:
        console.success(f"Context extracted successfully to {destination} ({elapsed:.1f}s)")

    if config.max_tokens > 0 and package.estimated_tokens > config.max_tokens:
        console.warning(
            f"Estimated tokens ({package.estimated_tokens}) exceed maximum ({config.max_tokens})"
        )


if __name__ == "__main__":
    main()
