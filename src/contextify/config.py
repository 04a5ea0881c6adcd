"""Configuration management for Contextify."""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError

from contextify.exceptions import ConfigError

CONFIG_FILE = ".ai-context.yaml"
DEFAULT_WORKERS = 4
DEFAULT_DEPTH = 1
DEFAULT_FORMAT = "markdown"

# Common directory/file patterns that are never worth extracting
DEFAULT_IGNORE_PATTERNS: list[str] = [
    ".git", ".svn", ".hg",
    "node_modules", "vendor", "target",
    "build", "dist", "out",
    "__pycache__", ".pytest_cache",
    "*.pyc", "*.pyo", "*.pyd",
    ".DS_Store", "Thumbs.db",
    "*.log", "*.tmp", "*.temp",
    ".idea", ".vscode", ".vs",
    "*.exe", "*.dll", "*.so", "*.dylib",
    "*.class", "*.jar",
    "coverage", ".nyc_output",
]

# Our own output files, so a second run doesn't ingest the first one's result
OUTPUT_IGNORE_PATTERNS: list[str] = [
    "contextify-*.md",
    "contextify_*.md",
    "contextify-*.json",
    "contextify-*.yaml",
    "contextify-*.yml",
    "contextify.md",
]


class ExtractConfig(BaseModel):
    """Extraction settings, from CLI flags and the project config file."""

    path: str = "."
    output: str = ""
    format: str = ""  # empty = markdown, unless the config file says otherwise
    exclude: list[str] = Field(default_factory=lambda: list(DEFAULT_IGNORE_PATTERNS))
    include: list[str] = Field(default_factory=list)
    strip_comments: bool = False
    max_tokens: int = 0  # 0 = unlimited
    ast: bool = False
    focus: str = ""  # empty = no focus tracing
    depth: int = DEFAULT_DEPTH
    workers: int = DEFAULT_WORKERS

    def normalized(self) -> ExtractConfig:
        """Return a copy with out-of-range numeric options reset to defaults."""
        data = self.model_dump()
        if not data["format"]:
            data["format"] = DEFAULT_FORMAT
        if data["workers"] <= 0:
            data["workers"] = DEFAULT_WORKERS
        if data["depth"] < 0:
            data["depth"] = DEFAULT_DEPTH
        data["exclude"] = _append_unique(data["exclude"], OUTPUT_IGNORE_PATTERNS)
        return ExtractConfig(**data)


class FileConfig(BaseModel):
    """Shape of the .ai-context.yaml file. Every key is optional."""

    format: str = ""
    exclude: list[str] = Field(default_factory=list)
    include: list[str] = Field(default_factory=list)
    strip_comments: bool = False
    max_tokens: int = 0
    ast: bool = False
    focus: str = ""
    depth: int = 0
    workers: int = 0


def config_file_path(root: Path) -> Path:
    """Get the config file location for a project root."""
    return root / CONFIG_FILE


def read_config_file(path: Path) -> FileConfig:
    """Read and validate a YAML config file."""
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Failed to read {path}: {e}") from e

    if data is None:
        return FileConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a mapping at the top level")

    try:
        return FileConfig(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config in {path}: {e}") from e


def load_config_file(path: Path, config: ExtractConfig) -> ExtractConfig:
    """Merge a config file into `config`. CLI values take precedence.

    Exclude patterns are additive; everything else is only taken from the
    file when the CLI left it at its zero value.
    """
    file_cfg = read_config_file(path)
    data = config.model_dump()

    if not data["format"] and file_cfg.format:
        data["format"] = file_cfg.format
    if file_cfg.exclude:
        data["exclude"] = data["exclude"] + file_cfg.exclude
    if file_cfg.include and not data["include"]:
        data["include"] = list(file_cfg.include)
    if file_cfg.strip_comments:
        data["strip_comments"] = True
    if data["max_tokens"] == 0 and file_cfg.max_tokens > 0:
        data["max_tokens"] = file_cfg.max_tokens
    if file_cfg.ast:
        data["ast"] = True
    if not data["focus"] and file_cfg.focus:
        data["focus"] = file_cfg.focus
    if data["depth"] == 0 and file_cfg.depth > 0:
        data["depth"] = file_cfg.depth
    if data["workers"] == 0 and file_cfg.workers > 0:
        data["workers"] = file_cfg.workers

    return ExtractConfig(**data)


def _append_unique(values: list[str], extra: list[str]) -> list[str]:
    result = list(values)
    for value in extra:
        if value not in result:
            result.append(value)
    return result
