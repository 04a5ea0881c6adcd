"""Tests for configuration management."""

from __future__ import annotations

from pathlib import Path

import pytest

from contextify.config import (
    CONFIG_FILE,
    DEFAULT_IGNORE_PATTERNS,
    OUTPUT_IGNORE_PATTERNS,
    ExtractConfig,
    config_file_path,
    load_config_file,
    read_config_file,
)
from contextify.exceptions import ConfigError


class TestExtractConfig:
    def test_defaults(self):
        config = ExtractConfig()
        assert config.path == "."
        assert config.depth == 1
        assert config.workers == 4
        assert config.max_tokens == 0
        assert config.focus == ""
        assert config.exclude == DEFAULT_IGNORE_PATTERNS

    def test_normalized_fixes_numbers(self):
        config = ExtractConfig(workers=0, depth=-3).normalized()
        assert config.workers == 4
        assert config.depth == 1

    def test_normalized_defaults_format(self):
        assert ExtractConfig().normalized().format == "markdown"
        assert ExtractConfig(format="json").normalized().format == "json"

    def test_normalized_excludes_own_output(self):
        config = ExtractConfig().normalized()
        for pattern in OUTPUT_IGNORE_PATTERNS:
            assert config.exclude.count(pattern) == 1
        # idempotent
        assert config.normalized().exclude == config.exclude

    def test_config_file_path(self, tmp_path: Path):
        assert config_file_path(tmp_path) == tmp_path / CONFIG_FILE


class TestConfigFile:
    def _write(self, root: Path, text: str) -> Path:
        path = root / CONFIG_FILE
        path.write_text(text)
        return path

    def test_file_fills_unset_values(self, tmp_path: Path):
        path = self._write(
            tmp_path,
            "format: json\nfocus: Parse\nmax_tokens: 5000\nworkers: 8\nast: true\n",
        )
        config = load_config_file(path, ExtractConfig(workers=0))
        assert config.format == "json"
        assert config.focus == "Parse"
        assert config.max_tokens == 5000
        assert config.workers == 8
        assert config.ast is True

    def test_cli_values_take_precedence(self, tmp_path: Path):
        path = self._write(tmp_path, "format: yaml\nfocus: Other\nmax_tokens: 10\ndepth: 4\n")
        cli = ExtractConfig(format="markdown", focus="Parse", max_tokens=99, depth=2)
        config = load_config_file(path, cli)
        assert config.format == "markdown"
        assert config.focus == "Parse"
        assert config.max_tokens == 99
        assert config.depth == 2

    def test_excludes_are_appended(self, tmp_path: Path):
        path = self._write(tmp_path, "exclude:\n  - '*.pb.go'\n")
        config = load_config_file(path, ExtractConfig(exclude=["vendor"]))
        assert config.exclude == ["vendor", "*.pb.go"]

    def test_include_only_when_cli_has_none(self, tmp_path: Path):
        path = self._write(tmp_path, "include:\n  - '*.go'\n")
        assert load_config_file(path, ExtractConfig()).include == ["*.go"]
        assert load_config_file(path, ExtractConfig(include=["*.py"])).include == ["*.py"]

    def test_empty_file(self, tmp_path: Path):
        path = self._write(tmp_path, "")
        config = load_config_file(path, ExtractConfig(focus="X"))
        assert config.focus == "X"

    def test_invalid_yaml(self, tmp_path: Path):
        path = self._write(tmp_path, "format: [unclosed\n")
        with pytest.raises(ConfigError):
            read_config_file(path)

    def test_non_mapping(self, tmp_path: Path):
        path = self._write(tmp_path, "- just\n- a list\n")
        with pytest.raises(ConfigError):
            read_config_file(path)

    def test_wrong_types(self, tmp_path: Path):
        path = self._write(tmp_path, "max_tokens: lots\n")
        with pytest.raises(ConfigError):
            read_config_file(path)
