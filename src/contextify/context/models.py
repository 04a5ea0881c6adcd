"""Data models for extracted source units and the context package."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from contextify.parser.models import ASTSummary

BASELINE_WEIGHT = 1
BINARY_WEIGHT = 0


class SourceUnit(BaseModel):
    """One extracted file.

    `content` is what gets rendered (possibly comment-stripped or replaced by
    a placeholder); `raw` keeps the bytes as read for structural analysis.
    `weight` is relevance priority for budget selection and is only ever
    raised, by the focus tracer.
    """

    path: str
    language: str
    content: str = ""
    size: int = 0
    ast: ASTSummary | None = None
    weight: int = Field(default=BASELINE_WEIGHT, exclude=True)
    raw: bytes = Field(default=b"", exclude=True, repr=False)

    def model_post_init(self, __context: object) -> None:
        if not self.size:
            self.size = len(self.source_bytes())

    def source_bytes(self) -> bytes:
        """Bytes to analyze: the raw file if we kept it, else the content."""
        return self.raw or self.content.encode("utf-8")


class ContextPackage(BaseModel):
    """The full extraction result handed to a renderer."""

    project_path: str
    tree_structure: str = ""
    files: list[SourceUnit] = Field(default_factory=list)
    total_files: int = 0
    total_size: int = 0
    estimated_tokens: int = 0
    truncated: bool = False

    def refresh_totals(self) -> None:
        """Recompute the aggregate counts from `files`."""
        self.total_files = len(self.files)
        self.total_size = sum(f.size for f in self.files)
        self.estimated_tokens = TokenEstimator.estimate_package(self)

    def to_dict(self) -> dict[str, Any]:
        """Serializable form: no weights or raw bytes, empty summaries dropped."""
        data = self.model_dump(exclude_none=True)
        if not self.truncated:
            data.pop("truncated", None)
        return data


class TokenEstimator:
    """Estimate token counts for extracted context.

    Lengths are measured in UTF-8 bytes, so non-ASCII text costs what it
    weighs on disk.
    """

    # Rough heuristic: 1 token ≈ 4 bytes for code
    CHARS_PER_TOKEN = 4

    @staticmethod
    def _bytes(text: str) -> int:
        return len(text.encode("utf-8"))

    @classmethod
    def estimate(cls, text: str) -> int:
        """Estimate token count for a string."""
        return cls._bytes(text) // cls.CHARS_PER_TOKEN

    @classmethod
    def unit_cost(cls, unit: SourceUnit) -> int:
        """Budget cost of one unit: its path plus its content."""
        return (cls._bytes(unit.path) + cls._bytes(unit.content)) // cls.CHARS_PER_TOKEN

    @classmethod
    def estimate_package(cls, package: ContextPackage) -> int:
        """Estimate the whole package, including tree and summaries."""
        total = cls._bytes(package.tree_structure)
        for unit in package.files:
            total += cls._bytes(unit.path) + cls._bytes(unit.content)
            if unit.ast is not None:
                total += cls._bytes(",".join(unit.ast.functions))
                total += cls._bytes(",".join(unit.ast.structs))
        return total // cls.CHARS_PER_TOKEN
