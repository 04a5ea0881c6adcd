"""Data models for parsed Go declarations and call sites."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field


class Declaration(BaseModel):
    """A top-level function or method definition site.

    `qualified_name` is the bare identifier for free functions and
    `<receiver-type>.<name>` for methods (e.g. "*Server.Start").
    """

    qualified_name: str
    path: str
    start: int  # byte offset of the `func` keyword
    end: int  # byte offset just past the closing brace

    def contains(self, offset: int) -> bool:
        return self.start <= offset <= self.end


class CallSite(BaseModel):
    """A call expression whose callee could be named textually."""

    callee: str  # unresolved, as written: "Lex", "fmt.Println", "Close"
    offset: int


class ASTSummary(BaseModel):
    """Lightweight summary of a Go file's top-level declarations."""

    package: str = ""
    imports: list[str] = Field(default_factory=list)
    structs: list[str] = Field(default_factory=list)
    functions: list[str] = Field(default_factory=list)  # "Name" or "(Recv).Name"


class ParsedUnit(BaseModel):
    """Declarations and call sites extracted from one source unit."""

    path: str
    declarations: list[Declaration] = Field(default_factory=list)
    calls: list[CallSite] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


# Language detection by file extension
EXTENSION_LANGUAGE_MAP: dict[str, str] = {
    ".go": "go",
    ".java": "java",
    ".py": "python",
    ".js": "javascript",
    ".ts": "typescript",
    ".rs": "rust",
    ".c": "c",
    ".cpp": "cpp",
    ".h": "c",
    ".hpp": "cpp",
    ".cs": "csharp",
    ".rb": "ruby",
    ".php": "php",
    ".swift": "swift",
    ".kt": "kotlin",
    ".scala": "scala",
    ".r": "r",
    ".m": "matlab",
    ".sh": "shell",
    ".bash": "bash",
    ".zsh": "zsh",
    ".ps1": "powershell",
    ".yaml": "yaml",
    ".yml": "yaml",
    ".json": "json",
    ".xml": "xml",
    ".html": "html",
    ".css": "css",
    ".scss": "scss",
    ".sass": "sass",
    ".less": "less",
    ".sql": "sql",
    ".md": "markdown",
    ".rst": "restructuredtext",
    ".tex": "latex",
}

PLAINTEXT = "plaintext"


def detect_language(file_path: str) -> str:
    """Detect language from file extension, falling back to plaintext."""
    ext = Path(file_path).suffix.lower()
    return EXTENSION_LANGUAGE_MAP.get(ext, PLAINTEXT)
