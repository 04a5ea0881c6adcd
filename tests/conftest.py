"""Shared test fixtures for Contextify."""

from __future__ import annotations

from pathlib import Path

import pytest

from contextify.context.models import SourceUnit


def go_unit(path: str, source: str) -> SourceUnit:
    """Build a Go SourceUnit directly, bypassing the filesystem."""
    return SourceUnit(path=path, language="go", content=source)


@pytest.fixture
def sample_go_source() -> str:
    """Sample Go source code for parser testing."""
    return '''package lexer

import (
	"fmt"
	str "strings"
)

type Token struct {
	Kind  int
	Value string
}

type Kind int

type Lexer struct {
	input string
	pos   int
}

func NewLexer(input string) *Lexer {
	return &Lexer{input: str.TrimSpace(input)}
}

func (l *Lexer) Next() Token {
	l.skip()
	tok := scanToken(l.input[l.pos:])
	fmt.Println(tok)
	return tok
}

func (l Lexer) Peek() byte {
	return l.input[l.pos]
}

func (l *Lexer) skip() {
	for l.pos < len(l.input) && l.input[l.pos] == ' ' {
		l.pos++
	}
}

func scanToken(s string) Token {
	emit := func() Token {
		return build(s)
	}
	return emit()
}
'''


@pytest.fixture
def pipeline_units() -> list[SourceUnit]:
    """Parse -> Lex -> Scan chain across three files, plus an unrelated file."""
    return [
        go_unit("parse.go", "package p\n\nfunc Parse() {\n\tLex()\n}\n"),
        go_unit("lex.go", "package p\n\nfunc Lex() {\n\tScan()\n}\n"),
        go_unit("scan.go", "package p\n\nfunc Scan() {\n}\n"),
        go_unit("util.go", "package p\n\nfunc Helper() {\n}\n"),
    ]


@pytest.fixture
def tmp_project(tmp_path: Path) -> Path:
    """Create a temporary Go project with a few supporting files."""
    (tmp_path / "main.go").write_text('''package main

import "example.com/app/server"

// main wires everything together.
func main() {
	s := server.New(":8080")
	s.Start()
}
''')

    server_dir = tmp_path / "server"
    server_dir.mkdir()
    (server_dir / "server.go").write_text('''package server

type Server struct {
	addr string
}

func New(addr string) *Server {
	return &Server{addr: addr}
}

/* Start begins serving. */
func (s *Server) Start() error {
	return listen(s.addr)
}

func listen(addr string) error {
	return nil
}
''')

    (server_dir / "routes.go").write_text('''package server

func Routes() []string {
	return []string{"/health"}
}
''')

    (tmp_path / "README.md").write_text("# Demo\n\nA tiny demo project.\n")

    vendor = tmp_path / "vendor"
    vendor.mkdir()
    (vendor / "dep.go").write_text("package dep\n")

    (tmp_path / "app.log").write_text("noise\n")
    (tmp_path / "logo.bin").write_bytes(b"\x00\x01\x02binary")

    return tmp_path
