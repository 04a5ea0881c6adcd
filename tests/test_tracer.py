"""Tests for focus relevance tracing."""

from __future__ import annotations

import pytest

from contextify.context.models import SourceUnit
from contextify.context.tracer import BACKWARD_BONUS, FORWARD_BONUS, FocusTracer
from contextify.graph.builder import GraphBuilder


def _go(path: str, source: str) -> SourceUnit:
    return SourceUnit(path=path, language="go", content=source)


def _weights(units: list[SourceUnit]) -> dict[str, int]:
    return {u.path: u.weight for u in units}


def _trace(units: list[SourceUnit], focus: str, depth: int):
    graph = GraphBuilder().build(units)
    return FocusTracer(graph).apply(units, focus, depth)


class TestForwardPropagation:
    def test_parse_lex_scan_scenario(self, pipeline_units):
        result = _trace(pipeline_units, "Parse", 1)

        weights = _weights(pipeline_units)
        # forward 1000 + backward 500 (Parse calls visited Lex) + baseline 1
        assert weights["parse.go"] == 1 + FORWARD_BONUS + BACKWARD_BONUS
        # forward only; Lex calls Scan, which was never visited
        assert weights["lex.go"] == 1 + FORWARD_BONUS
        assert weights["scan.go"] == 1
        assert weights["util.go"] == 1

        assert result.visited == {"Parse": 0, "Lex": 1}
        assert result.rounds == 2

    def test_depth_zero_visits_focus_only(self, pipeline_units):
        result = _trace(pipeline_units, "Parse", 0)
        assert list(result.visited) == ["Parse"]
        weights = _weights(pipeline_units)
        assert weights["parse.go"] == 1 + FORWARD_BONUS
        assert weights["lex.go"] == 1

    def test_hop_beyond_bound_gets_no_forward_bonus(self):
        # A -> B -> C -> D; with depth 1, C sits at hop 2 and D at hop 3
        units = [
            _go("a.go", "package p\n\nfunc A() {\n\tB()\n}\n"),
            _go("b.go", "package p\n\nfunc B() {\n\tC()\n}\n"),
            _go("c.go", "package p\n\nfunc C() {\n\tD()\n}\n"),
            _go("d.go", "package p\n\nfunc D() {}\n"),
        ]
        result = _trace(units, "A", 1)
        assert "C" not in result.visited
        assert "D" not in result.visited
        assert result.forward.get("c.go", 0) == 0
        assert _weights(units)["d.go"] == 1

    def test_bare_focus_matches_methods(self):
        units = [
            _go("server.go", "package p\n\ntype Server struct{}\n\nfunc (s *Server) Start() {}\n"),
            _go("client.go", "package p\n\ntype Client struct{}\n\nfunc (c Client) Start() {}\n"),
        ]
        result = _trace(units, "Start", 0)
        assert sorted(result.visited) == ["*Server.Start", "Client.Start"]
        assert _weights(units) == {
            "server.go": 1 + FORWARD_BONUS,
            "client.go": 1 + FORWARD_BONUS,
        }

    def test_cycles_terminate(self):
        units = [
            _go("a.go", "package p\n\nfunc Ping() {\n\tPong()\n}\n"),
            _go("b.go", "package p\n\nfunc Pong() {\n\tPing()\n}\n"),
        ]
        result = _trace(units, "Ping", 10)
        assert result.visited == {"Ping": 0, "Pong": 1}
        # each forward bonus is paid once, even though the cycle is rediscovered
        assert result.forward == {"a.go": FORWARD_BONUS, "b.go": FORWARD_BONUS}

    def test_same_unit_bonuses_add_up(self):
        units = [_go("p.go", "package p\n\nfunc A() {\n\tB()\n}\n\nfunc B() {}\n")]
        _trace(units, "A", 1)
        assert units[0].weight == 1 + 2 * FORWARD_BONUS + BACKWARD_BONUS


class TestBackwardPass:
    def test_backward_bonus_ignores_distance(self):
        # Far -> Mid -> Near -> Focus, and Far also calls Focus directly.
        # Far is three hops upstream but earns the same bonus as Near.
        units = [
            _go("focus.go", "package p\n\nfunc Focus() {}\n"),
            _go("near.go", "package p\n\nfunc Near() {\n\tFocus()\n}\n"),
            _go("mid.go", "package p\n\nfunc Mid() {\n\tNear()\n}\n"),
            _go("far.go", "package p\n\nfunc Far() {\n\tMid()\n\tFocus()\n}\n"),
        ]
        result = _trace(units, "Focus", 0)
        assert result.backward["near.go"] == BACKWARD_BONUS
        assert result.backward["far.go"] == BACKWARD_BONUS
        assert result.backward.get("mid.go", 0) == 0

    def test_backward_bonus_is_per_callee(self):
        units = [
            _go("lib.go", "package p\n\nfunc Root() {\n\tOne()\n\tTwo()\n}\n\nfunc One() {}\n\nfunc Two() {}\n"),
            _go("user.go", "package p\n\nfunc User() {\n\tOne()\n\tTwo()\n}\n"),
        ]
        _trace(units, "Root", 1)
        # User calls two distinct visited declarations: two separate bonuses
        assert _weights(units)["user.go"] == 1 + 2 * BACKWARD_BONUS

    def test_unknown_callers_are_ignored(self):
        units = [_go("p.go", "package p\n\nvar x = Focus()\n\nfunc Focus() int { return 1 }\n")]
        result = _trace(units, "Focus", 0)
        assert result.backward == {}


class TestDisabledAndMissing:
    def test_empty_focus_leaves_weights(self, pipeline_units):
        result = _trace(pipeline_units, "", 3)
        assert not result.found
        assert all(w == 1 for w in _weights(pipeline_units).values())

    def test_unknown_focus_leaves_weights(self, pipeline_units):
        result = _trace(pipeline_units, "DoesNotExist", 3)
        assert not result.found
        assert all(w == 1 for w in _weights(pipeline_units).values())

    def test_negative_depth_is_rejected(self, pipeline_units):
        graph = GraphBuilder().build(pipeline_units)
        with pytest.raises(ValueError):
            FocusTracer(graph).trace("Parse", -1)

    def test_trace_does_not_touch_units(self, pipeline_units):
        graph = GraphBuilder().build(pipeline_units)
        result = FocusTracer(graph).trace("Parse", 1)
        assert result.found
        assert all(u.weight == 1 for u in pipeline_units)

    def test_parse_failure_keeps_baseline(self):
        units = [
            _go("good.go", "package p\n\nfunc Good() {\n\tBroken()\n}\n"),
            _go("bad.go", "package p\n\nfunc Broken( {\n"),
        ]
        _trace(units, "Good", 2)
        assert _weights(units)["bad.go"] == 1
