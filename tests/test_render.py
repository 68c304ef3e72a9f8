"""Tests for rich renderings."""

import math

from rich.console import Console

from arithgraph import Graph, render_graph, render_report


def _to_text(renderable: object) -> str:
    console = Console(width=120, record=True, color_system=None)
    console.print(renderable)
    return console.export_text()


class TestRenderReport:
    """Tests for render_report."""

    def test_passing_report(self) -> None:
        g = Graph()
        x = g.new_constant(9)
        g.sqrt(x)
        g.fill([])

        text = _to_text(render_report(g.verify()))

        assert "All 1 constraint(s) hold" in text
        assert "PASS" in text

    def test_failing_report_lists_values(self) -> None:
        g = Graph()
        x = g.new_constant(9)
        h = g.hint([x], lambda v: 4)
        g.assert_equal(g.mul(h, h), x, label="square")
        g.fill([])

        text = _to_text(render_report(g.verify()))

        assert "FAIL (1/1)" in text
        assert "square" in text
        assert "16" in text
        assert "9" in text

    def test_unconstrained_hints_in_subtitle(self) -> None:
        g = Graph()
        x = g.new_constant(10)
        g.hint([x], math.isqrt)
        g.fill([])

        text = _to_text(render_report(g.verify()))

        assert "unconstrained hints: #1" in text


class TestRenderGraph:
    """Tests for render_graph."""

    def test_unfilled_graph(self) -> None:
        g = Graph()
        x = g.new_input()
        g.add(x, g.new_constant(5))

        text = _to_text(render_graph(g, title="f(x)"))

        assert "f(x)" in text
        assert "input[0]" in text
        assert "constant 5" in text
        assert "#0 + #1" in text
        assert "=" not in text

    def test_filled_graph_shows_values_and_constraints(self) -> None:
        g = Graph()
        x = g.new_input()
        y = g.mul(x, x)
        g.assert_equal(y, g.new_constant(9), label="nine")
        g.hint([x], abs, label="abs")
        g.fill([3])

        text = _to_text(render_graph(g))

        assert "#0 * #0 = 9" in text
        assert "abs(#0) = 3" in text
        assert "constraints" in text
        assert "nine: #1 == #2" in text
