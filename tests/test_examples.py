"""End-to-end scenarios: build, fill, check."""

import importlib.util
import math
from pathlib import Path
from types import ModuleType

import pytest
from rich.console import Console

from arithgraph import Graph, InputCountMismatchError, render_graph, render_report


def _load_example() -> ModuleType:
    """Import examples/hinted_arithmetic.py without running its __main__ block."""
    script_path = Path(__file__).parent.parent / "examples" / "hinted_arithmetic.py"
    spec = importlib.util.spec_from_file_location("hinted_arithmetic", script_path)
    assert spec is not None
    assert spec.loader is not None
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


class TestExampleScript:
    """The scenarios shipped in examples/hinted_arithmetic.py."""

    def test_polynomial(self) -> None:
        graph = _load_example().polynomial(3)
        assert graph.values[-1] == 17
        assert graph.verify().ok

    def test_division_exact(self) -> None:
        assert _load_example().division(7).verify().ok

    def test_division_with_remainder(self) -> None:
        report = _load_example().division(8).verify()
        assert not report.ok
        assert (report.violations[0].left_value, report.violations[0].right_value) == (9, 8)

    def test_square_root(self) -> None:
        graph = _load_example().square_root(9)
        assert 4 in graph.values
        assert graph.verify().ok

    def test_renders(self) -> None:
        graph = _load_example().square_root(9)
        console = Console(record=True, width=100)
        console.print(render_graph(graph, title="sqrt"))
        console.print(render_report(graph.verify()))
        assert "PASS" in console.export_text()


def test_polynomial() -> None:
    # f(x) = x^2 + x + 5
    g = Graph()
    x = g.new_input()
    x_squared = g.mul(x, x)
    x_squared_plus_x = g.add(x_squared, x)
    five = g.new_constant(5)
    y = g.add(x_squared_plus_x, five)

    g.fill([3])

    assert g.value(y) == 17
    assert g.check_constraints()


def test_division_by_hint() -> None:
    # f(a) = (a + 1) / 8
    g = Graph()
    a = g.new_input()
    one = g.new_constant(1)
    b = g.add(a, one)

    c = g.hint([b], lambda v: v // 8)
    eight = g.new_constant(8)
    c_times_8 = g.mul(c, eight)
    g.assert_equal(b, c_times_8)

    g.fill([7])

    assert g.value(c) == 1
    assert g.check_constraints()


def test_division_by_hint_detects_remainder() -> None:
    g = Graph()
    a = g.new_input()
    b = g.add(a, g.new_constant(1))
    c = g.hint([b], lambda v: v // 8)
    g.assert_equal(b, g.mul(c, g.new_constant(8)))

    g.fill([8])  # 9 // 8 == 1, but 1 * 8 != 9

    report = g.verify()
    assert not report
    assert (report.violations[0].left_value, report.violations[0].right_value) == (9, 8)


def test_square_root_by_hint() -> None:
    # f(x) = sqrt(x + 7)
    g = Graph()
    x = g.new_input()
    seven = g.new_constant(7)
    x_plus_7 = g.add(x, seven)

    root = g.hint([x_plus_7], math.isqrt)
    computed_sq = g.mul(root, root)
    g.assert_equal(computed_sq, x_plus_7)

    g.fill([9])

    assert g.value(root) == 4
    assert g.check_constraints()


def test_constant_only() -> None:
    g = Graph()
    five = g.new_constant(5)

    g.fill([])

    assert g.value(five) == 5
    assert g.check_constraints()


def test_constant_only_rejects_spare_input_slots() -> None:
    g = Graph()
    g.new_constant(5)

    with pytest.raises(InputCountMismatchError):
        g.fill([None])


def test_zero_constants() -> None:
    g = Graph()
    zero_a = g.new_constant(0)
    zero_b = g.new_constant(0)
    total = g.add(zero_a, zero_b)

    g.fill([])
    g.assert_equal(total, zero_a)

    assert g.check_constraints()


def test_non_perfect_square_hint_without_constraint() -> None:
    g = Graph()
    x = g.new_constant(10)
    root = g.hint([x], math.isqrt)

    g.fill([])

    assert g.value(root) == 3
    assert g.unconstrained_hints() == [root]
    assert g.check_constraints()


def test_non_perfect_square_hint_with_constraint_fails() -> None:
    g = Graph()
    x = g.new_constant(10)
    root = g.hint([x], math.isqrt)
    g.assert_equal(g.mul(root, root), x)

    g.fill([])

    assert not g.check_constraints()


def test_different_operations_same_result() -> None:
    g = Graph()
    two = g.new_constant(2)
    three = g.new_constant(3)
    six = g.mul(two, three)
    six_alt = g.add(three, three)
    g.assert_equal(six, six_alt)

    g.fill([])

    assert g.check_constraints()
