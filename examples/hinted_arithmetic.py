"""Three small graphs: a polynomial, a hinted division and a hinted square root."""

import logging

from rich.console import Console
from rich.logging import RichHandler

from arithgraph import Graph, render_graph, render_report

console = Console()


def polynomial(x_value: int) -> Graph:
    """f(x) = x^2 + x + 5"""
    g = Graph()
    x = g.new_input()
    g.add(g.add(g.mul(x, x), x), g.new_constant(5))
    g.fill([x_value])
    return g


def division(a_value: int) -> Graph:
    """f(a) = (a + 1) / 8, with the quotient pinned by c * 8 == a + 1"""
    g = Graph()
    a = g.new_input()
    b = g.add(a, g.new_constant(1))
    c = g.hint([b], lambda v: v // 8, label="div8")
    g.assert_equal(b, g.mul(c, g.new_constant(8)), label="c * 8 == a + 1")
    g.fill([a_value])
    return g


def square_root(x_value: int) -> Graph:
    """f(x) = sqrt(x + 7), via Graph.sqrt"""
    g = Graph()
    x = g.new_input()
    g.sqrt(g.add(x, g.new_constant(7)))
    g.fill([x_value])
    return g


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(message)s", handlers=[RichHandler(show_time=False)])

    for title, graph in [
        ("x^2 + x + 5 at x = 3", polynomial(3)),
        ("(a + 1) / 8 at a = 7", division(7)),
        ("(a + 1) / 8 at a = 8", division(8)),
        ("sqrt(x + 7) at x = 9", square_root(9)),
    ]:
        console.print(render_graph(graph, title=title))
        console.print(render_report(graph.verify()))
        console.print()
