"""Hint helpers: computed-out-of-band values paired with their constraints.

A hint's resolver runs at fill time and nothing in the graph vouches for its
result. Each helper here therefore appends the hint together with the
add/mul constraint that pins it:

- divide: h = a / b, constrained by h * b == a
- sqrt: h = sqrt(a), constrained by h * h == a
- subtract: h = a - b, constrained by h + b == a
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ._node import HintNode, NodeId

if TYPE_CHECKING:
    from ._builder import Graph


def divide(graph: Graph, a: NodeId, b: NodeId) -> NodeId:
    """Append ``a / b`` as a hint constrained by ``mul(h, b) == a``.

    Division by zero or an inexact quotient surfaces as a
    ResolverFailureError from fill(), per the graph's domain.
    """
    quotient = graph.hint([a, b], graph.domain.divide, label="div")
    graph.assert_equal(graph.mul(quotient, b), a, label=f"{quotient} * {b} == {a}")
    return quotient


def sqrt(graph: Graph, a: NodeId) -> NodeId:
    """Append ``sqrt(a)`` as a hint constrained by ``mul(h, h) == a``."""
    root = graph.hint([a], graph.domain.sqrt, label="sqrt")
    graph.assert_equal(graph.mul(root, root), a, label=f"{root}^2 == {a}")
    return root


def subtract(graph: Graph, a: NodeId, b: NodeId) -> NodeId:
    """Append ``a - b`` as a hint constrained by ``add(h, b) == a``."""
    difference = graph.hint([a, b], graph.domain.subtract, label="sub")
    graph.assert_equal(graph.add(difference, b), a, label=f"{difference} + {b} == {a}")
    return difference


def unconstrained_hints(graph: Graph) -> list[NodeId]:
    """Hint nodes that no constraint depends on, in creation order.

    A hint counts as constrained when it lies in the dependency cone of
    either side of at least one constraint.
    """
    hint_ids = [NodeId(index, graph.key) for index, node in enumerate(graph.nodes) if isinstance(node, HintNode)]
    if not hint_ids:
        return []

    dependencies = graph.dependency_graph()
    reached = dependencies.cone(
        side for constraint in graph.constraints for side in (constraint.left, constraint.right)
    )
    return [hint_id for hint_id in hint_ids if hint_id not in reached]
