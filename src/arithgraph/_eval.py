"""Evaluation of arithmetic graphs (the fill step)."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from ._errors import InputCountMismatchError, InvalidInputError, ResolverFailureError, UnresolvedDependencyError
from ._node import AddNode, ConstantNode, HintNode, InputNode, MulNode, NodeId

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ._domain import ValueDomain
    from ._node import Node

logger = logging.getLogger(__name__)


def validate_inputs(input_values: Sequence[Any | None], input_count: int) -> None:
    """Check that ``input_values`` supplies a value for every Input node.

    Raises:
        InputCountMismatchError: If the length is wrong or a slot is None.

    """
    if len(input_values) != input_count:
        raise InputCountMismatchError(expected=input_count, received=len(input_values))

    missing = [position for position, value in enumerate(input_values) if value is None]
    if missing:
        raise InputCountMismatchError(
            expected=input_count,
            received=len(input_values),
            missing_positions=missing,
        )


def _input(input_values: Sequence[Any | None], position: int, domain: ValueDomain) -> Any:
    try:
        return domain.normalize(input_values[position])
    except TypeError as e:
        raise InvalidInputError(position, input_values[position]) from e


def _operand(values: list[Any | None], node_id: NodeId, dep: NodeId) -> Any:
    value = values[dep.index] if dep.index < len(values) else None
    if value is None:
        raise UnresolvedDependencyError(node_id, dep)
    return value


def _resolve_hint(node: HintNode, node_id: NodeId, args: list[Any], domain: ValueDomain) -> Any:
    try:
        result = node.resolver(*args)
    except Exception as e:  # noqa: BLE001
        raise ResolverFailureError(node_id, node.label, str(e) or type(e).__name__) from e

    if result is None:
        raise ResolverFailureError(node_id, node.label, "resolver returned None")

    try:
        return domain.normalize(result)
    except TypeError as e:
        raise ResolverFailureError(node_id, node.label, str(e)) from e


def fill_values(
    nodes: Sequence[Node],
    input_values: Sequence[Any | None],
    domain: ValueDomain,
    graph_key: int,
) -> list[Any]:
    """Compute the value of every node from the given input values.

    This is a pure function: it walks the arena once in creation order, which
    is topological because nodes only reference earlier nodes, and returns a
    new list with one value per node. Callers commit the list only if this
    returns normally.

    Args:
        nodes: The node arena, in creation order.
        input_values: One value per InputNode, in declaration order.
        domain: The value domain that performs all arithmetic.
        graph_key: Key of the owning graph, used to build NodeIds for errors.

    Returns:
        The computed values, indexed like ``nodes``.

    Raises:
        InputCountMismatchError: If ``input_values`` does not cover every input.
        InvalidInputError: If an input value is not a valid domain value.
        ResolverFailureError: If a hint resolver raises or returns no value.
        UnresolvedDependencyError: If a node references one not yet computed.

    Example:
        >>> values = fill_values(graph.nodes, [3], IntegerDomain(), graph.key)

    """
    input_count = sum(1 for node in nodes if isinstance(node, InputNode))
    validate_inputs(input_values, input_count)

    values: list[Any | None] = [None] * len(nodes)

    logger.debug("Filling %d nodes from %d input(s)", len(nodes), input_count)

    for index, node in enumerate(nodes):
        node_id = NodeId(index, graph_key)
        match node:
            case InputNode(position=position):
                value = _input(input_values, position, domain)
            case ConstantNode(value=constant):
                value = constant
            case AddNode(left=left, right=right):
                value = domain.add(_operand(values, node_id, left), _operand(values, node_id, right))
            case MulNode(left=left, right=right):
                value = domain.mul(_operand(values, node_id, left), _operand(values, node_id, right))
            case HintNode(deps=deps):
                args = [_operand(values, node_id, dep) for dep in deps]
                value = _resolve_hint(node, node_id, args, domain)
            case _:
                msg = f"Unknown node type {type(node).__name__} at {node_id}"
                raise TypeError(msg)

        values[index] = value
        logger.debug("  %s %s = %r", node_id, node.kind, value)

    logger.debug("Fill complete")
    return values
