"""Exceptions raised while building, filling and checking graphs."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ._node import NodeId


class ArithGraphError(Exception):
    """Base class for all arithgraph errors."""


class InvalidReferenceError(ArithGraphError):
    """A construction call referenced a node that is not in this graph.

    Raised when the id was created by another graph, or when its index does
    not (yet) exist in the arena.

    Attributes:
        node_id: The offending reference.
        reason: Why the reference was rejected.
        message: Human-readable error message
    """

    def __init__(self, node_id: object, reason: str, message: str | None = None) -> None:
        self.node_id = node_id
        self.reason = reason
        self.message = message or f"Invalid node reference {node_id!r}: {reason}"
        super().__init__(self.message)


class InputCountMismatchError(ArithGraphError):
    """fill() received input values that do not cover every Input node.

    Attributes:
        expected: Number of Input nodes in the graph.
        received: Length of the supplied sequence.
        missing_positions: Input positions whose supplied slot was None.
        message: Human-readable error message
    """

    def __init__(
        self,
        expected: int,
        received: int,
        missing_positions: list[int] | None = None,
        message: str | None = None,
    ) -> None:
        self.expected = expected
        self.received = received
        self.missing_positions = missing_positions or []
        self.message = message or self._default_message()
        super().__init__(self.message)

    def _default_message(self) -> str:
        if self.expected != self.received:
            return f"Expected {self.expected} input value(s), got {self.received}"
        positions = ", ".join(str(p) for p in self.missing_positions)
        return f"No value supplied for input position(s): {positions}"


class InvalidInputError(ArithGraphError):
    """An input value cannot be represented in the graph's value domain.

    The domain's ``TypeError`` is available as ``__cause__``.

    Attributes:
        position: Input position of the rejected value.
        value: The rejected value.
    """

    def __init__(self, position: int, value: object) -> None:
        self.position = position
        self.value = value
        super().__init__(f"Invalid value {value!r} for input position {position}")


class UnresolvedDependencyError(ArithGraphError):
    """A node was evaluated before one of its dependencies.

    This indicates a malformed arena and is a bug, not a user error.

    Attributes:
        node_id: The node being evaluated.
        dependency: The dependency without a value.
    """

    def __init__(self, node_id: NodeId, dependency: NodeId) -> None:
        self.node_id = node_id
        self.dependency = dependency
        super().__init__(f"Node {node_id} depends on {dependency}, which has no value")


class ResolverFailureError(ArithGraphError):
    """A hint resolver could not produce a value.

    The underlying exception, if any, is available as ``__cause__``.

    Attributes:
        node_id: The hint node whose resolver failed.
        label: The hint's label, if it has one.
        detail: What went wrong, if known.
        message: Human-readable error message
    """

    def __init__(self, node_id: NodeId, label: str | None = None, detail: str | None = None) -> None:
        self.node_id = node_id
        self.label = label
        self.detail = detail
        name = f"{node_id} ({label})" if label else str(node_id)
        self.message = f"Resolver for hint {name} failed"
        if detail:
            self.message += f": {detail}"
        super().__init__(self.message)


class NotFilledError(ArithGraphError):
    """A value was requested before a successful fill.

    Attributes:
        node_id: The node without a value, or None when the graph as a whole
            has not been filled.
    """

    def __init__(self, node_id: NodeId | None = None) -> None:
        self.node_id = node_id
        if node_id is None:
            super().__init__("Graph has not been filled; call fill() first")
        else:
            super().__init__(f"Node {node_id} has no value; call fill() first")


class ConfigError(ArithGraphError):
    """Error in arithgraph configuration."""
