"""Node and constraint representations for arithmetic graphs."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum, auto
from typing import TYPE_CHECKING, Any, ClassVar, TypeAlias

if TYPE_CHECKING:
    from collections.abc import Callable


class NodeKind(StrEnum):
    """The kind of node in the arithmetic graph."""

    INPUT = auto()  # Value supplied at fill time
    CONSTANT = auto()  # Literal fixed at construction
    ADD = auto()  # Sum of two earlier nodes
    MUL = auto()  # Product of two earlier nodes
    HINT = auto()  # Value computed out-of-band by a resolver


@dataclass(frozen=True, slots=True, order=True)
class NodeId:
    """Handle to a node of one particular graph.

    Attributes:
        index: Dense zero-based position of the node in its graph's arena.
        graph_key: Identity of the graph that created the node. Ids are only
            valid for that graph.

    """

    index: int
    graph_key: int

    def __str__(self) -> str:
        return f"#{self.index}"


@dataclass(frozen=True, slots=True)
class InputNode:
    """An unset value supplied at fill time.

    Attributes:
        position: Slot of this input among all inputs, in declaration order.

    """

    kind: ClassVar[NodeKind] = NodeKind.INPUT

    position: int

    @property
    def dependencies(self) -> tuple[NodeId, ...]:
        return ()


@dataclass(frozen=True, slots=True)
class ConstantNode:
    kind: ClassVar[NodeKind] = NodeKind.CONSTANT

    value: Any

    @property
    def dependencies(self) -> tuple[NodeId, ...]:
        return ()


@dataclass(frozen=True, slots=True)
class AddNode:
    kind: ClassVar[NodeKind] = NodeKind.ADD

    left: NodeId
    right: NodeId

    @property
    def dependencies(self) -> tuple[NodeId, ...]:
        return (self.left, self.right)


@dataclass(frozen=True, slots=True)
class MulNode:
    kind: ClassVar[NodeKind] = NodeKind.MUL

    left: NodeId
    right: NodeId

    @property
    def dependencies(self) -> tuple[NodeId, ...]:
        return (self.left, self.right)


@dataclass(frozen=True, slots=True)
class HintNode:
    """A value computed by calling ``resolver`` on the values of ``deps``.

    The resolver runs at fill time with the dependency values passed
    positionally. Nothing ties its result to the rest of the graph; pair every
    hint with constraints that pin its value algebraically.

    Attributes:
        deps: Non-empty tuple of nodes whose values feed the resolver.
        resolver: Callable producing the hinted value.
        label: Optional display name (e.g. "sqrt").

    """

    kind: ClassVar[NodeKind] = NodeKind.HINT

    deps: tuple[NodeId, ...]
    resolver: Callable[..., Any] = field(compare=False)
    label: str | None = None

    @property
    def dependencies(self) -> tuple[NodeId, ...]:
        return self.deps


Node: TypeAlias = InputNode | ConstantNode | AddNode | MulNode | HintNode


@dataclass(frozen=True, slots=True)
class Constraint:
    """An assertion that two nodes hold equal values after a fill.

    Attributes:
        left: First node of the pair.
        right: Second node of the pair.
        label: Optional name used in reports.

    """

    left: NodeId
    right: NodeId
    label: str | None = None

    def __str__(self) -> str:
        pair = f"{self.left} == {self.right}"
        return f"{self.label}: {pair}" if self.label else pair
