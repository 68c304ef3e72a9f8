"""Generic dependency graph used for structural queries over an arena."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Generic, TypeVar

if TYPE_CHECKING:
    from collections.abc import Iterable

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class DependencyGraph(Generic[T]):
    """An immutable view of "depends on" edges between nodes.

    The evaluator never needs this: arena order is already topological.
    It exists for diagnostics such as finding which hints a constraint
    actually reaches.

    predecessors[b] = {a} means "b depends on a".

    Attributes:
        _predecessors: Mapping from every node to its direct dependencies.

    """

    _predecessors: dict[T, frozenset[T]] = field(default_factory=dict)

    @classmethod
    def from_edges(cls, edges: Iterable[tuple[T, T]], nodes: Iterable[T] = ()) -> DependencyGraph[T]:
        """Build a graph from (dependency, dependent) edges.

        Args:
            edges: Pairs (a, b) meaning "b depends on a".
            nodes: Extra nodes to include even if no edge touches them.

        Example:
            >>> graph = DependencyGraph.from_edges([(0, 2), (1, 2)], nodes=[3])
            >>> sorted(graph.predecessors(2))
            [0, 1]
            >>> 3 in graph
            True

        """
        predecessors: defaultdict[T, set[T]] = defaultdict(set)

        for node in nodes:
            predecessors.setdefault(node, set())

        for src, dst in edges:
            predecessors[dst].add(src)
            predecessors.setdefault(src, set())

        return cls(_predecessors={k: frozenset(v) for k, v in predecessors.items()})

    @property
    def nodes(self) -> frozenset[T]:
        return frozenset(self._predecessors)

    def predecessors(self, node: T) -> frozenset[T]:
        """Direct dependencies of a node (empty for unknown nodes)."""
        return self._predecessors.get(node, frozenset())

    def cone(self, targets: Iterable[T]) -> frozenset[T]:
        """The targets together with everything they transitively depend on.

        Args:
            targets: Nodes to start from.

        Returns:
            The union of the targets and their ancestors.

        """
        visited: set[T] = set()
        stack = list(targets)
        while stack:
            current = stack.pop()
            if current not in visited:
                visited.add(current)
                stack.extend(self.predecessors(current))
        return frozenset(visited)

    def __len__(self) -> int:
        return len(self._predecessors)

    def __contains__(self, node: T) -> bool:
        return node in self._predecessors
