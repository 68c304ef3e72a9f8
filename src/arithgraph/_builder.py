"""The Graph: an append-only node arena with fill and check entry points."""

from __future__ import annotations

import itertools
import logging
from typing import TYPE_CHECKING, Any

from . import _hints
from ._check import ConstraintReport, check_constraints
from ._domain import IntegerDomain
from ._errors import InvalidReferenceError, NotFilledError
from ._eval import fill_values, validate_inputs
from ._graph import DependencyGraph
from ._node import AddNode, ConstantNode, Constraint, HintNode, InputNode, MulNode, NodeId

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from ._config import ArithGraphConfig
    from ._domain import ValueDomain
    from ._node import Node

logger = logging.getLogger(__name__)

_graph_keys = itertools.count()


class Graph:
    """An arithmetic computation graph.

    Nodes live in a single arena and refer to each other by NodeId. A node
    can only reference nodes created before it, so creation order is a
    topological order and cycles cannot be expressed.

    Typical use is build, then fill, then check:

        >>> g = Graph()
        >>> x = g.new_input()
        >>> y = g.add(g.mul(x, x), g.new_constant(5))
        >>> g.fill([3])
        >>> g.value(y)
        14
        >>> g.check_constraints()
        True

    Attributes:
        domain: The ValueDomain all arithmetic is performed in.
        key: Identity of this graph; NodeIds from other graphs are rejected.

    """

    def __init__(self, domain: ValueDomain | None = None) -> None:
        self.domain: ValueDomain = IntegerDomain() if domain is None else domain
        self.key = next(_graph_keys)
        self._nodes: list[Node] = []
        self._constraints: list[Constraint] = []
        self._input_ids: list[NodeId] = []
        self._values: list[Any | None] = []
        self._filled = False

    @classmethod
    def from_config(cls, config: ArithGraphConfig) -> Graph:
        """Create an empty graph in the domain selected by ``config``."""
        return cls(domain=config.build_domain())

    # -- construction -------------------------------------------------------

    def _append(self, node: Node) -> NodeId:
        node_id = NodeId(len(self._nodes), self.key)
        self._nodes.append(node)
        self._values.append(None)
        return node_id

    def _check_ref(self, node_id: object) -> NodeId:
        if not isinstance(node_id, NodeId):
            raise InvalidReferenceError(node_id, f"expected a NodeId, got {type(node_id).__name__}")
        if node_id.graph_key != self.key:
            raise InvalidReferenceError(node_id, "node belongs to another graph")
        if not 0 <= node_id.index < len(self._nodes):
            raise InvalidReferenceError(node_id, f"no node with index {node_id.index} (graph has {len(self._nodes)})")
        return node_id

    def new_input(self) -> NodeId:
        """Append an Input node; its value is supplied by fill()."""
        node_id = self._append(InputNode(position=len(self._input_ids)))
        self._input_ids.append(node_id)
        return node_id

    def new_constant(self, value: Any) -> NodeId:
        """Append a Constant node holding ``value`` (normalised by the domain)."""
        return self._append(ConstantNode(self.domain.normalize(value)))

    def add(self, a: NodeId, b: NodeId) -> NodeId:
        """Append a node computing ``a + b``.

        Raises:
            InvalidReferenceError: If ``a`` or ``b`` is not a node of this graph.

        """
        return self._append(AddNode(self._check_ref(a), self._check_ref(b)))

    def mul(self, a: NodeId, b: NodeId) -> NodeId:
        """Append a node computing ``a * b``.

        Raises:
            InvalidReferenceError: If ``a`` or ``b`` is not a node of this graph.

        """
        return self._append(MulNode(self._check_ref(a), self._check_ref(b)))

    def hint(self, deps: Sequence[NodeId], resolver: Callable[..., Any], *, label: str | None = None) -> NodeId:
        """Append a node whose value is ``resolver(*values_of(deps))`` at fill time.

        The graph does not check the hinted value. Pair the hint with
        assert_equal() constraints that pin it in terms of add/mul, or use
        div()/sqrt()/sub() which do so.

        Args:
            deps: Non-empty sequence of nodes whose values are passed to the
                resolver positionally, in order.
            resolver: Called once per fill.
            label: Optional display name.

        Raises:
            ValueError: If ``deps`` is empty.
            TypeError: If ``resolver`` is not callable.
            InvalidReferenceError: If a dependency is not a node of this graph.

        """
        if isinstance(deps, NodeId):
            msg = "deps must be a sequence of NodeIds; wrap a single dependency in a list"
            raise TypeError(msg)
        dep_ids = tuple(self._check_ref(dep) for dep in deps)
        if not dep_ids:
            msg = "A hint needs at least one dependency"
            raise ValueError(msg)
        if not callable(resolver):
            msg = f"Hint resolver must be callable, got {type(resolver).__name__}"
            raise TypeError(msg)
        return self._append(HintNode(dep_ids, resolver, label))

    def assert_equal(self, a: NodeId, b: NodeId, *, label: str | None = None) -> Constraint:
        """Declare that ``a`` and ``b`` must hold equal values after a fill.

        Constraints never affect evaluation; they are compared by
        check_constraints() and verify().

        Raises:
            InvalidReferenceError: If ``a`` or ``b`` is not a node of this graph.

        """
        constraint = Constraint(self._check_ref(a), self._check_ref(b), label)
        self._constraints.append(constraint)
        return constraint

    def div(self, a: NodeId, b: NodeId) -> NodeId:
        """Hinted ``a / b``, constrained by ``quotient * b == a``."""
        return _hints.divide(self, a, b)

    def sqrt(self, a: NodeId) -> NodeId:
        """Hinted square root of ``a``, constrained by ``root * root == a``."""
        return _hints.sqrt(self, a)

    def sub(self, a: NodeId, b: NodeId) -> NodeId:
        """Hinted ``a - b``, constrained by ``difference + b == a``."""
        return _hints.subtract(self, a, b)

    # -- evaluation ---------------------------------------------------------

    def fill(self, input_values: Sequence[Any | None]) -> None:
        """Compute every node's value from one value per Input node.

        All value slots are replaced on success. On any failure, every slot
        is cleared and the graph counts as unfilled.

        Args:
            input_values: Values for the Input nodes in declaration order.

        Raises:
            InputCountMismatchError: If the length differs from input_count or
                a slot is None. Existing values are left untouched.
            InvalidInputError: If an input value is not a valid domain value.
            ResolverFailureError: If a hint resolver fails.

        """
        validate_inputs(input_values, self.input_count)
        try:
            values = fill_values(self._nodes, input_values, self.domain, self.key)
        except Exception:
            self._clear()
            raise

        self._values = values
        self._filled = True
        logger.debug("Graph %d filled (%d nodes)", self.key, len(self._nodes))

    def _clear(self) -> None:
        self._values = [None] * len(self._nodes)
        self._filled = False

    # -- inspection ---------------------------------------------------------

    @property
    def nodes(self) -> tuple[Node, ...]:
        return tuple(self._nodes)

    @property
    def constraints(self) -> tuple[Constraint, ...]:
        return tuple(self._constraints)

    @property
    def input_ids(self) -> tuple[NodeId, ...]:
        return tuple(self._input_ids)

    @property
    def input_count(self) -> int:
        return len(self._input_ids)

    @property
    def is_filled(self) -> bool:
        """True after a successful fill (and until a failed one)."""
        return self._filled

    @property
    def values(self) -> tuple[Any | None, ...]:
        """Value slots indexed by node index; None where nothing is computed."""
        return tuple(self._values)

    def node(self, node_id: NodeId) -> Node:
        return self._nodes[self._check_ref(node_id).index]

    def value(self, node_id: NodeId) -> Any:
        """Get the value computed for ``node_id`` by the last fill.

        Raises:
            InvalidReferenceError: If ``node_id`` is not a node of this graph.
            NotFilledError: If the node has no value.

        """
        value = self._values[self._check_ref(node_id).index]
        if value is None:
            raise NotFilledError(node_id)
        return value

    def dependency_graph(self) -> DependencyGraph[NodeId]:
        """The node dependencies as a DependencyGraph, including isolated nodes."""
        ids = [NodeId(index, self.key) for index in range(len(self._nodes))]
        edges = [(dep, node_id) for node_id, node in zip(ids, self._nodes, strict=True) for dep in node.dependencies]
        return DependencyGraph.from_edges(edges, nodes=ids)

    def unconstrained_hints(self) -> list[NodeId]:
        """Hint nodes not reached by any constraint, in creation order."""
        return _hints.unconstrained_hints(self)

    # -- verification -------------------------------------------------------

    def verify(self) -> ConstraintReport:
        """Check every constraint against the filled values.

        Returns:
            A report of all violated constraints with their mismatched values.
            Unconstrained hints are listed (and logged) but do not fail it.

        Raises:
            NotFilledError: If there has been no successful fill, or a
                constrained node was added after it.

        """
        if not self._filled:
            raise NotFilledError()
        return check_constraints(self._constraints, self._values, self.domain, self.unconstrained_hints())

    def check_constraints(self) -> bool:
        """True iff every constraint holds. See verify() for details."""
        return self.verify().ok

    def __len__(self) -> int:
        return len(self._nodes)

    def __repr__(self) -> str:
        state = "filled" if self._filled else "unfilled"
        return (
            f"Graph(nodes={len(self._nodes)}, inputs={self.input_count}, "
            f"constraints={len(self._constraints)}, domain={self.domain!r}, {state})"
        )
