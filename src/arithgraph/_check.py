"""Constraint checking over filled value slots.

All logic here is read-only: the checker compares values that a previous
fill computed and never evaluates nodes itself.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from ._errors import NotFilledError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ._domain import ValueDomain
    from ._node import Constraint, NodeId

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ConstraintViolation:
    """A constraint whose two sides hold different values."""

    constraint: Constraint
    left_value: Any
    right_value: Any

    def __str__(self) -> str:
        return f"{self.constraint}: {self.left_value!r} != {self.right_value!r}"


@dataclass(frozen=True, slots=True)
class ConstraintReport:
    """Outcome of checking every constraint of a filled graph.

    Attributes:
        checked: Number of constraints compared.
        violations: Failing constraints in declaration order, with both values.
        unconstrained_hints: Hint nodes that no constraint reaches. Their
            values are trusted blindly; this does not make the report fail.

    """

    checked: int
    violations: tuple[ConstraintViolation, ...] = ()
    unconstrained_hints: tuple[NodeId, ...] = ()

    @property
    def ok(self) -> bool:
        """True when every constraint holds (vacuously true with none)."""
        return len(self.violations) == 0

    def __bool__(self) -> bool:
        return self.ok


def _slot(values: Sequence[Any | None], node_id: NodeId) -> Any:
    value = values[node_id.index]
    if value is None:
        raise NotFilledError(node_id)
    return value


def check_constraints(
    constraints: Sequence[Constraint],
    values: Sequence[Any | None],
    domain: ValueDomain,
    unconstrained_hints: Sequence[NodeId] = (),
) -> ConstraintReport:
    """Compare both sides of every constraint.

    Args:
        constraints: Constraints in declaration order.
        values: Value slots from the last fill, indexed by node index.
        domain: Supplies the equality used for comparison.
        unconstrained_hints: Passed through to the report.

    Returns:
        A ConstraintReport listing every violated constraint.

    Raises:
        NotFilledError: If a referenced node has no value.

    """
    violations: list[ConstraintViolation] = []

    for constraint in constraints:
        left = _slot(values, constraint.left)
        right = _slot(values, constraint.right)
        if not domain.equal(left, right):
            logger.debug("Constraint %s failed: %r != %r", constraint, left, right)
            violations.append(ConstraintViolation(constraint, left, right))

    for hint_id in unconstrained_hints:
        logger.warning("Hint %s is not pinned by any constraint", hint_id)

    logger.debug("Checked %d constraint(s), %d violated", len(constraints), len(violations))
    return ConstraintReport(
        checked=len(constraints),
        violations=tuple(violations),
        unconstrained_hints=tuple(unconstrained_hints),
    )
