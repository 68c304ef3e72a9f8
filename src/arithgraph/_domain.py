"""Value domains that graph arithmetic is carried out in.

The graph engine never performs arithmetic itself. Every sum, product and
comparison is delegated to a ValueDomain, so overflow and modulus behaviour
is a property of the domain a graph is built with:

- IntegerDomain: unbounded Python integers
- ModularDomain: integers modulo a fixed modulus (wrapping words, prime fields)
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any


class ValueDomain(ABC):
    """Abstract base for the scalar value type of a graph.

    Subclasses must implement:
    - normalize(): Coerce a caller-supplied value into the domain
    - add() / mul(): The two arithmetic primitives of the graph
    - subtract() / divide() / sqrt(): Resolvers for the hint helpers; the
      evaluator never calls them for Add/Mul nodes

    Subclasses may override:
    - equal(): Constraint comparison (default: ==)
    """

    @abstractmethod
    def normalize(self, value: Any) -> int:
        """Coerce a value into the domain's canonical representation.

        Raises:
            TypeError: If the value cannot represent a domain element.

        """
        ...

    @abstractmethod
    def add(self, a: int, b: int) -> int: ...

    @abstractmethod
    def mul(self, a: int, b: int) -> int: ...

    def equal(self, a: int, b: int) -> bool:
        return a == b

    @abstractmethod
    def subtract(self, a: int, b: int) -> int: ...

    @abstractmethod
    def divide(self, a: int, b: int) -> int:
        """Return q such that mul(q, b) == a.

        Raises:
            ValueError: If no such q exists in the domain.

        """
        ...

    @abstractmethod
    def sqrt(self, a: int) -> int:
        """Return r such that mul(r, r) == a.

        Raises:
            ValueError: If a has no square root in the domain.

        """
        ...


def _as_int(value: Any) -> int:
    # bool is an int subclass but never a meaningful graph value
    if isinstance(value, bool):
        msg = f"Expected an integer value, got bool {value!r}"
        raise TypeError(msg)
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    msg = f"Expected an integer value, got {type(value).__name__} {value!r}"
    raise TypeError(msg)


# Deterministic Miller-Rabin for n < 3.3e24; a strong probable-prime test above
_PRIME_BASES = (2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37)


def _is_prime(n: int) -> bool:
    if n < 2:  # noqa: PLR2004
        return False
    for base in _PRIME_BASES:
        if n % base == 0:
            return n == base
    d, s = n - 1, 0
    while d % 2 == 0:
        d //= 2
        s += 1
    for base in _PRIME_BASES:
        x = pow(base, d, n)
        if x in (1, n - 1):
            continue
        for _ in range(s - 1):
            x = x * x % n
            if x == n - 1:
                break
        else:
            return False
    return True


@dataclass(frozen=True, slots=True)
class IntegerDomain(ValueDomain):
    """Unbounded integers. Division and square roots must be exact."""

    def normalize(self, value: Any) -> int:
        return _as_int(value)

    def add(self, a: int, b: int) -> int:
        return a + b

    def mul(self, a: int, b: int) -> int:
        return a * b

    def subtract(self, a: int, b: int) -> int:
        return a - b

    def divide(self, a: int, b: int) -> int:
        if b == 0:
            msg = "Division by zero"
            raise ValueError(msg)
        quotient, remainder = divmod(a, b)
        if remainder != 0:
            msg = f"{a} is not divisible by {b}"
            raise ValueError(msg)
        return quotient

    def sqrt(self, a: int) -> int:
        if a < 0:
            msg = f"Square root of negative value {a}"
            raise ValueError(msg)
        root = math.isqrt(a)
        if root * root != a:
            msg = f"{a} is not a perfect square"
            raise ValueError(msg)
        return root


@dataclass(frozen=True, slots=True)
class ModularDomain(ValueDomain):
    """Integers modulo ``modulus``.

    ``ModularDomain(2**32)`` wraps like an unsigned 32-bit word;
    ``ModularDomain(p)`` for a prime p is the finite field GF(p). Square roots
    are only supported for an odd prime modulus.

    Attributes:
        modulus: The modulus, at least 2.

    """

    modulus: int

    def __post_init__(self) -> None:
        if isinstance(self.modulus, bool) or not isinstance(self.modulus, int) or self.modulus < 2:  # noqa: PLR2004
            msg = f"Modulus must be an integer >= 2, got {self.modulus!r}"
            raise ValueError(msg)

    def normalize(self, value: Any) -> int:
        return _as_int(value) % self.modulus

    def add(self, a: int, b: int) -> int:
        return (a + b) % self.modulus

    def mul(self, a: int, b: int) -> int:
        return (a * b) % self.modulus

    def equal(self, a: int, b: int) -> bool:
        return (a - b) % self.modulus == 0

    def subtract(self, a: int, b: int) -> int:
        return (a - b) % self.modulus

    def divide(self, a: int, b: int) -> int:
        try:
            inverse = pow(b, -1, self.modulus)
        except ValueError:
            msg = f"{b} has no inverse modulo {self.modulus}"
            raise ValueError(msg) from None
        return (a * inverse) % self.modulus

    def sqrt(self, a: int) -> int:
        """Tonelli-Shanks square root; returns the smaller of the two roots."""
        p = self.modulus
        if p % 2 == 0 or not _is_prime(p):
            msg = f"Square roots need an odd prime modulus, got {p}"
            raise ValueError(msg)
        a %= p
        if a == 0:
            return 0
        if pow(a, (p - 1) // 2, p) != 1:
            msg = f"{a} is not a quadratic residue modulo {p}"
            raise ValueError(msg)

        # p - 1 = q * 2**s with q odd
        q, s = p - 1, 0
        while q % 2 == 0:
            q //= 2
            s += 1

        # p is prime, so half of 2..p-1 are non-residues
        z = next(z for z in range(2, p) if pow(z, (p - 1) // 2, p) == p - 1)

        m, c, t, r = s, pow(z, q, p), pow(a, q, p), pow(a, (q + 1) // 2, p)
        while t != 1:
            # least i with t**(2**i) == 1
            i, t2 = 0, t
            while t2 != 1:
                t2 = t2 * t2 % p
                i += 1
                if i == m:
                    msg = f"Square root modulo {p} did not converge; is it prime?"
                    raise ValueError(msg)
            b = pow(c, 1 << (m - i - 1), p)
            m, c, t, r = i, b * b % p, t * b * b % p, r * b % p

        return min(r, p - r)
