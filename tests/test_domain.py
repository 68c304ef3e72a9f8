"""Tests for value domains."""

import pytest

from arithgraph import IntegerDomain, ModularDomain


class TestIntegerDomain:
    """Tests for unbounded integer arithmetic."""

    def test_arithmetic(self) -> None:
        domain = IntegerDomain()
        assert domain.add(2, 3) == 5
        assert domain.mul(4, 5) == 20
        assert domain.subtract(2, 5) == -3

    def test_no_overflow(self) -> None:
        domain = IntegerDomain()
        assert domain.mul(2**40, 2**40) == 2**80

    def test_normalize_accepts_integral_float(self) -> None:
        assert IntegerDomain().normalize(3.0) == 3

    @pytest.mark.parametrize("value", [True, 2.5, "3", None])
    def test_normalize_rejects_non_integers(self, value: object) -> None:
        with pytest.raises(TypeError, match="Expected an integer"):
            IntegerDomain().normalize(value)

    def test_exact_divide(self) -> None:
        assert IntegerDomain().divide(8, 2) == 4

    def test_divide_by_zero(self) -> None:
        with pytest.raises(ValueError, match="Division by zero"):
            IntegerDomain().divide(8, 0)

    def test_inexact_divide(self) -> None:
        with pytest.raises(ValueError, match="not divisible"):
            IntegerDomain().divide(7, 2)

    def test_sqrt(self) -> None:
        assert IntegerDomain().sqrt(16) == 4
        assert IntegerDomain().sqrt(0) == 0

    def test_sqrt_non_square(self) -> None:
        with pytest.raises(ValueError, match="not a perfect square"):
            IntegerDomain().sqrt(10)

    def test_sqrt_negative(self) -> None:
        with pytest.raises(ValueError, match="negative"):
            IntegerDomain().sqrt(-4)


class TestModularDomain:
    """Tests for arithmetic modulo a fixed modulus."""

    def test_wraps_like_u32(self) -> None:
        domain = ModularDomain(2**32)
        assert domain.add(2**32 - 1, 2) == 1
        assert domain.mul(2**31, 4) == 0

    def test_normalize_reduces(self) -> None:
        assert ModularDomain(7).normalize(-1) == 6
        assert ModularDomain(7).normalize(15) == 1

    def test_equal_is_congruence(self) -> None:
        domain = ModularDomain(7)
        assert domain.equal(3, 10)
        assert not domain.equal(3, 4)

    def test_subtract(self) -> None:
        assert ModularDomain(7).subtract(2, 5) == 4

    def test_divide_uses_inverse(self) -> None:
        domain = ModularDomain(13)
        q = domain.divide(5, 3)
        assert domain.mul(q, 3) == 5

    def test_divide_without_inverse(self) -> None:
        with pytest.raises(ValueError, match="no inverse"):
            ModularDomain(12).divide(5, 4)

    @pytest.mark.parametrize(("modulus", "value"), [(13, 10), (17, 2), (41, 5), (101, 0)])
    def test_sqrt_roots_square_back(self, modulus: int, value: int) -> None:
        domain = ModularDomain(modulus)
        square = domain.mul(value, value)
        root = domain.sqrt(square)
        assert domain.mul(root, root) == square
        assert root <= modulus - root or root == 0

    def test_sqrt_of_non_residue(self) -> None:
        # squares mod 7 are {0, 1, 2, 4}
        with pytest.raises(ValueError, match="not a quadratic residue"):
            ModularDomain(7).sqrt(3)

    def test_sqrt_needs_odd_modulus(self) -> None:
        with pytest.raises(ValueError, match="odd prime"):
            ModularDomain(2**32).sqrt(4)

    @pytest.mark.parametrize("modulus", [15, 2**32 + 1])
    def test_sqrt_rejects_odd_composite_modulus(self, modulus: int) -> None:
        # 2**32 + 1 == 641 * 6700417 has no element of order 2**32
        with pytest.raises(ValueError, match="odd prime"):
            ModularDomain(modulus).sqrt(1)

    def test_sqrt_large_prime(self) -> None:
        domain = ModularDomain(2**61 - 1)
        root = domain.sqrt(domain.mul(123456789, 123456789))
        assert domain.mul(root, root) == domain.mul(123456789, 123456789)

    @pytest.mark.parametrize("modulus", [0, 1, -5])
    def test_invalid_modulus(self, modulus: int) -> None:
        with pytest.raises(ValueError, match="Modulus must be"):
            ModularDomain(modulus)

    def test_domains_compare_by_modulus(self) -> None:
        assert ModularDomain(7) == ModularDomain(7)
        assert ModularDomain(7) != ModularDomain(11)
