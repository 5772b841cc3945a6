"""Unit tests for the triple-loop kernels."""

from __future__ import annotations

import pytest

from strassen import DimensionMismatch, Matrix, multiply_naive, multiply_numpy, multiply_transposed
from strassen.generate import make_rng, random_matrix

KERNELS = [multiply_naive, multiply_transposed, multiply_numpy]


@pytest.mark.parametrize("kernel", KERNELS)
class TestKernelOutputs:
    """Known products for every kernel."""

    def test_square3(self, kernel, square3) -> None:
        a, b, c = square3
        assert kernel(a, b) == c

    def test_square4(self, kernel, square4) -> None:
        a, b, c = square4
        assert kernel(a, b) == c

    def test_rectangular(self, kernel) -> None:
        """Test a 2x3 by 3x2 product, which yields a 2x2 matrix."""
        a = Matrix([1, 2, 3, 4, 5, 6], 2, 3)
        b = Matrix([7, 8, 9, 10, 11, 12], 3, 2)
        assert kernel(a, b) == Matrix([58, 64, 139, 154], 2, 2)

    def test_result_is_new(self, kernel, square3) -> None:
        a, b, _ = square3
        before = list(a.elements), list(b.elements)
        c = kernel(a, b)

        assert c.elements is not a.elements
        assert (a.elements, b.elements) == before

    def test_incompatible(self, kernel) -> None:
        a = Matrix([1, 2, 3, 4, 5, 6], 2, 3)
        b = Matrix(list(range(9)), 3, 3)
        with pytest.raises(DimensionMismatch):
            kernel(a, b)

    def test_b_too_short(self, kernel) -> None:
        """Test that B with fewer rows than A has columns is rejected."""
        a = Matrix([1, 2, 3, 4, 5, 6], 2, 3)
        b = Matrix([1, 2], 1, 2)
        with pytest.raises(IndexError):
            kernel(a, b)

    def test_extra_rows_of_b_are_ignored(self, kernel) -> None:
        """Test that only the first a.cols rows of B take part."""
        a = Matrix([1, 2, 3, 4], 2, 2)
        b = Matrix([5, 6, 7, 8, 100, 100], 3, 2)
        assert kernel(a, b) == Matrix([19, 22, 43, 50], 2, 2)


class TestKernelAgreement:
    def test_naive_and_transposed_are_bit_identical(self) -> None:
        """Test that the two loop orders sum in the same order."""
        rng = make_rng(7)
        a = random_matrix(23, 31, low=0.0, high=1.0, rng=rng)
        b = random_matrix(31, 23, low=0.0, high=1.0, rng=rng)

        assert multiply_naive(a, b).elements == multiply_transposed(a, b).elements

    def test_against_numpy(self) -> None:
        rng = make_rng(11)
        a = random_matrix(17, 9, low=-1.0, high=1.0, rng=rng)
        b = random_matrix(9, 17, low=-1.0, high=1.0, rng=rng)

        assert multiply_transposed(a, b).equals(multiply_numpy(a, b))

    def test_integer_results_stay_integer(self) -> None:
        rng = make_rng(3)
        a = random_matrix(5, 4, high=100, rng=rng, integer=True)
        b = random_matrix(4, 5, high=100, rng=rng, integer=True)

        for kernel in KERNELS:
            assert kernel(a, b).is_integral()
