from __future__ import annotations

import operator
from numbers import Integral
from typing import Callable, List, Optional, Sequence, Union

import numpy as np

from strassen.errors import DimensionMismatch, InvalidDimension, SizeMismatch


# Absolute tolerance used when comparing floating-point matrices
EPSILON = 1e-6


def _check_dimensions(rows: int, cols: int) -> None:
    if rows <= 0 or cols <= 0:
        raise InvalidDimension(f"cannot create a null matrix ({rows}x{cols})")


class Matrix:
    """
    Dense row-major matrix of numbers.

    The matrix owns a flat ``list`` of ``rows * cols`` elements; element
    ``(i, j)`` lives at ``elements[i * cols + j]``. Integer and floating-point
    elements are both supported, and the additive identity used for padding
    is derived from the type of the stored elements.

    ``add``, ``subtract`` and ``scale`` mutate the receiver and return it so
    that several operations can be chained. Every other operation, including
    multiplication, allocates a new matrix.
    """

    __slots__ = ("rows", "cols", "elements")

    def __init__(self, elements: Sequence, rows: int, cols: int):
        _check_dimensions(rows, cols)
        if not isinstance(elements, list):
            elements = list(elements)
        if len(elements) != rows * cols:
            raise SizeMismatch(
                f"{len(elements)} elements cannot fill a {rows}x{cols} matrix"
            )
        self.rows = rows
        self.cols = cols
        self.elements = elements

    @classmethod
    def zeros(cls, rows: int, cols: int, zero=0) -> "Matrix":
        _check_dimensions(rows, cols)
        return cls([zero] * (rows * cols), rows, cols)

    @classmethod
    def from_rows(cls, data: Sequence[Sequence]) -> "Matrix":
        """Build a matrix from a nested sequence, one inner sequence per row."""
        if not data or not data[0]:
            raise InvalidDimension("cannot create a matrix from empty rows")
        cols = len(data[0])
        elements = []
        for index, row in enumerate(data):
            if len(row) != cols:
                raise SizeMismatch(
                    f"row {index} has {len(row)} elements, expected {cols}"
                )
            elements.extend(row)
        return cls(elements, len(data), cols)

    @classmethod
    def from_numpy(cls, array: np.ndarray) -> "Matrix":
        if array.ndim != 2:
            raise InvalidDimension(f"expected a 2-D array, got {array.ndim} dimensions")
        rows, cols = array.shape
        return cls(array.ravel().tolist(), rows, cols)

    def to_numpy(self) -> np.ndarray:
        return np.array(self.elements).reshape(self.rows, self.cols)

    def to_rows(self) -> List[list]:
        cols = self.cols
        return [self.elements[i * cols:(i + 1) * cols] for i in range(self.rows)]

    @property
    def size(self) -> int:
        return self.rows * self.cols

    @property
    def shape(self):
        return self.rows, self.cols

    def at(self, i: int, j: int):
        """
        Return the element at row ``i``, column ``j``.

        Raises
        ------
        IndexError
            If ``i`` or ``j`` falls outside the matrix. Negative indices are
            not wrapped around.
        """
        if not (0 <= i < self.rows and 0 <= j < self.cols):
            raise IndexError(
                f"index ({i}, {j}) out of range for a {self.rows}x{self.cols} matrix"
            )
        return self.elements[i * self.cols + j]

    def is_square(self) -> bool:
        return self.rows == self.cols

    def zero(self):
        """Additive identity for the type of the stored elements."""
        return type(self.elements[0])()

    def _check_same_shape(self, other: "Matrix", action: str) -> None:
        if self.rows != other.rows or self.cols != other.cols:
            raise DimensionMismatch(
                f"cannot {action} matrices of different sizes: "
                f"A: [{self.rows}, {self.cols}], B: [{other.rows}, {other.cols}]"
            )

    def _apply(self, other: "Matrix", op: Callable) -> "Matrix":
        self.elements[:] = map(op, self.elements, other.elements)
        return self

    def add(self, other: "Matrix") -> "Matrix":
        """Add ``other`` element-wise into this matrix and return ``self``."""
        self._check_same_shape(other, "add")
        return self._apply(other, operator.add)

    def subtract(self, other: "Matrix") -> "Matrix":
        """Subtract ``other`` element-wise from this matrix and return ``self``."""
        self._check_same_shape(other, "subtract")
        return self._apply(other, operator.sub)

    def scale(self, k) -> "Matrix":
        self.elements[:] = [value * k for value in self.elements]
        return self

    def is_integral(self) -> bool:
        return all(isinstance(value, Integral) for value in self.elements)

    def equals(self, other: "Matrix", epsilon: Optional[float] = None) -> bool:
        """
        Compare two matrices of the same size element by element.

        When ``epsilon`` is omitted, integer matrices are compared exactly and
        anything else within the absolute tolerance ``EPSILON``.

        Raises
        ------
        DimensionMismatch
            If the matrices do not have the same number of rows and columns.
        """
        self._check_same_shape(other, "compare")
        if epsilon is None:
            if self.is_integral() and other.is_integral():
                return self.elements == other.elements
            epsilon = EPSILON
        for x, y in zip(self.elements, other.elements):
            # NaN is never within epsilon of anything
            if not abs(x - y) <= epsilon:
                return False
        return True

    def __eq__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        if self.shape != other.shape:
            return False
        return self.equals(other)

    def copy(self) -> "Matrix":
        return Matrix(list(self.elements), self.rows, self.cols)

    def transpose(self) -> "Matrix":
        cols = self.cols
        transposed = []
        for j in range(cols):
            # column j is every cols-th element starting at j
            transposed.extend(self.elements[j::cols])
        return Matrix(transposed, cols, self.rows)

    def pad(self, n: int) -> "Matrix":
        """
        Return an ``n x n`` copy of this matrix with zeros to the right and below.

        If ``n`` does not exceed either dimension, a plain copy is returned.

        Raises
        ------
        InvalidDimension
            If ``n`` exceeds one dimension but is smaller than the other, so
            the matrix cannot fit in the top-left corner of an ``n x n`` matrix.
        """
        rows, cols = self.rows, self.cols
        if n <= rows and n <= cols:
            return self.copy()
        if n < rows or n < cols:
            raise InvalidDimension(
                f"cannot pad a {rows}x{cols} matrix to {n}x{n}"
            )

        zero = self.zero()
        filler = [zero] * (n - cols)
        padded = []
        for i in range(rows):
            padded.extend(self.elements[i * cols:(i + 1) * cols])
            padded.extend(filler)
        padded.extend([zero] * (n * (n - rows)))
        return Matrix(padded, n, n)

    def reduce(self, rows: int, cols: int) -> "Matrix":
        """Return the top-left ``rows x cols`` block, typically to strip padding."""
        if rows > self.rows or cols > self.cols:
            raise InvalidDimension(
                f"cannot reduce a {self.rows}x{self.cols} matrix to {rows}x{cols}"
            )
        _check_dimensions(rows, cols)
        width = self.cols
        reduced = []
        for i in range(rows):
            start = i * width
            reduced.extend(self.elements[start:start + cols])
        return Matrix(reduced, rows, cols)

    def multiply(self, other: "Matrix", algorithm: Union[str, Callable]) -> "Matrix":
        """
        Multiply this matrix by ``other`` with the given algorithm.

        ``algorithm`` is either a callable taking two matrices or the name of a
        registered algorithm (see ``strassen.algorithms``).

        Operands are compatible when ``self.rows == other.cols``; the product is
        a square ``self.rows x self.rows`` matrix. Callers pass ``other`` with
        ``other.rows >= self.cols``.
        """
        if isinstance(algorithm, str):
            from strassen.algorithms import get_multiplier

            algorithm = get_multiplier(algorithm)
        if self.rows != other.cols:
            raise DimensionMismatch(
                f"matrix sizes do not match: A: [{self.rows}, {self.cols}], "
                f"B: [{other.rows}, {other.cols}]"
            )
        return algorithm(self, other)

    def __matmul__(self, other: "Matrix") -> "Matrix":
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.multiply(other, "strassen")

    def __repr__(self) -> str:
        return f"Matrix(rows={self.rows}, cols={self.cols}, elements={self.elements!r})"

    def __str__(self) -> str:
        values = ", ".join(str(value) for value in self.elements)
        return f"rows: {self.rows} cols: {self.cols} n: {self.size} array: [{values}]"
