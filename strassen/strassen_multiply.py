"""
Sequential Strassen multiplication.

Each level splits the square operands into quadrants, forms seven block
products and recombines them:

    M1 = (A11 + A22)(B11 + B22)
    M2 = (A21 + A22) B11
    M3 = A11 (B12 - B22)
    M4 = A22 (B21 - B11)
    M5 = (A11 + A12) B22
    M6 = (A21 - A11)(B11 + B12)
    M7 = (A12 - A22)(B21 + B22)

    C11 = M1 + M4 - M5 + M7
    C12 = M3 + M5
    C21 = M2 + M4
    C22 = M1 - M2 + M3 + M6

Every block product goes back through ``multiply_strassen``, so a block with
an odd side is padded to the next even size before it is split again.
"""
from __future__ import annotations

import logging
import operator
from typing import Callable, List, Sequence, Tuple

from strassen.config import DEFAULT_CONFIG, StrassenConfig
from strassen.kernels import check_operands, multiply_transposed
from strassen.matrix import Matrix

logger = logging.getLogger(__name__)

Offset = Tuple[int, int]


def max_dimension(a: Matrix, b: Matrix) -> int:
    """Largest of the four operand dimensions, ties going to a.cols, then b.rows, then b.cols."""
    largest = a.rows
    if a.cols >= a.rows and a.cols >= b.cols:
        largest = a.cols
    elif b.rows >= b.cols and b.rows >= a.rows:
        largest = b.rows
    elif b.cols >= b.rows and b.cols >= a.cols:
        largest = b.cols
    return largest


def square_operands(a: Matrix, b: Matrix) -> Tuple[Matrix, Matrix, bool]:
    """
    Validate the operands and bring them to a common even square size.

    Returns
    -------
    a, b : Matrix
        Square operands of the same even side.
    padded : bool
        True when the operands were padded and the product must be reduced
        back to ``a.rows x a.rows``.
    """
    check_operands(a, b)
    if b.rows > a.cols:
        # rows of b past a.cols never meet an element of a
        b = b.reduce(a.cols, b.cols)

    side = max_dimension(a, b)
    if side % 2 == 1:
        side += 1

    if a.is_square() and b.is_square() and a.rows == side:
        return a, b, False
    logger.debug("padding %dx%d and %dx%d operands to %d", a.rows, a.cols, b.rows, b.cols, side)
    return a.pad(side), b.pad(side), True


def _submatrix(x: Matrix, first: Offset, second: Offset, m: int, op: Callable) -> Matrix:
    elements, width = x.elements, x.cols
    block = []
    for i in range(m):
        s1 = (first[0] + i) * width + first[1]
        s2 = (second[0] + i) * width + second[1]
        block.extend(map(op, elements[s1:s1 + m], elements[s2:s2 + m]))
    return Matrix(block, m, m)


def submatrix_add(x: Matrix, first: Offset, second: Offset, m: int) -> Matrix:
    """Sum of the two ``m x m`` blocks of ``x`` starting at the given (row, col) offsets."""
    return _submatrix(x, first, second, m, operator.add)


def submatrix_sub(x: Matrix, first: Offset, second: Offset, m: int) -> Matrix:
    return _submatrix(x, first, second, m, operator.sub)


def submatrix_copy(x: Matrix, offset: Offset, m: int) -> Matrix:
    elements, width = x.elements, x.cols
    block = []
    for i in range(m):
        start = (offset[0] + i) * width + offset[1]
        block.extend(elements[start:start + m])
    return Matrix(block, m, m)


def split_products(a: Matrix, b: Matrix) -> List[Tuple[Matrix, Matrix]]:
    """
    Build the seven operand pairs whose products are M1..M7.

    Every block is a fresh buffer, so pairs can be multiplied (and mutated)
    independently of each other and of ``a`` and ``b``.
    """
    m = a.rows // 2
    tl, tr, bl, br = (0, 0), (0, m), (m, 0), (m, m)

    return [
        (submatrix_add(a, tl, br, m), submatrix_add(b, tl, br, m)),
        (submatrix_add(a, bl, br, m), submatrix_copy(b, tl, m)),
        (submatrix_copy(a, tl, m), submatrix_sub(b, tr, br, m)),
        (submatrix_copy(a, br, m), submatrix_sub(b, bl, tl, m)),
        (submatrix_add(a, tl, tr, m), submatrix_copy(b, br, m)),
        (submatrix_sub(a, bl, tl, m), submatrix_add(b, tl, tr, m)),
        (submatrix_sub(a, tr, br, m), submatrix_add(b, bl, br, m)),
    ]


def reconstitute(c11: Matrix, c12: Matrix, c21: Matrix, c22: Matrix) -> Matrix:
    """Lay out four ``m x m`` quadrants as one ``2m x 2m`` matrix."""
    m = c11.rows
    elements = []
    for left, right in ((c11, c12), (c21, c22)):
        for i in range(m):
            start = i * m
            elements.extend(left.elements[start:start + m])
            elements.extend(right.elements[start:start + m])
    return Matrix(elements, 2 * m, 2 * m)


def combine(products: Sequence[Matrix]) -> Matrix:
    """
    Recombine M1..M7 into the product matrix.

    Consumes the products: they are accumulated in place.
    """
    m1, m2, m3, m4, m5, m6, m7 = products

    c11 = m1.copy().add(m4).subtract(m5).add(m7)
    c12 = m5.add(m3)
    c21 = m4.add(m2)
    c22 = m1.subtract(m2).add(m3).add(m6)

    return reconstitute(c11, c12, c21, c22)


def _recurse(a: Matrix, b: Matrix, config: StrassenConfig, depth: int) -> Matrix:
    n = a.rows
    if n <= config.base_case_threshold:
        logger.debug("[depth=%d] base n=%d", depth, n)
        return multiply_transposed(a, b)

    logger.debug("[depth=%d] split n=%d -> %d", depth, n, n // 2)
    products = [
        _multiply(left, right, config, depth + 1)
        for left, right in split_products(a, b)
    ]
    return combine(products)


def _multiply(a: Matrix, b: Matrix, config: StrassenConfig, depth: int) -> Matrix:
    rows = a.rows
    a, b, padded = square_operands(a, b)
    product = _recurse(a, b, config, depth)
    if padded:
        product = product.reduce(rows, rows)
    return product


def multiply_strassen(a: Matrix, b: Matrix, config: StrassenConfig = DEFAULT_CONFIG) -> Matrix:
    """
    Multiply ``a`` by ``b`` with Strassen's algorithm.

    Operands are padded with zeros to a common even square size, multiplied
    recursively and the result is cut back to ``a.rows x a.rows``.

    Parameters
    ----------
    a, b : Matrix
        Operands with ``a.rows == b.cols``.
    config : StrassenConfig
        ``config.base_case_threshold`` controls where recursion stops.
    """
    return _multiply(a, b, config, 0)
