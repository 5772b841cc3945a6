"""
Triple-loop multiplication kernels.

Both kernels accept operands with ``a.rows == b.cols`` and return an
``a.rows x a.rows`` product, summing over ``k`` in ``[0, a.cols)``. They add
the terms of each dot product left to right, so for the same inputs they
return bit-identical results; only the memory access order differs.
"""
from __future__ import annotations

from strassen.errors import DimensionMismatch
from strassen.matrix import Matrix


def check_operands(a: Matrix, b: Matrix) -> None:
    if a.rows != b.cols:
        raise DimensionMismatch(
            f"matrix sizes do not match: A: [{a.rows}, {a.cols}], B: [{b.rows}, {b.cols}]"
        )
    if a.cols > b.rows:
        # the k loop would read rows of b that do not exist
        raise IndexError(
            f"B has {b.rows} rows but A has {a.cols} columns to multiply against"
        )


def multiply_naive(a: Matrix, b: Matrix) -> Matrix:
    check_operands(a, b)
    m, n = a.rows, a.cols
    left, right, width = a.elements, b.elements, b.cols

    product = []
    for i in range(m):
        row = i * n
        for j in range(m):
            total = 0
            for k in range(n):
                total += left[row + k] * right[k * width + j]
            product.append(total)
    return Matrix(product, m, m)


def multiply_transposed(a: Matrix, b: Matrix) -> Matrix:
    """
    Multiply against the transpose of ``b`` so both operands are read along rows.

    Still O(n^3), but the inner loop walks two contiguous slices instead of
    striding down a column of ``b``.
    """
    check_operands(a, b)
    m, n = a.rows, a.cols
    t = b.transpose()
    left, right, width = a.elements, t.elements, t.cols

    columns = [right[j * width:j * width + n] for j in range(m)]
    product = []
    for i in range(m):
        row = left[i * n:(i + 1) * n]
        for column in columns:
            total = 0
            for x, y in zip(row, column):
                total += x * y
            product.append(total)
    return Matrix(product, m, m)


def multiply_numpy(a: Matrix, b: Matrix) -> Matrix:
    """Reference product computed by numpy (BLAS for floating-point input)."""
    check_operands(a, b)
    return Matrix.from_numpy(a.to_numpy() @ b.to_numpy()[:a.cols, :])
