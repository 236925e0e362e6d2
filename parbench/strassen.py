"""Strassen multiplication on nested and on flat row-major square matrices."""

from __future__ import annotations

from collections.abc import Sequence

from parbench.matrix_util import Matrix, add_matrices, multiply_matrices, subtract_matrices


def _require_power_of_two(n: int) -> None:
    if n < 1 or n & (n - 1):
        raise ValueError(f"matrix order must be a positive power of two, got {n}")


def _require_square(mat: Sequence[Sequence[int]], n: int) -> None:
    if len(mat) != n or any(len(row) != n for row in mat):
        raise ValueError(f"expected a {n}x{n} matrix")


def strassen(a: Sequence[Sequence[int]], b: Sequence[Sequence[int]]) -> Matrix:
    """Product of two n x n matrices, n a power of two, by Strassen's method."""
    n = len(a)
    _require_power_of_two(n)
    _require_square(a, n)
    _require_square(b, n)
    return _strassen([list(r) for r in a], [list(r) for r in b])


def _quadrants(m: Matrix) -> tuple[Matrix, Matrix, Matrix, Matrix]:
    h = len(m) // 2
    top, bottom = m[:h], m[h:]
    return (
        [row[:h] for row in top],
        [row[h:] for row in top],
        [row[:h] for row in bottom],
        [row[h:] for row in bottom],
    )


def _strassen(a: Matrix, b: Matrix) -> Matrix:
    n = len(a)
    if n == 1:
        return [[a[0][0] * b[0][0]]]
    if n == 2:
        return multiply_matrices(a, b)
    a11, a12, a21, a22 = _quadrants(a)
    b11, b12, b21, b22 = _quadrants(b)
    add, sub = add_matrices, subtract_matrices

    m1 = _strassen(add(a11, a22), add(b11, b22))
    m2 = _strassen(add(a21, a22), b11)
    m3 = _strassen(a11, sub(b12, b22))
    m4 = _strassen(a22, sub(b21, b11))
    m5 = _strassen(add(a11, a12), b22)
    m6 = _strassen(sub(a21, a11), add(b11, b12))
    m7 = _strassen(sub(a12, a22), add(b21, b22))

    c11 = add(add(m1, m4), sub(m7, m5))
    c12 = add(m3, m5)
    c21 = add(m2, m4)
    c22 = add(sub(m1, m2), add(m3, m6))
    return [l + r for l, r in zip(c11, c12)] + [l + r for l, r in zip(c21, c22)]


def _require_flat(flat: Sequence[int], n: int) -> None:
    if len(flat) != n * n:
        raise ValueError(f"expected {n * n} values for a {n}x{n} matrix, got {len(flat)}")


def divide(flat: Sequence[int], n: int) -> tuple[list[int], list[int], list[int], list[int]]:
    """Split a flat n x n matrix into its four flat quadrants."""
    if n < 2 or n % 2:
        raise ValueError(f"matrix order must be even and positive, got {n}")
    _require_flat(flat, n)
    h = n // 2
    rows = [flat[i * n:(i + 1) * n] for i in range(n)]

    def block(selected: list[Sequence[int]], lo: int, hi: int) -> list[int]:
        return [value for row in selected for value in row[lo:hi]]

    return (
        block(rows[:h], 0, h),
        block(rows[:h], h, n),
        block(rows[h:], 0, h),
        block(rows[h:], h, n),
    )


def unite(
    n: int,
    top_left: Sequence[int],
    top_right: Sequence[int],
    bottom_left: Sequence[int],
    bottom_right: Sequence[int],
) -> list[int]:
    """Assemble four flat (n/2) x (n/2) quadrants into one flat n x n matrix."""
    if n < 2 or n % 2:
        raise ValueError(f"matrix order must be even and positive, got {n}")
    h = n // 2
    for part in (top_left, top_right, bottom_left, bottom_right):
        _require_flat(part, h)

    def rows(left: Sequence[int], right: Sequence[int]) -> list[int]:
        return [
            value
            for i in range(h)
            for value in (*left[i * h:(i + 1) * h], *right[i * h:(i + 1) * h])
        ]

    return rows(top_left, top_right) + rows(bottom_left, bottom_right)


def _add(a: Sequence[int], b: Sequence[int]) -> list[int]:
    return [x + y for x, y in zip(a, b)]


def _sub(a: Sequence[int], b: Sequence[int]) -> list[int]:
    return [x - y for x, y in zip(a, b)]


def strassen_flat(n: int, a: Sequence[int], b: Sequence[int]) -> list[int]:
    """Strassen product of two flat row-major n x n matrices, n a power of two."""
    _require_power_of_two(n)
    _require_flat(a, n)
    _require_flat(b, n)
    return _strassen_flat(n, list(a), list(b))


def _strassen_flat(n: int, a: list[int], b: list[int]) -> list[int]:
    if n == 1:
        return [a[0] * b[0]]
    h = n // 2
    a11, a12, a21, a22 = divide(a, n)
    b11, b12, b21, b22 = divide(b, n)

    m1 = _strassen_flat(h, _add(a11, a22), _add(b11, b22))
    m2 = _strassen_flat(h, _add(a21, a22), b11)
    m3 = _strassen_flat(h, a11, _sub(b12, b22))
    m4 = _strassen_flat(h, a22, _sub(b21, b11))
    m5 = _strassen_flat(h, _add(a11, a12), b22)
    m6 = _strassen_flat(h, _sub(a21, a11), _add(b11, b12))
    m7 = _strassen_flat(h, _sub(a12, a22), _add(b21, b22))

    c11 = _add(_add(m1, m4), _sub(m7, m5))
    c12 = _add(m3, m5)
    c21 = _add(m2, m4)
    c22 = _add(_sub(m1, m2), _add(m3, m6))
    return unite(n, c11, c12, c21, c22)