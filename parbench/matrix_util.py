"""Small dense integer matrix helpers built on lists of rows."""

from __future__ import annotations

import random
from collections.abc import Iterator, Sequence

MAX_VAL = 5
MIN_VAL = 1

Matrix = list[list[int]]


def _shape(mat: Sequence[Sequence[int]]) -> tuple[int, int]:
    return len(mat), (len(mat[0]) if mat else 0)


def _require_same_shape(a: Sequence[Sequence[int]], b: Sequence[Sequence[int]]) -> None:
    if _shape(a) != _shape(b) or any(len(ra) != len(rb) for ra, rb in zip(a, b)):
        raise ValueError(f"matrix shapes differ: {_shape(a)} and {_shape(b)}")


def random_matrix(lines: int, columns: int, rng: random.Random | None = None) -> Matrix:
    """Return a lines x columns matrix of values in [MIN_VAL, MIN_VAL + MAX_VAL)."""
    if lines < 0 or columns < 0:
        raise ValueError("matrix dimensions must not be negative")
    rng = rng or random.Random()
    return [[rng.randrange(MAX_VAL) + MIN_VAL for _ in range(columns)] for _ in range(lines)]


def format_matrix(mat: Sequence[Sequence[int]]) -> str:
    """Render a matrix one row per line, each value followed by a space and a tab."""
    return "".join("".join(f"{value} \t" for value in row) + "\n" for row in mat)


def add_matrices(a: Sequence[Sequence[int]], b: Sequence[Sequence[int]]) -> Matrix:
    """Element-wise sum of two matrices of the same shape."""
    _require_same_shape(a, b)
    return [[x + y for x, y in zip(ra, rb)] for ra, rb in zip(a, b)]


def subtract_matrices(a: Sequence[Sequence[int]], b: Sequence[Sequence[int]]) -> Matrix:
    """Element-wise difference a - b of two matrices of the same shape."""
    _require_same_shape(a, b)
    return [[x - y for x, y in zip(ra, rb)] for ra, rb in zip(a, b)]


def multiply_matrices(a: Sequence[Sequence[int]], b: Sequence[Sequence[int]]) -> Matrix:
    """Ordinary matrix product a x b."""
    inner = _shape(a)[1]
    if a and inner != len(b):
        raise ValueError(f"cannot multiply {_shape(a)} by {_shape(b)}")
    columns = list(zip(*b))
    return [[sum(x * y for x, y in zip(row, col)) for col in columns] for row in a]


def pad_square(mat: Sequence[Sequence[int]], n: int) -> Matrix:
    """Copy a matrix into the top-left corner of an n x n zero matrix."""
    lines, columns = _shape(mat)
    if lines > n or columns > n:
        raise ValueError(f"matrix {lines}x{columns} does not fit in {n}x{n}")
    return [list(row) + [0] * (n - len(row)) for row in mat] + [[0] * n for _ in range(n - lines)]


def next_power_of_two(n: int) -> int:
    """Smallest power of two not below n; 0 when n is not positive."""
    if n <= 0:
        return 0
    return 1 << (n - 1).bit_length()


def flatten(mat: Sequence[Sequence[int]]) -> list[int]:
    """Row-major flattening of a matrix."""
    return [value for row in mat for value in row]


def mismatches(
    a: Sequence[Sequence[int]], b: Sequence[Sequence[int]]
) -> Iterator[tuple[int, int, int, int]]:
    """Yield (row, column, a_value, b_value) for every cell where a and b differ."""
    _require_same_shape(a, b)
    for i, (ra, rb) in enumerate(zip(a, b)):
        for j, (x, y) in enumerate(zip(ra, rb)):
            if x != y:
                yield i, j, x, y


def equal_matrices(a: Sequence[Sequence[int]], b: Sequence[Sequence[int]]) -> bool:
    """True when both matrices have the same shape and the same cells."""
    return next(mismatches(a, b), None) is None