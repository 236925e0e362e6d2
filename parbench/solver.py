"""Timed matrix multiplication solvers: naive, Strassen and threaded."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from time import perf_counter

from parbench.matrix_util import Matrix, flatten
from parbench.strassen import strassen, strassen_flat


@dataclass(frozen=True)
class TimedResult:
    """A product matrix and the wall-clock seconds spent computing it."""

    result: Matrix
    seconds: float


def _require_threads(num_threads: int) -> None:
    if num_threads < 1:
        raise ValueError(f"number of threads must be at least 1, got {num_threads}")


def _row_blocks(lines: int, parts: int) -> Iterator[range]:
    """Contiguous, near-equal blocks of row indices, one per part."""
    size, extra = divmod(lines, parts)
    start = 0
    for k in range(parts):
        stop = start + size + (1 if k < extra else 0)
        yield range(start, stop)
        start = stop


class Solver:
    """Multiplies an A of lines_a x columns_a by a B of lines_b x columns_b."""

    def __init__(self, lines_a: int, columns_a: int, lines_b: int, columns_b: int) -> None:
        if min(lines_a, columns_a, lines_b, columns_b) < 0:
            raise ValueError("matrix dimensions must not be negative")
        if columns_a != lines_b:
            raise ValueError(f"columns of A ({columns_a}) differ from lines of B ({lines_b})")
        self.lines_a = lines_a
        self.columns_a = columns_a
        self.lines_b = lines_b
        self.columns_b = columns_b

    def _check(self, a: Sequence[Sequence[int]], b: Sequence[Sequence[int]]) -> None:
        if len(a) != self.lines_a or any(len(row) != self.columns_a for row in a):
            raise ValueError(f"A must be {self.lines_a}x{self.columns_a}")
        if len(b) != self.lines_b or any(len(row) != self.columns_b for row in b):
            raise ValueError(f"B must be {self.lines_b}x{self.columns_b}")

    def _check_square(self, n: int) -> None:
        if n < max(self.lines_a, self.columns_a, self.columns_b):
            raise ValueError(f"order {n} is too small for the operands")

    def _crop(self, c: Sequence[Sequence[int]]) -> Matrix:
        return [list(row[: self.columns_b]) for row in c[: self.lines_a]]

    def sequential_mult(self, a: Sequence[Sequence[int]], b: Sequence[Sequence[int]]) -> TimedResult:
        """Plain triple-loop product."""
        self._check(a, b)
        start = perf_counter()
        result = [
            [sum(x * brow[j] for x, brow in zip(row, b)) for j in range(self.columns_b)]
            for row in a
        ]
        return TimedResult(result, perf_counter() - start)

    def strassen_mult(
        self, a: Sequence[Sequence[int]], b: Sequence[Sequence[int]], n: int
    ) -> TimedResult:
        """Strassen product of the n x n padded operands, cropped to lines_a x columns_b."""
        self._check_square(n)
        start = perf_counter()
        result = self._crop(strassen(a, b))
        if len(a) != n:
            raise ValueError(f"operands must be {n}x{n}")
        return TimedResult(result, perf_counter() - start)

    def strassen_mult_flat(
        self, a: Sequence[Sequence[int]], b: Sequence[Sequence[int]], n: int
    ) -> TimedResult:
        """Strassen product computed on flat copies of the n x n padded operands."""
        self._check_square(n)
        flat_a, flat_b = flatten(a), flatten(b)
        start = perf_counter()
        c = strassen_flat(n, flat_a, flat_b)
        seconds = perf_counter() - start
        result = [c[i * n : i * n + self.columns_b] for i in range(self.lines_a)]
        return TimedResult(result, seconds)

    def parallel_mult(
        self, num_threads: int, a: Sequence[Sequence[int]], b: Sequence[Sequence[int]]
    ) -> TimedResult:
        """Naive product with rows shared out over a pool of threads."""
        _require_threads(num_threads)
        self._check(a, b)
        columns_b = self.columns_b

        def product_row(row: Sequence[int]) -> list[int]:
            return [sum(x * brow[j] for x, brow in zip(row, b)) for j in range(columns_b)]

        start = perf_counter()
        with ThreadPoolExecutor(max_workers=num_threads) as pool:
            result = list(pool.map(product_row, a))
        return TimedResult(result, perf_counter() - start)

    def convert(
        self, num_threads: int, a: Sequence[Sequence[int]], b: Sequence[Sequence[int]]
    ) -> tuple[list[int], list[int]]:
        """Flatten A row by row and B column by column."""
        _require_threads(num_threads)
        self._check(a, b)
        with ThreadPoolExecutor(max_workers=num_threads) as pool:
            rows_a = list(pool.map(list, a))
            columns_b = list(pool.map(list, zip(*b)))
        return flatten(rows_a), flatten(columns_b)

    def optimized_parallel_multiply(
        self, num_threads: int, a: Sequence[Sequence[int]], b: Sequence[Sequence[int]]
    ) -> TimedResult:
        """Threaded product on flat operands, rows split into static blocks."""
        _require_threads(num_threads)
        ca, lb, cb = self.columns_a, self.lines_b, self.columns_b
        start = perf_counter()
        flat_a, flat_b = self.convert(num_threads, a, b)
        columns = [flat_b[j * lb : (j + 1) * lb] for j in range(cb)]

        def block(rows: range) -> list[list[int]]:
            out = []
            for i in rows:
                row = flat_a[i * ca : (i + 1) * ca]
                out.append([sum(x * y for x, y in zip(row, col)) for col in columns])
            return out

        with ThreadPoolExecutor(max_workers=num_threads) as pool:
            blocks = list(pool.map(block, _row_blocks(self.lines_a, num_threads)))
        result = [row for rows in blocks for row in rows]
        return TimedResult(result, perf_counter() - start)