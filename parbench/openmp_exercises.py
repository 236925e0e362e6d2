"""Shared-memory exercises: pi by quadrature, element-wise maps, matrix sums, array sums."""

from __future__ import annotations

import math
import threading
from collections.abc import Iterator, Sequence
from concurrent.futures import ThreadPoolExecutor

from parbench.matrix_util import Matrix

NBITER = 100_000_000
MAXVAL = 20


def _require_threads(num_threads: int) -> None:
    if num_threads < 1:
        raise ValueError(f"number of threads must be at least 1, got {num_threads}")


def _blocks(n: int, parts: int) -> Iterator[range]:
    """Static schedule: contiguous, near-equal index blocks, one per part."""
    size, extra = divmod(n, parts)
    start = 0
    for k in range(parts):
        stop = start + size + (1 if k < extra else 0)
        yield range(start, stop)
        start = stop


def integrand(x: float) -> float:
    """4 / (1 + x^2), whose integral over [0, 1] is pi."""
    return 4.0 / (1.0 + x * x)


def pi_parallel(nb_threads: int, a: float, b: float, n: int) -> float:
    """Quadrature of the integrand over [a, b] with n steps summed by threads."""
    _require_threads(nb_threads)
    if n <= 0:
        raise ValueError(f"number of steps must be positive, got {n}")
    h = (b - a) / n

    def partial(indices: range) -> float:
        return sum((integrand(a + h * i) for i in indices), 0.0)

    with ThreadPoolExecutor(max_workers=nb_threads) as pool:
        total = sum(pool.map(partial, _blocks(n, nb_threads)), 0.0)
    return h * (total + (integrand(a) + integrand(b)) / 2)


def transform(x: float) -> float:
    """2.17 * log(x) * cos(x), with -inf at zero and nan outside the domain."""
    if math.isnan(x) or math.isinf(x) or x < 0:
        return math.nan
    if x == 0:
        return -math.inf
    return 2.17 * math.log(x) * math.cos(x)


def apply_parallel(values: Sequence[float], num_threads: int) -> list[float]:
    """Apply transform to every value, blocks of values shared out over threads."""
    _require_threads(num_threads)

    def work(indices: range) -> list[float]:
        return [transform(v) for v in values[indices.start : indices.stop]]

    with ThreadPoolExecutor(max_workers=num_threads) as pool:
        parts = list(pool.map(work, _blocks(len(values), num_threads)))
    return [v for part in parts for v in part]


def add_matrices_parallel(
    a: Sequence[Sequence[int]], b: Sequence[Sequence[int]], num_threads: int
) -> Matrix:
    """Element-wise sum of two same-shaped matrices, rows shared out over threads."""
    _require_threads(num_threads)
    if len(a) != len(b) or any(len(ra) != len(rb) for ra, rb in zip(a, b)):
        raise ValueError("matrix shapes differ")

    def add_row(pair: tuple[Sequence[int], Sequence[int]]) -> list[int]:
        ra, rb = pair
        return [x + y for x, y in zip(ra, rb)]

    with ThreadPoolExecutor(max_workers=num_threads) as pool:
        return list(pool.map(add_row, zip(a, b)))


def sum_sequential(values: Sequence[float]) -> float:
    """Sum of the values in order."""
    return sum(values, 0.0)


def sum_partial_locks(values: Sequence[float], num_threads: int) -> float:
    """Each thread sums its block, then adds it to the total under a lock."""
    _require_threads(num_threads)
    total = 0.0
    lock = threading.Lock()

    def work(indices: range) -> None:
        nonlocal total
        local = sum(values[indices.start : indices.stop], 0.0)
        with lock:
            total += local

    with ThreadPoolExecutor(max_workers=num_threads) as pool:
        list(pool.map(work, _blocks(len(values), num_threads)))
    return total


def sum_reduction(values: Sequence[float], num_threads: int) -> float:
    """Partial sums of static blocks combined once every thread is done."""
    _require_threads(num_threads)

    def work(indices: range) -> float:
        return sum(values[indices.start : indices.stop], 0.0)

    with ThreadPoolExecutor(max_workers=num_threads) as pool:
        return sum(pool.map(work, _blocks(len(values), num_threads)), 0.0)


def sum_dynamic(values: Sequence[float], num_threads: int) -> float:
    """Threads take chunks of n / (2 * threads) values as they become free."""
    _require_threads(num_threads)
    n = len(values)
    chunk = max(1, n // (num_threads * 2))
    starts = iter(range(0, n, chunk))
    take_lock = threading.Lock()
    add_lock = threading.Lock()
    total = 0.0

    def work() -> None:
        nonlocal total
        local = 0.0
        while True:
            with take_lock:
                start = next(starts, None)
            if start is None:
                break
            local += sum(values[start : start + chunk], 0.0)
        with add_lock:
            total += local

    with ThreadPoolExecutor(max_workers=num_threads) as pool:
        for future in [pool.submit(work) for _ in range(num_threads)]:
            future.result()
    return total