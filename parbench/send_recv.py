"""Matrix multiplication shared out by a root to workers with point-to-point messages."""

from __future__ import annotations

import queue
import random
import sys
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from time import perf_counter

from parbench.cmd import Color, InputError, check_input, colored, parse_positive, usage_text
from parbench.distributed_input import read_distributed_input
from parbench.matrix_util import Matrix, equal_matrices, random_matrix
from parbench.solver import Solver


def row_partition(lines: int, workers: int) -> list[tuple[int, int]]:
    """(offset, rows) for each worker; the first lines % workers get one extra row."""
    if workers < 1:
        raise ValueError(f"number of workers must be at least 1, got {workers}")
    if lines < 0:
        raise ValueError("number of lines must not be negative")
    avg_rows, extra_rows = divmod(lines, workers)
    partition = []
    offset = 0
    for worker in range(1, workers + 1):
        rows = avg_rows + 1 if worker <= extra_rows else avg_rows
        partition.append((offset, rows))
        offset += rows
    return partition


def worker_multiply(rows_a: Sequence[Sequence[int]], b: Sequence[Sequence[int]]) -> Matrix:
    """Multiply a block of lines of A by the whole of B."""
    if any(len(row) != len(b) for row in rows_a):
        raise ValueError(f"every line of A must hold {len(b)} values")
    columns_b = len(b[0]) if b else 0
    if any(len(row) != columns_b for row in b):
        raise ValueError("every line of B must have the same length")
    return [
        [sum(x * brow[k] for x, brow in zip(row, b)) for k in range(columns_b)]
        for row in rows_a
    ]


def send_recv_multiply(
    a: Sequence[Sequence[int]], b: Sequence[Sequence[int]], workers: int
) -> Matrix:
    """Product A x B computed by `workers` workers fed and collected by a root."""
    partition = row_partition(len(a), workers)
    if any(len(row) != len(b) for row in a):
        raise ValueError(f"columns of A differ from lines of B ({len(b)})")
    columns_b = len(b[0]) if b else 0
    if any(len(row) != columns_b for row in b):
        raise ValueError("every line of B must have the same length")

    inboxes: list[queue.Queue] = [queue.Queue() for _ in range(workers)]
    outboxes: list[queue.Queue] = [queue.Queue() for _ in range(workers)]

    def work(inbox: queue.Queue, outbox: queue.Queue) -> None:
        offset, rows_a, b_copy = inbox.get()
        try:
            outbox.put((offset, len(rows_a), worker_multiply(rows_a, b_copy)))
        except Exception as exc:  # handed back to the root
            outbox.put(exc)

    result: list[list[int] | None] = [None] * len(a)
    with ThreadPoolExecutor(max_workers=workers) as pool:
        for inbox, outbox in zip(inboxes, outboxes):
            pool.submit(work, inbox, outbox)
        for inbox, (offset, rows) in zip(inboxes, partition):
            block = [list(row) for row in a[offset : offset + rows]]
            inbox.put((offset, block, [list(row) for row in b]))
        for outbox in outboxes:
            message = outbox.get()
            if isinstance(message, Exception):
                raise message
            offset, rows, block = message
            result[offset : offset + rows] = block
    return [row for row in result if row is not None]


def _machines(argv: Sequence[str]) -> int:
    """Number of machines given by -p, root included; 2 when absent."""
    args = iter(argv)
    value: str | None = "2"
    for arg in args:
        if arg == "--":
            break
        if arg == "-p":
            value = next(args, None)
        elif arg.startswith("-p"):
            value = arg[2:]
    return parse_positive("p", value)


def main(argv: Sequence[str] | None = None) -> int:
    """Multiply random matrices with a root and workers; print sequential and distributed times."""
    args = list(sys.argv[1:] if argv is None else argv)
    try:
        world_size = _machines(args)
        ci = read_distributed_input(args, world_size)
        if ci is None:
            print(usage_text(), end="")
            return 1
        check_input(ci.command)
    except InputError as exc:
        print(colored(f"{exc}\n", Color.RED), end="")
        return 1

    workers = world_size - 1
    if workers < 1:
        print(colored("ERROR: at least two machines are needed.\n", Color.RED), end="")
        return 1

    print(colored("    OK: Input valid.", Color.GREEN), end="")
    print(
        colored(
            f"\n    A: ({ci.lines_a},{ci.columns_a})\n    B: ({ci.lines_b},{ci.columns_b})\n",
            Color.DEFAULT,
        ),
        end="",
    )
    print(colored(f"\n    Number of workers: {workers}\n", Color.DEFAULT), end="")

    rng = random.Random()
    a = random_matrix(ci.lines_a, ci.columns_a, rng)
    b = random_matrix(ci.lines_b, ci.columns_b, rng)

    start = perf_counter()
    result = send_recv_multiply(a, b, workers)
    elapsed = perf_counter() - start

    reference = Solver(ci.lines_a, ci.columns_a, ci.lines_b, ci.columns_b).sequential_mult(a, b)
    correct = equal_matrices(reference.result, result)
    seq = reference.seconds if correct else -1.0
    print(f"{seq:f},{elapsed:f}")
    return 0 if correct else 1


if __name__ == "__main__":
    sys.exit(main())