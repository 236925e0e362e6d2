"""Row-block matrix multiplication distributed by scatter and gather."""

from __future__ import annotations

import random
import sys
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from time import perf_counter

from parbench.cmd import Color, InputError, check_input, colored, parse_positive, usage_text
from parbench.distributed_input import DistributedInput, read_distributed_input, result_correct
from parbench.matrix_util import random_matrix
from parbench.solver import Solver


def _check_shape(mat: Sequence[Sequence[int]], lines: int, columns: int, name: str) -> None:
    if len(mat) != lines or any(len(row) != columns for row in mat):
        raise ValueError(f"{name} must be {lines}x{columns}")


def flatten_operands(
    ci: DistributedInput, a: Sequence[Sequence[int]], b: Sequence[Sequence[int]]
) -> tuple[list[int], list[int]]:
    """Flatten A row after row and B column after column."""
    _check_shape(a, ci.lines_a, ci.columns_a, "A")
    _check_shape(b, ci.lines_b, ci.columns_b, "B")
    flat_a = [value for row in a for value in row]
    flat_b = [value for column in zip(*b) for value in column]
    if not b:
        flat_b = []
    return flat_a, flat_b


def row_block_product(
    ci: DistributedInput, part_a: Sequence[int], flat_b: Sequence[int], rows: int
) -> list[int]:
    """Multiply `rows` flat lines of A by the column-major flat B; flat lines of C."""
    ca, lb, cb = ci.columns_a, ci.lines_b, ci.columns_b
    if len(part_a) != rows * ca:
        raise ValueError(f"expected {rows * ca} values of A, got {len(part_a)}")
    if len(flat_b) != lb * cb:
        raise ValueError(f"expected {lb * cb} values of B, got {len(flat_b)}")
    columns = [flat_b[k : k + lb] for k in range(0, lb * cb, lb)]
    result: list[int] = []
    for r in range(rows):
        line = part_a[r * ca : (r + 1) * ca]
        result.extend(sum(x * y for x, y in zip(line, column)) for column in columns)
    return result


def check_partition(ci: DistributedInput, world_size: int) -> int:
    """Lines of A each machine receives; raise when A cannot be split in whole lines."""
    if world_size < 1:
        raise ValueError(f"number of machines must be at least 1, got {world_size}")
    cells = ci.lines_a * ci.columns_a
    if cells % world_size != 0:
        raise ValueError("The number of machines must divide LINES_A * COLUMNS_A")
    if (cells // world_size) % ci.columns_a != 0:
        raise ValueError("LINES_A * COLUMNS_A / number of machines must be a multiple of COLUMNS_A")
    return cells // world_size // ci.columns_a


def scatter_gather_multiply(
    ci: DistributedInput,
    a: Sequence[Sequence[int]],
    b: Sequence[Sequence[int]],
    world_size: int,
) -> list[int]:
    """Product A x B as a flat row-major list, computed by world_size ranks."""
    if ci.columns_a != ci.lines_b:
        raise ValueError("columns of A differ from lines of B")
    rows = check_partition(ci, world_size)
    flat_a, flat_b = flatten_operands(ci, a, b)
    length = rows * ci.columns_a
    parts = [flat_a[rank * length : (rank + 1) * length] for rank in range(world_size)]

    def compute(part: list[int]) -> list[int]:
        return row_block_product(ci, part, flat_b, rows)

    with ThreadPoolExecutor(max_workers=world_size) as pool:
        gathered = list(pool.map(compute, parts))
    return [value for block in gathered for value in block]


def _machines(argv: Sequence[str]) -> int:
    """Number of machines given by -p; 1 when absent."""
    args = iter(argv)
    value: str | None = "1"
    for arg in args:
        if arg == "--":
            break
        if arg == "-p":
            value = next(args, None)
        elif arg.startswith("-p"):
            value = arg[2:]
    return parse_positive("p", value)


def main(argv: Sequence[str] | None = None) -> int:
    """Multiply random matrices by scatter and gather and compare with the sequential product."""
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

    print(colored("    OK: Input valid.", Color.GREEN), end="")
    print(
        colored(
            f"\n    A: ({ci.lines_a},{ci.columns_a})\n    B: ({ci.lines_b},{ci.columns_b})\n",
            Color.DEFAULT,
        ),
        end="",
    )
    try:
        check_partition(ci, world_size)
    except ValueError as exc:
        print(exc)
        return 1

    rng = random.Random()
    a = random_matrix(ci.lines_a, ci.columns_a, rng)
    b = random_matrix(ci.lines_b, ci.columns_b, rng)
    reference = Solver(ci.lines_a, ci.columns_a, ci.lines_b, ci.columns_b).sequential_mult(a, b)

    start = perf_counter()
    result = scatter_gather_multiply(ci, a, b, world_size)
    elapsed = perf_counter() - start
    print()
    print(f"    Time used with scatter and gather: {elapsed:f}:")
    print(f"    Time used in sequential: {reference.seconds:f}:")
    if not result_correct(ci.lines_a, ci.columns_b, result, reference.result):
        print("error mat not equal ")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())