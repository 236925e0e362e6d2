"""Command-line input of the distributed benchmarks and checking of their results."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import asdict, dataclass

from parbench.cmd import CmdInput, read_input


@dataclass(frozen=True)
class DistributedInput:
    """Matrix dimensions, thread count and number of machines taking part."""

    num_machines: int
    num_threads: int
    lines_a: int
    columns_a: int
    lines_b: int
    columns_b: int

    @property
    def command(self) -> CmdInput:
        """The same input without the machine count."""
        return CmdInput(
            num_threads=self.num_threads,
            lines_a=self.lines_a,
            columns_a=self.columns_a,
            lines_b=self.lines_b,
            columns_b=self.columns_b,
        )


def read_distributed_input(argv: Sequence[str], world_size: int) -> DistributedInput | None:
    """Read the flags of a command line run on world_size machines; None for -h."""
    if world_size < 1:
        raise ValueError(f"number of machines must be at least 1, got {world_size}")
    ci = read_input(argv)
    if ci is None:
        return None
    return DistributedInput(num_machines=world_size, **asdict(ci))


def result_correct(
    lines: int, columns: int, flat: Sequence[int], matrix: Sequence[Sequence[int]]
) -> bool:
    """Compare a flat row-major result with a matrix, reporting every differing cell."""
    if len(flat) != lines * columns:
        raise ValueError(f"expected {lines * columns} values, got {len(flat)}")
    if len(matrix) < lines or any(len(row) < columns for row in matrix[:lines]):
        raise ValueError(f"matrix must be at least {lines}x{columns}")
    correct = True
    for i, row in enumerate(matrix[:lines]):
        for j in range(columns):
            got, expected = flat[i * columns + j], row[j]
            if got != expected:
                print(
                    f"Found no equal cell: ({i},{j}) distributed({i},{j})={got} ; "
                    f"sequential({i},{j})={expected}"
                )
                correct = False
    return correct