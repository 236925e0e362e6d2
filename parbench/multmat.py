"""Benchmark command comparing sequential, Strassen and threaded multiplication."""

from __future__ import annotations

import random
import sys
from collections.abc import Sequence

from parbench.cmd import CmdInput, Color, InputError, check_input, colored, read_input, usage_text
from parbench.matrix_util import Matrix, mismatches, next_power_of_two, pad_square, random_matrix
from parbench.metrics import cost, efficiency, print_metrics, speedup
from parbench.solver import Solver

LABELS = ("sequential native", "sequential strassen", "parallel native", "parallel optimized")

_WRONG = {
    "sequential strassen": "Sequential multiplication with fewer multiplications has produced a wrong result.",
    "parallel native": "Naive parallel multiplication has produced a wrong result.",
    "parallel optimized": "Optimized parallel multiplication has produced a wrong result.",
}


def _compare(label: str, expected: Matrix, actual: Matrix) -> str | None:
    lines = [
        f"Found no equal cell: ({i},{j}) a({i},{j})={x} ; b({i},{j})={y}"
        for i, j, x, y in mismatches(expected, actual)
    ]
    if not lines:
        return None
    return "\n".join([*lines, _WRONG[label]])


def run_benchmark(
    ci: CmdInput, rng: random.Random | None = None
) -> tuple[dict[str, list[float]], list[str]]:
    """Run every solver; return metrics rows per label and reports of wrong results."""
    check_input(ci)
    rng = rng or random.Random()
    threads = ci.num_threads
    a = random_matrix(ci.lines_a, ci.columns_a, rng)
    b = random_matrix(ci.lines_b, ci.columns_b, rng)
    solver = Solver(ci.lines_a, ci.columns_a, ci.lines_b, ci.columns_b)
    rows: dict[str, list[float]] = {}
    failures: list[str] = []

    reference = solver.sequential_mult(a, b)
    seq = reference.seconds
    rows["sequential native"] = [seq, 1.0, 1.0, 1.0]

    n = next_power_of_two(max(ci.lines_a, ci.columns_a, ci.columns_b))
    timed = solver.strassen_mult_flat(pad_square(a, n), pad_square(b, n), n)
    rows["sequential strassen"] = [timed.seconds, 1.0, 1.0, 1.0]
    outcomes = [("sequential strassen", timed.result)]

    for label, run in (
        ("parallel native", solver.parallel_mult),
        ("parallel optimized", solver.optimized_parallel_multiply),
    ):
        timed = run(threads, a, b)
        t = timed.seconds
        rows[label] = [t, speedup(seq, t), efficiency(seq, t, threads), cost(t, threads)]
        outcomes.append((label, timed.result))

    for label, result in outcomes:
        report = _compare(label, reference.result, result)
        if report:
            failures.append(report)
    return rows, failures


def main(argv: Sequence[str] | None = None) -> int:
    """Parse the command line, run the benchmark and print its metrics."""
    args = list(sys.argv[1:] if argv is None else argv)
    try:
        ci = read_input(args)
        if ci is None:
            print(usage_text(), end="")
            return 1
        check_input(ci)
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
    print(colored(f"    Threads number: {ci.num_threads} \n", Color.DEFAULT), end="")

    rows, failures = run_benchmark(ci)
    for report in failures:
        print(colored(f"{report}\n", Color.RED), end="")
    print(colored("\n    Finished computing.\n    Metrics:\n", Color.GREEN), end="")
    print_metrics(list(rows), list(rows.values()))
    return 0


if __name__ == "__main__":
    sys.exit(main())