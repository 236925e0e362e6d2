# parbench

Small benchmarks comparing ways of multiplying integer matrices — a plain
triple loop, Strassen's algorithm (on nested lists and on flat row-major
lists), thread-parallel versions, and message-passing versions in which
"machines" are threads exchanging messages inside one process — together
with a set of parallel-programming exercises: quadrature estimate of pi,
parallel maps and sums, ring and ping-pong exchanges, tree-shaped scatter
and broadcast, reductions and normalisation.

Solvers are timed and their results are checked against the sequential
product.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Command line

All three commands read the matrix dimensions and the number of threads
from flags:

| flag | meaning                     |
|------|-----------------------------|
| `-a` | lines of matrix A           |
| `-b` | columns of matrix A         |
| `-c` | lines of matrix B           |
| `-d` | columns of matrix B         |
| `-n` | number of threads           |
| `-h` | print usage (exit status 1) |

Each of `-a`, `-b`, `-c`, `-d` and `-n` is required and must be a
strictly positive integer; the columns of A must equal the lines of B,
and neither matrix may hold more than 10e6 cells. Invalid input is
reported in red and the command exits with status 1. Matrices are filled
with random values from 1 to 5.

### parbench-multmat

Runs the sequential, Strassen (flat), naive threaded and optimised
threaded solvers, reports any cell where a result differs from the
sequential product, and prints a table of time, speedup, efficiency and
cost per solver:

```
parbench-multmat -a 700 -b 900 -c 900 -d 600 -n 8
```

### parbench-scatter-gather

Splits A into equal blocks of whole lines, one per machine, multiplies
each block by B on its own thread and gathers the lines of the product.
`-p` gives the number of machines (default 1); `lines_a * columns_a`
must split into whole lines across them. Prints the distributed and the
sequential times and exits with status 1 if the product is wrong:

```
parbench-scatter-gather -a 8 -b 4 -c 4 -d 6 -n 4 -p 4
```

### parbench-send-recv

A root sends each worker a range of lines of A and the whole of B, and
collects the blocks of the product. `-p` gives the number of machines,
root included (default 2, so at least one worker). Prints
`sequential_time,distributed_time`; the sequential time is `-1.000000`
and the exit status 1 when the product is wrong:

```
parbench-send-recv -a 10 -b 5 -c 5 -d 7 -n 4 -p 4
```

## Library use

```python
import random

from parbench.matrix_util import random_matrix, multiply_matrices, equal_matrices
from parbench.strassen import strassen
from parbench.metrics import speedup, efficiency, cost

rng = random.Random(0)
a = random_matrix(4, 4, rng)
b = random_matrix(4, 4, rng)

assert equal_matrices(strassen(a, b), multiply_matrices(a, b))

print(speedup(2.0, 0.5))         # 4.0
print(efficiency(2.0, 0.5, 4))   # 1.0
print(cost(0.5, 4))              # 2.0
```

Modules:

- `parbench.matrix_util` — random matrices, addition, subtraction,
  multiplication, zero-padding to a square (`pad_square`),
  `next_power_of_two`, `flatten`, `mismatches` and `equal_matrices`.
- `parbench.strassen` — `strassen` on nested lists and `strassen_flat`
  on flat lists (orders must be powers of two), with `divide` and
  `unite` for flat quadrants.
- `parbench.metrics` — `speedup`, `efficiency`, `cost`,
  `format_metrics` and `print_metrics`.
- `parbench.solver` — `Solver` with `sequential_mult`, `strassen_mult`,
  `strassen_mult_flat`, `parallel_mult`, `convert` and
  `optimized_parallel_multiply`; each multiplication returns a
  `TimedResult` holding the product and the seconds taken.
- `parbench.cmd` — `read_input`, `check_input`, `CmdInput`,
  `InputError`, `Color` and `colored`.
- `parbench.multmat` — `run_benchmark(ci, rng)` returns the metrics rows
  per solver and the reports of wrong results.
- `parbench.distributed_input` — `read_distributed_input`,
  `DistributedInput` and `result_correct`.
- `parbench.scatter_gather` — `flatten_operands`, `row_block_product`,
  `check_partition` and `scatter_gather_multiply`.
- `parbench.send_recv` — `row_partition`, `worker_multiply` and
  `send_recv_multiply`.
- `parbench.openmp_exercises` — `pi_parallel`, `apply_parallel`,
  `add_matrices_parallel`, `sum_sequential`, `sum_partial_locks`,
  `sum_reduction` and `sum_dynamic`.
- `parbench.trees` — `tree_size`, `tree_height`, `subtree_index` and
  `split_left_right` for the binary scatter tree; `binomial_start` and
  `binomial_targets` for the binomial broadcast.
- `parbench.collectives` — an in-process `Communicator` (`send`,
  `recv`), `run_ranks`, and `ring`, `pingpong`, `reduce_max`,
  `star_scatter`, `tree_scatter`, `binomial_broadcast`,
  `mean_of_cube_means` and `normalize`.

## What it does not do

- Nothing runs across machines or processes. Every "machine" or "rank"
  is a thread in the same Python process, and messages go through
  in-memory mailboxes; no network transport is provided.
- Thread parallelism is subject to Python's global interpreter lock, so
  the measured speedups of the threaded solvers reflect that, not the
  number of cores.
- The exercises in `parbench.openmp_exercises`, `parbench.trees` and
  `parbench.collectives` are library functions only; there is no command
  that prints timing tables for them.