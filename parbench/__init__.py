"""Matrix multiplication benchmarks with thread-simulated message passing, and parallel-programming exercises."""

__version__ = "0.1.0"

__all__ = [
    "cmd",
    "collectives",
    "distributed_input",
    "matrix_util",
    "metrics",
    "multmat",
    "openmp_exercises",
    "scatter_gather",
    "send_recv",
    "solver",
    "strassen",
    "trees",
]