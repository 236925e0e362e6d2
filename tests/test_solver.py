import random

import pytest

from parbench.matrix_util import flatten, multiply_matrices, next_power_of_two, pad_square, random_matrix
from parbench.solver import Solver, TimedResult


@pytest.fixture
def operands():
    rng = random.Random(7)
    a = random_matrix(3, 5, rng)
    b = random_matrix(5, 2, rng)
    return a, b, multiply_matrices(a, b)


def test_sequential_matches_product(operands):
    a, b, expected = operands
    timed = Solver(3, 5, 5, 2).sequential_mult(a, b)
    assert timed.result == expected
    assert timed.seconds >= 0


def test_known_product():
    timed = Solver(2, 2, 2, 2).sequential_mult([[1, 2], [3, 4]], [[5, 6], [7, 8]])
    assert timed.result == [[19, 22], [43, 50]]


def test_strassen_mult_on_padded(operands):
    a, b, expected = operands
    n = next_power_of_two(5)
    timed = Solver(3, 5, 5, 2).strassen_mult(pad_square(a, n), pad_square(b, n), n)
    assert timed.result == expected


def test_strassen_mult_flat_on_padded(operands):
    a, b, expected = operands
    n = next_power_of_two(5)
    timed = Solver(3, 5, 5, 2).strassen_mult_flat(pad_square(a, n), pad_square(b, n), n)
    assert timed.result == expected


def test_strassen_order_too_small(operands):
    a, b, _ = operands
    with pytest.raises(ValueError):
        Solver(3, 5, 5, 2).strassen_mult_flat(pad_square(a, 5), pad_square(b, 5), 4)


@pytest.mark.parametrize("threads", [1, 2, 3, 8])
def test_parallel_mult(operands, threads):
    a, b, expected = operands
    assert Solver(3, 5, 5, 2).parallel_mult(threads, a, b).result == expected


@pytest.mark.parametrize("threads", [1, 2, 3, 8])
def test_optimized_parallel(operands, threads):
    a, b, expected = operands
    timed = Solver(3, 5, 5, 2).optimized_parallel_multiply(threads, a, b)
    assert isinstance(timed, TimedResult)
    assert timed.result == expected


def test_convert_layouts(operands):
    a, b, _ = operands
    flat_a, flat_b = Solver(3, 5, 5, 2).convert(2, a, b)
    assert flat_a == flatten(a)
    assert flat_b == flatten([list(col) for col in zip(*b)])


def test_zero_threads_rejected(operands):
    a, b, _ = operands
    with pytest.raises(ValueError):
        Solver(3, 5, 5, 2).parallel_mult(0, a, b)


def test_wrong_shape_rejected(operands):
    a, b, _ = operands
    with pytest.raises(ValueError):
        Solver(3, 5, 5, 2).sequential_mult(b, a)


def test_inconsistent_dimensions_rejected():
    with pytest.raises(ValueError):
        Solver(2, 3, 4, 2)