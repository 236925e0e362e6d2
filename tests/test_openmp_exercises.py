import math
import random

import pytest

from parbench.matrix_util import add_matrices, random_matrix
from parbench.openmp_exercises import (
    MAXVAL,
    add_matrices_parallel,
    apply_parallel,
    integrand,
    pi_parallel,
    sum_dynamic,
    sum_partial_locks,
    sum_reduction,
    sum_sequential,
    transform,
)


def test_integrand_end_points():
    assert integrand(0.0) == 4.0
    assert integrand(1.0) == 2.0


def test_integrand_decreases_on_unit_interval():
    points = [i / 10 for i in range(11)]
    values = [integrand(x) for x in points]
    assert values == sorted(values, reverse=True)


@pytest.mark.parametrize("threads", [1, 2, 5])
def test_pi_parallel_is_close_to_pi(threads):
    r = pi_parallel(threads, 0.0, 1.0, 2000)
    assert abs(r - math.pi) < 0.01
    assert r > math.pi


def test_pi_parallel_independent_of_threads():
    one = pi_parallel(1, 0.0, 1.0, 5000)
    for threads in (2, 3, 12):
        assert math.isclose(pi_parallel(threads, 0.0, 1.0, 5000), one, rel_tol=1e-12)


def test_pi_parallel_converges():
    coarse = abs(pi_parallel(2, 0.0, 1.0, 100) - math.pi)
    fine = abs(pi_parallel(2, 0.0, 1.0, 10000) - math.pi)
    assert fine < coarse


def test_pi_parallel_rejects_bad_arguments():
    with pytest.raises(ValueError):
        pi_parallel(0, 0.0, 1.0, 10)
    with pytest.raises(ValueError):
        pi_parallel(2, 0.0, 1.0, 0)


def test_transform_of_one_is_zero():
    assert transform(1.0) == 0.0


def test_transform_out_of_domain():
    assert math.isinf(transform(0.0)) and transform(0.0) < 0
    assert math.isnan(transform(-1.0))
    assert math.isnan(transform(math.inf))


@pytest.mark.parametrize("threads", [1, 3, 8, 40])
def test_apply_parallel_maps_every_value(threads):
    rng = random.Random(threads)
    values = [float(rng.randrange(1, MAXVAL)) for _ in range(25)]
    assert apply_parallel(values, threads) == [transform(v) for v in values]


def test_apply_parallel_rejects_no_threads():
    with pytest.raises(ValueError):
        apply_parallel([1.0], 0)


@pytest.mark.parametrize("threads", [1, 2, 7])
def test_add_matrices_parallel_matches_sequential(threads):
    rng = random.Random(threads)
    a = random_matrix(6, 5, rng)
    b = random_matrix(6, 5, rng)
    assert add_matrices_parallel(a, b, threads) == add_matrices(a, b)


def test_add_matrices_parallel_rejects_shape_mismatch():
    with pytest.raises(ValueError):
        add_matrices_parallel([[1, 2]], [[1, 2, 3]], 2)


@pytest.mark.parametrize("threads", [1, 2, 3, 4, 16, 100])
def test_all_sums_agree(threads):
    rng = random.Random(threads)
    values = [float(rng.randrange(MAXVAL)) for _ in range(97)]
    expected = sum_sequential(values)
    assert sum_partial_locks(values, threads) == expected
    assert sum_reduction(values, threads) == expected
    assert sum_dynamic(values, threads) == expected


def test_sums_of_empty_array_agree():
    assert sum_reduction([], 3) == sum_sequential([])
    assert sum_dynamic([], 3) == sum_sequential([])
    assert sum_partial_locks([], 3) == sum_sequential([])


def test_sequential_sum_is_sum_of_values():
    values = [1.0, 2.0, 3.0]
    assert sum_sequential(values) == sum(values)


def test_sums_reject_no_threads():
    with pytest.raises(ValueError):
        sum_dynamic([1.0], 0)
    with pytest.raises(ValueError):
        sum_reduction([1.0], 0)
    with pytest.raises(ValueError):
        sum_partial_locks([1.0], 0)