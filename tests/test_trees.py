import pytest

from parbench.trees import (
    binomial_start,
    binomial_targets,
    split_left_right,
    subtree_index,
    tree_height,
    tree_size,
)


@pytest.mark.parametrize("p", [1, 2, 5, 8, 13])
def test_tree_size_of_whole_tree(p):
    assert tree_size(0, p) == p


def test_tree_size_outside_is_zero():
    assert tree_size(8, 8) == 0
    assert tree_height(9, 8) == 0


@pytest.mark.parametrize("p", [1, 3, 4, 7, 8, 20])
def test_tree_height_bounds(p):
    h = tree_height(0, p)
    assert 2 ** (h - 1) <= p < 2**h


@pytest.mark.parametrize("p", [3, 8, 11])
def test_subtree_index_from_root_is_identity(p):
    assert [subtree_index(0, 0, k, p) for k in range(p)] == list(range(p))


def test_subtree_index_of_itself_is_zero():
    assert subtree_index(3, 0, 3, 8) == 0


def test_split_left_right_whole_tree():
    left, right = split_left_right(list(range(8)), 0, 8)
    assert left == [1, 3, 4, 7]
    assert right == [2, 5, 6]


@pytest.mark.parametrize("p", [2, 6, 8, 10])
def test_split_sizes_match_subtrees(p):
    left, right = split_left_right([10 * k for k in range(p)], 0, p)
    assert len(left) == tree_size(1, p)
    assert len(right) == tree_size(2, p)
    assert left[0] == 10
    if p > 2:
        assert right[0] == 20


def test_split_rejects_wrong_length():
    with pytest.raises(ValueError):
        split_left_right([1, 2], 0, 8)


def test_binomial_start_is_power_of_two_above():
    for x in range(1, 40):
        s = binomial_start(x)
        assert s & (s - 1) == 0
        assert x < s <= 2 * x


def test_binomial_start_rejects_zero():
    with pytest.raises(ValueError):
        binomial_start(0)


def test_binomial_targets_root():
    assert binomial_targets(0, 8) == [1, 2, 4]


@pytest.mark.parametrize("world", [1, 2, 5, 8, 13, 16])
def test_binomial_targets_reach_every_rank_once(world):
    reached = [t for r in range(world) for t in binomial_targets(r, world)]
    assert sorted(reached) == list(range(1, world))


def test_binomial_targets_rejects_bad_rank():
    with pytest.raises(ValueError):
        binomial_targets(4, 4)