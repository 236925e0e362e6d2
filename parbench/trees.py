"""Rank arithmetic of binary-tree scatters and binomial-tree broadcasts."""

from __future__ import annotations

from collections.abc import Iterator, Sequence


def tree_size(root: int, p: int) -> int:
    """Number of ranks below p in the heap-numbered subtree rooted at root."""
    if root >= p:
        return 0
    return tree_size(root * 2 + 1, p) + 1 + tree_size(root * 2 + 2, p)


def tree_height(root: int, p: int) -> int:
    """Number of levels of the heap-numbered subtree rooted at root."""
    if root >= p:
        return 0
    return max(tree_height(root * 2 + 1, p), tree_height(root * 2 + 2, p)) + 1


def subtree_index(root: int, rank_sub: int, rank: int, p: int) -> int:
    """Index of rank in the subtree rooted at root, numbered from rank_sub; 0 if absent."""
    if root >= p:
        return 0
    if root == rank:
        return rank_sub
    return subtree_index(root * 2 + 1, rank_sub * 2 + 1, rank, p) + subtree_index(
        root * 2 + 2, rank_sub * 2 + 2, rank, p
    )


def _level(node: int, level: int, p: int) -> Iterator[int]:
    """Ranks `level - 1` steps below node, left to right."""
    if node >= p:
        return
    if level == 1:
        yield node
    elif level > 1:
        yield from _level(node * 2 + 1, level - 1, p)
        yield from _level(node * 2 + 2, level - 1, p)


def _collect(arr: Sequence[int], rank: int, child: int, p: int) -> list[int]:
    return [
        arr[subtree_index(rank, 0, node, p)]
        for level in range(1, tree_height(child, p) + 1)
        for node in _level(child, level, p)
    ]


def split_left_right(arr: Sequence[int], rank: int, p: int) -> tuple[list[int], list[int]]:
    """Values rank holds for its left and its right subtree, each in level order."""
    if not 0 <= rank < p:
        raise ValueError(f"rank {rank} is outside a tree of {p} ranks")
    expected = tree_size(rank, p)
    if len(arr) != expected:
        raise ValueError(f"rank {rank} must hold {expected} values, got {len(arr)}")
    return _collect(arr, rank, rank * 2 + 1, p), _collect(arr, rank, rank * 2 + 2, p)


def binomial_start(x: int) -> int:
    """Smallest power of two strictly above x, the first offset rank x forwards to."""
    if x < 1:
        raise ValueError(f"rank must be positive, got {x}")
    return 1 << x.bit_length()


def binomial_targets(rank: int, world_size: int) -> list[int]:
    """Ranks that rank forwards the token to in a binomial-tree broadcast from rank 0."""
    if not 0 <= rank < world_size:
        raise ValueError(f"rank {rank} is outside a world of {world_size}")
    targets = []
    if rank == 0:
        i = 1
        while i < world_size:
            targets.append(i)
            i *= 2
    else:
        i = binomial_start(rank)
        while i + rank < world_size:
            targets.append(i + rank)
            i *= 2
    return targets