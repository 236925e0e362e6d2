"""Message passing between ranks run as threads, and the collectives built on it."""

from __future__ import annotations

import threading
import time
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor
from typing import Any

from parbench.trees import binomial_targets, split_left_right, tree_size

PING_PONG_LIMIT = 10
ROOT = 0


class Communicator:
    """Mailboxes for world_size ranks; messages between a pair arrive in order."""

    def __init__(self, world_size: int) -> None:
        if world_size < 1:
            raise ValueError(f"world size must be at least 1, got {world_size}")
        self.world_size = world_size
        self.timeout: float | None = 30.0
        self._boxes: list[list[tuple[int, Any]]] = [[] for _ in range(world_size)]
        self._ready = threading.Condition()

    def _check(self, rank: int) -> None:
        if not 0 <= rank < self.world_size:
            raise ValueError(f"rank {rank} is outside a world of {self.world_size}")

    def send(self, source: int, dest: int, value: Any) -> None:
        """Deliver value from source to the mailbox of dest."""
        self._check(source)
        self._check(dest)
        with self._ready:
            self._boxes[dest].append((source, value))
            self._ready.notify_all()

    def recv(self, dest: int, source: int | None = None) -> tuple[int, Any]:
        """Take the oldest message for dest, from source or from anyone when None."""
        self._check(dest)
        if source is not None:
            self._check(source)
        deadline = None if self.timeout is None else time.monotonic() + self.timeout
        box = self._boxes[dest]
        with self._ready:
            while True:
                for k, (sender, value) in enumerate(box):
                    if source is None or sender == source:
                        del box[k]
                        return sender, value
                remaining = None if deadline is None else deadline - time.monotonic()
                if remaining is not None and remaining <= 0:
                    raise TimeoutError(f"rank {dest} waited too long for a message")
                self._ready.wait(remaining)


def run_ranks(world_size: int, func: Callable[[Communicator, int], Any]) -> list[Any]:
    """Run func(comm, rank) for every rank concurrently; results in rank order."""
    comm = Communicator(world_size)
    with ThreadPoolExecutor(max_workers=world_size) as pool:
        futures = [pool.submit(func, comm, rank) for rank in range(world_size)]
        return [future.result() for future in futures]


def ring(world_size: int) -> list[int]:
    """Pass a token once round a ring, each rank adding one; values each rank received."""

    def rank_main(comm: Communicator, rank: int) -> int:
        nxt, prev = (rank + 1) % world_size, (rank - 1) % world_size
        if rank == 0:
            comm.send(rank, nxt, 1)
            return comm.recv(rank, prev)[1]
        received = comm.recv(rank, prev)[1]
        comm.send(rank, nxt, received + 1)
        return received

    return run_ranks(world_size, rank_main)


def pingpong(limit: int = PING_PONG_LIMIT) -> tuple[list[int], list[int]]:
    """Two ranks bounce a growing counter until it reaches limit; what each received."""

    def rank_main(comm: Communicator, rank: int) -> list[int]:
        neighbor = (rank + 1) % 2
        count = 0
        received = []
        while count < limit:
            if rank == count % 2:
                count += 1
                comm.send(rank, neighbor, count)
            else:
                count = comm.recv(rank, neighbor)[1]
                received.append(count)
        return received

    first, second = run_ranks(2, rank_main)
    return first, second


def _local_max(values: Sequence[int]) -> int:
    best = -1
    for value in values:
        if value >= best:
            best = value
    return best


def reduce_max(chunks: Sequence[Sequence[int]]) -> tuple[list[int], int]:
    """Maximum of each rank's chunk, and their maximum gathered at the root."""
    world = len(chunks)

    def rank_main(comm: Communicator, rank: int) -> tuple[int, int | None]:
        local = _local_max(chunks[rank])
        comm.send(rank, ROOT, local)
        if rank != ROOT:
            return local, None
        return local, max(comm.recv(ROOT)[1] for _ in range(world))

    results = run_ranks(world, rank_main)
    return [local for local, _ in results], results[ROOT][1]


def star_scatter(values: Sequence[int]) -> list[int]:
    """The root sends value i straight to rank i; what each rank received."""

    def rank_main(comm: Communicator, rank: int) -> int:
        if rank == ROOT:
            for dest, value in enumerate(values):
                comm.send(ROOT, dest, value)
        return comm.recv(rank, ROOT)[1]

    return run_ranks(len(values), rank_main)


def tree_scatter(values: Sequence[int]) -> list[list[int]]:
    """Scatter down a binary tree of len(values) ranks; what each rank held."""
    p = len(values)

    def rank_main(comm: Communicator, rank: int) -> list[int]:
        if rank == ROOT:
            held = list(values)
        else:
            held = comm.recv(rank, (rank - 1) // 2)[1]
        left, right = split_left_right(held, rank, p)
        for child, part in ((rank * 2 + 1, left), (rank * 2 + 2, right)):
            if child < p and part:
                comm.send(rank, child, part)
        return held

    results = run_ranks(p, rank_main)
    for rank, held in enumerate(results):
        if len(held) != tree_size(rank, p):
            raise RuntimeError(f"rank {rank} received {len(held)} values")
    return results


def binomial_broadcast(world_size: int, token: int = 42) -> list[tuple[int | None, int]]:
    """Broadcast a token along a binomial tree; (sender, token) per rank, root sender None."""

    def rank_main(comm: Communicator, rank: int) -> tuple[int | None, int]:
        if rank == ROOT:
            sender, value = None, token
        else:
            sender, value = comm.recv(rank)
        for dest in binomial_targets(rank, world_size):
            comm.send(rank, dest, value)
        return sender, value

    return run_ranks(world_size, rank_main)


def mean_of_cube_means(values: Sequence[int], world_size: int) -> tuple[list[float], float]:
    """Scatter equal chunks, average their cubes on each rank, then average the means."""
    if world_size < 1:
        raise ValueError(f"world size must be at least 1, got {world_size}")
    if not values or len(values) % world_size:
        raise ValueError("the number of values must be a positive multiple of the world size")
    chunk = len(values) // world_size

    def rank_main(comm: Communicator, rank: int) -> tuple[float, float | None]:
        if rank == ROOT:
            for dest in range(world_size):
                comm.send(ROOT, dest, list(values[dest * chunk : (dest + 1) * chunk]))
        part = comm.recv(rank, ROOT)[1]
        mean = sum((v * v * v for v in part), 0.0) / chunk
        comm.send(rank, ROOT, (rank, mean))
        if rank != ROOT:
            return mean, None
        gathered = dict(comm.recv(ROOT)[1] for _ in range(world_size))
        return mean, sum(gathered[r] for r in range(world_size)) / world_size

    results = run_ranks(world_size, rank_main)
    return [mean for mean, _ in results], results[ROOT][1]


def _truncating_div(x: int, d: int) -> int:
    q = abs(x) // abs(d)
    return q if (x >= 0) == (d > 0) else -q


def normalize(
    matrices: Sequence[Sequence[Sequence[int]]],
) -> tuple[int, list[list[list[int]]]]:
    """Divide every rank's matrix by the maximum over all ranks; (maximum, results)."""
    world = len(matrices)

    def rank_main(comm: Communicator, rank: int) -> tuple[int, list[list[int]]]:
        local = _local_max([v for row in matrices[rank] for v in row])
        comm.send(rank, ROOT, local)
        if rank == ROOT:
            best = max(comm.recv(ROOT)[1] for _ in range(world))
            for dest in range(world):
                comm.send(ROOT, dest, best)
        global_max = comm.recv(rank, ROOT)[1]
        return global_max, [
            [_truncating_div(v, global_max) for v in row] for row in matrices[rank]
        ]

    results = run_ranks(world, rank_main)
    return results[ROOT][0], [mat for _, mat in results]