"""Crowded binary tournament selection."""

import numpy as np


def crowded_better(i: int, j: int, rank: np.ndarray, crowding_distance: np.ndarray) -> bool:
    """Crowded comparison: True if individual i is preferred over individual j.

    Lower rank wins; on equal rank the larger crowding distance wins. Equal
    individuals are not preferred over each other.
    """
    if rank[i] != rank[j]:
        return bool(rank[i] < rank[j])
    return bool(crowding_distance[i] > crowding_distance[j])


def crowded_tournament(
    pop_size: int,
    rank: np.ndarray,
    crowding_distance: np.ndarray,
    rng: np.random.Generator,
) -> int:
    """Run one binary tournament and return the winner's index.

    Two contestants are drawn uniformly with replacement, so an individual
    may meet itself. On a full tie the first contestant wins.

    Args:
        pop_size: Number of individuals to draw from.
        rank: 1-based Pareto ranks, shape (pop_size,).
        crowding_distance: Crowding distances, shape (pop_size,).
        rng: Generator owned by the optimizer run.

    Returns:
        Index of the tournament winner.
    """
    first, second = rng.integers(0, pop_size, size=2)
    if crowded_better(second, first, rank, crowding_distance):
        return int(second)
    return int(first)


def select_parent_pair(
    pop_size: int,
    rank: np.ndarray,
    crowding_distance: np.ndarray,
    rng: np.random.Generator,
) -> tuple[int, int]:
    """Pick two parents by independent tournaments, better parent first.

    The primary parent (returned first) is the one preferred by the crowded
    comparison. Both tournaments may return the same individual; that
    self-pairing is legal and yields a degenerate blend.

    Args:
        pop_size: Number of individuals to draw from.
        rank: 1-based Pareto ranks, shape (pop_size,).
        crowding_distance: Crowding distances, shape (pop_size,).
        rng: Generator owned by the optimizer run.

    Returns:
        Tuple of (primary parent index, secondary parent index).

    Example:
        >>> rank = np.array([1, 2, 1, 3])
        >>> cd = np.array([np.inf, 1.0, 0.5, np.inf])
        >>> p1, p2 = select_parent_pair(4, rank, cd, np.random.default_rng(0))
    """
    if pop_size <= 0:
        raise ValueError(f"pop_size must be positive, got {pop_size}")
    if len(rank) != pop_size or len(crowding_distance) != pop_size:
        raise ValueError(
            f"rank and crowding_distance must have {pop_size} elements, "
            f"got {len(rank)} and {len(crowding_distance)}"
        )

    a = crowded_tournament(pop_size, rank, crowding_distance, rng)
    b = crowded_tournament(pop_size, rank, crowding_distance, rng)
    if crowded_better(b, a, rank, crowding_distance):
        return b, a
    return a, b
