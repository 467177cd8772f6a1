"""Pareto ranking and diversity primitives.

This module provides the core pure functions used by the optimizer:
- dominates: scalar Pareto dominance check
- dominates_matrix: vectorized pairwise dominance
- non_dominated_sort: front-peeling non-dominated sort (1-based ranks)
- fronts: group individuals by rank
- crowding_distance: diversity metric for solutions in a Pareto front
- crowding_for_all_fronts: crowding distance of every individual within its own front

All objectives are minimized.
"""

import numpy as np

from spindle_opt.exceptions import InvariantViolationError

# Objective ranges below this are treated as ties
RANGE_EPSILON = 1e-10


def dominates(a: np.ndarray, b: np.ndarray) -> bool:
    """Check if solution a Pareto-dominates solution b (minimization).

    A solution a dominates b if and only if:
      - a[i] <= b[i] for ALL objectives (a is at least as good everywhere)
      - a[i] < b[i] for AT LEAST ONE objective (a is strictly better somewhere)

    Args:
        a: Objective values for solution a. Shape (n_obj,).
        b: Objective values for solution b. Shape (n_obj,).

    Returns:
        True if a dominates b, False otherwise.

    Examples:
        >>> dominates(np.array([1.0, 2.0, 0.5]), np.array([2.0, 3.0, 0.5]))
        True
        >>> dominates(np.array([1.0, 3.0, 0.5]), np.array([2.0, 2.0, 0.5]))
        False
    """
    return bool(np.all(a <= b) and np.any(a < b))


def dominates_matrix(objectives: np.ndarray) -> np.ndarray:
    """Compute pairwise dominance for all individuals (vectorized).

    Args:
        objectives: Objective values for all individuals. Shape (n, n_obj).

    Returns:
        Boolean array of shape (n, n) where result[i, j] = True iff
        individual i dominates individual j. The diagonal is always False.
    """
    # (n, 1, n_obj) vs (1, n, n_obj)
    a = objectives[:, np.newaxis, :]
    b = objectives[np.newaxis, :, :]

    all_leq = np.all(a <= b, axis=2)
    any_lt = np.any(a < b, axis=2)

    return all_leq & any_lt


def non_dominated_sort(objectives: np.ndarray) -> np.ndarray:
    """Assign each individual to a Pareto front by front peeling.

    Every pair is compared once to build the domination counts. Individuals
    dominated by nobody form front 1; removing a front decrements the count
    of everything it dominates, and counts reaching zero form the next front.
    Time complexity: O(M * N^2) for M objectives and N individuals.

    Args:
        objectives: Objective values for all individuals. Shape (n, n_obj).

    Returns:
        Integer array of shape (n,) where rank[i] is the front of individual i.
        Rank 1 = Pareto optimal, rank 2 = second front, etc.

    Raises:
        InvariantViolationError: If peeling stalls with individuals left unranked.

    Examples:
        >>> objs = np.array([[1.0, 1.0, 1.0], [2.0, 2.0, 2.0], [3.0, 3.0, 3.0]])
        >>> non_dominated_sort(objs)
        array([1, 2, 3])
    """
    n = objectives.shape[0]

    if n == 0:
        return np.array([], dtype=np.int64)

    dom_matrix = dominates_matrix(objectives)

    # domination_count[i] = number of individuals that dominate i
    domination_count = dom_matrix.sum(axis=0)

    ranks = np.zeros(n, dtype=np.int64)

    current_rank = 1
    remaining = np.arange(n)

    while len(remaining) > 0:
        front_mask = domination_count[remaining] == 0
        front = remaining[front_mask]

        if len(front) == 0:
            raise InvariantViolationError(
                f"non-dominated sort stalled at rank {current_rank} with {len(remaining)} individuals unranked",
                details={"remaining": remaining.tolist()},
            )

        ranks[front] = current_rank
        remaining = remaining[~front_mask]

        for idx in front:
            domination_count[remaining] -= dom_matrix[idx, remaining].astype(np.int64)

        current_rank += 1

    return ranks


def fronts(ranks: np.ndarray) -> list[np.ndarray]:
    """Group population indices by rank.

    Args:
        ranks: 1-based ranks as returned by non_dominated_sort. Shape (n,).

    Returns:
        List where element k holds the indices of front k + 1, in increasing
        index order. Empty for an empty population.
    """
    if len(ranks) == 0:
        return []
    return [np.flatnonzero(ranks == r) for r in range(1, int(ranks.max()) + 1)]


def crowding_distance(front_objectives: np.ndarray) -> np.ndarray:
    """Compute crowding distance for individuals in a single Pareto front.

    Crowding distance measures how isolated a solution is in objective space.
    Higher values indicate more isolated solutions (preferred for diversity).

    Fronts of at most two individuals get infinite distance everywhere. For
    larger fronts, the two extremes of every objective get infinite distance
    and interior members accumulate ``(next - prev) / range`` summed over the
    objectives. An objective whose range is effectively zero contributes
    nothing, but the members keep what they accumulated from other objectives.

    Args:
        front_objectives: Objective values for individuals in ONE front only.
            Shape (n_front, n_obj).

    Returns:
        Array of shape (n_front,) containing crowding distances.

    Examples:
        >>> objs = np.array([[1.0, 3.0, 1.0], [2.0, 2.0, 2.0], [3.0, 1.0, 3.0]])
        >>> crowding_distance(objs)
        array([inf,  3., inf])
    """
    n_front = front_objectives.shape[0]

    if n_front == 0:
        return np.array([], dtype=np.float64)

    if n_front <= 2:
        return np.full(n_front, np.inf)

    n_obj = front_objectives.shape[1]
    distances = np.zeros(n_front, dtype=np.float64)

    for m in range(n_obj):
        # Stable sort keeps tie order deterministic
        sorted_indices = np.argsort(front_objectives[:, m], kind="stable")

        distances[sorted_indices[0]] = np.inf
        distances[sorted_indices[-1]] = np.inf

        obj_range = front_objectives[sorted_indices[-1], m] - front_objectives[sorted_indices[0], m]
        if abs(obj_range) < RANGE_EPSILON:
            continue

        sorted_values = front_objectives[sorted_indices, m]
        distances[sorted_indices[1:-1]] += (sorted_values[2:] - sorted_values[:-2]) / obj_range

    return distances


def crowding_for_all_fronts(objectives: np.ndarray, ranks: np.ndarray) -> np.ndarray:
    """Compute crowding distance for every individual within its own front.

    Args:
        objectives: Objective values for all individuals. Shape (n, n_obj).
        ranks: 1-based Pareto ranks for all individuals. Shape (n,).

    Returns:
        Array of shape (n,) containing crowding distances.
    """
    cd = np.zeros(len(objectives), dtype=np.float64)
    for front in fronts(ranks):
        cd[front] = crowding_distance(objectives[front])
    return cd
