"""NSGA-II environmental selection.

This module reduces a combined parent+offspring population back to the
target size using Pareto rank and crowding distance.
"""

import logging

import numpy as np

from spindle_opt.exceptions import InvariantViolationError
from spindle_opt.population import Population
from spindle_opt.primitives import crowding_for_all_fronts, fronts, non_dominated_sort

logger = logging.getLogger(__name__)


def nsga2_survival(pop: Population, n_survivors: int) -> tuple[np.ndarray, dict[str, np.ndarray]]:
    """Select survivors by rank, filling the boundary front by crowding distance.

    The combined population is re-ranked from scratch and crowding distance
    is computed within each of its fronts. Whole fronts are added
    in increasing rank order while they fit; the first front that would
    overflow is sorted by descending crowding distance and only as many
    members as needed are taken to reach exactly n_survivors.

    Args:
        pop: Combined population (typically parents + offspring) to select from.
        n_survivors: Number of survivors to select for the next generation.

    Returns:
        Tuple of (indices, state) where:
        - indices: Array of shape (n_survivors,) with unique indices into pop.
        - state: Dictionary with keys:
            - 'rank': 1-based Pareto ranks of the survivors. Shape (n_survivors,).
            - 'crowding_distance': Crowding distances of the survivors, as
              computed on the combined population. Shape (n_survivors,).

    Raises:
        ValueError: If population has no objectives, n_survivors is not
            positive, or n_survivors exceeds population size.
        InvariantViolationError: If the selection does not produce exactly
            n_survivors valid, distinct indices.

    Example:
        >>> x = np.array([[1, 2], [3, 4], [5, 6], [7, 8]])
        >>> obj = np.array([[1.0, 4.0, 0.0], [2.0, 3.0, 0.0], [3.0, 2.0, 0.0], [4.0, 1.0, 0.0]])
        >>> indices, state = nsga2_survival(Population(x=x, objectives=obj), n_survivors=2)
        >>> len(indices)
        2
    """
    if pop.objectives is None:
        raise ValueError("Population must have objectives computed for survivor selection")
    if n_survivors <= 0:
        raise ValueError(f"n_survivors must be positive, got {n_survivors}")
    if n_survivors > len(pop):
        raise ValueError(f"n_survivors ({n_survivors}) cannot exceed population size ({len(pop)})")

    all_ranks = non_dominated_sort(pop.objectives)
    all_cd = crowding_for_all_fronts(pop.objectives, all_ranks)

    selected: list[int] = []
    for rank, front_idx in enumerate(fronts(all_ranks), start=1):
        if len(selected) + len(front_idx) <= n_survivors:
            logger.debug("Adding front %d with %d individuals", rank, len(front_idx))
            selected.extend(front_idx.tolist())
        else:
            remaining = n_survivors - len(selected)
            logger.debug("Partially adding %d of %d individuals from front %d", remaining, len(front_idx), rank)
            # Descending crowding distance; stable so ties keep population order
            order = np.argsort(-all_cd[front_idx], kind="stable")[:remaining]
            selected.extend(front_idx[order].tolist())
        if len(selected) >= n_survivors:
            break

    selected_arr = np.array(selected, dtype=np.intp)

    if len(selected_arr) != n_survivors or len(np.unique(selected_arr)) != n_survivors:
        raise InvariantViolationError(
            f"environmental selection produced {len(np.unique(selected_arr))} distinct survivors, "
            f"expected {n_survivors}",
            details={"selected": selected_arr.tolist()},
        )
    if selected_arr.min() < 0 or selected_arr.max() >= len(pop):
        raise InvariantViolationError(
            f"environmental selection referenced an index outside the combined population of {len(pop)}",
            details={"selected": selected_arr.tolist()},
        )

    return selected_arr, {
        "rank": all_ranks[selected_arr],
        "crowding_distance": all_cd[selected_arr],
    }
