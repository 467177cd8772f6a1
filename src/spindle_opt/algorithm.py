"""NSGA-II generational loop.

This module provides the problem-independent optimizer engine:

    Init -> Evaluate -> Rank -> (Select&Vary -> Combine -> Rank -> Truncate) x generations

Individuals are encoded vectors; the caller supplies how to create,
evaluate, recombine and mutate them. All randomness comes from one
numpy Generator that is passed explicitly to every operator, so a run is
fully determined by its seed and configuration.

Example:
    >>> def init(rng):
    ...     return rng.uniform(0, 1, size=3)
    >>> def evaluate(x):
    ...     return np.array([x.sum(), (1 - x).sum(), x[0]])
    >>> def crossover(p1, p2, rng):
    ...     return (p1 + p2) / 2
    >>> def mutate(x, rng):
    ...     return np.clip(x + rng.normal(0, 0.01, size=x.shape), 0, 1)
    >>> result = nsga2(init, evaluate, crossover, mutate, pop_size=10, n_generations=5, seed=42)
    >>> len(result.population)
    10
"""

import logging
from collections.abc import Callable

import numpy as np

from spindle_opt.exceptions import ConfigurationError, InvariantViolationError
from spindle_opt.operators import lift
from spindle_opt.population import Population
from spindle_opt.primitives import crowding_for_all_fronts, non_dominated_sort
from spindle_opt.results import OptimizationResult
from spindle_opt.selection import select_parent_pair
from spindle_opt.survival import nsga2_survival

logger = logging.getLogger(__name__)


def _front_sizes(rank: np.ndarray) -> list[int]:
    return np.bincount(rank)[1:].tolist()


def nsga2(
    init: Callable[[np.random.Generator], np.ndarray],
    evaluate: Callable[[np.ndarray], np.ndarray],
    crossover: Callable[[np.ndarray, np.ndarray, np.random.Generator], np.ndarray],
    mutate: Callable[[np.ndarray, np.random.Generator], np.ndarray],
    pop_size: int,
    n_generations: int,
    seed: int | np.random.Generator | None = None,
    callback: Callable[[OptimizationResult, int], None] | None = None,
) -> OptimizationResult:
    """Run NSGA-II multi-objective optimization (all objectives minimized).

    Args:
        init: Create one random individual.
            Signature: (rng,) -> (n_vars,)
        evaluate: Evaluate one individual. Called exactly once per individual.
            Signature: (n_vars,) -> (n_obj,)
        crossover: Cross two parents to produce one child. The first parent
            is the one preferred by the crowded comparison.
            Signature: (n_vars,), (n_vars,), rng -> (n_vars,)
        mutate: Mutate one individual, returning a new array.
            Signature: (n_vars,), rng -> (n_vars,)
        pop_size: Population size N.
        n_generations: Number of generations to run. The run always completes
            exactly this many generations.
        seed: Random seed, or an existing Generator to draw from. If None,
            uses system entropy.
        callback: Optional observer called with the ranked population after
            initialization (generation 0) and after every generation.
            Signature: (result, generation) -> None. It cannot alter the run.

    Returns:
        OptimizationResult with the final population, its ranks and
        crowding distances.

    Raises:
        ConfigurationError: If pop_size is not positive or n_generations is negative.
        InvariantViolationError: If the population size drifts from pop_size.

    Algorithm Flow:
        1. Initialize pop_size individuals and evaluate them
        2. Rank the population (non-dominated sort + crowding distance)
        3. For each generation:
           a. Tournament-select parent pairs, cross over, mutate and evaluate
              until pop_size offspring exist
           b. Combine parents + offspring (2N individuals)
           c. Re-rank and truncate back to N by rank, then crowding distance
        4. Return the final ranked population
    """
    if pop_size <= 0:
        raise ConfigurationError(f"pop_size must be positive, got {pop_size}")
    if n_generations < 0:
        raise ConfigurationError(f"n_generations must be non-negative, got {n_generations}")

    rng = seed if isinstance(seed, np.random.Generator) else np.random.default_rng(seed)
    lifted_evaluate = lift(evaluate)

    logger.debug("Initializing population of %d individuals", pop_size)
    init_x = np.stack([init(rng) for _ in range(pop_size)])
    init_obj = lifted_evaluate(init_x)
    pop = Population(x=init_x, objectives=init_obj)

    rank = non_dominated_sort(init_obj)
    state = {"rank": rank, "crowding_distance": crowding_for_all_fronts(init_obj, rank)}
    total_evaluations = pop_size

    if callback is not None:
        callback(_result(pop, state, 0, total_evaluations), 0)

    for gen in range(1, n_generations + 1):
        offspring_x = np.empty_like(pop.x)
        offspring_obj = np.empty_like(pop.objectives)
        for i in range(pop_size):
            p1, p2 = select_parent_pair(pop_size, state["rank"], state["crowding_distance"], rng)
            child = mutate(crossover(pop.x[p1], pop.x[p2], rng), rng)
            offspring_x[i] = child
            offspring_obj[i] = evaluate(child)
        total_evaluations += pop_size

        combined = Population.combine(pop, Population(x=offspring_x, objectives=offspring_obj))

        survivor_indices, state = nsga2_survival(combined, pop_size)
        pop = combined.take(survivor_indices)

        if len(pop) != pop_size:
            raise InvariantViolationError(
                f"population has {len(pop)} individuals after generation {gen}, expected {pop_size}"
            )

        logger.info(
            "Generation %d/%d: front sizes %s, %d Pareto-optimal",
            gen,
            n_generations,
            _front_sizes(state["rank"]),
            int(np.sum(state["rank"] == 1)),
        )

        if callback is not None:
            callback(_result(pop, state, gen, total_evaluations), gen)

    return _result(pop, state, n_generations, total_evaluations)


def _result(pop: Population, state: dict[str, np.ndarray], generations: int, evaluations: int) -> OptimizationResult:
    return OptimizationResult(
        population=Population(
            x=pop.x,
            objectives=pop.objectives,
            rank=state["rank"],
            crowding_distance=state["crowding_distance"],
        ),
        rank=state["rank"],
        crowding_distance=state["crowding_distance"],
        generations=generations,
        evaluations=evaluations,
    )
