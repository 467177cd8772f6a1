"""Result type for spindle optimization runs.

OptimizationResult bundles the final population with its Pareto ranks,
crowding distances and run statistics. It is immutable (frozen dataclass)
and copies its arrays on construction.
"""

from dataclasses import dataclass

import numpy as np

from spindle_opt.parameters import ParameterSpace, SpindleParameters
from spindle_opt.population import Population, validated_copy


@dataclass(frozen=True)
class OptimizationResult:
    """Results from a multi-objective optimization run.

    Attributes:
        population: The final population after optimization.
        rank: 1-based Pareto rank for each individual, shape (n,). Rank 1
            indicates individuals on the Pareto front (non-dominated).
        crowding_distance: Crowding distance for each individual, shape (n,).
            Individuals at objective extremes have infinite crowding distance.
        generations: Number of generations completed.
        evaluations: Total number of objective evaluations performed.
        failed_evaluations: Number of evaluations replaced by worst-case
            objectives because the oracle failed.

    Example:
        >>> x = np.array([[1.0, 2.0], [3.0, 4.0], [5.0, 6.0]])
        >>> obj = np.array([[0.5, 0.5, 0.5], [0.3, 0.7, 0.5], [0.6, 0.6, 0.6]])
        >>> result = OptimizationResult(
        ...     population=Population(x=x, objectives=obj),
        ...     rank=np.array([1, 1, 2]),
        ...     crowding_distance=np.array([np.inf, np.inf, np.inf]),
        ...     generations=20,
        ...     evaluations=1050,
        ... )
        >>> len(result.pareto_front)
        2
    """

    population: Population
    rank: np.ndarray
    crowding_distance: np.ndarray
    generations: int
    evaluations: int
    failed_evaluations: int = 0

    def __post_init__(self) -> None:
        """Check that rank and crowding distance cover the population, then copy them."""
        n = len(self.population)
        object.__setattr__(self, "rank", validated_copy("rank", self.rank, ndim=1, n=n))
        cd = validated_copy("crowding_distance", self.crowding_distance, ndim=1, n=n)
        object.__setattr__(self, "crowding_distance", cd)

    @property
    def pareto_front(self) -> Population:
        """Extract the Pareto front (rank-1 individuals) as a new Population.

        Individuals keep their order in the final population.
        """
        front = np.flatnonzero(self.rank == 1)
        return Population(
            x=self.population.x[front],
            objectives=self.population.objectives[front] if self.population.objectives is not None else None,
            rank=self.rank[front],
            crowding_distance=self.crowding_distance[front],
        )

    def pareto_parameters(self, space: ParameterSpace) -> list[SpindleParameters]:
        """Decode the Pareto front into named spindle parameters.

        Args:
            space: The parameter space the population was encoded with.

        Returns:
            One SpindleParameters per rank-1 individual.
        """
        front = self.pareto_front
        return [space.decode(front.x[i]) for i in range(len(front))]
