"""Population data structures for the spindle optimizer.

This module provides the core data structures for representing populations
of candidate spindle designs:

- Population: A struct-of-arrays representation of multiple individuals
- IndividualView: A read-only view of a single individual

Both classes are immutable (frozen dataclasses). Offspring are always built
as new arrays, so a parent's parameters can never be aliased by a child.
"""

from dataclasses import dataclass

import numpy as np

from spindle_opt.exceptions import InvariantViolationError


def validated_copy(name: str, value: np.ndarray, ndim: int, n: int | None, kind: type | None = None) -> np.ndarray:
    """Copy an array field after checking its type, dimensionality and length.

    Args:
        name: Field name used in error messages.
        value: The array to check.
        ndim: Required number of dimensions.
        n: Required length of the first axis, or None to skip the check.
        kind: Required numpy dtype kind (np.integer, np.floating), or None.

    Raises:
        TypeError: If value is not a numpy array.
        ValueError: If the shape or dtype does not match.
    """
    if not isinstance(value, np.ndarray):
        raise TypeError(f"{name} must be a numpy array, got {type(value).__name__}")
    if value.ndim != ndim:
        raise ValueError(f"{name} must be {ndim}D, got shape {value.shape}")
    if n is not None and value.shape[0] != n:
        unit = "individuals" if ndim == 2 else "elements"
        raise ValueError(f"{name} has {value.shape[0]} {unit}, expected {n} to match the population")
    if kind is not None and not np.issubdtype(value.dtype, kind):
        raise ValueError(f"{name} must have {'integer' if kind is np.integer else 'float'} dtype, got {value.dtype}")
    return value.copy()


@dataclass(frozen=True)
class IndividualView:
    """Read-only view of one spindle design in a population.

    Attributes:
        x: Encoded design parameters, shape (n_vars,).
        objectives: Minimization objectives (vibration, -bearing life,
            temperature rise), shape (n_obj,), or None.
        rank: Pareto front rank (1 = first front), or None if not computed.
        crowding_distance: Crowding distance value, or None if not computed.
    """

    x: np.ndarray
    objectives: np.ndarray | None
    rank: int | None
    crowding_distance: float | None


@dataclass(frozen=True)
class Population:
    """Immutable struct-of-arrays representation of a population.

    All arrays are copied on construction. Rank and crowding distance are
    derived data: the optimizer recomputes them every generation rather than
    carrying them over.

    Attributes:
        x: Encoded design parameters for all individuals, shape (n, n_vars).
        objectives: Objective values, shape (n, n_obj), or None if not evaluated.
        rank: 1-based Pareto front ranks, shape (n,), or None if not sorted.
        crowding_distance: Crowding distances, shape (n,), or None if not computed.

    Example:
        >>> x = np.array([[1.0, 2.0], [3.0, 4.0], [5.0, 6.0]])
        >>> obj = np.array([[0.5, 0.5, 0.5], [0.3, 0.7, 0.5], [0.4, 0.6, 0.5]])
        >>> pop = Population(x=x, objectives=obj)
        >>> len(pop), pop.n_vars, pop.n_obj
        (3, 2, 3)
    """

    x: np.ndarray
    objectives: np.ndarray | None = None
    rank: np.ndarray | None = None
    crowding_distance: np.ndarray | None = None

    def __post_init__(self) -> None:
        """Validate shapes and copy arrays for immutability.

        Raises:
            TypeError: If an array argument is not a numpy array.
            ValueError: If array shapes, dtypes or rank values are invalid.
        """
        object.__setattr__(self, "x", validated_copy("x", self.x, ndim=2, n=None))
        n = self.x.shape[0]

        if self.objectives is not None:
            object.__setattr__(self, "objectives", validated_copy("objectives", self.objectives, ndim=2, n=n))

        if self.rank is not None:
            rank = validated_copy("rank", self.rank, ndim=1, n=n, kind=np.integer)
            if n > 0 and rank.min() < 1:
                raise ValueError(f"ranks are 1-based, got minimum rank {rank.min()}")
            object.__setattr__(self, "rank", rank)

        if self.crowding_distance is not None:
            cd = validated_copy("crowding_distance", self.crowding_distance, ndim=1, n=n, kind=np.floating)
            object.__setattr__(self, "crowding_distance", cd)

    def __len__(self) -> int:
        return self.x.shape[0]

    def __getitem__(self, idx: int) -> IndividualView:
        """Return a read-only view of one individual (negative indices allowed).

        Raises:
            TypeError: If idx is not an integer.
            IndexError: If idx is out of bounds.
        """
        if not isinstance(idx, (int, np.integer)):
            raise TypeError(f"indices must be integers, got {type(idx).__name__}")

        n = len(self)
        pos = idx + n if idx < 0 else idx
        if not 0 <= pos < n:
            raise IndexError(f"index {idx} is out of bounds for population with {n} individuals")

        return IndividualView(
            x=self.x[pos],
            objectives=None if self.objectives is None else self.objectives[pos],
            rank=None if self.rank is None else int(self.rank[pos]),
            crowding_distance=None if self.crowding_distance is None else float(self.crowding_distance[pos]),
        )

    @property
    def n_vars(self) -> int:
        return self.x.shape[1]

    @property
    def n_obj(self) -> int | None:
        return None if self.objectives is None else self.objectives.shape[1]

    def take(self, indices: np.ndarray) -> "Population":
        """Return the sub-population at the given indices, dropping rank data.

        Args:
            indices: Integer indices into this population.

        Returns:
            New Population with x and objectives of the selected individuals.

        Raises:
            InvariantViolationError: If any index references a nonexistent slot.
        """
        indices = np.asarray(indices, dtype=np.intp)
        n = len(self)
        bad = indices[(indices < 0) | (indices >= n)]
        if bad.size:
            raise InvariantViolationError(
                f"selection references nonexistent individuals {bad.tolist()} in a population of {n}",
                details={"indices": bad.tolist(), "population_size": n},
            )
        return Population(
            x=self.x[indices],
            objectives=None if self.objectives is None else self.objectives[indices],
        )

    @classmethod
    def combine(cls, first: "Population", second: "Population") -> "Population":
        """Concatenate two evaluated populations (parents followed by offspring)."""
        if first.objectives is None or second.objectives is None:
            raise ValueError("both populations must be evaluated before combining")
        return cls(
            x=np.concatenate([first.x, second.x]),
            objectives=np.concatenate([first.objectives, second.objectives]),
        )
