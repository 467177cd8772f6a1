"""Variation operators for spindle designs.

This module provides the genetic operators used by the optimizer. Each one is
a factory bound to a ParameterSpace that returns a pure function taking the
run's random generator explicitly:

- BLX-alpha crossover: blend crossover for continuous fields
- Uniform crossover: per-field parent choice for categorical fields
- Polynomial mutation: bounded perturbation of continuous fields
- Categorical mutation: uniform resampling of categorical fields

Operators never modify their inputs and always return vectors that satisfy
the parameter space (clamped bounds, whole-number integer fields, valid
categorical indices).
"""

from collections.abc import Callable

import numpy as np

from spindle_opt.parameters import ParameterSpace

Crossover = Callable[[np.ndarray, np.ndarray, np.random.Generator], np.ndarray]
Mutation = Callable[[np.ndarray, np.random.Generator], np.ndarray]


def blx_alpha_crossover(space: ParameterSpace, alpha: float = 0.5) -> Crossover:
    """Create a BLX-alpha blend crossover for the continuous fields.

    For parent values p1 and p2 with d = |p1 - p2|, the child value is drawn
    uniformly from [min(p1, p2) - alpha * d, max(p1, p2) + alpha * d] and
    clamped to the field's bounds. Categorical fields are copied from p1.

    Args:
        space: Parameter space giving bounds and field kinds.
        alpha: Extension of the parents' span on each side (default 0.5).

    Returns:
        A crossover function with signature (p1, p2, rng) -> child.

    Example:
        >>> crossover = blx_alpha_crossover(SPINDLE_SPACE)
        >>> child = crossover(p1, p2, np.random.default_rng(0))

    References:
        Eshelman, L. J., & Schaffer, J. D. (1993). Real-coded genetic
        algorithms and interval-schemata. Foundations of Genetic Algorithms, 2.
    """
    if alpha < 0:
        raise ValueError(f"alpha must be non-negative, got {alpha}")
    idx = space.continuous_idx

    def crossover(p1: np.ndarray, p2: np.ndarray, rng: np.random.Generator) -> np.ndarray:
        child = p1.copy()
        if idx.size == 0:
            return child

        a, b = p1[idx], p2[idx]
        d = np.abs(a - b)
        lower = np.minimum(a, b) - alpha * d
        upper = np.maximum(a, b) + alpha * d

        u = rng.random(idx.size)
        child[idx] = lower + u * (upper - lower)

        return space.repair(child)

    return crossover


def uniform_categorical_crossover(space: ParameterSpace) -> Crossover:
    """Create a uniform crossover for the categorical fields.

    Each categorical field independently takes p1's or p2's value with equal
    probability. Continuous fields are copied from p1.

    Args:
        space: Parameter space giving field kinds.

    Returns:
        A crossover function with signature (p1, p2, rng) -> child.
    """
    idx = space.categorical_idx

    def crossover(p1: np.ndarray, p2: np.ndarray, rng: np.random.Generator) -> np.ndarray:
        child = p1.copy()
        if idx.size == 0:
            return child
        from_first = rng.random(idx.size) < 0.5
        child[idx] = np.where(from_first, p1[idx], p2[idx])
        return child

    return crossover


def polynomial_mutation(space: ParameterSpace, eta: float = 20.0, prob: float = 0.1) -> Mutation:
    """Create a polynomial mutation operator for the continuous fields.

    Each continuous field is mutated with probability prob. A uniform draw u
    gives the perturbation

        deltaq = (2u)^(1/(eta+1)) - 1            if u <= 0.5
        deltaq = 1 - (2(1-u))^(1/(eta+1))        otherwise

    which is scaled by the field's normalized distance to the bound it moves
    towards, so a value sitting on a bound can only move inward. The result
    is clamped, and integral fields are truncated. Categorical fields are
    left unchanged.

    Args:
        space: Parameter space giving bounds and field kinds.
        eta: Distribution index (default 20.0). Higher values produce smaller
            perturbations.
        prob: Per-field mutation probability (default 0.1).

    Returns:
        A mutation function with signature (x, rng) -> x'.

    Example:
        >>> mutate = polynomial_mutation(SPINDLE_SPACE, prob=1.0)
        >>> mutant = mutate(SPINDLE_SPACE.sample(rng), rng)
    """
    if not 0.0 <= prob <= 1.0:
        raise ValueError(f"prob must be in [0, 1], got {prob}")
    idx = space.continuous_idx
    lower = space.lower[idx]
    upper = space.upper[idx]
    span = upper - lower

    def mutate(x: np.ndarray, rng: np.random.Generator) -> np.ndarray:
        mutated = x.copy()
        if idx.size == 0:
            return mutated

        mutation_mask = rng.random(idx.size) < prob
        if not np.any(mutation_mask):
            return mutated

        values = x[idx]
        u = rng.random(idx.size)

        exponent = 1.0 / (eta + 1.0)
        delta_q = np.where(
            u <= 0.5,
            (2.0 * u) ** exponent - 1.0,
            1.0 - (2.0 * (1.0 - u)) ** exponent,
        )

        # Room left towards the bound the perturbation points at
        room = np.where(delta_q < 0, (values - lower) / span, (upper - values) / span)

        mutated[idx] = np.where(mutation_mask, values + room * delta_q * span, values)

        return space.repair(mutated)

    return mutate


def categorical_mutation(space: ParameterSpace, prob: float = 0.1) -> Mutation:
    """Create a resampling mutation for the categorical fields.

    Each categorical field is, with probability prob, replaced by a choice
    drawn uniformly from its enumeration (possibly the same one).

    Args:
        space: Parameter space giving field kinds and cardinalities.
        prob: Per-field mutation probability (default 0.1).

    Returns:
        A mutation function with signature (x, rng) -> x'.
    """
    if not 0.0 <= prob <= 1.0:
        raise ValueError(f"prob must be in [0, 1], got {prob}")
    idx = space.categorical_idx
    cardinality = space.cardinality[idx]

    def mutate(x: np.ndarray, rng: np.random.Generator) -> np.ndarray:
        mutated = x.copy()
        if idx.size == 0:
            return mutated

        mutation_mask = rng.random(idx.size) < prob
        if np.any(mutation_mask):
            mutated[idx[mutation_mask]] = rng.integers(0, cardinality[mutation_mask])
        return mutated

    return mutate


def spindle_crossover(space: ParameterSpace, alpha: float = 0.5) -> Crossover:
    """Create the mixed crossover used by the optimizer.

    Continuous fields are blended with BLX-alpha, then categorical fields are
    inherited by uniform crossover, drawing random numbers in that order.

    Args:
        space: Parameter space.
        alpha: BLX-alpha extension (default 0.5).

    Returns:
        A crossover function with signature (p1, p2, rng) -> child.
    """
    blend = blx_alpha_crossover(space, alpha)
    uniform = uniform_categorical_crossover(space)
    categorical_idx = space.categorical_idx

    def crossover(p1: np.ndarray, p2: np.ndarray, rng: np.random.Generator) -> np.ndarray:
        child = blend(p1, p2, rng)
        child[categorical_idx] = uniform(p1, p2, rng)[categorical_idx]
        return child

    return crossover


def spindle_mutation(space: ParameterSpace, eta: float = 20.0, prob: float = 0.1) -> Mutation:
    """Create the mixed mutation used by the optimizer.

    Applies polynomial mutation to continuous fields, then categorical
    resampling, each with per-field probability prob.

    Args:
        space: Parameter space.
        eta: Polynomial mutation distribution index (default 20.0).
        prob: Per-field mutation probability (default 0.1).

    Returns:
        A mutation function with signature (x, rng) -> x'.
    """
    continuous = polynomial_mutation(space, eta=eta, prob=prob)
    categorical = categorical_mutation(space, prob=prob)

    def mutate(x: np.ndarray, rng: np.random.Generator) -> np.ndarray:
        return categorical(continuous(x, rng), rng)

    return mutate
