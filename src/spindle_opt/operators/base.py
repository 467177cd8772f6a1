"""Base genetic operators.

This module provides the lift helper that applies a per-individual function
to a whole population.
"""

from collections.abc import Callable

import numpy as np


def lift(fn: Callable[[np.ndarray], np.ndarray]) -> Callable[[np.ndarray], np.ndarray]:
    """Lift a per-individual function to work on a population.

    Individuals are processed strictly in row order, so a function with side
    effects (an oracle drawing random numbers, a call counter) sees the same
    sequence on every run.

    Args:
        fn: Function that operates on a single individual.
            Signature: (n_vars,) -> (n_out,)

    Returns:
        A function that operates on a population.
        Signature: (n, n_vars) -> (n, n_out)

    Example:
        >>> def evaluate_one(x: np.ndarray) -> np.ndarray:
        ...     return np.array([x.sum(), x.prod(), x.max()])
        >>> evaluate = lift(evaluate_one)
        >>> evaluate(np.array([[1.0, 2.0], [3.0, 4.0]]))
        array([[ 3.,  2.,  2.],
               [ 7., 12.,  4.]])
    """

    def lifted(x: np.ndarray) -> np.ndarray:
        return np.stack([fn(x[i]) for i in range(x.shape[0])])

    return lifted
