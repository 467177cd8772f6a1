"""Adapter between the objective oracle and the optimizer.

The oracle reports ``(vibration, bearing_life, temperature_rise)`` in natural
units. The optimizer minimizes every objective, so bearing life is negated.
A failed evaluation never propagates: it is logged and replaced by
SENTINEL_OBJECTIVES, which every real design dominates.
"""

import logging

import numpy as np

from spindle_opt.exceptions import EvaluationError
from spindle_opt.parameters import ParameterSpace, SpindleParameters
from spindle_opt.protocols import ObjectiveOracle

logger = logging.getLogger(__name__)

N_OBJECTIVES = 3
OBJECTIVE_NAMES = ("vibration", "bearing_life", "temperature_rise")

# Huge vibration and temperature, vanishing bearing life (negated)
SENTINEL_OBJECTIVES = np.array([1e10, -1e-10, 1e10])


def to_objectives(result) -> np.ndarray:
    """Convert an oracle result to a minimization vector.

    Args:
        result: Sequence of (vibration, bearing_life, temperature_rise).

    Returns:
        Array [vibration, -bearing_life, temperature_rise].

    Raises:
        EvaluationError: If the result does not hold three finite numbers.
    """
    try:
        values = np.asarray(result, dtype=np.float64).reshape(-1)
    except (TypeError, ValueError) as e:
        raise EvaluationError(f"oracle returned a non-numeric result: {result!r}") from e
    if values.shape != (N_OBJECTIVES,):
        raise EvaluationError(f"oracle must return {N_OBJECTIVES} values, got {values.size}")
    if not np.all(np.isfinite(values)):
        raise EvaluationError(f"oracle returned non-finite values: {values.tolist()}")
    return np.array([values[0], -values[1], values[2]])


def from_objectives(objectives: np.ndarray) -> tuple[float, float, float]:
    """Undo to_objectives: return (vibration, bearing_life, temperature_rise)."""
    return float(objectives[0]), float(-objectives[1]), float(objectives[2])


def safe_evaluate(
    oracle: ObjectiveOracle,
    parameters: SpindleParameters,
    duration: float,
    load_factor: float,
) -> tuple[np.ndarray, bool]:
    """Evaluate one design, substituting worst-case objectives on failure.

    Args:
        oracle: The objective oracle.
        parameters: Design to score.
        duration: Simulated duration in seconds.
        load_factor: Load scaling factor.

    Returns:
        Tuple of (objectives, ok) where objectives has shape (3,) and ok is
        False when the sentinel was substituted.
    """
    try:
        return to_objectives(oracle.evaluate(parameters, duration, load_factor)), True
    except Exception as e:
        logger.warning("Evaluation failed for %s: %s; assigning worst-case objectives", parameters, e)
        return SENTINEL_OBJECTIVES.copy(), False


class OracleEvaluator:
    """Per-individual evaluate function over encoded vectors.

    Decodes each vector through the parameter space, calls the oracle
    exactly once and counts calls and failures.

    Example:
        >>> evaluate = OracleEvaluator(SpindlePhysics(rng), SPINDLE_SPACE, duration=10.0, load_factor=1.0)
        >>> objectives = evaluate(SPINDLE_SPACE.sample(rng))
        >>> objectives.shape
        (3,)
    """

    def __init__(
        self,
        oracle: ObjectiveOracle,
        space: ParameterSpace,
        duration: float,
        load_factor: float,
    ) -> None:
        self.oracle = oracle
        self.space = space
        self.duration = duration
        self.load_factor = load_factor
        self.n_calls = 0
        self.n_failures = 0

    def __call__(self, x: np.ndarray) -> np.ndarray:
        self.n_calls += 1
        objectives, ok = safe_evaluate(self.oracle, self.space.decode(x), self.duration, self.load_factor)
        if not ok:
            self.n_failures += 1
        return objectives
