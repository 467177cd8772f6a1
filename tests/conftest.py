"""Shared test fixtures for spindle_opt tests.

This module provides common fixtures used across test modules:
- rng: Seeded random number generator
- simple_population: Small population with rank/crowding computed
- sample_parameters: A valid spindle design
- Objective oracle test doubles (counting, failing)
- toy_problem: Operators for a three-objective problem on the unit cube
"""

import logging

import numpy as np
import pytest

from spindle_opt import (
    SPINDLE_SPACE,
    Population,
    SpindleParameters,
    crowding_for_all_fronts,
    non_dominated_sort,
)
from spindle_opt.log import LOGGER_NAME


@pytest.fixture
def rng() -> np.random.Generator:
    """Provide a seeded random number generator for deterministic tests."""
    return np.random.default_rng(42)


@pytest.fixture
def simple_population() -> Population:
    """Create a simple population with objectives, rank, and crowding distance.

    Four individuals form one non-dominated front in three objectives.
    """
    x = np.array([[1.0, 2.0], [3.0, 4.0], [5.0, 6.0], [7.0, 8.0]])
    objectives = np.array(
        [
            [1.0, 4.0, 2.0],
            [2.0, 3.0, 2.0],
            [3.0, 2.0, 2.0],
            [4.0, 1.0, 2.0],
        ]
    )

    ranks = non_dominated_sort(objectives)
    cd = crowding_for_all_fronts(objectives, ranks)

    return Population(x=x, objectives=objectives, rank=ranks, crowding_distance=cd)


@pytest.fixture
def sample_parameters() -> SpindleParameters:
    """A valid high-speed motorized spindle design."""
    return SpindleParameters(
        spindle_type="Motorized",
        power_rating=15.0,
        max_speed=18000,
        wheel_diameter=300.0,
        bearing_type="Hybrid Ceramic",
        bearing_preload=800.0,
        cooling_type="Liquid",
        lubrication_type="Oil-Air",
        tool_interface="HSK",
        alignment_tolerance=0.001,
    )


@pytest.fixture
def random_vectors(rng: np.random.Generator) -> np.ndarray:
    """Twenty random encoded spindle designs, shape (20, n_vars)."""
    return np.stack([SPINDLE_SPACE.sample(rng) for _ in range(20)])


class CountingOracle:
    """Deterministic oracle that records every call."""

    def __init__(self) -> None:
        self.calls: list[SpindleParameters] = []

    def evaluate(self, parameters, duration, load_factor):
        self.calls.append(parameters)
        vibration = parameters.max_speed / 10000.0
        bearing_life = 1e6 / parameters.max_speed + parameters.power_rating
        temperature_rise = parameters.bearing_preload / 100.0 + (5.0 if parameters.cooling_type == "Air" else 0.0)
        return vibration, bearing_life, temperature_rise


class FailingOracle:
    """Oracle that fails for every design faster than a threshold."""

    def __init__(self, max_speed_limit: int = 15000) -> None:
        self.max_speed_limit = max_speed_limit
        self.n_calls = 0
        self.n_failures = 0

    def evaluate(self, parameters, duration, load_factor):
        self.n_calls += 1
        if parameters.max_speed > self.max_speed_limit:
            self.n_failures += 1
            raise RuntimeError("degenerate design")
        return parameters.max_speed / 10000.0, 50000.0 - parameters.max_speed, 20.0


@pytest.fixture
def counting_oracle() -> CountingOracle:
    return CountingOracle()


@pytest.fixture
def failing_oracle() -> FailingOracle:
    return FailingOracle()


@pytest.fixture
def toy_problem():
    """Three-objective problem on [0, 1]^3 with explicit-rng operators.

    Returns:
        Dict with init, evaluate, crossover, and mutate functions.
    """
    n_vars = 3

    def init(rng: np.random.Generator) -> np.ndarray:
        return rng.uniform(0, 1, size=n_vars)

    def evaluate(x: np.ndarray) -> np.ndarray:
        return np.array([x[0], 1.0 - x[0] + x[1], x[2] + x[1]])

    def crossover(p1: np.ndarray, p2: np.ndarray, rng: np.random.Generator) -> np.ndarray:
        w = rng.random()
        return w * p1 + (1 - w) * p2

    def mutate(x: np.ndarray, rng: np.random.Generator) -> np.ndarray:
        return np.clip(x + rng.normal(0, 0.05, size=x.shape), 0, 1)

    return {"init": init, "evaluate": evaluate, "crossover": crossover, "mutate": mutate}


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo any console handler attached by configure_logging during a test."""
    package_logger = logging.getLogger(LOGGER_NAME)
    handlers, level, propagate = list(package_logger.handlers), package_logger.level, package_logger.propagate
    yield
    package_logger.handlers[:] = handlers
    package_logger.setLevel(level)
    package_logger.propagate = propagate
