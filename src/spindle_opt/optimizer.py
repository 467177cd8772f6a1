"""Spindle design optimizer.

SpindleOptimizer searches the spindle parameter space for designs that are
Pareto-optimal with respect to vibration, bearing life and temperature rise.
It validates its configuration, wires the objective oracle and the mixed
variation operators into the NSGA-II loop and formats the resulting front.

Example:
    >>> optimizer = SpindleOptimizer(seed=42)
    >>> result = optimizer.run(OptimizerConfig(duration=10.0, load_factor=1.0))
    >>> len(result.population)
    50
    >>> print(optimizer.optimize(duration=10.0, load_factor=1.2, population_size=20, generations=5))
"""

import logging
import math
from collections.abc import Callable
from dataclasses import dataclass, replace

import numpy as np

from spindle_opt.algorithm import nsga2
from spindle_opt.exceptions import ConfigurationError
from spindle_opt.operators import spindle_crossover, spindle_mutation
from spindle_opt.oracle import OracleEvaluator
from spindle_opt.parameters import SPINDLE_SPACE, ParameterSpace
from spindle_opt.physics import SpindlePhysics
from spindle_opt.protocols import ObjectiveOracle
from spindle_opt.report import format_pareto_report
from spindle_opt.results import OptimizationResult

logger = logging.getLogger(__name__)

MIN_LOAD_FACTOR = 0.5
MAX_LOAD_FACTOR = 2.0
MIN_POPULATION_SIZE = 10
MIN_GENERATIONS = 1


def _is_int(value) -> bool:
    return isinstance(value, (int, np.integer)) and not isinstance(value, bool)


def _is_real(value) -> bool:
    return isinstance(value, (int, float, np.integer, np.floating)) and not isinstance(value, bool)


@dataclass(frozen=True)
class OptimizerConfig:
    """Validated configuration of one optimization run.

    Attributes:
        duration: Simulated operating duration in seconds (> 0).
        load_factor: Load scaling factor in [0.5, 2.0].
        population_size: Number of individuals per generation (>= 10).
        generations: Number of generations to run (>= 1).

    Raises:
        ConfigurationError: On construction, if any value is out of range.
    """

    duration: float
    load_factor: float
    population_size: int = 50
    generations: int = 20

    def __post_init__(self) -> None:
        if not (_is_real(self.duration) and math.isfinite(self.duration) and self.duration > 0):
            raise ConfigurationError(
                f"duration must be positive, got {self.duration}",
                details={"duration": self.duration},
            )
        if not (
            _is_real(self.load_factor) and MIN_LOAD_FACTOR <= self.load_factor <= MAX_LOAD_FACTOR
        ):
            raise ConfigurationError(
                f"load_factor must be between {MIN_LOAD_FACTOR} and {MAX_LOAD_FACTOR}, got {self.load_factor}",
                details={"load_factor": self.load_factor},
            )
        if not _is_int(self.population_size) or self.population_size < MIN_POPULATION_SIZE:
            raise ConfigurationError(
                f"population_size must be an integer of at least {MIN_POPULATION_SIZE}, got {self.population_size}",
                suggestion=f"use population_size={MIN_POPULATION_SIZE} or more",
                details={"population_size": self.population_size},
            )
        if not _is_int(self.generations) or self.generations < MIN_GENERATIONS:
            raise ConfigurationError(
                f"generations must be an integer of at least {MIN_GENERATIONS}, got {self.generations}",
                details={"generations": self.generations},
            )


class SpindleOptimizer:
    """Multi-objective optimizer for grinding spindle designs.

    The optimizer owns a single random generator created from ``seed``.
    Initialization, selection, crossover, mutation and (for the default
    physics model) load-profile spikes all draw from it, so two optimizers
    built with the same seed produce identical runs. Successive runs on the
    same instance continue the same random stream.

    Args:
        oracle: Objective oracle. Defaults to SpindlePhysics sharing the
            optimizer's generator.
        space: Parameter space to search (default SPINDLE_SPACE).
        seed: Random seed. If None, uses system entropy.
        alpha: BLX-alpha crossover extension (default 0.5).
        eta: Polynomial mutation distribution index (default 20.0).
        mutation_prob: Per-field mutation probability (default 0.1).
    """

    def __init__(
        self,
        oracle: ObjectiveOracle | None = None,
        space: ParameterSpace = SPINDLE_SPACE,
        seed: int | None = None,
        alpha: float = 0.5,
        eta: float = 20.0,
        mutation_prob: float = 0.1,
    ) -> None:
        self.rng = np.random.default_rng(seed)
        self.oracle = oracle if oracle is not None else SpindlePhysics(self.rng)
        self.space = space
        self.crossover = spindle_crossover(space, alpha=alpha)
        self.mutate = spindle_mutation(space, eta=eta, prob=mutation_prob)

    def run(
        self,
        config: OptimizerConfig,
        callback: Callable[[OptimizationResult, int], None] | None = None,
    ) -> OptimizationResult:
        """Run the optimizer and return the final ranked population.

        Args:
            config: Validated run configuration.
            callback: Optional observer, see nsga2().

        Returns:
            OptimizationResult whose failed_evaluations counts oracle failures.
        """
        logger.info(
            "Starting optimization: duration=%s, load_factor=%s, population_size=%d, generations=%d",
            config.duration,
            config.load_factor,
            config.population_size,
            config.generations,
        )
        evaluator = OracleEvaluator(self.oracle, self.space, config.duration, config.load_factor)

        result = nsga2(
            init=self.space.sample,
            evaluate=evaluator,
            crossover=self.crossover,
            mutate=self.mutate,
            pop_size=config.population_size,
            n_generations=config.generations,
            seed=self.rng,
            callback=callback,
        )

        if evaluator.n_failures:
            logger.warning("%d of %d evaluations failed", evaluator.n_failures, evaluator.n_calls)
        logger.info("Optimization complete, found %d Pareto-optimal solutions", len(result.pareto_front))

        return replace(result, failed_evaluations=evaluator.n_failures)

    def optimize(
        self,
        duration: float,
        load_factor: float,
        population_size: int = 50,
        generations: int = 20,
    ) -> str:
        """Optimize and return the Pareto front as a text report.

        Invalid arguments are rejected before any random draw or evaluation.

        Args:
            duration: Simulated duration in seconds (> 0).
            load_factor: Load scaling factor in [0.5, 2.0].
            population_size: Population size (>= 10).
            generations: Number of generations (>= 1).

        Returns:
            The report produced by format_pareto_report.

        Raises:
            ConfigurationError: If any argument is out of range.
        """
        config = OptimizerConfig(duration, load_factor, population_size, generations)
        return format_pareto_report(self.run(config), self.space)
