"""spindle-opt: multi-objective optimization of grinding spindle designs.

A numpy NSGA-II implementation that searches a mixed continuous/categorical
spindle design space for designs that are Pareto-optimal in vibration,
bearing life and temperature rise.

Example:
    >>> from spindle_opt import SpindleOptimizer
    >>> optimizer = SpindleOptimizer(seed=42)
    >>> report = optimizer.optimize(duration=10.0, load_factor=1.0, population_size=20, generations=5)
    >>> print(report)

Example (custom objective oracle):
    >>> class MyOracle:
    ...     def evaluate(self, parameters, duration, load_factor):
    ...         return 0.5, parameters.bearing_preload * 10, 25.0
    >>> result = SpindleOptimizer(oracle=MyOracle(), seed=1).run(OptimizerConfig(duration=5.0, load_factor=1.0))
    >>> front = result.pareto_parameters(SPINDLE_SPACE)
"""

from spindle_opt.algorithm import nsga2
from spindle_opt.exceptions import (
    ConfigurationError,
    EvaluationError,
    InvariantViolationError,
    ParameterValidationError,
    SpindleOptError,
)
from spindle_opt.log import configure_logging
from spindle_opt.operators import (
    blx_alpha_crossover,
    categorical_mutation,
    lift,
    polynomial_mutation,
    spindle_crossover,
    spindle_mutation,
    uniform_categorical_crossover,
)
from spindle_opt.optimizer import OptimizerConfig, SpindleOptimizer
from spindle_opt.oracle import SENTINEL_OBJECTIVES, OracleEvaluator, safe_evaluate
from spindle_opt.parameters import (
    SPINDLE_SPACE,
    CategoricalVariable,
    ContinuousVariable,
    ParameterSpace,
    SpindleParameters,
)
from spindle_opt.physics import SpindlePhysics
from spindle_opt.population import IndividualView, Population
from spindle_opt.primitives import (
    crowding_distance,
    crowding_for_all_fronts,
    dominates,
    dominates_matrix,
    fronts,
    non_dominated_sort,
)
from spindle_opt.protocols import ObjectiveOracle
from spindle_opt.report import format_pareto_report
from spindle_opt.results import OptimizationResult
from spindle_opt.selection import crowded_tournament, select_parent_pair
from spindle_opt.survival import nsga2_survival

__all__ = [
    # Optimizer
    "SpindleOptimizer",
    "OptimizerConfig",
    "nsga2",
    # Parameter space
    "SPINDLE_SPACE",
    "ParameterSpace",
    "ContinuousVariable",
    "CategoricalVariable",
    "SpindleParameters",
    # Objective oracle
    "ObjectiveOracle",
    "SpindlePhysics",
    "OracleEvaluator",
    "safe_evaluate",
    "SENTINEL_OBJECTIVES",
    # Selection and survival
    "crowded_tournament",
    "select_parent_pair",
    "nsga2_survival",
    # Genetic operators
    "lift",
    "blx_alpha_crossover",
    "uniform_categorical_crossover",
    "polynomial_mutation",
    "categorical_mutation",
    "spindle_crossover",
    "spindle_mutation",
    # Primitives
    "dominates",
    "dominates_matrix",
    "non_dominated_sort",
    "fronts",
    "crowding_distance",
    "crowding_for_all_fronts",
    # Data structures
    "Population",
    "IndividualView",
    "OptimizationResult",
    # Reporting and logging
    "format_pareto_report",
    "configure_logging",
    # Exceptions
    "SpindleOptError",
    "ConfigurationError",
    "ParameterValidationError",
    "EvaluationError",
    "InvariantViolationError",
]
