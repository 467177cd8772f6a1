"""Genetic operators for mixed continuous/categorical spindle designs.

This module provides:
- lift: apply a per-individual function to a population
- blx_alpha_crossover: BLX-alpha blend crossover for continuous fields
- uniform_categorical_crossover: uniform crossover for categorical fields
- polynomial_mutation: bounded polynomial mutation for continuous fields
- categorical_mutation: uniform resampling of categorical fields
- spindle_crossover / spindle_mutation: the composed operators used by the optimizer
"""

from spindle_opt.operators.base import lift
from spindle_opt.operators.standard import (
    blx_alpha_crossover,
    categorical_mutation,
    polynomial_mutation,
    spindle_crossover,
    spindle_mutation,
    uniform_categorical_crossover,
)

__all__ = [
    "lift",
    "blx_alpha_crossover",
    "uniform_categorical_crossover",
    "polynomial_mutation",
    "categorical_mutation",
    "spindle_crossover",
    "spindle_mutation",
]
