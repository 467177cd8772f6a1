"""Spindle design parameter space.

This module defines the search space explored by the optimizer:

- ContinuousVariable / CategoricalVariable: a single design variable
- ParameterSpace: an ordered schema of variables with a numeric encoding
- SpindleParameters: a decoded, named spindle parameter set
- SPINDLE_SPACE: the grinding spindle design space

Individuals are stored as float vectors (one entry per variable) so that a
population fits the struct-of-arrays layout of Population. Continuous fields
hold their physical value; categorical fields hold the integer index of the
selected choice.
"""

from dataclasses import dataclass

import numpy as np

from spindle_opt.exceptions import ParameterValidationError


@dataclass(frozen=True)
class ContinuousVariable:
    """A bounded real (or integral) design variable.

    Attributes:
        name: Field name in SpindleParameters.
        lower: Inclusive lower bound.
        upper: Inclusive upper bound.
        integer: If True, values are truncated toward zero to whole numbers.
        label: Human-readable name used in validation messages.
        unit: Physical unit used in validation messages.
    """

    name: str
    lower: float
    upper: float
    integer: bool = False
    label: str = ""
    unit: str = ""

    def __post_init__(self) -> None:
        if not self.lower < self.upper:
            raise ValueError(f"{self.name}: lower bound {self.lower} must be below upper bound {self.upper}")


@dataclass(frozen=True)
class CategoricalVariable:
    """An unordered finite enumeration of choices."""

    name: str
    choices: tuple[str, ...]
    label: str = ""

    def __post_init__(self) -> None:
        if len(self.choices) == 0:
            raise ValueError(f"{self.name}: at least one choice is required")

    @property
    def cardinality(self) -> int:
        return len(self.choices)


Variable = ContinuousVariable | CategoricalVariable


@dataclass(frozen=True)
class SpindleParameters:
    """A complete grinding spindle design.

    Attributes:
        spindle_type: Drive arrangement (Belt-Driven, Direct-Drive, Motorized).
        power_rating: Motor power in kW.
        max_speed: Maximum spindle speed in rpm.
        wheel_diameter: Grinding wheel diameter in mm.
        bearing_type: Bearing family (Angular Contact, Hybrid Ceramic).
        bearing_preload: Axial bearing preload in N.
        cooling_type: Cooling medium (Liquid, Air).
        lubrication_type: Bearing lubrication (Grease, Oil-Mist, Oil-Air).
        tool_interface: Wheel/tool clamping interface.
        alignment_tolerance: Shaft alignment tolerance in mm.
    """

    spindle_type: str
    power_rating: float
    max_speed: int
    wheel_diameter: float
    bearing_type: str
    bearing_preload: float
    cooling_type: str
    lubrication_type: str
    tool_interface: str
    alignment_tolerance: float

    def validate(self, space: "ParameterSpace | None" = None) -> None:
        """Check every field against the design space.

        Args:
            space: Space to validate against (default SPINDLE_SPACE).

        Raises:
            ParameterValidationError: If any field is out of bounds or not a
                member of its enumeration.
        """
        space = space if space is not None else SPINDLE_SPACE
        for var in space.variables:
            value = getattr(self, var.name)
            if isinstance(var, ContinuousVariable):
                if not var.lower <= value <= var.upper:
                    raise ParameterValidationError(
                        f"{var.label or var.name} must be between {var.lower:g} and {var.upper:g} {var.unit}".rstrip(),
                        details={"field": var.name, "value": value},
                    )
            elif value not in var.choices:
                raise ParameterValidationError(
                    f"{var.label or var.name} must be one of: {', '.join(var.choices)}",
                    details={"field": var.name, "value": value},
                )


class ParameterSpace:
    """Ordered schema of design variables with a float-vector encoding.

    Example:
        >>> rng = np.random.default_rng(0)
        >>> x = SPINDLE_SPACE.sample(rng)
        >>> SPINDLE_SPACE.contains(x)
        True
        >>> params = SPINDLE_SPACE.decode(x)
        >>> np.array_equal(SPINDLE_SPACE.encode(params), x)
        True
    """

    def __init__(self, variables: list[Variable]) -> None:
        names = [v.name for v in variables]
        if len(set(names)) != len(names):
            raise ValueError(f"variable names must be unique, got {names}")
        self.variables: tuple[Variable, ...] = tuple(variables)
        self.continuous_idx = np.array(
            [i for i, v in enumerate(self.variables) if isinstance(v, ContinuousVariable)], dtype=np.intp
        )
        self.categorical_idx = np.array(
            [i for i, v in enumerate(self.variables) if isinstance(v, CategoricalVariable)], dtype=np.intp
        )
        self.integer_idx = np.array(
            [i for i, v in enumerate(self.variables) if isinstance(v, ContinuousVariable) and v.integer],
            dtype=np.intp,
        )

        # Categorical columns are bounded by [0, k - 1] in the encoding
        self.lower = np.array(
            [v.lower if isinstance(v, ContinuousVariable) else 0.0 for v in self.variables], dtype=np.float64
        )
        self.upper = np.array(
            [v.upper if isinstance(v, ContinuousVariable) else v.cardinality - 1.0 for v in self.variables],
            dtype=np.float64,
        )
        self.cardinality = np.array(
            [v.cardinality if isinstance(v, CategoricalVariable) else 0 for v in self.variables], dtype=np.int64
        )

    def __len__(self) -> int:
        return len(self.variables)

    @property
    def n_vars(self) -> int:
        return len(self.variables)

    @property
    def names(self) -> list[str]:
        return [v.name for v in self.variables]

    def sample(self, rng: np.random.Generator) -> np.ndarray:
        """Draw one random encoded individual.

        One uniform number is drawn per variable, in schema order. Continuous
        variables map it linearly onto their bounds (integral ones truncated);
        categorical variables pick choice ``floor(u * k)``.

        Args:
            rng: Generator owned by the optimizer run.

        Returns:
            Encoded vector of shape (n_vars,).
        """
        u = rng.random(self.n_vars)
        x = self.lower + u * (self.upper - self.lower)
        if self.integer_idx.size:
            x[self.integer_idx] = np.trunc(x[self.integer_idx])
        if self.categorical_idx.size:
            k = self.cardinality[self.categorical_idx]
            x[self.categorical_idx] = np.minimum(np.floor(u[self.categorical_idx] * k), k - 1)
        return x

    def repair(self, x: np.ndarray) -> np.ndarray:
        """Return a copy of x projected back into the space.

        Continuous values are clamped to their bounds, integral values are
        truncated toward zero and categorical indices are rounded and clamped.
        """
        repaired = np.clip(np.asarray(x, dtype=np.float64), self.lower, self.upper)
        if self.integer_idx.size:
            repaired[self.integer_idx] = np.trunc(repaired[self.integer_idx])
        if self.categorical_idx.size:
            repaired[self.categorical_idx] = np.rint(repaired[self.categorical_idx])
        return repaired

    def contains(self, x: np.ndarray) -> bool:
        """Check bounds and enumeration membership of an encoded vector."""
        x = np.asarray(x, dtype=np.float64)
        if x.shape != (self.n_vars,) or not np.all(np.isfinite(x)):
            return False
        if np.any(x < self.lower) or np.any(x > self.upper):
            return False
        whole = np.concatenate([self.integer_idx, self.categorical_idx])
        return bool(np.all(x[whole] == np.trunc(x[whole])))

    def decode(self, x: np.ndarray) -> SpindleParameters:
        """Convert an encoded vector into named parameters."""
        values = {}
        for i, var in enumerate(self.variables):
            if isinstance(var, CategoricalVariable):
                values[var.name] = var.choices[int(x[i])]
            elif var.integer:
                values[var.name] = int(x[i])
            else:
                values[var.name] = float(x[i])
        return SpindleParameters(**values)

    def encode(self, params: SpindleParameters) -> np.ndarray:
        """Convert named parameters into an encoded vector.

        Raises:
            ParameterValidationError: If a categorical value is not a valid choice.
        """
        x = np.empty(self.n_vars, dtype=np.float64)
        for i, var in enumerate(self.variables):
            value = getattr(params, var.name)
            if isinstance(var, CategoricalVariable):
                if value not in var.choices:
                    raise ParameterValidationError(
                        f"{var.label or var.name} must be one of: {', '.join(var.choices)}",
                        details={"field": var.name, "value": value},
                    )
                x[i] = var.choices.index(value)
            else:
                x[i] = value
        return x


SPINDLE_TYPES = ("Belt-Driven", "Direct-Drive", "Motorized")
BEARING_TYPES = ("Angular Contact", "Hybrid Ceramic")
COOLING_TYPES = ("Liquid", "Air")
LUBRICATION_TYPES = ("Grease", "Oil-Mist", "Oil-Air")
TOOL_INTERFACES = ("Precision Collet", "Hydraulic Chuck", "HSK")

# Continuous fields first, then categorical, as in the random generator
SPINDLE_SPACE = ParameterSpace(
    [
        ContinuousVariable("power_rating", 0.5, 50.0, label="Power rating", unit="kW"),
        ContinuousVariable("max_speed", 1000, 30000, integer=True, label="Max speed", unit="RPM"),
        ContinuousVariable("wheel_diameter", 50.0, 1000.0, label="Wheel diameter", unit="mm"),
        ContinuousVariable("bearing_preload", 100.0, 2000.0, label="Bearing preload", unit="N"),
        ContinuousVariable("alignment_tolerance", 0.0001, 0.01, label="Alignment tolerance", unit="mm"),
        CategoricalVariable("spindle_type", SPINDLE_TYPES, label="Spindle type"),
        CategoricalVariable("bearing_type", BEARING_TYPES, label="Bearing type"),
        CategoricalVariable("cooling_type", COOLING_TYPES, label="Cooling type"),
        CategoricalVariable("lubrication_type", LUBRICATION_TYPES, label="Lubrication type"),
        CategoricalVariable("tool_interface", TOOL_INTERFACES, label="Tool interface"),
    ]
)

