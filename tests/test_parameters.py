"""Tests for the spindle parameter space."""

import numpy as np
import pytest

from spindle_opt import (
    SPINDLE_SPACE,
    CategoricalVariable,
    ContinuousVariable,
    ParameterSpace,
    ParameterValidationError,
    SpindleParameters,
)
from spindle_opt.parameters import (
    BEARING_TYPES,
    COOLING_TYPES,
    LUBRICATION_TYPES,
    SPINDLE_TYPES,
    TOOL_INTERFACES,
)


class TestVariables:
    """Tests for single design variables."""

    def test_continuous_rejects_inverted_bounds(self) -> None:
        """Lower bound must be below upper bound."""
        with pytest.raises(ValueError, match="must be below upper bound"):
            ContinuousVariable("x", 2.0, 1.0)

    def test_categorical_rejects_empty_choices(self) -> None:
        """An enumeration needs at least one choice."""
        with pytest.raises(ValueError, match="at least one choice"):
            CategoricalVariable("c", ())

    def test_categorical_cardinality(self) -> None:
        assert CategoricalVariable("c", ("a", "b", "c")).cardinality == 3

    def test_space_rejects_duplicate_names(self) -> None:
        """Variable names identify SpindleParameters fields and must be unique."""
        with pytest.raises(ValueError, match="unique"):
            ParameterSpace([ContinuousVariable("x", 0, 1), ContinuousVariable("x", 0, 2)])


class TestSpindleSpace:
    """Tests for the grinding spindle design space."""

    def test_layout(self) -> None:
        """Continuous fields come first, then the five enumerations."""
        assert SPINDLE_SPACE.n_vars == 10
        assert len(SPINDLE_SPACE) == 10
        np.testing.assert_array_equal(SPINDLE_SPACE.continuous_idx, [0, 1, 2, 3, 4])
        np.testing.assert_array_equal(SPINDLE_SPACE.categorical_idx, [5, 6, 7, 8, 9])
        np.testing.assert_array_equal(SPINDLE_SPACE.integer_idx, [1])

    def test_bounds(self) -> None:
        """Encoded bounds match the physical ranges and choice counts."""
        np.testing.assert_array_equal(SPINDLE_SPACE.lower[:5], [0.5, 1000, 50.0, 100.0, 0.0001])
        np.testing.assert_array_equal(SPINDLE_SPACE.upper[:5], [50.0, 30000, 1000.0, 2000.0, 0.01])
        np.testing.assert_array_equal(SPINDLE_SPACE.upper[5:], [2, 1, 1, 2, 2])

    def test_names_cover_all_fields(self) -> None:
        """Every SpindleParameters field is a variable."""
        assert set(SPINDLE_SPACE.names) == set(SpindleParameters.__dataclass_fields__)


class TestSample:
    """Tests for random individual generation."""

    def test_samples_are_contained(self, random_vectors: np.ndarray) -> None:
        """Every sample satisfies bounds and enumeration membership."""
        for x in random_vectors:
            assert SPINDLE_SPACE.contains(x)

    def test_max_speed_is_whole(self, random_vectors: np.ndarray) -> None:
        """Max speed is integral."""
        speeds = random_vectors[:, 1]
        np.testing.assert_array_equal(speeds, np.trunc(speeds))

    def test_sample_is_deterministic(self) -> None:
        """Same seed, same individual."""
        a = SPINDLE_SPACE.sample(np.random.default_rng(7))
        b = SPINDLE_SPACE.sample(np.random.default_rng(7))
        np.testing.assert_array_equal(a, b)

    def test_all_choices_reachable(self, rng: np.random.Generator) -> None:
        """Uniform sampling eventually hits every choice of every enumeration."""
        samples = np.stack([SPINDLE_SPACE.sample(rng) for _ in range(300)])
        for i, k in zip(SPINDLE_SPACE.categorical_idx, SPINDLE_SPACE.cardinality[SPINDLE_SPACE.categorical_idx]):
            assert set(samples[:, i].astype(int)) == set(range(k))


class TestRepairAndContains:
    """Tests for projecting vectors back into the space."""

    def test_repair_clamps_and_rounds(self) -> None:
        """Out-of-range values are clamped, speed truncated, categories rounded."""
        x = np.array([-5.0, 12345.9, 2000.0, 150.0, 0.02, 2.6, -1.0, 0.4, 1.5, 7.0])
        repaired = SPINDLE_SPACE.repair(x)

        np.testing.assert_array_equal(repaired, [0.5, 12345.0, 1000.0, 150.0, 0.01, 2.0, 0.0, 0.0, 2.0, 2.0])
        assert SPINDLE_SPACE.contains(repaired)

    def test_repair_does_not_modify_input(self) -> None:
        """repair returns a new array."""
        x = np.array([100.0, 500.0, 10.0, 50.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0])
        before = x.copy()
        SPINDLE_SPACE.repair(x)
        np.testing.assert_array_equal(x, before)

    def test_contains_rejects_fractional_category(self, random_vectors: np.ndarray) -> None:
        """Categorical slots must hold whole indices."""
        x = random_vectors[0].copy()
        x[5] = 0.5
        assert not SPINDLE_SPACE.contains(x)

    def test_contains_rejects_fractional_speed(self, random_vectors: np.ndarray) -> None:
        x = random_vectors[0].copy()
        x[1] = 5000.5
        assert not SPINDLE_SPACE.contains(x)

    def test_contains_rejects_nan_and_wrong_shape(self, random_vectors: np.ndarray) -> None:
        x = random_vectors[0].copy()
        x[0] = np.nan
        assert not SPINDLE_SPACE.contains(x)
        assert not SPINDLE_SPACE.contains(random_vectors[0][:5])


class TestDecodeEncode:
    """Tests for converting between vectors and named parameters."""

    def test_decode_types(self, random_vectors: np.ndarray) -> None:
        """Decoded fields have their natural Python types."""
        params = SPINDLE_SPACE.decode(random_vectors[0])

        assert isinstance(params.max_speed, int)
        assert isinstance(params.power_rating, float)
        assert params.spindle_type in SPINDLE_TYPES
        assert params.bearing_type in BEARING_TYPES
        assert params.cooling_type in COOLING_TYPES
        assert params.lubrication_type in LUBRICATION_TYPES
        assert params.tool_interface in TOOL_INTERFACES

    def test_encode_known_design(self, sample_parameters: SpindleParameters) -> None:
        """Categorical values map to their choice index."""
        x = SPINDLE_SPACE.encode(sample_parameters)

        np.testing.assert_array_equal(x, [15.0, 18000, 300.0, 800.0, 0.001, 2, 1, 0, 2, 2])
        assert SPINDLE_SPACE.decode(x) == sample_parameters

    def test_encode_rejects_unknown_choice(self, sample_parameters: SpindleParameters) -> None:
        """Encoding an unknown enumeration value fails with a clear message."""
        bad = SpindleParameters(**{**sample_parameters.__dict__, "cooling_type": "Cryogenic"})
        with pytest.raises(ParameterValidationError, match="Cooling type must be one of: Liquid, Air"):
            SPINDLE_SPACE.encode(bad)


class TestValidate:
    """Tests for SpindleParameters.validate."""

    def test_valid_design_passes(self, sample_parameters: SpindleParameters) -> None:
        sample_parameters.validate()

    def test_bounds_are_inclusive(self, sample_parameters: SpindleParameters) -> None:
        """Designs exactly on the bounds are valid."""
        edge = SpindleParameters(**{**sample_parameters.__dict__, "power_rating": 50.0, "max_speed": 1000})
        edge.validate()

    @pytest.mark.parametrize(
        ("field", "value", "message"),
        [
            ("power_rating", 60.0, "Power rating must be between 0.5 and 50 kW"),
            ("max_speed", 500, "Max speed must be between 1000 and 30000 RPM"),
            ("wheel_diameter", 1200.0, "Wheel diameter must be between 50 and 1000 mm"),
            ("bearing_preload", 50.0, "Bearing preload must be between 100 and 2000 N"),
            ("alignment_tolerance", 0.05, "Alignment tolerance must be between 0.0001 and 0.01 mm"),
            ("spindle_type", "Gear-Driven", "Spindle type must be one of"),
            ("tool_interface", "CAT40", "Tool interface must be one of"),
        ],
    )
    def test_rejects_out_of_range(
        self, sample_parameters: SpindleParameters, field: str, value, message: str
    ) -> None:
        """Each field is checked with a message naming it."""
        bad = SpindleParameters(**{**sample_parameters.__dict__, field: value})
        with pytest.raises(ParameterValidationError, match=message) as exc_info:
            bad.validate()
        assert exc_info.value.details["field"] == field
