"""Empirical grinding spindle performance model.

SpindlePhysics is the default objective oracle. It turns a spindle design
into vibration, bearing life and temperature rise using simple empirical
relations (load estimate, L10 bearing life, Archard-type wheel wear,
imbalance-induced vibration). The coefficients are engineering rules of
thumb rather than calibrated values.

The dynamic load profile contains random load spikes. They are drawn from
the generator passed to the constructor so that an optimizer run remains
reproducible when it shares its own generator with the model.

Power, thermal expansion, resonance and fatigue life are not part of
``evaluate``; they are building blocks for custom oracles.
"""

import numpy as np

from spindle_opt.exceptions import EvaluationError
from spindle_opt.parameters import SpindleParameters

TIME_STEP = 0.1  # s
SPIKE_PROBABILITY = 0.1
SPIKE_FACTOR = 1.5

SHAFT_LENGTH = 0.2  # m
SHAFT_DIAMETER = 0.05  # m
THERMAL_COEFFICIENT = 12e-6  # 1/K
WHEEL_THICKNESS = 0.02  # m
WHEEL_DENSITY = 2500.0  # kg/m^3
SYSTEM_STIFFNESS = 1e8  # N/m


class SpindlePhysics:
    """Default objective oracle based on empirical spindle formulas.

    Args:
        rng: Generator for load spikes. If None, a fresh unseeded generator
            is created.

    Example:
        >>> physics = SpindlePhysics(np.random.default_rng(0))
        >>> vibration, bearing_life, temperature_rise = physics.evaluate(params, 10.0, 1.0)
    """

    def __init__(self, rng: np.random.Generator | None = None) -> None:
        self.rng = rng if rng is not None else np.random.default_rng()

    def evaluate(
        self,
        parameters: SpindleParameters,
        duration: float,
        load_factor: float,
    ) -> tuple[float, float, float]:
        """Score a design for the optimizer.

        Returns:
            Tuple of (total vibration in mm/s, bearing L10 life in hours,
            temperature rise in degrees Celsius).

        Raises:
            ParameterValidationError: If the design lies outside the space.
            EvaluationError: If the duration is too short to produce a load profile.
        """
        parameters.validate()
        load_profile = self.dynamic_load_profile(parameters, duration, load_factor)
        if load_profile.size == 0:
            raise EvaluationError(
                f"empty load profile for duration {duration} s",
                suggestion=f"use a duration of at least {TIME_STEP} s",
            )

        vibration = self.estimate_vibration(parameters)
        temperature_rise = self.estimate_temperature_rise(parameters)
        bearing_life = self.bearing_l10_life(parameters, load_profile)
        wear = self.wheel_wear(parameters, load_profile, duration)
        total_vibration = vibration + self.wear_induced_vibration(parameters, wear)

        return total_vibration, bearing_life, temperature_rise

    def required_power(self, wheel_diameter: float, speed: float) -> float:
        """Grinding power in kW needed for a wheel diameter (mm) and speed (rpm)."""
        material_factor = 1.2
        return (wheel_diameter / 1000.0) * (speed / 1000.0) * 2.5 * material_factor

    def estimate_load(self, parameters: SpindleParameters) -> float:
        """Nominal radial grinding load in N."""
        return (parameters.wheel_diameter / 1000.0) * (parameters.max_speed / 1000.0) * 100.0

    def estimate_temperature_rise(self, parameters: SpindleParameters, load: float | None = None) -> float:
        """Steady-state temperature rise in degrees Celsius."""
        base = 18.0 if parameters.cooling_type == "Liquid" else 22.0
        rise = base + (parameters.max_speed / 10000.0) * 5.0 + (parameters.bearing_preload / 500.0) * 2.0
        if load is not None:
            rise += (load / 1000.0) * 2.0
        return rise

    def thermal_expansion(self, temperature_rise: float) -> float:
        """Axial shaft growth in m for a temperature rise."""
        return SHAFT_LENGTH * THERMAL_COEFFICIENT * temperature_rise

    def estimate_vibration(self, parameters: SpindleParameters, load: float | None = None) -> float:
        """Baseline vibration velocity in mm/s."""
        base = 0.4 if parameters.bearing_type == "Hybrid Ceramic" else 0.6
        speed_factor = parameters.max_speed / 10000.0
        alignment_factor = 1.2 if parameters.alignment_tolerance > 0.002 else 1.0
        tool_factor = 0.9 if parameters.tool_interface == "HSK" else 1.0
        vibration = base * speed_factor * alignment_factor * tool_factor
        if load is not None:
            vibration *= 1.0 + (load / 1000.0) * 0.5
        return vibration

    def resonance_frequency(self, parameters: SpindleParameters) -> float:
        """First bending resonance in Hz."""
        stiffness = 1.5e8 if parameters.bearing_type == "Hybrid Ceramic" else 1.2e8
        mass = parameters.wheel_diameter / 1000.0 * 2.0
        return float(np.sqrt(stiffness / mass) / (2 * np.pi))

    def dynamic_load_profile(
        self,
        parameters: SpindleParameters,
        duration: float,
        load_factor: float,
    ) -> np.ndarray:
        """Sample the grinding load every TIME_STEP seconds.

        The load oscillates +/-30 % around the scaled nominal load with a 2 s
        period; each sample has a 10 % chance of a 1.5x spike.

        Returns:
            Non-negative loads in N, shape (int(duration / TIME_STEP),).
        """
        base_load = self.estimate_load(parameters) * load_factor
        steps = int(duration / TIME_STEP)
        profile = np.empty(max(steps, 0), dtype=np.float64)
        for i in range(steps):
            t = i * TIME_STEP
            load = base_load * (1.0 + np.sin(2 * np.pi * t / 2.0) * 0.3)
            if self.rng.random() < SPIKE_PROBABILITY:
                load *= SPIKE_FACTOR
            profile[i] = max(0.0, load)
        return profile

    def bearing_l10_life(self, parameters: SpindleParameters, load_profile: np.ndarray) -> float:
        """Adjusted L10 bearing life in hours, floored at 1000 h."""
        dynamic_capacity = 50.0 if parameters.bearing_type == "Hybrid Ceramic" else 40.0
        equivalent_load = (float(np.mean(load_profile)) + parameters.bearing_preload) / 1000.0

        adjustment = 1.0
        if parameters.lubrication_type == "Grease":
            adjustment *= 0.8
        elif parameters.lubrication_type == "Oil-Air":
            adjustment *= 1.2
        if parameters.cooling_type == "Liquid":
            adjustment *= 1.1

        l10 = (dynamic_capacity / equivalent_load) ** 3 * 1_000_000
        l10_hours = l10 / (60.0 * parameters.max_speed) * adjustment
        return max(1000.0, l10_hours)

    def spindle_fatigue_life(self, parameters: SpindleParameters, load_profile: np.ndarray) -> float:
        """Remaining shaft fatigue life fraction in [0, 1] (Miner's rule)."""
        a, b = 20.0, 6.0
        section_modulus = np.pi * SHAFT_DIAMETER**3 / 32
        stress = load_profile * 0.1 / section_modulus
        with np.errstate(divide="ignore", over="ignore"):
            log_cycles = a - b * np.log10(stress / 1e6)
            damage = float(np.sum(1.0 / 10.0**log_cycles))
        return min(1.0, max(0.0, 1.0 - damage))

    def wheel_wear(self, parameters: SpindleParameters, load_profile: np.ndarray, duration: float) -> float:
        """Wheel diameter reduction in mm, capped at 20 % of the diameter."""
        wear_coefficient = 1e-6
        diameter = parameters.wheel_diameter / 1000.0
        peripheral_speed = np.pi * diameter * parameters.max_speed / 60.0
        wear_volume = wear_coefficient * float(np.mean(load_profile)) * peripheral_speed * duration
        reduction = wear_volume / (np.pi * diameter * WHEEL_THICKNESS * 1000.0)
        return min(reduction, parameters.wheel_diameter * 0.2)

    def wear_induced_vibration(self, parameters: SpindleParameters, wear: float) -> float:
        """Extra vibration in mm/s from wheel imbalance, capped at 2 mm/s."""
        diameter = parameters.wheel_diameter / 1000.0
        wear_volume = wear * np.pi * diameter * WHEEL_THICKNESS * 1000.0
        imbalance_mass = WHEEL_DENSITY * wear_volume * 1e-9
        wheel_mass = WHEEL_DENSITY * np.pi * (diameter / 2) ** 2 * WHEEL_THICKNESS
        eccentricity = (imbalance_mass * (diameter / 2)) / wheel_mass
        omega = 2 * np.pi * parameters.max_speed / 60.0
        imbalance_force = imbalance_mass * omega**2 * eccentricity
        amplitude = imbalance_force / SYSTEM_STIFFNESS * 1000.0
        return float(min(amplitude, 2.0))
