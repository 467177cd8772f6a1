"""Protocol definitions for the optimizer's external collaborators.

The optimizer never computes spindle physics itself. It asks an objective
oracle to score each candidate design:

    vibration, bearing_life, temperature_rise = oracle.evaluate(params, duration, load_factor)

Any object with a matching ``evaluate`` method can be plugged into
SpindleOptimizer, which makes it easy to swap the empirical model for a
higher-fidelity simulation or a test double.

Example:
    ```python
    class ConstantOracle:
        def evaluate(self, parameters, duration, load_factor):
            return 0.5, 20000.0, 25.0

    optimizer = SpindleOptimizer(oracle=ConstantOracle(), seed=1)
    ```
"""

from typing import Protocol, runtime_checkable

from spindle_opt.parameters import SpindleParameters


@runtime_checkable
class ObjectiveOracle(Protocol):
    """Protocol for spindle performance models.

    Parameters:
        parameters: The design to score. Always satisfies the design space.
        duration: Simulated operating duration in seconds (> 0).
        load_factor: Scaling applied to the nominal grinding load, in [0.5, 2.0].

    Returns:
        A 3-tuple ``(vibration, bearing_life, temperature_rise)`` in natural
        units: vibration in mm/s, bearing life in hours (larger is better),
        temperature rise in degrees Celsius.

    Implementations may raise any exception when they cannot score a design;
    the optimizer replaces the result with worst-case objectives.
    """

    def evaluate(
        self,
        parameters: SpindleParameters,
        duration: float,
        load_factor: float,
    ) -> tuple[float, float, float]:
        """Score one design.

        Args:
            parameters: The design to score.
            duration: Simulated duration in seconds.
            load_factor: Load scaling factor.

        Returns:
            Tuple of (vibration, bearing_life, temperature_rise).
        """
        ...
