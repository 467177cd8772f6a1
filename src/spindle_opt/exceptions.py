"""Exception hierarchy for spindle design optimization.

All package-specific exceptions inherit from SpindleOptError so callers can
catch every failure raised by the optimizer with a single except clause:

- ConfigurationError: an optimizer configuration is out of range
- ParameterValidationError: a parameter set violates the design space
- EvaluationError: the objective oracle could not score a parameter set
- InvariantViolationError: an internal consistency check failed (a bug)

Example:
    >>> try:
    ...     SpindleOptimizer().optimize(duration=-1.0, load_factor=1.0)
    ... except SpindleOptError as e:
    ...     print(e.message)
    duration must be positive, got -1.0
"""

from typing import Any


class SpindleOptError(Exception):
    """Base exception for all spindle_opt errors.

    Attributes:
        message: Human-readable error description.
        suggestion: Optional hint for fixing the error.
        details: Additional context as a dictionary.
    """

    def __init__(
        self,
        message: str,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        msg = self.message
        if self.suggestion:
            msg += f"\n\nSuggestion: {self.suggestion}"
        return msg


class ConfigurationError(SpindleOptError, ValueError):
    """Raised when an optimizer configuration is invalid."""


class ParameterValidationError(SpindleOptError, ValueError):
    """Raised when a spindle parameter set lies outside the design space."""


class EvaluationError(SpindleOptError, RuntimeError):
    """Raised by an objective oracle that cannot score a parameter set."""


class InvariantViolationError(SpindleOptError, RuntimeError):
    """Raised when an internal invariant of the optimizer does not hold.

    This always indicates a bug rather than a bad input, so the run is
    aborted instead of returning a malformed Pareto front.
    """
