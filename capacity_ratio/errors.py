"""
Error Definitions for capacity-ratio

Two tiers of errors exist. Shape construction raises the recoverable
InvalidShapeError so a caller can decide how to react. Configuration entry
points (descriptor parsing, the composition root) raise ConfigurationError
subclasses, which are meant to abort startup.
"""

from typing import Any, Dict, Optional, Sequence


class ScoringError(Exception):
    """Base exception class for all capacity-ratio errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message


class InvalidShapeError(ScoringError):
    """Raised when breakpoints do not form a valid scoring function shape."""

    def __init__(
        self,
        reason: str,
        index: Optional[int] = None,
        values: Optional[Sequence[Any]] = None,
    ):
        super().__init__(reason)
        self.reason = reason
        self.index = index
        self.values = tuple(values) if values is not None else ()


class ConfigurationError(ScoringError):
    """Raised when configuration is invalid or inconsistent."""

    def __init__(self, field: str, value: Any, expected: str, **details):
        message = f"Invalid configuration for {field}: got {value}, expected {expected}"

        super().__init__(message, {"field": field, "value": value, "expected": expected, **details})
        self.field = field
        self.value = value
        self.expected = expected


class ShapeParseError(ConfigurationError):
    """Raised when a shape descriptor cannot be turned into a valid shape.

    This is fatal by contract: a scheduler must not start with a curve it
    could not validate.
    """

    def __init__(self, descriptor: str, reason: Optional[str] = None):
        message = f"Cannot parse function shape '{descriptor}'"
        if reason:
            message += f"; err='{reason}'"

        ScoringError.__init__(self, message)
        self.field = "scoring_function_shape"
        self.value = descriptor
        self.expected = "x1=y1,x2=y2,... descriptor"
        self.descriptor = descriptor
        self.reason = reason
