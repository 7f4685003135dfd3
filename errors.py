"""
Errors raised by the projection engine.

Everything here is a plain ValueError underneath, so a caller that only wants
"bad input, show a message" can catch ProjectionError (or ValueError) once.
"""

import math
from typing import Optional


class ProjectionError(ValueError):
    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class InvalidInput(ProjectionError):
    """Negative, non-finite or otherwise out-of-domain numeric input."""


class InvalidRange(ProjectionError):
    """Inconsistent age/term ordering, or a horizon over the 100-year cap."""


class MissingParameter(ProjectionError):
    """A rate or tax parameter the selected mode/treatment needs is absent."""


def check_number(value, field: str) -> float:
    """Return value as a finite float."""
    try:
        x = float(value)
    except (TypeError, ValueError):
        raise InvalidInput(f"{field} must be a number, got {value!r}", field) from None
    if math.isnan(x) or math.isinf(x):
        raise InvalidInput(f"{field} must be finite", field)
    return x


def check_amount(value, field: str) -> float:
    x = check_number(value, field)
    if x < 0:
        raise InvalidInput(f"{field} must be non-negative, got {x}", field)
    return x


def check_fraction(value, field: str) -> float:
    """Rates are decimal fractions in [0, 1] (0.065 = 6.5%)."""
    x = check_amount(value, field)
    if x > 1:
        raise InvalidInput(f"{field} must be a fraction in [0, 1], got {x}", field)
    return x
