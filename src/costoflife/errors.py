"""
Error types raised by the costoflife parser and amortization engine.

Every error subclasses the builtin exception callers would already expect
(ValueError for bad input, OverflowError for calendar overflow), so code that
only knows about builtins keeps working.
"""

from typing import Optional


class CostOfLifeError(Exception):
    """Base class for all costoflife errors."""


class ValidationError(CostOfLifeError, ValueError):
    """A transaction could not be built from its input.

    Attributes:
        token: The offending input token, when a single token is to blame
    """

    def __init__(self, message: str, token: Optional[str] = None):
        super().__init__(message)
        self.token = token


class MissingAmount(ValidationError):
    """No amount token (e.g. ``10€``) was found in the input."""

    def __init__(self, message: str = "missing amount, add one like '10€'"):
        super().__init__(message)


class MissingTitle(ValidationError):
    """Nothing was left over to use as the transaction title."""

    def __init__(self, message: str = "missing title, add a few words describing the expense"):
        super().__init__(message)


class InvalidAmountPrecision(ValidationError):
    """The amount has more than two fractional digits or is negative."""


class InvalidDate(CostOfLifeError, ValueError):
    """A date token matched the DDMMYY shape but is not a real calendar day."""

    def __init__(self, message: str, token: Optional[str] = None):
        super().__init__(message)
        self.token = token


class ArithmeticOverflow(CostOfLifeError, OverflowError):
    """Advancing a date ran past the last representable calendar day."""
