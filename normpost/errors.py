"""Exceptions raised by normpost."""

__all__ = [
    "NormPostError",
    "InvalidInput",
    "NumericalDegeneracy",
]


class NormPostError(Exception):
    """Base class for all normpost errors."""


class InvalidInput(NormPostError, ValueError):
    """A required field is missing, or a field has the wrong type or sign.

    Also raised when a denominator (variance, precision, combined sample
    size) would be zero before any arithmetic is attempted.
    """


class NumericalDegeneracy(NormPostError, ArithmeticError):
    """Individually valid inputs combined into a non-finite result."""
