"""Input-contract violations raised by the tabulation engine."""

from __future__ import annotations


class TabulationError(ValueError):
    """Base class for every error raised while building or deriving tables."""


class EmptyInputError(TabulationError):
    """An observation sequence has no elements."""


class LengthMismatchError(TabulationError):
    """Two observation sequences, or a sequence and its weights, differ in length."""


class NegativeWeightError(TabulationError):
    """A non-missing weight is below zero."""


class InvalidArgumentError(TabulationError):
    """An option falls outside its admissible values."""


__all__ = [
    "EmptyInputError",
    "InvalidArgumentError",
    "LengthMismatchError",
    "NegativeWeightError",
    "TabulationError",
]
