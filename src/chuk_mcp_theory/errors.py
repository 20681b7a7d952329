"""
Error taxonomy for the theory engine.

Every error is deterministic: the same input always fails the same way,
so callers fix the input rather than retry. All errors are ValueErrors.
"""

from __future__ import annotations

from typing import Any


class TheoryError(ValueError):
    """Base class for all theory engine errors. Carries the offending value."""

    def __init__(self, message: str, value: Any = None) -> None:
        super().__init__(message)
        self.value = value


class RangeError(TheoryError):
    """A pitch or computed note is outside 0-127."""


class UnknownScaleError(TheoryError):
    """Unrecognized scale identifier."""


class UnknownChordError(TheoryError):
    """Unrecognized chord quality identifier."""


class InvalidNameError(TheoryError):
    """Malformed pitch name string."""


class InvalidDegreeError(TheoryError):
    """Roman numeral or degree that does not resolve in the given key."""


class ValidationError(TheoryError):
    """Structurally invalid request (empty progression, bad count, ...)."""


__all__ = [
    "TheoryError",
    "RangeError",
    "UnknownScaleError",
    "UnknownChordError",
    "InvalidNameError",
    "InvalidDegreeError",
    "ValidationError",
]
