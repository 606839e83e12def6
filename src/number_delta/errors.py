"""Error types raised by number_delta."""

from __future__ import annotations


class NumberDeltaError(ValueError):
    """Base error for fatal number_delta conditions."""


class ConfigurationError(NumberDeltaError):
    """Raised when tolerance or plan configuration is invalid."""


class InvalidEpsilon(NumberDeltaError):
    """Raised when an explicit epsilon is zero or missing."""


class InvalidOperand(NumberDeltaError, TypeError):
    """Raised when a value is neither a number nor an array of numbers."""
