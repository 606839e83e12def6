"""Tolerance modes and effective-epsilon resolution."""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass
from typing import TypeAlias

from number_delta.errors import ConfigurationError, InvalidEpsilon
from number_delta.formatting import format_epsilon

DEFAULT_EPSILON = 1e-6


@dataclass(frozen=True)
class FixedTolerance:
    """Compare every pair against the same absolute epsilon."""

    epsilon: float = DEFAULT_EPSILON

    def __post_init__(self) -> None:
        if not self.epsilon > 0 or not math.isfinite(self.epsilon):
            raise ConfigurationError(f"Fixed epsilon must be positive, got {self.epsilon!r}")

    def describe(self) -> str:
        return format_epsilon(self.epsilon)


@dataclass(frozen=True)
class RelativeTolerance:
    """Scale epsilon to the larger magnitude of each compared pair."""

    ratio: float

    def __post_init__(self) -> None:
        if not self.ratio > 0 or not math.isfinite(self.ratio):
            raise ConfigurationError(f"Relative ratio must be positive, got {self.ratio!r}")

    def describe(self) -> str:
        return f"relative tolerance {format_epsilon(self.ratio)}"


ToleranceMode: TypeAlias = FixedTolerance | RelativeTolerance


def resolve_epsilon(
    explicit_epsilon: float | None,
    p: float,
    q: float,
    mode: ToleranceMode,
) -> float:
    """Return the epsilon that applies to the scalar pair ``p`` and ``q``.

    An explicit epsilon wins over the configured mode and only its magnitude
    matters. Without one, a relative mode yields ``ratio * max(|p|, |q|)``,
    which is zero when both values are zero.
    """

    if explicit_epsilon is not None:
        return validate_epsilon(explicit_epsilon)

    match mode:
        case RelativeTolerance(ratio=ratio):
            return ratio * max(abs(p), abs(q))
        case FixedTolerance(epsilon=epsilon):
            return epsilon
    raise ConfigurationError(f"Unsupported tolerance mode: {mode!r}")


def validate_epsilon(epsilon: float | None) -> float:
    """Return ``abs(epsilon)`` or raise for a zero, missing or infinite value."""

    if epsilon is None:
        raise InvalidEpsilon("Value of epsilon must be provided")
    if isinstance(epsilon, bool) or not isinstance(epsilon, numbers.Real):
        raise InvalidEpsilon(f"Value of epsilon must be a number, got {type(epsilon).__name__}")
    value = float(epsilon)
    if value == 0 or math.isnan(value):
        raise InvalidEpsilon("Value of epsilon must be non-zero")
    if math.isinf(value):
        raise InvalidEpsilon("Value of epsilon must be finite")
    return abs(value)
