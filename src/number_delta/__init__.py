"""Compare numbers and nested arrays of numbers against a tolerance."""

from __future__ import annotations

from number_delta.assertions import (
    DeltaAsserter,
    configure,
    delta_not_ok,
    delta_not_within,
    delta_ok,
    delta_within,
)
from number_delta.compare import ComparisonOutcome, compare
from number_delta.config import DeltaConfig, build_config, load_config
from number_delta.errors import (
    ConfigurationError,
    InvalidEpsilon,
    InvalidOperand,
    NumberDeltaError,
)
from number_delta.tolerance import FixedTolerance, RelativeTolerance, resolve_epsilon

__version__ = "1.0.0"

__all__ = [
    "ComparisonOutcome",
    "ConfigurationError",
    "DeltaAsserter",
    "DeltaConfig",
    "FixedTolerance",
    "InvalidEpsilon",
    "InvalidOperand",
    "NumberDeltaError",
    "RelativeTolerance",
    "__version__",
    "build_config",
    "compare",
    "configure",
    "delta_not_ok",
    "delta_not_within",
    "delta_ok",
    "delta_within",
    "load_config",
    "resolve_epsilon",
]
