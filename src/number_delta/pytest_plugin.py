"""pytest integration: a ``delta`` fixture configured from ini options."""

from __future__ import annotations

from typing import Any

import pytest

from number_delta.assertions import DeltaAsserter
from number_delta.config import DeltaConfig, build_config


class PytestReporter:
    """Fail the running test with the diagnostic of a failed assertion."""

    def __init__(self) -> None:
        self.count = 0

    def record_result(self, passed: bool, label: str | None) -> bool:
        self.count += 1
        return passed

    def emit_diagnostic(self, text: str) -> None:
        __tracebackhide__ = True
        pytest.fail(text, pytrace=False)


def pytest_addoption(parser: pytest.Parser) -> None:
    parser.addini("delta_within", "Default fixed epsilon for the delta fixture.", default=None)
    parser.addini(
        "delta_relative", "Default relative tolerance for the delta fixture.", default=None
    )


def _ini_float(config: pytest.Config, name: str) -> float | None:
    raw: Any = config.getini(name)
    if raw is None or raw == "":
        return None
    try:
        return float(raw)
    except (TypeError, ValueError) as exc:
        raise pytest.UsageError(f"{name} must be a number, got {raw!r}") from exc


@pytest.fixture(scope="session")
def delta_config(pytestconfig: pytest.Config) -> DeltaConfig:
    options = {
        "within": _ini_float(pytestconfig, "delta_within"),
        "relative": _ini_float(pytestconfig, "delta_relative"),
    }
    return build_config(**{name: value for name, value in options.items() if value is not None})


@pytest.fixture
def delta(delta_config: DeltaConfig) -> DeltaAsserter:
    """Assertions that fail the test with a delta diagnostic."""

    return DeltaAsserter(delta_config, PytestReporter())
