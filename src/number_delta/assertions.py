"""Assertions comparing numbers and nested arrays within a tolerance.

The assertions take ``(actual, expected, [epsilon,] [label])`` and record one
result with their reporter. Failures are recorded with a diagnostic, never
raised; only a zero, missing or infinite explicit epsilon raises ``InvalidEpsilon``.

Example::

    from number_delta import DeltaAsserter, build_config
    from number_delta.reporter import TapReporter

    check = DeltaAsserter(build_config(relative=1e-3), TapReporter())
    check.delta_ok(1.01, 1.0099, "values within 1.01e-3")
    check.delta_within([[3.14, 6.28], [1.41, 2.84]], [[3.14, 6.28], [1.42, 2.84]], 1e-6)
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from number_delta.compare import ComparisonOutcome, compare
from number_delta.config import DeltaConfig, build_config
from number_delta.errors import ConfigurationError
from number_delta.formatting import format_epsilon
from number_delta.reporter import AssertionReporter, TapReporter
from number_delta.tolerance import validate_epsilon

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeltaAsserter:
    """Bind a tolerance configuration to a reporter."""

    config: DeltaConfig = field(default_factory=DeltaConfig)
    reporter: AssertionReporter = field(default_factory=TapReporter)

    def delta_within(
        self, p: Any, q: Any, epsilon: float | None, label: str | None = None
    ) -> bool:
        """Pass when every pair of ``p`` and ``q`` differs by less than ``epsilon``."""

        epsilon = validate_epsilon(epsilon)
        outcome = compare(p, q, epsilon, self.config.mode)
        return self._report(outcome.ok, label, outcome.located_diagnostic())

    def delta_ok(self, p: Any, q: Any, label: str | None = None) -> bool:
        """Like ``delta_within`` with the configured default tolerance."""

        outcome = compare(p, q, None, self.config.mode)
        return self._report(outcome.ok, label, outcome.located_diagnostic())

    def delta_not_within(
        self, p: Any, q: Any, epsilon: float | None, label: str | None = None
    ) -> bool:
        """Pass when any pair of ``p`` and ``q`` differs by ``epsilon`` or more."""

        epsilon = validate_epsilon(epsilon)
        outcome = compare(p, q, epsilon, self.config.mode)
        return self._report_not_within(outcome, label, lambda: format_epsilon(epsilon))

    def delta_not_ok(self, p: Any, q: Any, label: str | None = None) -> bool:
        """Like ``delta_not_within`` with the configured default tolerance."""

        outcome = compare(p, q, None, self.config.mode)
        return self._report_not_within(outcome, label, self.config.mode.describe)

    def _report_not_within(
        self, outcome: ComparisonOutcome, label: str | None, tolerance: Callable[[], str]
    ) -> bool:
        passed = not outcome.ok
        diagnostic = "" if passed else f"Arguments are equal to within {tolerance()}"
        return self._report(passed, label, diagnostic)

    def _report(self, passed: bool, label: str | None, diagnostic: str) -> bool:
        LOGGER.debug("assertion_recorded passed=%s label=%s", passed, label)
        self.reporter.record_result(passed, label)
        if not passed:
            LOGGER.info("assertion_failed label=%s diagnostic=%s", label, diagnostic)
            self.reporter.emit_diagnostic(diagnostic)
        return passed


_default: DeltaAsserter | None = None


def configure(reporter: AssertionReporter | None = None, **options: Any) -> DeltaAsserter:
    """Install the asserter used by the module-level assertion functions.

    ``options`` accepts ``within`` or ``relative`` and an optional plan
    (``tests``, ``no_plan`` or ``skip_all``). The default asserter can be set
    only once, and only before the first module-level assertion.
    """

    global _default
    if _default is not None:
        raise ConfigurationError("Default tolerance is already configured")
    config = build_config(**options)
    asserter = DeltaAsserter(config, reporter if reporter is not None else TapReporter())
    plan = config.plan_options()
    if plan:
        plan_method = getattr(asserter.reporter, "plan", None)
        if plan_method is None:
            raise ConfigurationError(
                f"{type(asserter.reporter).__name__} does not support test plans"
            )
        plan_method(**plan)
    _default = asserter
    LOGGER.info("default_configured mode=%s plan=%s", config.mode, plan or None)
    return asserter


def default_asserter() -> DeltaAsserter:
    global _default
    if _default is None:
        _default = DeltaAsserter()
    return _default


def delta_within(p: Any, q: Any, epsilon: float | None, label: str | None = None) -> bool:
    return default_asserter().delta_within(p, q, epsilon, label)


def delta_ok(p: Any, q: Any, label: str | None = None) -> bool:
    return default_asserter().delta_ok(p, q, label)


def delta_not_within(p: Any, q: Any, epsilon: float | None, label: str | None = None) -> bool:
    return default_asserter().delta_not_within(p, q, epsilon, label)


def delta_not_ok(p: Any, q: Any, label: str | None = None) -> bool:
    return default_asserter().delta_not_ok(p, q, label)
