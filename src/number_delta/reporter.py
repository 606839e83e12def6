"""Reporters that record assertion results and diagnostics."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from typing import Protocol, TextIO

from number_delta.errors import ConfigurationError

LOGGER = logging.getLogger(__name__)


class AssertionReporter(Protocol):
    """Collaborator that counts results and shows failure diagnostics."""

    def record_result(self, passed: bool, label: str | None) -> bool: ...

    def emit_diagnostic(self, text: str) -> None: ...


@dataclass
class CollectingReporter:
    """Keep results and diagnostics in memory."""

    results: list[tuple[bool, str | None]] = field(default_factory=list)
    diagnostics: list[str] = field(default_factory=list)

    def record_result(self, passed: bool, label: str | None) -> bool:
        self.results.append((passed, label))
        return passed

    def emit_diagnostic(self, text: str) -> None:
        self.diagnostics.append(text)

    @property
    def failures(self) -> int:
        return sum(1 for passed, _ in self.results if not passed)


class TapReporter:
    """Write results in the Test Anything Protocol.

    Results are numbered from 1. A plan may be declared once, either up front
    with a test count, deferred to ``finish`` with ``no_plan``, or as
    ``skip_all`` which ends the run before any test.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream if stream is not None else sys.stdout
        self._planned: int | None = None
        self._has_plan = False
        self._no_plan = False
        self._count = 0
        self._failed = 0

    @property
    def count(self) -> int:
        return self._count

    @property
    def failed(self) -> int:
        return self._failed

    def _write(self, line: str) -> None:
        self._stream.write(f"{line}\n")

    def plan(
        self,
        *,
        tests: int | None = None,
        no_plan: bool = False,
        skip_all: str | None = None,
    ) -> None:
        if tests is None and not no_plan and skip_all is None:
            return
        if self._has_plan:
            raise ConfigurationError("You tried to plan twice")
        if sum([tests is not None, no_plan, skip_all is not None]) > 1:
            raise ConfigurationError("Plan takes exactly one of 'tests', 'no_plan' or 'skip_all'")
        if tests is not None and tests < 0:
            raise ConfigurationError(f"Number of tests must be non-negative, got {tests}")

        self._has_plan = True
        if skip_all is not None:
            self._planned = 0
            self._write(f"1..0 # SKIP {skip_all}")
        elif no_plan:
            self._no_plan = True
        else:
            self._planned = tests
            self._write(f"1..{tests}")
        LOGGER.debug("plan_declared tests=%s no_plan=%s", self._planned, self._no_plan)

    def record_result(self, passed: bool, label: str | None) -> bool:
        self._count += 1
        status = "ok" if passed else "not ok"
        line = f"{status} {self._count}"
        if label:
            line = f"{line} - {_escape(label)}"
        self._write(line)
        if not passed:
            self._failed += 1
            if label:
                self._write(f"#   Failed test '{label}'")
            else:
                self._write("#   Failed test")
        return passed

    def emit_diagnostic(self, text: str) -> None:
        for line in text.splitlines() or [""]:
            self._write(f"# {line}".rstrip())

    def finish(self) -> bool:
        """Close the run; return whether it met its plan without failures."""

        if self._no_plan:
            self._planned = self._count
            self._write(f"1..{self._count}")

        healthy = self._failed == 0
        if self._planned is not None and self._planned != self._count:
            self.emit_diagnostic(
                f"Looks like you planned {self._planned} test{_plural(self._planned)} "
                f"but ran {self._count}."
            )
            healthy = False
        if self._failed:
            self.emit_diagnostic(
                f"Looks like you failed {self._failed} test{_plural(self._failed)} "
                f"of {self._count}."
            )
        LOGGER.info(
            "run_finished count=%d failed=%d planned=%s", self._count, self._failed, self._planned
        )
        return healthy


def _escape(label: str) -> str:
    return label.replace("#", "\\#").replace("\n", " ")


def _plural(count: int) -> str:
    return "" if count == 1 else "s"
