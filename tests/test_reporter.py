"""Tests for assertion reporters."""

from __future__ import annotations

import io

import pytest

from number_delta.errors import ConfigurationError
from number_delta.reporter import CollectingReporter, TapReporter


def test_collecting_reporter_counts_failures() -> None:
    reporter = CollectingReporter()

    reporter.record_result(True, "a")
    reporter.record_result(False, "b")
    reporter.emit_diagnostic("boom")

    assert reporter.failures == 1
    assert reporter.diagnostics == ["boom"]


def test_tap_reporter_numbers_results() -> None:
    stream = io.StringIO()
    reporter = TapReporter(stream)

    assert reporter.record_result(True, "first") is True
    assert reporter.record_result(False, None) is False
    reporter.emit_diagnostic("line one\nline two")

    assert stream.getvalue().splitlines() == [
        "ok 1 - first",
        "not ok 2",
        "#   Failed test",
        "# line one",
        "# line two",
    ]
    assert reporter.count == 2
    assert reporter.failed == 1


def test_tap_reporter_escapes_hash_in_labels() -> None:
    stream = io.StringIO()
    TapReporter(stream).record_result(True, "case #3")

    assert stream.getvalue() == "ok 1 - case \\#3\n"


def test_tap_reporter_plan_with_count() -> None:
    stream = io.StringIO()
    reporter = TapReporter(stream)

    reporter.plan(tests=1)
    reporter.record_result(True, "only")

    assert reporter.finish() is True
    assert stream.getvalue().splitlines() == ["1..1", "ok 1 - only"]


def test_tap_reporter_no_plan_prints_count_at_finish() -> None:
    stream = io.StringIO()
    reporter = TapReporter(stream)

    reporter.plan(no_plan=True)
    reporter.record_result(True, None)
    reporter.record_result(True, None)

    assert reporter.finish() is True
    assert stream.getvalue().splitlines() == ["ok 1", "ok 2", "1..2"]


def test_tap_reporter_skip_all() -> None:
    stream = io.StringIO()
    reporter = TapReporter(stream)

    reporter.plan(skip_all="no fixtures")

    assert stream.getvalue() == "1..0 # SKIP no fixtures\n"


def test_tap_reporter_rejects_second_plan() -> None:
    reporter = TapReporter(io.StringIO())
    reporter.plan(tests=2)

    with pytest.raises(ConfigurationError, match="plan twice"):
        reporter.plan(no_plan=True)


def test_tap_reporter_rejects_conflicting_plan() -> None:
    with pytest.raises(ConfigurationError, match="exactly one"):
        TapReporter(io.StringIO()).plan(tests=2, no_plan=True)


def test_tap_reporter_finish_reports_plan_mismatch_and_failures() -> None:
    stream = io.StringIO()
    reporter = TapReporter(stream)
    reporter.plan(tests=3)
    reporter.record_result(False, "bad")

    assert reporter.finish() is False
    assert stream.getvalue().splitlines()[-2:] == [
        "# Looks like you planned 3 tests but ran 1.",
        "# Looks like you failed 1 test of 1.",
    ]
