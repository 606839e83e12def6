"""CLI smoke tests for number_delta."""

from __future__ import annotations

import os
import subprocess
import sys
from pathlib import Path


def _env() -> dict[str, str]:
    env = os.environ.copy()
    src_path = str(Path(__file__).resolve().parents[1] / "src")
    env["PYTHONPATH"] = (
        src_path if "PYTHONPATH" not in env else f"{src_path}{os.pathsep}{env['PYTHONPATH']}"
    )
    return env


def test_cli_help_exits_zero() -> None:
    result = subprocess.run(
        [sys.executable, "-m", "number_delta.cli", "--help"],
        check=False,
        capture_output=True,
        text=True,
        env=_env(),
    )

    assert result.returncode == 0
    assert "usage:" in result.stdout.lower()


def test_cli_compare_failure_exits_one() -> None:
    result = subprocess.run(
        [
            sys.executable,
            "-m",
            "number_delta.cli",
            "compare",
            "[1, 2]",
            "[1, 3]",
            "--epsilon",
            "0.1",
        ],
        check=False,
        capture_output=True,
        text=True,
        env=_env(),
    )

    assert result.returncode == 1
    assert "not ok 1" in result.stdout
