from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest

from number_delta import assertions


@pytest.fixture(autouse=True)
def _restore_package_logger() -> Iterator[None]:
    logger = logging.getLogger("number_delta")
    handlers = list(logger.handlers)
    level = logger.level
    propagate = logger.propagate
    yield
    for handler in logger.handlers:
        if handler not in handlers:
            handler.close()
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate


@pytest.fixture(autouse=True)
def _reset_default_asserter(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(assertions, "_default", None)
