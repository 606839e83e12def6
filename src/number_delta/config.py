"""Tolerance and test-plan configuration models and loaders."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from number_delta.errors import ConfigurationError
from number_delta.tolerance import FixedTolerance, RelativeTolerance, ToleranceMode

LOGGER = logging.getLogger(__name__)


class DeltaConfig(BaseModel):
    """Configuration shared by every assertion of a test run.

    At most one of ``within`` (a fixed epsilon) or ``relative`` (a ratio of the
    larger operand) may be set; with neither, a fixed epsilon of 1e-6 applies.
    The plan fields are handed to the reporter before the first assertion.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    within: float | None = Field(default=None, allow_inf_nan=False)
    relative: float | None = Field(default=None, allow_inf_nan=False)
    tests: int | None = Field(default=None, ge=0)
    no_plan: bool = False
    skip_all: str | None = None

    @model_validator(mode="after")
    def _validate_options(self) -> DeltaConfig:
        if self.within is not None and self.relative is not None:
            raise ValueError("Can't specify more than one of 'within' or 'relative'")
        for name in ("within", "relative"):
            value = getattr(self, name)
            if value is not None and value == 0:
                raise ValueError(f"'{name}' parameter must be non-zero")
        plans = [self.tests is not None, self.no_plan, self.skip_all is not None]
        if sum(plans) > 1:
            raise ValueError("Can't specify more than one of 'tests', 'no_plan' or 'skip_all'")
        return self

    @property
    def mode(self) -> ToleranceMode:
        if self.relative is not None:
            return RelativeTolerance(abs(self.relative))
        if self.within is not None:
            return FixedTolerance(abs(self.within))
        return FixedTolerance()

    def plan_options(self) -> dict[str, Any]:
        """Return the plan directive as keyword arguments for ``Reporter.plan``."""

        if self.tests is not None:
            return {"tests": self.tests}
        if self.no_plan:
            return {"no_plan": True}
        if self.skip_all is not None:
            return {"skip_all": self.skip_all}
        return {}


def _format_validation_error(error: ValidationError) -> str:
    lines = ["Configuration validation failed:"]
    for issue in error.errors():
        location = ".".join(str(part) for part in issue.get("loc", ()))
        message = issue.get("msg", "Invalid value")
        lines.append(f"- {location}: {message}" if location else f"- {message}")
    return "\n".join(lines)


def build_config(**options: Any) -> DeltaConfig:
    """Validate keyword options such as ``within=1e-9`` into a config."""

    return _validate(options)


def _validate(data: dict[Any, Any]) -> DeltaConfig:
    try:
        config = DeltaConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigurationError(_format_validation_error(exc)) from exc
    LOGGER.debug("config_built mode=%s", config.mode)
    return config


def load_config(path: str | Path) -> DeltaConfig:
    """Load a YAML tolerance configuration file from disk."""

    config_path = Path(path)
    try:
        raw = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigurationError(f"Unable to read config file '{config_path}': {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Invalid YAML in config file '{config_path}': {exc}") from exc

    data: Any = raw if raw is not None else {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Configuration file '{config_path}' must contain a top-level mapping/object."
        )

    config = _validate(data)
    LOGGER.info("config_loaded path=%s mode=%s", config_path, config.mode)
    return config
