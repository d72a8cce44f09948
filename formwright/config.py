# formwright/config.py
"""
Runtime configuration for form runs.

Responsibilities:
- Hold the knobs shared by the interpreter and input sources
- Load them from YAML (optional), expanding ${ENV_VAR} placeholders
- Validate strictly; unknown keys are errors
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, List, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, model_validator

from formwright.exceptions import ConfigNotFoundError
from formwright.logging.logger import get_logger
from formwright.logging.tags import CONFIG

logger = get_logger(__name__)


class FormConfig(BaseModel):
    quiet: bool = Field(
        default=False,
        description="Hide field titles and descriptions when prompting",
    )
    true_tokens: List[str] = Field(
        default_factory=lambda: ["y", "yes", "true", "on", "1"],
        description="Case-insensitive answers accepted as True for bool fields",
    )
    false_tokens: List[str] = Field(
        default_factory=lambda: ["n", "no", "false", "off", "0"],
        description="Case-insensitive answers accepted as False for bool fields",
    )

    model_config = ConfigDict(extra="forbid", frozen=True)

    @model_validator(mode="after")
    def _tokens_disjoint(self) -> "FormConfig":
        overlap = {t.lower() for t in self.true_tokens} & {t.lower() for t in self.false_tokens}
        if overlap:
            raise ValueError(f"tokens cannot mean both true and false: {sorted(overlap)}")
        return self


def _expand_env(value: Any) -> Any:
    if isinstance(value, str):
        return os.path.expandvars(value)
    if isinstance(value, dict):
        return {k: _expand_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_expand_env(v) for v in value]
    return value


def load_form_config(path: Optional[Path] = None) -> FormConfig:
    """
    Load and validate form configuration.

    Without a path the defaults are returned.
    """
    if path is None:
        return FormConfig()

    path = Path(path)
    if not path.exists():
        raise ConfigNotFoundError(f"Config file not found: {path}")

    logger.debug(f"{CONFIG} Loading form config from {path}")
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    return FormConfig.model_validate(_expand_env(data))
