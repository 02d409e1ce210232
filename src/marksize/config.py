"""Configuration loading for marksize."""

import logging
import os
import re
import tomllib
from pathlib import Path
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from marksize.scanner import expand_path

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "MARKSIZE_CONFIG"
DEFAULT_CONFIG_PATH = "~/.config/marksize/config.toml"
DEFAULT_DEAD_LINE = 700


class ConfigError(Exception):
    """Raised when a configuration file or value is invalid."""


class MarkSizeConfig(BaseModel):
    """Options recognized by marksize."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    filename_filter: Optional[str] = Field(
        None, description="Regex matched against file names; None counts every file"
    )
    dead_line: Union[int, float, None] = Field(
        DEFAULT_DEAD_LINE, description="Over-limit threshold in MB; None or false disables it"
    )
    status_prefix: Optional[str] = Field(
        None, description="Text prepended to the status total"
    )
    precise: bool = Field(False, description="Keep fractional MB instead of truncating")

    @field_validator("filename_filter")
    @classmethod
    def _check_filter(cls, value: Optional[str]) -> Optional[str]:
        if value:
            try:
                re.compile(value)
            except re.error as e:
                raise ValueError(f"invalid filename_filter {value!r}: {e}") from e
        return value or None

    @field_validator("dead_line", mode="before")
    @classmethod
    def _check_dead_line(cls, value: Any) -> Any:
        # false in TOML means "disabled"; true has no meaning
        if value is False:
            return None
        if value is True:
            raise ValueError("dead_line must be a number or false")
        return value

    def with_overrides(self, **overrides: Any) -> "MarkSizeConfig":
        """Copy with the non-None overrides applied and re-validated."""
        values = self.model_dump()
        values.update({k: v for k, v in overrides.items() if v is not None})
        return build_config(values)


def build_config(values: dict[str, Any]) -> MarkSizeConfig:
    """Validate a raw mapping into a MarkSizeConfig."""
    try:
        return MarkSizeConfig(**values)
    except ValidationError as e:
        raise ConfigError(str(e)) from e


def resolve_config_path(path: Union[str, Path, None] = None) -> Path:
    """Explicit path, then $MARKSIZE_CONFIG, then the default location."""
    if path is not None:
        return expand_path(path)
    env_path = os.environ.get(CONFIG_ENV_VAR, "").strip()
    if env_path:
        return expand_path(env_path)
    return expand_path(DEFAULT_CONFIG_PATH)


def load_config(path: Union[str, Path, None] = None) -> MarkSizeConfig:
    """
    Load configuration from a TOML file.

    Options may sit at the top level or under a [marksize] table.
    A missing file yields the defaults.

    Raises:
        ConfigError: If the file is unreadable, not valid TOML, or holds
            invalid values
    """
    config_path = resolve_config_path(path)
    if not config_path.is_file():
        logger.debug("No config at %s, using defaults", config_path)
        return MarkSizeConfig()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigError(f"{config_path}: {e}") from e

    values = data.get("marksize", data)
    logger.debug("Loaded config from %s", config_path)
    return build_config(values)
