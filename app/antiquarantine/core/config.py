"""aq configuration and settings.

This module provides the configuration model and I/O functions for aq.
Configuration is stored in ~/.config/aq/config.toml and is optional:
every setting has a default, and command-line options override it.

Example config.toml::

    attribute = "com.apple.quarantine"
    workers = 8
    queue_capacity = 512

    [colors]
    present = "#ff8800"
"""

import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from antiquarantine import DEFAULT_ATTRIBUTE
from antiquarantine.core.paths import get_config_path
from antiquarantine.core.theme import ThemeColors


class AqConfig(BaseModel):
    """Configuration for aq.

    Attributes:
        attribute: Name of the extended attribute to detect and remove.
        workers: Number of worker threads for folder sweeps (None = CPU count).
        queue_capacity: Maximum number of discovered paths waiting for a
            worker (None = derived from the worker count).
        colors: Console color palette.
    """

    model_config = ConfigDict(extra="forbid")

    attribute: Annotated[
        str,
        Field(min_length=1, description="Extended attribute name"),
    ] = DEFAULT_ATTRIBUTE
    workers: Annotated[
        int | None,
        Field(ge=1, le=256, description="Worker threads (1-256, None = CPU count)"),
    ] = None
    queue_capacity: Annotated[
        int | None,
        Field(ge=1, le=1_000_000, description="Pending path capacity"),
    ] = None
    colors: ThemeColors = Field(default_factory=ThemeColors)

    @field_validator("attribute")
    @classmethod
    def validate_attribute(cls, v: str) -> str:
        """Reject attribute names the OS could never accept."""
        if "\x00" in v:
            msg = "attribute name must not contain NUL bytes"
            raise ValueError(msg)
        if v != v.strip():
            msg = "attribute name must not have leading or trailing whitespace"
            raise ValueError(msg)
        return v


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigNotFoundError(ConfigError):
    """Raised when the config file is not found."""


class ConfigParseError(ConfigError):
    """Raised when the config file cannot be parsed."""


def load_config(path: Path | None = None) -> AqConfig:
    """Load configuration from a TOML file.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Validated AqConfig object.

    Raises:
        ConfigNotFoundError: If the config file doesn't exist.
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the content doesn't match the schema.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        raise ConfigNotFoundError(f"Config not found: {config_path}")

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config: {e}") from e

    try:
        return AqConfig.model_validate(data)
    except (ValueError, ValidationError) as e:
        raise ConfigError(f"Invalid config content: {e}") from e


def load_config_or_default(path: Path | None = None) -> AqConfig:
    """Load configuration, falling back to defaults when no file exists.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        AqConfig from the file, or the default configuration.

    Raises:
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the content doesn't match the schema.
    """
    try:
        return load_config(path)
    except ConfigNotFoundError:
        return AqConfig()


def save_config(config: AqConfig, path: Path | None = None) -> Path:
    """Save configuration to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        config: The AqConfig object to save.
        path: Path to save the config. If None, uses the default config path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()

    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ConfigError(f"Cannot create config directory: {e}") from e

    data = config_to_dict(config)

    tmp_path: Path | None = None
    try:
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config: {e}") from e

    return config_path


def config_to_dict(config: AqConfig) -> dict[str, object]:
    """Convert AqConfig to a dictionary for TOML serialization.

    TOML has no null, so unset optional values are omitted, and only
    colors that differ from the default palette are written.

    Args:
        config: The AqConfig to convert.

    Returns:
        Dictionary ready for TOML serialization.
    """
    result: dict[str, object] = {"attribute": config.attribute}

    if config.workers is not None:
        result["workers"] = config.workers

    if config.queue_capacity is not None:
        result["queue_capacity"] = config.queue_capacity

    defaults = ThemeColors()
    colors = {
        name: value
        for name, value in config.colors.model_dump().items()
        if value != getattr(defaults, name)
    }
    if colors:
        result["colors"] = colors

    return result
