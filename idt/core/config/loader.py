"""
Configuration loader: reads idt.yml into a Settings model.

The file is optional. Without one, defaults apply; CLI options override
whatever the file says.

    # idt.yml
    max_workers: 8
    fail_on_error: true
    github_login: true
    http_timeout: 60
    command_timeout: 900
    health_check_timeout: 30
    skip: [php-cs-fixer, harper-ls]
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from idt.core.services.tool_install.data.constants import (
    HEALTH_CHECK_TIMEOUT,
    HTTP_TIMEOUT,
)

logger = logging.getLogger(__name__)

CONFIG_FILE = "idt.yml"


class ConfigError(Exception):
    """Raised when idt configuration is invalid or unreadable."""


class Settings(BaseModel):
    """Runtime settings for an install run."""

    model_config = ConfigDict(extra="forbid")

    max_workers: int | None = Field(default=None, ge=1)   # None = one per tool
    fail_on_error: bool = True
    github_login: bool = True
    http_timeout: float = Field(default=HTTP_TIMEOUT, gt=0)
    command_timeout: float | None = Field(default=None, gt=0)
    health_check_timeout: float = Field(default=HEALTH_CHECK_TIMEOUT, gt=0)
    skip: list[str] = Field(default_factory=list)


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for idt.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to idt.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def load_settings(path: Path | None = None) -> Settings:
    """Load and validate settings.

    Args:
        path: Explicit path to idt.yml. If None, searches upward and
            falls back to defaults when nothing is found.

    Raises:
        ConfigError: Explicit file missing, or any file invalid.
    """
    if path is None:
        path = find_config_file()
        if path is None:
            logger.debug("No %s found, using defaults", CONFIG_FILE)
            return Settings()
    elif not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading settings from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return Settings()
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    try:
        settings = Settings.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {path}: {e}") from e

    logger.info("Loaded settings from %s", path)
    return settings
