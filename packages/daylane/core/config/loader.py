"""Configuration loading utilities with JSON and YAML support."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml

from daylane.core.config.models import AppConfig
from daylane.core.utils.json import read_json
from daylane.core.utils.logging import configure_logging as _configure_logging

logger = logging.getLogger(__name__)

_DEFAULT_APP_CONFIG_PATH = Path("daylane.yaml")
_app_config_cache: AppConfig | None = None

LOG_LEVEL_ENV = "DAYLANE_LOG_LEVEL"


def detect_format(file_path: Path | str) -> str:
    """Detect config file format from extension.

    Args:
        file_path: Path to config file

    Returns:
        Format string: "json" or "yaml"

    Raises:
        ValueError: If format cannot be determined

    Example:
        >>> detect_format("daylane.json")
        'json'
        >>> detect_format("daylane.yml")
        'yaml'
    """
    suffix = Path(file_path).suffix.lower()

    if suffix == ".json":
        return "json"
    elif suffix in [".yaml", ".yml"]:
        return "yaml"
    else:
        raise ValueError(f"Unsupported config format: {suffix}")


def load_config(path: str | Path) -> dict[str, Any]:
    """Load and return a raw configuration dictionary.

    Format is auto-detected from the file extension.

    Args:
        path: Path to config file (.json, .yaml, or .yml)

    Returns:
        Raw configuration dictionary

    Raises:
        FileNotFoundError: If config file does not exist
        ValueError: If format is not supported or file content is invalid
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Config file does not exist: {path}")

    fmt = detect_format(path)

    if fmt == "json":
        try:
            return read_json(path)
        except Exception as e:
            raise ValueError(f"Invalid JSON in {path}: {e}") from e

    try:
        with path.open("r", encoding="utf-8") as f:
            content = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {path}: {e}") from e
    # safe_load returns None for empty files
    if content is None:
        return {}
    if not isinstance(content, dict):
        raise ValueError(f"Expected a mapping in {path}, got {type(content).__name__}")
    return content


def load_app_config(path: str | Path | None = None) -> AppConfig:
    """Load and validate application configuration.

    A missing file yields all defaults. ``DAYLANE_LOG_LEVEL`` overrides
    the configured log level when set.

    Args:
        path: Path to app config file (.json, .yaml, or .yml).
              Defaults to daylane.yaml

    Returns:
        Validated AppConfig instance

    Raises:
        ValidationError: If config is invalid
    """
    global _app_config_cache

    if path is None:
        path = _DEFAULT_APP_CONFIG_PATH

    if _app_config_cache is not None and Path(path) == _DEFAULT_APP_CONFIG_PATH:
        return _app_config_cache

    if Path(path).exists():
        config = AppConfig.model_validate(load_config(path))
    else:
        logger.debug("No config at %s, using defaults", path)
        config = AppConfig()

    _apply_env_overrides(config)

    if Path(path) == _DEFAULT_APP_CONFIG_PATH:
        _app_config_cache = config

    return config


def configure_logging(config: AppConfig | None = None) -> None:
    """Configure Python logging from app config.

    Args:
        config: AppConfig instance (loads default if None)
    """
    if config is None:
        config = load_app_config()

    _configure_logging(
        level=config.logging.level,
        format_string=config.logging.format,
        filename=config.logging.filename,
        structured=config.logging.structured,
    )


def _apply_env_overrides(config: AppConfig) -> None:
    level = os.getenv(LOG_LEVEL_ENV)
    if level:
        logger.debug("Loaded %s from environment", LOG_LEVEL_ENV)
        config.logging = config.logging.model_copy(update={"level": level.upper()})
