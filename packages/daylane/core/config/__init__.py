"""Configuration management for daylane."""

from daylane.core.config.loader import (
    configure_logging,
    detect_format,
    load_app_config,
    load_config,
)
from daylane.core.config.models import (
    AppConfig,
    DuplicatePolicy,
    LaneThresholds,
    LayoutConfig,
    LoggingConfig,
    OverflowPolicy,
    PaddingConfig,
    VerticalConfig,
)

__all__ = [
    # Loaders
    "load_config",
    "load_app_config",
    "detect_format",
    "configure_logging",
    # App-level config
    "AppConfig",
    "LoggingConfig",
    # Layout config
    "LayoutConfig",
    "PaddingConfig",
    "LaneThresholds",
    "VerticalConfig",
    "OverflowPolicy",
    "DuplicatePolicy",
]
