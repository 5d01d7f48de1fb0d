"""
================================================================================
Harness Tools Common Utilities
================================================================================

Shared configuration loading and logging setup.

Exports:
    - ConfigLoader: Singleton YAML + environment configuration loader
    - get_config: Convenience function to get configuration values
    - init_logger: Initialize loguru with the project settings

Usage:
    from harness_tools.common import get_config, init_logger

    init_logger()
    base_url = get_config("ui.base_url", "http://localhost:3000")

================================================================================
"""

from .config_loader import ConfigLoader, ConfigurationError, DEFAULT_CONFIG_PATH
from .global_config import (
    get_config,
    init_logger,
    reset_logger,
)

__all__ = [
    "ConfigLoader",
    "ConfigurationError",
    "DEFAULT_CONFIG_PATH",
    "get_config",
    "init_logger",
    "reset_logger",
]
