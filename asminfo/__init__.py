"""Configuration tooling for the AssemblyInfo stamper."""
from __future__ import annotations

from .config_manager import ConfigError, load_config
from .config_schema import Config, DEFAULT_CONFIG, StampingConfig, iter_field_docs

__all__ = [
    "load_config",
    "Config",
    "ConfigError",
    "DEFAULT_CONFIG",
    "StampingConfig",
    "iter_field_docs",
]
