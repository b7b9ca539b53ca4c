"""Project configuration facade backed by asminfo.config_manager.

``CONFIG`` and the settings derived from it are loaded on first access, so
importing this module never reads ``asminfo.toml`` or the environment.
"""
from __future__ import annotations

import codecs
from typing import Any, Dict

from asminfo.config_manager import Config, ConfigError, load_config

_LAZY_SETTINGS = ("CONFIG", "DEBUG", "LOGGING_CONFIG", "STAMPING_CONFIG")


def logging_settings(config: Config) -> Dict[str, Any]:
    """Flatten the logging section into the mapping the logger expects."""

    return {
        "level": config.logging.level,
        "file_path": str(config.logging.file_path) if config.logging.file_path else None,
        "max_file_size": f"{config.logging.max_file_size_mb} MB",
        "retention": f"{config.logging.retention_days} days",
        "debug": config.app.debug,
    }


def _load_settings() -> None:
    config = load_config()
    globals().update(
        CONFIG=config,
        DEBUG=config.app.debug,
        LOGGING_CONFIG=logging_settings(config),
        STAMPING_CONFIG=config.stamping.model_dump(mode="python"),
    )


def __getattr__(name: str) -> Any:
    if name not in _LAZY_SETTINGS:
        raise AttributeError(f"module 'config.settings' has no attribute {name!r}")
    _load_settings()
    return globals()[name]


def validate_config(config: Config | None = None) -> None:
    """Execute domain specific consistency checks."""

    cfg = config if config is not None else __getattr__("CONFIG")
    stamping = cfg.stamping
    probe = "[assembly: AssemblyVersion(\"0.0.0.0\")]"
    try:
        probe.encode(stamping.default_encoding)
    except UnicodeEncodeError as exc:
        raise ConfigError(
            f"stamping.default_encoding '{stamping.default_encoding}' cannot encode declarations"
        ) from exc
    if codecs.lookup(stamping.default_encoding).name.startswith("utf-16"):
        raise ConfigError(
            "stamping.default_encoding must not be UTF-16; UTF-16 files are detected by their byte-order mark"
        )
    if any(separator in stamping.metadata_file_stem for separator in ("/", "\\")):
        raise ConfigError("stamping.metadata_file_stem must be a bare file name")


__all__ = [
    "CONFIG",
    "DEBUG",
    "LOGGING_CONFIG",
    "STAMPING_CONFIG",
    "logging_settings",
    "validate_config",
]
