"""Config package with lazy attribute loading to avoid reading configuration during packaging."""

from __future__ import annotations

from importlib import import_module
from typing import Any, Dict, Iterable

__all__ = [
    "CONFIG",
    "DEBUG",
    "LOGGING_CONFIG",
    "STAMPING_CONFIG",
    "logging_settings",
    "validate_config",
    "MIN_PYTHON_VERSION",
    "MIN_PYTHON_VERSION_STR",
    "PROJECT_VERSION",
    "PYTHON_REQUIRES_SPECIFIER",
    "VERSION_INFO",
    "__version__",
]

_MODULE_ATTRS: Dict[str, Iterable[str]] = {
    "config.settings": [
        "CONFIG",
        "DEBUG",
        "LOGGING_CONFIG",
        "STAMPING_CONFIG",
        "logging_settings",
        "validate_config",
    ],
    "config.version": [
        "MIN_PYTHON_VERSION",
        "MIN_PYTHON_VERSION_STR",
        "PROJECT_VERSION",
        "PYTHON_REQUIRES_SPECIFIER",
        "VERSION_INFO",
        "__version__",
    ],
}

_ATTR_TO_MODULE: Dict[str, str] = {
    attribute: module for module, attributes in _MODULE_ATTRS.items() for attribute in attributes
}


def __getattr__(name: str) -> Any:
    module_name = _ATTR_TO_MODULE.get(name)
    if module_name is None:
        raise AttributeError(f"module 'config' has no attribute {name!r}")
    # Fetch only the requested name; touching CONFIG reads the configuration files.
    value = getattr(import_module(module_name), name)
    globals()[name] = value
    return value
