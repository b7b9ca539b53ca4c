"""
Utilities for the AssemblyInfo stamper.
"""

from .logger import ModuleLogger, StamperLogger, get_logger, setup_logging

__all__ = [
    "ModuleLogger",
    "StamperLogger",
    "get_logger",
    "setup_logging",
]
