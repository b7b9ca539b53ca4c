"""Fatal error taxonomy for a stamping run."""

from __future__ import annotations

from pathlib import Path


class StamperError(RuntimeError):
    """Base class for conditions that abort the whole run."""


class ConfigurationError(StamperError):
    """Raised when run parameters conflict or cannot be parsed."""


class NotFoundError(StamperError):
    """Raised when a root, project or metadata file does not exist."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        super().__init__(f"Specified file does not exist: '{path}'")


class UnknownFileTypeError(StamperError):
    """Raised when the root descriptor is neither a solution nor a project."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        super().__init__(f"Unknown file type passed: '{path}'")


class MetadataEncodingError(StamperError):
    """Raised when a new value cannot be represented in a file's encoding."""


__all__ = [
    "StamperError",
    "ConfigurationError",
    "NotFoundError",
    "UnknownFileTypeError",
    "MetadataEncodingError",
]
