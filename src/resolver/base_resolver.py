# src/resolver/base_resolver.py
# Base class for solution/project reference resolvers
# ===================================================

"""
A resolver turns the root descriptor of a run into the ordered list of
project files it names, and each project into the ordered list of metadata
files it includes. The stamping system only talks to this interface, so a
structured project parser can replace the line scanner without touching the
engine.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from src.errors import NotFoundError
from src.utils.logger import get_logger

if TYPE_CHECKING:  # pragma: no cover - import for typing only
    from src.utils.logger import StamperLogger


class BaseReferenceResolver(ABC):
    """Abstract solution -> project -> metadata-file resolver."""

    def __init__(self, logger_factory: Optional["StamperLogger"] = None) -> None:
        self.resolver_type = self.__class__.__name__
        self.logger_factory: "StamperLogger" = logger_factory or get_logger()
        self.module_logger = self.logger_factory.create_module_logger(
            f"resolver.{self.resolver_type.lower()}"
        )

    @abstractmethod
    def project_files(self, root: Path) -> List[Path]:
        """
        Return the project files named by ``root``.

        A project descriptor resolves to itself; a solution resolves to the
        projects it lists, in file order.

        Raises:
            UnknownFileTypeError: ``root`` is neither a solution nor a project.
        """

    @abstractmethod
    def metadata_files(self, project: Path) -> List[Path]:
        """Return the metadata files included by ``project``, in file order."""

    def describe(self) -> Dict[str, Any]:
        """Settings that shape resolution, for the startup log."""
        return {"resolver": self.resolver_type}

    def require_file(self, path: Path) -> Path:
        """Return ``path`` or raise :class:`NotFoundError` if it does not exist."""

        if not path.is_file():
            raise NotFoundError(path)
        return path

    def _emit_log(
        self,
        level: str,
        event: str,
        path: Optional[Path] = None,
        *,
        message: str = "",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        payload = {
            "event": event,
            "path": str(path) if path is not None else None,
            "message": message,
            "details": details or {},
        }
        getattr(self.module_logger, level)(payload)
