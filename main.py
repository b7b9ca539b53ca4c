# main.py
# Stamping system for the AssemblyInfo stamper
# ============================================

"""
Coordinates one stamping run:

- resolve the root descriptor into project files,
- resolve every project into metadata files,
- hand each metadata file to the rewrite engine, in order.

Processing is strictly sequential. The first missing file or invalid
parameter aborts the run; files already rewritten keep their new content.
"""

import time
import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from asminfo import Config
from config import settings as config_settings
from src.contracts import StampArguments, StampRequestModel
from src.errors import NotFoundError
from src.metadata import FileOutcome, FileState, MetadataRewriteEngine
from src.resolver import BaseReferenceResolver, LineScanResolver
from src.utils import StamperLogger, get_logger


@dataclass
class StampReport:
    """Summary of one run."""

    root: Path
    projects: List[Path] = field(default_factory=list)
    metadata_files: List[Path] = field(default_factory=list)
    outcomes: List[FileOutcome] = field(default_factory=list)
    dry_run: bool = False
    duration_seconds: float = 0.0

    @property
    def written(self) -> List[FileOutcome]:
        return [outcome for outcome in self.outcomes if outcome.state is FileState.WRITTEN]

    @property
    def changed(self) -> List[FileOutcome]:
        return [outcome for outcome in self.outcomes if outcome.changed]

    @property
    def unchanged(self) -> List[FileOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.changed]

    def summary(self) -> Dict[str, Any]:
        return {
            "root": str(self.root),
            "projects": len(self.projects),
            "metadata_files": len(self.metadata_files),
            "changed": len(self.changed),
            "written": len(self.written),
            "unchanged": len(self.unchanged),
            "read_only_cleared": sum(1 for outcome in self.outcomes if outcome.cleared_read_only),
            "dry_run": self.dry_run,
            "duration_seconds": round(self.duration_seconds, 3),
        }


class AssemblyInfoStamper:
    """
    Runs the resolver and the rewrite engine for one request.

    Collaborators are injected so tests can swap the resolver or the logger
    factory; by default they are built from the loaded configuration.
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        logger_factory: Optional[StamperLogger] = None,
        resolver: Optional[BaseReferenceResolver] = None,
    ):
        self.run_id = str(uuid.uuid4())[:8]
        self.config = config or config_settings.CONFIG
        self.logger_factory = logger_factory or get_logger()
        self.system_logger = self.logger_factory.create_module_logger("system")
        self.resolver = resolver or self._build_resolver()

    def _build_resolver(self) -> BaseReferenceResolver:
        stamping = self.config.stamping
        return LineScanResolver(
            metadata_file_stem=stamping.metadata_file_stem,
            source_control_marker=stamping.source_control_marker,
            case_insensitive_paths=stamping.case_insensitive_paths,
            default_encoding=stamping.default_encoding,
            logger_factory=self.logger_factory,
        )

    def prepare_request(self, request: StampRequestModel) -> StampRequestModel:
        """Fold the configured flag defaults into ``request``."""

        stamping = self.config.stamping
        return request.with_defaults(
            create_missing_lines=stamping.create_missing_lines,
            force_assembly_version=stamping.force_assembly_version,
        )

    def resolve(self, root: Path) -> Tuple[List[Path], List[Path]]:
        """Return the project files and metadata files reachable from ``root``."""

        if not root.is_file():
            raise NotFoundError(root)
        projects = self.resolver.project_files(root)
        metadata_files: List[Path] = []
        for project in projects:
            self.resolver.require_file(project)
            metadata_files.extend(self.resolver.metadata_files(project))
        return projects, metadata_files

    def run(self, request: StampRequestModel) -> StampReport:
        """
        Execute one stamping run.

        Raises:
            StamperError: on the first fatal condition; nothing after it runs.
        """
        start = time.perf_counter()
        request = self.prepare_request(request)
        report = StampReport(root=request.root, dry_run=request.dry_run)

        self._emit_log(
            "debug",
            "system.run.start",
            request.root,
            details={
                "run_id": self.run_id,
                "version_spec": repr(request.version_spec),
                "create_missing_lines": request.create_missing_lines,
                "force_assembly_version": request.force_assembly_version,
                "dry_run": request.dry_run,
            },
        )

        report.projects, report.metadata_files = self.resolve(request.root)

        engine = MetadataRewriteEngine(
            request,
            default_encoding=self.config.stamping.default_encoding,
            default_newline=self.config.stamping.default_newline,
            logger_factory=self.logger_factory,
        )
        for metadata_path in report.metadata_files:
            self.resolver.require_file(metadata_path)
            report.outcomes.append(engine.process(metadata_path))

        report.duration_seconds = time.perf_counter() - start
        self._emit_log(
            "debug",
            "system.run.completed",
            request.root,
            details=report.summary(),
        )
        return report

    def run_arguments(self, arguments: StampArguments) -> StampReport:
        """Validate raw arguments and run them."""
        return self.run(StampRequestModel.from_arguments(arguments))

    def describe(self) -> Dict[str, Any]:
        """Settings that shape a run, for the startup log."""
        stamping = self.config.stamping
        return {
            "run_id": self.run_id,
            "default_encoding": stamping.default_encoding,
            "create_missing_lines": stamping.create_missing_lines,
            "force_assembly_version": stamping.force_assembly_version,
            **self.resolver.describe(),
        }

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
        getattr(self.system_logger, level)(payload)


def create_system(
    config: Optional[Config] = None,
    logger_factory: Optional[StamperLogger] = None,
    resolver: Optional[BaseReferenceResolver] = None,
) -> AssemblyInfoStamper:
    """Factory for a configured :class:`AssemblyInfoStamper`."""
    return AssemblyInfoStamper(config=config, logger_factory=logger_factory, resolver=resolver)


if __name__ == "__main__":
    from run_stamper import main as cli_main

    raise SystemExit(cli_main())
