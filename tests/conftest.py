"""Shared fixtures: structured-log capture and on-disk sample projects."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Tuple

import pytest

from metadata_samples import CS_ASSEMBLY_INFO, CSPROJ, SOLUTION, VB_ASSEMBLY_INFO, VBPROJ

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))


@dataclass
class StubModuleLogger:
    """Captures structured log payloads for assertions."""

    name: str
    records: List[Tuple[str, str, Any]]

    def debug(self, payload: Any) -> None:
        self.records.append(("debug", self.name, payload))

    def info(self, payload: Any) -> None:
        self.records.append(("info", self.name, payload))

    def warning(self, payload: Any) -> None:
        self.records.append(("warning", self.name, payload))

    def error(self, payload: Any) -> None:
        self.records.append(("error", self.name, payload))


@dataclass
class StubLoggerFactory:
    """Hands out :class:`StubModuleLogger` instances sharing one record list."""

    records: List[Tuple[str, str, Any]] = field(default_factory=list)

    def create_module_logger(self, name: str) -> StubModuleLogger:
        return StubModuleLogger(name, self.records)

    def log_system_startup(self, version: str, config_summary: Dict[str, Any] | None = None) -> None:
        self.records.append(("info", "startup", {"event": "startup", "version": version}))

    def log_error_with_context(self, error: Exception, context: Dict[str, Any] | None = None) -> None:
        self.records.append(("error", "failure", {"event": "failure", "error": str(error)}))

    def events(self, level: str | None = None) -> List[str]:
        return [
            payload["event"]
            for record_level, _name, payload in self.records
            if isinstance(payload, dict) and (level is None or record_level == level)
        ]


@pytest.fixture
def logger_factory() -> StubLoggerFactory:
    return StubLoggerFactory()


@pytest.fixture
def write_file(tmp_path: Path) -> Callable[..., Path]:
    """Write text below ``tmp_path`` (creating parents) and return the path."""

    def _write(relative: str, content: str, encoding: str = "cp1252", newline: str = "\r\n") -> Path:
        path = tmp_path.joinpath(*relative.split("/"))
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content.replace("\n", newline).encode(encoding))
        return path

    return _write


@pytest.fixture
def sample_solution(write_file: Callable[..., Path], tmp_path: Path) -> Path:
    """A solution with one C# and one VB project, each with one AssemblyInfo file."""

    write_file("Core/Core.csproj", CSPROJ, encoding="utf-8")
    write_file("Core/Properties/AssemblyInfo.cs", CS_ASSEMBLY_INFO)
    write_file("Ui/Ui.vbproj", VBPROJ, encoding="utf-8")
    write_file("Ui/My Project/AssemblyInfo.vb", VB_ASSEMBLY_INFO)
    return write_file("App.sln", SOLUTION, encoding="utf-8")
