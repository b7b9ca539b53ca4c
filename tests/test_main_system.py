"""Tests for the stamping system that drives resolver and engine."""

from __future__ import annotations

from pathlib import Path

import pytest

from asminfo import Config
from main import StampReport, create_system
from src.errors import NotFoundError, UnknownFileTypeError
from src.metadata import FileState


def _system(logger_factory, **stamping):
    config = Config.model_validate({"stamping": stamping}) if stamping else Config()
    return create_system(config=config, logger_factory=logger_factory)


def _text(path: Path) -> str:
    return path.read_bytes().decode("cp1252")


def test_solution_with_csharp_and_vb_projects(sample_solution: Path, logger_factory) -> None:
    root = sample_solution.parent
    report = _system(logger_factory).run_arguments({"root": str(sample_solution), "version": "1.2.3.4"})

    assert isinstance(report, StampReport)
    assert len(report.projects) == 2
    assert len(report.metadata_files) == 2
    assert [outcome.state for outcome in report.outcomes] == [FileState.WRITTEN, FileState.WRITTEN]

    cs = _text(root / "Core" / "Properties" / "AssemblyInfo.cs")
    vb = _text(root / "Ui" / "My Project" / "AssemblyInfo.vb")
    assert '[assembly: AssemblyFileVersion("1.2.3.4")]' in cs
    assert '[assembly: AssemblyVersion("1.2.0.0")]' in cs
    assert '<Assembly: AssemblyFileVersion("1.2.3.4")>' in vb
    assert '<Assembly: AssemblyVersion("1.2.0.0")>' in vb


def test_second_identical_run_changes_nothing(sample_solution: Path, logger_factory) -> None:
    system = _system(logger_factory)
    arguments = {"root": str(sample_solution), "version": "3.1.4.1", "company": "Acme"}

    system.run_arguments(arguments)
    report = system.run_arguments(arguments)

    assert report.changed == []
    assert report.summary()["unchanged"] == 2


def test_project_root(sample_solution: Path, logger_factory) -> None:
    project = sample_solution.parent / "Core" / "Core.csproj"
    report = _system(logger_factory).run_arguments({"root": str(project), "build": "77"})

    assert report.projects == [project]
    assert 'AssemblyFileVersion("1.2.77.4")' in _text(report.metadata_files[0])


def test_configured_defaults_apply_to_run(sample_solution: Path, logger_factory) -> None:
    system = _system(logger_factory, force_assembly_version=True)
    system.run_arguments({"root": str(sample_solution), "version": "5.6.7.8"})

    cs = _text(sample_solution.parent / "Core" / "Properties" / "AssemblyInfo.cs")
    assert 'AssemblyVersion("5.6.7.8")' in cs


def test_missing_root_aborts(tmp_path: Path, logger_factory) -> None:
    with pytest.raises(NotFoundError):
        _system(logger_factory).run_arguments({"root": str(tmp_path / "Nope.sln"), "version": "1.0.0.0"})


def test_unknown_root_type_aborts(write_file, logger_factory) -> None:
    root = write_file("notes.txt", "hello")
    with pytest.raises(UnknownFileTypeError):
        _system(logger_factory).run_arguments({"root": str(root), "version": "1.0.0.0"})


def test_missing_project_aborts_before_any_write(sample_solution: Path, logger_factory) -> None:
    root = sample_solution.parent
    (root / "Ui" / "Ui.vbproj").unlink()
    cs_path = root / "Core" / "Properties" / "AssemblyInfo.cs"
    before = cs_path.read_bytes()

    with pytest.raises(NotFoundError) as excinfo:
        _system(logger_factory).run_arguments({"root": str(sample_solution), "version": "2.0.0.0"})

    assert excinfo.value.path == root / "Ui" / "Ui.vbproj"
    assert cs_path.read_bytes() == before


def test_missing_metadata_file_keeps_earlier_writes(sample_solution: Path, logger_factory) -> None:
    root = sample_solution.parent
    (root / "Ui" / "My Project" / "AssemblyInfo.vb").unlink()

    with pytest.raises(NotFoundError):
        _system(logger_factory).run_arguments({"root": str(sample_solution), "version": "2.0.0.0"})

    assert 'AssemblyFileVersion("2.0.0.0")' in _text(root / "Core" / "Properties" / "AssemblyInfo.cs")


def test_dry_run_writes_nothing(sample_solution: Path, logger_factory) -> None:
    cs_path = sample_solution.parent / "Core" / "Properties" / "AssemblyInfo.cs"
    before = cs_path.read_bytes()

    report = _system(logger_factory).run_arguments(
        {"root": str(sample_solution), "version": "2.0.0.0", "dry_run": True}
    )

    assert len(report.changed) == 2
    assert report.written == []
    assert report.summary()["dry_run"] is True
    assert cs_path.read_bytes() == before


def test_run_emits_start_and_completion_events(sample_solution: Path, logger_factory) -> None:
    _system(logger_factory).run_arguments({"root": str(sample_solution), "major": "4"})
    events = logger_factory.events()
    assert events[0] == "system.run.start"
    assert events[-1] == "system.run.completed"


def test_describe_merges_resolver_settings(logger_factory) -> None:
    summary = _system(logger_factory, metadata_file_stem="SharedInfo").describe()

    assert summary["resolver"] == "LineScanResolver"
    assert summary["metadata_file_stem"] == "sharedinfo"
    assert summary["source_control_marker"] == "scc"
    assert summary["default_encoding"] == "cp1252"
