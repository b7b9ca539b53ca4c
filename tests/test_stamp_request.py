"""Validation of run parameters."""

from __future__ import annotations

from pathlib import Path

import pytest

from src.contracts import AttributeOverrides, StampRequestModel
from src.errors import ConfigurationError
from src.metadata.attributes import AttributeKind
from src.metadata.version_composer import FullVersion, PartialVersion


def test_full_version_request() -> None:
    request = StampRequestModel.from_arguments({"root": "App.sln", "version": "1.2.3"})
    assert request.root == Path("App.sln")
    assert request.version_spec == FullVersion(1, 2, 3, 0)


def test_partial_version_request() -> None:
    request = StampRequestModel.from_arguments({"root": "App.sln", "minor": "9", "revision": "12"})
    assert request.version_spec == PartialVersion(minor=9, revision=12)


def test_no_version_means_empty_partial() -> None:
    request = StampRequestModel.from_arguments({"root": "App.sln", "version": "  ", "major": ""})
    assert request.version is None
    assert request.major is None
    assert isinstance(request.version_spec, PartialVersion)
    assert request.version_spec.is_empty()


def test_full_and_partial_are_mutually_exclusive() -> None:
    with pytest.raises(ConfigurationError, match="When /version is passed"):
        StampRequestModel.from_arguments({"root": "App.sln", "version": "1.2.3.4", "build": "5"})


@pytest.mark.parametrize(
    ("arguments", "message"),
    [
        ({"version": "1.2"}, "Invalid full version passed: '1.2'"),
        ({"major": "one"}, "Major version is not a non-negative int: 'one'"),
        ({"revision": "-3"}, "Revision version is not a non-negative int: '-3'"),
    ],
)
def test_malformed_versions_are_configuration_errors(arguments, message: str) -> None:
    with pytest.raises(ConfigurationError, match=message):
        StampRequestModel.from_arguments({"root": "App.sln", **arguments})


def test_unknown_parameters_are_reported() -> None:
    with pytest.raises(ConfigurationError, match="Invalid parameters"):
        StampRequestModel.from_arguments({"root": "App.sln", "flavour": "x"})  # type: ignore[typeddict-unknown-key]


def test_missing_root_is_reported() -> None:
    with pytest.raises(ConfigurationError, match="root"):
        StampRequestModel.from_arguments({"version": "1.2.3.4"})


def test_overrides_are_grouped_and_default_to_empty() -> None:
    request = StampRequestModel.from_arguments(
        {"root": "App.sln", "company": "Acme", "copyright": None, "product": ""}  # type: ignore[typeddict-item]
    )
    assert request.overrides == AttributeOverrides(company="Acme")
    assert request.overrides.value_for(AttributeKind.COMPANY) == "Acme"
    assert request.overrides.value_for(AttributeKind.COPYRIGHT) == ""
    with pytest.raises(ValueError):
        request.overrides.value_for(AttributeKind.FILE_VERSION)


def test_with_defaults_only_turns_flags_on() -> None:
    request = StampRequestModel.from_arguments(
        {"root": "App.sln", "major": "2", "force_assembly_version": True}
    )
    merged = request.with_defaults(create_missing_lines=True, force_assembly_version=False)
    assert merged.create_missing_lines
    assert merged.force_assembly_version
    assert merged.version_spec == PartialVersion(major=2)
    assert not request.create_missing_lines
