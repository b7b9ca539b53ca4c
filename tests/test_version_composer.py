"""Tests for FileVersion and AssemblyVersion composition."""

from __future__ import annotations

import pytest

from src.errors import ConfigurationError
from src.metadata.attributes import AttributeKind
from src.metadata.version_composer import (
    FullVersion,
    PartialVersion,
    compose_assembly_version,
    compose_file_version,
    compose_version,
    parse_component,
)


def test_full_version_parse_pads_three_segments() -> None:
    assert FullVersion.parse("1.2.3") == FullVersion(1, 2, 3, 0)
    assert str(FullVersion.parse(" 10.20.30.40 ")) == "10.20.30.40"


@pytest.mark.parametrize("text", ["1.2", "1", "1.2.3.4.5", "1.x.3.4", "1..3.4", "", "-1.2.3.4"])
def test_full_version_parse_rejects_malformed(text: str) -> None:
    with pytest.raises(ConfigurationError, match="Invalid full version passed"):
        FullVersion.parse(text)


@pytest.mark.parametrize("text", ["a", "-1", "1.5", ""])
def test_parse_component_rejects_non_integers(text: str) -> None:
    with pytest.raises(ConfigurationError, match="Minor version is not a non-negative int"):
        parse_component("minor", text)


def test_parse_component_accepts_padding_and_leading_zeros() -> None:
    assert parse_component("build", " 007 ") == 7


def test_full_version_ignores_current_value() -> None:
    spec = FullVersion(5, 6, 7, 8)
    assert compose_file_version(spec, "1.2.3.4") == "5.6.7.8"
    assert compose_file_version(spec, None) == "5.6.7.8"


def test_partial_minor_keeps_other_components() -> None:
    assert compose_file_version(PartialVersion(minor=9), "1.2.3.4") == "1.9.3.4"


def test_partial_pads_short_current_value_with_zero() -> None:
    assert compose_file_version(PartialVersion(build=5), "1.2") == "1.2.5.0"


def test_partial_keeps_non_numeric_components() -> None:
    assert compose_file_version(PartialVersion(major=2), "1.0.*") == "2.0.*.0"


def test_partial_without_current_value_falls_back_to_zero() -> None:
    assert compose_file_version(PartialVersion(revision=3), None) == "0.0.0.3"
    assert compose_file_version(PartialVersion(), None) == "0.0.0.0"


def test_assembly_version_two_part_mode() -> None:
    assert compose_assembly_version(FullVersion(1, 2, 3, 4), "9.9.9.9") == "1.2.0.0"
    assert compose_assembly_version(PartialVersion(minor=7), "3.1.4.1") == "3.7.0.0"
    assert compose_assembly_version(PartialVersion(build=4, revision=5), "3.1.4.1") == "3.1.0.0"


def test_assembly_version_four_part_mode() -> None:
    assert compose_assembly_version(FullVersion(1, 2, 3, 4), "9.9.9.9", force_full=True) == "1.2.3.4"
    assert (
        compose_assembly_version(PartialVersion(build=4), "3.1.0.0", force_full=True)
        == "3.1.4.0"
    )


def test_compose_version_dispatches_on_kind() -> None:
    spec = FullVersion(1, 2, 3, 4)
    assert compose_version(AttributeKind.FILE_VERSION, spec) == "1.2.3.4"
    assert compose_version(AttributeKind.ASSEMBLY_VERSION, spec) == "1.2.0.0"
    with pytest.raises(ValueError):
        compose_version(AttributeKind.COMPANY, spec)


def test_partial_version_overrides_and_emptiness() -> None:
    assert PartialVersion().is_empty()
    partial = PartialVersion(major=1, revision=0)
    assert not partial.is_empty()
    assert partial.overrides() == ("1", None, None, "0")
