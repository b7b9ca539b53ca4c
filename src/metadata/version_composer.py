"""Compose FileVersion and AssemblyVersion values from a version spec."""

from __future__ import annotations

import re
from dataclasses import dataclass, fields
from typing import Final, Optional, Sequence, Tuple, Union

from src.errors import ConfigurationError

from .attributes import AttributeKind
from .line_parser import split_version

COMPONENT_RE: Final[re.Pattern[str]] = re.compile(r"^[0-9]+$")
COMPONENT_NAMES: Final[Tuple[str, ...]] = ("major", "minor", "build", "revision")
FALLBACK_COMPONENT: Final[str] = "0"


def parse_component(name: str, text: str) -> int:
    """Parse one version component as a non-negative integer."""

    candidate = text.strip()
    if not COMPONENT_RE.fullmatch(candidate):
        raise ConfigurationError(f"{name.capitalize()} version is not a non-negative int: '{text}'")
    return int(candidate)


@dataclass(frozen=True)
class FullVersion:
    """A complete four-part version supplied by the caller."""

    major: int
    minor: int
    build: int
    revision: int

    @classmethod
    def parse(cls, text: str) -> "FullVersion":
        """Parse ``X.Y.Z`` or ``X.Y.Z.R``; a missing revision becomes ``0``."""

        segments = text.strip().split(".")
        if len(segments) == 3:
            segments.append("0")
        if len(segments) != 4:
            raise ConfigurationError(f"Invalid full version passed: '{text}'")
        try:
            values = [parse_component(name, segment) for name, segment in zip(COMPONENT_NAMES, segments)]
        except ConfigurationError as exc:
            raise ConfigurationError(f"Invalid full version passed: '{text}'") from exc
        return cls(*values)

    def parts(self) -> Tuple[str, str, str, str]:
        return (str(self.major), str(self.minor), str(self.build), str(self.revision))

    def __str__(self) -> str:
        return ".".join(self.parts())


@dataclass(frozen=True)
class PartialVersion:
    """Individually supplied components; ``None`` keeps the file's value."""

    major: Optional[int] = None
    minor: Optional[int] = None
    build: Optional[int] = None
    revision: Optional[int] = None

    def overrides(self) -> Tuple[Optional[str], ...]:
        return tuple(
            None if getattr(self, item.name) is None else str(getattr(self, item.name))
            for item in fields(self)
        )

    def is_empty(self) -> bool:
        return all(value is None for value in self.overrides())


VersionSpec = Union[FullVersion, PartialVersion]


def _merge(overrides: Sequence[Optional[str]], current: Sequence[str]) -> list[str]:
    merged: list[str] = []
    for position, override in enumerate(overrides):
        if override is not None:
            merged.append(override)
        elif position < len(current) and current[position] != "":
            merged.append(current[position])
        else:
            merged.append(FALLBACK_COMPONENT)
    return merged


def compose_file_version(spec: VersionSpec, current: Optional[str] = None) -> str:
    """Return the four-part FileVersion value for ``spec``.

    Without a full version, each component is the override when one was
    given, else the component at the same position of ``current``.
    """

    if isinstance(spec, FullVersion):
        return str(spec)
    return ".".join(_merge(spec.overrides(), split_version(current or "")))


def compose_assembly_version(
    spec: VersionSpec,
    current: Optional[str] = None,
    force_full: bool = False,
) -> str:
    """Return the AssemblyVersion value for ``spec``.

    The default two-part mode yields ``major.minor.0.0``; ``force_full``
    composes all four components like :func:`compose_file_version`.
    """

    if force_full:
        return compose_file_version(spec, current)
    if isinstance(spec, FullVersion):
        return f"{spec.major}.{spec.minor}.0.0"
    major_minor = _merge(spec.overrides()[:2], split_version(current or ""))
    return ".".join(major_minor + ["0", "0"])


def compose_version(
    kind: AttributeKind,
    spec: VersionSpec,
    current: Optional[str] = None,
    force_full: bool = False,
) -> str:
    if kind is AttributeKind.FILE_VERSION:
        return compose_file_version(spec, current)
    if kind is AttributeKind.ASSEMBLY_VERSION:
        return compose_assembly_version(spec, current, force_full)
    raise ValueError(f"{kind.value} is not a version attribute")


__all__ = [
    "FullVersion",
    "PartialVersion",
    "VersionSpec",
    "parse_component",
    "compose_file_version",
    "compose_assembly_version",
    "compose_version",
]
