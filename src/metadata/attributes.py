"""Lookup tables for the recognized attributes and metadata source kinds."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Final, Optional


class AttributeKind(str, Enum):
    """The five attribute declarations the engine understands."""

    FILE_VERSION = "AssemblyFileVersion"
    COMPANY = "AssemblyCompany"
    COPYRIGHT = "AssemblyCopyright"
    PRODUCT = "AssemblyProduct"
    ASSEMBLY_VERSION = "AssemblyVersion"

    @property
    def is_version(self) -> bool:
        return self in (AttributeKind.FILE_VERSION, AttributeKind.ASSEMBLY_VERSION)


# First match wins; the longer "AssemblyFileVersion" precedes "AssemblyVersion".
ATTRIBUTE_MARKERS: Final[tuple[tuple[str, AttributeKind], ...]] = (
    ("AssemblyFileVersion", AttributeKind.FILE_VERSION),
    ("AssemblyCompany", AttributeKind.COMPANY),
    ("AssemblyCopyright", AttributeKind.COPYRIGHT),
    ("AssemblyProduct", AttributeKind.PRODUCT),
    ("AssemblyVersion", AttributeKind.ASSEMBLY_VERSION),
)

# Order in which missing declarations are appended to a file.
APPEND_ORDER: Final[tuple[AttributeKind, ...]] = (
    AttributeKind.FILE_VERSION,
    AttributeKind.COMPANY,
    AttributeKind.COPYRIGHT,
    AttributeKind.PRODUCT,
    AttributeKind.ASSEMBLY_VERSION,
)


@dataclass(frozen=True)
class SourceKind:
    """Per-language rules for a metadata source file."""

    extension: str
    comment_prefixes: tuple[str, ...]
    declaration_template: str
    attribute_suffix: str = ""

    def declare(self, kind: AttributeKind, value: str) -> str:
        """Render a declaration line (without terminator) for ``kind``."""

        return self.declaration_template.format(
            name=f"{kind.value}{self.attribute_suffix}", value=value
        )


SOURCE_KINDS: Final[dict[str, SourceKind]] = {
    ".cs": SourceKind(
        extension=".cs",
        comment_prefixes=("//",),
        declaration_template='[assembly: {name}("{value}")]',
    ),
    ".vb": SourceKind(
        extension=".vb",
        comment_prefixes=("'",),
        declaration_template='<assembly: {name}("{value}")>',
    ),
    ".cpp": SourceKind(
        extension=".cpp",
        comment_prefixes=("//",),
        declaration_template='[assembly:{name}("{value}")];',
        attribute_suffix="Attribute",
    ),
}


def source_kind_for(path: Path | str) -> Optional[SourceKind]:
    """Return the :class:`SourceKind` for ``path`` by case-insensitive suffix."""

    return SOURCE_KINDS.get(Path(path).suffix.lower())


__all__ = [
    "AttributeKind",
    "ATTRIBUTE_MARKERS",
    "APPEND_ORDER",
    "SourceKind",
    "SOURCE_KINDS",
    "source_kind_for",
]
