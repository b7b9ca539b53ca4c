"""
Metadata-file handling: attribute tables, line parsing, version composition
and the rewrite engine.
"""

from .attributes import APPEND_ORDER, ATTRIBUTE_MARKERS, SOURCE_KINDS, AttributeKind, SourceKind, source_kind_for
from .encoding import TextEncoding, detect_encoding
from .engine import FileOutcome, FileState, MetadataFile, MetadataRewriteEngine
from .file_state import FileSnapshot
from .line_parser import AttributeMatch, parse_line, scan_lines
from .version_composer import (
    FullVersion,
    PartialVersion,
    VersionSpec,
    compose_assembly_version,
    compose_file_version,
    compose_version,
)

__all__ = [
    "APPEND_ORDER",
    "ATTRIBUTE_MARKERS",
    "SOURCE_KINDS",
    "AttributeKind",
    "AttributeMatch",
    "FileOutcome",
    "FileSnapshot",
    "FileState",
    "FullVersion",
    "MetadataFile",
    "MetadataRewriteEngine",
    "PartialVersion",
    "SourceKind",
    "TextEncoding",
    "VersionSpec",
    "compose_assembly_version",
    "compose_file_version",
    "compose_version",
    "detect_encoding",
    "parse_line",
    "scan_lines",
    "source_kind_for",
]
