"""Attribute detection for single metadata-file lines."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Sequence

from .attributes import ATTRIBUTE_MARKERS, AttributeKind, SourceKind

MIN_LINE_LENGTH = 3
QUOTE = '"'


@dataclass(frozen=True)
class AttributeMatch:
    """A recognized attribute declaration found on one line."""

    kind: AttributeKind
    line_index: int
    value: Optional[str] = None
    span: Optional[tuple[int, int]] = None

    @property
    def has_value(self) -> bool:
        return self.span is not None

    def version_parts(self) -> list[str]:
        """Split the current value into at most four dotted components."""

        return split_version(self.value or "")

    def replace_value(self, line: str, new_value: str) -> str:
        """Return ``line`` with the quoted value swapped for ``new_value``."""

        if self.span is None:
            raise ValueError(f"{self.kind.value} on line {self.line_index + 1} has no quoted value")
        start, end = self.span
        return f"{line[:start]}{new_value}{line[end:]}"


def split_version(value: str) -> list[str]:
    if not value:
        return []
    return value.split(".", 3)


def is_comment(line: str, source_kind: SourceKind) -> bool:
    return line.startswith(source_kind.comment_prefixes)


def _quoted_span(line: str, offset: int) -> Optional[tuple[int, int]]:
    opening = line.find(QUOTE, offset)
    if opening < 0:
        return None
    closing = line.find(QUOTE, opening + 1)
    if closing < 0:
        return None
    return opening + 1, closing


def parse_line(
    line: str, source_kind: SourceKind, line_index: int = 0
) -> Optional[AttributeMatch]:
    """Return the attribute declared on ``line`` or ``None``.

    Short lines and comment lines never match. The first marker of
    ``ATTRIBUTE_MARKERS`` contained in the line decides the kind, and the
    value is the text between the first two double quotes after it.
    """

    if len(line) < MIN_LINE_LENGTH or is_comment(line, source_kind):
        return None
    for marker, kind in ATTRIBUTE_MARKERS:
        position = line.find(marker)
        if position < 0:
            continue
        span = _quoted_span(line, position + len(marker))
        value = line[span[0] : span[1]] if span else None
        return AttributeMatch(kind=kind, line_index=line_index, value=value, span=span)
    return None


def scan_lines(lines: Sequence[str] | Iterable[str], source_kind: SourceKind) -> Iterator[AttributeMatch]:
    """Yield every attribute match in ``lines`` in file order."""

    for index, line in enumerate(lines):
        match = parse_line(line, source_kind, index)
        if match is not None:
            yield match


__all__ = [
    "AttributeMatch",
    "MIN_LINE_LENGTH",
    "is_comment",
    "parse_line",
    "scan_lines",
    "split_version",
]
