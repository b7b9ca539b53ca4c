"""
Rewrite engine for a single metadata file.

A file moves through ``UNREAD -> SCANNED -> {UNCHANGED, PENDING_WRITE}`` and
ends ``WRITTEN`` once persisted. Files whose values already match are never
reopened, stat-ed or chmod-ed, so incremental builds do not see them change.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Set, Tuple

from src.errors import MetadataEncodingError, UnknownFileTypeError
from src.utils.logger import get_logger

from .attributes import APPEND_ORDER, AttributeKind, SourceKind, source_kind_for
from .encoding import DEFAULT_SINGLE_BYTE_ENCODING, TextEncoding, detect_encoding
from .file_state import FileSnapshot
from .line_parser import AttributeMatch, scan_lines
from .version_composer import PartialVersion, compose_version

if TYPE_CHECKING:  # pragma: no cover - import for typing only
    from src.contracts.stamping import StampRequestModel
    from src.utils.logger import StamperLogger

_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")
DEFAULT_NEWLINE = "\r\n"


class FileState(str, Enum):
    UNREAD = "unread"
    SCANNED = "scanned"
    UNCHANGED = "unchanged"
    PENDING_WRITE = "pending_write"
    WRITTEN = "written"


@dataclass
class MetadataLine:
    """One line of text and the terminator that followed it on disk."""

    text: str
    ending: str = ""


def split_lines(text: str) -> List[MetadataLine]:
    """Split on ``\\r\\n``, ``\\r`` or ``\\n``, keeping each terminator."""

    lines: List[MetadataLine] = []
    position = 0
    for match in _LINE_BREAK_RE.finditer(text):
        lines.append(MetadataLine(text[position : match.start()], match.group()))
        position = match.end()
    if position < len(text):
        lines.append(MetadataLine(text[position:]))
    return lines


@dataclass
class MetadataFile:
    """In-memory copy of a metadata file and its detected encoding."""

    path: Path
    source_kind: SourceKind
    encoding: TextEncoding
    lines: List[MetadataLine] = field(default_factory=list)
    state: FileState = FileState.UNREAD

    @classmethod
    def read(cls, path: Path, default_encoding: str = DEFAULT_SINGLE_BYTE_ENCODING) -> "MetadataFile":
        source_kind = source_kind_for(path)
        if source_kind is None:
            raise UnknownFileTypeError(path)
        encoding = detect_encoding(path, default_encoding)
        try:
            text = encoding.decode(path.read_bytes())
        except UnicodeDecodeError as exc:
            raise MetadataEncodingError(
                f"Cannot decode '{path}' as {encoding.label}: {exc.reason}"
            ) from exc
        return cls(path=path, source_kind=source_kind, encoding=encoding, lines=split_lines(text))

    @property
    def newline(self) -> Optional[str]:
        """The first terminator found in the file, if any."""

        for line in self.lines:
            if line.ending:
                return line.ending
        return None

    def texts(self) -> List[str]:
        return [line.text for line in self.lines]

    def render(self) -> str:
        return "".join(f"{line.text}{line.ending}" for line in self.lines)

    def encode(self) -> bytes:
        return self.encoding.encode(self.render())


@dataclass
class ScanResult:
    """What a scan found and changed in one file."""

    found: Set[AttributeKind] = field(default_factory=set)
    changed_lines: List[int] = field(default_factory=list)
    unquoted: List[AttributeMatch] = field(default_factory=list)

    def missing(self) -> List[AttributeKind]:
        return [kind for kind in APPEND_ORDER if kind not in self.found]


@dataclass(frozen=True)
class FileOutcome:
    """Result of processing one metadata file."""

    path: Path
    state: FileState
    changed_lines: Tuple[int, ...] = ()
    appended: Tuple[AttributeKind, ...] = ()
    cleared_read_only: bool = False
    encoding: str = ""

    @property
    def changed(self) -> bool:
        return bool(self.changed_lines or self.appended)


class MetadataRewriteEngine:
    """
    Applies one :class:`StampRequestModel` to metadata files.

    The engine owns no global state: the request, the encoding/newline
    defaults and the logger factory are all passed in.
    """

    def __init__(
        self,
        request: StampRequestModel,
        *,
        default_encoding: str = DEFAULT_SINGLE_BYTE_ENCODING,
        default_newline: str = DEFAULT_NEWLINE,
        logger_factory: Optional["StamperLogger"] = None,
    ) -> None:
        self.request = request
        self.default_encoding = default_encoding
        self.default_newline = default_newline
        self.logger_factory: "StamperLogger" = logger_factory or get_logger()
        self.module_logger = self.logger_factory.create_module_logger("metadata.engine")

    # -- composition -------------------------------------------------

    def new_value(self, kind: AttributeKind, current: Optional[str]) -> Optional[str]:
        """Return the value ``kind`` should carry, or ``None`` to leave it alone.

        ``current`` is ``None`` for a line that does not exist yet.
        """

        if kind.is_version:
            spec = self.request.version_spec
            # No version requested: existing values stay as written.
            if current is not None and isinstance(spec, PartialVersion) and spec.is_empty():
                return None
            composed = compose_version(
                kind,
                spec,
                current,
                force_full=self.request.force_assembly_version,
            )
            return None if composed == current else composed
        override = self.request.overrides.value_for(kind)
        if not override or override == current:
            return None
        return override

    # -- scanning ----------------------------------------------------

    def scan(self, metadata: MetadataFile) -> ScanResult:
        """Update recognized lines in place and record which attributes exist."""

        result = ScanResult()
        for match in scan_lines(metadata.texts(), metadata.source_kind):
            result.found.add(match.kind)
            if not match.has_value:
                result.unquoted.append(match)
                self._emit_log(
                    "warning",
                    "metadata.line.unquoted",
                    metadata.path,
                    message=f"{match.kind.value} on line {match.line_index + 1} has no quoted value; left as is",
                    details={"line": match.line_index + 1, "attribute": match.kind.value},
                )
                continue
            replacement = self.new_value(match.kind, match.value)
            if replacement is None:
                continue
            line = metadata.lines[match.line_index]
            line.text = match.replace_value(line.text, replacement)
            result.changed_lines.append(match.line_index)
            self._emit_log(
                "debug",
                "metadata.line.updated",
                metadata.path,
                message=f"{match.kind.value}: '{match.value}' -> '{replacement}'",
                details={
                    "line": match.line_index + 1,
                    "attribute": match.kind.value,
                    "old": match.value,
                    "new": replacement,
                },
            )
        metadata.state = FileState.SCANNED
        return result

    def plan_missing_lines(self, result: ScanResult) -> List[Tuple[AttributeKind, str]]:
        """Return the declarations to append for attributes the file lacks."""

        if not self.request.create_missing_lines:
            return []
        planned: List[Tuple[AttributeKind, str]] = []
        for kind in result.missing():
            value = self.new_value(kind, None)
            if value:
                planned.append((kind, value))
        return planned

    def append_lines(self, metadata: MetadataFile, planned: List[Tuple[AttributeKind, str]]) -> None:
        if not planned:
            return
        newline = metadata.newline or self.default_newline
        if metadata.lines and not metadata.lines[-1].ending:
            metadata.lines[-1].ending = newline
        for kind, value in planned:
            declaration = metadata.source_kind.declare(kind, value)
            metadata.lines.append(MetadataLine(declaration, newline))
            self._emit_log(
                "debug",
                "metadata.line.appended",
                metadata.path,
                message=f"Appended {declaration}",
                details={"attribute": kind.value, "value": value},
            )

    # -- persistence -------------------------------------------------

    def persist(self, metadata: MetadataFile) -> bool:
        """Write ``metadata`` back, keeping its timestamp; return whether read-only was cleared."""

        try:
            payload = metadata.encode()
        except UnicodeEncodeError as exc:
            raise MetadataEncodingError(
                f"Cannot encode new values of '{metadata.path}' as {metadata.encoding.codec}: {exc.reason}"
            ) from exc

        snapshot = FileSnapshot.capture(metadata.path)
        snapshot.ensure_writable()
        try:
            metadata.path.write_bytes(payload)
        finally:
            snapshot.restore()
        metadata.state = FileState.WRITTEN
        return snapshot.cleared_read_only

    def process(self, path: Path) -> FileOutcome:
        """Scan, update and (unless nothing changed) rewrite one metadata file."""

        self._emit_log("info", "metadata.file.processing", path, message=f"Processing '{path}'...")
        metadata = MetadataFile.read(path, self.default_encoding)
        if not metadata.lines:
            metadata.state = FileState.UNCHANGED
            self._emit_log("debug", "metadata.file.empty", path, message=f"'{path}' is empty; skipped")
            return FileOutcome(path=path, state=metadata.state, encoding=metadata.encoding.label)

        result = self.scan(metadata)
        planned = self.plan_missing_lines(result)
        self.append_lines(metadata, planned)
        appended = tuple(kind for kind, _ in planned)

        if not result.changed_lines and not appended:
            metadata.state = FileState.UNCHANGED
            self._emit_log("debug", "metadata.file.unchanged", path, message=f"'{path}' is up to date")
            return FileOutcome(path=path, state=metadata.state, encoding=metadata.encoding.label)

        metadata.state = FileState.PENDING_WRITE
        cleared_read_only = False
        if not self.request.dry_run:
            cleared_read_only = self.persist(metadata)
        self._emit_log(
            "info",
            "metadata.file.written" if metadata.state is FileState.WRITTEN else "metadata.file.pending",
            path,
            message=(
                f"Updated {len(result.changed_lines)} line(s), appended {len(appended)} line(s)"
                + (" (dry run)" if self.request.dry_run else "")
            ),
            details={
                "changed_lines": [index + 1 for index in result.changed_lines],
                "appended": [kind.value for kind in appended],
                "cleared_read_only": cleared_read_only,
                "encoding": metadata.encoding.label,
            },
        )
        return FileOutcome(
            path=path,
            state=metadata.state,
            changed_lines=tuple(result.changed_lines),
            appended=appended,
            cleared_read_only=cleared_read_only,
            encoding=metadata.encoding.label,
        )

    def _emit_log(
        self,
        level: str,
        event: str,
        path: Path,
        *,
        message: str = "",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        payload = {
            "event": event,
            "path": str(path),
            "message": message,
            "details": details or {},
        }
        getattr(self.module_logger, level)(payload)


__all__ = [
    "FileOutcome",
    "FileState",
    "MetadataFile",
    "MetadataLine",
    "MetadataRewriteEngine",
    "ScanResult",
    "split_lines",
]
