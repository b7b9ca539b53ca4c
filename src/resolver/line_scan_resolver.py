# src/resolver/line_scan_resolver.py
# Substring-based solution and project scanner
# ============================================

"""
Resolves references by scanning descriptor files line by line.

Neither solution nor project files are parsed: a solution line names a
project when it contains a known project extension followed by a double
quote, and a project line names a metadata file when it mentions
``<stem>.cs``/``.vb``/``.cpp`` together with an inclusion marker.
"""

from pathlib import Path, PureWindowsPath
from typing import TYPE_CHECKING, Dict, Final, List, Optional, Tuple

from src.errors import UnknownFileTypeError
from src.metadata.encoding import DEFAULT_SINGLE_BYTE_ENCODING, detect_encoding

from .base_resolver import BaseReferenceResolver

if TYPE_CHECKING:  # pragma: no cover - import for typing only
    from src.utils.logger import StamperLogger

MIN_LINE_LENGTH: Final[int] = 3
QUOTE: Final[str] = '"'
SOLUTION_EXTENSION: Final[str] = ".sln"

# Tried in this order; the first one present on a solution line is used.
PROJECT_EXTENSIONS: Final[Tuple[str, ...]] = (
    ".csproj",
    ".vbproj",
    ".vcproj",
    ".vcxproj",
    ".sqlproj",
)

# Metadata extension -> markers that make a project line an inclusion.
METADATA_REFERENCES: Final[Tuple[Tuple[str, Tuple[str, ...]], ...]] = (
    (".cs", ("include=",)),
    (".vb", ("include=",)),
    (".cpp", ("relativepath=", "include=")),
)


def reference_to_path(base_dir: Path, reference: str) -> Path:
    """Resolve a descriptor reference against ``base_dir``.

    References are written with Windows separators; they are split as such
    so that ``Sub\\App.csproj`` means the same on every platform.
    """

    windows_path = PureWindowsPath(reference)
    if windows_path.drive or windows_path.root:
        return Path(reference)
    return base_dir.joinpath(*windows_path.parts)


def find_case_insensitive(path: Path) -> Optional[Path]:
    """Return the existing path matching ``path`` ignoring case, if any."""

    if path.exists():
        return path
    current = Path(path.anchor) if path.is_absolute() else Path(".")
    relative_parts = path.parts[1:] if path.is_absolute() else path.parts
    for part in relative_parts:
        candidate = current / part
        if part in (".", "..") or candidate.exists():
            current = candidate
            continue
        if not current.is_dir():
            return None
        lowered = part.lower()
        matches = sorted(entry for entry in current.iterdir() if entry.name.lower() == lowered)
        if not matches:
            return None
        current = matches[0]
    return current


class LineScanResolver(BaseReferenceResolver):
    """
    Resolver that finds references by substring search.

    Args:
        metadata_file_stem: Lower-case file stem of metadata files.
        source_control_marker: Solution lines containing this text are skipped.
        case_insensitive_paths: Look references up ignoring case when the
            exact spelling does not exist.
        default_encoding: Codec for descriptors without a byte-order mark.
    """

    def __init__(
        self,
        *,
        metadata_file_stem: str = "assemblyinfo",
        source_control_marker: str = "scc",
        case_insensitive_paths: bool = True,
        default_encoding: str = DEFAULT_SINGLE_BYTE_ENCODING,
        logger_factory: Optional["StamperLogger"] = None,
    ) -> None:
        super().__init__(logger_factory)
        self.metadata_file_stem = metadata_file_stem.lower()
        self.source_control_marker = source_control_marker.lower()
        self.case_insensitive_paths = case_insensitive_paths
        self.default_encoding = default_encoding

    # -- descriptors --------------------------------------------------

    @staticmethod
    def is_project(path: Path) -> bool:
        return path.suffix.lower() in PROJECT_EXTENSIONS

    @staticmethod
    def is_solution(path: Path) -> bool:
        return path.suffix.lower() == SOLUTION_EXTENSION

    def read_lines(self, path: Path) -> List[str]:
        encoding = detect_encoding(path, self.default_encoding)
        return encoding.decode(path.read_bytes()).splitlines()

    def locate(self, path: Path) -> Path:
        """Return the on-disk spelling of ``path`` when lookups ignore case."""

        if not self.case_insensitive_paths:
            return path
        return find_case_insensitive(path) or path

    # -- solution -> projects -----------------------------------------

    def project_reference(self, line: str) -> Optional[str]:
        """Return the project path named on a solution line, if any."""

        lowered = line.lower()
        if len(line) < MIN_LINE_LENGTH or self.source_control_marker in lowered:
            return None
        for extension in PROJECT_EXTENSIONS:
            if extension not in lowered:
                continue
            end = lowered.find(f"{extension}{QUOTE}")
            if end < 0:
                return None
            head = line[: end + len(extension)]
            return head[head.rfind(QUOTE) + 1 :]
        return None

    def project_files(self, root: Path) -> List[Path]:
        if self.is_project(root):
            return [root]
        if not self.is_solution(root):
            raise UnknownFileTypeError(root)

        self._emit_log("info", "resolver.solution.processing", root, message=f"Processing '{root.name}'...")
        projects: List[Path] = []
        for line in self.read_lines(root):
            reference = self.project_reference(line)
            if reference is None:
                continue
            projects.append(self.locate(reference_to_path(root.parent, reference)))
        self._emit_log(
            "debug",
            "resolver.solution.resolved",
            root,
            message=f"{len(projects)} project(s) referenced",
            details={"projects": [str(project) for project in projects]},
        )
        return projects

    # -- project -> metadata files ------------------------------------

    def metadata_reference(self, line: str) -> Optional[str]:
        """Return the metadata path named on a project line, if any."""

        if len(line) < MIN_LINE_LENGTH:
            return None
        lowered = line.lower()
        for extension, markers in METADATA_REFERENCES:
            if f"{self.metadata_file_stem}{extension}" not in lowered:
                continue
            if not any(marker in lowered for marker in markers):
                continue
            opening = line.find(QUOTE)
            closing = line.find(QUOTE, opening + 1) if opening >= 0 else -1
            if closing < 0:
                return None
            return line[opening + 1 : closing]
        return None

    def metadata_files(self, project: Path) -> List[Path]:
        self._emit_log("info", "resolver.project.processing", project, message=f"Processing '{project.name}'...")
        found: List[Path] = []
        for line in self.read_lines(project):
            reference = self.metadata_reference(line)
            if reference is None:
                continue
            found.append(self.locate(reference_to_path(project.parent, reference)))
        self._emit_log(
            "debug",
            "resolver.project.resolved",
            project,
            message=f"{len(found)} metadata file(s) referenced",
            details={"metadata_files": [str(path) for path in found]},
        )
        return found

    def describe(self) -> Dict[str, object]:
        return {
            **super().describe(),
            "metadata_file_stem": self.metadata_file_stem,
            "source_control_marker": self.source_control_marker,
            "case_insensitive_paths": self.case_insensitive_paths,
        }
