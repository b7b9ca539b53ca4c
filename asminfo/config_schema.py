"""Declarative configuration schema for the AssemblyInfo stamper."""
from __future__ import annotations

import codecs
from pathlib import Path
from typing import Any, Iterable, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PositiveInt,
    PrivateAttr,
    field_validator,
    model_validator,
)

LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")
NEWLINES = {"\r\n", "\n", "\r"}


class StrictModel(BaseModel):
    """Base model enforcing strict validation rules."""

    model_config = ConfigDict(
        populate_by_name=True,
        extra="forbid",
        validate_assignment=True,
    )


class AppSettings(StrictModel):
    """Top-level runtime metadata."""

    debug: bool = Field(
        default=False,
        description="When true, enables detailed console logging with backtraces.",
    )


class LoggingConfig(StrictModel):
    """Logging subsystem configuration."""

    level: str = Field(
        default="INFO",
        description="Minimum log level printed to the console and log file.",
        examples=["DEBUG"],
    )
    file_path: Optional[Path] = Field(
        default=None,
        description="Rotating log file; console-only logging when unset.",
        examples=["logs/asminfo.log"],
    )
    max_file_size_mb: PositiveInt = Field(
        default=10,
        description="Maximum size per log file before rotation (MiB).",
    )
    retention_days: PositiveInt = Field(
        default=30,
        description="Number of days to keep rotated log files.",
    )

    @field_validator("level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        normalized = value.strip().upper()
        if normalized not in LOG_LEVELS:
            raise ValueError("level must be one of: " + ", ".join(LOG_LEVELS))
        return normalized

    @field_validator("file_path", mode="before")
    @classmethod
    def _blank_path_is_unset(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @model_validator(mode="after")
    def _resolve_path(self) -> "LoggingConfig":
        if self.file_path is not None and not self.file_path.is_absolute():
            object.__setattr__(self, "file_path", self.file_path.resolve())
        return self


class StampingConfig(StrictModel):
    """Defaults for discovering and rewriting metadata files."""

    default_encoding: str = Field(
        default="cp1252",
        description="Single-byte codec assumed for files without a byte-order mark.",
        examples=["latin-1"],
    )
    default_newline: str = Field(
        default="\r\n",
        description="Line terminator for appended lines when a file has none to copy.",
        examples=["\n"],
    )
    metadata_file_stem: str = Field(
        default="assemblyinfo",
        min_length=1,
        description="File name (without extension) of referenced metadata files.",
    )
    source_control_marker: str = Field(
        default="scc",
        min_length=1,
        description="Solution lines containing this text are never scanned for projects.",
    )
    create_missing_lines: bool = Field(
        default=False,
        description="Append declarations for attributes a metadata file lacks.",
    )
    force_assembly_version: bool = Field(
        default=False,
        description="Write all four components into AssemblyVersion.",
    )
    case_insensitive_paths: bool = Field(
        default=True,
        description="Match referenced paths ignoring case when the exact path is absent.",
    )

    @field_validator("default_encoding")
    @classmethod
    def _known_codec(cls, value: str) -> str:
        try:
            return codecs.lookup(value.strip()).name
        except LookupError as exc:
            raise ValueError(f"unknown codec '{value}'") from exc

    @field_validator("default_newline")
    @classmethod
    def _known_newline(cls, value: str) -> str:
        if value not in NEWLINES:
            raise ValueError("default_newline must be one of \\r\\n, \\n or \\r")
        return value

    @field_validator("metadata_file_stem", "source_control_marker")
    @classmethod
    def _lowercase_marker(cls, value: str) -> str:
        return value.strip().lower()


class Config(StrictModel):
    """Complete stamper configuration model."""

    app: AppSettings = Field(default_factory=AppSettings)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    stamping: StampingConfig = Field(default_factory=StampingConfig)
    _metadata: object = PrivateAttr(default=None)


DEFAULT_CONFIG = Config()


def iter_field_docs(
    model: BaseModel | type[BaseModel],
    prefix: str = "",
    *,
    include_defaults: bool = True,
) -> Iterable[dict[str, object]]:
    """Yield flattened schema documentation entries."""

    instance = DEFAULT_CONFIG if isinstance(model, type) else model
    target_model = type(instance) if not isinstance(model, type) else model

    for name, field in target_model.model_fields.items():
        value = getattr(instance, name, field.default)
        key = f"{prefix}{name}" if not prefix else f"{prefix}.{name}"
        is_nested = isinstance(value, BaseModel)
        entry: dict[str, object] = {
            "name": key,
            "type": getattr(field.annotation, "__name__", str(field.annotation)),
            "description": field.description or "",
            "default": None if (is_nested or not include_defaults) else value,
            "examples": field.examples or [],
            "constraints": _describe_constraints(field),
            "is_nested": is_nested,
        }
        yield entry
        if is_nested:
            yield from iter_field_docs(value, key)


_COMPARATORS = {
    "ge": ">=",
    "gt": ">",
    "le": "<=",
    "lt": "<",
    "max_length": "len<=",
    "min_length": "len>=",
}


def _describe_constraints(field: Any) -> str:
    """Return a human readable description of field constraints."""

    parts: list[str] = []
    for constraint in getattr(field, "metadata", ()):
        for attr, comparator in _COMPARATORS.items():
            bound = getattr(constraint, attr, None)
            if bound is not None:
                parts.append(f"{comparator} {bound}")
    return ", ".join(parts)


__all__ = [
    "AppSettings",
    "Config",
    "DEFAULT_CONFIG",
    "LoggingConfig",
    "StampingConfig",
    "StrictModel",
    "iter_field_docs",
]
