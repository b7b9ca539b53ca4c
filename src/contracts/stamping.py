"""Contracts for the parameters of a stamping run."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional, TypedDict

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PrivateAttr,
    ValidationError,
    field_validator,
    model_validator,
)

from src.errors import ConfigurationError
from src.metadata.attributes import AttributeKind
from src.metadata.version_composer import (
    COMPONENT_NAMES,
    FullVersion,
    PartialVersion,
    VersionSpec,
    parse_component,
)


class StampArguments(TypedDict, total=False):
    """Raw run parameters as they arrive from the command line."""

    root: str
    version: str
    major: str
    minor: str
    build: str
    revision: str
    company: str
    copyright: str
    product: str
    create_missing_lines: bool
    force_assembly_version: bool
    dry_run: bool


class AttributeOverrides(BaseModel):
    """Company/copyright/product replacements; empty means "leave as is"."""

    model_config = ConfigDict(extra="forbid")

    company: str = ""
    copyright: str = ""
    product: str = ""

    @field_validator("company", "copyright", "product", mode="before")
    @classmethod
    def _none_is_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    def value_for(self, kind: AttributeKind) -> str:
        """Return the override for a text attribute kind."""

        if kind is AttributeKind.COMPANY:
            return self.company
        if kind is AttributeKind.COPYRIGHT:
            return self.copyright
        if kind is AttributeKind.PRODUCT:
            return self.product
        raise ValueError(f"{kind.value} has no text override")


class StampRequestModel(BaseModel):
    """Validated parameters of one run.

    ``version`` and the individual components are kept as the caller wrote
    them; the parsed result is exposed as :attr:`version_spec`.
    """

    model_config = ConfigDict(extra="forbid")

    root: Path
    version: Optional[str] = None
    major: Optional[str] = None
    minor: Optional[str] = None
    build: Optional[str] = None
    revision: Optional[str] = None
    overrides: AttributeOverrides = Field(default_factory=AttributeOverrides)
    create_missing_lines: bool = False
    force_assembly_version: bool = False
    dry_run: bool = False
    _version_spec: VersionSpec = PrivateAttr(default_factory=PartialVersion)

    @field_validator("version", "major", "minor", "build", "revision", mode="before")
    @classmethod
    def _blank_is_unset(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @model_validator(mode="after")
    def _parse_version_spec(self) -> "StampRequestModel":
        supplied = {
            name: getattr(self, name)
            for name in COMPONENT_NAMES
            if getattr(self, name) is not None
        }
        if self.version is not None:
            if supplied:
                raise ConfigurationError(
                    "When /version is passed, /major, /minor, /build and /revision are not allowed"
                )
            self._version_spec = FullVersion.parse(self.version)
        else:
            self._version_spec = PartialVersion(
                **{name: parse_component(name, text) for name, text in supplied.items()}
            )
        return self

    @property
    def version_spec(self) -> VersionSpec:
        return self._version_spec

    @classmethod
    def from_arguments(cls, arguments: StampArguments) -> "StampRequestModel":
        """Build a request from raw arguments, reporting problems as ConfigurationError."""

        data = dict(arguments)
        overrides = {key: data.pop(key) for key in ("company", "copyright", "product") if key in data}
        data["overrides"] = overrides
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            problems = "; ".join(
                f"{'.'.join(str(part) for part in record.get('loc', ())) or '<root>'}: {record.get('msg')}"
                for record in exc.errors()
            )
            raise ConfigurationError(f"Invalid parameters: {problems}") from exc

    def with_defaults(self, *, create_missing_lines: bool, force_assembly_version: bool) -> "StampRequestModel":
        """Return a copy with configured defaults OR-ed into the flags."""

        return self.model_copy(
            update={
                "create_missing_lines": self.create_missing_lines or create_missing_lines,
                "force_assembly_version": self.force_assembly_version or force_assembly_version,
            }
        )


__all__ = [
    "AttributeOverrides",
    "StampArguments",
    "StampRequestModel",
]
