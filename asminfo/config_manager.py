"""Layered configuration loading for the AssemblyInfo stamper.

Values are resolved in four layers, later layers winning::

    defaults -> asminfo.toml -> .env -> ASMINFO__* process environment

Every resolved key remembers which layer supplied it, so both the stamper and
the ``asminfo-config`` utility can explain where a setting came from.
"""
from __future__ import annotations

import argparse
import json
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, Iterator, Mapping, MutableMapping, Optional, Sequence

import tomli_w
from dotenv import dotenv_values
from pydantic import ValidationError

try:  # Python 3.11+
    import tomllib
except ModuleNotFoundError:  # pragma: no cover - Python 3.10
    import tomli as tomllib  # type: ignore[no-redef]

from asminfo.config_schema import Config, DEFAULT_CONFIG, iter_field_docs

DEFAULT_ENV_PREFIX = "ASMINFO"
DEFAULT_CONFIG_FILENAME = "asminfo.toml"
DEFAULT_ENV_FILENAME = ".env"
LAYERS = ("defaults", "file", "env-file", "env")

# Escapes accepted in environment values so line terminators can be spelled out.
_ESCAPES = {"\\r": "\r", "\\n": "\n"}
_FALSE_WORDS = {"false", "no", "off"}
_TRUE_WORDS = {"true", "yes", "on"}


class ConfigError(RuntimeError):
    """Raised when configuration loading or validation fails."""


@dataclass(frozen=True)
class ConfigValueOrigin:
    """Which layer supplied a value, and from where."""

    layer: str
    source: str
    env_var: str | None = None

    def render(self) -> str:
        where = ", ".join(item for item in (self.env_var, self.source) if item)
        return f"{self.layer} ({where})" if where else self.layer


@dataclass
class ConfigMetadata:
    """Where the active configuration was read from."""

    config_path: Path
    env_path: Optional[Path]
    env_prefix: str
    provenance: Dict[str, ConfigValueOrigin] = field(default_factory=dict)

    def describe_sources(self) -> list[str]:
        config_state = "" if self.config_path.exists() else " (not found)"
        env_state = str(self.env_path) if self.env_path else "not found"
        return [
            "defaults: built into asminfo.config_schema",
            f"config file: {self.config_path}{config_state}",
            f".env file: {env_state}",
            f"environment prefix: {self.env_prefix}__*",
            "precedence: " + " < ".join(LAYERS),
        ]


def coerce_env_value(raw: str) -> Any:
    """Turn an environment string into the scalar it most plausibly means."""

    if raw and not raw.strip("\r\n"):
        return raw
    text = raw.strip()
    for escape, character in _ESCAPES.items():
        text = text.replace(escape, character)
    if not text or not text.strip():
        return text
    lowered = text.lower()
    if lowered in _TRUE_WORDS:
        return True
    if lowered in _FALSE_WORDS:
        return False
    if lowered in {"null", "none"}:
        return None
    if text.lstrip("-").isdigit():
        return int(text)
    return text


def iter_env_overrides(
    variables: Mapping[str, Optional[str]],
    prefix: str,
) -> Iterator[tuple[str, str, Any]]:
    """Yield ``(variable, dotted key, value)`` for every ``PREFIX__A__B`` variable."""

    marker = prefix + "__"
    for variable, raw in variables.items():
        if raw is None or not variable.startswith(marker):
            continue
        segments = [segment.lower() for segment in variable[len(marker):].split("__") if segment]
        if not segments:
            raise ConfigError(f"Environment override '{variable}' is missing key segments")
        yield variable, ".".join(segments), coerce_env_value(raw)


def _set_dotted(target: MutableMapping[str, Any], dotted: str, value: Any) -> None:
    *parents, leaf = dotted.split(".")
    for segment in parents:
        child = target.get(segment)
        if not isinstance(child, MutableMapping):
            child = target[segment] = {}
        target = child
    target[leaf] = value


def _get_dotted(mapping: Mapping[str, Any], dotted: str) -> Any:
    current: Any = mapping
    for segment in dotted.split("."):
        if not isinstance(current, Mapping) or segment not in current:
            raise ConfigError(f"Unknown configuration key: {dotted}")
        current = current[segment]
    return current


def _flatten(mapping: Mapping[str, Any], prefix: str = "") -> Iterator[tuple[str, Any]]:
    for key, value in mapping.items():
        dotted = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, Mapping):
            yield from _flatten(value, dotted)
        else:
            yield dotted, value


class _LayerStack:
    """Accumulates layers into one nested mapping, tracking provenance."""

    def __init__(self) -> None:
        self.values: Dict[str, Any] = {}
        self.provenance: Dict[str, ConfigValueOrigin] = {}

    def apply_mapping(self, mapping: Mapping[str, Any], origin: ConfigValueOrigin) -> None:
        for dotted, value in _flatten(mapping):
            self.assign(dotted, value, origin)

    def assign(self, dotted: str, value: Any, origin: ConfigValueOrigin) -> None:
        _set_dotted(self.values, dotted, value)
        self.provenance[dotted] = origin


def _read_toml(path: Path) -> Mapping[str, Any]:
    if not path.exists():
        return {}
    try:
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except (tomllib.TOMLDecodeError, OSError) as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc


def _find_env_file(config_path: Path) -> Optional[Path]:
    for candidate in (config_path.parent / DEFAULT_ENV_FILENAME, Path.cwd() / DEFAULT_ENV_FILENAME):
        if candidate.is_file():
            return candidate
    return None


def _validation_failure(error: ValidationError, provenance: Mapping[str, ConfigValueOrigin]) -> ConfigError:
    lines: list[str] = []
    for record in error.errors():
        location = ".".join(str(part) for part in record.get("loc", ())) or "<root>"
        detail = record.get("msg", "invalid value")
        if record.get("input") is not None:
            detail += f" (received={record['input']!r})"
        origin = provenance.get(location)
        if origin is not None:
            detail += f" [{origin.render()}]"
        lines.append(f"{location}: {detail}")
    return ConfigError("Configuration validation failed:\n - " + "\n - ".join(lines))


def load_config(
    path: Path | None = None,
    *,
    env_prefix: str = DEFAULT_ENV_PREFIX,
    environ: Mapping[str, str] | None = None,
) -> Config:
    """Resolve the configuration layers into a validated :class:`Config`.

    Args:
        path: Explicit TOML file. It must exist; when omitted, ``./asminfo.toml``
            is used if present.
        env_prefix: Prefix of environment overrides (``PREFIX__SECTION__KEY``).
        environ: Process environment; defaults to ``os.environ``.

    Raises:
        ConfigError: The file is missing or malformed, or a value is invalid.
    """

    if path is not None and not path.exists():
        raise ConfigError(f"Configuration file does not exist: '{path}'")
    config_path = path if path is not None else Path.cwd() / DEFAULT_CONFIG_FILENAME
    env_path = _find_env_file(config_path)

    stack = _LayerStack()
    stack.apply_mapping(
        DEFAULT_CONFIG.model_dump(mode="python"),
        ConfigValueOrigin(layer="defaults", source="asminfo.config_schema.DEFAULT_CONFIG"),
    )
    stack.apply_mapping(_read_toml(config_path), ConfigValueOrigin(layer="file", source=str(config_path)))

    if env_path is not None:
        for variable, dotted, value in iter_env_overrides(dotenv_values(env_path), env_prefix):
            stack.assign(dotted, value, ConfigValueOrigin("env-file", str(env_path), variable))

    process_env = os.environ if environ is None else environ
    for variable, dotted, value in iter_env_overrides(process_env, env_prefix):
        stack.assign(dotted, value, ConfigValueOrigin("env", "process", variable))

    try:
        config = Config.model_validate(stack.values)
    except ValidationError as exc:
        raise _validation_failure(exc, stack.provenance) from exc
    config._metadata = ConfigMetadata(
        config_path=config_path,
        env_path=env_path,
        env_prefix=env_prefix,
        provenance=stack.provenance,
    )
    return config


def _as_text(value: Any) -> str:
    if isinstance(value, Path):
        return str(value)
    try:
        return json.dumps(value, ensure_ascii=False)
    except TypeError:
        return repr(value)


def _toml_ready(value: Any) -> Any:
    if isinstance(value, Mapping):
        # TOML has no null; unset optional fields are left out.
        return {key: _toml_ready(item) for key, item in value.items() if item is not None}
    if isinstance(value, Path):
        return str(value)
    return value


def render_defaults() -> str:
    """Built-in defaults as a ready-to-edit ``asminfo.toml``."""
    return tomli_w.dumps(_toml_ready(DEFAULT_CONFIG.model_dump(mode="python")))


def render_schema() -> str:
    """Markdown table documenting every leaf setting."""

    headers = ("Field", "Type", "Default", "Description", "Constraints", "Example")
    rows = ["| " + " | ".join(headers) + " |", "|" + " --- |" * len(headers)]
    for entry in iter_field_docs(DEFAULT_CONFIG):
        if entry["is_nested"]:
            continue
        cells = (
            entry["name"],
            entry["type"],
            "" if entry["default"] is None else _as_text(entry["default"]),
            entry["description"],
            entry["constraints"],
            ", ".join(str(example) for example in entry["examples"]),
        )
        rows.append("| " + " | ".join(str(cell) for cell in cells) + " |")
    return "\n".join(rows)


def explain(config: Config, key: str) -> str:
    """Report the value of ``key`` and the layer it came from."""

    metadata: ConfigMetadata | None = config._metadata  # type: ignore[assignment]
    if metadata is None:
        raise ConfigError("Configuration metadata is unavailable")
    value = _get_dotted(config.model_dump(mode="python"), key)
    origin = metadata.provenance.get(key)
    return f"{key} = {_as_text(value)}\nsource: {origin.render() if origin else 'unknown'}"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="asminfo-config",
        description="Inspect and validate AssemblyInfo stamper configuration",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("--config", type=Path, help="TOML configuration file")
    parser.add_argument(
        "--env-prefix",
        default=DEFAULT_ENV_PREFIX,
        help="Environment variable prefix (e.g. ASMINFO__STAMPING__DEFAULT_ENCODING)",
    )
    actions = parser.add_mutually_exclusive_group(required=True)
    actions.add_argument("--validate", action="store_true", help="Load and validate the active configuration")
    actions.add_argument("--dump-defaults", action="store_true", help="Print built-in defaults as TOML")
    actions.add_argument("--print-schema", action="store_true", help="Print a Markdown table of all settings")
    actions.add_argument("--show-sources", action="store_true", help="List the configuration layers in use")
    actions.add_argument("--explain", metavar="KEY", help="Show a setting and the layer that supplied it")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)

    if args.dump_defaults:
        sys.stdout.write(render_defaults())
        return 0
    if args.print_schema:
        print(render_schema())
        return 0

    handlers: Dict[str, Callable[[Config], str]] = {
        "validate": lambda _config: "Configuration OK",
        "show_sources": lambda config: "Active configuration sources:\n"
        + "\n".join(f"- {item}" for item in config._metadata.describe_sources()),  # type: ignore[attr-defined]
        "explain": lambda config: explain(config, args.explain),
    }
    try:
        config = load_config(args.config, env_prefix=args.env_prefix)
        action = next(name for name in handlers if getattr(args, name))
        print(handlers[action](config))
    except ConfigError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover - module CLI entry point
    raise SystemExit(main())
