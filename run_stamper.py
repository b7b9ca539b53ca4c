#!/usr/bin/env python3
# run_stamper.py
# Command-line entry point for the AssemblyInfo stamper
# =====================================================

"""
Stamp version and attribution attributes into AssemblyInfo files.

Usage:
    asminfo App.sln --version 1.2.3.4
    asminfo App\\App.csproj --minor 9 --company "Acme"
    asminfo App.sln --major 2 --create-missing-lines --dry-run

The switches of the original Windows tool are accepted as well, in any
letter case:
    asminfo App.sln /version:1.2.3.4 /copyright:"(c) Acme" /createmissinglines

Exit status is 0 on success and 1 on any fatal condition.
"""

import argparse
import re
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

# Make the project root importable when run as a plain script
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from asminfo import Config, ConfigError, load_config  # noqa: E402
from config import PROJECT_VERSION, logging_settings, validate_config  # noqa: E402
from main import StampReport, create_system  # noqa: E402
from src.contracts import StampArguments  # noqa: E402
from src.errors import ConfigurationError, StamperError  # noqa: E402
from src.utils import StamperLogger, get_logger, setup_logging  # noqa: E402

VALUE_SWITCHES = {
    "version": "--version",
    "major": "--major",
    "minor": "--minor",
    "build": "--build",
    "revision": "--revision",
    "company": "--company",
    "copyright": "--copyright",
    "product": "--product",
}
FLAG_SWITCHES = {
    "createmissinglines": "--create-missing-lines",
    "forceassemblyversion": "--force-assembly-version",
}
LEGACY_SWITCH_RE = re.compile(
    r"^/(?P<name>"
    + "|".join(sorted({**VALUE_SWITCHES, **FLAG_SWITCHES}, key=len, reverse=True))
    + r")(?::(?P<value>.*))?$",
    re.IGNORECASE | re.DOTALL,
)


class StamperArgumentParser(argparse.ArgumentParser):
    """Argument parser that reports usage errors as ConfigurationError."""

    def error(self, message: str):
        raise ConfigurationError(f"Invalid parameters: {message}")


def translate_legacy_arguments(argv: Sequence[str]) -> List[str]:
    """Rewrite ``/name:value`` switches into their ``--name=value`` form."""

    translated: List[str] = []
    for argument in argv:
        match = LEGACY_SWITCH_RE.match(argument)
        if match is None:
            translated.append(argument)
            continue
        name = match.group("name").lower()
        value = match.group("value")
        if name in FLAG_SWITCHES:
            if value is not None:
                raise ConfigurationError(f"Switch '/{name}' does not take a value: '{argument}'")
            translated.append(FLAG_SWITCHES[name])
        elif value is None:
            raise ConfigurationError(f"Switch '/{name}' requires a value, as in '/{name}:<value>'")
        else:
            translated.append(f"{VALUE_SWITCHES[name]}={value}")
    return translated


def build_parser() -> argparse.ArgumentParser:
    parser = StamperArgumentParser(
        prog="asminfo",
        description="Stamp version, company, copyright and product attributes into AssemblyInfo files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  asminfo App.sln --version 1.2.3.4
  asminfo App.csproj --build 57 --revision 3 --force-assembly-version
  asminfo App.sln /major:6 /minor:7 /company:"My Company" /createmissinglines
        """,
    )

    parser.add_argument("root", help="Solution (.sln) or project file to stamp")

    version = parser.add_argument_group("version")
    version.add_argument("--version", help="Full version X.Y.Z or X.Y.Z.R (a missing R becomes 0)")
    version.add_argument("--major", help="Major component; other components keep their value")
    version.add_argument("--minor", help="Minor component")
    version.add_argument("--build", help="Build component")
    version.add_argument("--revision", help="Revision component")

    attributes = parser.add_argument_group("attributes")
    attributes.add_argument("--company", default="", help="AssemblyCompany value")
    attributes.add_argument("--copyright", default="", help="AssemblyCopyright value")
    attributes.add_argument("--product", default="", help="AssemblyProduct value")

    behaviour = parser.add_argument_group("behaviour")
    behaviour.add_argument(
        "--create-missing-lines",
        action="store_true",
        help="Append declarations for attributes a file does not have",
    )
    behaviour.add_argument(
        "--force-assembly-version",
        action="store_true",
        help="Write all four AssemblyVersion components instead of major.minor.0.0",
    )
    behaviour.add_argument(
        "--dry-run",
        action="store_true",
        help="Report what would change without writing any file",
    )

    runtime = parser.add_argument_group("runtime")
    runtime.add_argument("--config", type=Path, help="TOML configuration file (default: ./asminfo.toml)")
    verbosity = runtime.add_mutually_exclusive_group()
    verbosity.add_argument("--quiet", action="store_true", help="Only print warnings and errors")
    verbosity.add_argument("--verbose", action="store_true", help="Print debug details")
    return parser


def arguments_from_namespace(args: argparse.Namespace) -> StampArguments:
    arguments: StampArguments = {
        "root": args.root,
        "company": args.company,
        "copyright": args.copyright,
        "product": args.product,
        "create_missing_lines": args.create_missing_lines,
        "force_assembly_version": args.force_assembly_version,
        "dry_run": args.dry_run,
    }
    for name in ("version", "major", "minor", "build", "revision"):
        value = getattr(args, name)
        if value is not None:
            arguments[name] = value  # type: ignore[literal-required]
    return arguments


def cli_logging_settings(config: Config, args: argparse.Namespace) -> Dict[str, Any]:
    """Logging settings with the verbosity flags applied."""

    settings = logging_settings(config)
    if args.verbose:
        settings["level"] = "DEBUG"
    elif args.quiet:
        settings["level"] = "WARNING"
    return settings


def log_report(logger_factory: StamperLogger, report: StampReport) -> None:
    report_logger = logger_factory.create_module_logger("cli.run")
    summary = report.summary()
    verb = "would be updated" if report.dry_run else "updated"
    report_logger.info(
        {
            "event": "cli.run.completed",
            "path": summary["root"],
            "message": (
                f"{summary['changed']} of {summary['metadata_files']} file(s) {verb}, "
                f"{summary['unchanged']} already up to date"
            ),
            "details": summary,
        }
    )
    report_logger.info("Done.")


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the stamper; return the process exit status."""

    logger_factory = get_logger()
    phase = "arguments"
    try:
        parser = build_parser()
        args = parser.parse_args(translate_legacy_arguments(sys.argv[1:] if argv is None else argv))

        phase = "configuration"
        config = load_config(args.config)
        logger_factory = setup_logging(cli_logging_settings(config, args))
        validate_config(config)

        phase = "stamping"
        system = create_system(config=config, logger_factory=logger_factory)
        logger_factory.log_system_startup(PROJECT_VERSION, system.describe())
        report = system.run_arguments(arguments_from_namespace(args))
    except (StamperError, ConfigError) as exc:
        logger_factory.log_error_with_context(exc, {"phase": phase})
        return 1
    except KeyboardInterrupt:
        logger_factory.log_error_with_context(RuntimeError("Interrupted by user"), {"phase": phase})
        return 1

    log_report(logger_factory, report)
    return 0


if __name__ == "__main__":
    sys.exit(main())
