# src/utils/logger.py
# Logging setup for the AssemblyInfo stamper
# ==========================================

"""
Configures loguru for the whole stamper: one console sink that is always on,
plus an optional rotating file sink. Components never talk to loguru directly;
they ask the configurator for a module logger and emit structured payloads
of the form ``{"event": ..., "path": ..., "details": {...}}``.
"""

import sys
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from loguru import logger

from config import settings as config_settings

CONSOLE_FORMAT = "AsmblyInfo[{time:YYYY-MM-DD HH:mm:ss}]: {message}"
DEBUG_CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[module]}</cyan> | "
    "<level>{message}</level>"
)
FILE_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss.SSS} | "
    "{level: <8} | "
    "{process.id: <6} | "
    "{extra[module]} | "
    "{message} | "
    "{extra[payload]}"
)


class ModuleLogger:
    """
    Logger handed to components.

    Accepts either plain strings or structured payloads. A payload's
    ``message`` (or, failing that, its ``event``) becomes the console text;
    the whole payload is attached to the record for the file sink.
    """

    def __init__(self, bound_logger: Any):
        self._logger = bound_logger

    def _log(self, level: str, payload: Any):
        if isinstance(payload, Mapping):
            message = payload.get("message") or payload.get("event", "")
            self._logger.bind(payload=dict(payload)).log(level, str(message))
        else:
            self._logger.log(level, str(payload))

    def debug(self, payload: Any):
        self._log("DEBUG", payload)

    def info(self, payload: Any):
        self._log("INFO", payload)

    def warning(self, payload: Any):
        self._log("WARNING", payload)

    def error(self, payload: Any):
        self._log("ERROR", payload)


class StamperLogger:
    """
    Central logging configurator.

    Holds the sink configuration so that a CLI run can reconfigure logging
    once its own configuration file has been loaded.
    """

    def __init__(self):
        self.is_configured = False
        self.log_file_path: Optional[Path] = None
        self.debug = False

    def configure_logging(self, config: Optional[Dict[str, Any]] = None, force: bool = False):
        """
        Install the console sink and, when ``file_path`` is set, the file sink.

        Args:
            config: Logging mapping as produced by ``config.settings.logging_settings``.
                    Defaults to the configuration loaded on first use.
            force: Reconfigure even if sinks were already installed.
        """
        if self.is_configured and not force:
            logger.debug("Logger already configured, skipping reconfiguration")
            return

        config = config or config_settings.LOGGING_CONFIG
        self.debug = bool(config.get("debug", False))

        logger.remove()
        logger.configure(extra={"module": "asminfo", "payload": {}})
        self._configure_console_handler(config)

        self.log_file_path = None
        if config.get("file_path"):
            self._configure_file_handler(config)

        self.is_configured = True
        logger.debug(f"Logging configuration applied: {config}")

    def _configure_console_handler(self, config: Dict[str, Any]):
        if self.debug:
            console_format = DEBUG_CONSOLE_FORMAT
            console_level = "DEBUG"
        else:
            console_format = CONSOLE_FORMAT
            console_level = config.get("level", "INFO")

        logger.add(
            sys.stdout,
            format=console_format,
            level=console_level,
            colorize=self.debug,
            backtrace=self.debug,
            diagnose=self.debug,
        )

    def _configure_file_handler(self, config: Dict[str, Any]):
        """Rotating file sink; structured and parseable."""
        self.log_file_path = Path(config["file_path"])
        self.log_file_path.parent.mkdir(parents=True, exist_ok=True)

        logger.add(
            str(self.log_file_path),
            format=FILE_FORMAT,
            level=config.get("level", "INFO"),
            rotation=config.get("max_file_size", "10 MB"),
            retention=config.get("retention", "30 days"),
            compression="gz",
            backtrace=True,
            diagnose=False,
        )

    def create_module_logger(self, module_name: str) -> ModuleLogger:
        """
        Return a logger bound to ``module_name``.

        Args:
            module_name: Dotted component name (e.g. 'metadata.engine')
        """
        if not self.is_configured:
            self.configure_logging()
        return ModuleLogger(logger.bind(module=module_name))

    def log_system_startup(self, version: str, config_summary: Optional[Dict[str, Any]] = None):
        """Record the start of a run and the settings that shape it."""
        logger.info(f"Starting AsmblyInfo {version}...")
        if config_summary:
            for key, value in config_summary.items():
                logger.debug(f"  {key}: {value}")
        if self.log_file_path:
            logger.debug(f"Writing logs to: {self.log_file_path}")

    def log_error_with_context(self, error: Exception, context: Optional[Dict[str, Any]] = None):
        """Record a fatal error together with the phase it happened in."""
        logger.error(str(error))
        if context:
            for key, value in context.items():
                logger.debug(f"  {key}: {value}")
        if self.debug:
            logger.opt(exception=error).debug("Stack trace:")
        logger.error("AsmblyInfo failed.")


_logger_instance: Optional[StamperLogger] = None


def get_logger() -> StamperLogger:
    """Return the shared configurator; sinks are installed on first module logger."""
    global _logger_instance
    if _logger_instance is None:
        _logger_instance = StamperLogger()
    return _logger_instance


def setup_logging(config: Optional[Dict[str, Any]] = None) -> StamperLogger:
    """
    Configure logging at the start of a run.

    Args:
        config: Optional logging mapping; when given, sinks are rebuilt from it.

    Returns:
        The shared configurator
    """
    logger_instance = get_logger()
    if config:
        logger_instance.configure_logging(config, force=True)
    else:
        logger_instance.configure_logging()
    return logger_instance
