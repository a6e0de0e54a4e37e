"""Logging system for the calculators and the command line front end.

This module provides logging with YAML configuration, per-module loggers,
platform-aware log locations, and startup-based rotation.

Platform-specific log locations:
    - macOS: ~/Library/Logs/AirPerf/airperf.log
    - Linux: ~/.airperf/logs/airperf.log
    - Windows: %AppData%/AirPerf/Logs/airperf.log

Each start rotates logs, keeping the last 5 runs.

Importing the library writes nothing: records go to a NullHandler on the
``airperf`` logger until an application calls initialize_logging.

Typical usage example:
    from airperf.core.logging_system import get_logger

    logger = get_logger(__name__)
    logger.debug("Ground roll: %.2f m", ground_roll)
"""

import logging
import os
import platform
import time
from pathlib import Path
from typing import Any

import yaml

_logging_config: dict[str, Any] = {}
_loggers_cache: dict[str, logging.Logger] = {}

logging.getLogger("airperf").addHandler(logging.NullHandler())


class LoggingError(Exception):
    """Raised when logging system operations fail."""


def get_platform_log_dir() -> Path:
    """Get platform-specific log directory.

    Returns:
        Path to the platform-appropriate log directory:
        - macOS: ~/Library/Logs/AirPerf
        - Linux: ~/.airperf/logs
        - Windows: %AppData%/AirPerf/Logs
    """
    system = platform.system()

    if system == "Darwin":
        return Path.home() / "Library" / "Logs" / "AirPerf"
    elif system == "Windows":
        appdata = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
        return appdata / "AirPerf" / "Logs"
    else:
        return Path.home() / ".airperf" / "logs"


def rotate_logs(log_dir: Path, log_filename: str = "airperf.log", keep_count: int = 5) -> None:
    """Shift the previous runs' logs up by one: airperf.log becomes airperf.log.1.

    The log numbered keep_count is dropped.
    """
    log_file = log_dir / log_filename
    if not log_file.exists():
        return

    (log_dir / f"{log_filename}.{keep_count}").unlink(missing_ok=True)
    for i in range(keep_count - 1, 0, -1):
        previous = log_dir / f"{log_filename}.{i}"
        if previous.exists():
            previous.rename(log_dir / f"{log_filename}.{i + 1}")

    log_file.rename(log_dir / f"{log_filename}.1")


def _read_config_file(config_path: Path) -> dict[str, Any]:
    if not config_path.exists():
        raise LoggingError(f"Logging config file not found: {config_path}")
    try:
        with config_path.open("r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}
    except Exception as e:
        raise LoggingError(f"Failed to load logging config: {e}") from e


def initialize_logging(config_path: str | Path | None = None, use_platform_dir: bool = True) -> None:
    """Set up console and file logging for an application run.

    Called by the command line front end; library code only asks for
    loggers. Rotates the logs of previous runs.

    Args:
        config_path: Logging YAML; its top-level sections replace the
            defaults. None uses the defaults.
        use_platform_dir: Write to the platform log directory instead of
            the config's ``log_dir``.

    Raises:
        LoggingError: If the config file is missing or unreadable.

    Examples:
        >>> initialize_logging("logging.yaml")
        >>> log = get_logger("airperf.main")
    """
    global _logging_config

    config = _get_default_config()
    if config_path:
        config |= _read_config_file(Path(config_path))
    if use_platform_dir:
        config["log_dir"] = str(get_platform_log_dir())
    _logging_config = config

    log_dir = Path(config.get("log_dir", "logs"))
    log_dir.mkdir(parents=True, exist_ok=True)
    combined = config.get("combined_log", {})
    rotate_logs(log_dir, combined.get("filename", "airperf.log"), combined.get("backup_count", 5))

    _configure_root_logger()

    # Loggers handed out earlier pick up the new per-logger settings
    for logger in _loggers_cache.values():
        _apply_logger_config(logger)


def _get_default_config() -> dict[str, Any]:
    return {
        "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        "date_format": "%Y-%m-%d %H:%M:%S",
        "log_dir": "logs",
        "combined_log": {
            "enabled": True,
            "filename": "airperf.log",
            "backup_count": 5,
        },
        "console": {
            "enabled": True,
            "level": "WARNING",
        },
        "loggers": {},
    }


def _configure_root_logger() -> None:
    """Replace the root handlers with the configured console and file handlers."""
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)  # Handlers filter

    for handler in list(root_logger.handlers):
        handler.close()
    root_logger.handlers.clear()

    console = _logging_config.get("console", {})
    if console.get("enabled", True):
        console_handler = logging.StreamHandler()
        console_handler.setLevel(getattr(logging, console.get("level", "WARNING")))
        console_handler.setFormatter(_get_formatter())
        root_logger.addHandler(console_handler)

    combined = _logging_config.get("combined_log", {})
    if combined.get("enabled", True):
        log_dir = Path(_logging_config.get("log_dir", "logs"))
        log_file = log_dir / combined.get("filename", "airperf.log")
        # One file per run; rotate_logs has already moved the previous one
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(_get_formatter())
        root_logger.addHandler(file_handler)


class MillisecondFormatter(logging.Formatter):
    """Formatter that shows milliseconds with dot separator."""

    def formatTime(self, record, datefmt=None):
        """Format time with milliseconds using dot separator."""
        ct = self.converter(record.created)
        s = time.strftime(datefmt or "%Y-%m-%d %H:%M:%S", ct)
        return f"{s}.{int(record.msecs):03d}"


def _get_formatter() -> logging.Formatter:
    """Get the configured log formatter."""
    fmt = _logging_config.get("format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    datefmt = _logging_config.get("date_format", "%Y-%m-%d %H:%M:%S")
    return MillisecondFormatter(fmt, datefmt)


def _apply_logger_config(logger: logging.Logger) -> None:
    """Apply the per-logger section of the configuration to a logger."""
    logger_config = _logging_config.get("loggers", {}).get(logger.name, {})

    logger.disabled = not logger_config.get("enabled", True)
    logger.setLevel(getattr(logging, logger_config.get("level", "NOTSET")))


def get_logger(name: str) -> logging.Logger:
    """Get a logger for a module or component.

    Loggers are cached and reused. Each logger can have its own level
    specified in the logging config YAML under the 'loggers' section:

        loggers:
          airperf.systems.performance.takeoff:
            level: DEBUG

    Does not initialize logging; before initialize_logging is called the
    records are discarded.

    Args:
        name: Logger name (typically the module's __name__).

    Returns:
        Configured logger instance.

    Note:
        Use lazy formatting (%) instead of f-strings.
    """
    if name in _loggers_cache:
        return _loggers_cache[name]

    logger = logging.getLogger(name)
    _apply_logger_config(logger)

    _loggers_cache[name] = logger
    return logger


def shutdown_logging() -> None:
    """Shutdown the logging system gracefully.

    Flushes all handlers and closes log files.
    """
    logging.shutdown()
    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        handler.close()
    root_logger.handlers.clear()
