"""Python-standard logging configuration for reportdiff.

This module provides centralised logging setup using
logging.config.dictConfig() with YAML configuration files stored in
src/reportdiff/config/.
"""

from __future__ import annotations

import logging
import logging.config
import sys
from pathlib import Path
from typing import Any, cast

import yaml

from reportdiff.utils import ProjectUtilsError, get_config_dir


class LoggingError(Exception):
    """Exception raised for logging configuration errors."""

    pass


def get_config_path() -> Path:
    """Get the path to the bundled logging configuration file.

    Returns:
        Path to logging.yaml in the package config directory

    Raises:
        LoggingError: If the configuration file is missing

    """
    config_path = get_config_dir() / "logging.yaml"

    if not config_path.exists():
        raise LoggingError(
            f"No logging configuration found. Expected at: {config_path}"
        )

    return config_path


def load_config(config_path: Path) -> dict[str, Any]:
    """Load logging configuration from YAML file.

    Args:
        config_path: Path to the YAML configuration file

    Returns:
        Logging configuration dictionary

    Raises:
        LoggingError: If configuration cannot be loaded or parsed

    """
    try:
        with open(config_path, encoding="utf-8") as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise LoggingError(f"Failed to parse YAML config {config_path}: {e}") from e
    except OSError as e:
        raise LoggingError(f"Failed to read config file {config_path}: {e}") from e

    if not isinstance(config, dict):
        raise LoggingError(f"Invalid configuration format in {config_path}")

    return cast(dict[str, Any], config)


def create_log_directories(config: dict[str, Any]) -> None:
    """Create parent directories of file handlers referenced in the configuration.

    Args:
        config: Logging configuration dictionary

    """
    for handler_config in config.get("handlers", {}).values():
        if isinstance(handler_config, dict) and "filename" in handler_config:
            log_file = Path(cast(str, handler_config["filename"]))
            log_file.parent.mkdir(parents=True, exist_ok=True)


def _apply_level_override(config: dict[str, Any], level: str) -> None:
    numeric_level = getattr(logging, level.upper(), None)
    if not isinstance(numeric_level, int):
        raise LoggingError(f"Invalid log level: {level}")
    level = level.upper()

    for logger_config in config.get("loggers", {}).values():
        logger_config["level"] = level

    if "root" in config:
        config["root"]["level"] = level

    # Handlers filter below their own level, so lower them when more verbose
    for handler_config in config.get("handlers", {}).values():
        if isinstance(handler_config, dict) and "level" in handler_config:
            current_handler_level = getattr(
                logging, str(handler_config["level"]).upper(), logging.INFO
            )
            if numeric_level < current_handler_level:
                handler_config["level"] = level


def setup_logging(
    config_path: Path | str | None = None,
    level: str | None = None,
    force_basic: bool = False,
) -> None:
    """Configure logging using Python standard dictConfig.

    Any configuration error falls back to basic console logging on stderr.

    Args:
        config_path: Path to logging configuration file
        level: Override log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        force_basic: Force basic console logging (fallback mode)

    """
    if force_basic:
        _setup_basic_logging(level or "INFO")
        return

    try:
        if isinstance(config_path, str):
            config_path = Path(config_path)
        elif config_path is None:
            config_path = get_config_path()

        config = load_config(config_path)
        if level:
            _apply_level_override(config, level)

        create_log_directories(config)
        logging.config.dictConfig(config)

        logging.getLogger(__name__).debug("Logging configured from: %s", config_path)

    except (LoggingError, ProjectUtilsError, ImportError, KeyError, ValueError) as e:
        fallback_level = level or "INFO"
        _setup_basic_logging(fallback_level)

        logging.getLogger(__name__).warning(
            "Failed to configure logging from file (%s), using basic console logging at %s level",
            e,
            fallback_level,
        )


def _setup_basic_logging(level: str) -> None:
    """Set up basic console logging as fallback.

    Args:
        level: Logging level string

    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
        force=True,
    )
