"""Logging setup for Aegis.

The package ships dictConfig files in ``aegis/config/``: ``logging.yaml`` is
the default and ``logging-<env>.yaml`` variants are picked by ``AEGIS_ENV``.
All console output goes to stderr.
"""

from __future__ import annotations

import logging
import logging.config
import os
import sys
from pathlib import Path
from typing import Any, cast

import yaml
from rich.console import Console
from rich.logging import RichHandler

CONFIG_DIR = Path(__file__).parent / "config"
DEFAULT_CONFIG = "logging.yaml"
BASIC_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_ENVIRONMENT_ALIASES = {
    "development": "dev",
    "production": "prod",
}


class LoggingError(Exception):
    """A logging configuration file is missing, unreadable or malformed."""

    pass


def stderr_rich_handler(**kwargs: Any) -> RichHandler:  # noqa: ANN401
    """RichHandler writing to stderr; used as a ``()`` factory in the YAML configs.

    Hooks reserve stdout for their JSON decision.
    """
    return RichHandler(console=Console(stderr=True), **kwargs)


def get_config_path(
    config_name: str | None = None, environment: str | None = None
) -> Path:
    """Locate a bundled logging configuration.

    An explicit ``config_name`` wins. Otherwise the environment (argument,
    then ``AEGIS_ENV``) selects ``logging-<env>.yaml``; environments without
    their own file use the default config.

    Raises:
        LoggingError: If not even the default config exists

    """
    if config_name:
        wanted = f"{config_name}.yaml"
    else:
        env = (environment or os.getenv("AEGIS_ENV", "")).lower()
        env = _ENVIRONMENT_ALIASES.get(env, env)
        wanted = f"logging-{env}.yaml" if env else DEFAULT_CONFIG

    for candidate in (CONFIG_DIR / wanted, CONFIG_DIR / DEFAULT_CONFIG):
        if candidate.exists():
            return candidate
    raise LoggingError(f"No logging configuration found in {CONFIG_DIR}")


def load_config(config_path: Path) -> dict[str, Any]:
    """Read a dictConfig mapping from YAML.

    Raises:
        LoggingError: If the file cannot be read, is not YAML, or is not a mapping

    """
    try:
        config = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except OSError as e:
        raise LoggingError(f"Failed to read logging config {config_path}: {e}") from e
    except yaml.YAMLError as e:
        raise LoggingError(f"Failed to parse logging config {config_path}: {e}") from e

    if not isinstance(config, dict):
        raise LoggingError(f"Invalid configuration format in {config_path}")
    return cast(dict[str, Any], config)


def create_log_directories(config: dict[str, Any]) -> None:
    """Make sure the parent directory of every file handler exists."""
    handlers = config.get("handlers", {})
    filenames = [
        cast(str, handler["filename"])
        for handler in handlers.values()
        if isinstance(handler, dict) and "filename" in handler
    ]
    for filename in filenames:
        Path(filename).parent.mkdir(parents=True, exist_ok=True)


def _apply_level_override(config: dict[str, Any], level: str) -> None:
    numeric_level = getattr(logging, level.upper(), None)
    if not isinstance(numeric_level, int):
        raise LoggingError(f"Invalid log level: {level}")
    level = level.upper()

    for logger_config in config.get("loggers", {}).values():
        logger_config["level"] = level
    if "root" in config:
        config["root"]["level"] = level

    # Handlers may only become more verbose
    for handler in config.get("handlers", {}).values():
        if not isinstance(handler, dict) or "level" not in handler:
            continue
        threshold = getattr(logging, cast(str, handler["level"]).upper(), logging.INFO)
        if numeric_level < threshold:
            handler["level"] = level


def setup_logging(
    config_path: Path | str | None = None,
    level: str | None = None,
    environment: str | None = None,
    force_basic: bool = False,
) -> None:
    """Apply a YAML logging configuration.

    A configuration that cannot be loaded or applied never stops a command:
    logging drops back to ``logging.basicConfig`` on stderr and a warning is
    emitted.

    Args:
        config_path: Config file to apply; the bundled config when None
        level: Level forced onto every logger, e.g. ``"DEBUG"``
        environment: Selects ``logging-<environment>.yaml``
        force_basic: Skip YAML entirely and use basic logging

    """
    if force_basic:
        _setup_basic_logging(level or "INFO")
        return

    try:
        path = (
            Path(config_path)
            if config_path is not None
            else get_config_path(environment=environment)
        )
        config = load_config(path)
        if level:
            _apply_level_override(config, level)
        create_log_directories(config)
        logging.config.dictConfig(config)
    except (LoggingError, ImportError, KeyError, ValueError, TypeError) as e:
        _setup_basic_logging(level or "INFO")
        logging.getLogger(__name__).warning(
            "Using basic stderr logging at %s level; logging config not applied: %s",
            (level or "INFO").upper(),
            e,
        )
        return

    logging.getLogger(__name__).debug("Logging configured from %s", path.name)


def _setup_basic_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=BASIC_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
        force=True,
    )
