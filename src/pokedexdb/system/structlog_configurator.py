"""Structlog-based logging configuration for the Pokédex service.

Modules keep using ``logging.getLogger(__name__)``; this module routes the
standard library loggers through structlog processors so every line carries
the same static context and timestamp, rendered as JSON in containers and as
colored console output during development.
"""

import logging
import os
import sys
from collections.abc import Callable
from importlib import metadata
from typing import Any

import structlog

from pokedexdb.config.models import PokedexConfig


def is_docker_environment() -> bool:
    """Check if running in a Docker container."""
    return os.path.exists("/.dockerenv") or os.environ.get("DOCKER_CONTAINER") == "true"


def is_development_environment() -> bool:
    """Check whether the development environment flag is set."""
    return os.environ.get("POKEDEXDB_ENV", "production") == "development"


def get_package_version() -> str:
    """Return the installed package version, or 'unknown' for source checkouts."""
    try:
        return metadata.version("pokedexdb")
    except metadata.PackageNotFoundError:
        return "unknown"


def get_deployment_environment() -> str:
    """Get deployment environment with 'unknown' fallback."""
    if is_docker_environment():
        return "docker"
    elif is_development_environment():
        return "development"
    return "unknown"


def _add_static_context(extra_fields: dict[str, str]) -> Callable:
    """Processor to add static context fields to all log entries."""

    def processor(
        logger: structlog.BoundLogger, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        event_dict.update(extra_fields)
        return event_dict

    return processor


def _use_json_output(config: PokedexConfig) -> bool:
    """Decide between JSON and console rendering."""
    if is_development_environment():
        return os.environ.get("POKEDEXDB_JSON_LOGS", "false").lower() == "true"
    if config.logging.json_logs is not None:
        return config.logging.json_logs
    return is_docker_environment()


def _configure_processors(config: PokedexConfig) -> list:
    """Configure structlog processors based on environment."""
    extra_fields = {
        "service": "pokedexdb",
        "version": get_package_version(),
        "deployment": get_deployment_environment(),
        **config.logging.extra_fields,
    }

    processors: list = [
        structlog.contextvars.merge_contextvars,
        _add_static_context(extra_fields),
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="ISO"),
    ]

    if config.logging.include_caller:
        processors.append(structlog.processors.CallsiteParameterAdder())

    if _use_json_output(config):
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    return processors


def _configure_handlers(config: PokedexConfig) -> None:
    """Route stdlib loggers to stdout at the configured level."""
    root_logger = logging.getLogger()
    log_level = getattr(logging, config.logging.level.upper(), logging.INFO)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    root_logger.setLevel(log_level)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(console_handler)


def configure_structlog(config: PokedexConfig) -> None:
    """Configure structlog-based logging system.

    Args:
        config: The PokedexConfig instance containing logging settings.
    """
    structlog.configure(
        processors=_configure_processors(config),
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, config.logging.level.upper(), logging.INFO)
        ),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    _configure_handlers(config)

    logger = structlog.get_logger(__name__)
    logger.info(
        "Structured logging configured",
        version=get_package_version(),
        log_level=config.logging.level,
        environment=get_deployment_environment(),
        json_output=_use_json_output(config),
    )
