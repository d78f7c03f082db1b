import logging
import os
import sys
from importlib import metadata

import structlog

from pokedexdb.config import PokedexConfig
from pokedexdb.config.models import LoggingConfig
from pokedexdb.system.structlog_configurator import (
    _add_static_context,
    _configure_handlers,
    _configure_processors,
    _use_json_output,
    configure_structlog,
    get_deployment_environment,
    get_package_version,
    is_docker_environment,
)


class TestEnvironmentDetection:
    """Test environment detection functions."""

    def test_is_docker_environment__dockerenv(self, mocker):
        """Should return True when /.dockerenv exists."""
        mocker.patch("os.path.exists", return_value=True)
        assert is_docker_environment() is True

    def test_is_docker_environment__env_var(self, mocker):
        """Should return True when DOCKER_CONTAINER env var is set."""
        mocker.patch("os.path.exists", return_value=False)
        mocker.patch.dict(os.environ, {"DOCKER_CONTAINER": "true"})
        assert is_docker_environment() is True

    def test_is_docker_environment_false(self, mocker):
        """Should return False when no Docker indicators present."""
        mocker.patch("os.path.exists", return_value=False)
        mocker.patch.dict(os.environ, {}, clear=True)
        assert is_docker_environment() is False

    def test_deployment_environment(self, mocker):
        """Should report development from the environment and unknown otherwise."""
        mocker.patch("os.path.exists", return_value=False)
        mocker.patch.dict(os.environ, {"POKEDEXDB_ENV": "development"}, clear=True)
        assert get_deployment_environment() == "development"

        mocker.patch.dict(os.environ, {}, clear=True)
        assert get_deployment_environment() == "unknown"

    def test_package_version_fallback(self, mocker):
        """Should report unknown when the package is not installed."""
        mocker.patch(
            "pokedexdb.system.structlog_configurator.metadata.version",
            side_effect=metadata.PackageNotFoundError,
        )
        assert get_package_version() == "unknown"


class TestProcessors:
    """Test processor chain assembly."""

    def test_static_context_is_merged(self):
        """Should merge static fields into every event."""
        processor = _add_static_context({"service": "pokedexdb"})

        event = processor(None, "info", {"event": "hello"})

        assert event == {"event": "hello", "service": "pokedexdb"}

    def test_json_renderer_when_requested(self, mocker):
        """Should end the chain with the JSON renderer when configured."""
        mocker.patch.dict(os.environ, {}, clear=True)
        mocker.patch("os.path.exists", return_value=False)
        config = PokedexConfig(logging=LoggingConfig(json_logs=True))

        processors = _configure_processors(config)

        assert isinstance(processors[-1], structlog.processors.JSONRenderer)

    def test_console_renderer_by_default_outside_docker(self, mocker):
        """Should use the console renderer outside Docker by default."""
        mocker.patch.dict(os.environ, {}, clear=True)
        mocker.patch("os.path.exists", return_value=False)

        processors = _configure_processors(PokedexConfig())

        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)

    def test_development_json_flag(self, mocker):
        """Should let POKEDEXDB_JSON_LOGS force JSON in development."""
        mocker.patch.dict(
            os.environ, {"POKEDEXDB_ENV": "development", "POKEDEXDB_JSON_LOGS": "true"}, clear=True
        )
        assert _use_json_output(PokedexConfig(logging=LoggingConfig(json_logs=False))) is True

    def test_caller_info(self, mocker):
        """Should add callsite parameters when caller info is enabled."""
        mocker.patch.dict(os.environ, {}, clear=True)
        config = PokedexConfig(logging=LoggingConfig(include_caller=True))

        processors = _configure_processors(config)

        assert any(
            isinstance(p, structlog.processors.CallsiteParameterAdder) for p in processors
        )


class TestHandlers:
    """Test root logger handler setup."""

    def test_single_stdout_handler_at_configured_level(self):
        """Should install one stdout handler at the configured level."""
        root_logger = logging.getLogger()
        original_handlers = root_logger.handlers[:]
        original_level = root_logger.level
        try:
            _configure_handlers(PokedexConfig(logging=LoggingConfig(level="WARNING")))

            assert root_logger.level == logging.WARNING
            assert len(root_logger.handlers) == 1
            assert root_logger.handlers[0].stream is sys.stdout
        finally:
            root_logger.handlers = original_handlers
            root_logger.setLevel(original_level)

    def test_configure_structlog(self, mocker):
        """Should configure structlog and the root handlers."""
        configure = mocker.patch("structlog.configure")
        handlers = mocker.patch("pokedexdb.system.structlog_configurator._configure_handlers")
        mocker.patch("structlog.get_logger")

        configure_structlog(PokedexConfig())

        configure.assert_called_once()
        handlers.assert_called_once()
