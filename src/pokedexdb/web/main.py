"""Pokédex DB web application entry point."""

import logging

from pokedexdb.config import ConfigManager
from pokedexdb.system.structlog_configurator import configure_structlog
from pokedexdb.web.core.factory import create_app

# Configure logging before anything else imports and creates loggers
config_manager = ConfigManager()
config = config_manager.load()
configure_structlog(config)

# Request logging middleware replaces the uvicorn access log
logging.getLogger("uvicorn.access").disabled = True

app = create_app()
