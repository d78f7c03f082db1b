"""Configuration loading for the web application."""

from pokedexdb.config import ConfigManager, PokedexConfig
from pokedexdb.system.path_resolver import PathResolver


def get_config(path_resolver: PathResolver | None = None) -> PokedexConfig:
    """Load the Pokédex configuration.

    Args:
        path_resolver: Optional PathResolver instance to use. If not provided,
                      creates a new PathResolver instance.

    Returns:
        PokedexConfig: The loaded and validated configuration.
    """
    if path_resolver is None:
        path_resolver = PathResolver()
    return ConfigManager(path_resolver).load()
