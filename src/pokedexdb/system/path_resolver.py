import os
from pathlib import Path


class PathResolver:
    """Central authority for all file path resolution in the Pokédex service.

    Uses environment variables for configuration with sensible defaults.
    """

    def __init__(self) -> None:
        """Initialize PathResolver with environment-based configuration."""
        # Core directory path from environment variables
        self.data_dir = Path(os.getenv("POKEDEXDB_DATA", "/var/lib/pokedexdb"))

    def get_pokedexdb_config_path(self) -> Path:
        """Get the path to the main configuration file.

        Checks POKEDEXDB_CONFIG environment variable first, then falls back to default.
        """
        config_path = os.getenv("POKEDEXDB_CONFIG")
        if config_path:
            return Path(config_path)

        # Default: runtime config in data directory
        return self.data_dir / "config" / "pokedexdb.yaml"

    def get_data_dir(self) -> Path:
        """Get the data directory path.

        Returns:
            Path to the data directory where all runtime data is stored.
        """
        return self.data_dir

    def get_database_dir(self) -> Path:
        """Get the directory for database files."""
        return self.data_dir / "database"

    def get_database_path(self) -> Path:
        """Get the path to the main SQLite database."""
        return self.get_database_dir() / "pokedex.db"
