"""Configuration management backed by a YAML file."""

import logging
from typing import Any

import yaml
from pydantic import ValidationError

from pokedexdb.config.models import PokedexConfig
from pokedexdb.system.path_resolver import PathResolver

logger = logging.getLogger(__name__)


class ConfigManager:
    """Loads configuration, writing model defaults on first use."""

    CURRENT_VERSION = "1.0.0"

    def __init__(self, path_resolver: PathResolver | None = None):
        """Initialize ConfigManager.

        Args:
            path_resolver: Optional PathResolver instance. If None, creates a new one.
        """
        self.path_resolver = path_resolver or PathResolver()
        self.config_path = self.path_resolver.get_pokedexdb_config_path()

    def load(self) -> PokedexConfig:
        """Load and validate configuration, creating a default file if none exists.

        Returns:
            PokedexConfig: Loaded and validated configuration

        Raises:
            ValueError: If the file content does not validate
        """
        self._ensure_config_exists()
        raw_config = self._read_yaml()

        config_version = raw_config.get("config_version", self.CURRENT_VERSION)
        if config_version != self.CURRENT_VERSION:
            logger.warning(
                "Config version %s differs from %s; loading with current defaults",
                config_version,
                self.CURRENT_VERSION,
            )
            raw_config["config_version"] = self.CURRENT_VERSION

        try:
            return PokedexConfig(**raw_config)
        except ValidationError as e:
            messages = [
                f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in e.errors()
            ]
            raise ValueError(f"Configuration validation failed: {', '.join(messages)}") from e

    def _ensure_config_exists(self) -> None:
        """Ensure config file exists, create it from model defaults if needed."""
        if not self.config_path.exists():
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            defaults = PokedexConfig().model_dump()
            config_yaml = yaml.dump(defaults, default_flow_style=False, sort_keys=False)
            self.config_path.write_text(config_yaml)
            logger.info("Created default configuration at %s", self.config_path)

    def _read_yaml(self) -> dict[str, Any]:
        """Read YAML config file.

        Returns:
            dict: Raw configuration dictionary
        """
        config_text = self.config_path.read_text()
        return yaml.safe_load(config_text) or {}
