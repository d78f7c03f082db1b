"""Pokédex DB configuration package.

This package provides centralized configuration management with:
- Pydantic models with validation
- YAML parsing and serialization
"""

from .manager import ConfigManager
from .models import PokedexConfig

__all__ = [
    "ConfigManager",
    "PokedexConfig",
]
