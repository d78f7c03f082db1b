"""Database package: async engine and session management."""

from pokedexdb.database.core import CoreDatabaseService

__all__ = ["CoreDatabaseService"]
