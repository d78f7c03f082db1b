"""Breeding compatibility API models."""

from pokedexdb.pokemon.models import PokemonRecord
from pokedexdb.web.models.base import CamelModel


class BreedingResponse(CamelModel):
    """Response for a breeding compatibility check."""

    parent1: PokemonRecord
    parent2: PokemonRecord
    status: str
    compatible: bool
    message: str
    shared_groups: list[str]
    estimated_egg_cycles: int | None = None
    steps_to_hatch: int | None = None
