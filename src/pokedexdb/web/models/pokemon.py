"""Pokémon list, detail and import API models."""

from pydantic import Field

from pokedexdb.lineage.chains import EvolutionStep
from pokedexdb.lineage.learnsets import PokemonMove
from pokedexdb.pokemon.models import PokemonRecord
from pokedexdb.web.models.base import CamelModel


class PaginationInfo(CamelModel):
    """Pagination block of a list response."""

    page: int = Field(..., description="Current page (1-based)")
    limit: int = Field(..., description="Records per page")
    total: int = Field(..., description="Records matching the filters")
    total_pages: int = Field(..., description="Number of pages for the filters")


class PokemonListResponse(CamelModel):
    """One page of filtered Pokémon."""

    data: list[PokemonRecord]
    pagination: PaginationInfo


class EvolutionItem(CamelModel):
    """An evolution step with the record it resolved to."""

    step: EvolutionStep
    pokemon: PokemonRecord


class EvolutionsResponse(CamelModel):
    """Response for a record's evolution chain."""

    data: list[EvolutionItem]


class MovesResponse(CamelModel):
    """Response for a record's learnset."""

    data: list[PokemonMove]


class StatRangeModel(CamelModel):
    """Realized minimum and maximum of one stat."""

    min: int
    max: int


class DefensiveProfileModel(CamelModel):
    """Combined defensive matchups of a type pair."""

    multipliers: dict[str, float]
    weak_to: list[str]
    resistant_to: list[str]
    immune_to: list[str]


class PokemonDetailResponse(CamelModel):
    """A record with its evolutions, learnset, stat ranges and defences."""

    pokemon: PokemonRecord
    evolutions: list[EvolutionItem]
    moves: list[PokemonMove]
    stat_ranges: dict[str, StatRangeModel]
    defenses: DefensiveProfileModel


class StatRangesResponse(CamelModel):
    """Response for a record's level 100 stat ranges."""

    id: int
    name: str
    ranges: dict[str, StatRangeModel]


class ImportResponse(CamelModel):
    """Outcome of a CSV import."""

    success: bool
    count: int = Field(..., description="Rows inserted")
    failed: int = Field(0, description="Rows skipped because they did not parse")
    message: str
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
