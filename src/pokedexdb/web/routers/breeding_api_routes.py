"""Breeding compatibility endpoint."""

import logging
from typing import Annotated

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, Response

from pokedexdb.breeding.compatibility import check_compatibility
from pokedexdb.config import PokedexConfig
from pokedexdb.pokemon.models import PokemonRecord
from pokedexdb.pokemon.queries import PokemonQueryService
from pokedexdb.web.core.container import Container
from pokedexdb.web.core.http import set_cache_headers
from pokedexdb.web.models.breeding import BreedingResponse
from pokedexdb.web.routers.pokemon_api_routes import require_pokemon

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/breeding")


@router.get("/compatibility", response_model=BreedingResponse)
@inject
async def get_compatibility(
    parent1: int,
    parent2: int,
    query_service: Annotated[
        PokemonQueryService, Depends(Provide[Container.pokemon_query_service])
    ],
    config: Annotated[PokedexConfig, Depends(Provide[Container.config])],
    response: Response,
) -> dict:
    """Whether two stored Pokémon can breed, with hatch estimates when they can."""
    first = await require_pokemon(query_service, parent1)
    second = await require_pokemon(query_service, parent2)

    result = check_compatibility(
        first.egg_groups, second.egg_groups, first.egg_cycles, second.egg_cycles
    )
    logger.debug("Breeding %s x %s: %s", first.name, second.name, result.status)

    set_cache_headers(response, config.cache.record_ttl)
    return {
        "parent1": PokemonRecord.from_row(first).to_json(),
        "parent2": PokemonRecord.from_row(second).to_json(),
        **result.to_payload(),
    }
