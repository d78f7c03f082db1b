"""Evolution, learnset and detail-view endpoints."""

import logging
from typing import Annotated

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, Response

from pokedexdb.config import PokedexConfig
from pokedexdb.lineage.assembler import LineageAssembler
from pokedexdb.lineage.learnsets import moves_for
from pokedexdb.pokemon.queries import PokemonQueryService
from pokedexdb.utils.cache import Cache
from pokedexdb.web.core.container import Container
from pokedexdb.web.core.http import set_cache_headers
from pokedexdb.web.models.pokemon import (
    EvolutionsResponse,
    MovesResponse,
    PokemonDetailResponse,
)
from pokedexdb.web.routers.pokemon_api_routes import require_pokemon

logger = logging.getLogger(__name__)

router = APIRouter()

LINEAGE_STALE_SECONDS = 86400


@router.get("/pokemon/evolutions/{pokemon_id}", response_model=EvolutionsResponse)
@inject
async def get_evolutions(
    pokemon_id: int,
    query_service: Annotated[
        PokemonQueryService, Depends(Provide[Container.pokemon_query_service])
    ],
    assembler: Annotated[LineageAssembler, Depends(Provide[Container.lineage_assembler])],
    cache: Annotated[Cache, Depends(Provide[Container.cache])],
    config: Annotated[PokedexConfig, Depends(Provide[Container.config])],
    response: Response,
) -> dict:
    """Evolution chain of a Pokémon resolved to stored records."""
    ttl = config.cache.lineage_ttl
    payload = cache.get("evolutions", id=pokemon_id)
    if payload is None:
        record = await require_pokemon(query_service, pokemon_id)
        entries = await assembler.evolutions_for(record)
        payload = {"data": [entry.to_payload() for entry in entries]}
        cache.set("evolutions", payload, ttl=ttl, id=pokemon_id)

    set_cache_headers(response, ttl, LINEAGE_STALE_SECONDS)
    return payload


@router.get("/pokemon/{pokemon_id}/details", response_model=PokemonDetailResponse)
@inject
async def get_details(
    pokemon_id: int,
    query_service: Annotated[
        PokemonQueryService, Depends(Provide[Container.pokemon_query_service])
    ],
    assembler: Annotated[LineageAssembler, Depends(Provide[Container.lineage_assembler])],
    cache: Annotated[Cache, Depends(Provide[Container.cache])],
    config: Annotated[PokedexConfig, Depends(Provide[Container.config])],
    response: Response,
) -> dict:
    """A Pokémon with evolutions, moves, stat ranges and defensive matchups."""
    ttl = config.cache.record_ttl
    payload = cache.get("pokemon_details", id=pokemon_id)
    if payload is None:
        record = await require_pokemon(query_service, pokemon_id)
        payload = await assembler.assemble(record)
        cache.set("pokemon_details", payload, ttl=ttl, id=pokemon_id)

    set_cache_headers(response, ttl, ttl * 5)
    return payload


@router.get("/moves/{dex_index}", response_model=MovesResponse)
@inject
async def get_moves(
    dex_index: int,
    config: Annotated[PokedexConfig, Depends(Provide[Container.config])],
    response: Response,
) -> dict:
    """Learnset for a Pokédex number; unknown numbers return an empty list."""
    set_cache_headers(response, config.cache.lineage_ttl)
    return {"data": [move.model_dump(exclude_none=True) for move in moves_for(dex_index)]}
