"""Pokémon list, lookup and import endpoints."""

import logging
from typing import Annotated

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, File, Query, Response, UploadFile
from pydantic import ValidationError

from pokedexdb.battle.stat_ranges import stat_ranges_payload
from pokedexdb.config import PokedexConfig
from pokedexdb.errors import ImportFailure, NotFoundError, ValidationFailure
from pokedexdb.pokemon.criteria import PokemonCriteria, StatRange
from pokedexdb.pokemon.importer import PokemonImporter
from pokedexdb.pokemon.models import Pokemon, PokemonRecord
from pokedexdb.pokemon.queries import PokemonQueryService
from pokedexdb.utils.cache import Cache
from pokedexdb.web.core.container import Container
from pokedexdb.web.core.http import NO_STORE, set_cache_headers
from pokedexdb.web.models.pokemon import (
    ImportResponse,
    PokemonListResponse,
    StatRangesResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/pokemon")


def describe_validation_error(error: ValidationError) -> str:
    """Flatten pydantic errors into one readable line."""
    return "; ".join(
        f"{'.'.join(str(part) for part in err['loc']) or 'value'}: {err['msg']}"
        for err in error.errors()
    )


@inject
def build_criteria(
    config: Annotated[PokedexConfig, Depends(Provide[Container.config])],
    search: str | None = None,
    type1: str | None = None,
    type2: str | None = None,
    egg_group: Annotated[str | None, Query(alias="eggGroup")] = None,
    min_hp: Annotated[int | None, Query(alias="minHp")] = None,
    max_hp: Annotated[int | None, Query(alias="maxHp")] = None,
    min_attack: Annotated[int | None, Query(alias="minAttack")] = None,
    max_attack: Annotated[int | None, Query(alias="maxAttack")] = None,
    min_defense: Annotated[int | None, Query(alias="minDefense")] = None,
    max_defense: Annotated[int | None, Query(alias="maxDefense")] = None,
    min_sp_atk: Annotated[int | None, Query(alias="minSpAtk")] = None,
    max_sp_atk: Annotated[int | None, Query(alias="maxSpAtk")] = None,
    min_sp_def: Annotated[int | None, Query(alias="minSpDef")] = None,
    max_sp_def: Annotated[int | None, Query(alias="maxSpDef")] = None,
    min_speed: Annotated[int | None, Query(alias="minSpeed")] = None,
    max_speed: Annotated[int | None, Query(alias="maxSpeed")] = None,
    page: int = 1,
    limit: int | None = None,
) -> PokemonCriteria:
    """Collect list query parameters into validated criteria.

    Malformed numbers are rejected by FastAPI (422); well-formed values
    outside their domain raise ValidationFailure (400).
    """
    bounds = {
        "hp": (min_hp, max_hp),
        "attack": (min_attack, max_attack),
        "defense": (min_defense, max_defense),
        "sp_atk": (min_sp_atk, max_sp_atk),
        "sp_def": (min_sp_def, max_sp_def),
        "speed": (min_speed, max_speed),
    }
    try:
        ranges = {
            stat: StatRange(min=low, max=high)
            for stat, (low, high) in bounds.items()
            if low is not None or high is not None
        }
        return PokemonCriteria(
            search=search,
            type1=type1,
            type2=type2,
            egg_group=egg_group,
            stat_ranges=ranges,
            page=page,
            page_size=limit if limit is not None else config.query.default_page_size,
        )
    except ValidationError as e:
        raise ValidationFailure(
            f"Invalid filter parameters: {describe_validation_error(e)}"
        ) from e


async def require_pokemon(query_service: PokemonQueryService, pokemon_id: int) -> Pokemon:
    """Fetch a record or raise NotFoundError."""
    record = await query_service.get_by_id(pokemon_id)
    if record is None:
        raise NotFoundError("Pokemon not found")
    return record


@router.get("", response_model=PokemonListResponse)
@inject
async def list_pokemon(
    criteria: Annotated[PokemonCriteria, Depends(build_criteria)],
    query_service: Annotated[
        PokemonQueryService, Depends(Provide[Container.pokemon_query_service])
    ],
    cache: Annotated[Cache, Depends(Provide[Container.cache])],
    config: Annotated[PokedexConfig, Depends(Provide[Container.config])],
    response: Response,
) -> dict:
    """List Pokémon matching the filters, ordered by Pokédex number."""
    ttl = config.cache.list_ttl
    signature = criteria.cache_signature()
    payload = cache.get("pokemon_list", **signature)
    if payload is None:
        page = await query_service.search(criteria)
        payload = {
            "data": [PokemonRecord.from_row(row).to_json() for row in page.records],
            "pagination": {
                "page": page.page,
                "limit": page.page_size,
                "total": page.total,
                "totalPages": page.total_pages,
            },
        }
        cache.set("pokemon_list", payload, ttl=ttl, **signature)

    set_cache_headers(response, ttl, ttl * 3)
    return payload


@router.post("/import-csv", response_model=ImportResponse)
@inject
async def import_csv(
    importer: Annotated[PokemonImporter, Depends(Provide[Container.pokemon_importer])],
    response: Response,
    file: Annotated[UploadFile | None, File()] = None,
) -> dict:
    """Replace the whole Pokémon table with the rows of an uploaded CSV."""
    response.headers["Cache-Control"] = NO_STORE
    if file is None:
        raise ImportFailure("No file uploaded")

    raw = await file.read()
    try:
        text = raw.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise ImportFailure("CSV file must be UTF-8 encoded") from e

    logger.info("Importing pokemon from %s (%d bytes)", file.filename, len(raw))
    result = await importer.import_csv(text)
    return result.to_payload()


@router.get("/{pokemon_id}", response_model=PokemonRecord)
@inject
async def get_pokemon(
    pokemon_id: int,
    query_service: Annotated[
        PokemonQueryService, Depends(Provide[Container.pokemon_query_service])
    ],
    cache: Annotated[Cache, Depends(Provide[Container.cache])],
    config: Annotated[PokedexConfig, Depends(Provide[Container.config])],
    response: Response,
) -> dict:
    """Fetch a single Pokémon by storage id."""
    ttl = config.cache.record_ttl
    payload = cache.get("pokemon_record", id=pokemon_id)
    if payload is None:
        record = await require_pokemon(query_service, pokemon_id)
        payload = PokemonRecord.from_row(record).to_json()
        cache.set("pokemon_record", payload, ttl=ttl, id=pokemon_id)

    set_cache_headers(response, ttl, ttl * 5)
    return payload


@router.get("/{pokemon_id}/stat-ranges", response_model=StatRangesResponse)
@inject
async def get_stat_ranges(
    pokemon_id: int,
    query_service: Annotated[
        PokemonQueryService, Depends(Provide[Container.pokemon_query_service])
    ],
    config: Annotated[PokedexConfig, Depends(Provide[Container.config])],
    response: Response,
) -> dict:
    """Level-100 min/max for each base stat of a Pokémon."""
    record = await require_pokemon(query_service, pokemon_id)
    set_cache_headers(response, config.cache.record_ttl)
    return {"id": record.id, "name": record.name, "ranges": stat_ranges_payload(record)}
