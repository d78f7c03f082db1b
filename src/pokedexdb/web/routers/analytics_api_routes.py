"""Aggregate statistics endpoints."""

import logging
from typing import Annotated

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, Query, Response

from pokedexdb.analytics.aggregation import AggregationService, resolve_stat
from pokedexdb.config import PokedexConfig
from pokedexdb.pokemon.models import PokemonRecord
from pokedexdb.utils.cache import Cache
from pokedexdb.web.core.container import Container
from pokedexdb.web.core.http import set_cache_headers
from pokedexdb.web.models.analytics import (
    BaseExpResponse,
    GrowthRatesResponse,
    TypeAverageStats,
    TypeDistributionResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/pokemon")

AGGREGATE_STALE_SECONDS = 86400


@router.get("/stats", response_model=TypeAverageStats | TypeDistributionResponse)
@inject
async def get_stats(
    aggregation_service: Annotated[
        AggregationService, Depends(Provide[Container.aggregation_service])
    ],
    cache: Annotated[Cache, Depends(Provide[Container.cache])],
    config: Annotated[PokedexConfig, Depends(Provide[Container.config])],
    response: Response,
    type: Annotated[str | None, Query(description="Primary type to average")] = None,
) -> dict:
    """Average stats for one primary type, or the type distribution when no type is given."""
    ttl = config.cache.aggregate_ttl
    if type:
        payload = cache.get("type_averages", type=type)
        if payload is None:
            payload = await aggregation_service.type_average_stats(type)
            cache.set("type_averages", payload, ttl=ttl, type=type)
    else:
        payload = cache.get("type_distribution")
        if payload is None:
            distribution = await aggregation_service.type_distribution()
            payload = {
                "typeDistribution": [
                    {"type": type1, "count": count} for type1, count in distribution.items()
                ]
            }
            cache.set("type_distribution", payload, ttl=ttl)

    set_cache_headers(response, ttl, AGGREGATE_STALE_SECONDS)
    return payload


@router.get("/stats/growth-rates", response_model=GrowthRatesResponse)
@inject
async def get_growth_rates(
    aggregation_service: Annotated[
        AggregationService, Depends(Provide[Container.aggregation_service])
    ],
    cache: Annotated[Cache, Depends(Provide[Container.cache])],
    config: Annotated[PokedexConfig, Depends(Provide[Container.config])],
    response: Response,
) -> dict:
    """Number of Pokémon per growth rate."""
    ttl = config.cache.aggregate_ttl
    payload = cache.get("growth_rates")
    if payload is None:
        distribution = await aggregation_service.growth_rate_distribution()
        payload = {"data": [{"name": rate, "count": count} for rate, count in distribution.items()]}
        cache.set("growth_rates", payload, ttl=ttl)

    set_cache_headers(response, ttl, AGGREGATE_STALE_SECONDS)
    return payload


@router.get("/stats/base-exp", response_model=BaseExpResponse)
@inject
async def get_base_exp(
    aggregation_service: Annotated[
        AggregationService, Depends(Provide[Container.aggregation_service])
    ],
    cache: Annotated[Cache, Depends(Provide[Container.cache])],
    config: Annotated[PokedexConfig, Depends(Provide[Container.config])],
    response: Response,
) -> dict:
    """Rounded mean base experience per primary type."""
    ttl = config.cache.aggregate_ttl
    payload = cache.get("base_exp")
    if payload is None:
        averages = await aggregation_service.base_exp_by_type()
        payload = {"data": [{"type": type1, "avgExp": avg} for type1, avg in averages.items()]}
        cache.set("base_exp", payload, ttl=ttl)

    set_cache_headers(response, ttl, AGGREGATE_STALE_SECONDS)
    return payload


@router.get("/top", response_model=list[PokemonRecord])
@inject
async def get_top(
    aggregation_service: Annotated[
        AggregationService, Depends(Provide[Container.aggregation_service])
    ],
    cache: Annotated[Cache, Depends(Provide[Container.cache])],
    config: Annotated[PokedexConfig, Depends(Provide[Container.config])],
    response: Response,
    stat: str = "attack",
    limit: int | None = None,
) -> list[dict]:
    """Pokémon with the highest value of a stat, highest first."""
    if limit is None:
        limit = config.query.default_top_limit
    column = resolve_stat(stat)

    ttl = config.cache.top_ttl
    payload = cache.get("top", stat=column, limit=limit)
    if payload is None:
        rows = await aggregation_service.top_by_stat(column, limit)
        payload = [PokemonRecord.from_row(row).to_json() for row in rows]
        cache.set("top", payload, ttl=ttl, stat=column, limit=limit)

    set_cache_headers(response, ttl, ttl * 12)
    return payload
