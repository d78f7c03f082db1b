"""Type matchup, team analysis and type prediction endpoints."""

import logging
from typing import Annotated

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, Response

from pokedexdb.battle.effectiveness import (
    MAX_TEAM_SIZE,
    defensive_profile,
    effectiveness,
    require_type,
    team_analysis,
)
from pokedexdb.battle.type_chart import TYPES
from pokedexdb.battle.type_predictor import StatSpread, TypePrediction, predict_type
from pokedexdb.errors import NotFoundError, ValidationFailure
from pokedexdb.pokemon.queries import PokemonQueryService
from pokedexdb.web.core.container import Container
from pokedexdb.web.core.http import set_cache_headers
from pokedexdb.web.models.battle import (
    EffectivenessResponse,
    TeamAnalysisRequest,
    TeamAnalysisResponse,
    TypeDefensesResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()

# The chart is static, so matchup responses can be cached for a day
STATIC_MAX_AGE = 86400


@router.get("/types", response_model=list[str])
async def list_types(response: Response) -> list[str]:
    """All known type names in chart order."""
    set_cache_headers(response, STATIC_MAX_AGE)
    return list(TYPES)


@router.get("/types/effectiveness", response_model=EffectivenessResponse)
async def get_effectiveness(
    attacking: str,
    defending: str,
    response: Response,
) -> dict:
    """Damage multiplier of one attacking type against one defending type."""
    attacking_type = require_type(attacking, "attacking")
    defending_type = require_type(defending, "defending")
    set_cache_headers(response, STATIC_MAX_AGE)
    return {
        "attacking": attacking_type,
        "defending": defending_type,
        "multiplier": effectiveness(attacking_type, defending_type),
    }


@router.get("/types/defenses", response_model=TypeDefensesResponse)
async def get_defenses(
    type1: str,
    response: Response,
    type2: str | None = None,
) -> dict:
    """Weaknesses, resistances and immunities of a single or dual type."""
    primary = require_type(type1, "type1")
    secondary = require_type(type2, "type2") if type2 else None
    set_cache_headers(response, STATIC_MAX_AGE)
    return {
        "type1": primary,
        "type2": secondary,
        **defensive_profile(primary, secondary).to_payload(),
    }


@router.post("/types/team-analysis", response_model=TeamAnalysisResponse)
@inject
async def analyze_team(
    request: TeamAnalysisRequest,
    query_service: Annotated[
        PokemonQueryService, Depends(Provide[Container.pokemon_query_service])
    ],
) -> dict:
    """Count how many team type slots are weak, resistant or immune to each attacking type."""
    if len(request.pokemon_ids) > MAX_TEAM_SIZE:
        raise ValidationFailure(f"A team has at most {MAX_TEAM_SIZE} members")

    records = await query_service.get_by_ids(request.pokemon_ids)
    missing = [pokemon_id for pokemon_id in request.pokemon_ids if pokemon_id not in records]
    if missing:
        raise NotFoundError(f"Pokemon not found: {', '.join(str(i) for i in missing)}")

    members = [records[pokemon_id] for pokemon_id in request.pokemon_ids]
    analysis = team_analysis([(member.type1, member.type2) for member in members])
    return {
        "members": [
            {
                "id": member.id,
                "name": member.name,
                "type1": member.type1,
                "type2": member.type2,
                "defenses": defensive_profile(member.type1, member.type2).to_payload(),
            }
            for member in members
        ],
        "analysis": {attacking: tally.to_payload() for attacking, tally in analysis.items()},
    }


@router.post("/predict/type", response_model=TypePrediction)
async def predict(stats: StatSpread) -> TypePrediction:
    """Guess a primary type from a base stat spread."""
    return predict_type(stats)
