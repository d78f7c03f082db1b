"""Type matchup, team analysis and prediction API models."""

from pydantic import Field

from pokedexdb.web.models.base import CamelModel
from pokedexdb.web.models.pokemon import DefensiveProfileModel


class EffectivenessResponse(CamelModel):
    """Response for a single type matchup."""

    attacking: str
    defending: str
    multiplier: float


class TypeDefensesResponse(DefensiveProfileModel):
    """Response for the defensive profile of a type pair."""

    type1: str
    type2: str | None = None


class TeamAnalysisRequest(CamelModel):
    """Request body for team analysis."""

    pokemon_ids: list[int] = Field(..., description="Storage ids of up to six team members")


class TeamMember(CamelModel):
    """A team member with its defensive profile."""

    id: int
    name: str
    type1: str
    type2: str | None = None
    defenses: DefensiveProfileModel


class TeamTallyModel(CamelModel):
    """Type slot counts against one attacking type."""

    weak: int
    resistant: int
    immune: int


class TeamAnalysisResponse(CamelModel):
    """Per-attacking-type counts of weak, resistant and immune type slots."""

    members: list[TeamMember]
    analysis: dict[str, TeamTallyModel]
