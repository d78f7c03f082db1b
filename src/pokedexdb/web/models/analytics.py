"""Aggregate statistics API models."""

from pokedexdb.web.models.base import CamelModel


class TypeAverageStats(CamelModel):
    """Mean base stats for one primary type."""

    type: str
    count: int
    avg_hp: float
    avg_attack: float
    avg_defense: float
    avg_sp_atk: float
    avg_sp_def: float
    avg_speed: float


class TypeCount(CamelModel):
    """Number of records with one primary type."""

    type: str
    count: int


class TypeDistributionResponse(CamelModel):
    """Response for the primary type distribution."""

    type_distribution: list[TypeCount]


class GrowthRateCount(CamelModel):
    """Number of records with one growth rate."""

    name: str
    count: int


class GrowthRatesResponse(CamelModel):
    """Response for the growth rate distribution."""

    data: list[GrowthRateCount]


class BaseExpByType(CamelModel):
    """Mean base experience for one primary type."""

    type: str
    avg_exp: int


class BaseExpResponse(CamelModel):
    """Response for mean base experience by type."""

    data: list[BaseExpByType]
