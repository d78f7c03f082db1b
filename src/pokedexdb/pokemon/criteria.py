"""Typed filter criteria for the Pokémon list query."""

import math
from dataclasses import dataclass

from pydantic import BaseModel, Field, field_validator, model_validator

from pokedexdb.pokemon.models import STAT_FIELDS, Pokemon

STAT_MIN = 0
STAT_MAX = 255


class StatRange(BaseModel):
    """Inclusive bounds for one base stat. Either side may be open."""

    min: int | None = Field(default=None, ge=STAT_MIN, le=STAT_MAX)
    max: int | None = Field(default=None, ge=STAT_MIN, le=STAT_MAX)

    @model_validator(mode="after")
    def check_order(self) -> "StatRange":
        """Reject a minimum above the maximum."""
        if self.min is not None and self.max is not None and self.min > self.max:
            raise ValueError(f"min {self.min} is greater than max {self.max}")
        return self

    def effective_bounds(self) -> tuple[int | None, int | None]:
        """Bounds that actually constrain a stat.

        A minimum of 0 or a maximum of 255 admits every value, so it is dropped.
        """
        low = self.min if self.min is not None and self.min > STAT_MIN else None
        high = self.max if self.max is not None and self.max < STAT_MAX else None
        return low, high


class PokemonCriteria(BaseModel):
    """Filter, page and page-size parameters for the list query."""

    search: str | None = None
    type1: str | None = None
    type2: str | None = None
    egg_group: str | None = None
    stat_ranges: dict[str, StatRange] = Field(default_factory=dict)
    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=24, ge=1, le=1000)

    @field_validator("search", "type1", "type2", "egg_group")
    @classmethod
    def blank_to_none(cls, v: str | None) -> str | None:
        """Treat blank text filters as absent."""
        if v is None:
            return None
        v = v.strip()
        return v or None

    @field_validator("stat_ranges")
    @classmethod
    def known_stats(cls, v: dict[str, StatRange]) -> dict[str, StatRange]:
        """Reject stat names that are not base stats."""
        unknown = sorted(set(v) - set(STAT_FIELDS))
        if unknown:
            raise ValueError(f"Unknown stat(s): {', '.join(unknown)}")
        return v

    @property
    def offset(self) -> int:
        """Rows to skip before this page."""
        return (self.page - 1) * self.page_size

    def cache_signature(self) -> dict:
        """Every parameter that shapes the result, as plain data."""
        return self.model_dump(mode="json", exclude_none=True)


@dataclass
class PokemonPage:
    """One page of query results with the totals needed to paginate."""

    records: list[Pokemon]
    total: int
    page: int
    page_size: int

    @property
    def total_pages(self) -> int:
        """Page count at this page size; 0 when nothing matched."""
        return math.ceil(self.total / self.page_size)
