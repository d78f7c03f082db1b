"""Database and response models for the pokemon domain."""

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict
from pydantic import Field as PydanticField
from pydantic.alias_generators import to_camel
from sqlalchemy import Index
from sqlmodel import Field, SQLModel

# Base stats in display order; `total` is stored separately
STAT_FIELDS: tuple[str, ...] = ("hp", "attack", "defense", "sp_atk", "sp_def", "speed")


class Pokemon(SQLModel, table=True):
    """A single Pokémon (or alternate form) as imported from CSV.

    ``dex_index`` is the National Pokédex number. Alternate forms share it,
    so it is indexed but not unique.
    """

    __tablename__: str = "pokemon"  # type: ignore[assignment]

    id: int | None = Field(default=None, primary_key=True)
    dex_index: int = Field(index=True)

    name: str = Field(index=True)
    pokemon: str = ""
    type: str = ""
    type1: str = Field(index=True)
    type2: str | None = Field(default=None, index=True)

    hp: int = 0
    attack: int = 0
    defense: int = 0
    sp_atk: int = 0
    sp_def: int = 0
    speed: int = 0
    total: int = 0

    species: str = ""
    height: str = ""
    weight: str = ""
    abilities: str = ""
    ev_yield: str = ""
    catch_rate: str = ""
    base_friendship: str = ""
    base_exp: str = ""
    growth_rate: str = ""
    egg_groups: str = ""
    gender: str = ""
    egg_cycles: str = ""
    image: str = ""
    unnamed32: str | None = None
    unnamed33: str | None = None

    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    __table_args__ = (Index("idx_pokemon_index_id", "dex_index", "id"),)

    def stat_sum(self) -> int:
        """Sum of the six base stats."""
        return sum(getattr(self, stat) for stat in STAT_FIELDS)


class PokemonRecord(BaseModel):
    """Wire representation of a Pokémon with camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )

    id: int
    dex_index: int = PydanticField(alias="index")
    name: str
    pokemon: str = ""
    type: str = ""
    type1: str
    type2: str | None = None
    hp: int
    attack: int
    defense: int
    sp_atk: int
    sp_def: int
    speed: int
    total: int
    species: str = ""
    height: str = ""
    weight: str = ""
    abilities: str = ""
    ev_yield: str = ""
    catch_rate: str = ""
    base_friendship: str = ""
    base_exp: str = ""
    growth_rate: str = ""
    egg_groups: str = ""
    gender: str = ""
    egg_cycles: str = ""
    image: str = ""
    unnamed32: str | None = None
    unnamed33: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_row(cls, row: Pokemon) -> "PokemonRecord":
        """Convert a table row into its wire form."""
        return cls.model_validate(row)

    def to_json(self) -> dict:
        """Dump to a JSON-ready dict with camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)
