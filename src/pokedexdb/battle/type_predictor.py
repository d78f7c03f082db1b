"""Rule-based type guess from a stat spread.

The rules are evaluated top to bottom and the first match wins, so more
specific spreads must come first.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class StatSpread(BaseModel):
    """Six base stats for a hypothetical Pokémon."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    hp: int = Field(ge=1, le=255)
    attack: int = Field(ge=1, le=255)
    defense: int = Field(ge=1, le=255)
    sp_atk: int = Field(ge=1, le=255)
    sp_def: int = Field(ge=1, le=255)
    speed: int = Field(ge=1, le=255)


class TypePrediction(BaseModel):
    """Most likely primary type with a confidence percentage."""

    type: str
    confidence: int


def predict_type(stats: StatSpread) -> TypePrediction:
    """Guess the most likely primary type and a confidence percentage."""
    hp, attack, defense = stats.hp, stats.attack, stats.defense
    sp_atk, sp_def, speed = stats.sp_atk, stats.sp_def, stats.speed
    bulk = (defense + sp_def) / 2

    if sp_atk > 100 and speed > 90:
        if sp_atk > attack * 1.5:
            return TypePrediction(type="Electric", confidence=85)
        return TypePrediction(type="Psychic", confidence=80)

    if attack > 100 and defense > 90:
        if attack > sp_atk * 1.5:
            return TypePrediction(type="Fighting", confidence=85)
        return TypePrediction(type="Rock", confidence=75)

    if bulk > 100:
        if hp > 100:
            return TypePrediction(type="Steel", confidence=80)
        return TypePrediction(type="Rock", confidence=75)

    if speed > 110:
        if attack > sp_atk:
            return TypePrediction(type="Flying", confidence=80)
        return TypePrediction(type="Electric", confidence=75)

    if sp_atk > 90 and bulk > 80:
        return TypePrediction(type="Dragon", confidence=82)

    if attack > 100:
        if speed > 80:
            return TypePrediction(type="Dark", confidence=78)
        return TypePrediction(type="Fighting", confidence=75)

    if sp_atk > 90:
        if sp_def > defense:
            return TypePrediction(type="Fairy", confidence=75)
        return TypePrediction(type="Fire", confidence=80)

    if defense > 90:
        return TypePrediction(type="Steel", confidence=72)

    if hp > 100:
        return TypePrediction(type="Normal", confidence=70)

    return TypePrediction(type="Normal", confidence=65)
