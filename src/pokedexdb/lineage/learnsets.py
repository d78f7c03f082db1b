"""Static move learnsets keyed by Pokédex number."""

from typing import Literal

from pydantic import BaseModel, ConfigDict

MoveMethod = Literal["level-up", "tm", "egg", "tutor", "machine", "other"]


class PokemonMove(BaseModel):
    """A move and how a species learns it."""

    model_config = ConfigDict(frozen=True)

    name: str
    method: MoveMethod
    level: int | None = None
    detail: str | None = None


def _level(name: str, level: int) -> PokemonMove:
    return PokemonMove(name=name, method="level-up", level=level)


def _tm(name: str, detail: str) -> PokemonMove:
    return PokemonMove(name=name, method="tm", detail=detail)


LEARNSETS: dict[int, tuple[PokemonMove, ...]] = {
    1: (
        _level("Tackle", 1),
        _level("Growl", 3),
        _level("Leech Seed", 7),
        _level("Vine Whip", 9),
    ),
    4: (
        _level("Scratch", 1),
        _level("Ember", 7),
        _level("Smokescreen", 10),
        _tm("Flamethrower", "TM35"),
    ),
    7: (
        _level("Tackle", 1),
        _level("Bubble", 4),
        _level("Withdraw", 7),
        _tm("Surf", "HM03/TM??"),
    ),
    25: (
        _level("Thunder Shock", 1),
        _level("Quick Attack", 11),
        _tm("Thunderbolt", "TM24"),
    ),
    133: (
        _level("Tackle", 1),
        _level("Bite", 5),
        _tm("Swift", "TM??"),
    ),
}


def moves_for(dex_index: int) -> list[PokemonMove]:
    """Return the learnset for a Pokédex number; unknown numbers have none."""
    return list(LEARNSETS.get(dex_index, ()))
