"""Evolution families keyed by a family identifier.

Each family stores its chain once, ordered from the earliest stage. Lookup
by Pokédex number goes through ``MEMBER_FAMILY``, which is derived from the
chains so a member can never point at a chain it is not part of.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict

EvolutionTrigger = Literal["level", "item", "trade", "friendship", "stone", "other"]


class EvolutionStep(BaseModel):
    """One stage of an evolution chain."""

    model_config = ConfigDict(frozen=True)

    index: int
    trigger: EvolutionTrigger | None = None
    value: int | str | None = None


class EvolutionFamily(BaseModel):
    """A canonical evolution chain shared by every member."""

    model_config = ConfigDict(frozen=True)

    family_id: str
    chain: tuple[EvolutionStep, ...]

    @property
    def member_indices(self) -> tuple[int, ...]:
        """Pokédex numbers in chain order."""
        return tuple(step.index for step in self.chain)


def _family(family_id: str, *steps: tuple) -> EvolutionFamily:
    chain = []
    for step in steps:
        index, *rest = step
        trigger = rest[0] if rest else None
        value = rest[1] if len(rest) > 1 else None
        chain.append(EvolutionStep(index=index, trigger=trigger, value=value))
    return EvolutionFamily(family_id=family_id, chain=tuple(chain))


FAMILIES: dict[str, EvolutionFamily] = {
    family.family_id: family
    for family in (
        _family("bulbasaur", (1,), (2, "level", 16), (3, "level", 32)),
        _family("charmander", (4,), (5, "level", 16), (6, "level", 36)),
        _family("squirtle", (7,), (8, "level", 16), (9, "level", 36)),
        _family("caterpie", (10,), (11, "level", 7), (12, "level", 10)),
        _family(
            "pichu",
            (172,),
            (25, "friendship", "high"),
            (26, "stone", "Thunder Stone"),
        ),
        _family(
            "eevee",
            (133,),
            (134, "stone", "Water Stone"),
            (135, "stone", "Thunder Stone"),
            (136, "stone", "Fire Stone"),
        ),
    )
}


def _build_member_index(families: dict[str, EvolutionFamily]) -> dict[int, str]:
    members: dict[int, str] = {}
    for family in families.values():
        for index in family.member_indices:
            if index in members:
                raise ValueError(f"Pokédex number {index} belongs to two families")
            members[index] = family.family_id
    return members


MEMBER_FAMILY: dict[int, str] = _build_member_index(FAMILIES)


def family_for(dex_index: int) -> EvolutionFamily | None:
    """Return the family a Pokédex number belongs to, if any."""
    family_id = MEMBER_FAMILY.get(dex_index)
    return FAMILIES[family_id] if family_id is not None else None


def chain_for(dex_index: int) -> tuple[EvolutionStep, ...]:
    """Return the full evolution chain for a Pokédex number, or ()."""
    family = family_for(dex_index)
    return family.chain if family is not None else ()
