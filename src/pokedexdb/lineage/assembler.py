"""Enriched record view joining a Pokémon with its lineage tables."""

from dataclasses import dataclass
from typing import Any

from pokedexdb.battle.effectiveness import defensive_profile
from pokedexdb.battle.stat_ranges import stat_ranges_payload
from pokedexdb.lineage.chains import EvolutionStep, chain_for
from pokedexdb.lineage.learnsets import PokemonMove, moves_for
from pokedexdb.pokemon.models import Pokemon, PokemonRecord
from pokedexdb.pokemon.queries import PokemonQueryService


@dataclass
class EvolutionEntry:
    """A chain step resolved to a stored record."""

    step: EvolutionStep
    pokemon: Pokemon

    def to_payload(self) -> dict[str, Any]:
        """Serialize the step beside the record it resolved to."""
        return {
            "step": self.step.model_dump(exclude_none=True),
            "pokemon": PokemonRecord.from_row(self.pokemon).to_json(),
        }


class LineageAssembler:
    """Builds evolution lists and the full detail view for a record."""

    def __init__(self, query_service: PokemonQueryService):
        self.query_service = query_service

    async def evolutions_for(self, record: Pokemon) -> list[EvolutionEntry]:
        """Resolve the record's evolution chain to stored records.

        Steps with no stored record are left out. When forms share a
        Pokédex number the one with the lowest id represents it.
        """
        chain = chain_for(record.dex_index)
        if not chain:
            return []

        rows = await self.query_service.get_by_indices(step.index for step in chain)
        by_index: dict[int, Pokemon] = {}
        for row in rows:
            by_index.setdefault(row.dex_index, row)

        return [
            EvolutionEntry(step=step, pokemon=by_index[step.index])
            for step in chain
            if step.index in by_index
        ]

    def moves_for(self, dex_index: int) -> list[PokemonMove]:
        """Learnset for a Pokédex number, empty when none is known."""
        return moves_for(dex_index)

    async def assemble(self, record: Pokemon) -> dict[str, Any]:
        """Full detail view: record, evolutions, moves, stat ranges and defences."""
        evolutions = await self.evolutions_for(record)
        return {
            "pokemon": PokemonRecord.from_row(record).to_json(),
            "evolutions": [entry.to_payload() for entry in evolutions],
            "moves": [
                move.model_dump(exclude_none=True) for move in self.moves_for(record.dex_index)
            ],
            "statRanges": stat_ranges_payload(record),
            "defenses": defensive_profile(record.type1, record.type2).to_payload(),
        }
