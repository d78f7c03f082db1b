"""Level-100 stat ranges from base stats.

The minimum assumes 0 IVs, 0 EVs and a hindering nature; the maximum
assumes 31 IVs, 252 EVs (63 stat points) and a boosting nature. Each
floor is taken exactly where the game formula takes it.
"""

import math
from dataclasses import dataclass

from pydantic.alias_generators import to_camel

from pokedexdb.pokemon.models import STAT_FIELDS, Pokemon

LEVEL = 100
MAX_IV = 31
MAX_EV_POINTS = 63
HINDERING_NATURE = 0.9
BOOSTING_NATURE = 1.1


@dataclass(frozen=True)
class RealizedStatRange:
    """Lowest and highest value a stat can reach at level 100."""

    min: int
    max: int

    def to_payload(self) -> dict[str, int]:
        """Serialize as a min/max mapping."""
        return {"min": self.min, "max": self.max}


def stat_range(base: int, is_hp: bool = False) -> RealizedStatRange:
    """Compute the realized min/max of one stat at level 100."""
    low = math.floor(2 * base * LEVEL / 100)
    high = math.floor((2 * base + MAX_IV + MAX_EV_POINTS) * LEVEL / 100)
    if is_hp:
        return RealizedStatRange(min=low + LEVEL + 10, max=high + LEVEL + 10)
    return RealizedStatRange(
        min=math.floor((low + 5) * HINDERING_NATURE),
        max=math.floor((high + 5) * BOOSTING_NATURE),
    )


def stat_ranges(record: Pokemon) -> dict[str, RealizedStatRange]:
    """Ranges for all six base stats of a record, keyed by stat field."""
    return {stat: stat_range(getattr(record, stat), is_hp=stat == "hp") for stat in STAT_FIELDS}


def stat_ranges_payload(record: Pokemon) -> dict[str, dict[str, int]]:
    """Stat ranges keyed by the camelCase stat names used on the wire."""
    return {to_camel(stat): bounds.to_payload() for stat, bounds in stat_ranges(record).items()}
