"""Type matchup calculations built on the static chart.

Dual-type defence multiplies the two per-type factors. The team tally is
different: it counts each member's type slots on their own, so a member
whose two types are both weak to an attack adds two weak counts.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field

from pokedexdb.battle.type_chart import CHART, NEUTRAL, TYPES, canonical_type
from pokedexdb.errors import ValidationFailure

MAX_TEAM_SIZE = 6


def effectiveness(attacking: str, defending: str) -> float:
    """Damage multiplier of an attacking type against one defending type."""
    return CHART.get(attacking, {}).get(defending, NEUTRAL)


def defensive_multiplier(attacking: str, type1: str, type2: str | None = None) -> float:
    """Combined multiplier an attacking type deals to a (type1, type2) defender."""
    multiplier = effectiveness(attacking, type1)
    if type2:
        multiplier *= effectiveness(attacking, type2)
    return multiplier


@dataclass
class DefensiveProfile:
    """How every attacking type fares against one type combination."""

    multipliers: dict[str, float]
    weak_to: list[str] = field(default_factory=list)
    resistant_to: list[str] = field(default_factory=list)
    immune_to: list[str] = field(default_factory=list)

    def to_payload(self) -> dict:
        """Serialize with camelCase keys."""
        return {
            "multipliers": self.multipliers,
            "weakTo": self.weak_to,
            "resistantTo": self.resistant_to,
            "immuneTo": self.immune_to,
        }


def defensive_profile(type1: str, type2: str | None = None) -> DefensiveProfile:
    """Classify all 18 attacking types against a defender's type pair."""
    profile = DefensiveProfile(multipliers={})
    for attacking in TYPES:
        multiplier = defensive_multiplier(attacking, type1, type2)
        profile.multipliers[attacking] = multiplier
        if multiplier == 0:
            profile.immune_to.append(attacking)
        elif multiplier > 1:
            profile.weak_to.append(attacking)
        elif multiplier < 1:
            profile.resistant_to.append(attacking)
    return profile


@dataclass
class TeamTally:
    """Counts of team type slots weak, resistant and immune to one attacking type."""

    weak: int = 0
    resistant: int = 0
    immune: int = 0

    def to_payload(self) -> dict[str, int]:
        """Serialize the three counts."""
        return {"weak": self.weak, "resistant": self.resistant, "immune": self.immune}


def team_analysis(roster: Sequence[tuple[str, str | None]]) -> dict[str, TeamTally]:
    """Tally a roster's type slots against each attacking type.

    Args:
        roster: Up to six (type1, type2) pairs

    Raises:
        ValidationFailure: If the roster has more than six members
    """
    if len(roster) > MAX_TEAM_SIZE:
        raise ValidationFailure(f"A team has at most {MAX_TEAM_SIZE} members, got {len(roster)}")

    analysis = {attacking: TeamTally() for attacking in TYPES}
    for type1, type2 in roster:
        slots = [type1] if not type2 else [type1, type2]
        for slot in slots:
            for attacking in TYPES:
                multiplier = effectiveness(attacking, slot)
                tally = analysis[attacking]
                if multiplier == 0:
                    tally.immune += 1
                elif multiplier > 1:
                    tally.weak += 1
                elif multiplier < 1:
                    tally.resistant += 1
    return analysis


def require_type(name: str | None, parameter: str) -> str:
    """Canonicalize a type name from a request or raise ValidationFailure."""
    if not name:
        raise ValidationFailure(f"{parameter} is required")
    canonical = canonical_type(name)
    if canonical is None:
        raise ValidationFailure(f"Unknown type '{name}' for {parameter}")
    return canonical

