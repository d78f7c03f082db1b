"""Breeding compatibility from egg groups.

Rules are checked in a fixed order: the Undiscovered group blocks breeding
outright, Ditto breeds with anything else, and otherwise the parents must
share at least one group.
"""

from dataclasses import dataclass, field
from enum import StrEnum

from pokedexdb.utils.parsing import leading_int

STEPS_PER_EGG_CYCLE = 257

UNDISCOVERED = "undiscovered"
DITTO = "ditto"


class BreedingStatus(StrEnum):
    """Outcome of an egg group comparison."""

    CANNOT_BREED = "cannot_breed"
    COMPATIBLE_VIA_DITTO = "compatible_via_ditto"
    COMPATIBLE = "compatible"
    INCOMPATIBLE = "incompatible"


@dataclass
class BreedingResult:
    """Breeding verdict for a pair, with egg timing when they are compatible."""

    status: BreedingStatus
    shared_groups: list[str] = field(default_factory=list)
    estimated_egg_cycles: int | None = None
    steps_to_hatch: int | None = None

    @property
    def compatible(self) -> bool:
        """Whether the pair can produce an egg."""
        return self.status in (BreedingStatus.COMPATIBLE, BreedingStatus.COMPATIBLE_VIA_DITTO)

    @property
    def message(self) -> str:
        """Human-readable verdict."""
        if self.status is BreedingStatus.CANNOT_BREED:
            return "Cannot Breed - Undiscovered Egg Group"
        if self.status is BreedingStatus.COMPATIBLE_VIA_DITTO:
            return "Compatible - Ditto can breed with most Pokémon!"
        if self.status is BreedingStatus.COMPATIBLE:
            return f"Compatible - Shared Egg Group(s): {', '.join(self.shared_groups)}"
        return "Incompatible - No Shared Egg Groups"

    def to_payload(self) -> dict:
        """Serialize with camelCase keys."""
        return {
            "status": self.status.value,
            "compatible": self.compatible,
            "message": self.message,
            "sharedGroups": self.shared_groups,
            "estimatedEggCycles": self.estimated_egg_cycles,
            "stepsToHatch": self.steps_to_hatch,
        }


def parse_egg_groups(egg_groups: str | None) -> list[str]:
    """Split a comma-joined egg group string into lowercase names."""
    if not egg_groups:
        return []
    groups = []
    for token in egg_groups.split(","):
        name = token.strip().lower()
        if name and name not in groups:
            groups.append(name)
    return groups


def parse_egg_cycles(egg_cycles: str | None) -> int:
    """Read the leading integer of an egg-cycle string, or 0 if there is none."""
    return leading_int(egg_cycles)


def check_compatibility(
    egg_groups_1: str | None,
    egg_groups_2: str | None,
    egg_cycles_1: str | None = None,
    egg_cycles_2: str | None = None,
) -> BreedingResult:
    """Decide whether two parents can breed and estimate hatch time if so."""
    groups_1 = parse_egg_groups(egg_groups_1)
    groups_2 = parse_egg_groups(egg_groups_2)

    if UNDISCOVERED in groups_1 or UNDISCOVERED in groups_2:
        return BreedingResult(status=BreedingStatus.CANNOT_BREED)

    shared = [group for group in groups_1 if group in groups_2]
    if DITTO in groups_1 or DITTO in groups_2:
        status = BreedingStatus.COMPATIBLE_VIA_DITTO
    elif shared:
        status = BreedingStatus.COMPATIBLE
    else:
        return BreedingResult(status=BreedingStatus.INCOMPATIBLE)

    cycles = max(parse_egg_cycles(egg_cycles_1), parse_egg_cycles(egg_cycles_2))
    return BreedingResult(
        status=status,
        shared_groups=shared,
        estimated_egg_cycles=cycles,
        steps_to_hatch=cycles * STEPS_PER_EGG_CYCLE,
    )
