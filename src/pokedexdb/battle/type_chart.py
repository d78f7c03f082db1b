"""Type effectiveness chart for the 18 Gen 6+ types.

Only pairs that modify damage are listed; any pair not present is neutral.
``CHART[attacking][defending]`` gives the multiplier.
"""

NEUTRAL = 1.0
SUPER_EFFECTIVE = 2.0
NOT_VERY_EFFECTIVE = 0.5
NO_EFFECT = 0.0

TYPES: tuple[str, ...] = (
    "Normal",
    "Fire",
    "Water",
    "Electric",
    "Grass",
    "Ice",
    "Fighting",
    "Poison",
    "Ground",
    "Flying",
    "Psychic",
    "Bug",
    "Rock",
    "Ghost",
    "Dragon",
    "Dark",
    "Steel",
    "Fairy",
)

_SE, _NVE, _NE = SUPER_EFFECTIVE, NOT_VERY_EFFECTIVE, NO_EFFECT

CHART: dict[str, dict[str, float]] = {
    "Normal": {"Rock": _NVE, "Ghost": _NE, "Steel": _NVE},
    "Fire": {
        "Fire": _NVE,
        "Water": _NVE,
        "Grass": _SE,
        "Ice": _SE,
        "Bug": _SE,
        "Rock": _NVE,
        "Dragon": _NVE,
        "Steel": _SE,
    },
    "Water": {
        "Fire": _SE,
        "Water": _NVE,
        "Grass": _NVE,
        "Ground": _SE,
        "Rock": _SE,
        "Dragon": _NVE,
    },
    "Electric": {
        "Water": _SE,
        "Electric": _NVE,
        "Grass": _NVE,
        "Ground": _NE,
        "Flying": _SE,
        "Dragon": _NVE,
    },
    "Grass": {
        "Fire": _NVE,
        "Water": _SE,
        "Grass": _NVE,
        "Poison": _NVE,
        "Ground": _SE,
        "Flying": _NVE,
        "Bug": _NVE,
        "Rock": _SE,
        "Dragon": _NVE,
        "Steel": _NVE,
    },
    "Ice": {
        "Fire": _NVE,
        "Water": _NVE,
        "Grass": _SE,
        "Ice": _NVE,
        "Ground": _SE,
        "Flying": _SE,
        "Dragon": _SE,
        "Steel": _NVE,
    },
    "Fighting": {
        "Normal": _SE,
        "Ice": _SE,
        "Poison": _NVE,
        "Flying": _NVE,
        "Psychic": _NVE,
        "Bug": _NVE,
        "Rock": _SE,
        "Ghost": _NE,
        "Dark": _SE,
        "Steel": _SE,
        "Fairy": _NVE,
    },
    "Poison": {
        "Grass": _SE,
        "Poison": _NVE,
        "Ground": _NVE,
        "Rock": _NVE,
        "Ghost": _NVE,
        "Steel": _NE,
        "Fairy": _SE,
    },
    "Ground": {
        "Fire": _SE,
        "Electric": _SE,
        "Grass": _NVE,
        "Poison": _SE,
        "Flying": _NE,
        "Bug": _NVE,
        "Rock": _SE,
        "Steel": _SE,
    },
    "Flying": {
        "Electric": _NVE,
        "Grass": _SE,
        "Fighting": _SE,
        "Bug": _SE,
        "Rock": _NVE,
        "Steel": _NVE,
    },
    "Psychic": {"Fighting": _SE, "Poison": _SE, "Psychic": _NVE, "Dark": _NE, "Steel": _NVE},
    "Bug": {
        "Fire": _NVE,
        "Grass": _SE,
        "Fighting": _NVE,
        "Poison": _NVE,
        "Flying": _NVE,
        "Psychic": _SE,
        "Ghost": _NVE,
        "Dark": _SE,
        "Steel": _NVE,
        "Fairy": _NVE,
    },
    "Rock": {
        "Fire": _SE,
        "Ice": _SE,
        "Fighting": _NVE,
        "Ground": _NVE,
        "Flying": _SE,
        "Bug": _SE,
        "Steel": _NVE,
    },
    "Ghost": {"Normal": _NE, "Psychic": _SE, "Ghost": _SE, "Dark": _NVE},
    "Dragon": {"Dragon": _SE, "Steel": _NVE, "Fairy": _NE},
    "Dark": {"Fighting": _NVE, "Psychic": _SE, "Ghost": _SE, "Dark": _NVE, "Fairy": _NVE},
    "Steel": {
        "Fire": _NVE,
        "Water": _NVE,
        "Electric": _NVE,
        "Ice": _SE,
        "Rock": _SE,
        "Steel": _NVE,
        "Fairy": _SE,
    },
    "Fairy": {
        "Fire": _NVE,
        "Fighting": _SE,
        "Poison": _NVE,
        "Dragon": _SE,
        "Dark": _SE,
        "Steel": _NVE,
    },
}

_CANONICAL = {name.lower(): name for name in TYPES}


def canonical_type(name: str) -> str | None:
    """Return the chart spelling of a type name, matched case-insensitively."""
    return _CANONICAL.get(name.strip().lower())
