"""Grouped statistics over the whole Pokémon collection.

All operations are read-only and depend only on the stored table, so
results can be cached per operation and parameter set.
"""

import logging
from collections import defaultdict

from sqlalchemy import desc, func, select
from sqlalchemy.exc import SQLAlchemyError

from pokedexdb.database.core import CoreDatabaseService
from pokedexdb.errors import EmptyAggregateError, UpstreamFailure, ValidationFailure
from pokedexdb.pokemon.models import STAT_FIELDS, Pokemon
from pokedexdb.utils.parsing import leading_int, round_half_up

logger = logging.getLogger(__name__)

MAX_TOP_LIMIT = 100
UNKNOWN_GROWTH_RATE = "Unknown"

# Accepted spellings for top-N, lowercased
STAT_ALIASES: dict[str, str] = {
    "hp": "hp",
    "attack": "attack",
    "defense": "defense",
    "spatk": "sp_atk",
    "sp_atk": "sp_atk",
    "sp_def": "sp_def",
    "spdef": "sp_def",
    "speed": "speed",
    "total": "total",
}

# Response keys for type averages
AVERAGE_KEYS: dict[str, str] = {
    "hp": "avgHp",
    "attack": "avgAttack",
    "defense": "avgDefense",
    "sp_atk": "avgSpAtk",
    "sp_def": "avgSpDef",
    "speed": "avgSpeed",
}


def resolve_stat(stat: str) -> str:
    """Map a requested stat name to its column.

    Raises:
        ValidationFailure: If the name is not one of the rankable stats
    """
    column = STAT_ALIASES.get(stat.strip().lower())
    if column is None:
        raise ValidationFailure(
            f"Unknown stat '{stat}'. "
            "Expected one of: hp, attack, defense, spAtk, spDef, speed, total"
        )
    return column


class AggregationService:
    """Computes analytics aggregates from the Pokémon table."""

    def __init__(self, core_database: CoreDatabaseService):
        self.core_database = core_database

    async def type_average_stats(self, type1: str) -> dict[str, float | int | str]:
        """Mean of each base stat over records whose primary type is ``type1``.

        Raises:
            EmptyAggregateError: If no record has that primary type
        """
        stmt = select(
            func.count(),
            *(func.avg(getattr(Pokemon, stat)) for stat in STAT_FIELDS),
        ).where(Pokemon.type1 == type1)  # type: ignore[arg-type]

        async with self.core_database.get_async_db() as session:
            try:
                row = (await session.execute(stmt)).one()
            except SQLAlchemyError as e:
                logger.error("Error computing type averages for %s: %s", type1, e)
                raise UpstreamFailure("Failed to fetch stats") from e

        count, *averages = row
        if not count:
            raise EmptyAggregateError(f"No Pokemon with primary type '{type1}'")

        result: dict[str, float | int | str] = {"type": type1, "count": count}
        for stat, average in zip(STAT_FIELDS, averages, strict=True):
            result[AVERAGE_KEYS[stat]] = float(average)
        return result

    async def type_distribution(self) -> dict[str, int]:
        """Count of records per primary type."""
        stmt = select(Pokemon.type1, func.count()).group_by(Pokemon.type1)
        async with self.core_database.get_async_db() as session:
            try:
                rows = (await session.execute(stmt)).all()
            except SQLAlchemyError as e:
                logger.error("Error computing type distribution: %s", e)
                raise UpstreamFailure("Failed to fetch stats") from e
        return {type1: count for type1, count in rows}

    async def top_by_stat(self, stat: str, limit: int = 10) -> list[Pokemon]:
        """Records with the highest value of ``stat``, ties broken by lowest id.

        Raises:
            ValidationFailure: If the stat is unknown or limit is out of range
        """
        column_name = resolve_stat(stat)
        if not 1 <= limit <= MAX_TOP_LIMIT:
            raise ValidationFailure(f"limit must be between 1 and {MAX_TOP_LIMIT}")

        column = getattr(Pokemon, column_name)
        stmt = select(Pokemon).order_by(desc(column), Pokemon.id).limit(limit)  # type: ignore[arg-type]
        async with self.core_database.get_async_db() as session:
            try:
                return list((await session.execute(stmt)).scalars().all())
            except SQLAlchemyError as e:
                logger.error("Error fetching top pokemon by %s: %s", column_name, e)
                raise UpstreamFailure("Failed to fetch top pokemon") from e

    async def growth_rate_distribution(self) -> dict[str, int]:
        """Count of records per growth rate; blank rates count as Unknown."""
        stmt = select(Pokemon.growth_rate, func.count()).group_by(Pokemon.growth_rate)
        async with self.core_database.get_async_db() as session:
            try:
                rows = (await session.execute(stmt)).all()
            except SQLAlchemyError as e:
                logger.error("Error computing growth rate distribution: %s", e)
                raise UpstreamFailure("Failed to fetch stats") from e

        distribution: dict[str, int] = defaultdict(int)
        for rate, count in rows:
            distribution[rate or UNKNOWN_GROWTH_RATE] += count
        return dict(distribution)

    async def base_exp_by_type(self) -> dict[str, int]:
        """Rounded mean base experience per primary type.

        Base experience is free text; anything without a leading number counts as 0.
        """
        stmt = select(Pokemon.type1, Pokemon.base_exp)
        async with self.core_database.get_async_db() as session:
            try:
                rows = (await session.execute(stmt)).all()
            except SQLAlchemyError as e:
                logger.error("Error computing base experience by type: %s", e)
                raise UpstreamFailure("Failed to fetch stats") from e

        totals: dict[str, list[int]] = defaultdict(lambda: [0, 0])
        for type1, base_exp in rows:
            bucket = totals[type1]
            bucket[0] += leading_int(base_exp)
            bucket[1] += 1
        return {type1: round_half_up(total / count) for type1, (total, count) in totals.items()}
