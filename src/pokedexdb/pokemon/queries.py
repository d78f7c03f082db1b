"""Query service for the Pokémon table.

Translates ``PokemonCriteria`` into a SQL predicate, orders by Pokédex
number then storage id, and slices out the requested page. Storage errors
surface as ``UpstreamFailure`` so callers never see driver detail.
"""

import logging
from collections.abc import Iterable

from sqlalchemy import and_, func, or_, select, true
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.sql import Select
from sqlalchemy.sql.elements import ColumnElement

from pokedexdb.database.core import CoreDatabaseService
from pokedexdb.errors import UpstreamFailure
from pokedexdb.pokemon.criteria import PokemonCriteria, PokemonPage
from pokedexdb.pokemon.models import Pokemon

logger = logging.getLogger(__name__)

LIKE_ESCAPE = "\\"


def escape_like(value: str) -> str:
    """Escape LIKE wildcards so user text matches literally."""
    return (
        value.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", f"{LIKE_ESCAPE}%")
        .replace("_", f"{LIKE_ESCAPE}_")
    )


def _contains(column: ColumnElement, needle: str) -> ColumnElement:
    return column.ilike(f"%{escape_like(needle)}%", escape=LIKE_ESCAPE)


def build_conditions(criteria: PokemonCriteria) -> list[ColumnElement]:
    """Build the AND-ed predicate list for a set of criteria."""
    conditions: list[ColumnElement] = []

    if criteria.search:
        conditions.append(
            or_(
                _contains(Pokemon.name, criteria.search),  # type: ignore[arg-type]
                _contains(Pokemon.pokemon, criteria.search),  # type: ignore[arg-type]
            )
        )
    if criteria.type1:
        conditions.append(Pokemon.type1 == criteria.type1)  # type: ignore[arg-type]
    if criteria.type2:
        conditions.append(Pokemon.type2 == criteria.type2)  # type: ignore[arg-type]
    if criteria.egg_group:
        conditions.append(_contains(Pokemon.egg_groups, criteria.egg_group))  # type: ignore[arg-type]

    for stat, bounds in criteria.stat_ranges.items():
        column = getattr(Pokemon, stat)
        low, high = bounds.effective_bounds()
        if low is not None:
            conditions.append(column >= low)
        if high is not None:
            conditions.append(column <= high)

    return conditions


def _ordered(stmt: Select) -> Select:
    return stmt.order_by(Pokemon.dex_index, Pokemon.id)  # type: ignore[arg-type]


class PokemonQueryService:
    """Read-side access to stored Pokémon records."""

    def __init__(self, core_database: CoreDatabaseService):
        self.core_database = core_database

    async def search(self, criteria: PokemonCriteria) -> PokemonPage:
        """Return one page of records matching every supplied criterion.

        A page past the end yields no records but still reports the totals.
        """
        conditions = build_conditions(criteria)
        where = and_(true(), *conditions)

        count_stmt = select(func.count()).select_from(Pokemon).where(where)
        page_stmt = (
            _ordered(select(Pokemon).where(where))
            .offset(criteria.offset)
            .limit(criteria.page_size)
        )

        async with self.core_database.get_async_db() as session:
            try:
                total = (await session.execute(count_stmt)).scalar_one()
                records = list((await session.execute(page_stmt)).scalars().all())
            except SQLAlchemyError as e:
                logger.error("Error querying pokemon: %s", e)
                raise UpstreamFailure("Failed to fetch pokemon") from e

        return PokemonPage(
            records=records,
            total=total,
            page=criteria.page,
            page_size=criteria.page_size,
        )

    async def get_by_id(self, pokemon_id: int) -> Pokemon | None:
        """Fetch one record by storage id."""
        async with self.core_database.get_async_db() as session:
            try:
                return await session.get(Pokemon, pokemon_id)
            except SQLAlchemyError as e:
                logger.error("Error fetching pokemon %s: %s", pokemon_id, e)
                raise UpstreamFailure("Failed to fetch pokemon") from e

    async def get_by_ids(self, pokemon_ids: Iterable[int]) -> dict[int, Pokemon]:
        """Fetch several records by storage id, keyed by id."""
        ids = list(set(pokemon_ids))
        if not ids:
            return {}
        stmt = select(Pokemon).where(Pokemon.id.in_(ids))  # type: ignore[union-attr]
        async with self.core_database.get_async_db() as session:
            try:
                rows = (await session.execute(stmt)).scalars().all()
            except SQLAlchemyError as e:
                logger.error("Error fetching pokemon by ids: %s", e)
                raise UpstreamFailure("Failed to fetch pokemon") from e
        return {row.id: row for row in rows}  # type: ignore[misc]

    async def get_by_indices(self, indices: Iterable[int]) -> list[Pokemon]:
        """Fetch all records whose Pokédex number is in ``indices``."""
        wanted = sorted(set(indices))
        if not wanted:
            return []
        stmt = _ordered(select(Pokemon).where(Pokemon.dex_index.in_(wanted)))  # type: ignore[attr-defined]
        async with self.core_database.get_async_db() as session:
            try:
                return list((await session.execute(stmt)).scalars().all())
            except SQLAlchemyError as e:
                logger.error("Error fetching pokemon by index: %s", e)
                raise UpstreamFailure("Failed to fetch pokemon") from e

    async def count(self) -> int:
        """Number of stored records."""
        async with self.core_database.get_async_db() as session:
            try:
                return (
                    await session.execute(select(func.count()).select_from(Pokemon))
                ).scalar_one()
            except SQLAlchemyError as e:
                logger.error("Error counting pokemon: %s", e)
                raise UpstreamFailure("Failed to count pokemon") from e
