"""Bulk CSV import for the Pokémon table.

An import replaces the whole table: existing rows are deleted and the parsed
rows inserted in fixed-size batches inside one transaction. Rows that fail to
parse are skipped and reported with their line numbers rather than aborting
the import, unless no row survives.
"""

import asyncio
import csv
import io
import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError

from pokedexdb.database.core import CoreDatabaseService
from pokedexdb.errors import ImportFailure, UpstreamFailure
from pokedexdb.pokemon.models import STAT_FIELDS, Pokemon
from pokedexdb.utils.cache import Cache

logger = logging.getLogger(__name__)

MAX_REPORTED_ERRORS = 50

# Accepted header spellings per model field, in lookup order
FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "pokemon": ("pokemon", "Pokemon"),
    "type": ("type", "Type"),
    "species": ("species", "Species"),
    "height": ("height", "Height"),
    "weight": ("weight", "Weight"),
    "abilities": ("abilities", "Abilities"),
    "ev_yield": ("evYield", "EV Yield"),
    "catch_rate": ("catchRate", "Catch Rate"),
    "base_friendship": ("baseFriendship", "Base Friendship"),
    "base_exp": ("baseExp", "Base Exp"),
    "growth_rate": ("growthRate", "Growth Rate"),
    "egg_groups": ("eggGroups", "Egg Groups"),
    "gender": ("gender", "Gender"),
    "egg_cycles": ("eggCycles", "Egg Cycles"),
    "unnamed32": ("unnamed32", "Unnamed: 32"),
    "unnamed33": ("unnamed33", "Unnamed: 33"),
    "image": ("image", "Image"),
    "dex_index": ("index", "Index", "#"),
    "name": ("name", "Name"),
    "type1": ("type1", "Type1", "Type 1"),
    "type2": ("type2", "Type2", "Type 2"),
    "total": ("total", "Total"),
    "hp": ("hp", "HP"),
    "attack": ("attack", "Attack"),
    "defense": ("defense", "Defense"),
    "sp_atk": ("spAtk", "Sp. Atk", "SpAtk"),
    "sp_def": ("spDef", "Sp. Def", "SpDef"),
    "speed": ("speed", "Speed"),
}

INTEGER_FIELDS = frozenset({"dex_index", "total", *STAT_FIELDS})
NULLABLE_FIELDS = frozenset({"type2", "unnamed32", "unnamed33"})
REQUIRED_FIELDS = ("name", "type1")


class RowError(ValueError):
    """A single CSV row could not be converted."""


@dataclass
class ParsedCsv:
    """Rows converted from CSV plus the problems found on the way."""

    rows: list[dict[str, Any]] = field(default_factory=list)
    failed: int = 0
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def add_error(self, message: str) -> None:
        """Count a rejected row, keeping its message while under the report cap."""
        self.failed += 1
        if len(self.errors) < MAX_REPORTED_ERRORS:
            self.errors.append(message)


@dataclass
class ImportResult:
    """Outcome of a completed import."""

    count: int
    failed: int = 0
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def message(self) -> str:
        """Summary line for the caller."""
        message = f"Successfully imported {self.count} Pokemon"
        if self.failed:
            message += f"; skipped {self.failed} invalid row(s)"
        return message

    def to_payload(self) -> dict[str, Any]:
        """Serialize as the import response body."""
        return {
            "success": True,
            "count": self.count,
            "failed": self.failed,
            "message": self.message,
            "errors": self.errors,
            "warnings": self.warnings,
        }


def _parse_int(field_name: str, raw: str) -> int:
    if raw == "":
        return 0
    try:
        return int(raw)
    except ValueError as e:
        raise RowError(f"{field_name} is not a whole number: {raw!r}") from e


def _resolve_columns(header: list[str]) -> dict[str, int]:
    """Map each model field to the first header column that names it."""
    positions = {name.strip(): i for i, name in reversed(list(enumerate(header)))}
    columns: dict[str, int] = {}
    for field_name, aliases in FIELD_ALIASES.items():
        for alias in aliases:
            if alias in positions:
                columns[field_name] = positions[alias]
                break
    return columns


def convert_row(values: list[str], columns: dict[str, int]) -> dict[str, Any]:
    """Convert one CSV row into Pokemon column values.

    Raises:
        RowError: If a required value is missing or a number does not parse
    """
    record: dict[str, Any] = {}
    for field_name, position in columns.items():
        raw = values[position].strip() if position < len(values) else ""
        if field_name in INTEGER_FIELDS:
            record[field_name] = _parse_int(field_name, raw)
        elif field_name in NULLABLE_FIELDS:
            record[field_name] = raw or None
        else:
            record[field_name] = raw

    for field_name in INTEGER_FIELDS - record.keys():
        record[field_name] = 0

    missing = [name for name in REQUIRED_FIELDS if not record.get(name)]
    if missing:
        raise RowError(f"missing {', '.join(missing)}")
    return record


def _read_header(reader: Iterator[list[str]]) -> list[str] | None:
    """Return the first non-blank row, or None if there is none."""
    for candidate in reader:
        if any(cell.strip() for cell in candidate):
            return candidate
    return None


def _rows(reader: Any) -> Iterator[list[str]]:  # noqa: ANN401
    """Yield data rows; a reader error such as an oversized field rejects the file."""
    while True:
        try:
            values = next(reader)
        except StopIteration:
            return
        except csv.Error as e:
            raise ImportFailure(f"Line {reader.line_num}: {e}") from e
        yield values


def parse_csv(text: str) -> ParsedCsv:
    """Parse CSV text into Pokemon column dicts.

    Raises:
        ImportFailure: If the text is empty or not parseable as CSV, the
            header lacks the required columns, or there are no data rows
    """
    if not text or not text.strip():
        raise ImportFailure("CSV file is empty or invalid")

    reader = csv.reader(io.StringIO(text))
    try:
        header = _read_header(reader)
    except csv.Error as e:
        raise ImportFailure(f"Line {reader.line_num}: {e}") from e
    if header is None:
        raise ImportFailure("CSV file is empty or invalid")

    columns = _resolve_columns(header)
    missing = [name for name in REQUIRED_FIELDS if name not in columns]
    if missing:
        raise ImportFailure(f"CSV header row is missing required column(s): {', '.join(missing)}")

    parsed = ParsedCsv()
    data_rows = 0
    for values in _rows(reader):
        if not any(cell.strip() for cell in values):
            continue
        data_rows += 1
        try:
            record = convert_row(values, columns)
        except RowError as e:
            parsed.add_error(f"Line {reader.line_num}: {e}")
            continue

        stat_sum = sum(record[stat] for stat in STAT_FIELDS)
        if record["total"] != stat_sum:
            parsed.warnings.append(
                f"Line {reader.line_num}: total {record['total']} does not match "
                f"stat sum {stat_sum} for {record['name']}"
            )
        parsed.rows.append(record)

    if data_rows == 0:
        raise ImportFailure("CSV file contains no data rows")
    return parsed


class PokemonImporter:
    """Replaces the Pokémon table with the contents of a CSV upload."""

    def __init__(
        self,
        core_database: CoreDatabaseService,
        cache: Cache,
        batch_size: int = 100,
    ):
        self.core_database = core_database
        self.cache = cache
        self.batch_size = batch_size
        self._lock = asyncio.Lock()

    async def import_csv(self, text: str) -> ImportResult:
        """Parse ``text`` and replace every stored record with its rows.

        Raises:
            ImportFailure: If the CSV is malformed or no row is valid
            UpstreamFailure: If the database rejects the replacement
        """
        parsed = parse_csv(text)
        if not parsed.rows:
            raise ImportFailure(
                f"No valid rows to import ({parsed.failed} failed)",
                context={"errors": parsed.errors},
            )

        async with self._lock:
            count = await self._replace_all(parsed.rows)

        self.cache.clear()
        logger.info(
            "Imported %d pokemon (%d failed, %d warnings)",
            count,
            parsed.failed,
            len(parsed.warnings),
        )
        return ImportResult(
            count=count,
            failed=parsed.failed,
            errors=parsed.errors,
            warnings=parsed.warnings,
        )

    async def _replace_all(self, rows: list[dict[str, Any]]) -> int:
        timestamp = datetime.now(UTC)
        inserted = 0
        async with self.core_database.get_async_db() as session:
            try:
                await session.execute(delete(Pokemon))
                for start in range(0, len(rows), self.batch_size):
                    batch = [
                        Pokemon(**row, created_at=timestamp, updated_at=timestamp)
                        for row in rows[start : start + self.batch_size]
                    ]
                    session.add_all(batch)
                    await session.flush()
                    inserted += len(batch)
                await session.commit()
            except SQLAlchemyError as e:
                await session.rollback()
                logger.error("Import failed, table left unchanged: %s", e)
                raise UpstreamFailure("Import failed") from e
        return inserted
