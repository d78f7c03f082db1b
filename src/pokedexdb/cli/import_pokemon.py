"""CLI command for importing a Pokémon CSV into the database."""

import asyncio
from pathlib import Path

import click

from pokedexdb.config import ConfigManager
from pokedexdb.database.core import CoreDatabaseService
from pokedexdb.errors import ImportFailure, UpstreamFailure
from pokedexdb.pokemon.importer import ImportResult, PokemonImporter
from pokedexdb.system.path_resolver import PathResolver
from pokedexdb.system.structlog_configurator import configure_structlog
from pokedexdb.utils.cache import Cache


async def run_import(csv_path: Path, path_resolver: PathResolver) -> ImportResult:
    """Replace the stored Pokémon with the rows of ``csv_path``."""
    config = ConfigManager(path_resolver).load()
    core_database = CoreDatabaseService(path_resolver.get_database_path())
    try:
        await core_database.initialize()
        importer = PokemonImporter(
            core_database=core_database,
            cache=Cache.from_config(config.cache),
            batch_size=config.query.import_batch_size,
        )
        return await importer.import_csv(csv_path.read_text(encoding="utf-8-sig"))
    finally:
        await core_database.dispose()


@click.command()
@click.argument(
    "csv_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option("--quiet", "-q", is_flag=True, help="Only print the summary line")
def import_pokemon(csv_file: Path, quiet: bool) -> None:
    """Replace all stored Pokémon with the rows of CSV_FILE.

    Examples:
        # Import the full dataset
        pokedexdb-import pokemon.csv
    """
    path_resolver = PathResolver()
    configure_structlog(ConfigManager(path_resolver).load())

    try:
        result = asyncio.run(run_import(csv_file, path_resolver))
    except (ImportFailure, UpstreamFailure) as e:
        click.echo(f"Import failed: {e.message}", err=True)
        for error in e.context.get("errors", []):
            click.echo(f"  {error}", err=True)
        raise SystemExit(1) from e

    click.echo(result.message)
    if not quiet:
        for error in result.errors:
            click.echo(f"  skipped: {error}")
        for warning in result.warnings:
            click.echo(f"  warning: {warning}")


def main() -> None:
    """Entry point for the import CLI."""
    import_pokemon()


if __name__ == "__main__":
    main()
