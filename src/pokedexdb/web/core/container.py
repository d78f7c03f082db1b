"""Dependency injection container for the Pokédex application."""

from dependency_injector import containers, providers

from pokedexdb.analytics.aggregation import AggregationService
from pokedexdb.database.core import CoreDatabaseService
from pokedexdb.lineage.assembler import LineageAssembler
from pokedexdb.pokemon.importer import PokemonImporter
from pokedexdb.pokemon.queries import PokemonQueryService
from pokedexdb.system.path_resolver import PathResolver
from pokedexdb.utils.cache import Cache
from pokedexdb.web.core.config import get_config


class Container(containers.DeclarativeContainer):
    """Application dependency injection container.

    Every service is a singleton; they hold no per-request state.
    Tests override ``path_resolver`` (and, where needed, ``cache``) before
    anything resolves them.
    """

    path_resolver = providers.Singleton(PathResolver)

    config = providers.Singleton(
        get_config,
        path_resolver=path_resolver,
    )

    database_path = providers.Factory(
        lambda resolver: resolver.get_database_path(),
        resolver=path_resolver,
    )

    core_database = providers.Singleton(
        CoreDatabaseService,
        db_path=database_path,
    )

    cache = providers.Singleton(
        Cache.from_config,
        config=providers.Factory(lambda c: c.cache, c=config),
    )

    pokemon_query_service = providers.Singleton(
        PokemonQueryService,
        core_database=core_database,
    )

    aggregation_service = providers.Singleton(
        AggregationService,
        core_database=core_database,
    )

    lineage_assembler = providers.Singleton(
        LineageAssembler,
        query_service=pokemon_query_service,
    )

    pokemon_importer = providers.Singleton(
        PokemonImporter,
        core_database=core_database,
        cache=cache,
        batch_size=providers.Factory(lambda c: c.query.import_batch_size, c=config),
    )
