from collections.abc import AsyncGenerator, Callable
from pathlib import Path
from typing import Any

import pytest
from dependency_injector import providers
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from pokedexdb.config import ConfigManager, PokedexConfig
from pokedexdb.database.core import CoreDatabaseService
from pokedexdb.pokemon.models import Pokemon
from pokedexdb.system.path_resolver import PathResolver
from pokedexdb.utils.cache import Cache, InMemoryBackend
from pokedexdb.web.core.factory import create_app

# Inserted in this order, so storage ids run 1..9
SAMPLE_POKEMON: list[dict[str, Any]] = [
    {
        "dex_index": 1,
        "name": "Bulbasaur",
        "type1": "Grass",
        "type2": "Poison",
        "stats": (45, 49, 49, 65, 65, 45),
        "egg_groups": "Monster, Grass",
        "egg_cycles": "20 (4,884-5,140 steps)",
        "growth_rate": "Medium Slow",
        "base_exp": "64",
    },
    {
        "dex_index": 2,
        "name": "Ivysaur",
        "type1": "Grass",
        "type2": "Poison",
        "stats": (60, 62, 63, 80, 80, 60),
        "egg_groups": "Monster, Grass",
        "egg_cycles": "20 (4,884-5,140 steps)",
        "growth_rate": "Medium Slow",
        "base_exp": "142",
    },
    {
        "dex_index": 4,
        "name": "Charmander",
        "type1": "Fire",
        "type2": None,
        "stats": (39, 52, 43, 60, 50, 65),
        "egg_groups": "Monster, Dragon",
        "egg_cycles": "20 (4,884-5,140 steps)",
        "growth_rate": "Medium Slow",
        "base_exp": "62",
    },
    {
        "dex_index": 6,
        "name": "Charizard",
        "type1": "Fire",
        "type2": "Flying",
        "stats": (78, 84, 78, 109, 85, 100),
        "egg_groups": "Monster, Dragon",
        "egg_cycles": "20 (4,884-5,140 steps)",
        "growth_rate": "Medium Slow",
        "base_exp": "240",
    },
    {
        "dex_index": 25,
        "name": "Pikachu",
        "type1": "Electric",
        "type2": None,
        "stats": (35, 55, 40, 50, 50, 90),
        "egg_groups": "Field, Fairy",
        "egg_cycles": "10 (2,314-2,570 steps)",
        "growth_rate": "Medium Fast",
        "base_exp": "112",
    },
    {
        "dex_index": 132,
        "name": "Ditto",
        "type1": "Normal",
        "type2": None,
        "stats": (48, 48, 48, 48, 48, 48),
        "egg_groups": "Ditto",
        "egg_cycles": "20 (4,884-5,140 steps)",
        "growth_rate": "Medium Fast",
        "base_exp": "101",
    },
    {
        "dex_index": 133,
        "name": "Eevee",
        "type1": "Normal",
        "type2": None,
        "stats": (55, 55, 50, 45, 65, 55),
        "egg_groups": "Field",
        "egg_cycles": "35 (8,739-8,995 steps)",
        "growth_rate": "Medium Fast",
        "base_exp": "65",
    },
    {
        "dex_index": 134,
        "name": "Vaporeon",
        "type1": "Water",
        "type2": None,
        "stats": (130, 65, 60, 110, 95, 65),
        "egg_groups": "Field",
        "egg_cycles": "35 (8,739-8,995 steps)",
        "growth_rate": "Medium Fast",
        "base_exp": "184",
    },
    {
        "dex_index": 150,
        "name": "Mewtwo",
        "type1": "Psychic",
        "type2": None,
        "stats": (106, 110, 90, 154, 90, 130),
        "egg_groups": "Undiscovered",
        "egg_cycles": "120 (30,584-30,840 steps)",
        "growth_rate": "",
        "base_exp": "340",
    },
]

SAMPLE_CSV = """\
index,name,type1,type2,total,hp,attack,defense,spAtk,spDef,speed,eggGroups,eggCycles,growthRate,baseExp
1,Bulbasaur,Grass,Poison,318,45,49,49,65,65,45,"Monster, Grass",20,Medium Slow,64
4,Charmander,Fire,,309,39,52,43,60,50,65,"Monster, Dragon",20,Medium Slow,62
25,Pikachu,Electric,,320,35,55,40,50,50,90,"Field, Fairy",10,Medium Fast,112
"""


class FakeClock:
    """Manually advanced monotonic clock for TTL tests."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        """Move the clock forward."""
        self.now += seconds


@pytest.fixture
def path_resolver(tmp_path: Path) -> PathResolver:
    """Provide a PathResolver whose writable paths all live under tmp_path.

    The database and config file are redirected individually so nothing a
    test does can touch the real data directory.
    """
    resolver = PathResolver()

    temp_data_dir = tmp_path / "data"
    temp_database_dir = temp_data_dir / "database"
    temp_config_dir = temp_data_dir / "config"
    temp_database_dir.mkdir(parents=True)
    temp_config_dir.mkdir(parents=True)

    resolver.data_dir = temp_data_dir
    resolver.get_data_dir = lambda: temp_data_dir
    resolver.get_database_dir = lambda: temp_database_dir
    resolver.get_database_path = lambda: temp_database_dir / "pokedex.db"
    resolver.get_pokedexdb_config_path = lambda: temp_config_dir / "pokedexdb.yaml"
    return resolver


@pytest.fixture
def test_config(path_resolver: PathResolver) -> PokedexConfig:
    """Load (and thereby create) the default config under the temp path."""
    return ConfigManager(path_resolver).load()


@pytest.fixture
async def core_database(path_resolver: PathResolver) -> AsyncGenerator[CoreDatabaseService, None]:
    """Provide an initialized database in the temp directory."""
    service = CoreDatabaseService(path_resolver.get_database_path())
    await service.initialize()
    yield service
    await service.dispose()


@pytest.fixture
def model_factory() -> Callable[..., Pokemon]:
    """Build unsaved Pokemon rows from a compact description."""

    def create_pokemon(
        dex_index: int,
        name: str,
        type1: str,
        type2: str | None = None,
        stats: tuple[int, int, int, int, int, int] = (50, 50, 50, 50, 50, 50),
        **fields: Any,
    ) -> Pokemon:
        """Build one row whose total is the sum of its stats."""
        hp, attack, defense, sp_atk, sp_def, speed = stats
        return Pokemon(
            dex_index=dex_index,
            name=name,
            pokemon=name,
            type=f"{type1}/{type2}" if type2 else type1,
            type1=type1,
            type2=type2,
            hp=hp,
            attack=attack,
            defense=defense,
            sp_atk=sp_atk,
            sp_def=sp_def,
            speed=speed,
            total=sum(stats),
            **fields,
        )

    return create_pokemon


@pytest.fixture
def insert_pokemon(core_database: CoreDatabaseService):
    """Persist Pokemon rows in the given order and return them with ids assigned."""

    async def _insert(*rows: Pokemon) -> list[Pokemon]:
        async with core_database.get_async_db() as session:
            for row in rows:
                session.add(row)
                await session.flush()
            await session.commit()
            for row in rows:
                await session.refresh(row)
        return list(rows)

    return _insert


@pytest.fixture
async def sample_pokemon(model_factory, insert_pokemon) -> list[Pokemon]:
    """Store the nine SAMPLE_POKEMON rows."""
    rows = [model_factory(**dict(description)) for description in SAMPLE_POKEMON]
    return await insert_pokemon(*rows)


@pytest.fixture
def fake_clock() -> FakeClock:
    """A manual clock starting at a fixed instant."""
    return FakeClock()


@pytest.fixture
def cache(fake_clock: FakeClock) -> Cache:
    """An in-memory cache driven by a manual clock."""
    return Cache(backend=InMemoryBackend(clock=fake_clock), default_ttl=60)


@pytest.fixture
async def app_with_temp_data(
    path_resolver: PathResolver,
    test_config: PokedexConfig,
    core_database: CoreDatabaseService,
) -> FastAPI:
    """Create the FastAPI app with every stateful provider pointed at temp data.

    The ASGI transport does not run the lifespan, so the database fixture
    has already created the tables.
    """
    app = create_app()
    container = app.container  # type: ignore[attr-defined]
    container.path_resolver.override(providers.Object(path_resolver))
    container.config.override(providers.Object(test_config))
    container.core_database.override(providers.Object(core_database))
    container.cache.override(providers.Singleton(Cache))
    yield app
    container.unwire()


@pytest.fixture
async def client(app_with_temp_data: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client bound to the test app."""
    async with AsyncClient(
        transport=ASGITransport(app=app_with_temp_data), base_url="http://test"
    ) as async_client:
        yield async_client


@pytest.fixture
def sample_csv() -> str:
    """Three-row CSV in the camelCase export format."""
    return SAMPLE_CSV
