"""Application factory for creating FastAPI application with dependency injection."""

import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from pokedexdb.errors import PokedexError, UpstreamFailure
from pokedexdb.web.core.container import Container
from pokedexdb.web.core.http import NO_STORE
from pokedexdb.web.core.lifespan import lifespan
from pokedexdb.web.middleware.request_logging import StructuredRequestLoggingMiddleware
from pokedexdb.web.routers import (
    analytics_api_routes,
    battle_api_routes,
    breeding_api_routes,
    health_api_routes,
    lineage_api_routes,
    pokemon_api_routes,
)

logger = logging.getLogger(__name__)


async def pokedex_error_handler(request: Request, exc: PokedexError) -> JSONResponse:
    """Render domain errors into the ``{"error": ...}`` envelope."""
    if exc.http_status >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=exc.http_status,
        content=exc.to_payload(),
        headers={"Cache-Control": NO_STORE},
    )


async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Database errors that escaped a service become a generic 500."""
    logger.error("Unhandled database error on %s: %s", request.url.path, exc)
    return await pokedex_error_handler(request, UpstreamFailure())


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed path, query or body values."""
    return JSONResponse(
        status_code=422,
        content={
            "error": "Invalid request parameters",
            "detail": jsonable_encoder(exc.errors()),
        },
        headers={"Cache-Control": NO_STORE},
    )


def create_app() -> FastAPI:
    """Create FastAPI application with dependency injection.

    Returns:
        FastAPI: The configured application instance.
    """
    container = Container()

    app = FastAPI(
        lifespan=lifespan,
        title="Pokédex DB API",
        description="Query, analytics and battle tooling over a Pokémon dataset",
        version="1.0.0",
    )
    app.container = container  # type: ignore[attr-defined]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # nosemgrep
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(StructuredRequestLoggingMiddleware)

    app.add_exception_handler(PokedexError, pokedex_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(SQLAlchemyError, database_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, request_validation_handler)  # type: ignore[arg-type]

    container.wire(
        modules=[
            "pokedexdb.web.routers.analytics_api_routes",
            "pokedexdb.web.routers.battle_api_routes",
            "pokedexdb.web.routers.breeding_api_routes",
            "pokedexdb.web.routers.health_api_routes",
            "pokedexdb.web.routers.lineage_api_routes",
            "pokedexdb.web.routers.pokemon_api_routes",
        ]
    )

    # Fixed paths such as /pokemon/stats must be registered before /pokemon/{id}
    app.include_router(analytics_api_routes.router, prefix="/api", tags=["Analytics API"])
    app.include_router(lineage_api_routes.router, prefix="/api", tags=["Lineage API"])
    app.include_router(pokemon_api_routes.router, prefix="/api", tags=["Pokemon API"])
    app.include_router(battle_api_routes.router, prefix="/api", tags=["Battle API"])
    app.include_router(breeding_api_routes.router, prefix="/api", tags=["Breeding API"])
    app.include_router(health_api_routes.router, prefix="/api", tags=["Health Check API"])

    return app
