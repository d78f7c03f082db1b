"""Health check endpoints for monitoring service status."""

import logging
from datetime import UTC, datetime
from typing import Annotated

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, Response

from pokedexdb.database.core import CoreDatabaseService
from pokedexdb.errors import UpstreamFailure
from pokedexdb.pokemon.queries import PokemonQueryService
from pokedexdb.system.structlog_configurator import get_package_version
from pokedexdb.utils.cache import Cache
from pokedexdb.web.core.container import Container
from pokedexdb.web.core.http import NO_STORE
from pokedexdb.web.models.health import (
    HealthCheckResponse,
    LivenessResponse,
    ReadinessResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health")


def _now() -> str:
    return datetime.now(UTC).isoformat().replace("+00:00", "Z")


@router.get("", response_model=HealthCheckResponse)
async def health_check(response: Response) -> HealthCheckResponse:
    """Check basic health status of the service."""
    response.headers["Cache-Control"] = NO_STORE
    return HealthCheckResponse(
        status="healthy",
        timestamp=_now(),
        version=get_package_version(),
        service="pokedexdb",
    )


@router.get("/live", response_model=LivenessResponse)
async def liveness_check() -> LivenessResponse:
    """Report that the process is up without touching the database."""
    return LivenessResponse(status="alive")


@router.get("/ready", response_model=ReadinessResponse)
@inject
async def readiness_check(
    db_service: Annotated[CoreDatabaseService, Depends(Provide[Container.core_database])],
    query_service: Annotated[
        PokemonQueryService, Depends(Provide[Container.pokemon_query_service])
    ],
    cache: Annotated[Cache, Depends(Provide[Container.cache])],
    response: Response,
) -> ReadinessResponse:
    """Report whether the database answers queries; the cache is informational."""
    response.headers["Cache-Control"] = NO_STORE
    checks: dict[str, object] = {
        "database": await db_service.ping(),
        "cache": cache.ping(),
        "cache_backend": cache.backend_type,
    }

    if checks["database"]:
        try:
            checks["pokemon_count"] = await query_service.count()
        except UpstreamFailure:
            checks["database"] = False

    is_ready = bool(checks["database"])
    if not is_ready:
        logger.error("Readiness check failed: %s", checks)
        response.status_code = 503

    return ReadinessResponse(
        status="ready" if is_ready else "not_ready",
        checks=checks,
        timestamp=_now(),
    )
