"""HTTP caching hints shared by the API routers."""

from fastapi import Response

NO_STORE = "no-store"


def cache_control(max_age: int, stale_while_revalidate: int | None = None) -> str:
    """Build a public Cache-Control value."""
    value = f"public, max-age={max_age}"
    if stale_while_revalidate:
        value += f", stale-while-revalidate={stale_while_revalidate}"
    return value


def set_cache_headers(
    response: Response, max_age: int, stale_while_revalidate: int | None = None
) -> None:
    """Set a public Cache-Control header on the response."""
    response.headers["Cache-Control"] = cache_control(max_age, stale_while_revalidate)
