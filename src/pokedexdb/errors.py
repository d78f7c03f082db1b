"""Error taxonomy for the Pokédex service.

Every error carries the HTTP status it maps to; the web layer renders them
into the ``{"error": message}`` envelope.
"""

from typing import Any


class PokedexError(Exception):
    """Base class for errors surfaced to API callers."""

    http_status = 500
    category = "internal_error"

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def to_payload(self) -> dict[str, Any]:
        """Render the error envelope."""
        return {"error": self.message}


class NotFoundError(PokedexError):
    """A requested record does not exist."""

    http_status = 404
    category = "not_found"


class EmptyAggregateError(NotFoundError):
    """An aggregate was requested over zero matching records."""

    category = "empty_aggregate"


class ValidationFailure(PokedexError):
    """Caller supplied a parameter outside the accepted domain."""

    http_status = 400
    category = "validation_error"


class ImportFailure(PokedexError):
    """An uploaded CSV could not be imported."""

    http_status = 400
    category = "import_error"

    def to_payload(self) -> dict[str, Any]:
        """Add the per-row errors, when there are any, to the base payload."""
        payload = super().to_payload()
        errors = self.context.get("errors")
        if errors:
            payload["errors"] = errors
        return payload


class UpstreamFailure(PokedexError):
    """The backing store failed; the message never includes internal detail."""

    http_status = 500
    category = "upstream_error"

    def __init__(
        self, message: str = "Internal server error", context: dict[str, Any] | None = None
    ):
        super().__init__(message, context)
