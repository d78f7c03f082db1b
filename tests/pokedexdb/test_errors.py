"""Tests for the error taxonomy."""

import pytest

from pokedexdb.errors import (
    EmptyAggregateError,
    ImportFailure,
    NotFoundError,
    PokedexError,
    UpstreamFailure,
    ValidationFailure,
)


@pytest.mark.parametrize(
    "error_class,status",
    [
        (NotFoundError, 404),
        (EmptyAggregateError, 404),
        (ValidationFailure, 400),
        (ImportFailure, 400),
        (UpstreamFailure, 500),
    ],
)
def test_http_status(error_class, status):
    """Should map each error to its HTTP status and a bare error payload."""
    error = error_class("boom")

    assert isinstance(error, PokedexError)
    assert error.http_status == status
    assert error.to_payload() == {"error": "boom"}


def test_empty_aggregate_is_a_not_found():
    """Should treat an empty aggregate as a not-found error."""
    assert issubclass(EmptyAggregateError, NotFoundError)


def test_upstream_failure_has_generic_default_message():
    """Should hide internal detail behind a generic message."""
    assert UpstreamFailure().to_payload() == {"error": "Internal server error"}


def test_import_failure_carries_row_errors():
    """Should include row errors in the payload."""
    error = ImportFailure("No valid rows", context={"errors": ["Line 2: missing name"]})

    assert error.to_payload() == {"error": "No valid rows", "errors": ["Line 2: missing name"]}
