"""Tests for the structured request logging middleware."""

import logging

LOGGER_NAME = "pokedexdb.web.middleware.request_logging"


class TestStructuredRequestLogging:
    """Test one log line per request with structured fields."""

    async def test_logs_request_fields(self, client, caplog):
        """Should log one line with method, path and status fields."""
        caplog.set_level(logging.INFO, logger=LOGGER_NAME)

        response = await client.get("/api/types")

        assert response.status_code == 200
        records = [record for record in caplog.records if record.name == LOGGER_NAME]
        assert len(records) == 1
        record = records[0]
        assert record.getMessage() == "GET /api/types 200"
        assert record.method == "GET"
        assert record.path == "/api/types"
        assert record.status_code == 200
        assert record.cache_control == "public, max-age=86400"
        assert record.duration_ms >= 0

    async def test_query_string_is_logged(self, client, caplog):
        """Should include the query string when present."""
        caplog.set_level(logging.INFO, logger=LOGGER_NAME)

        await client.get(
            "/api/types/effectiveness", params={"attacking": "Fire", "defending": "Ice"}
        )

        record = next(record for record in caplog.records if record.name == LOGGER_NAME)
        assert record.query == "attacking=Fire&defending=Ice"
