"""Tests for evolution, learnset and detail endpoints."""


class TestEvolutions:
    """Test GET /api/pokemon/evolutions/{id}."""

    async def test_chain_with_missing_stage(self, client, sample_pokemon):
        """Should list stored chain members with their steps."""
        response = await client.get(f"/api/pokemon/evolutions/{sample_pokemon[0].id}")

        assert response.status_code == 200
        data = response.json()["data"]
        assert [entry["pokemon"]["name"] for entry in data] == ["Bulbasaur", "Ivysaur"]
        assert data[0]["step"] == {"index": 1, "trigger": None, "value": None}
        assert data[1]["step"] == {"index": 2, "trigger": "level", "value": 16}
        assert response.headers["cache-control"] == (
            "public, max-age=3600, stale-while-revalidate=86400"
        )

    async def test_no_family(self, client, sample_pokemon):
        """Should return an empty list for a record without a family."""
        response = await client.get(f"/api/pokemon/evolutions/{sample_pokemon[5].id}")

        assert response.status_code == 200
        assert response.json() == {"data": []}

    async def test_unknown_record(self, client):
        """Should return 404 for an unknown record."""
        response = await client.get("/api/pokemon/evolutions/9999")

        assert response.status_code == 404
        assert response.json() == {"error": "Pokemon not found"}


class TestDetails:
    """Test GET /api/pokemon/{id}/details."""

    async def test_details(self, client, sample_pokemon):
        """Should return the full detail view."""
        response = await client.get(f"/api/pokemon/{sample_pokemon[6].id}/details")

        assert response.status_code == 200
        body = response.json()
        assert body["pokemon"]["name"] == "Eevee"
        assert [entry["pokemon"]["name"] for entry in body["evolutions"]] == [
            "Eevee",
            "Vaporeon",
        ]
        assert body["moves"][0]["name"] == "Tackle"
        assert body["moves"][0]["level"] == 1
        assert body["statRanges"]["speed"] == {"min": 103, "max": 229}
        assert body["defenses"]["weakTo"] == ["Fighting"]
        assert body["defenses"]["immuneTo"] == ["Ghost"]

    async def test_details_not_found(self, client):
        """Should return 404 for an unknown record."""
        response = await client.get("/api/pokemon/9999/details")

        assert response.status_code == 404


class TestMoves:
    """Test GET /api/moves/{dex_index}."""

    async def test_known_learnset(self, client):
        """Should return the learnset for a known number."""
        response = await client.get("/api/moves/25")

        assert response.status_code == 200
        moves = response.json()["data"]
        thunderbolt = next(move for move in moves if move["name"] == "Thunderbolt")
        assert thunderbolt["method"] == "tm"
        assert thunderbolt["detail"] == "TM24"

    async def test_unknown_learnset(self, client):
        """Should return an empty learnset for an unknown number."""
        response = await client.get("/api/moves/999")

        assert response.status_code == 200
        assert response.json() == {"data": []}
