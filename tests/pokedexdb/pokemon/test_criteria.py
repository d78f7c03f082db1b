"""Tests for list query criteria."""

import pytest
from pydantic import ValidationError

from pokedexdb.pokemon.criteria import PokemonCriteria, PokemonPage, StatRange


class TestStatRange:
    """Test stat bound validation and normalization."""

    def test_full_range_bounds_are_dropped(self):
        """Should drop bounds that admit every value."""
        assert StatRange(min=0, max=255).effective_bounds() == (None, None)

    def test_inner_bounds_are_kept(self):
        """Should keep bounds that constrain the stat."""
        assert StatRange(min=1, max=254).effective_bounds() == (1, 254)

    def test_open_sides(self):
        """Should allow either side to be open."""
        assert StatRange(min=50).effective_bounds() == (50, None)
        assert StatRange(max=50).effective_bounds() == (None, 50)

    @pytest.mark.parametrize("kwargs", [{"min": -1}, {"max": 256}, {"min": 100, "max": 50}])
    def test_invalid_bounds(self, kwargs):
        """Should reject out-of-range or inverted bounds."""
        with pytest.raises(ValidationError):
            StatRange(**kwargs)


class TestPokemonCriteria:
    """Test criteria defaults and validation."""

    def test_defaults(self):
        """Should default to the first page of 24."""
        criteria = PokemonCriteria()

        assert criteria.page == 1
        assert criteria.page_size == 24
        assert criteria.offset == 0
        assert criteria.cache_signature() == {"stat_ranges": {}, "page": 1, "page_size": 24}

    def test_blank_text_filters_become_none(self):
        """Should trim text filters and drop blank ones."""
        criteria = PokemonCriteria(search="  ", type1="", egg_group=" Field ")

        assert criteria.search is None
        assert criteria.type1 is None
        assert criteria.egg_group == "Field"

    def test_offset(self):
        """Should skip the rows of earlier pages."""
        assert PokemonCriteria(page=3, page_size=10).offset == 20

    @pytest.mark.parametrize("kwargs", [{"page": 0}, {"page_size": 0}, {"page_size": 1001}])
    def test_invalid_paging(self, kwargs):
        """Should reject out-of-range page numbers and sizes."""
        with pytest.raises(ValidationError):
            PokemonCriteria(**kwargs)

    def test_unknown_stat_rejected(self):
        """Should reject a range on an unknown stat."""
        with pytest.raises(ValidationError):
            PokemonCriteria(stat_ranges={"luck": StatRange(min=1)})

    def test_signature_distinguishes_filters(self):
        """Should give different filters different signatures."""
        fire = PokemonCriteria(type1="Fire").cache_signature()
        water = PokemonCriteria(type1="Water").cache_signature()

        assert fire != water


def test_total_pages():
    """Should round the page count up."""
    assert PokemonPage(records=[], total=25, page=1, page_size=24).total_pages == 2
    assert PokemonPage(records=[], total=24, page=1, page_size=24).total_pages == 1
    assert PokemonPage(records=[], total=0, page=1, page_size=24).total_pages == 0
