"""Tests for level-100 stat range calculation."""

import pytest

from pokedexdb.battle.stat_ranges import (
    RealizedStatRange,
    stat_range,
    stat_ranges,
    stat_ranges_payload,
)


class TestStatRange:
    """Test the per-stat formula."""

    def test_zero_base_non_hp(self):
        """A zero base stat still has a non-zero floor from the nature term."""
        assert stat_range(0) == RealizedStatRange(min=4, max=108)

    def test_hp_base_100(self):
        """Should add the level and 10 to both HP bounds."""
        assert stat_range(100, is_hp=True) == RealizedStatRange(min=310, max=404)

    def test_non_hp_base_100(self):
        """Should apply the hindering and boosting natures to a non-HP stat."""
        assert stat_range(100) == RealizedStatRange(min=184, max=328)

    @pytest.mark.parametrize("base", [1, 45, 65, 110, 154, 255])
    def test_min_never_exceeds_max(self, base):
        """Should keep the minimum at or below the maximum for any base stat."""
        for is_hp in (False, True):
            bounds = stat_range(base, is_hp=is_hp)
            assert bounds.min <= bounds.max

    def test_hp_and_other_stats_differ(self):
        """Should use a different formula for HP."""
        assert stat_range(50, is_hp=True) != stat_range(50)


class TestStatRangesForRecord:
    """Test ranges computed over a whole record."""

    def test_all_six_stats_present(self, model_factory):
        """Should compute a range for each base stat in order."""
        record = model_factory(1, "Bulbasaur", "Grass", "Poison", stats=(45, 49, 49, 65, 65, 45))

        ranges = stat_ranges(record)

        assert list(ranges) == ["hp", "attack", "defense", "sp_atk", "sp_def", "speed"]
        assert ranges["hp"] == stat_range(45, is_hp=True)
        assert ranges["sp_atk"] == stat_range(65)

    def test_payload_uses_camel_case_keys(self, model_factory):
        """Should key the payload by camelCase stat names."""
        record = model_factory(1, "Bulbasaur", "Grass", "Poison", stats=(45, 49, 49, 65, 65, 45))

        payload = stat_ranges_payload(record)

        assert set(payload) == {"hp", "attack", "defense", "spAtk", "spDef", "speed"}
        assert payload["hp"] == {"min": 200, "max": 294}
