"""Tests for type effectiveness, defensive profiles and team analysis."""

import pytest

from pokedexdb.battle.effectiveness import (
    defensive_multiplier,
    defensive_profile,
    effectiveness,
    require_type,
    team_analysis,
)
from pokedexdb.battle.type_chart import CHART, TYPES, canonical_type
from pokedexdb.errors import ValidationFailure


class TestTypeChart:
    """Test the static chart itself."""

    def test_eighteen_types(self):
        """Should list eighteen distinct types."""
        assert len(TYPES) == 18
        assert len(set(TYPES)) == 18

    def test_chart_only_references_known_types(self):
        """Should only name known types in the chart."""
        for attacking, row in CHART.items():
            assert attacking in TYPES
            assert set(row) <= set(TYPES)

    def test_canonical_type_is_case_insensitive(self):
        """Should canonicalize type names regardless of case and whitespace."""
        assert canonical_type("fire") == "Fire"
        assert canonical_type("  FAIRY ") == "Fairy"
        assert canonical_type("Shadow") is None


class TestEffectiveness:
    """Test single-type multipliers."""

    @pytest.mark.parametrize(
        "attacking,defending,expected",
        [
            ("Fire", "Grass", 2.0),
            ("Water", "Fire", 2.0),
            ("Fire", "Water", 0.5),
            ("Normal", "Ghost", 0.0),
            ("Electric", "Ground", 0.0),
            ("Dragon", "Fairy", 0.0),
            ("Normal", "Normal", 1.0),
        ],
    )
    def test_single_type(self, attacking, defending, expected):
        """Should look up the multiplier for a single defending type."""
        assert effectiveness(attacking, defending) == expected

    def test_dual_type_multiplies(self):
        """Both defending types apply, so 2 x 2 gives 4."""
        assert defensive_multiplier("Electric", "Water", "Flying") == 4.0
        assert defensive_multiplier("Rock", "Fire", "Flying") == 4.0

    def test_dual_type_immunity_wins(self):
        """Should give 0 when either defending type is immune."""
        assert defensive_multiplier("Ground", "Fire", "Flying") == 0.0

    def test_dual_type_can_cancel_out(self):
        """Should give neutral damage when a weakness meets a resistance."""
        assert defensive_multiplier("Fire", "Grass", "Water") == 1.0


class TestDefensiveProfile:
    """Test classification of all attacking types against a defender."""

    def test_fire_flying(self):
        """Should classify every attacking type against Fire/Flying."""
        profile = defensive_profile("Fire", "Flying")

        assert profile.multipliers["Rock"] == 4.0
        assert "Rock" in profile.weak_to
        assert "Water" in profile.weak_to
        assert "Electric" in profile.weak_to
        assert profile.immune_to == ["Ground"]
        assert "Grass" in profile.resistant_to
        assert "Bug" in profile.resistant_to
        assert len(profile.multipliers) == 18

    def test_payload_keys(self):
        """Should serialize the profile with camelCase keys."""
        payload = defensive_profile("Normal").to_payload()

        assert set(payload) == {"multipliers", "weakTo", "resistantTo", "immuneTo"}
        assert payload["weakTo"] == ["Fighting"]
        assert payload["immuneTo"] == ["Ghost"]
        assert payload["resistantTo"] == []


class TestTeamAnalysis:
    """Test per-slot team tallies."""

    def test_dual_type_member_counts_each_slot(self):
        """A member whose two types are both weak adds two weak counts."""
        analysis = team_analysis([("Fire", "Flying")])

        assert analysis["Rock"].weak == 2
        assert analysis["Ground"].weak == 1
        assert analysis["Ground"].immune == 1

    def test_tallies_sum_over_members(self):
        """Should add tallies across team members."""
        analysis = team_analysis([("Fire", None), ("Grass", "Poison"), ("Water", None)])

        assert analysis["Ice"].weak == 1
        assert analysis["Ice"].resistant == 2
        assert analysis["Fire"].weak == 1
        assert analysis["Fire"].resistant == 2

    def test_empty_roster(self):
        """Should report zero counts for every type when the team is empty."""
        analysis = team_analysis([])

        assert set(analysis) == set(TYPES)
        for tally in analysis.values():
            assert tally.to_payload() == {"weak": 0, "resistant": 0, "immune": 0}

    def test_more_than_six_members_rejected(self):
        """Should reject teams of more than six."""
        with pytest.raises(ValidationFailure):
            team_analysis([("Normal", None)] * 7)


class TestRequireType:
    """Test request-side type validation."""

    def test_canonicalizes(self):
        """Should return the canonical type name."""
        assert require_type("water", "type1") == "Water"

    @pytest.mark.parametrize("name", [None, "", "Cosmic"])
    def test_rejects_missing_or_unknown(self, name):
        """Should reject a missing or unknown type."""
        with pytest.raises(ValidationFailure):
            require_type(name, "type1")
