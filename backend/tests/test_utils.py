"""
Tests for odds conversion and player alias helpers.
"""

import pytest

from courtside.utils.aliases import create_player_slug, generate_player_aliases, remove_diacritics
from courtside.utils.odds_conversion import decimal_to_implied_probability, devig_two_way


class TestOddsConversion:

    def test_implied_probability(self):
        assert decimal_to_implied_probability(2.0) == pytest.approx(0.5)
        assert decimal_to_implied_probability(1.25) == pytest.approx(0.8)

    def test_invalid_odds(self):
        with pytest.raises(ValueError):
            decimal_to_implied_probability(0)

    def test_devig_removes_margin(self):
        p1, p2 = devig_two_way(1.5, 2.5)
        assert p1 == pytest.approx(0.625)
        assert p1 + p2 == pytest.approx(1.0)


class TestAliases:

    def test_slug(self):
        assert create_player_slug("Gaël Monfils") == "gael-monfils"
        assert create_player_slug("  Jo-Wilfried Tsonga ") == "jo-wilfried-tsonga"
        assert create_player_slug(None) == ""

    def test_remove_diacritics(self):
        assert remove_diacritics("Gaël") == "Gael"

    def test_aliases(self):
        aliases = [a["alias_text"] for a in generate_player_aliases("Gaël Monfils")]
        assert aliases[0] == "Gaël Monfils"
        assert "Gael Monfils" in aliases
        assert "Monfils, Gaël" in aliases
        assert "G. Monfils" in aliases
        assert len(aliases) == len(set(aliases))

    def test_empty_name(self):
        assert generate_player_aliases("   ") == []
