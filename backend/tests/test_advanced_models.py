"""
Tests for the ELO, surface-expertise and ensemble models (percentage scale).
"""

import pytest

from courtside.ml.advanced_models import (
    calculate_form_score,
    calculate_stats_based_probability,
    calculate_surface_expertise,
    elo_win_probability,
    get_surface_elo,
    get_tournament_importance,
    predict_with_elo,
    predict_with_ensemble,
    predict_with_surface_expertise,
    update_elo_rating,
)
from courtside.schemas import MatchOdds, Player


@pytest.fixture
def favorite():
    return Player(id="fav", display_name="Favorite Player", elo_rating=1800, surface_stats={"hard": {"wins": 7, "losses": 3}})


@pytest.fixture
def underdog():
    return Player(id="dog", display_name="Underdog Player", elo_rating=1600, surface_stats={"hard": {"wins": 5, "losses": 5}})


class TestEloHelpers:

    def test_win_probability(self):
        assert elo_win_probability(1800, 1600) == pytest.approx(0.7597, abs=1e-4)
        assert elo_win_probability(1500, 1500) == pytest.approx(0.5)

    def test_update_rating(self):
        assert update_elo_rating(1500, 0.5, 1) == 1516
        assert update_elo_rating(1500, 0.5, 0, k_factor=48) == 1476

    def test_surface_elo_priority(self):
        assert get_surface_elo(Player(id="a", hard_elo=2050, elo_rating=1900, hard_court_win_pct=60), "hard") == 2050
        assert get_surface_elo(Player(id="b", elo_rating=1900, hard_court_win_pct=60), "hard") == 1750
        assert get_surface_elo(Player(id="c", elo_rating=1900), "clay") == 1900
        assert get_surface_elo(Player(id="d"), "grass") == 1500

    def test_form_score(self):
        assert calculate_form_score(None) == 0.0
        assert calculate_form_score(["W"] * 5) == pytest.approx(5.0)
        assert calculate_form_score(["L"] * 5) == pytest.approx(-5.0)
        # Only the last five results count, weighted 1..5 by recency
        assert calculate_form_score(["W", "W", "L", "L", "L", "L", "W"]) == pytest.approx(((5 / 15) - 0.5) * 10)


class TestPredictWithElo:

    def test_rating_gap(self, favorite, underdog):
        prediction = predict_with_elo(favorite, underdog, surface="clay")
        assert prediction.player1_win_probability == pytest.approx(76.0)
        assert prediction.player2_win_probability == pytest.approx(24.0)
        assert prediction.predicted_winner_id == "fav"
        assert prediction.confidence_level == "high"
        assert prediction.elo_ratings == {"player1": 1800, "player2": 1600}
        assert prediction.is_percentage_scale

    def test_form_adjustment(self):
        hot = Player(id="hot", recent_form="WWWWW")
        cold = Player(id="cold")
        prediction = predict_with_elo(hot, cold)
        assert prediction.player1_win_probability == pytest.approx(65.0)
        assert prediction.confidence_level == "medium"
        assert "Form: 5.0 vs 0.0" in prediction.key_factors

    def test_home_advantage(self):
        home = Player(id="home", nationality="ESP")
        away = Player(id="away", nationality="USA")
        prediction = predict_with_elo(home, away, match_context={"location": "Madrid, ESP"})
        assert prediction.player1_win_probability == pytest.approx(52.0)
        assert prediction.confidence_level == "low"

    def test_stays_inside_percentage_range(self):
        strong = Player(id="s", elo_rating=2600, recent_form="WWWWW")
        weak = Player(id="w", elo_rating=1200, recent_form="LLLLL")
        prediction = predict_with_elo(strong, weak)
        assert prediction.player1_win_probability == pytest.approx(100.0)
        assert prediction.player2_win_probability == pytest.approx(0.0)

    def test_match_id_from_context(self, favorite, underdog):
        prediction = predict_with_elo(favorite, underdog, match_context={"match_id": "match-9"})
        assert prediction.match_id == "match-9"


class TestSurfaceExpertise:

    def test_expertise_sources(self):
        assert calculate_surface_expertise(Player(id="a"), "hard") == 50
        assert calculate_surface_expertise(Player(id="b", clay_court_win_pct=72), "clay") == 72
        stats_player = Player(id="c", hard_court_win_pct=60, surface_stats={"hard": {"wins": 8, "losses": 2}})
        assert calculate_surface_expertise(stats_player, "hard") == pytest.approx(80.0)

    def test_expertise_gap(self, favorite, underdog):
        prediction = predict_with_surface_expertise(favorite, underdog, "hard")
        assert prediction.player1_win_probability == pytest.approx(60.0)
        assert prediction.confidence_level == "low"
        assert prediction.surface_expertise == pytest.approx({"player1": 70, "player2": 50})

    def test_rank_factor(self):
        top = Player(id="top", current_rank=1, hard_court_win_pct=70)
        low = Player(id="low", current_rank=101, hard_court_win_pct=50)
        assert predict_with_surface_expertise(top, low, "hard").player1_win_probability == pytest.approx(62.0)


class TestEnsemble:

    def test_without_odds_averages_elo_and_surface(self, favorite, underdog):
        prediction = predict_with_ensemble(favorite, underdog, "hard")
        assert prediction.player1_win_probability == pytest.approx(68.0)
        assert [(c.model, c.weight) for c in prediction.component_predictions] == [("ELO", 0.5), ("Surface", 0.5)]
        assert prediction.key_factors == "Ensemble (ELO 50%, Surface 50%)"

    def test_lies_between_components(self, player1, player2):
        elo = predict_with_elo(player1, player2, "clay").player1_win_probability
        surface = predict_with_surface_expertise(player1, player2, "clay").player1_win_probability
        stats = calculate_stats_based_probability(player1, player2)
        prediction = predict_with_ensemble(player1, player2, "clay")
        low, high = min(elo, surface, stats), max(elo, surface, stats)
        assert low - 0.05 <= prediction.player1_win_probability <= high + 0.05

    def test_with_odds_and_stats(self, favorite, underdog):
        favorite = favorite.model_copy(update={"first_serve_win_pct": 70})
        underdog = underdog.model_copy(update={"first_serve_win_pct": 70})
        odds = MatchOdds(player1_odds=1.5, player2_odds=2.5)

        prediction = predict_with_ensemble(favorite, underdog, "hard", odds=odds)
        weights = {c.model: c.weight for c in prediction.component_predictions}
        assert weights == {"ELO": 0.4, "Surface": 0.3, "Odds": 0.2, "Stats": 0.1}
        assert prediction.player1_win_probability == pytest.approx(65.9)
        assert prediction.key_factors == "Ensemble (ELO 40%, Surface 30%, Odds 20%, Stats 10%)"

    def test_odds_as_dict(self, favorite, underdog):
        prediction = predict_with_ensemble(favorite, underdog, "hard", odds={"player1_odds": 1.5, "player2_odds": 2.5})
        assert [c.model for c in prediction.component_predictions] == ["ELO", "Surface", "Odds"]

    def test_probabilities_sum_to_hundred(self, player1, player2):
        prediction = predict_with_ensemble(player1, player2, "grass")
        assert prediction.player1_win_probability + prediction.player2_win_probability == pytest.approx(100.0, abs=0.1)


class TestTournamentImportance:

    @pytest.mark.parametrize("name,importance,k_factor", [
        ("Wimbledon", "grand_slam", 48),
        ("Roland Garros", "grand_slam", 48),
        ("Miami Masters 1000", "masters", 40),
        ("Dubai 500", "atp500", 36),
        ("Local Tournament", "atp250", 32),
        (None, "atp250", 32),
    ])
    def test_levels(self, name, importance, k_factor):
        assert get_tournament_importance(name) == {"k_factor": k_factor, "importance": importance}
