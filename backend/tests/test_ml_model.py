"""
Tests for the feature-weighted ML scorer.
"""

import math

import pytest

from courtside.ml.ml_model import (
    DEFAULT_WEIGHTS,
    calculate_ml_probability,
    extract_features,
    generate_ml_prediction,
    weights_from_model_weights,
)
from courtside.schemas import Match, ModelType, ModelWeights, Player


@pytest.fixture
def ranked_pair():
    return Player(id="a", current_rank=1), Player(id="b", current_rank=5)


class TestFeatures:

    def test_defaults_for_missing_stats(self):
        match = Match(id="m", player1_id="a", player2_id="b")
        features = extract_features(Player(id="a"), Player(id="b"), match)
        assert features == {
            "rank_diff": 0,
            "serve_diff": 0,
            "return_diff": 0,
            "surface_pref_diff": 0,
            "best_of": 3,
        }

    def test_deltas(self, player1, player2, match):
        features = extract_features(player1, player2, match)
        assert features["rank_diff"] == 6
        assert features["serve_diff"] == pytest.approx(0.03)
        assert features["return_diff"] == pytest.approx(0.02)
        assert features["surface_pref_diff"] == pytest.approx(0.05)


class TestProbability:

    def test_even_features(self):
        assert calculate_ml_probability(
            {"rank_diff": 0, "serve_diff": 0, "return_diff": 0, "surface_pref_diff": 0}, DEFAULT_WEIGHTS
        ) == (0.5, 0.5)

    def test_ranking_term_sign(self, ranked_pair):
        """A better-ranked player 1 gives a positive rank_diff, which lowers p1"""
        a, b = ranked_pair
        match = Match(id="m", player1_id="a", player2_id="b")
        p1, p2 = calculate_ml_probability(extract_features(a, b, match), DEFAULT_WEIGHTS)
        assert 0.5 - math.log(5) * 0.4 < 0.01
        assert p1 == pytest.approx(0.01)
        assert p2 == pytest.approx(0.99)

    def test_linear_terms(self):
        features = {"rank_diff": 0, "serve_diff": 0.1, "return_diff": 0.05, "surface_pref_diff": -0.1}
        p1, _ = calculate_ml_probability(features, DEFAULT_WEIGHTS)
        assert p1 == pytest.approx(0.5 + 0.1 * 0.2 + 0.05 * 0.2 - 0.1 * 0.2)


class TestWeights:

    def test_defaults(self):
        assert weights_from_model_weights(None) == DEFAULT_WEIGHTS

    def test_from_row(self):
        row = ModelWeights(
            id="w",
            ranking_weight=0.25,
            serve_weight=0.18,
            return_weight=0.15,
            surface_weight=0.15,
            h2h_weight=0.10,
            form_weight=0.10,
            fatigue_weight=0.05,
            injury_weight=0.02,
        )
        assert weights_from_model_weights(row) == {"rank": 0.25, "serve": 0.18, "return": 0.15, "surface": 0.15}


class TestGenerateMlPrediction:

    def test_draft_fields(self, ranked_pair, rng):
        a, b = ranked_pair
        match = Match(id="m", player1_id="a", player2_id="b")
        draft = generate_ml_prediction(match, a, b, rng=rng)

        assert draft.model_type == ModelType.ML
        assert draft.predicted_winner_id == "b"
        assert draft.confidence_level == "high"
        assert draft.predicted_sets == "2-0"
        assert len(draft.point_by_point_data) == 120
        assert "point" in draft.point_by_point_data[0]
        assert draft.metadata["ml_features_used"] == ["rank_diff", "serve_diff", "return_diff", "surface_pref_diff", "best_of"]

    def test_enhanced_type_and_custom_weights(self, player1, player2, match, rng):
        weights = {"rank": 0.0, "serve": 1.0, "return": 1.0, "surface": 1.0}
        draft = generate_ml_prediction(match, player1, player2, weights=weights, model_type="ml_enhanced", rng=rng)
        assert draft.model_type == "ml_enhanced"
        assert draft.player1_win_probability == pytest.approx(0.6)
        assert draft.player1_win_probability + draft.player2_win_probability == pytest.approx(1.0)

    def test_missing_inputs(self, match, player1):
        with pytest.raises(ValueError, match="Match and both players required"):
            generate_ml_prediction(match, player1, None)
