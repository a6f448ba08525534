"""
Tests for the conservative, balanced and aggressive models.
"""

import numpy as np
import pytest

from courtside.ml.heuristic_models import generate_all_predictions, generate_heuristic_prediction
from courtside.schemas import Match, ModelType


class TestGenerateAllPredictions:
    """Three drafts per match from one base probability."""

    def test_one_draft_per_configuration(self, match, player1, player2, rng):
        drafts = generate_all_predictions(match, player1, player2, rng=rng)
        assert [d.model_type for d in drafts] == ["conservative", "balanced", "aggressive"]
        assert all(d.match_id == match.id for d in drafts)

    def test_probabilities_are_unit_scale(self, match, player1, player2):
        rng = np.random.default_rng(11)
        for _ in range(25):
            for draft in generate_all_predictions(match, player1, player2, rng=rng):
                assert 0.01 <= draft.player1_win_probability <= 0.99
                assert draft.player1_win_probability + draft.player2_win_probability == pytest.approx(1.0)
                assert not draft.is_percentage_scale

    def test_winner_matches_probabilities(self, match, player1, player2, rng):
        for draft in generate_all_predictions(match, player1, player2, rng=rng):
            expected = player1 if draft.player1_win_probability > draft.player2_win_probability else player2
            assert draft.predicted_winner_id == expected.id
            assert draft.predicted_winner_name == expected.name

    def test_game_curve_attached(self, match, player1, player2, rng):
        draft = generate_all_predictions(match, player1, player2, rng=rng)[0]
        assert len(draft.point_by_point_data) == 30
        assert "game" in draft.point_by_point_data[0]

    def test_set_fields(self, match, player1, player2, rng):
        for draft in generate_all_predictions(match, player1, player2, rng=rng):
            assert draft.predicted_sets in ("2-0", "2-1")
            assert draft.prob_straight_sets + draft.prob_deciding_set == 100

    def test_reproducible_with_seed(self, match, player1, player2):
        first = generate_all_predictions(match, player1, player2, rng=np.random.default_rng(5))
        second = generate_all_predictions(match, player1, player2, rng=np.random.default_rng(5))
        assert [d.model_dump() for d in first] == [d.model_dump() for d in second]

    def test_missing_player_raises(self, match, player1):
        with pytest.raises(ValueError):
            generate_all_predictions(match, player1, None)


class TestSingleHeuristic:

    def test_best_of_five(self, player1, player2, rng):
        match = Match(id="m5", player1_id=player1.id, player2_id=player2.id, best_of=5)
        draft = generate_heuristic_prediction(match, player1, player2, ModelType.CONSERVATIVE, rng=rng)
        assert draft.model_type == ModelType.CONSERVATIVE
        assert len(draft.point_by_point_data) == 50
        assert draft.predicted_sets in ("3-0", "3-1")
