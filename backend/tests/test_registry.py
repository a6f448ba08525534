"""
Tests for model dispatch and batch prediction.
"""

import logging

import pytest

from courtside.ml.registry import MODEL_REGISTRY, get_scorer, predict_matches, run_model
from courtside.schemas import Match, ModelType


class TestRegistry:

    def test_every_model_type_registered(self):
        assert set(MODEL_REGISTRY) == set(ModelType)

    def test_unknown_model(self):
        with pytest.raises(ValueError, match="Unknown model type"):
            get_scorer("coin_flip")

    @pytest.mark.parametrize("model_type", [m.value for m in ModelType])
    def test_run_model_sets_type_and_match(self, model_type, match, player1, player2, rng):
        prediction = run_model(model_type, match, player1, player2, rng=rng)
        assert prediction.model_type == model_type
        assert prediction.match_id == match.id
        assert prediction.predicted_winner_id in (player1.id, player2.id)

    def test_percentage_models(self, match, player1, player2, rng):
        for model_type in (ModelType.ELO, ModelType.SURFACE_EXPERT, ModelType.ENSEMBLE):
            assert run_model(model_type, match, player1, player2, rng=rng).is_percentage_scale

    def test_ensemble_uses_match_odds(self, player1, player2, rng):
        match = Match(
            id="m-odds",
            player1_id=player1.id,
            player2_id=player2.id,
            odds={"player1_odds": 1.4, "player2_odds": 3.0},
        )
        prediction = run_model(ModelType.ENSEMBLE, match, player1, player2, rng=rng)
        assert "Odds" in [c.model for c in prediction.component_predictions]


class TestPredictMatches:

    def test_resolves_by_id_and_name(self, match, player1, player2, rng):
        by_name = {"player1_name": "carlos alcaraz", "player2_name": "DANIIL MEDVEDEV", "tournament_name": "Dubai 500"}
        predictions = predict_matches([match, by_name], [player1, player2], model_type="elo", rng=rng)

        assert len(predictions) == 2
        assert predictions[0].match_id == "match-1"
        assert predictions[0].tournament_importance == {"k_factor": 48, "importance": "grand_slam"}
        assert predictions[1].match_id == "player-1-vs-player-2"
        assert predictions[1].tournament_importance["importance"] == "atp500"

    def test_skips_unresolvable(self, player1, player2, rng, caplog):
        caplog.set_level(logging.WARNING, logger="courtside.ml.registry")
        matches = [
            {"id": "ghost", "player1_id": "player-1", "player2_id": "nobody"},
            {"id": "self", "player1_id": "player-1", "player2_id": "player-1"},
        ]
        assert predict_matches(matches, [player1, player2], rng=rng) == []
        assert "Skipping match ghost" in caplog.text
        assert "Skipping match self" in caplog.text

    def test_unknown_model_raises(self, match, player1, player2):
        with pytest.raises(ValueError):
            predict_matches([match], [player1, player2], model_type="nope")
