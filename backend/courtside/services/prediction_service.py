"""
Unified Prediction Service

Single place that ties the prediction models to the data client: creating
match analyses, recording results, submitting manual feedback and running
models for ad-hoc matchups. Used by the API endpoints and the batch script.
"""
import logging
from typing import Any, Dict, List, Optional, Tuple, Union

import numpy as np

from courtside.config import settings
from courtside.ml.heuristic_models import generate_all_predictions
from courtside.ml.ml_model import generate_ml_prediction, weights_from_model_weights
from courtside.ml.registry import predict_matches, run_model
from courtside.schemas import (
    Match,
    MatchAnalysis,
    MatchAnalysisRequest,
    ModelFeedback,
    ModelType,
    ModelWeights,
    Player,
    Prediction,
    PredictionBase,
)
from courtside.services.data_client import DataClient, ListOptions, NotFoundError, payload_to_dict
from courtside.services.defaults import utc_now
from courtside.services.feedback import build_feature_snapshot

logger = logging.getLogger(__name__)


def result_payload(predicted_winner_id: Optional[str], actual_winner_id: str) -> Dict[str, Any]:
    """Fields written to a prediction once the real winner is known"""
    return {
        "actual_winner_id": actual_winner_id,
        "was_correct": predicted_winner_id == actual_winner_id,
        "completed_at": utc_now(),
    }


class PredictionService:
    """Service for generating, persisting and grading match predictions"""

    def __init__(self, client: DataClient, rng: Optional[np.random.Generator] = None):
        self.client = client
        self.rng = rng

    async def _get_player(self, player_id: str) -> Player:
        player = await self.client.players.get(player_id)
        if player is None:
            raise NotFoundError("players", player_id)
        return player

    async def _get_players(self, player1_id: str, player2_id: str) -> Tuple[Player, Player]:
        if player1_id == player2_id:
            raise ValueError("A match needs two different players")
        return await self._get_player(player1_id), await self._get_player(player2_id)

    async def get_active_weights(self) -> Optional[ModelWeights]:
        return await self.client.model_weights.get_active()

    async def create_match_analysis(
        self,
        match_data: Union[MatchAnalysisRequest, Dict[str, Any]],
        use_ml: Optional[bool] = None,
    ) -> MatchAnalysis:
        """
        Create a match and persist its predictions.

        Without ML this stores the conservative, balanced and aggressive
        predictions; with ML it stores one ml_enhanced prediction scored
        with the active weights (defaults when none are active).

        The match and each prediction are separate writes. A failure part
        way through leaves the records already written in place.

        Args:
            match_data: Match fields (player ids, surface, tournament, ...)
            use_ml: Overrides match_data.use_ml when given

        Returns:
            MatchAnalysis with the stored match and predictions

        Raises:
            ValueError: If both player ids are the same
            NotFoundError: If either player does not exist
        """
        data = payload_to_dict(match_data)
        requested_ml = data.pop("use_ml", False)
        use_ml = requested_ml if use_ml is None else use_ml

        player1, player2 = await self._get_players(data["player1_id"], data["player2_id"])
        match = await self.client.matches.create(data)
        logger.info(f"Created match {match.id}: {player1.name} vs {player2.name}")

        model_version = settings.MODEL_VERSION
        if use_ml:
            active = await self.get_active_weights()
            weights = weights_from_model_weights(active)
            if active is not None and active.model_version:
                model_version = active.model_version
            drafts = [
                generate_ml_prediction(
                    match, player1, player2, weights=weights, model_type=ModelType.ML_ENHANCED, rng=self.rng
                )
            ]
        else:
            drafts = generate_all_predictions(match, player1, player2, rng=self.rng)

        predictions = []
        for draft in drafts:
            predictions.append(await self._save_prediction(draft, match, model_version))

        logger.info(f"Stored {len(predictions)} predictions for match {match.id}")
        return MatchAnalysis(match=match, predictions=predictions)

    async def _save_prediction(self, draft: PredictionBase, match: Match, model_version: str) -> Prediction:
        payload = draft.model_dump()
        payload["match_id"] = match.id
        payload["model_version"] = payload.get("model_version") or model_version
        return await self.client.predictions.create(payload)

    async def record_result(self, prediction_id: str, actual_winner_id: str) -> Prediction:
        """
        Record the real winner on a prediction.

        Sets actual_winner_id, was_correct and completed_at; the data
        client derives a fresh feedback row from the update.

        Raises:
            NotFoundError: If the prediction does not exist
        """
        prediction = await self.client.predictions.get(prediction_id)
        if prediction is None:
            raise NotFoundError("predictions", prediction_id)

        updated = await self.client.predictions.update(
            prediction_id, result_payload(prediction.predicted_winner_id, actual_winner_id)
        )
        logger.info(f"Recorded result for prediction {prediction_id}: correct={updated.was_correct}")
        return updated

    async def submit_feedback(
        self,
        prediction: Prediction,
        actual_winner_id: str,
        match: Optional[Match] = None,
        player1: Optional[Player] = None,
        player2: Optional[Player] = None,
    ) -> ModelFeedback:
        """
        Record a result and a manual feedback row with a feature snapshot.

        Missing match or players are looked up through the data client.
        """
        updated = await self.record_result(prediction.id, actual_winner_id)

        if match is None:
            match = await self.client.matches.get(prediction.match_id)
        if match is not None:
            player1 = player1 or await self.client.players.get(match.player1_id)
            player2 = player2 or await self.client.players.get(match.player2_id)

        return await self.client.model_feedback.create({
            "prediction_id": prediction.id,
            "match_id": match.id if match is not None else prediction.match_id,
            "model_type": prediction.model_type,
            "was_correct": updated.was_correct,
            "confidence_level": prediction.confidence_level,
            "surface": match.surface if match is not None else None,
            "player1_id": match.player1_id if match is not None else None,
            "player2_id": match.player2_id if match is not None else None,
            "feature_snapshot": build_feature_snapshot(match, player1, player2),
            "metadata": {
                "predicted_winner_id": prediction.predicted_winner_id,
                "actual_winner_id": actual_winner_id,
                "player1_win_probability": prediction.player1_win_probability,
                "player2_win_probability": prediction.player2_win_probability,
                "source": "manual",
            },
        })

    async def predict_for_players(
        self,
        player1_id: str,
        player2_id: str,
        model_type: Union[ModelType, str] = ModelType.ENSEMBLE,
        surface: str = "hard",
        best_of: int = 3,
        tournament_name: Optional[str] = None,
        location: Optional[str] = None,
        odds: Optional[Dict[str, float]] = None,
    ) -> PredictionBase:
        """Run one model for two stored players; nothing is persisted"""
        player1, player2 = await self._get_players(player1_id, player2_id)
        match = Match(
            id=f"{player1.id}-vs-{player2.id}",
            player1_id=player1.id,
            player2_id=player2.id,
            surface=surface,
            best_of=best_of,
            tournament_name=tournament_name,
            location=location,
            odds=odds,
        )
        return run_model(model_type, match, player1, player2, rng=self.rng)

    async def generate_scheduled_predictions(
        self,
        model_type: Union[ModelType, str] = ModelType.ENSEMBLE,
        save: bool = True,
    ) -> List[PredictionBase]:
        """
        Run one model over every scheduled match.

        Returns:
            The generated predictions (persisted when save is True)
        """
        matches = await self.client.matches.list(ListOptions(filters={"status": "scheduled"}, sort="utc_start"))
        players = await self.client.players.list()
        drafts = predict_matches(matches, players, model_type=model_type, rng=self.rng)

        if not save:
            return drafts

        by_id = {match.id: match for match in matches}
        saved = []
        for draft in drafts:
            saved.append(await self._save_prediction(draft, by_id[draft.match_id], settings.MODEL_VERSION))

        logger.info(f"Batch complete: {len(saved)} predictions stored for {len(matches)} scheduled matches")
        return saved


def get_prediction_service(client: DataClient) -> PredictionService:
    """
    Get a prediction service instance.

    Args:
        client: Active data client

    Returns:
        PredictionService instance
    """
    return PredictionService(client)
