"""
Model registry and batch prediction.

Every ModelType maps to a scorer with the same call shape,
(match, player1, player2, rng) -> PredictionBase, so callers can dispatch
on the model type without knowing which family a model belongs to.
"""

import logging
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Union

import numpy as np

from courtside.ml.advanced_models import (
    get_tournament_importance,
    predict_with_elo,
    predict_with_ensemble,
    predict_with_surface_expertise,
)
from courtside.ml.heuristic_models import generate_heuristic_prediction
from courtside.ml.ml_model import generate_ml_prediction
from courtside.schemas.enums import ModelType
from courtside.schemas.match import Match
from courtside.schemas.player import Player
from courtside.schemas.prediction import PredictionBase

logger = logging.getLogger(__name__)

Scorer = Callable[[Match, Player, Player, Optional[np.random.Generator]], PredictionBase]


def _match_context(match: Match) -> Dict[str, Any]:
    return {
        "match_id": match.id,
        "tournament": match.tournament_name,
        "round": match.round,
        "location": match.location,
    }


def _heuristic(model_type: ModelType) -> Scorer:
    def scorer(match, player1, player2, rng=None):
        return generate_heuristic_prediction(match, player1, player2, model_type=model_type, rng=rng)
    return scorer


def _ml(model_type: ModelType) -> Scorer:
    def scorer(match, player1, player2, rng=None):
        return generate_ml_prediction(match, player1, player2, model_type=model_type, rng=rng)
    return scorer


def _elo(match, player1, player2, rng=None):
    return predict_with_elo(player1, player2, match.surface, _match_context(match))


def _surface_expert(match, player1, player2, rng=None):
    prediction = predict_with_surface_expertise(player1, player2, match.surface)
    prediction.match_id = match.id
    return prediction


def _ensemble(match, player1, player2, rng=None):
    return predict_with_ensemble(player1, player2, match.surface, match.odds, _match_context(match))


MODEL_REGISTRY: Dict[ModelType, Scorer] = {
    ModelType.CONSERVATIVE: _heuristic(ModelType.CONSERVATIVE),
    ModelType.BALANCED: _heuristic(ModelType.BALANCED),
    ModelType.AGGRESSIVE: _heuristic(ModelType.AGGRESSIVE),
    ModelType.ELO: _elo,
    ModelType.SURFACE_EXPERT: _surface_expert,
    ModelType.ENSEMBLE: _ensemble,
    ModelType.ML: _ml(ModelType.ML),
    ModelType.ML_ENHANCED: _ml(ModelType.ML_ENHANCED),
}


def get_scorer(model_type: Union[ModelType, str]) -> Scorer:
    """
    Look up the scorer for a model type.

    Raises:
        ValueError: If the model type is unknown
    """
    try:
        return MODEL_REGISTRY[ModelType(model_type)]
    except ValueError:
        raise ValueError(f"Unknown model type: {model_type}") from None


def run_model(
    model_type: Union[ModelType, str],
    match: Match,
    player1: Player,
    player2: Player,
    rng: Optional[np.random.Generator] = None,
) -> PredictionBase:
    return get_scorer(model_type)(match, player1, player2, rng)


# ============================================================================
# BATCH PREDICTION
# ============================================================================

def _resolve_player(
    players_by_id: Mapping[str, Player],
    players_by_name: Mapping[str, Player],
    player_id: Optional[str],
    player_name: Optional[str],
) -> Optional[Player]:
    if player_id and player_id in players_by_id:
        return players_by_id[player_id]
    if player_name:
        return players_by_name.get(player_name.strip().lower())
    return None


def predict_matches(
    matches: Iterable[Union[Match, Mapping[str, Any]]],
    players: Iterable[Player],
    model_type: Union[ModelType, str] = ModelType.ENSEMBLE,
    rng: Optional[np.random.Generator] = None,
) -> List[PredictionBase]:
    """
    Run one model over a batch of matches.

    Players are resolved by id, falling back to player1_name/player2_name
    against display_name (case-insensitive). Matches whose players cannot
    be resolved are skipped with a warning.

    Args:
        matches: Match objects or match dicts (dicts may carry player names)
        players: Known players
        model_type: Model to run for every match
        rng: Shared random source

    Returns:
        One prediction per resolvable match, carrying match_id and
        tournament_importance
    """
    scorer = get_scorer(model_type)
    players = list(players)
    players_by_id = {player.id: player for player in players}
    players_by_name = {player.name.lower(): player for player in players}

    predictions = []
    for raw in matches:
        data = raw.model_dump() if isinstance(raw, Match) else dict(raw)

        player1 = _resolve_player(players_by_id, players_by_name, data.get("player1_id"), data.get("player1_name"))
        player2 = _resolve_player(players_by_id, players_by_name, data.get("player2_id"), data.get("player2_name"))
        if player1 is None or player2 is None:
            logger.warning(f"Skipping match {data.get('id')}: players not found")
            continue

        data["player1_id"] = player1.id
        data["player2_id"] = player2.id
        data["id"] = data.get("id") or f"{player1.id}-vs-{player2.id}"
        try:
            match = Match.model_validate(data)
        except ValueError as e:
            logger.warning(f"Skipping match {data['id']}: {str(e)}")
            continue

        prediction = scorer(match, player1, player2, rng)
        prediction.match_id = match.id
        prediction.tournament_importance = get_tournament_importance(match.tournament_name)
        predictions.append(prediction)

    logger.info(f"Generated {len(predictions)} {ModelType(model_type).value} predictions")
    return predictions
