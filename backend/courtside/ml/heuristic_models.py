"""
Rule-based prediction models.

Three configurations share one base probability per match and differ only
in how much they favor the favorite and how much noise they inject.
"""

import logging
from typing import List, Optional

import numpy as np

from courtside.ml.probability_utils import (
    ModelConfig,
    apply_model_variance,
    calculate_base_probabilities,
    confidence_from_max_probability,
    generate_point_by_point_data,
    predicted_sets,
    resolve_rng,
    rounded_pair,
    set_probabilities,
)
from courtside.schemas.enums import ModelType
from courtside.schemas.match import Match
from courtside.schemas.player import Player
from courtside.schemas.prediction import PredictionBase

logger = logging.getLogger(__name__)

HEURISTIC_MODELS = {
    ModelType.CONSERVATIVE: ModelConfig(type=ModelType.CONSERVATIVE.value, variance=0.05, favorite_boost=1.08),
    ModelType.BALANCED: ModelConfig(type=ModelType.BALANCED.value, variance=0.10, favorite_boost=1.00),
    ModelType.AGGRESSIVE: ModelConfig(type=ModelType.AGGRESSIVE.value, variance=0.15, favorite_boost=0.95),
}


def _require_inputs(match: Optional[Match], player1: Optional[Player], player2: Optional[Player]) -> None:
    if match is None or player1 is None or player2 is None:
        raise ValueError("Match and both players required for prediction generation")


def _build_prediction(
    match: Match,
    player1: Player,
    player2: Player,
    model: ModelConfig,
    base,
    rng: np.random.Generator,
) -> PredictionBase:
    p1_prob, p2_prob = apply_model_variance(base, model, player1, player2, rng=rng)
    max_prob = max(p1_prob, p2_prob)
    prob_straight_sets, prob_deciding_set = set_probabilities(max_prob)
    p1_rounded, p2_rounded = rounded_pair(p1_prob)

    return PredictionBase(
        match_id=match.id,
        model_type=model.type,
        predicted_winner_id=player1.id if p1_prob > p2_prob else player2.id,
        predicted_winner_name=player1.name if p1_prob > p2_prob else player2.name,
        player1_win_probability=p1_rounded,
        player2_win_probability=p2_rounded,
        confidence_level=confidence_from_max_probability(max_prob),
        predicted_sets=predicted_sets(max_prob, match.best_of),
        prob_straight_sets=prob_straight_sets,
        prob_deciding_set=prob_deciding_set,
        point_by_point_data=list(generate_point_by_point_data(p1_prob, p2_prob, match.best_of, unit="game", rng=rng)),
    )


def generate_heuristic_prediction(
    match: Match,
    player1: Player,
    player2: Player,
    model_type: ModelType = ModelType.BALANCED,
    rng: Optional[np.random.Generator] = None,
) -> PredictionBase:
    """Run a single heuristic configuration for one match."""
    _require_inputs(match, player1, player2)
    model = HEURISTIC_MODELS[ModelType(model_type)]
    base = calculate_base_probabilities(player1, player2, match)
    return _build_prediction(match, player1, player2, model, base, resolve_rng(rng))


def generate_all_predictions(
    match: Match,
    player1: Player,
    player2: Player,
    rng: Optional[np.random.Generator] = None,
) -> List[PredictionBase]:
    """
    Generate conservative, balanced and aggressive drafts for a match.

    Returns raw drafts; the caller is responsible for persisting them.

    Raises:
        ValueError: If the match or either player is missing
    """
    _require_inputs(match, player1, player2)
    rng = resolve_rng(rng)
    base = calculate_base_probabilities(player1, player2, match)
    logger.debug(f"Base probabilities for match {match.id}: {base[0]:.4f} / {base[1]:.4f}")

    return [
        _build_prediction(match, player1, player2, model, base, rng)
        for model in HEURISTIC_MODELS.values()
    ]
