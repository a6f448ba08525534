"""
Lightweight feature model for match prediction.

Scores a match from four feature deltas (ranking, serve, return, surface
preference) with configurable weights. The weights can come from the
active ModelWeights row; only four of its eight fields feed this scorer.
"""

import logging
from typing import Dict, Mapping, Optional, Union

import numpy as np

from courtside.ml.probability_utils import (
    VARIANCE_CEILING,
    VARIANCE_FLOOR,
    clamp,
    confidence_from_max_probability,
    generate_point_by_point_data,
    predicted_sets,
    resolve_rng,
    rounded_pair,
    set_probabilities,
)
from courtside.schemas.enums import ModelType
from courtside.schemas.feedback import ModelWeightsBase
from courtside.schemas.match import Match
from courtside.schemas.player import Player
from courtside.schemas.prediction import PredictionBase

logger = logging.getLogger(__name__)

FEATURE_NAMES = ("rank_diff", "serve_diff", "return_diff", "surface_pref_diff", "best_of")

DEFAULT_RANK = 100
DEFAULT_SERVE_WIN_PCT = 65
DEFAULT_RETURN_WIN_PCT = 35
DEFAULT_SURFACE_WIN_PCT = 50

DEFAULT_WEIGHTS = {
    "rank": 0.4,
    "serve": 0.2,
    "return": 0.2,
    "surface": 0.2,
}

# ModelWeights column -> scorer weight
WEIGHT_FIELD_MAP = {
    "ranking_weight": "rank",
    "serve_weight": "serve",
    "return_weight": "return",
    "surface_weight": "surface",
}


def _or_default(value: Optional[float], default: float) -> float:
    return default if value is None else value


def extract_features(player1: Player, player2: Player, match: Match) -> Dict[str, float]:
    """
    Build the feature dict for a match.

    rank_diff is opponent rank minus own rank (p2 - p1). The remaining
    deltas are percentage-point differences divided by 100.
    """
    surface = match.surface or "hard"

    rank1 = _or_default(player1.current_rank, DEFAULT_RANK)
    rank2 = _or_default(player2.current_rank, DEFAULT_RANK)
    serve1 = _or_default(player1.first_serve_win_pct, DEFAULT_SERVE_WIN_PCT)
    serve2 = _or_default(player2.first_serve_win_pct, DEFAULT_SERVE_WIN_PCT)
    return1 = _or_default(player1.first_return_win_pct, DEFAULT_RETURN_WIN_PCT)
    return2 = _or_default(player2.first_return_win_pct, DEFAULT_RETURN_WIN_PCT)
    surface1 = _or_default(player1.surface_win_pct(surface), DEFAULT_SURFACE_WIN_PCT)
    surface2 = _or_default(player2.surface_win_pct(surface), DEFAULT_SURFACE_WIN_PCT)

    return {
        "rank_diff": rank2 - rank1,
        "serve_diff": (serve1 - serve2) / 100,
        "return_diff": (return1 - return2) / 100,
        "surface_pref_diff": (surface1 - surface2) / 100,
        "best_of": match.best_of or 3,
    }


def weights_from_model_weights(row: Optional[Union[ModelWeightsBase, Mapping]]) -> Dict[str, float]:
    """
    Map a ModelWeights row onto the scorer's four weights.

    h2h, form, fatigue and injury weights have no counterpart here and are
    ignored. Returns the defaults when no row is given.
    """
    if row is None:
        return dict(DEFAULT_WEIGHTS)

    if isinstance(row, ModelWeightsBase):
        row = row.model_dump()

    weights = dict(DEFAULT_WEIGHTS)
    for field, key in WEIGHT_FIELD_MAP.items():
        value = row.get(field)
        if value is not None:
            weights[key] = float(value)
    return weights


def calculate_ml_probability(features: Mapping[str, float], weights: Mapping[str, float]) -> tuple:
    """
    Combine features into (p1_prob, p2_prob).

    The ranking term is log-damped and signed against rank_diff; the other
    three terms are linear. The sum is added to 0.5 and clamped to
    [0.01, 0.99].
    """
    rank_diff = features["rank_diff"]
    rank_effect = -np.sign(rank_diff) * np.log(abs(rank_diff) + 1) * weights["rank"]

    deltas = np.array([features["serve_diff"], features["return_diff"], features["surface_pref_diff"]])
    linear_weights = np.array([weights["serve"], weights["return"], weights["surface"]])
    linear_effect = float(np.dot(deltas, linear_weights))

    p1_prob = clamp(0.5 + float(rank_effect) + linear_effect, VARIANCE_FLOOR, VARIANCE_CEILING)
    return p1_prob, 1 - p1_prob


def generate_ml_prediction(
    match: Match,
    player1: Player,
    player2: Player,
    weights: Optional[Mapping[str, float]] = None,
    model_type: Union[ModelType, str] = ModelType.ML,
    rng: Optional[np.random.Generator] = None,
) -> PredictionBase:
    """
    Generate a single ML prediction for a match.

    Args:
        match: Match being predicted
        player1: First player
        player2: Second player
        weights: Scorer weights (rank/serve/return/surface); defaults if None
        model_type: "ml" or "ml_enhanced"
        rng: Random source for the point-by-point simulation

    Returns:
        Raw prediction draft; the caller persists it

    Raises:
        ValueError: If the match or either player is missing
    """
    if match is None or player1 is None or player2 is None:
        raise ValueError("Match and both players required for ML prediction")

    features = extract_features(player1, player2, match)
    p1_prob, p2_prob = calculate_ml_probability(features, weights or DEFAULT_WEIGHTS)
    max_prob = max(p1_prob, p2_prob)
    prob_straight_sets, prob_deciding_set = set_probabilities(max_prob)
    p1_rounded, p2_rounded = rounded_pair(p1_prob)
    player1_favored = p1_prob > p2_prob

    logger.debug(f"ML features for match {match.id}: {features}")

    return PredictionBase(
        match_id=match.id,
        model_type=ModelType(model_type),
        predicted_winner_id=player1.id if player1_favored else player2.id,
        predicted_winner_name=player1.name if player1_favored else player2.name,
        player1_win_probability=p1_rounded,
        player2_win_probability=p2_rounded,
        confidence_level=confidence_from_max_probability(max_prob),
        predicted_sets=predicted_sets(max_prob, match.best_of),
        prob_straight_sets=prob_straight_sets,
        prob_deciding_set=prob_deciding_set,
        point_by_point_data=list(
            generate_point_by_point_data(p1_prob, p2_prob, match.best_of, unit="point", rng=resolve_rng(rng))
        ),
        metadata={"ml_features_used": list(features.keys())},
    )
