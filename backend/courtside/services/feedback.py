"""
ModelFeedback derivation.

A feedback row is derived whenever a prediction referencing an existing
match is created or updated. Manual feedback additionally captures a
snapshot of player feature deltas at submission time.
"""

from typing import Any, Dict, Optional

from courtside.ml.advanced_models import calculate_form_score
from courtside.ml.probability_utils import as_unit_probability, clamp
from courtside.schemas import Match, Player, Prediction

FEATURE_SNAPSHOT_KEYS = (
    "ranking_delta",
    "serve_delta",
    "return_delta",
    "surface_delta",
    "form_delta",
    "fatigue_delta",
    "injury_delta",
)


def calculate_calibration_error(prediction: Prediction) -> Optional[float]:
    """
    Distance between the predicted winner's probability and the outcome,
    on a 0-100 scale. None until the outcome is known.
    """
    if prediction.actual_winner_id is None or prediction.predicted_winner_id is None:
        return None

    percentage = prediction.is_percentage_scale
    p1 = as_unit_probability(prediction.player1_win_probability, percentage)
    p2 = as_unit_probability(prediction.player2_win_probability, percentage)
    predicted_prob = max(p1, p2)
    outcome = 1.0 if prediction.predicted_winner_id == prediction.actual_winner_id else 0.0

    return round(clamp(abs(predicted_prob - outcome) * 100, 0.0, 100.0), 2)


def derive_feedback(prediction: Prediction, match: Match) -> Dict[str, Any]:
    """Feedback payload for a prediction of an existing match"""
    percentage = prediction.is_percentage_scale
    p1 = as_unit_probability(prediction.player1_win_probability, percentage)
    p2 = as_unit_probability(prediction.player2_win_probability, percentage)

    return {
        "prediction_id": prediction.id,
        "match_id": match.id,
        "model_type": prediction.model_type,
        "was_correct": prediction.was_correct,
        "confidence_level": prediction.confidence_level,
        "calibration_error": calculate_calibration_error(prediction),
        "surface": match.surface,
        "player1_id": match.player1_id,
        "player2_id": match.player2_id,
        "feature_snapshot": {"probability_delta": round(p1 - p2, 4)},
    }


def _delta(value1, value2, invert: bool = False) -> float:
    if value1 is None or value2 is None:
        return 0.0
    delta = float(value1) - float(value2)
    return -delta if invert else delta


def build_feature_snapshot(match: Optional[Match], player1: Optional[Player], player2: Optional[Player]) -> Dict[str, float]:
    """
    Player feature deltas (player1 minus player2) at feedback time.

    Ranking, fatigue and injury are inverted so a positive delta always
    favors player1. Missing values contribute 0.
    """
    if player1 is None or player2 is None:
        return {key: 0.0 for key in FEATURE_SNAPSHOT_KEYS}

    surface = match.surface if match is not None else None
    form_delta = 0.0
    if player1.recent_form and player2.recent_form:
        form_delta = calculate_form_score(player1.recent_form) - calculate_form_score(player2.recent_form)

    return {
        "ranking_delta": _delta(player1.current_rank, player2.current_rank, invert=True),
        "serve_delta": _delta(player1.first_serve_win_pct, player2.first_serve_win_pct),
        "return_delta": _delta(player1.first_return_win_pct, player2.first_return_win_pct),
        "surface_delta": _delta(player1.surface_win_pct(surface), player2.surface_win_pct(surface)) if surface else 0.0,
        "form_delta": form_delta,
        "fatigue_delta": _delta(player2.fatigue_index, player1.fatigue_index),
        "injury_delta": _delta(player2.injury_risk, player1.injury_risk),
    }
