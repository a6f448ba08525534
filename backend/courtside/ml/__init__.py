from courtside.ml.heuristic_models import generate_all_predictions, generate_heuristic_prediction
from courtside.ml.advanced_models import (
    get_tournament_importance,
    predict_with_elo,
    predict_with_ensemble,
    predict_with_surface_expertise,
    update_elo_rating,
)
from courtside.ml.ml_model import generate_ml_prediction, weights_from_model_weights
from courtside.ml.registry import MODEL_REGISTRY, get_scorer, predict_matches, run_model

__all__ = [
    "generate_all_predictions",
    "generate_heuristic_prediction",
    "get_tournament_importance",
    "predict_with_elo",
    "predict_with_ensemble",
    "predict_with_surface_expertise",
    "update_elo_rating",
    "generate_ml_prediction",
    "weights_from_model_weights",
    "MODEL_REGISTRY",
    "get_scorer",
    "predict_matches",
    "run_model",
]
