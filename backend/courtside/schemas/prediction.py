from pydantic import BaseModel, ConfigDict
from typing import Any, Dict, List, Literal, Optional

from courtside.schemas.enums import ConfidenceLevel, ModelType, Surface
from courtside.schemas.types import UtcDatetime
from courtside.schemas.match import Match, MatchOdds


class ComponentPrediction(BaseModel):
    """One sub-model's contribution to an ensemble prediction"""
    model: str
    prob: float
    weight: float


class PredictionBase(BaseModel):
    """
    Output of one model run.

    Heuristic and ML models report unit probabilities (0-1); the ELO,
    surface-expertise and ensemble models report percentages (0-100).
    """
    match_id: Optional[str] = None
    model_type: ModelType
    model_version: Optional[str] = None
    player1_win_probability: float
    player2_win_probability: float
    predicted_winner_id: Optional[str] = None
    predicted_winner_name: Optional[str] = None
    confidence_level: ConfidenceLevel = ConfidenceLevel.MEDIUM
    predicted_sets: Optional[str] = None
    prob_straight_sets: Optional[float] = None
    prob_deciding_set: Optional[float] = None
    point_by_point_data: Optional[List[Dict[str, Any]]] = None
    key_factors: Optional[str] = None
    component_predictions: Optional[List[ComponentPrediction]] = None
    elo_ratings: Optional[Dict[str, float]] = None
    surface_expertise: Optional[Dict[str, float]] = None
    tournament_importance: Optional[Dict[str, Any]] = None
    metadata: Optional[Dict[str, Any]] = None
    notes: Optional[str] = None

    model_config = ConfigDict(from_attributes=True, use_enum_values=True, extra="ignore", protected_namespaces=())

    @property
    def is_percentage_scale(self) -> bool:
        return self.model_type in (ModelType.ELO, ModelType.SURFACE_EXPERT, ModelType.ENSEMBLE)


class Prediction(PredictionBase):
    id: str
    match_id: str
    actual_winner_id: Optional[str] = None
    was_correct: Optional[bool] = None
    completed_at: Optional[UtcDatetime] = None
    created_at: Optional[UtcDatetime] = None


class PredictionResult(BaseModel):
    """Ground truth submitted once a match has finished"""
    actual_winner_id: str


class MatchAnalysis(BaseModel):
    """A created match together with its persisted predictions"""
    match: Match
    predictions: List[Prediction]


class AdHocPredictionRequest(BaseModel):
    """Run one model for two stored players without persisting anything"""
    player1_id: str
    player2_id: str
    model_type: ModelType = ModelType.ENSEMBLE
    surface: Surface = Surface.HARD
    best_of: Literal[3, 5] = 3
    tournament_name: Optional[str] = None
    location: Optional[str] = None
    odds: Optional[MatchOdds] = None

    model_config = ConfigDict(use_enum_values=True, protected_namespaces=())
