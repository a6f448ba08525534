from courtside.schemas.enums import Surface, MatchStatus, ConfidenceLevel, ModelType, ComplianceStatus
from courtside.schemas.player import Player, PlayerCreate, PlayerListItem, PlayerUpdate, SurfaceRecord
from courtside.schemas.match import Match, MatchOdds, MatchAnalysisRequest
from courtside.schemas.prediction import (
    PredictionBase,
    Prediction,
    PredictionResult,
    ComponentPrediction,
    MatchAnalysis,
    AdHocPredictionRequest,
)
from courtside.schemas.feedback import ModelFeedback, ModelWeights, ModelWeightsBase, WEIGHT_FIELDS
from courtside.schemas.compliance import ComplianceSource, Alias, AuthUser

__all__ = [
    "Surface",
    "MatchStatus",
    "ConfidenceLevel",
    "ModelType",
    "ComplianceStatus",
    "Player",
    "PlayerCreate",
    "PlayerListItem",
    "PlayerUpdate",
    "SurfaceRecord",
    "Match",
    "MatchOdds",
    "MatchAnalysisRequest",
    "PredictionBase",
    "Prediction",
    "PredictionResult",
    "ComponentPrediction",
    "MatchAnalysis",
    "AdHocPredictionRequest",
    "ModelFeedback",
    "ModelWeights",
    "ModelWeightsBase",
    "WEIGHT_FIELDS",
    "ComplianceSource",
    "Alias",
    "AuthUser",
]
