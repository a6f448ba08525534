from courtside.models.player import Player
from courtside.models.match import Match
from courtside.models.prediction import Prediction
from courtside.models.feedback import ModelFeedback, ModelWeights
from courtside.models.compliance import ComplianceSource, Alias

__all__ = [
    "Player",
    "Match",
    "Prediction",
    "ModelFeedback",
    "ModelWeights",
    "ComplianceSource",
    "Alias",
]
