from enum import Enum


class Surface(str, Enum):
    HARD = "hard"
    CLAY = "clay"
    GRASS = "grass"
    INDOOR_HARD = "indoor-hard"


class MatchStatus(str, Enum):
    SCHEDULED = "scheduled"
    LIVE = "live"
    COMPLETED = "completed"


class ConfidenceLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ModelType(str, Enum):
    CONSERVATIVE = "conservative"
    BALANCED = "balanced"
    AGGRESSIVE = "aggressive"
    ELO = "elo"
    SURFACE_EXPERT = "surface_expert"
    ENSEMBLE = "ensemble"
    ML = "ml"
    ML_ENHANCED = "ml_enhanced"


class ComplianceStatus(str, Enum):
    COMPLIANT = "compliant"
    PENDING_REVIEW = "pending_review"
    VIOLATION = "violation"
