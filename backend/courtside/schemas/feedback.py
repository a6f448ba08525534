from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing import Any, Dict, Optional

from courtside.schemas.enums import ConfidenceLevel
from courtside.schemas.types import UtcDatetime

WEIGHT_FIELDS = (
    "ranking_weight",
    "serve_weight",
    "return_weight",
    "surface_weight",
    "h2h_weight",
    "form_weight",
    "fatigue_weight",
    "injury_weight",
)

WEIGHT_SUM_TOLERANCE = 0.01


class ModelFeedback(BaseModel):
    id: str
    prediction_id: Optional[str] = None
    match_id: Optional[str] = None
    model_type: Optional[str] = None
    was_correct: Optional[bool] = None
    confidence_level: Optional[ConfidenceLevel] = None
    calibration_error: Optional[float] = Field(default=None, ge=0, le=100)
    surface: Optional[str] = None
    player1_id: Optional[str] = None
    player2_id: Optional[str] = None
    feature_snapshot: Optional[Dict[str, float]] = None
    metadata: Optional[Dict[str, Any]] = None
    feedback_date: Optional[UtcDatetime] = None

    model_config = ConfigDict(from_attributes=True, use_enum_values=True, extra="ignore", protected_namespaces=())


class ModelWeightsBase(BaseModel):
    model_version: Optional[str] = None
    is_active: bool = False
    ranking_weight: float = Field(default=0.0, ge=0, le=1)
    serve_weight: float = Field(default=0.0, ge=0, le=1)
    return_weight: float = Field(default=0.0, ge=0, le=1)
    surface_weight: float = Field(default=0.0, ge=0, le=1)
    h2h_weight: float = Field(default=0.0, ge=0, le=1)
    form_weight: float = Field(default=0.0, ge=0, le=1)
    fatigue_weight: float = Field(default=0.0, ge=0, le=1)
    injury_weight: float = Field(default=0.0, ge=0, le=1)
    notes: Optional[str] = None

    model_config = ConfigDict(from_attributes=True, extra="ignore", protected_namespaces=())

    @model_validator(mode="after")
    def _weights_sum_to_one(self):
        total = sum(getattr(self, name) for name in WEIGHT_FIELDS)
        if abs(total - 1.0) > WEIGHT_SUM_TOLERANCE:
            raise ValueError(f"Feature weights must sum to 1.0 (got {total:.3f})")
        return self


class ModelWeights(ModelWeightsBase):
    id: str
    last_updated: Optional[UtcDatetime] = None
