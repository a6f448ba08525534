from sqlalchemy import Column, String, Float, Boolean, DateTime, Text, func
from courtside.database import Base
from courtside.models.types import JSONType


class ModelFeedback(Base):
    __tablename__ = "model_feedback"

    id = Column(String(64), primary_key=True, index=True)
    prediction_id = Column(String(64), index=True)
    match_id = Column(String(64), index=True)
    model_type = Column(String(30), index=True)
    was_correct = Column(Boolean)
    confidence_level = Column(String(10))
    calibration_error = Column(Float)  # 0-100, lower is better
    surface = Column(String(20))
    player1_id = Column(String(64))
    player2_id = Column(String(64))
    feature_snapshot = Column(JSONType)
    meta = Column("metadata", JSONType)

    feedback_date = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<ModelFeedback {self.prediction_id} correct={self.was_correct}>"


class ModelWeights(Base):
    __tablename__ = "model_weights"

    id = Column(String(64), primary_key=True, index=True)
    model_version = Column(String(30))
    is_active = Column(Boolean, default=False, index=True)
    ranking_weight = Column(Float, default=0.0)
    serve_weight = Column(Float, default=0.0)
    return_weight = Column(Float, default=0.0)
    surface_weight = Column(Float, default=0.0)
    h2h_weight = Column(Float, default=0.0)
    form_weight = Column(Float, default=0.0)
    fatigue_weight = Column(Float, default=0.0)
    injury_weight = Column(Float, default=0.0)
    notes = Column(Text)

    last_updated = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<ModelWeights {self.model_version} active={self.is_active}>"
