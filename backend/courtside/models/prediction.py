from sqlalchemy import Column, String, Float, Boolean, DateTime, Text, func
from courtside.database import Base
from courtside.models.types import JSONType


class Prediction(Base):
    __tablename__ = "predictions"

    id = Column(String(64), primary_key=True, index=True)
    match_id = Column(String(64), nullable=False, index=True)
    model_type = Column(String(30), nullable=False, index=True)
    model_version = Column(String(30))

    # Unit (0-1) or percentage (0-100) depending on model_type
    win_prob_a = Column(Float, nullable=False)
    win_prob_b = Column(Float, nullable=False)

    predicted_winner_id = Column(String(64))
    predicted_winner_name = Column(String(100))
    confidence_level = Column(String(10))
    predicted_sets = Column(String(10))
    prob_straight_sets = Column(Float)
    prob_deciding_set = Column(Float)
    point_by_point_data = Column(JSONType)
    key_factors = Column(Text)
    component_predictions = Column(JSONType)
    elo_ratings = Column(JSONType)
    surface_expertise = Column(JSONType)
    tournament_importance = Column(JSONType)
    meta = Column("metadata", JSONType)
    notes = Column(Text)

    actual_winner_id = Column(String(64))
    was_correct = Column(Boolean)
    completed_at = Column(DateTime(timezone=True))

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<Prediction {self.match_id} {self.model_type} {self.win_prob_a}/{self.win_prob_b}>"
