from sqlalchemy import Column, String, Integer, Float, DateTime, func
from courtside.database import Base
from courtside.models.types import JSONType


class Player(Base):
    __tablename__ = "players"

    id = Column(String(64), primary_key=True, index=True)
    canonical_name = Column(String(100), nullable=False, index=True)
    display_name = Column(String(100), index=True)
    first_name = Column(String(50))
    last_name = Column(String(50))
    slug = Column(String(120), index=True)
    nationality = Column(String(10))
    plays = Column(String(10))
    hand = Column(String(10))
    birth_year = Column(Integer)
    height_cm = Column(Integer)

    rank = Column(Integer, index=True)
    peak_rank = Column(Integer)
    elo = Column(Float)
    hard_elo = Column(Float)
    clay_elo = Column(Float)
    grass_elo = Column(Float)

    # Serve / return (0-100)
    first_serve_pct = Column(Float)
    first_serve_win_pct = Column(Float)
    second_serve_win_pct = Column(Float)
    first_return_win_pct = Column(Float)
    second_return_win_pct = Column(Float)
    break_points_converted_pct = Column(Float)
    return_games_won_pct = Column(Float)

    # Surface win rates (0-100)
    hard_court_win_pct = Column(Float)
    clay_court_win_pct = Column(Float)
    grass_court_win_pct = Column(Float)
    surface_stats = Column(JSONType)

    recent_form = Column(JSONType)  # ["W", "L", ...], most recent last
    fatigue_index = Column(Float)
    injury_risk = Column(Float)

    data_source = Column(String(50), default="manual")

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now(), server_default=func.now())

    def __repr__(self):
        return f"<Player {self.display_name} (#{self.rank})>"
