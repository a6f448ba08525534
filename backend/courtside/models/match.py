from sqlalchemy import Column, String, Integer, Float, DateTime, Index, func
from courtside.database import Base


class Match(Base):
    __tablename__ = "matches"

    id = Column(String(64), primary_key=True, index=True)
    player_a_id = Column(String(64), nullable=False)
    player_b_id = Column(String(64), nullable=False)
    tournament = Column(String(100))
    round = Column(String(20))
    surface = Column(String(20))
    best_of = Column(Integer, default=3)
    status = Column(String(20), default="scheduled", index=True)
    start_time_utc = Column(DateTime(timezone=True))
    location = Column(String(100))
    player_a_odds = Column(Float)  # decimal odds
    player_b_odds = Column(Float)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (
        Index('ix_matches_players', 'player_a_id', 'player_b_id'),
    )

    def __repr__(self):
        return f"<Match {self.player_a_id} vs {self.player_b_id} ({self.tournament})>"
