from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing import Literal, Optional

from courtside.schemas.enums import MatchStatus, Surface
from courtside.schemas.types import UtcDatetime


class MatchOdds(BaseModel):
    """Decimal (European) odds for both players"""
    player1_odds: float = Field(gt=0)
    player2_odds: float = Field(gt=0)


class Match(BaseModel):
    id: str
    player1_id: str
    player2_id: str
    surface: Surface = Surface.HARD
    tournament_name: Optional[str] = None
    round: Optional[str] = None
    best_of: Literal[3, 5] = 3
    status: MatchStatus = MatchStatus.SCHEDULED
    utc_start: Optional[UtcDatetime] = None
    location: Optional[str] = None
    odds: Optional[MatchOdds] = None
    created_at: Optional[UtcDatetime] = None

    model_config = ConfigDict(from_attributes=True, use_enum_values=True, extra="ignore")

    @model_validator(mode="after")
    def _distinct_players(self):
        if self.player1_id == self.player2_id:
            raise ValueError("player1_id and player2_id must differ")
        return self


class MatchAnalysisRequest(BaseModel):
    """Payload for creating a match together with its predictions"""
    player1_id: str
    player2_id: str
    surface: Surface = Surface.HARD
    tournament_name: Optional[str] = None
    round: Optional[str] = None
    best_of: Literal[3, 5] = 3
    utc_start: Optional[UtcDatetime] = None
    location: Optional[str] = None
    use_ml: bool = False

    model_config = ConfigDict(use_enum_values=True)
