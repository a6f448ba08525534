from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Annotated, Dict, List, Optional

from courtside.schemas.types import UtcDatetime


# Semantically a 0-100 percentage
Percentage = Annotated[Optional[float], Field(default=None, ge=0, le=100)]


class SurfaceRecord(BaseModel):
    wins: int = 0
    losses: int = 0

    @property
    def total(self) -> int:
        return self.wins + self.losses


class Player(BaseModel):
    """Canonical player profile. Read-only to the prediction engine."""

    id: str
    display_name: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    slug: Optional[str] = None
    nationality: Optional[str] = None
    plays: Optional[str] = None
    birth_year: Optional[int] = None
    height_cm: Optional[int] = None

    # Ranking / ratings
    current_rank: Optional[int] = Field(default=None, gt=0)
    peak_rank: Optional[int] = Field(default=None, gt=0)
    elo_rating: Optional[float] = None
    hard_elo: Optional[float] = None
    clay_elo: Optional[float] = None
    grass_elo: Optional[float] = None

    # Serve / return
    first_serve_pct: Percentage = None
    first_serve_win_pct: Percentage = None
    second_serve_win_pct: Percentage = None
    first_return_win_pct: Percentage = None
    second_return_win_pct: Percentage = None
    break_points_converted_pct: Percentage = None
    return_games_won_pct: Percentage = None

    # Surfaces
    hard_court_win_pct: Percentage = None
    clay_court_win_pct: Percentage = None
    grass_court_win_pct: Percentage = None
    surface_stats: Optional[Dict[str, SurfaceRecord]] = None

    # Form / condition
    recent_form: Optional[List[str]] = None
    fatigue_index: Optional[float] = None
    injury_risk: Optional[float] = None

    data_source: Optional[str] = None
    created_at: Optional[UtcDatetime] = None
    updated_at: Optional[UtcDatetime] = None

    model_config = ConfigDict(from_attributes=True, extra="ignore")

    @field_validator("recent_form", mode="before")
    @classmethod
    def _split_form(cls, value):
        # Accept "WWLWW" as well as ["W", "win", "L", ...]
        if value is None:
            return None
        if isinstance(value, str):
            value = list(value.strip())
        normalized = []
        for result in value:
            token = str(result).strip().lower()
            if token in ("w", "win"):
                normalized.append("W")
            elif token in ("l", "loss"):
                normalized.append("L")
        return normalized

    @property
    def name(self) -> str:
        if self.display_name:
            return self.display_name
        parts = [p for p in (self.first_name, self.last_name) if p]
        return " ".join(parts) or self.id

    def surface_win_pct(self, surface: str) -> Optional[float]:
        """Win percentage on a court surface; None for unknown surfaces."""
        return {
            "hard": self.hard_court_win_pct,
            "clay": self.clay_court_win_pct,
            "grass": self.grass_court_win_pct,
        }.get(surface)

    def surface_elo(self, surface: str) -> Optional[float]:
        return {
            "hard": self.hard_elo,
            "clay": self.clay_elo,
            "grass": self.grass_elo,
        }.get(surface)


class PlayerCreate(BaseModel):
    display_name: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    nationality: Optional[str] = None
    current_rank: Optional[int] = Field(default=None, gt=0)
    elo_rating: Optional[float] = None
    hard_elo: Optional[float] = None
    clay_elo: Optional[float] = None
    grass_elo: Optional[float] = None
    first_serve_win_pct: Percentage = None
    first_return_win_pct: Percentage = None
    break_points_converted_pct: Percentage = None
    hard_court_win_pct: Percentage = None
    clay_court_win_pct: Percentage = None
    grass_court_win_pct: Percentage = None
    recent_form: Optional[List[str]] = None
    data_source: Optional[str] = "manual"


class PlayerListItem(BaseModel):
    id: str
    display_name: Optional[str] = None
    current_rank: Optional[int] = None
    nationality: Optional[str] = None
    elo_rating: Optional[float] = None

    model_config = ConfigDict(from_attributes=True)


class PlayerUpdate(BaseModel):
    """Partial player update; only the supplied fields are written"""
    display_name: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    nationality: Optional[str] = None
    plays: Optional[str] = None
    current_rank: Optional[int] = Field(default=None, gt=0)
    peak_rank: Optional[int] = Field(default=None, gt=0)
    elo_rating: Optional[float] = None
    hard_elo: Optional[float] = None
    clay_elo: Optional[float] = None
    grass_elo: Optional[float] = None
    first_serve_pct: Percentage = None
    first_serve_win_pct: Percentage = None
    second_serve_win_pct: Percentage = None
    first_return_win_pct: Percentage = None
    second_return_win_pct: Percentage = None
    break_points_converted_pct: Percentage = None
    hard_court_win_pct: Percentage = None
    clay_court_win_pct: Percentage = None
    grass_court_win_pct: Percentage = None
    recent_form: Optional[List[str]] = None
    fatigue_index: Optional[float] = None
    injury_risk: Optional[float] = None
