"""
Advanced Tennis Prediction Models

- ELO rating model with surface-specific ratings, form and home adjustments
- Surface expertise model
- Serve/return statistics model (ensemble component only)
- Ensemble model combining the above with market odds

All probabilities in this module are percentages (0-100).
"""

import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

from courtside.ml.probability_utils import clamp, confidence_from_gap
from courtside.schemas.enums import ModelType
from courtside.schemas.match import MatchOdds
from courtside.schemas.player import Player
from courtside.schemas.prediction import ComponentPrediction, PredictionBase
from courtside.utils.odds_conversion import devig_two_way

logger = logging.getLogger(__name__)

BASE_ELO = 1500
ELO_PER_WIN_PCT = 25
FORM_WINDOW = 5
FORM_MAX_SCORE = 15  # 1+2+3+4+5
FORM_SCALE = 3
HOME_ADVANTAGE = 2

K_FACTOR = 32
K_FACTOR_GRAND_SLAM = 48
K_FACTOR_MASTERS = 40
K_FACTOR_ATP500 = 36
K_FACTOR_ATP250 = 32

GRAND_SLAM_NAMES = ("grand slam", "australian open", "french open", "roland garros", "wimbledon", "us open")

# Ensemble weights
ENSEMBLE_ELO_WEIGHT = 0.40
ENSEMBLE_SURFACE_WEIGHT = 0.30
ENSEMBLE_ODDS_WEIGHT = 0.20
ENSEMBLE_STATS_WEIGHT = 0.10
# Without odds ELO and surface are each set to 0.5
ENSEMBLE_NO_ODDS_WEIGHT = 0.50


def _round1(value: float) -> float:
    return round(value, 1)


def _normalize_pct(prob1: float, prob2: float) -> Tuple[float, float]:
    total = prob1 + prob2
    return prob1 / total * 100, prob2 / total * 100


# ============================================================================
# ELO
# ============================================================================

def elo_win_probability(elo_a: float, elo_b: float) -> float:
    """Probability (0-1) that a player rated elo_a beats one rated elo_b"""
    return 1 / (1 + 10 ** ((elo_b - elo_a) / 400))


def update_elo_rating(current_elo: float, expected_score: float, actual_score: float, k_factor: float = K_FACTOR) -> float:
    return current_elo + k_factor * (actual_score - expected_score)


def get_surface_elo(player: Player, surface: str) -> float:
    """
    Resolve a player's rating for a surface.

    Priority: explicit surface ELO, estimate from surface win % (50% = 1500,
    each point = 25 ELO), general ELO, then the 1500 baseline.
    """
    surface_elo = player.surface_elo(surface)
    if surface_elo:
        return surface_elo

    win_pct = player.surface_win_pct(surface)
    if win_pct:
        return BASE_ELO + (win_pct - 50) * ELO_PER_WIN_PCT

    return player.elo_rating or BASE_ELO


def calculate_form_score(recent_form: Optional[Sequence[str]]) -> float:
    """Recency-weighted form over the last five results, on a -5..5 scale"""
    if not recent_form:
        return 0.0

    score = 0
    for index, result in enumerate(list(recent_form)[-FORM_WINDOW:]):
        if result == "W":
            score += index + 1

    return ((score / FORM_MAX_SCORE) - 0.5) * 10


def _is_home(location: Optional[str], nationality: Optional[str]) -> bool:
    return bool(location and nationality and nationality in location)


def predict_with_elo(
    player1: Player,
    player2: Player,
    surface: str = "hard",
    match_context: Optional[Dict[str, Any]] = None,
) -> PredictionBase:
    """
    ELO-based prediction with form and home-court adjustments.

    Args:
        player1: First player
        player2: Second player
        surface: Court surface
        match_context: Optional tournament/round/location info

    Returns:
        PredictionBase with percentage probabilities
    """
    match_context = match_context or {}

    elo1 = get_surface_elo(player1, surface)
    elo2 = get_surface_elo(player2, surface)

    prob1 = elo_win_probability(elo1, elo2) * 100
    prob2 = 100 - prob1

    form1 = calculate_form_score(player1.recent_form)
    form2 = calculate_form_score(player2.recent_form)
    form_diff = (form1 - form2) * FORM_SCALE
    prob1 += form_diff
    prob2 -= form_diff

    location = match_context.get("location")
    is_home1 = _is_home(location, player1.nationality)
    is_home2 = _is_home(location, player2.nationality)
    if is_home1 and not is_home2:
        prob1 += HOME_ADVANTAGE
        prob2 -= HOME_ADVANTAGE
    elif is_home2 and not is_home1:
        prob1 -= HOME_ADVANTAGE
        prob2 += HOME_ADVANTAGE

    # Form can push a side past 100; keep both inside the percentage range
    prob1 = clamp(prob1, 0.0, 100.0)
    prob2 = clamp(prob2, 0.0, 100.0)
    prob1, prob2 = _normalize_pct(prob1, prob2)
    player1_favored = prob1 > prob2

    return PredictionBase(
        match_id=match_context.get("match_id"),
        model_type=ModelType.ELO,
        player1_win_probability=_round1(prob1),
        player2_win_probability=_round1(prob2),
        predicted_winner_id=player1.id if player1_favored else player2.id,
        predicted_winner_name=player1.name if player1_favored else player2.name,
        confidence_level=confidence_from_gap(abs(prob1 - prob2), high=30, medium=15),
        key_factors=(
            f"ELO: {round(elo1)} vs {round(elo2)} • "
            f"Form: {form1:.1f} vs {form2:.1f} • Surface: {surface}"
        ),
        elo_ratings={"player1": round(elo1), "player2": round(elo2)},
    )


# ============================================================================
# SURFACE EXPERTISE
# ============================================================================

def calculate_surface_expertise(player: Player, surface: str) -> float:
    """Surface mastery on a 0-100 scale (50 when nothing is known)"""
    score = 50.0

    win_pct = player.surface_win_pct(surface)
    if win_pct:
        score = win_pct

    record = (player.surface_stats or {}).get(surface)
    if record is not None and record.total > 0:
        score = record.wins / record.total * 100

    return score


def predict_with_surface_expertise(player1: Player, player2: Player, surface: str = "hard") -> PredictionBase:
    """Surface specialists get significant boosts on their preferred surface."""
    expertise1 = calculate_surface_expertise(player1, surface)
    expertise2 = calculate_surface_expertise(player2, surface)

    # Each point of expertise is worth half a point of probability
    prob1 = 50 + (expertise1 - expertise2) * 0.5
    prob2 = 100 - prob1

    if player1.current_rank and player2.current_rank:
        rank_factor = clamp((player2.current_rank - player1.current_rank) / 50, -10, 10)
        prob1 += rank_factor
        prob2 -= rank_factor

    prob1 = clamp(prob1, 0.0, 100.0)
    prob2 = clamp(prob2, 0.0, 100.0)
    prob1, prob2 = _normalize_pct(prob1, prob2)
    player1_favored = prob1 > prob2

    return PredictionBase(
        model_type=ModelType.SURFACE_EXPERT,
        player1_win_probability=_round1(prob1),
        player2_win_probability=_round1(prob2),
        predicted_winner_id=player1.id if player1_favored else player2.id,
        predicted_winner_name=player1.name if player1_favored else player2.name,
        confidence_level=confidence_from_gap(abs(prob1 - prob2), high=35, medium=20),
        key_factors=f"{surface} expertise: {expertise1:.0f} vs {expertise2:.0f}",
        surface_expertise={"player1": expertise1, "player2": expertise2},
    )


# ============================================================================
# STATISTICS
# ============================================================================

def calculate_stats_based_probability(player1: Player, player2: Player) -> float:
    """Player 1 win percentage from serve, return and break-point stats"""
    def score(player: Player) -> float:
        value = 50.0
        if player.first_serve_win_pct:
            value += (player.first_serve_win_pct - 70) * 0.2
        if player.first_return_win_pct:
            value += (player.first_return_win_pct - 40) * 0.15
        if player.break_points_converted_pct:
            value += (player.break_points_converted_pct - 40) * 0.1
        return value

    score1 = score(player1)
    score2 = score(player2)
    return score1 / (score1 + score2) * 100


# ============================================================================
# ENSEMBLE
# ============================================================================

def _coerce_odds(odds: Any) -> Optional[MatchOdds]:
    if odds is None:
        return None
    if isinstance(odds, MatchOdds):
        return odds
    if isinstance(odds, dict) and odds.get("player1_odds") and odds.get("player2_odds"):
        return MatchOdds(player1_odds=odds["player1_odds"], player2_odds=odds["player2_odds"])
    return None


def predict_with_ensemble(
    player1: Player,
    player2: Player,
    surface: str = "hard",
    odds: Optional[Any] = None,
    match_context: Optional[Dict[str, Any]] = None,
) -> PredictionBase:
    """
    Weighted combination of ELO (40%), surface expertise (30%), market odds
    (20%, when supplied) and serve/return stats (10%, when both players have
    serve data). Without odds, ELO and surface are each weighted 50%.
    """
    market = _coerce_odds(odds)
    elo_pred = predict_with_elo(player1, player2, surface, match_context)
    surface_pred = predict_with_surface_expertise(player1, player2, surface)

    components: List[Tuple[str, float, float]] = []
    if market is not None:
        components.append(("ELO", elo_pred.player1_win_probability, ENSEMBLE_ELO_WEIGHT))
        components.append(("Surface", surface_pred.player1_win_probability, ENSEMBLE_SURFACE_WEIGHT))
        market_prob1, _ = devig_two_way(market.player1_odds, market.player2_odds)
        components.append(("Odds", market_prob1 * 100, ENSEMBLE_ODDS_WEIGHT))
    else:
        components.append(("ELO", elo_pred.player1_win_probability, ENSEMBLE_NO_ODDS_WEIGHT))
        components.append(("Surface", surface_pred.player1_win_probability, ENSEMBLE_NO_ODDS_WEIGHT))

    if player1.first_serve_win_pct and player2.first_serve_win_pct:
        components.append(("Stats", calculate_stats_based_probability(player1, player2), ENSEMBLE_STATS_WEIGHT))

    total_weight = sum(weight for _, _, weight in components)
    final_prob1 = sum(prob * weight for _, prob, weight in components) / total_weight
    final_prob2 = 100 - final_prob1
    player1_favored = final_prob1 > final_prob2

    weight_labels = ", ".join(f"{label} {weight * 100:.0f}%" for label, _, weight in components)

    return PredictionBase(
        match_id=(match_context or {}).get("match_id"),
        model_type=ModelType.ENSEMBLE,
        player1_win_probability=_round1(final_prob1),
        player2_win_probability=_round1(final_prob2),
        predicted_winner_id=player1.id if player1_favored else player2.id,
        predicted_winner_name=player1.name if player1_favored else player2.name,
        confidence_level=confidence_from_gap(abs(final_prob1 - final_prob2), high=30, medium=15),
        key_factors=f"Ensemble ({weight_labels})",
        component_predictions=[
            ComponentPrediction(model=label, prob=_round1(prob), weight=weight)
            for label, prob, weight in components
        ],
        elo_ratings=elo_pred.elo_ratings,
        surface_expertise=surface_pred.surface_expertise,
    )


# ============================================================================
# TOURNAMENT IMPORTANCE
# ============================================================================

def get_tournament_importance(tournament_name: Optional[str] = "") -> Dict[str, Any]:
    """K-factor and importance label for a tournament name"""
    name = (tournament_name or "").lower()

    if any(slam in name for slam in GRAND_SLAM_NAMES):
        return {"k_factor": K_FACTOR_GRAND_SLAM, "importance": "grand_slam"}
    if "masters" in name or "1000" in name:
        return {"k_factor": K_FACTOR_MASTERS, "importance": "masters"}
    if "500" in name:
        return {"k_factor": K_FACTOR_ATP500, "importance": "atp500"}
    return {"k_factor": K_FACTOR_ATP250, "importance": "atp250"}
