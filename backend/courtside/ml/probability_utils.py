"""
Probability helpers shared by the prediction models.

Every stochastic helper takes an optional numpy Generator so callers (and
tests) can seed the randomness; without one a fresh default_rng() is used.
"""

import math
from dataclasses import dataclass
from typing import Any, Dict, Iterator, Optional, Tuple

import numpy as np

from courtside.schemas.enums import ConfidenceLevel
from courtside.schemas.match import Match
from courtside.schemas.player import Player

BASE_PROBABILITY_FLOOR = 0.35
BASE_PROBABILITY_CEILING = 0.65
MAX_RANKING_SHIFT = 0.2
MAX_STAT_SHIFT = 0.1

VARIANCE_FLOOR = 0.01
VARIANCE_CEILING = 0.99

MOMENTUM_LIMIT = 0.15
MOMENTUM_STEP = 0.05
MOMENTUM_DECAY = 0.95
SNAPSHOT_FLOOR = 0.3
SNAPSHOT_CEILING = 0.7

# Units per simulated match, keyed by (unit, best_of)
UNIT_COUNTS = {
    ("game", 3): 30,
    ("game", 5): 50,
    ("point", 3): 120,
    ("point", 5): 200,
}


@dataclass(frozen=True)
class ModelConfig:
    type: str
    variance: float
    favorite_boost: float


def round2(value: float) -> float:
    return round(value, 2)


def rounded_pair(p1_prob: float) -> Tuple[float, float]:
    """Round player 1 to two decimals and derive player 2 so the pair sums to 1"""
    rounded = round2(p1_prob)
    return rounded, round2(1 - rounded)


def clamp(value: float, low: float, high: float) -> float:
    return min(high, max(low, value))


def resolve_rng(rng: Optional[np.random.Generator]) -> np.random.Generator:
    return rng if rng is not None else np.random.default_rng()


def _percentage_shift(value1: Optional[float], value2: Optional[float]) -> float:
    # Missing on either side is neutral, not evidence of weakness
    if value1 is None or value2 is None:
        return 0.0
    return clamp((value1 - value2) / 200, -MAX_STAT_SHIFT, MAX_STAT_SHIFT)


def calculate_base_probabilities(player1: Player, player2: Player, match: Match) -> Tuple[float, float]:
    """
    Deterministic pre-variance probabilities shared by the heuristic models.

    Starts at 0.5, shifts by the ranking gap (at most 0.2) and by serve,
    return and surface percentage gaps (at most 0.1 each), then clamps to
    [0.35, 0.65] so stats alone never claim near-certainty.
    """
    p1_prob = 0.5

    if player1.current_rank is not None and player2.current_rank is not None:
        rank_shift = (player2.current_rank - player1.current_rank) / 200
        p1_prob += clamp(rank_shift, -MAX_RANKING_SHIFT, MAX_RANKING_SHIFT)

    p1_prob += _percentage_shift(player1.first_serve_win_pct, player2.first_serve_win_pct)
    p1_prob += _percentage_shift(player1.first_return_win_pct, player2.first_return_win_pct)
    p1_prob += _percentage_shift(
        player1.surface_win_pct(match.surface),
        player2.surface_win_pct(match.surface),
    )

    p1_prob = clamp(p1_prob, BASE_PROBABILITY_FLOOR, BASE_PROBABILITY_CEILING)
    return p1_prob, 1 - p1_prob


def apply_model_variance(
    base: Tuple[float, float],
    model: ModelConfig,
    player1: Player,
    player2: Player,
    rng: Optional[np.random.Generator] = None,
) -> Tuple[float, float]:
    """
    Apply a model's favorite boost and random perturbation.

    Not deterministic unless a seeded rng is supplied. Output is clamped to
    [0.01, 0.99] and always sums to 1.
    """
    rng = resolve_rng(rng)
    base_p1, base_p2 = base

    favorite = player1 if base_p1 > base_p2 else player2
    scale = model.favorite_boost if favorite is player1 else 1 / model.favorite_boost

    perturbation = rng.uniform(-model.variance, model.variance)
    p1_prob = clamp(base_p1 * scale + perturbation, VARIANCE_FLOOR, VARIANCE_CEILING)
    return p1_prob, 1 - p1_prob


def generate_point_by_point_data(
    p1_prob: float,
    p2_prob: float,
    best_of: int,
    unit: str = "game",
    rng: Optional[np.random.Generator] = None,
) -> Iterator[Dict[str, Any]]:
    """
    Lazily simulate a probability-over-time curve.

    A bounded momentum random walk drifts around the base probability, so
    consecutive snapshots trend gently instead of jumping independently.
    The generator is finite and single-use.
    """
    if (unit, best_of) not in UNIT_COUNTS:
        raise ValueError(f"Unsupported unit/best_of combination: {unit}/{best_of}")

    rng = resolve_rng(rng)
    total = p1_prob + p2_prob
    base = p1_prob / total if total > 0 else 0.5
    momentum = 0.0

    for index in range(UNIT_COUNTS[(unit, best_of)]):
        momentum = clamp(momentum + rng.uniform(-MOMENTUM_STEP, MOMENTUM_STEP), -MOMENTUM_LIMIT, MOMENTUM_LIMIT)
        momentum *= MOMENTUM_DECAY

        player1_probability = round2(clamp(base + momentum, SNAPSHOT_FLOOR, SNAPSHOT_CEILING))
        snapshot = {
            unit: index + 1,
            "player1_probability": player1_probability,
            "player2_probability": round2(1 - player1_probability),
        }
        if unit == "point":
            snapshot["game"] = index // 6 + 1
            snapshot["set"] = index // 36 + 1
        else:
            snapshot["set"] = index // 10 + 1
        yield snapshot


# ============================================================================
# DERIVED FIELDS
# ============================================================================

def confidence_from_max_probability(max_prob: float) -> str:
    """Unit-space tiers used by the heuristic and ML models"""
    if max_prob < 0.55:
        return ConfidenceLevel.LOW.value
    if max_prob <= 0.70:
        return ConfidenceLevel.MEDIUM.value
    return ConfidenceLevel.HIGH.value


def confidence_from_gap(gap: float, high: float, medium: float) -> str:
    """Percentage-space tiers from the absolute gap between both players"""
    if gap > high:
        return ConfidenceLevel.HIGH.value
    if gap > medium:
        return ConfidenceLevel.MEDIUM.value
    return ConfidenceLevel.LOW.value


def predicted_sets(max_prob: float, best_of: int) -> str:
    if best_of == 5:
        return "3-0" if max_prob > 0.65 else "3-1"
    return "2-0" if max_prob > 0.65 else "2-1"


def set_probabilities(max_prob: float) -> Tuple[int, int]:
    """Returns (prob_straight_sets, prob_deciding_set) on a 0-100 scale"""
    prob_straight_sets = math.floor((max_prob - 0.5) * 200 + 0.5)
    prob_deciding_set = max(0, 100 - prob_straight_sets)
    return prob_straight_sets, prob_deciding_set


def as_unit_probability(value: float, percentage_scale: bool) -> float:
    return value / 100 if percentage_scale else value
