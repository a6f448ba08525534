"""
Sample data for a fresh store.

Builds players with plausible stats, completed matches with heuristic and
ML predictions (including recorded outcomes, so analytics have something
to chew on), two compliance sources and one active weights row. Pass a
seeded numpy Generator for reproducible data.
"""

import logging
from datetime import timedelta
from typing import Any, Dict, List, Optional

import numpy as np

from courtside.ml.heuristic_models import generate_all_predictions
from courtside.ml.ml_model import generate_ml_prediction
from courtside.ml.probability_utils import resolve_rng
from courtside.services.data_client import DataClient
from courtside.services.defaults import utc_now
from courtside.services.prediction_service import result_payload
from courtside.utils.aliases import create_player_slug

logger = logging.getLogger(__name__)

FIRST_NAMES = [
    "Carlos", "Novak", "Rafael", "Roger", "Daniil", "Stefanos",
    "Alexander", "Andrey", "Jannik", "Holger", "Taylor", "Tommy",
]
LAST_NAMES = [
    "Alcaraz", "Djokovic", "Nadal", "Federer", "Medvedev", "Tsitsipas",
    "Zverev", "Rublev", "Sinner", "Rune", "Fritz", "Paul",
]
NATIONALITIES = ["ESP", "SRB", "ESP", "SUI", "RUS", "GRE", "GER", "RUS", "ITA", "DEN", "USA", "USA"]

SAMPLE_SURFACES = ["hard", "clay", "grass"]
SAMPLE_TOURNAMENTS = ["Australian Open", "French Open", "Wimbledon", "US Open"]

DEFAULT_COMPLIANCE_SOURCES = [
    {
        "data_source_name": "ATP Official",
        "compliance_status": "compliant",
        "reviewer": "Local Admin",
        "terms_url": "https://www.atptour.com",
        "notes": "Primary ranking feed",
    },
    {
        "data_source_name": "Tennis Abstract",
        "compliance_status": "pending_review",
        "reviewer": "Local Admin",
        "terms_url": "https://www.tennisabstract.com",
    },
]

DEFAULT_MODEL_WEIGHTS = {
    "model_version": "v4.2",
    "is_active": True,
    "ranking_weight": 0.25,
    "serve_weight": 0.18,
    "return_weight": 0.15,
    "surface_weight": 0.15,
    "h2h_weight": 0.10,
    "form_weight": 0.10,
    "fatigue_weight": 0.05,
    "injury_weight": 0.02,
    "notes": "Seeded local weights",
}


def _pct(rng: np.random.Generator, low: int, spread: int) -> int:
    return int(round(low + rng.random() * spread))


def build_sample_players(count: int = 14, rng: Optional[np.random.Generator] = None) -> List[Dict[str, Any]]:
    """Player payloads ranked 1..count"""
    rng = resolve_rng(rng)
    players = []

    for i in range(count):
        first = FIRST_NAMES[i % len(FIRST_NAMES)]
        last = LAST_NAMES[i % len(LAST_NAMES)]
        display = f"{first} {last}"
        players.append({
            "display_name": display,
            "first_name": first,
            "last_name": last,
            "slug": create_player_slug(display),
            "current_rank": i + 1,
            "nationality": NATIONALITIES[i % len(NATIONALITIES)],
            "plays": "left" if rng.random() > 0.8 else "right",
            "birth_year": 1986 + int(rng.integers(0, 12)),
            "height_cm": 180 + int(rng.integers(0, 15)),
            "first_serve_pct": _pct(rng, 55, 20),
            "first_serve_win_pct": _pct(rng, 60, 20),
            "second_serve_win_pct": _pct(rng, 45, 15),
            "first_return_win_pct": _pct(rng, 30, 15),
            "second_return_win_pct": _pct(rng, 40, 15),
            "break_points_converted_pct": _pct(rng, 30, 20),
            "hard_court_win_pct": _pct(rng, 55, 25),
            "clay_court_win_pct": _pct(rng, 55, 25),
            "grass_court_win_pct": _pct(rng, 55, 25),
            "elo_rating": 1800 + int(rng.integers(0, 300)),
            "recent_form": ["W" if rng.random() > 0.4 else "L" for _ in range(5)],
            "data_source": "sample",
        })

    return players


def sample_key_factors(model_type: str) -> str:
    factors = ["ranking", "serve_quality", "return_quality"]
    if model_type in ("ml", "ml_enhanced"):
        factors.append("ml_features")
    return ", ".join(factors)


async def seed_sample_data(
    client: DataClient,
    player_count: int = 14,
    rng: Optional[np.random.Generator] = None,
) -> Dict[str, int]:
    """
    Fill a data client with sample records.

    Every pair of consecutive players meets in one completed match with
    three heuristic predictions and one ML prediction; the winner is drawn
    from the balanced model's probability and recorded on each prediction.

    Returns:
        Count of created records per collection
    """
    rng = resolve_rng(rng)
    counts = {"players": 0, "matches": 0, "predictions": 0, "compliance": 0, "model_weights": 0}

    players = []
    for payload in build_sample_players(player_count, rng):
        players.append(await client.players.create(payload))
    counts["players"] = len(players)

    now = utc_now()
    for i in range(0, len(players) - 1, 2):
        player1, player2 = players[i], players[i + 1]
        match = await client.matches.create({
            "player1_id": player1.id,
            "player2_id": player2.id,
            "tournament_name": SAMPLE_TOURNAMENTS[i % len(SAMPLE_TOURNAMENTS)],
            "surface": SAMPLE_SURFACES[i % len(SAMPLE_SURFACES)],
            "round": "QF",
            "best_of": 3,
            "utc_start": now - timedelta(days=i),
            "status": "completed",
        })
        counts["matches"] += 1

        drafts = generate_all_predictions(match, player1, player2, rng=rng)
        drafts.append(generate_ml_prediction(match, player1, player2, rng=rng))

        balanced = drafts[1]
        winner_id = player1.id if rng.random() < balanced.player1_win_probability else player2.id

        for draft in drafts:
            prediction = await client.predictions.create({
                **draft.model_dump(),
                "match_id": match.id,
                "key_factors": sample_key_factors(draft.model_type),
            })
            await client.predictions.update(
                prediction.id,
                result_payload(prediction.predicted_winner_id, winner_id),
            )
            counts["predictions"] += 1

    for source in DEFAULT_COMPLIANCE_SOURCES:
        await client.compliance.create(source)
        counts["compliance"] += 1

    await client.model_weights.create(DEFAULT_MODEL_WEIGHTS)
    counts["model_weights"] = 1

    logger.info(f"Seeded sample data: {counts}")
    return counts
