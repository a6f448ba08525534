"""
Create-time defaults per collection, shared by both backends.
"""

from datetime import datetime, timezone
from typing import Any, Dict

from courtside.utils.aliases import create_player_slug

DEFAULT_TOURNAMENT = "Local Tournament"
DEFAULT_ROUND = "R16"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _player_defaults(data: Dict[str, Any], now: datetime) -> Dict[str, Any]:
    defaults = {"created_at": now}
    if not data.get("slug") and data.get("display_name"):
        defaults["slug"] = create_player_slug(data["display_name"])
    return defaults


def _match_defaults(data: Dict[str, Any], now: datetime) -> Dict[str, Any]:
    return {
        "created_at": now,
        "surface": "hard",
        "tournament_name": DEFAULT_TOURNAMENT,
        "round": DEFAULT_ROUND,
        "best_of": 3,
        "status": "scheduled",
        "utc_start": now,
    }


def _prediction_defaults(data: Dict[str, Any], now: datetime) -> Dict[str, Any]:
    return {"created_at": now, "confidence_level": "medium"}


def _compliance_defaults(data: Dict[str, Any], now: datetime) -> Dict[str, Any]:
    return {"compliance_status": "pending_review", "last_reviewed": now}


def _weights_defaults(data: Dict[str, Any], now: datetime) -> Dict[str, Any]:
    return {"last_updated": now}


def _feedback_defaults(data: Dict[str, Any], now: datetime) -> Dict[str, Any]:
    return {"feedback_date": now}


def _alias_defaults(data: Dict[str, Any], now: datetime) -> Dict[str, Any]:
    return {"created_at": now}


COLLECTION_DEFAULTS = {
    "players": _player_defaults,
    "matches": _match_defaults,
    "predictions": _prediction_defaults,
    "compliance": _compliance_defaults,
    "model_weights": _weights_defaults,
    "model_feedback": _feedback_defaults,
    "alias": _alias_defaults,
}

# Prefixes for the in-memory '<prefix>-<n>' ids
ID_PREFIXES = {
    "players": "player",
    "matches": "match",
    "predictions": "prediction",
    "compliance": "compliance",
    "model_weights": "modelWeights",
    "model_feedback": "modelFeedback",
    "alias": "alias",
}

# Timestamp used to order unsorted listings, newest first
RECENCY_FIELDS = {
    "players": "created_at",
    "matches": "created_at",
    "predictions": "created_at",
    "compliance": "last_reviewed",
    "model_weights": "last_updated",
    "model_feedback": "feedback_date",
    "alias": "created_at",
}


def apply_defaults(collection: str, data: Dict[str, Any]) -> Dict[str, Any]:
    """Fill keys that are absent or None with the collection's defaults"""
    merged = dict(data)
    for key, value in COLLECTION_DEFAULTS[collection](data, utc_now()).items():
        if merged.get(key) is None:
            merged[key] = value
    return merged
