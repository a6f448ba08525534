"""
Row mappers for the relational backend.

The relational schema uses its own column names for a few fields
(rank, elo, player_a_id, tournament, start_time_utc, win_prob_a, ...).
These helpers translate canonical record dicts to ORM attribute dicts and
back, so nothing above the storage adapter sees the column names.
"""

from typing import Any, Dict, Mapping, Optional, Type

from sqlalchemy import inspect

from courtside import models
from courtside.utils.aliases import create_player_slug

# canonical field -> ORM attribute
PLAYER_RENAMES = {
    "current_rank": "rank",
    "elo_rating": "elo",
}

MATCH_RENAMES = {
    "player1_id": "player_a_id",
    "player2_id": "player_b_id",
    "tournament_name": "tournament",
    "utc_start": "start_time_utc",
}

PREDICTION_RENAMES = {
    "player1_win_probability": "win_prob_a",
    "player2_win_probability": "win_prob_b",
    "metadata": "meta",
}

FEEDBACK_RENAMES = {
    "metadata": "meta",
}

COLLECTION_MODELS: Dict[str, Type] = {
    "players": models.Player,
    "matches": models.Match,
    "predictions": models.Prediction,
    "compliance": models.ComplianceSource,
    "model_weights": models.ModelWeights,
    "model_feedback": models.ModelFeedback,
    "alias": models.Alias,
}

COLLECTION_RENAMES: Dict[str, Dict[str, str]] = {
    "players": PLAYER_RENAMES,
    "matches": MATCH_RENAMES,
    "predictions": PREDICTION_RENAMES,
    "model_feedback": FEEDBACK_RENAMES,
}

# Sort fields accepted for server-side ordering
PLAYER_SORT_MAP = {
    "created_date": "created_at",
    "created_at": "created_at",
    "display_name": "display_name",
    "canonical_name": "canonical_name",
    "current_rank": "rank",
    "rank": "rank",
}

MATCH_SORT_MAP = {
    "created_date": "created_at",
    "created_at": "created_at",
    "utc_start": "start_time_utc",
}

PREDICTION_SORT_MAP = {
    "created_date": "created_at",
    "created_at": "created_at",
}

COLLECTION_SORT_MAPS: Dict[str, Dict[str, str]] = {
    "players": PLAYER_SORT_MAP,
    "matches": MATCH_SORT_MAP,
    "predictions": PREDICTION_SORT_MAP,
}


def column_keys(orm_model: Type) -> list:
    return [attr.key for attr in inspect(orm_model).column_attrs]


def sort_column(collection: str, field: str) -> Optional[str]:
    """ORM attribute to order by for a canonical sort field, or None if unsortable server-side"""
    sort_map = COLLECTION_SORT_MAPS.get(collection)
    column = sort_map.get(field, field) if sort_map else field
    return column if column in column_keys(COLLECTION_MODELS[collection]) else None


def _player_row_extras(record: Mapping[str, Any], row: Dict[str, Any], partial: bool) -> None:
    if partial and "display_name" not in record and "first_name" not in record:
        return
    canonical_name = record.get("display_name") or record.get("first_name") or "Unknown Player"
    row["canonical_name"] = canonical_name
    if not partial:
        row["display_name"] = record.get("display_name") or canonical_name
        row["slug"] = record.get("slug") or create_player_slug(canonical_name)
        row["hand"] = record.get("plays")
        row["data_source"] = record.get("data_source") or "manual"


def _match_row_extras(record: Mapping[str, Any], row: Dict[str, Any], partial: bool) -> None:
    if partial and "odds" not in record:
        return
    odds = record.get("odds") or {}
    row["player_a_odds"] = odds.get("player1_odds")
    row["player_b_odds"] = odds.get("player2_odds")


ROW_EXTRAS = {
    "players": _player_row_extras,
    "matches": _match_row_extras,
}


def to_row(collection: str, record: Mapping[str, Any], partial: bool = False) -> Dict[str, Any]:
    """
    Translate a canonical record into ORM attributes.

    A full row carries every column, with None for absent fields. A
    partial row only carries the supplied fields (used for updates).
    """
    renames = COLLECTION_RENAMES.get(collection, {})
    columns = set(column_keys(COLLECTION_MODELS[collection]))

    row: Dict[str, Any] = {} if partial else {column: None for column in columns}
    for field, value in record.items():
        column = renames.get(field, field)
        if column in columns:
            row[column] = value

    extras = ROW_EXTRAS.get(collection)
    if extras is not None:
        extras(record, row, partial)

    if not partial:
        # Let server defaults fill timestamps that were not supplied
        for column in ("created_at", "updated_at"):
            if column in row and row[column] is None:
                del row[column]
    return row


def from_row(collection: str, instance: Any) -> Dict[str, Any]:
    """Translate an ORM instance back into a canonical record dict"""
    reverse = {column: field for field, column in COLLECTION_RENAMES.get(collection, {}).items()}

    record: Dict[str, Any] = {}
    for column in column_keys(type(instance)):
        record[reverse.get(column, column)] = getattr(instance, column)

    if collection == "players":
        record["display_name"] = record.get("display_name") or record.get("canonical_name")
        record["plays"] = record.get("plays") or record.get("hand")
    elif collection == "matches":
        if record.get("player_a_odds") and record.get("player_b_odds"):
            record["odds"] = {
                "player1_odds": record["player_a_odds"],
                "player2_odds": record["player_b_odds"],
            }
        else:
            record["odds"] = None

    return record
