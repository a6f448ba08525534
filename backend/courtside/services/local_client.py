"""
In-memory data client

Process-local storage used when no relational backend is configured (and
as the reference behavior for the relational client). Records live in
plain lists, newest first; every read returns a copy.
"""

import copy
import logging
from typing import Any, Dict, List, Optional, Type

from pydantic import BaseModel

from courtside.schemas import Match, ModelWeights, Prediction
from courtside.services.data_client import (
    COLLECTION_SCHEMAS,
    Collection,
    DataClient,
    ListQuery,
    NotFoundError,
    Payload,
    WeightsCollection,
    payload_to_dict,
)
from courtside.services.defaults import ID_PREFIXES, apply_defaults, utc_now
from courtside.services.feedback import derive_feedback
from courtside.services.query import run_query

logger = logging.getLogger(__name__)


# ============================================================================
# COLLECTIONS
# ============================================================================

class LocalCollection(Collection):
    """List-backed collection. Ids are '<prefix>-<n>' from a per-client counter."""

    def __init__(self, client: "LocalDataClient", name: str):
        self.client = client
        self.name = name
        self.schema: Type[BaseModel] = COLLECTION_SCHEMAS[name]
        self.id_prefix = ID_PREFIXES[name]
        self.records: List[Dict[str, Any]] = []

    def _to_schema(self, record: Dict[str, Any]):
        return self.schema.model_validate(copy.deepcopy(record))

    def _find_index(self, record_id: str) -> int:
        for index, record in enumerate(self.records):
            if record.get("id") == record_id:
                return index
        return -1

    def _insert(self, data: Payload):
        record = apply_defaults(self.name, payload_to_dict(data))

        # Id assignment and insertion happen in one step, with no await between them
        if not record.get("id"):
            record["id"] = self.client.generate_id(self.id_prefix)
        validated = self.schema.model_validate(record)
        self.records.insert(0, validated.model_dump())
        return self._to_schema(self.records[0])

    def _replace(self, record_id: str, data: Payload):
        index = self._find_index(record_id)
        if index == -1:
            raise NotFoundError(self.name, record_id)

        changes = payload_to_dict(data, partial=True)
        changes.pop("id", None)
        merged = {**self.records[index], **changes}
        validated = self.schema.model_validate(merged)
        self.records[index] = validated.model_dump()
        return self._to_schema(self.records[index])

    async def list(self, options: ListQuery = None):
        return [self._to_schema(record) for record in run_query(self.records, options)]

    async def get(self, record_id: str):
        index = self._find_index(record_id)
        return self._to_schema(self.records[index]) if index != -1 else None

    async def create(self, data: Payload):
        return self._insert(data)

    async def update(self, record_id: str, data: Payload):
        return self._replace(record_id, data)

    async def remove(self, record_id: str) -> None:
        # Removing an unknown id is a no-op
        index = self._find_index(record_id)
        if index != -1:
            del self.records[index]


class LocalPredictionCollection(LocalCollection):
    """Predictions; every write of a prediction for a known match derives feedback."""

    def _record_feedback(self, prediction: Prediction) -> None:
        matches = self.client.matches
        index = matches._find_index(prediction.match_id)
        if index == -1:
            return
        match = Match.model_validate(matches.records[index])
        self.client.model_feedback._insert(derive_feedback(prediction, match))

    async def create(self, data: Payload) -> Prediction:
        prediction = self._insert(data)
        self._record_feedback(prediction)
        return prediction

    async def update(self, record_id: str, data: Payload) -> Prediction:
        prediction = self._replace(record_id, data)
        self._record_feedback(prediction)
        return prediction


class LocalWeightsCollection(LocalCollection, WeightsCollection):
    def _deactivate_others(self, active_id: str) -> None:
        for record in self.records:
            if record["id"] != active_id and record.get("is_active"):
                record["is_active"] = False

    async def create(self, data: Payload) -> ModelWeights:
        weights = self._insert(data)
        if weights.is_active:
            self._deactivate_others(weights.id)
        return weights

    async def update(self, record_id: str, data: Payload) -> ModelWeights:
        weights = self._replace(record_id, data)
        if weights.is_active:
            self._deactivate_others(weights.id)
        return weights

    async def activate(self, record_id: str) -> ModelWeights:
        weights = self._replace(record_id, {"is_active": True, "last_updated": utc_now()})
        self._deactivate_others(record_id)
        logger.info(f"Activated model weights {record_id} ({weights.model_version})")
        return weights


# ============================================================================
# CLIENT
# ============================================================================

class LocalDataClient(DataClient):
    """
    In-memory implementation of the data client.

    Seeding is done separately (see courtside.services.sample_data) so the
    same routine can fill either backend.
    """

    source = "local"

    def __init__(self):
        super().__init__()
        self._counters: Dict[str, int] = {}

        self.players = LocalCollection(self, "players")
        self.matches = LocalCollection(self, "matches")
        self.predictions = LocalPredictionCollection(self, "predictions")
        self.compliance = LocalCollection(self, "compliance")
        self.model_weights = LocalWeightsCollection(self, "model_weights")
        self.model_feedback = LocalCollection(self, "model_feedback")
        self.alias = LocalCollection(self, "alias")

    def generate_id(self, prefix: str) -> str:
        self._counters[prefix] = self._counters.get(prefix, 0) + 1
        return f"{prefix}-{self._counters[prefix]}"

    def reset(self) -> None:
        """Drop every record and restart the id counters"""
        self._counters.clear()
        for collection in (
            self.players,
            self.matches,
            self.predictions,
            self.compliance,
            self.model_weights,
            self.model_feedback,
            self.alias,
        ):
            collection.records.clear()


_local_client: Optional[LocalDataClient] = None


def get_local_client() -> LocalDataClient:
    """
    Get the process-wide in-memory client.

    Returns:
        LocalDataClient instance
    """
    global _local_client

    if _local_client is None:
        _local_client = LocalDataClient()

    return _local_client
