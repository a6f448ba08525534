"""
Data client contract

Both storage backends (in-memory and relational) expose the same
collections with the same list/get/create/update/remove semantics. Records
cross this boundary as canonical pydantic schemas; payloads may be dicts
or schema instances.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Generic, List, Mapping, Optional, Type, TypeVar, Union

from pydantic import BaseModel

from courtside.schemas import (
    Alias,
    AuthUser,
    ComplianceSource,
    Match,
    ModelFeedback,
    ModelWeights,
    Player,
    Prediction,
)

T = TypeVar("T", bound=BaseModel)


class NotFoundError(LookupError):
    """Raised when a record id does not exist in a collection"""

    def __init__(self, collection: str, record_id: str):
        self.collection = collection
        self.record_id = record_id
        super().__init__(f"{collection} record not found: {record_id}")


class DataStoreError(RuntimeError):
    """Raised when the relational backend reports an error"""


@dataclass
class ListOptions:
    filters: Optional[Dict[str, Any]] = None
    sort: Optional[str] = None
    limit: Optional[int] = None


ListQuery = Union[None, str, ListOptions, Mapping[str, Any]]
Payload = Union[Mapping[str, Any], BaseModel]


def payload_to_dict(data: Payload, partial: bool = False) -> Dict[str, Any]:
    """Turn a dict or schema instance into a plain dict"""
    if isinstance(data, BaseModel):
        return data.model_dump(exclude_unset=partial)
    return dict(data)


# Collection name -> canonical schema
COLLECTION_SCHEMAS: Dict[str, Type[BaseModel]] = {
    "players": Player,
    "matches": Match,
    "predictions": Prediction,
    "compliance": ComplianceSource,
    "model_weights": ModelWeights,
    "model_feedback": ModelFeedback,
    "alias": Alias,
}

DEFAULT_USER = AuthUser(
    id="local-admin",
    display_name="Local Admin",
    full_name="Local Admin",
    email="admin@local.app",
    role="admin",
)


class Collection(ABC, Generic[T]):
    """One entity collection of a data client"""

    name: str
    schema: Type[T]

    @abstractmethod
    async def list(self, options: ListQuery = None) -> List[T]:
        ...

    @abstractmethod
    async def get(self, record_id: str) -> Optional[T]:
        ...

    @abstractmethod
    async def create(self, data: Payload) -> T:
        ...

    @abstractmethod
    async def update(self, record_id: str, data: Payload) -> T:
        ...

    @abstractmethod
    async def remove(self, record_id: str) -> None:
        ...


class AuthService:
    """Authentication is handled outside this service; these are no-ops."""

    async def me(self) -> AuthUser:
        return DEFAULT_USER.model_copy()

    def logout(self) -> None:
        return None

    def redirect_to_login(self) -> None:
        return None


class AppLogService:
    async def log_user_in_app(self, *args, **kwargs) -> None:
        return None


class DataClient(ABC):
    """
    Entry point for all persistence.

    Attributes:
        players, matches, predictions, compliance, model_weights,
        model_feedback, alias: entity collections
        auth, app_logs: no-op collaborators
    """

    source: str = ""

    players: Collection[Player]
    matches: Collection[Match]
    predictions: Collection[Prediction]
    compliance: Collection[ComplianceSource]
    model_weights: "WeightsCollection"
    model_feedback: Collection[ModelFeedback]
    alias: Collection[Alias]

    def __init__(self):
        self.auth = AuthService()
        self.app_logs = AppLogService()

    async def close(self) -> None:
        return None


class WeightsCollection(Collection[ModelWeights]):
    """ModelWeights collection; at most one row is active at a time"""

    @abstractmethod
    async def activate(self, record_id: str) -> ModelWeights:
        ...

    async def get_active(self) -> Optional[ModelWeights]:
        active = await self.list(ListOptions(filters={"is_active": True}, sort="-last_updated", limit=1))
        return active[0] if active else None
