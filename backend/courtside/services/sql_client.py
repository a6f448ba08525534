"""
Relational data client

SQLAlchemy async implementation of the data client (PostgreSQL via
asyncpg in production, SQLite via aiosqlite in tests). Behaves like the
in-memory client: ordering is pushed to the database where the column
exists, then filters, sort and limit are re-applied on the mapped records
so $contains/$in/$or and nulls-last ordering match exactly.
"""

import logging
import uuid
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional, Type

from pydantic import BaseModel
from sqlalchemy import delete, select, update as sql_update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from courtside.config import settings
from courtside.database import create_all, create_engine_for_url, create_session_factory
from courtside.schemas import Match, ModelWeights, Prediction
from courtside.services.data_client import (
    COLLECTION_SCHEMAS,
    Collection,
    DataClient,
    DataStoreError,
    ListQuery,
    NotFoundError,
    Payload,
    WeightsCollection,
    payload_to_dict,
)
from courtside.services.defaults import RECENCY_FIELDS, apply_defaults, utc_now
from courtside.services.feedback import derive_feedback
from courtside.services.mappers import COLLECTION_MODELS, from_row, sort_column, to_row
from courtside.services.query import normalize_options, parse_sort, run_query

logger = logging.getLogger(__name__)


class SqlCollection(Collection):
    def __init__(self, client: "SqlDataClient", name: str):
        self.client = client
        self.name = name
        self.schema: Type[BaseModel] = COLLECTION_SCHEMAS[name]
        self.orm_model = COLLECTION_MODELS[name]

    def _to_schema(self, instance):
        return self.schema.model_validate(from_row(self.name, instance))

    def _order_by(self, sort: Optional[str]):
        parsed = parse_sort(sort)
        if parsed is None:
            column = RECENCY_FIELDS[self.name]
            return getattr(self.orm_model, column).desc().nulls_last(), True

        field, descending = parsed
        column = sort_column(self.name, field)
        if column is None:
            return None, False
        attr = getattr(self.orm_model, column)
        return (attr.desc() if descending else attr.asc()).nulls_last(), True

    async def list(self, options: ListQuery = None):
        normalized = normalize_options(options)
        order_by, server_sorted = self._order_by(normalized.sort)

        stmt = select(self.orm_model)
        if order_by is not None:
            stmt = stmt.order_by(order_by)
        # Only safe to truncate server-side when no client-side filter or sort follows
        if normalized.limit and not normalized.filters and server_sorted:
            stmt = stmt.limit(normalized.limit)

        async with self.client.session() as session:
            result = await session.execute(stmt)
            rows = result.scalars().all()

        records = [from_row(self.name, row) for row in rows]
        return [self.schema.model_validate(record) for record in run_query(records, normalized)]

    async def get(self, record_id: str):
        async with self.client.session() as session:
            instance = await session.get(self.orm_model, record_id)
            return self._to_schema(instance) if instance is not None else None

    async def create(self, data: Payload):
        record = apply_defaults(self.name, payload_to_dict(data))
        if not record.get("id"):
            record["id"] = str(uuid.uuid4())
        validated = self.schema.model_validate(record)

        instance = self.orm_model(**to_row(self.name, validated.model_dump()))
        async with self.client.session() as session:
            session.add(instance)
            await session.commit()
            await session.refresh(instance)
            return self._to_schema(instance)

    async def update(self, record_id: str, data: Payload):
        changes = payload_to_dict(data, partial=True)
        changes.pop("id", None)

        async with self.client.session() as session:
            instance = await session.get(self.orm_model, record_id)
            if instance is None:
                raise NotFoundError(self.name, record_id)

            validated = self.schema.model_validate({**from_row(self.name, instance), **changes}).model_dump()
            supplied = {field: validated[field] for field in changes if field in validated}
            for column, value in to_row(self.name, supplied, partial=True).items():
                setattr(instance, column, value)

            await session.commit()
            await session.refresh(instance)
            return self._to_schema(instance)

    async def remove(self, record_id: str) -> None:
        async with self.client.session() as session:
            await session.execute(delete(self.orm_model).where(self.orm_model.id == record_id))
            await session.commit()


class SqlPredictionCollection(SqlCollection):
    async def _record_feedback(self, prediction: Prediction) -> None:
        match: Optional[Match] = await self.client.matches.get(prediction.match_id)
        if match is not None:
            await self.client.model_feedback.create(derive_feedback(prediction, match))

    async def create(self, data: Payload) -> Prediction:
        prediction = await super().create(data)
        await self._record_feedback(prediction)
        return prediction

    async def update(self, record_id: str, data: Payload) -> Prediction:
        prediction = await super().update(record_id, data)
        await self._record_feedback(prediction)
        return prediction


class SqlWeightsCollection(SqlCollection, WeightsCollection):
    async def _deactivate_others(self, session: AsyncSession, active_id: str) -> None:
        await session.execute(
            sql_update(self.orm_model)
            .where(self.orm_model.id != active_id)
            .where(self.orm_model.is_active.is_(True))
            .values(is_active=False)
        )

    async def create(self, data: Payload) -> ModelWeights:
        weights = await super().create(data)
        if weights.is_active:
            async with self.client.session() as session:
                await self._deactivate_others(session, weights.id)
                await session.commit()
        return weights

    async def update(self, record_id: str, data: Payload) -> ModelWeights:
        weights = await super().update(record_id, data)
        if weights.is_active:
            async with self.client.session() as session:
                await self._deactivate_others(session, weights.id)
                await session.commit()
        return weights

    async def activate(self, record_id: str) -> ModelWeights:
        async with self.client.session() as session:
            instance = await session.get(self.orm_model, record_id)
            if instance is None:
                raise NotFoundError(self.name, record_id)

            instance.is_active = True
            instance.last_updated = utc_now()
            await self._deactivate_others(session, record_id)
            await session.commit()
            await session.refresh(instance)
            weights = self._to_schema(instance)

        logger.info(f"Activated model weights {record_id} ({weights.model_version})")
        return weights


class SqlDataClient(DataClient):
    """
    Relational implementation of the data client.

    Args:
        database_url: Connection URL; defaults to settings.DATABASE_URL
        engine: Existing async engine to reuse instead of creating one
    """

    source = "remote"

    def __init__(self, database_url: Optional[str] = None, engine: Optional[AsyncEngine] = None):
        super().__init__()
        self._owns_engine = engine is None
        self.engine = engine or create_engine_for_url(database_url or settings.DATABASE_URL, echo=settings.DEBUG)
        self.session_factory: async_sessionmaker = create_session_factory(self.engine)

        self.players = SqlCollection(self, "players")
        self.matches = SqlCollection(self, "matches")
        self.predictions = SqlPredictionCollection(self, "predictions")
        self.compliance = SqlCollection(self, "compliance")
        self.model_weights = SqlWeightsCollection(self, "model_weights")
        self.model_feedback = SqlCollection(self, "model_feedback")
        self.alias = SqlCollection(self, "alias")

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Session scope that converts SQLAlchemy errors into DataStoreError"""
        async with self.session_factory() as session:
            try:
                yield session
            except SQLAlchemyError as e:
                await session.rollback()
                logger.error(f"Database error: {str(e)}")
                raise DataStoreError(str(e)) from e

    async def create_tables(self) -> None:
        try:
            await create_all(self.engine)
        except SQLAlchemyError as e:
            raise DataStoreError(str(e)) from e

    async def close(self) -> None:
        if self._owns_engine:
            await self.engine.dispose()
