"""Generic async repository with storage-error translation."""

from __future__ import annotations

import logging
from typing import Any, Generic, TypeVar

from sqlalchemy import Executable, Result, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from member_query.core.exceptions import StorageError
from member_query.db.base import Base

ModelT = TypeVar("ModelT", bound=Base)

logger = logging.getLogger(__name__)


class BaseRepository(Generic[ModelT]):
    """Generic CRUD repository.

    Every statement goes through `_execute`, which turns driver/ORM failures
    into `StorageError` so callers see one error type from the storage layer.
    """

    model: type[ModelT]

    def __init__(self, session: AsyncSession):
        self._session = session

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    async def _execute(self, statement: Executable) -> Result[Any]:
        try:
            return await self._session.execute(statement)
        except SQLAlchemyError as exc:
            logger.error("%s query failed: %s", self.model.__name__, exc)
            raise StorageError(f"{self.model.__name__} query failed") from exc

    async def _flush(self) -> None:
        try:
            await self._session.flush()
        except SQLAlchemyError as exc:
            logger.error("%s flush failed: %s", self.model.__name__, exc)
            raise StorageError(f"{self.model.__name__} write failed") from exc

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    async def get_by_id(self, entity_id: int) -> ModelT | None:
        result = await self._execute(select(self.model).where(self.model.id == entity_id))
        return result.scalars().first()

    async def list_all(self) -> list[ModelT]:
        result = await self._execute(select(self.model).order_by(self.model.id))
        return list(result.scalars().all())

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    async def add(self, instance: ModelT) -> ModelT:
        self._session.add(instance)
        await self._flush()  # populate id
        return instance

    async def create(self, **kwargs: Any) -> ModelT:
        return await self.add(self.model(**kwargs))
