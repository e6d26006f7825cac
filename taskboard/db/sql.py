"""SQL store backed by SQLModel tables on an async SQLAlchemy engine."""

import logging
from typing import Any, Dict, List, Optional, Type
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import SQLModel, select

from ..errors import ConstraintViolation, DuplicateKey, StoreUnavailable
from ..models import Task, User  # noqa: F401  registers tables with SQLModel.metadata
from .session import get_engine, get_session_factory
from .store import ModelT, Store

logger = logging.getLogger(__name__)


_UNIQUE_MARKERS = ("unique", "duplicate")


def constraint_error(kind: str, error: IntegrityError) -> ConstraintViolation:
    """Classify an IntegrityError; unique violations become DuplicateKey."""
    detail = str(error.orig)
    if any(marker in detail.lower() for marker in _UNIQUE_MARKERS):
        return DuplicateKey(kind)
    return ConstraintViolation(kind, detail)


class SQLStore(Store):
    """Store that keeps one table per model, one session per operation.

    Attributes:
        database_url: SQLAlchemy URL of the database
    """

    def __init__(self, database_url: str, echo: bool = False):
        self.database_url = database_url
        self.echo = echo
        self._engine = None
        self._sessions = None

    async def connect(self) -> None:
        """Create the engine and the tables.

        Raises:
            StoreUnavailable: If the driver is missing or the database is unreachable
        """
        try:
            self._engine = get_engine(self.database_url, echo=self.echo)
            async with self._engine.begin() as conn:
                await conn.run_sync(SQLModel.metadata.create_all)
        except (SQLAlchemyError, OSError) as e:
            raise StoreUnavailable(f"Could not connect to the database: {e}") from e
        self._sessions = get_session_factory(self._engine)
        logger.info(f"Connected to {self._engine.url.render_as_string(hide_password=True)}")

    async def close(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
            self._sessions = None

    async def ping(self) -> None:
        if self._engine is None:
            raise StoreUnavailable("Store is not connected")
        try:
            async with self._engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except (SQLAlchemyError, OSError) as e:
            raise StoreUnavailable(f"Database ping failed: {e}") from e

    def _session(self):
        if self._sessions is None:
            raise StoreUnavailable("Store is not connected")
        return self._sessions()

    async def create(self, kind: Type[ModelT], data: Dict[str, Any]) -> ModelT:
        record = kind(**data)
        async with self._session() as session:
            session.add(record)
            try:
                await session.commit()
            except IntegrityError as e:
                await session.rollback()
                raise constraint_error(kind.__name__, e) from e
            return record

    async def find_by_id(self, kind: Type[ModelT], oid: str) -> Optional[ModelT]:
        async with self._session() as session:
            return await session.get(kind, oid)

    async def find_many(self, kind: Type[ModelT], **filters: Any) -> List[ModelT]:
        statement = select(kind)
        for name, value in filters.items():
            if value is not None:
                statement = statement.where(getattr(kind, name) == value)
        async with self._session() as session:
            result = await session.exec(statement)
            return list(result.all())

    async def update_by_id(
        self, kind: Type[ModelT], oid: str, patch: Dict[str, Any]
    ) -> Optional[ModelT]:
        async with self._session() as session:
            record = await session.get(kind, oid)
            if record is None:
                return None
            for name, value in patch.items():
                setattr(record, name, value)
            session.add(record)
            try:
                await session.commit()
            except IntegrityError as e:
                await session.rollback()
                raise constraint_error(kind.__name__, e) from e
            await session.refresh(record)
            return record

    async def delete_by_id(self, kind: Type[ModelT], oid: str) -> bool:
        async with self._session() as session:
            record = await session.get(kind, oid)
            if record is None:
                return False
            await session.delete(record)
            await session.commit()
            return True
