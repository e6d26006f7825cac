"""Persistence adapter contract.

A store keeps SQLModel records grouped by their model class (the entity
kind). Services talk to this interface only, so the SQL store and the
in-memory store are interchangeable.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Type, TypeVar
from sqlmodel import SQLModel

ModelT = TypeVar("ModelT", bound=SQLModel)


def primary_key(kind: Type[SQLModel]) -> str:
    """Name of the primary key column of a table model."""
    return kind.__table__.primary_key.columns.values()[0].name


def unique_columns(kind: Type[SQLModel]) -> List[str]:
    """Names of the columns a table model declares unique."""
    return [column.name for column in kind.__table__.columns if column.unique]


class Store(ABC):
    """Async CRUD over records identified by their store key."""

    @abstractmethod
    async def connect(self) -> None:
        """Open the backing store. Raises StoreUnavailable on failure."""

    @abstractmethod
    async def close(self) -> None:
        ...

    @abstractmethod
    async def ping(self) -> None:
        """Round-trip to the backing store. Raises StoreUnavailable on failure."""

    @abstractmethod
    async def create(self, kind: Type[ModelT], data: Dict[str, Any]) -> ModelT:
        """Insert a record and return it with its generated key.

        Raises:
            DuplicateKey: If a unique column already holds the value
            ConstraintViolation: If another constraint (e.g. a foreign key) rejects it
        """

    @abstractmethod
    async def find_by_id(self, kind: Type[ModelT], oid: str) -> Optional[ModelT]:
        ...

    @abstractmethod
    async def find_many(self, kind: Type[ModelT], **filters: Any) -> List[ModelT]:
        """Records matching every filter. ``None`` filter values are ignored."""

    async def find_one(self, kind: Type[ModelT], **filters: Any) -> Optional[ModelT]:
        matches = await self.find_many(kind, **filters)
        return matches[0] if matches else None

    @abstractmethod
    async def update_by_id(
        self, kind: Type[ModelT], oid: str, patch: Dict[str, Any]
    ) -> Optional[ModelT]:
        """Apply ``patch`` and return the updated record, None if absent."""

    @abstractmethod
    async def delete_by_id(self, kind: Type[ModelT], oid: str) -> bool:
        """Remove a record. Returns False if it did not exist."""


def open_store(url: str) -> Store:
    """Build the store for a connection URL without connecting it."""
    if url.startswith("memory://"):
        from .memory import MemoryStore
        return MemoryStore()
    from .sql import SQLStore
    return SQLStore(url)
