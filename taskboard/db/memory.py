"""In-memory store, for development and tests.

Rows live in dictionaries owned by the store instance, one per model
class. Records handed out are copies, so callers cannot mutate stored
state behind the store's back.
"""

import copy
import logging
from typing import Any, Dict, List, Optional, Type

from ..errors import DuplicateKey
from .store import ModelT, Store, primary_key, unique_columns

logger = logging.getLogger(__name__)


class MemoryStore(Store):
    def __init__(self):
        self._tables: Dict[type, Dict[str, Dict[str, Any]]] = {}

    async def connect(self) -> None:
        logger.info("Using in-memory store; data is lost on shutdown")

    async def close(self) -> None:
        self._tables.clear()

    async def ping(self) -> None:
        return None

    def _table(self, kind: type) -> Dict[str, Dict[str, Any]]:
        return self._tables.setdefault(kind, {})

    @staticmethod
    def _load(kind: Type[ModelT], row: Dict[str, Any]) -> ModelT:
        return kind(**copy.deepcopy(row))

    def _check_unique(self, kind: type, row: Dict[str, Any], key: str) -> None:
        for column in unique_columns(kind):
            for other_key, other in self._table(kind).items():
                if other_key != key and other.get(column) == row.get(column):
                    raise DuplicateKey(kind.__name__, column)

    async def create(self, kind: Type[ModelT], data: Dict[str, Any]) -> ModelT:
        row = kind(**data).model_dump()
        key = row[primary_key(kind)]
        table = self._table(kind)
        if key in table:
            raise DuplicateKey(kind.__name__, primary_key(kind))
        self._check_unique(kind, row, key)
        table[key] = copy.deepcopy(row)
        return self._load(kind, row)

    async def find_by_id(self, kind: Type[ModelT], oid: str) -> Optional[ModelT]:
        row = self._table(kind).get(oid)
        return self._load(kind, row) if row is not None else None

    async def find_many(self, kind: Type[ModelT], **filters: Any) -> List[ModelT]:
        active = {name: value for name, value in filters.items() if value is not None}
        return [
            self._load(kind, row)
            for row in self._table(kind).values()
            if all(row.get(name) == value for name, value in active.items())
        ]

    async def update_by_id(
        self, kind: Type[ModelT], oid: str, patch: Dict[str, Any]
    ) -> Optional[ModelT]:
        table = self._table(kind)
        if oid not in table:
            return None
        row = {**table[oid], **copy.deepcopy(patch)}
        self._check_unique(kind, row, oid)
        table[oid] = row
        return self._load(kind, row)

    async def delete_by_id(self, kind: Type[ModelT], oid: str) -> bool:
        return self._table(kind).pop(oid, None) is not None
