"""Storage adapter: put / get / query / update / delete over four collections.

Every backend offers the same async primitives. Each primitive touches a single
record (or reads one index range); nothing here spans several records
atomically.

Collections and access paths:
  users        hash userId,            index EmailIndex(email)
  ingredients  hash ingredientId,      index UserIdIndex(userId)
  meals        hash mealId,            index UserIdIndex(userId)
  plan_days    hash userId, range date (inclusive range queries on date)
"""
import asyncio
import copy
import json
import logging
import os
import shutil
import tempfile
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from lunchplan.domain.errors import StorageError
from lunchplan.utilities import config
from lunchplan.utilities.constants import EMAIL_INDEX, USER_ID_INDEX

logger = logging.getLogger(__name__)

Item = Dict[str, Any]

USERS = "users"
INGREDIENTS = "ingredients"
MEALS = "meals"
PLAN_DAYS = "plan_days"


@dataclass(frozen=True)
class TableSchema:
    name: str
    hash_key: str
    range_key: Optional[str] = None
    indexes: Dict[str, str] = field(default_factory=dict)  # index name -> attribute

    @property
    def key_attributes(self) -> Tuple[str, ...]:
        return (self.hash_key, self.range_key) if self.range_key else (self.hash_key,)


def default_schemas() -> Dict[str, TableSchema]:
    return {
        USERS: TableSchema(config.USERS_TABLE, "userId", indexes={EMAIL_INDEX: "email"}),
        INGREDIENTS: TableSchema(config.INGREDIENTS_TABLE, "ingredientId", indexes={USER_ID_INDEX: "userId"}),
        MEALS: TableSchema(config.MEALS_TABLE, "mealId", indexes={USER_ID_INDEX: "userId"}),
        PLAN_DAYS: TableSchema(config.MEALPLANS_TABLE, "userId", range_key="date"),
    }


class StorageBackend(ABC):
    def __init__(self, schemas: Optional[Dict[str, TableSchema]] = None):
        self.schemas = schemas or default_schemas()

    def schema(self, table: str) -> TableSchema:
        try:
            return self.schemas[table]
        except KeyError:
            raise StorageError(f"Unknown table: {table}") from None

    def _key_of(self, schema: TableSchema, key: Item) -> Tuple:
        try:
            return tuple(key[attr] for attr in schema.key_attributes)
        except KeyError as e:
            raise StorageError(f"Key for {schema.name} is missing attribute {e}") from None

    @abstractmethod
    async def put(self, table: str, item: Item) -> None: ...

    @abstractmethod
    async def get(self, table: str, key: Item) -> Optional[Item]: ...

    @abstractmethod
    async def query(self, table: str, key_condition: Item, index: Optional[str] = None,
                    between: Optional[Tuple[str, str]] = None) -> List[Item]: ...

    @abstractmethod
    async def update(self, table: str, key: Item, attributes: Item) -> Item: ...

    @abstractmethod
    async def delete(self, table: str, key: Item) -> None: ...


class InMemoryStorage(StorageBackend):
    """Dict-backed storage; items are copied in and out."""

    def __init__(self, schemas: Optional[Dict[str, TableSchema]] = None):
        super().__init__(schemas)
        self._tables: Dict[str, Dict[Tuple, Item]] = {}

    async def _items(self, table: str) -> Dict[Tuple, Item]:
        self.schema(table)
        return self._tables.setdefault(table, {})

    async def _persist(self, table: str) -> None:
        """Hook for durable subclasses; called after every mutation."""

    async def _commit(self, table: str, key: Tuple, item: Optional[Item]) -> None:
        """Write item (or remove it when None) and persist; the table is restored if persisting fails."""
        items = self._tables[table]
        previous = items.get(key)
        if item is None:
            items.pop(key, None)
        else:
            items[key] = item
        try:
            await self._persist(table)
        except Exception:
            if previous is None:
                items.pop(key, None)
            else:
                items[key] = previous
            raise

    async def put(self, table: str, item: Item) -> None:
        schema = self.schema(table)
        await self._items(table)
        await self._commit(table, self._key_of(schema, item), copy.deepcopy(item))

    async def get(self, table: str, key: Item) -> Optional[Item]:
        schema = self.schema(table)
        items = await self._items(table)
        item = items.get(self._key_of(schema, key))
        return copy.deepcopy(item) if item is not None else None

    async def query(self, table: str, key_condition: Item, index: Optional[str] = None,
                    between: Optional[Tuple[str, str]] = None) -> List[Item]:
        schema = self.schema(table)
        if len(key_condition) != 1:
            raise StorageError("Key condition must name exactly one attribute")
        attr, value = next(iter(key_condition.items()))
        if index is not None:
            if schema.indexes.get(index) != attr:
                raise StorageError(f"Index {index} on {schema.name} does not cover {attr}")
        elif attr != schema.hash_key:
            raise StorageError(f"{attr} is not the hash key of {schema.name}")
        if between is not None and (index is not None or not schema.range_key):
            raise StorageError(f"Range condition needs the range key of {schema.name}")

        items = await self._items(table)
        result = [i for i in items.values() if i.get(attr) == value]
        if between is not None:
            low, high = between
            result = [i for i in result if low <= i.get(schema.range_key, "") <= high]
        if index is None and schema.range_key:
            result.sort(key=lambda i: i.get(schema.range_key, ""))
        return copy.deepcopy(result)

    async def update(self, table: str, key: Item, attributes: Item) -> Item:
        schema = self.schema(table)
        items = await self._items(table)
        k = self._key_of(schema, key)
        current = items.get(k) or {attr: key[attr] for attr in schema.key_attributes}
        merged = {**current, **copy.deepcopy(attributes)}
        # Key attributes are never rewritten by a partial update.
        merged.update({attr: key[attr] for attr in schema.key_attributes})
        await self._commit(table, k, merged)
        return copy.deepcopy(merged)

    async def delete(self, table: str, key: Item) -> None:
        schema = self.schema(table)
        items = await self._items(table)
        k = self._key_of(schema, key)
        if k in items:
            await self._commit(table, k, None)


class JsonFileStorage(InMemoryStorage):
    """One JSON file per collection under data_dir, rewritten atomically after each mutation."""

    def __init__(self, data_dir, schemas: Optional[Dict[str, TableSchema]] = None):
        super().__init__(schemas)
        self.data_dir = Path(data_dir)
        self._locks: Dict[str, asyncio.Lock] = {}

    def path_for(self, table: str) -> Path:
        return self.data_dir / f"{self.schema(table).name}.json"

    def _lock(self, table: str) -> asyncio.Lock:
        return self._locks.setdefault(table, asyncio.Lock())

    def _read_file(self, path: Path) -> List[Item]:
        if not path.exists():
            return []
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise StorageError(f"Invalid JSON in {path}: {e}") from e
        if not isinstance(data, list):
            raise StorageError(f"Expected a list of items in {path}")
        return data

    def _atomic_write(self, path: Path, items: List[Item]) -> None:
        os.makedirs(path.parent, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=path.parent, prefix=f".{path.stem}_", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                json.dump(items, tmp, indent=2, ensure_ascii=False)
            shutil.move(tmp_path, path)
        finally:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)

    async def _items(self, table: str) -> Dict[Tuple, Item]:
        schema = self.schema(table)
        if table in self._tables:
            return self._tables[table]
        async with self._lock(table):
            if table not in self._tables:
                path = self.path_for(table)
                records = await asyncio.to_thread(self._read_file, path)
                self._tables[table] = {self._key_of(schema, r): r for r in records}
                logger.debug(f"Loaded {len(records)} items from {path}")
        return self._tables[table]

    async def _persist(self, table: str) -> None:
        async with self._lock(table):
            snapshot = copy.deepcopy(list(self._tables.get(table, {}).values()))
            try:
                await asyncio.to_thread(self._atomic_write, self.path_for(table), snapshot)
            except OSError as e:
                logger.error(f"Failed to write {self.path_for(table)}: {e}")
                raise StorageError(f"Failed to write {table}: {e}") from e


def build_storage(backend: Optional[str] = None, data_dir=None) -> StorageBackend:
    backend = (backend or config.STORAGE_BACKEND).lower()
    if backend == "memory":
        return InMemoryStorage()
    if backend == "json":
        return JsonFileStorage(data_dir or config.DATA_DIR)
    raise ValueError(f"Unknown storage backend: {backend}")


__all__ = [
    'TableSchema', 'StorageBackend', 'InMemoryStorage', 'JsonFileStorage', 'build_storage',
    'default_schemas', 'USERS', 'INGREDIENTS', 'MEALS', 'PLAN_DAYS',
]
