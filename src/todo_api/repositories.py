from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from threading import RLock
from typing import Any, Dict, List

from bson import ObjectId

from .models import TodoEntity
from .schemas import TodoCreate, TodoUpdate
from .settings import Settings

logger = logging.getLogger(__name__)


# PUBLIC_INTERFACE
class Repository(ABC):
    """
    Abstract repository contract for todo storage backends.

    Every method raises StoreError when the backing store fails.
    """

    @abstractmethod
    def list(self) -> List[TodoEntity]:
        """Return every TodoEntity in the store's natural order."""

    @abstractmethod
    def create(self, data: TodoCreate) -> TodoEntity:
        """Create and return a new TodoEntity (uncompleted, stamped with the current time)."""

    @abstractmethod
    def update(self, todo_id: ObjectId, data: TodoUpdate) -> int:
        """Set title and completed on the matching item. Return the number of modified items."""

    @abstractmethod
    def delete(self, todo_id: ObjectId) -> Dict[str, Any]:
        """Delete the matching item. Return the raw delete result, e.g. {"DeletedCount": 1}."""

    def ping(self) -> None:
        """Check that the store is reachable."""

    def close(self) -> None:
        """Release the store connection."""

    @staticmethod
    def _now() -> datetime:
        return datetime.now(timezone.utc)

    def _new_entity(self, data: TodoCreate) -> TodoEntity:
        return {
            "id": ObjectId(),
            "title": data.title,
            "completed": False,
            "created_at": self._now(),
        }


class InMemoryRepository(Repository):
    """
    Thread-safe in-memory repository suitable for testing and local runs.
    Items are kept in insertion order.
    """

    def __init__(self) -> None:
        self._lock = RLock()
        self._items: dict[ObjectId, TodoEntity] = {}

    def list(self) -> List[TodoEntity]:
        with self._lock:
            # Return copies to avoid external mutation
            return [t.copy() for t in self._items.values()]

    def create(self, data: TodoCreate) -> TodoEntity:
        entity = self._new_entity(data)
        with self._lock:
            self._items[entity["id"]] = entity
        return entity.copy()

    def update(self, todo_id: ObjectId, data: TodoUpdate) -> int:
        with self._lock:
            existing = self._items.get(todo_id)
            if existing is None:
                return 0
            if existing["title"] == data.title and existing["completed"] == data.completed:
                # Matched but nothing changed, as a document store reports it
                return 0
            updated = existing.copy()
            updated["title"] = data.title
            updated["completed"] = data.completed
            self._items[todo_id] = updated
            return 1

    def delete(self, todo_id: ObjectId) -> Dict[str, Any]:
        with self._lock:
            removed = self._items.pop(todo_id, None)
        return {"DeletedCount": 0 if removed is None else 1}


# PUBLIC_INTERFACE
def build_repository(settings: Settings) -> Repository:
    """
    Factory to return the configured repository based on settings.
    - memory: InMemoryRepository
    - mongo: MongoRepository connected to settings.mongo_uri
    """
    if settings.persistence_backend == "memory":
        logger.info("Using in-memory todo store")
        return InMemoryRepository()

    from .db import MongoRepository

    logger.info(
        "Using MongoDB todo store %s/%s",
        settings.mongo_db_name,
        settings.mongo_collection,
    )
    return MongoRepository.connect(
        uri=settings.mongo_uri,
        db_name=settings.mongo_db_name,
        collection_name=settings.mongo_collection,
        connect_timeout_seconds=settings.mongo_connect_timeout_seconds,
    )
