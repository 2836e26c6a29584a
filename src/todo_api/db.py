from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import timezone
from typing import Any, Dict, List, Mapping, Optional

from bson import ObjectId
from pymongo import ASCENDING, MongoClient
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from .exceptions import StoreError
from .models import TodoEntity
from .repositories import Repository
from .schemas import TodoCreate, TodoUpdate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Fields:
    id: str = "id"
    title: str = "title"
    completed: str = "completed"
    # The creation time is stored under the same key the JSON shape uses
    created_at: str = "completed_at"


_FIELDS = _Fields()


class MongoRepository(Repository):
    """
    MongoDB repository implementing the Repository interface.

    Documents carry their own ``id`` field (an ObjectId generated by the
    service); the store's ``_id`` is left to MongoDB and never read back.
    """

    def __init__(self, collection: Collection, client: Optional[MongoClient] = None) -> None:
        self._collection = collection
        self._client = client

    @classmethod
    def connect(
        cls,
        uri: str,
        db_name: str,
        collection_name: str,
        connect_timeout_seconds: float = 10.0,
    ) -> "MongoRepository":
        """
        Open a client, verify the server answers a ping and ensure the unique
        index on ``id``.

        Raises:
            StoreError: if the URI is malformed or the server cannot be
                reached within the timeout.
        """
        timeout_ms = int(connect_timeout_seconds * 1000)
        try:
            client: MongoClient = MongoClient(
                uri,
                tz_aware=True,
                tzinfo=timezone.utc,
                serverSelectionTimeoutMS=timeout_ms,
                connectTimeoutMS=timeout_ms,
            )
        except PyMongoError as e:
            # Malformed URI or client options
            raise StoreError(str(e)) from e
        repo = cls(client[db_name][collection_name], client=client)
        try:
            client.admin.command("ping")
            repo._collection.create_index([(_FIELDS.id, ASCENDING)], unique=True)
        except PyMongoError as e:
            client.close()
            raise StoreError(str(e)) from e
        return repo

    def _to_entity(self, doc: Mapping[str, Any]) -> TodoEntity:
        return {
            "id": doc[_FIELDS.id],
            "title": str(doc.get(_FIELDS.title, "")),
            "completed": bool(doc.get(_FIELDS.completed, False)),
            "created_at": doc[_FIELDS.created_at],
        }

    def _to_document(self, entity: TodoEntity) -> Dict[str, Any]:
        return {
            _FIELDS.id: entity["id"],
            _FIELDS.title: entity["title"],
            _FIELDS.completed: entity["completed"],
            _FIELDS.created_at: entity["created_at"],
        }

    def ping(self) -> None:
        if self._client is None:
            return
        try:
            self._client.admin.command("ping")
        except PyMongoError as e:
            raise StoreError(str(e)) from e

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            logger.info("MongoDB connection closed")

    def list(self) -> List[TodoEntity]:
        try:
            docs = list(self._collection.find({}, {"_id": 0}))
        except PyMongoError as e:
            raise StoreError(str(e)) from e
        items = []
        for d in docs:
            if _FIELDS.id not in d or _FIELDS.created_at not in d:
                logger.warning("Skipping document without %s/%s: %r", _FIELDS.id, _FIELDS.created_at, d)
                continue
            items.append(self._to_entity(d))
        return items

    def create(self, data: TodoCreate) -> TodoEntity:
        entity = self._new_entity(data)
        try:
            self._collection.insert_one(self._to_document(entity))
        except PyMongoError as e:
            raise StoreError(str(e)) from e
        return entity

    def update(self, todo_id: ObjectId, data: TodoUpdate) -> int:
        try:
            result = self._collection.update_one(
                {_FIELDS.id: todo_id},
                {"$set": {_FIELDS.title: data.title, _FIELDS.completed: data.completed}},
            )
        except PyMongoError as e:
            raise StoreError(str(e)) from e
        return int(result.modified_count)

    def delete(self, todo_id: ObjectId) -> Dict[str, Any]:
        try:
            result = self._collection.delete_one({_FIELDS.id: todo_id})
        except PyMongoError as e:
            raise StoreError(str(e)) from e
        return {"DeletedCount": int(result.deleted_count)}
