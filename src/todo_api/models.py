from __future__ import annotations

from datetime import datetime
from typing import TypedDict

from bson import ObjectId


# PUBLIC_INTERFACE
class TodoEntity(TypedDict):
    """
    Storage-agnostic domain model of a Todo item, as handed between the
    repositories and the HTTP layer.

    Fields:
    - id: Opaque identifier generated at creation (never changes)
    - title: Non-empty title, stored as sent
    - completed: Boolean completion flag
    - created_at: UTC creation timestamp (never changes)
    """

    id: ObjectId
    title: str
    completed: bool
    created_at: datetime
