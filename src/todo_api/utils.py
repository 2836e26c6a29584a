from __future__ import annotations

from bson import ObjectId
from bson.errors import InvalidId

from .exceptions import InvalidInputError
from .models import TodoEntity
from .schemas import TodoOut


# PUBLIC_INTERFACE
def parse_todo_id(raw: str) -> ObjectId:
    """
    Convert a path identifier into an ObjectId.

    Raises:
        InvalidInputError: if ``raw`` is not a 24-character hex string.
    """
    try:
        return ObjectId(raw)
    except (InvalidId, TypeError) as e:
        raise InvalidInputError("Invalid id", error=str(e)) from e


# PUBLIC_INTERFACE
def to_todo_out(entity: TodoEntity) -> TodoOut:
    """Map a stored entity onto the published JSON shape."""
    return TodoOut(
        id=str(entity["id"]),
        title=entity["title"],
        completed=entity["completed"],
        completed_at=entity["created_at"],
    )
