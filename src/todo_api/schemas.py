from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _require_title(value: Optional[str], message: str) -> str:
    """Reject a missing or empty title; any other text is stored as given."""
    if not value:
        raise ValueError(message)
    return value


# PUBLIC_INTERFACE
class TodoCreate(BaseModel):
    """
    Schema for creating a new Todo item.
    """

    model_config = ConfigDict(json_schema_extra={"example": {"title": "Buy groceries"}})

    title: str = Field(..., description="Title of the todo item; must not be empty")

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        return _require_title(v, "Please add a title")


# PUBLIC_INTERFACE
class TodoUpdate(BaseModel):
    """
    Schema for updating an existing Todo item.
    Both fields are always written; an omitted ``completed`` resets it to false.
    """

    model_config = ConfigDict(
        json_schema_extra={"example": {"title": "Buy groceries and supplies", "completed": True}}
    )

    title: str = Field(..., description="New title of the todo item; must not be empty")
    completed: bool = Field(default=False, description="Completion status flag")

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        return _require_title(v, "Title cannot be empty")


# PUBLIC_INTERFACE
class TodoOut(BaseModel):
    """
    Schema returned by the API for a Todo item.

    The creation timestamp is published as ``completed_at`` to stay compatible
    with existing clients of this API.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "65f1c0e2a1b2c3d4e5f60718",
                "title": "Buy groceries",
                "completed": False,
                "completed_at": "2025-01-25T10:15:30.123000Z",
            }
        }
    )

    id: str = Field(..., description="Opaque identifier of the todo item (24 hex characters)")
    title: str = Field(..., description="Title of the todo item")
    completed: bool = Field(..., description="Completion status flag")
    completed_at: datetime = Field(..., description="Creation timestamp")


class TodoListResponse(BaseModel):
    """Envelope for the list endpoint."""
    message: str = Field(..., description="Human-readable status message")
    data: List[TodoOut] = Field(..., description="All todo items in store order")


class TodoCreatedResponse(BaseModel):
    """Envelope for the create endpoint."""
    model_config = ConfigDict(populate_by_name=True)

    message: str = Field(..., description="Human-readable status message")
    id: str = Field(..., alias="ID", description="Identifier of the created todo item")


class TodoUpdatedResponse(BaseModel):
    """Envelope for the update endpoint."""
    message: str = Field(..., description="Human-readable status message")
    data: int = Field(..., description="Number of documents modified (0 or 1)")


class TodoDeletedResponse(BaseModel):
    """Envelope for the delete endpoint."""
    message: str = Field(..., description="Human-readable status message")
    data: Dict[str, Any] = Field(..., description="Raw delete result reported by the store")


class ErrorResponse(BaseModel):
    """Body of every 4xx/5xx response."""
    message: str = Field(..., description="Human-readable error summary")
    error: Optional[str] = Field(default=None, description="Underlying error text, when available")
