from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, status

from ..dependencies import get_repository
from ..exceptions import StoreError, StoreFailureError
from ..repositories import Repository
from ..schemas import (
    ErrorResponse,
    TodoCreate,
    TodoCreatedResponse,
    TodoDeletedResponse,
    TodoListResponse,
    TodoUpdate,
    TodoUpdatedResponse,
)
from ..utils import parse_todo_id, to_todo_out

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/todo",
    tags=["todos"],
    responses={
        400: {"model": ErrorResponse, "description": "Invalid input"},
        500: {"model": ErrorResponse, "description": "Store failure"},
    },
)


# PUBLIC_INTERFACE
@router.get(
    "/",
    response_model=TodoListResponse,
    summary="List Todos",
    description="Return every todo item in the store's natural order.",
)
def list_todos(repo: Repository = Depends(get_repository)) -> TodoListResponse:
    try:
        items = repo.list()
    except StoreError as e:
        logger.error("Failed to fetch todos from db records: %s", e)
        raise StoreFailureError("Could not fetch the todo collection", e) from e
    return TodoListResponse(
        message="All Todos retrieved",
        data=[to_todo_out(it) for it in items],
    )


# PUBLIC_INTERFACE
@router.post(
    "/",
    response_model=TodoCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create Todo",
    description="Create a new, uncompleted todo item and return its identifier.",
)
def create_todo(payload: TodoCreate, repo: Repository = Depends(get_repository)) -> TodoCreatedResponse:
    """
    Create a new Todo.
    """
    try:
        created = repo.create(payload)
    except StoreError as e:
        logger.error("Failed to insert data into the database: %s", e)
        raise StoreFailureError("Failed to add data into the database", e) from e
    logger.info("Created todo %s", created["id"])
    return TodoCreatedResponse(message="Todo created successfully", id=str(created["id"]))


# PUBLIC_INTERFACE
@router.put(
    "/{todo_id}",
    response_model=TodoUpdatedResponse,
    summary="Update Todo",
    description=(
        "Set the title and completion flag of a todo item. "
        "Returns the number of modified items; an unknown id modifies nothing."
    ),
)
def update_todo(
    todo_id: str,
    payload: TodoUpdate,
    repo: Repository = Depends(get_repository),
) -> TodoUpdatedResponse:
    oid = parse_todo_id(todo_id)
    try:
        modified = repo.update(oid, payload)
    except StoreError as e:
        logger.error("Failed to update db collection: %s", e)
        raise StoreFailureError("Failed to update data in db collection", e) from e
    return TodoUpdatedResponse(message="Successfully updated item", data=modified)


# PUBLIC_INTERFACE
@router.delete(
    "/{todo_id}",
    response_model=TodoDeletedResponse,
    summary="Delete Todo",
    description=(
        "Delete a todo item by id. Deleting an unknown id is not an error; "
        "the returned DeletedCount is then 0."
    ),
)
def delete_todo(todo_id: str, repo: Repository = Depends(get_repository)) -> TodoDeletedResponse:
    """
    Delete a Todo and report the store's delete result.
    """
    oid = parse_todo_id(todo_id)
    try:
        result = repo.delete(oid)
    except StoreError as e:
        logger.error("Could not delete item from database: %s", e)
        raise StoreFailureError("An error occurred while deleting the todo item", e) from e
    return TodoDeletedResponse(message="Item deleted successfully", data=result)
