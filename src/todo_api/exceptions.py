"""
Error types shared by the repositories and the HTTP layer.

Repositories raise StoreError when the underlying store fails. Handlers turn
that (and bad input) into a TodoApiError, which the app renders as a
``{"message", "error"}`` JSON body with the error's status code.
"""
from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import Request, status
from fastapi.responses import JSONResponse


class StoreError(Exception):
    """Raised by a repository when the backing store rejects or fails an operation."""


# PUBLIC_INTERFACE
class TodoApiError(Exception):
    """
    Base exception for errors returned to API clients.

    Args:
        message: Human-readable summary placed in the response envelope.
        status_code: HTTP status to respond with.
        error: Optional underlying error text (e.g. the store's message).
    """

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        error: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.error = error

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to API response dict."""
        body: Dict[str, Any] = {"message": self.message}
        if self.error:
            body["error"] = self.error
        return body


class InvalidInputError(TodoApiError):
    """Malformed body, empty title or malformed identifier."""

    def __init__(self, message: str, error: Optional[str] = None) -> None:
        super().__init__(message, status_code=status.HTTP_400_BAD_REQUEST, error=error)


class StoreFailureError(TodoApiError):
    """A store operation failed while serving the request."""

    def __init__(self, message: str, cause: StoreError) -> None:
        super().__init__(
            message,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            error=str(cause),
        )


async def todo_api_exception_handler(request: Request, exc: TodoApiError) -> JSONResponse:
    """Render a TodoApiError as its JSON envelope."""
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())
