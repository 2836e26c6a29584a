from __future__ import annotations

from dataclasses import dataclass

from fastapi import Request

from .repositories import Repository
from .settings import Settings


@dataclass
class AppContext:
    """Objects built once at startup and shared by every request."""

    settings: Settings
    repository: Repository


# PUBLIC_INTERFACE
def get_context(request: Request) -> AppContext:
    """Return the context the lifespan attached to the running app."""
    return request.app.state.context


# PUBLIC_INTERFACE
def get_repository(request: Request) -> Repository:
    """Dependency returning the shared todo repository."""
    return get_context(request).repository
