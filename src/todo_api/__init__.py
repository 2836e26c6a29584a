"""
Todo API package.

FastAPI service exposing CRUD endpoints for todo items stored in MongoDB.
The application instance lives in ``todo_api.main``; run it with
``python -m todo_api``.
"""

__version__ = "0.1.0"
