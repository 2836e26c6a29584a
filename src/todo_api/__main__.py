"""
Run the Todo API with uvicorn.

Usage:
    python -m todo_api

On SIGINT/SIGTERM uvicorn stops accepting connections and gives in-flight
requests SHUTDOWN_GRACE_SECONDS to finish before the lifespan closes the
store connection.
"""

import uvicorn

from .settings import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "todo_api.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        timeout_graceful_shutdown=settings.shutdown_grace_seconds,
    )


if __name__ == "__main__":
    main()
