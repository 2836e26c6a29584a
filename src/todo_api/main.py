import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse

from .dependencies import AppContext
from .exceptions import StoreError, TodoApiError, todo_api_exception_handler
from .repositories import build_repository
from .routers import todos as todos_router
from .settings import get_settings

_settings = get_settings()

logging.basicConfig(
    level=getattr(logging, _settings.log_level, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

openapi_tags = [
    {"name": "home", "description": "Static home page and service health."},
    {"name": "todos", "description": "CRUD operations for Todo items."},
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    - Startup: read settings, connect the todo store. An unreachable store
      aborts startup.
    - Shutdown: runs after the server has drained in-flight requests; closes
      the store connection.
    """
    settings = get_settings()
    try:
        repository = build_repository(settings)
    except StoreError as e:
        logger.critical("Could not connect to the todo store: %s", e)
        raise
    app.state.context = AppContext(settings=settings, repository=repository)
    logger.info("Todo API ready (backend=%s)", settings.persistence_backend)

    yield

    logger.info("Shutting down Todo API")
    repository.close()


app = FastAPI(
    title="Todo API",
    description="Todo list REST API backed by a document store.",
    version="0.1.0",
    openapi_tags=openapi_tags,
    lifespan=lifespan,
)

allow_all = (_settings.cors_allow_origins == ["*"]) or (len(_settings.cors_allow_origins) == 0)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if allow_all else _settings.cors_allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(TodoApiError, todo_api_exception_handler)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Report unparseable bodies and empty titles as 400 Bad Request.

    Response format:
        {
            "message": "Could not decode data",
            "error": "<first validation message>",
            "detail": [... pydantic/fastapi error details ...]
        }
    """
    errors = jsonable_encoder(exc.errors())
    first = errors[0].get("msg") if errors else None
    logger.warning("Rejected request to %s: %s", request.url.path, first)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "message": "Could not decode data",
            "error": first,
            "detail": errors,
        },
    )


# PUBLIC_INTERFACE
@app.get("/", summary="Home", tags=["home"], response_class=FileResponse)
def home(request: Request):
    """
    Serve the configured home file (README.md by default).
    """
    path = request.app.state.context.settings.home_file
    if not os.path.isfile(path):
        logger.warning("Home file %s not found", path)
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"message": "Home file not found"})
    return FileResponse(
        path,
        media_type="text/markdown",
        filename=os.path.basename(path),
        content_disposition_type="inline",
    )


# PUBLIC_INTERFACE
@app.get("/health", summary="Health Check", tags=["home"])
def health_check(request: Request):
    """
    Health check endpoint.

    Returns:
        A JSON object with the configured backend and whether the store answers.
    """
    context: AppContext = request.app.state.context
    try:
        context.repository.ping()
        store = "ok"
    except StoreError as e:
        logger.warning("Store ping failed: %s", e)
        store = "unreachable"
    return {
        "message": "Healthy",
        "backend": context.settings.persistence_backend,
        "store": store,
    }


app.include_router(todos_router.router)
