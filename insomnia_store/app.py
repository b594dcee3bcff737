from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.routing import APIRouter
from loguru import logger

from insomnia_store.errors import CorruptStoreError, FileSystemError, NotFoundError, StoreError
from insomnia_store.log import setup_logging
from insomnia_store.managers.collections import ensure_base_environments
from insomnia_store.settings import get_settings
from insomnia_store.store.local import LocalRecordStore


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    # -- Startup ---------------------------------------------------------------
    settings = get_settings()
    setup_logging(settings.log_level)

    data_dir = settings.resolve_data_dir()
    store = LocalRecordStore(data_dir, project_id=settings.project_id)
    _app.state.store = store
    logger.info("Data dir: {} (project override: {})", data_dir, settings.project_id or "none")

    created = await ensure_base_environments(store)
    if created:
        logger.info("Startup bootstrap: {} base environment(s) created", created)

    yield

    # -- Shutdown --------------------------------------------------------------
    logger.info("insomnia-store shutting down")


app = FastAPI(title="insomnia-store", lifespan=lifespan)


# ---------------------------------------------------------------------------
# Error translation -- managers raise domain errors, never HTTP errors
# ---------------------------------------------------------------------------


@app.exception_handler(StoreError)
async def store_error_handler(_request: Request, exc: StoreError) -> JSONResponse:
    if isinstance(exc, NotFoundError):
        code = status.HTTP_404_NOT_FOUND
    elif isinstance(exc, (FileSystemError, CorruptStoreError)):
        logger.error("Storage failure: {}", exc)
        code = status.HTTP_500_INTERNAL_SERVER_ERROR
    else:
        code = status.HTTP_422_UNPROCESSABLE_ENTITY
    return JSONResponse(status_code=code, content={"detail": exc.to_dict()})


# ---------------------------------------------------------------------------
# API router -- all endpoints live under /api
# ---------------------------------------------------------------------------
api = APIRouter(prefix="/api")


@api.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}


# -- CRUD routers ------------------------------------------------------------
from insomnia_store.routers.collections import router as collections_router  # noqa: E402
from insomnia_store.routers.environments import router as environments_router  # noqa: E402
from insomnia_store.routers.folders import router as folders_router  # noqa: E402
from insomnia_store.routers.requests import router as requests_router  # noqa: E402

api.include_router(collections_router)
api.include_router(folders_router)
api.include_router(requests_router)
api.include_router(environments_router)

app.include_router(api)
