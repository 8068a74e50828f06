import logging
import os
from contextlib import asynccontextmanager
from typing import Optional

import asyncpg
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import FileResponse, JSONResponse

from songcatalog.api.endpoints import songs
from songcatalog.core.config import Settings
from songcatalog.core.errors import SongCatalogError, ValidationError
from songcatalog.core.http_client import create_http_client
from songcatalog.services.matcher import MatchResolver
from songcatalog.services.providers import ProviderFactory
from songcatalog.services.song_service import SongService
from songcatalog.services.storage_service import SongStore

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Wire the HTTP client, database pool and service unless one was injected."""
    if app.state.song_service is not None:
        yield
        return

    settings: Settings = app.state.settings
    settings.require("database_url")

    client = create_http_client(timeout=settings.provider_timeout)
    pool = None
    try:
        pool = await asyncpg.create_pool(
            settings.database_url,
            min_size=settings.db_pool_min,
            max_size=settings.db_pool_max,
            timeout=settings.store_timeout,
        )
        logger.info("Database connection pool created")

        store = SongStore(pool, timeout=settings.store_timeout)
        await store.ensure_schema()
        provider = ProviderFactory.create(settings.search_provider, client, settings)
        app.state.song_service = SongService(
            provider=provider,
            store=store,
            resolver=MatchResolver(settings.match_policy),
            provider_timeout=settings.provider_timeout,
        )
        logger.info(f"Search provider: {provider.provider_name}, match policy: {settings.match_policy.value}")
        yield
    finally:
        await client.aclose()
        if pool is not None:
            await pool.close()
            logger.info("Database connection pool closed")
        app.state.song_service = None


def create_app(settings: Optional[Settings] = None, service: Optional[SongService] = None) -> FastAPI:
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Song Catalog",
        description="Song metadata catalog with lyrics enrichment.",
        version="1.0.0",
        docs_url="/docs" if settings.enable_docs else None,
        openapi_url="/openapi.json" if settings.enable_docs else None,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.song_service = service

    @app.exception_handler(SongCatalogError)
    async def catalog_error_handler(request: Request, exc: SongCatalogError):
        log = logger.error if exc.status_code >= 500 else logger.warning
        log(f"[ERROR] {request.method} {request.url.path}: {type(exc).__name__}: {exc.detail}")
        return JSONResponse(status_code=exc.status_code, content={"error": exc.public_message})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        logger.warning(f"[ERROR] Invalid input on {request.method} {request.url.path}: {exc.errors()}")
        return JSONResponse(status_code=ValidationError.status_code,
                            content={"error": ValidationError.public_message})

    app.include_router(songs.router)

    @app.get("/", include_in_schema=False)
    async def root():
        index = app.state.settings.frontend_index
        if not os.path.isfile(index):
            logger.warning(f"Front-end index not found: {index}")
            return JSONResponse(status_code=404, content={"error": "Front-end not found"})
        return FileResponse(index)

    @app.get("/health")
    async def health_check():
        return {"status": "ok"}

    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("songcatalog.main:create_app", factory=True,
                host=os.getenv("HOST", "0.0.0.0"), port=int(os.getenv("PORT", "8080")))
