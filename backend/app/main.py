import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.days import router as days_router
from app.api.months import router as months_router
from app.core.config import Settings, settings
from app.core.logging_config import configure_logging
from app.db import StorageError, Store

logger = logging.getLogger(__name__)


def create_app(app_settings: Settings | None = None) -> FastAPI:
    app_settings = app_settings or settings
    configure_logging(app_settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Open the store and create tables on startup
        store = Store(app_settings.database_url)
        store.ensure_schema()
        app.state.store = store
        logger.info("Store opened at %s", store.engine.url)
        try:
            yield
        finally:
            store.close()

    app = FastAPI(title="Weightgrid", lifespan=lifespan)
    app.state.settings = app_settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(StorageError)
    async def _storage_error_handler(request: Request, exc: StorageError):
        return JSONResponse(status_code=503, content={"detail": str(exc)})

    app.include_router(months_router)
    app.include_router(days_router)

    @app.get("/")
    def root():
        return {"message": "Weightgrid backend is running"}

    return app


app = create_app()
