from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.v1.router import router as api_v1_router
from app.config.settings import settings
from app.core.exception_handlers import register_exception_handlers
from app.core.logging import get_logger
from app.core.middleware import register_middlewares
from app.db.init_db import init_db

logger = get_logger(__name__)


def create_app() -> FastAPI:
    """
    Application factory for the FastAPI app.

    - Configures title, version, debug mode from Settings.
    - Registers CORS, core middleware, and exception handlers.
    - Includes the versioned API router under /api/v1.
    """
    app = FastAPI(
        title=settings.APP_NAME,
        debug=settings.DEBUG,
        version=settings.API_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    # CORS Configuration
    origins = settings.cors_origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins or ["*"],
        # Credentials cannot be combined with a wildcard origin
        allow_credentials=bool(origins) and "*" not in origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Request ID and timing
    register_middlewares(app)
    register_exception_handlers(app)

    # Mount API v1 under /api/v1
    app.include_router(api_v1_router, prefix=settings.API_V1_STR)

    @app.on_event("startup")
    async def on_startup() -> None:
        # Schema is created in place; there are no migrations
        init_db()
        logger.info(
            "Application started",
            extra={"environment": settings.ENVIRONMENT, "version": settings.API_VERSION},
        )

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host=settings.HOST, port=settings.PORT, reload=settings.DEBUG)
