from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from notary_fees.api.v1.router import router as api_v1_router
from notary_fees.config.settings import settings
from notary_fees.core.exceptions import BaseAppException
from notary_fees.core.logging import get_logger, setup_logging
from notary_fees.core.middleware import get_request_id, register_middlewares
from notary_fees.db.init_db import init_db

logger = get_logger(__name__)


async def app_exception_handler(request: Request, exc: BaseAppException) -> JSONResponse:
    """Typed errors that escape a route keep their status code and error code."""
    body = exc.to_dict()
    body["error"]["request_id"] = get_request_id(request)
    return JSONResponse(status_code=exc.status_code, content=body)


def create_app() -> FastAPI:
    """
    Application factory for the FastAPI app.

    - Configures logging, title, version and debug mode from Settings.
    - Registers CORS, core middleware and the typed-error handler.
    - Includes the versioned API router under /api/v1.
    """
    setup_logging()

    app = FastAPI(
        title=settings.APP_NAME,
        debug=settings.DEBUG,
        version=settings.API_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS or ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_middlewares(app)
    app.add_exception_handler(BaseAppException, app_exception_handler)

    app.include_router(api_v1_router, prefix=settings.API_V1_STR)

    @app.get("/health", tags=["Health"])
    def health() -> dict:
        return {"status": "ok", "version": settings.API_VERSION}

    # Development databases only; production schemas are managed separately
    @app.on_event("startup")
    async def on_startup() -> None:
        if not settings.is_production():
            init_db()

    logger.info(
        "Application created",
        extra={"environment": settings.ENVIRONMENT, "api_prefix": settings.API_V1_STR},
    )
    return app


app = create_app()
