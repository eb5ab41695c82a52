import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.httpsredirect import HTTPSRedirectMiddleware

from fornecedor_api import __version__
from fornecedor_api.api import auth_router, fornecedor_router
from fornecedor_api.core.config import Settings, get_settings
from fornecedor_api.core.database import create_tables
from fornecedor_api.core.exceptions import register_exception_handlers
from fornecedor_api.core.logging import setup_logging
from fornecedor_api.web.middleware import RequestLoggingMiddleware

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the FastAPI application.

    Interactive docs are only served in development.
    """
    settings = settings or get_settings()
    setup_logging()

    docs_enabled = settings.is_development

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if settings.AUTO_CREATE_TABLES:
            create_tables()
        logger.info(
            "Fornecedor API started",
            extra={"environment": settings.ENVIRONMENT, "version": __version__},
        )
        yield

    app = FastAPI(
        lifespan=lifespan,
        title="Fornecedor API",
        description="Gestão de fornecedores com registro e login via JWT",
        version=__version__,
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None,
    )

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    if settings.FORCE_HTTPS:
        app.add_middleware(HTTPSRedirectMiddleware)

    register_exception_handlers(app)

    app.include_router(fornecedor_router)
    app.include_router(auth_router)

    @app.get("/")
    async def root():
        return {"message": "Fornecedor API", "version": __version__, "docs": "/docs" if docs_enabled else None}

    @app.get("/health")
    async def health_check():
        return {"status": "ok"}

    return app


app = create_app()
