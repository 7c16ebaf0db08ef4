"""FastAPI application setup.

Run with `python main.py` or `uvicorn --factory catalog_api.api:create_app`.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.httpsredirect import HTTPSRedirectMiddleware
from fastapi.responses import JSONResponse

from catalog_api.api.controller import catalog_router
from catalog_api.clients import MongoDBClient
from catalog_api.config import AppConfig, get_config, get_environment
from catalog_api.services import CatalogsService

logger = logging.getLogger(__name__)


def create_app(config: Optional[AppConfig] = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        config: Application configuration. Defaults to the `get_config()`
            singleton, so CORS and HTTPS redirect always follow the YAML.

    Raises:
        ConfigurationError: If configuration is missing or invalid.
    """
    app_config = config or get_config()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logging.basicConfig(level=app_config.logging.level)

        async with MongoDBClient(app_config.catalog_db) as mongo_client:
            app.state.catalogs_service = CatalogsService(mongo_client.collection)
            logger.info("Catalog API started")
            yield

        logger.info("Catalog API stopped")

    # OpenAPI docs only in development
    is_dev = get_environment() == "dev"

    app = FastAPI(
        title="Catalog API",
        description="CRUD API for the product catalog",
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs" if is_dev else None,
        redoc_url="/redoc" if is_dev else None,
        openapi_url="/openapi.json" if is_dev else None,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(app_config.cors.allow_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Needs a TLS-terminating proxy whose X-Forwarded-Proto uvicorn trusts
    if app_config.server.https_redirect:
        app.add_middleware(HTTPSRedirectMiddleware)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Report body binding failures as 400 Bad Request."""
        return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})

    # Include routers
    app.include_router(catalog_router)

    @app.get("/health")
    async def health_check() -> dict:
        """Health check endpoint."""
        return {"status": "healthy"}

    return app
