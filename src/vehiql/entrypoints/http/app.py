from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from vehiql.entrypoints.http.exception_handlers import register_exception_handlers
from vehiql.entrypoints.http.routes.admin import router as admin_router
from vehiql.entrypoints.http.routes.health import router as health_router
from vehiql.entrypoints.http.routes.listings import router as listings_router
from vehiql.infra.db.session import dispose_engine
from vehiql.infra.logging_config import configure_logging


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    yield
    dispose_engine()


def build_app() -> FastAPI:
    configure_logging()

    app = FastAPI(
        title="Vehiql Marketplace API",
        description="""
        Vehicle marketplace API for browsing and administering listings.

        ## Features
        - Browse the catalog with filters, sorting and pagination
        - Filter facets (makes, body types, fuel types, transmissions, price range)
        - Listing administration and image upload

        ## Authentication
        Read endpoints are public. `/v1/admin/*` requires the identity proxy
        headers `X-User-Id` (and `X-User-Email` / `X-User-Role`) of an
        administrator.

        ## Error Handling
        All errors return structured JSON responses with error codes.
        """,
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    register_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(listings_router, prefix="/v1")
    app.include_router(admin_router, prefix="/v1")

    return app


app = build_app()
