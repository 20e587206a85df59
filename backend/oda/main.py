"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from oda.config import get_settings
from oda.infrastructure.database import Base, engine
from oda.infrastructure.database.session import async_session_factory
from oda.infrastructure.database.repositories import SQLAlchemyPublicDataRepository
from oda.application.services import CatalogLoader
from oda.infrastructure.logging.log_config import setup_logging
from oda.presentation.api.router import router as api_router

logger = logging.getLogger(__name__)


async def _seed_catalog(csv_path: str) -> None:
    """Load the configured catalog CSV; names already present are skipped."""
    try:
        async with async_session_factory() as session:
            loader = CatalogLoader(SQLAlchemyPublicDataRepository(session))
            created = await loader.load(csv_path)
            await session.commit()
            logger.info("Catalog seed complete: %d new datasets", created)
    except Exception:
        logger.exception("Failed to seed catalog from %s — continuing without it", csv_path)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan — configure logging, create tables, seed the catalog."""
    settings = get_settings()
    setup_logging()

    # 1. Create all database tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    # 2. Seed the catalog from CSV (optional)
    if settings.catalog_csv_path:
        await _seed_catalog(settings.catalog_csv_path)

    yield

    # Shutdown
    await engine.dispose()


def create_app() -> FastAPI:
    """Factory function that builds and configures the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Mount API routes
    app.include_router(api_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "oda.main:app",
        host="0.0.0.0",
        port=8080,
        reload=True,
    )
