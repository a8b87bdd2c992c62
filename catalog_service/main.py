import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from catalog_service.config import Settings
from catalog_service.logging_config import setup_logging
from catalog_service.infrastructure.database import Database
from catalog_service.application.product.seed_products import initialize_products
from catalog_service.api.v1 import products


logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the catalog application, settings default to environment variables"""
    settings = settings or Settings()
    setup_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Lifecycle manager - setup and teardown.
        Inicjalizuje połączenie z bazą danych przy starcie aplikacji.
        """
        # Startup
        db = Database(settings.database_url, echo=settings.db_echo)
        await db.create_tables()

        if settings.seed_sample_products:
            await initialize_products(db)

        app.state.db = db
        logger.info("Database connected: %s", db.describe())

        yield

        # Shutdown
        await db.close()
        logger.info("Database connection closed")

    app = FastAPI(
        title="E-commerce Catalog",
        description="Products with color/size variants and stock counts",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(products.router)

    @app.get("/health")
    async def health():
        """Health check endpoint"""
        return {"status": "ok", "service": "catalog"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = app.state.settings
    uvicorn.run(
        "catalog_service.main:app",
        host=settings.host,
        port=settings.port,
    )
