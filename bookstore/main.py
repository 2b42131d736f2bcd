"""FastAPI application — main entry point."""

from contextlib import asynccontextmanager
from typing import Optional

import structlog
from fastapi import FastAPI

from bookstore.config import Settings, get_settings
from bookstore.core.exceptions import register_exception_handlers
from bookstore.core.logging import configure_logging
from bookstore.core.middleware import setup_middleware
from bookstore.infrastructure.database import connect

from bookstore.interfaces.api.auth import router as auth_router
from bookstore.interfaces.api.books import router as books_router
from bookstore.interfaces.api.users import router as users_router

logger = structlog.get_logger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Connect to the store before serving; a failed ping aborts startup."""
        logger.info("Starting Bookstore API", env=settings.ENVIRONMENT)

        database = connect(
            settings.DATABASE_URL,
            timeout=settings.DB_TIMEOUT_SECONDS,
            echo=settings.DB_ECHO,
        )
        app.state.database = database

        if settings.CREATE_SCHEMA:
            # Dev convenience; production schemas are managed outside the app
            database.create_all()
            logger.info("Database tables created/verified")

        from bookstore.application.services.user_service import ensure_default_admin
        from bookstore.domain.models.user import User
        from bookstore.infrastructure.repositories.user_repository import SQLAlchemyUserRepository

        with database.session() as db:
            ensure_default_admin(
                SQLAlchemyUserRepository(db, User),
                settings.DEFAULT_ADMIN_EMAIL,
                settings.DEFAULT_ADMIN_PASSWORD,
            )

        yield

        database.dispose()
        logger.info("Bookstore API stopped")

    app = FastAPI(
        title="Bookstore API",
        description="Session login, user administration and the book catalogue",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings

    setup_middleware(app, settings)
    register_exception_handlers(app)

    app.include_router(auth_router)
    app.include_router(users_router)
    app.include_router(books_router)

    @app.get("/health")
    def health():
        return {"status": "healthy"}

    return app


app = create_app()


def run() -> None:
    import uvicorn

    uvicorn.run("bookstore.main:app", host="0.0.0.0", port=8081)
