"""FastAPI application entry point."""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from coinfolio import __version__
from coinfolio.api.routers import analysis_router, coins_router, portfolio_router
from coinfolio.app_context import AppContext
from coinfolio.config.logging_config import setup_logging
from coinfolio.config.settings import get_settings
from coinfolio.core.exceptions import AppError, NotFoundError, UpstreamError
from coinfolio.repositories.sqlalchemy.database import init_db


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    setup_logging()
    context = getattr(app.state, "context", None)
    if context is None:
        init_db()
        context = AppContext()
        app.state.context = context
    await context.start()
    yield
    # Shutdown
    await context.close()


def create_app(context: Optional[AppContext] = None) -> FastAPI:
    """Build the application; a prepared context skips database setup."""
    settings = get_settings()
    app = FastAPI(
        title=settings.app_name,
        description="Local-first crypto portfolio tracking",
        version=__version__,
        lifespan=lifespan,
    )
    if context is not None:
        app.state.context = context

    app.include_router(portfolio_router)
    app.include_router(coins_router)
    app.include_router(analysis_router)

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
        return JSONResponse(
            status_code=404,
            content={"error": exc.code, "message": exc.message},
        )

    @app.exception_handler(UpstreamError)
    async def upstream_error_handler(request: Request, exc: UpstreamError) -> JSONResponse:
        return JSONResponse(
            status_code=502,
            content={"error": exc.code, "message": exc.message},
        )

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        """Global handler for application errors."""
        return JSONResponse(
            status_code=400,
            content={"error": exc.code, "message": exc.message},
        )

    @app.get("/health")
    def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy"}

    @app.get("/")
    def root() -> dict[str, str]:
        """Root endpoint with API info."""
        return {
            "app": settings.app_name,
            "version": __version__,
            "docs": "/docs",
        }

    return app


app = create_app()
