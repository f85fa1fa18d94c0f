"""
Client Portal - Main Application Entry Point

Agency client portal: client accounts, milestone progress and risk tracking.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import get_settings

logger = logging.getLogger("client_portal")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    # Startup
    settings = get_settings()
    logger.info(f"Starting Client Portal in {settings.ENVIRONMENT} mode...")

    from app.api.deps import get_user_repository
    from app.infrastructure.local.database import dispose_db, init_db
    from app.services.bootstrap import ensure_admin_account

    await init_db()
    await ensure_admin_account(get_user_repository(), settings)

    yield

    # Shutdown
    logger.info("Shutting down Client Portal...")
    await dispose_db()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()
    logging.basicConfig(
        level=logging.DEBUG if settings.DEBUG else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title="Client Portal",
        description="Agency client portal - milestones, progress and risk tracking",
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    from app.api import analytics, auth, chat_settings, clients, dashboard, messages

    app.include_router(auth.router, prefix="/api/auth", tags=["auth"])
    app.include_router(clients.router, prefix="/api/admin", tags=["admin"])
    app.include_router(analytics.router, prefix="/api/admin", tags=["admin"])
    app.include_router(chat_settings.router, prefix="/api/admin", tags=["admin"])
    app.include_router(dashboard.router, prefix="/api", tags=["dashboard"])
    app.include_router(messages.router, prefix="/api", tags=["messages"])

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "environment": settings.ENVIRONMENT,
            "version": "0.1.0"
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )
