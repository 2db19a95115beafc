"""
Main FastAPI application.

This is the entry point for the API server.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from recruit.core.config import settings
from recruit.db.session import engine
from recruit.errors import AppError, app_error_handler
from recruit.routers import health, positions, public, questions, teams

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging on start-up and release the engine on shutdown."""
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Starting %s", settings.APP_NAME)
    
    yield
    
    await engine.dispose()
    logger.info("Shut down %s", settings.APP_NAME)


# Create the FastAPI application
app = FastAPI(
    title=settings.APP_NAME,
    description="Positions, application questions and applicant submissions",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_exception_handler(AppError, app_error_handler)

# Include routers (API endpoints)
app.include_router(health.router, tags=["Health"])
app.include_router(teams.router)
app.include_router(questions.router)
app.include_router(positions.router)
app.include_router(public.router)
