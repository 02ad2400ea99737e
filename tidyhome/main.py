"""Main FastAPI application for TidyHome API."""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from tidyhome import models  # noqa: F401  registers tables on Base.metadata
from tidyhome.api.v1 import auth, categories, history, members, tasks
from tidyhome.config import settings
from tidyhome.database import Base, engine
from tidyhome.log_config import configure_logging
from tidyhome.utils.dates import utcnow

configure_logging()
logger = logging.getLogger(__name__)

# Zero-setup SQLite; production schemas are managed with Alembic
Base.metadata.create_all(bind=engine)

# Create FastAPI application instance
app = FastAPI(
    title=settings.PROJECT_NAME,
    debug=settings.DEBUG,
)

# Include API routers
app.include_router(
    auth.router,
    prefix=f"{settings.API_V1_PREFIX}/auth",
    tags=["Authentication"]
)

app.include_router(
    tasks.router,
    prefix=f"{settings.API_V1_PREFIX}/tasks",
    tags=["Tasks"]
)

app.include_router(
    history.router,
    prefix=f"{settings.API_V1_PREFIX}/history",
    tags=["History"]
)

app.include_router(
    members.router,
    prefix=f"{settings.API_V1_PREFIX}/members",
    tags=["Members"]
)

app.include_router(
    categories.router,
    prefix=f"{settings.API_V1_PREFIX}/categories",
    tags=["Categories"]
)


@app.exception_handler(SQLAlchemyError)
async def storage_error_handler(request: Request, exc: SQLAlchemyError):
    """Report storage failures as a generic error without internals."""
    logger.error("Storage error on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


@app.get("/")
def root():
    """Root endpoint - API welcome message."""
    return {
        "message": "Welcome to TidyHome API",
        "docs": "/docs",
        "version": "1.0.0"
    }


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {"status": "ok", "timestamp": utcnow().isoformat() + "Z"}


@app.get(f"{settings.API_V1_PREFIX}/config")
def public_config():
    """Settings the frontend needs before login."""
    return {"allow_signups": settings.ALLOW_SIGNUPS}
