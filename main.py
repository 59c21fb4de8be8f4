"""
Campus Event Management API - FastAPI Backend
Main application entry point
"""

import logging
import sys
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
import uvicorn

from campus_events.core.config import settings
from campus_events.core.db import engine, Base
from campus_events.core.exceptions import ConfigurationError
from campus_events.api import (
    routes_attendance,
    routes_auth,
    routes_colleges,
    routes_events,
    routes_feedback,
    routes_public,
    routes_registrations,
    routes_reports,
    routes_students,
)
from campus_events.api.deps import general_limiter
from campus_events.api.errors import register_exception_handlers

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan management"""
    settings.validate_required()
    # Create database tables
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created")
    yield
    logger.info("Application shutdown")

# Create FastAPI application
app = FastAPI(
    title="Campus Event Management API",
    description="Colleges, students, events, registrations, attendance, feedback and reports",
    version="1.0.0",
    lifespan=lifespan
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOW_ORIGINS + [settings.FRONTEND_URL],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Include routers
prefix = settings.API_PREFIX
limited = [Depends(general_limiter)]

app.include_router(routes_public.router, tags=["public"])
app.include_router(routes_auth.router, prefix=f"{prefix}/auth", tags=["auth"], dependencies=limited)
app.include_router(routes_colleges.router, prefix=f"{prefix}/colleges", tags=["colleges"], dependencies=limited)
app.include_router(routes_students.router, prefix=f"{prefix}/students", tags=["students"], dependencies=limited)
app.include_router(routes_events.router, prefix=f"{prefix}/events", tags=["events"], dependencies=limited)
app.include_router(
    routes_registrations.router, prefix=f"{prefix}/registrations", tags=["registrations"], dependencies=limited
)
app.include_router(routes_attendance.router, prefix=f"{prefix}/attendance", tags=["attendance"], dependencies=limited)
app.include_router(routes_feedback.router, prefix=f"{prefix}/feedback", tags=["feedback"], dependencies=limited)
app.include_router(routes_reports.router, prefix=f"{prefix}/reports", tags=["reports"], dependencies=limited)

# Note: Run this ASGI app directly with Uvicorn or Hypercorn. For Gunicorn,
# use `uvicorn.workers.UvicornWorker` instead of wrapping the app.

if __name__ == "__main__":
    try:
        settings.validate_required()
    except ConfigurationError as exc:
        logger.error("Startup aborted: %s", exc.message)
        sys.exit(1)

    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=False
    )
