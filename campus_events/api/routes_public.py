"""
Public API routes - no authentication required
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from campus_events.core.db import get_db
from campus_events.utils.responses import success_response

logger = logging.getLogger(__name__)

router = APIRouter()

@router.get("/health")
async def health_check(db: Session = Depends(get_db)):
    """Health check endpoint"""
    try:
        db.execute(text("SELECT 1"))
        database = "ok"
    except SQLAlchemyError as exc:
        logger.error("Health check database ping failed: %s", exc)
        database = "unavailable"

    return success_response("Campus Event Management API is running", {
        "status": "ok" if database == "ok" else "degraded",
        "database": database,
    })
