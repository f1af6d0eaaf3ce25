"""
Health check endpoint.
"""

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.api import deps
from app.config.settings import settings
from app.core.logging import get_logger
from app.schemas.common import HealthResponse

logger = get_logger(__name__)

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthResponse)
def health(db: Session = Depends(deps.get_db)) -> HealthResponse:
    database = "ok"
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error(f"Health check database query failed: {e}")
        database = "unavailable"

    return HealthResponse(
        status="ok" if database == "ok" else "degraded",
        version=settings.API_VERSION,
        environment=settings.ENVIRONMENT,
        database=database,
    )
