import logging

from application.rest.schemas.output.common_output import ErrorResponse, HealthResponse
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import text
from sqlalchemy.orm import Session
from utils.config import SERVICE_NAME
from utils.dependencies import get_db

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    path="/health",
    description="Health check endpoint; also verifies the database answers.",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    responses={
        status.HTTP_503_SERVICE_UNAVAILABLE: {
            "model": ErrorResponse,
            "description": "Database is unreachable.",
            "content": {
                "application/json": {"example": {"detail": "Database unavailable"}}
            },
        },
    },
)
async def health_check(db: Session = Depends(get_db)) -> HealthResponse:
    """Report service health after a trivial database round-trip.

    Args:
        db (Session): Fresh database session for this request.

    Returns:
        HealthResponse: Service status and name.

    Raises:
        HTTPException: 503 if the database cannot be reached.
    """
    try:
        db.execute(text("SELECT 1"))
    except Exception as e:
        logger.error(f"Health check failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Database unavailable",
        ) from e
    return HealthResponse(status="healthy", service=SERVICE_NAME)
