import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from backoffice.core.dependencies import get_db
from backoffice.core.exceptions import StoreFailure
from backoffice.schemas.base import ErrorResponse
from backoffice.schemas.stats import DashboardStatsResponse
from backoffice.services.stats_service import StatsService

logger = logging.getLogger(__name__)
router = APIRouter(
    tags=["Dashboard"],
    responses={500: {"model": ErrorResponse, "description": "Database error"}},
)


@router.get("/stats", response_model=DashboardStatsResponse, summary="Dashboard counters")
def get_stats(db: Session = Depends(get_db)):
    try:
        return StatsService(db).dashboard()
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Reading dashboard stats failed: {str(e)}")
        raise StoreFailure(str(e))
