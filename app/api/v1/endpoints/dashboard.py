"""Dashboard counters."""
from datetime import date
from typing import Optional

from fastapi import APIRouter, HTTPException, status

from app.api.deps import DB
from app.schemas.dashboard import DashboardStats, DailyStats
from app.services.dashboard_service import DashboardService


router = APIRouter()


@router.get("/stats", response_model=DashboardStats)
async def get_dashboard_stats(db: DB):
    service = DashboardService(db)
    return DashboardStats(**await service.get_stats())


@router.get("/daily-stats", response_model=DailyStats)
async def get_daily_stats(db: DB, date: Optional[str] = None):
    """Sales and purchase totals for one day (``date=YYYY-MM-DD``)."""
    if not date:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Date parameter is required"
        )
    try:
        day = _parse_day(date)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid date format. Use YYYY-MM-DD"
        )

    service = DashboardService(db)
    return DailyStats(**await service.get_daily_stats(day))


def _parse_day(value: str):
    return date.fromisoformat(value.strip())
