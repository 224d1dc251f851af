"""Dashboard and reporting endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from hiregenius.core.auth import UserContext, get_current_user
from hiregenius.core.database import get_db
from hiregenius.models.schemas import DashboardSummary, ReportSummary
from hiregenius.services import insights_service

router = APIRouter()


@router.get("/dashboard", response_model=DashboardSummary, tags=["Dashboard"])
async def dashboard(
    user: UserContext = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Headline counts, hiring funnel, top candidates and recent activity."""
    return await insights_service.dashboard(db, user.user_id)


@router.get("/reports", response_model=ReportSummary, tags=["Reports"])
async def reports(
    user: UserContext = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Time to hire by month, rejection reasons and application sources."""
    return await insights_service.reports(db, user.user_id)
