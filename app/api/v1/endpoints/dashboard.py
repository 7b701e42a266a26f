from typing import Any, Optional
from fastapi import APIRouter, Depends, Query

from app.api import deps
from app.config import settings
from app.schemas.dashboard import DashboardSummary
from app.schemas.responses import SuccessResponse
from app.services.school_service import SchoolService
from app.stores.base import SchoolStores

router = APIRouter()


@router.get("", response_model=SuccessResponse[DashboardSummary])
async def get_dashboard(
    recent: Optional[int] = Query(None, ge=1, le=50, description="Number of recent students"),
    stores: SchoolStores = Depends(deps.get_stores),
) -> Any:
    """
    Aggregated statistics: totals, level distribution, teacher loads, ratios.
    """
    summary = await SchoolService.get_dashboard(
        stores, recent=recent or settings.DASHBOARD_RECENT_LIMIT
    )
    message = "Real-time overview of your school data." if summary.has_data else (
        "Get started by adding students, teachers, and subjects."
    )
    return SuccessResponse(data=summary, message=message)
