"""Admin dashboard endpoint."""

from fastapi import APIRouter, Query

from eventreg.api.dependencies import StoreDep
from eventreg.api.models import (
    APIResponse,
    DashboardStatsResponse,
    dashboard_stats_to_response,
)

router = APIRouter(prefix="/admin/dashboard", tags=["admin"])


@router.get("", response_model=APIResponse[DashboardStatsResponse])
def get_dashboard(
    store: StoreDep,
    recent: int = Query(default=5, ge=0, le=50),
) -> APIResponse[DashboardStatsResponse]:
    """Totals across non-cancelled registrations plus the newest registrations."""
    stats = store.get_dashboard_stats(recent_limit=recent)
    return APIResponse(data=dashboard_stats_to_response(stats))
