"""HTTP route definitions for the service."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from app.schemas import DashboardResponse, HealthResponse
from services.dashboard import DashboardService, build_default_dashboard

router = APIRouter()


def get_dashboard() -> DashboardService:
    return build_default_dashboard()


@router.get(
    "/api/dashboard",
    response_model=DashboardResponse,
    summary="Chart series and ranked tables from the latest refresh.",
)
async def get_dashboard_data(
    dashboard: DashboardService = Depends(get_dashboard),
) -> DashboardResponse:
    return DashboardResponse.from_view(
        dashboard.view,
        revision=dashboard.view_revision,
        updated_at=dashboard.view_updated_at,
    )


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check endpoint.",
    status_code=status.HTTP_200_OK,
)
async def healthcheck(
    dashboard: DashboardService = Depends(get_dashboard),
) -> HealthResponse:
    return HealthResponse(polling=dashboard.scheduler.is_active)
