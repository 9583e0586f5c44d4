from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from services.chart import ChartRenderer, PlotlyChartRenderer
from services.dashboard import DashboardService, build_default_dashboard


templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent / "templates"))


def get_dashboard() -> DashboardService:
    return build_default_dashboard()


def get_chart_renderer() -> ChartRenderer:
    return PlotlyChartRenderer()


router = APIRouter(include_in_schema=False)


@router.get("/", name="ui_dashboard", response_class=HTMLResponse)
async def ui_dashboard(
    request: Request,
    dashboard: DashboardService = Depends(get_dashboard),
    renderer: ChartRenderer = Depends(get_chart_renderer),
) -> HTMLResponse:
    view = dashboard.view
    tables = [
        ("Reading History", "history", view.history),
        ("Top 5 Highest Temperatures", "highest", view.highest),
        ("Top 5 Lowest Temperatures", "lowest", view.lowest),
    ]
    return templates.TemplateResponse(
        request,
        "dashboard.html",
        {
            "chart_html": renderer.render(view.chart),
            "tables": tables,
            "refresh_seconds": max(1, round(dashboard.scheduler.interval)),
            "updated_at": dashboard.view_updated_at,
        },
    )
