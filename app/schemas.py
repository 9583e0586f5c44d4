"""Pydantic schemas for the HTTP API layer."""

from __future__ import annotations

from datetime import datetime
from typing import Any, List, Literal, Optional

from pydantic import BaseModel, Field

from services.projections import DashboardView, TableRow


class ChartData(BaseModel):
    """Label/value pairs feeding the temperature chart."""

    label: str
    labels: List[str] = Field(default_factory=list)
    values: List[Any] = Field(default_factory=list)


class ReadingRow(BaseModel):
    """One formatted table row."""

    temperature: str = Field(..., description="Temperature with one decimal place.")
    recorded_at: str = Field(..., description="Human-readable date and time.")
    band: Literal["even", "odd"]

    @classmethod
    def from_row(cls, row: TableRow) -> "ReadingRow":
        return cls(temperature=row.temperature, recorded_at=row.recorded_at, band=row.band)


class DashboardResponse(BaseModel):
    """Everything the dashboard page shows, as JSON."""

    chart: ChartData
    history: List[ReadingRow] = Field(default_factory=list)
    highest: List[ReadingRow] = Field(default_factory=list)
    lowest: List[ReadingRow] = Field(default_factory=list)
    revision: int = Field(..., ge=0, description="Number of refreshes applied so far.")
    updated_at: Optional[datetime] = None

    @classmethod
    def from_view(
        cls, view: DashboardView, revision: int, updated_at: Optional[datetime]
    ) -> "DashboardResponse":
        return cls(
            chart=ChartData(
                label=view.chart.label,
                labels=list(view.chart.labels),
                values=list(view.chart.values),
            ),
            history=[ReadingRow.from_row(row) for row in view.history],
            highest=[ReadingRow.from_row(row) for row in view.highest],
            lowest=[ReadingRow.from_row(row) for row in view.lowest],
            revision=revision,
            updated_at=updated_at,
        )


class HealthResponse(BaseModel):
    status: str = "ok"
    polling: bool
