"""Chart rendering for the temperature series."""

from __future__ import annotations

from typing import Protocol

import plotly.graph_objects as go

from services.projections import ChartSeries

LINE_COLOR = "#FF6600"


class ChartRenderer(Protocol):
    def render(self, series: ChartSeries) -> str: ...


def build_temperature_figure(series: ChartSeries, *, height: int = 400) -> go.Figure:
    fig = go.Figure()
    fig.add_trace(
        go.Scatter(
            x=list(range(len(series.labels))),
            text=list(series.labels),
            y=list(series.values),
            mode="lines+markers",
            name=series.label,
            line=dict(color=LINE_COLOR, shape="spline", smoothing=0.3),
            marker=dict(color=LINE_COLOR, size=6),
        )
    )
    fig.update_layout(
        template="simple_white",
        height=height,
        autosize=True,
        margin=dict(l=40, r=20, t=30, b=40),
        showlegend=True,
        legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="right", x=1),
        yaxis_title=series.label,
    )
    # Labels can repeat when readings share a second, so plot by position.
    fig.update_xaxes(
        tickmode="array",
        tickvals=list(range(len(series.labels))),
        ticktext=list(series.labels),
    )
    return fig


class PlotlyChartRenderer:
    """Renders the series as an embeddable HTML fragment."""

    def __init__(self, height: int = 400) -> None:
        self.height = height

    def render(self, series: ChartSeries) -> str:
        fig = build_temperature_figure(series, height=self.height)
        return fig.to_html(
            full_html=False,
            include_plotlyjs="cdn",
            config={"responsive": True, "displayModeBar": False},
        )
