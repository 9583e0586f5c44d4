from __future__ import annotations

import plotly.graph_objects as go

from services.chart import LINE_COLOR, PlotlyChartRenderer, build_temperature_figure
from services.projections import CHART_LABEL, ChartSeries


def _series() -> ChartSeries:
    return ChartSeries(labels=("10:00:00", "10:00:05", "10:00:05"), values=(21.5, 22.0, 20.5))


def test_build_temperature_figure_basic_properties() -> None:
    fig = build_temperature_figure(_series(), height=300)

    assert isinstance(fig, go.Figure)
    assert len(fig.data) == 1
    trace = fig.data[0]
    assert trace.name == CHART_LABEL
    assert list(trace.y) == [21.5, 22.0, 20.5]
    assert trace.line.color == LINE_COLOR
    assert fig.layout.height == 300
    assert fig.layout.yaxis.title.text == CHART_LABEL


def test_duplicate_labels_keep_one_point_per_reading() -> None:
    fig = build_temperature_figure(_series())

    assert list(fig.data[0].x) == [0, 1, 2]
    assert list(fig.layout.xaxis.ticktext) == ["10:00:00", "10:00:05", "10:00:05"]


def test_empty_series_renders() -> None:
    html = PlotlyChartRenderer().render(ChartSeries(labels=(), values=()))

    assert isinstance(html, str)
    assert "<div" in html


def test_renderer_emits_embeddable_fragment() -> None:
    html = PlotlyChartRenderer(height=250).render(_series())

    assert "<html" not in html.lower()
    assert "Plotly.newPlot" in html
    assert CHART_LABEL in html or "Temperature" in html
