"""Social media chart building: data preparation, group summaries and Plotly figures."""

from socialcharts.chart_widget.chart_state import ChartState, ChartType, Margin
from socialcharts.chart_widget.figure_generator import FigureGenerator

__all__ = [
    "ChartState",
    "ChartType",
    "FigureGenerator",
    "Margin",
]
