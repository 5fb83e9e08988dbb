"""Plotly figure generation for the social media charts.

This module provides the FigureGenerator class, the render step: it takes
already-computed data (a GroupedResult or a prepared DataFrame) plus a
ChartState and returns a Plotly figure dictionary. No data loading or
statistics happen here.
"""

from __future__ import annotations

from typing import Union

import pandas as pd
import plotly.graph_objects as go

from socialcharts.utils.logging import get_logger
from socialcharts.chart_widget.algorithms.group_summary import GroupedResult
from socialcharts.chart_widget.chart_state import (
    BOX_FILL_COLOR,
    BOX_LINE_COLOR,
    BOX_MEDIAN_COLOR,
    ChartState,
    ChartType,
)

logger = get_logger(__name__)

ChartData = Union[GroupedResult, pd.DataFrame]


class FigureGenerator:
    """Generates Plotly figure dictionaries from computed data and chart state.

    Attributes:
        state: ChartState giving chart type, columns, geometry and styling.
    """

    def __init__(self, state: ChartState) -> None:
        self.state = state

    def make_figure(self, data: ChartData) -> dict:
        """Generate the figure for self.state.chart_type.

        Args:
            data: GroupedResult for box plots, prepared DataFrame otherwise.

        Returns:
            Plotly figure dictionary.

        Raises:
            ValueError: If data does not match the chart type.
        """
        state = self.state
        logger.info(
            f"FigureGenerator.make_figure: chart_type={state.chart_type.value}, "
            f"csv_file={state.csv_file}, xcol={state.xcol}, ycol={state.ycol}"
        )

        if state.chart_type == ChartType.BOX_PLOT:
            if not isinstance(data, GroupedResult):
                raise ValueError("Box plot needs a GroupedResult")
            result = self.box_figure(data)
        elif state.chart_type == ChartType.GROUPED_BAR:
            if not isinstance(data, pd.DataFrame):
                raise ValueError("Grouped bar chart needs a DataFrame")
            result = self.grouped_bar_figure(data)
        elif state.chart_type == ChartType.LINE:
            if not isinstance(data, pd.DataFrame):
                raise ValueError("Line chart needs a DataFrame")
            result = self.line_figure(data)
        else:
            raise ValueError(f"Unknown chart type: {state.chart_type!r}")

        logger.debug(f"Figure generated: {len(result.get('data', []))} traces")
        return result

    def _base_layout(self) -> dict:
        state = self.state
        m = state.margin
        layout = dict(
            width=state.width,
            height=state.height,
            margin=dict(l=m.left, r=m.right, t=m.top, b=m.bottom),
            xaxis_title=state.x_axis_title,
            yaxis_title=state.y_axis_title,
            xaxis_tickangle=state.x_tickangle,
            showlegend=state.legend != "none",
            plot_bgcolor="white",
        )
        if state.legend == "top-right":
            layout["legend"] = dict(x=1, y=1, xanchor="right", yanchor="top")
        return layout

    def box_figure(self, result: GroupedResult) -> dict:
        """Box plot: one precomputed box per group, whiskers from min to max.

        Boxes are placed in result order. A median overlay line is drawn in
        BOX_MEDIAN_COLOR on top of each box.
        """
        state = self.state
        # category axis: one band per group, step 1
        box_width = state.box_width_fraction * (1.0 - state.band_padding)

        fig = go.Figure()
        shapes = []
        for i, (group, s) in enumerate(result.items()):
            fig.add_trace(go.Box(
                x=[group],
                q1=[s.q1],
                median=[s.median],
                q3=[s.q3],
                lowerfence=[s.min],
                upperfence=[s.max],
                name=group,
                boxpoints=False,
                width=box_width,
                fillcolor=BOX_FILL_COLOR,
                line=dict(color=BOX_LINE_COLOR, width=1.5),
                whiskerwidth=0,
                showlegend=False,
                hovertemplate=(
                    f"{state.x_axis_title}={group}<br>"
                    f"min={s.min:g} q1={s.q1:g} median={s.median:g} "
                    f"q3={s.q3:g} max={s.max:g}<br>iqr={s.iqr:g}<extra></extra>"
                ),
            ))
            shapes.append(dict(
                type="line",
                xref="x",
                yref="y",
                x0=i - box_width / 2,
                x1=i + box_width / 2,
                y0=s.median,
                y1=s.median,
                line=dict(color=BOX_MEDIAN_COLOR, width=2),
            ))

        layout = self._base_layout()
        layout.update(
            shapes=shapes,
            xaxis=dict(type="category", categoryorder="array", categoryarray=list(result)),
        )
        fig.update_layout(**layout)
        return fig.to_dict()

    def grouped_bar_figure(self, df: pd.DataFrame) -> dict:
        """Grouped bar chart: x bands from xcol, one colored bar per color_col value."""
        state = self.state
        if not state.color_col:
            raise ValueError("Grouped bar chart requires color_col")
        for col in (state.xcol, state.ycol, state.color_col):
            if col not in df.columns:
                raise ValueError(f"df must contain column {col!r}")

        x_domain = [str(v) for v in df[state.xcol].dropna().unique()]
        color_domain = [str(v) for v in df[state.color_col].dropna().unique()]

        fig = go.Figure()
        for i, color_val in enumerate(color_domain):
            sub = df[df[state.color_col].astype(str) == color_val]
            fig.add_trace(go.Bar(
                x=sub[state.xcol].astype(str).tolist(),
                y=pd.to_numeric(sub[state.ycol], errors="coerce").tolist(),
                name=color_val,
                marker_color=state.palette[i % len(state.palette)],
                hovertemplate=(
                    f"{state.xcol}=%{{x}}<br>{state.color_col}={color_val}<br>"
                    f"{state.y_axis_title}=%{{y:.1f}}<extra></extra>"
                ),
            ))

        layout = self._base_layout()
        layout.update(
            barmode="group",
            bargap=state.band_padding,
            bargroupgap=0.05,
            xaxis=dict(type="category", categoryorder="array", categoryarray=x_domain),
            yaxis=dict(rangemode="tozero"),
            legend_title_text=state.color_col,
        )
        if state.legend == "top-right":
            layout["legend"] = dict(x=1, y=1, xanchor="right", yanchor="top", title=dict(text=state.color_col))
            layout.pop("legend_title_text")
        fig.update_layout(**layout)
        return fig.to_dict()

    def line_figure(self, df: pd.DataFrame) -> dict:
        """Line chart of ycol over xcol (dates or categories), in row order."""
        state = self.state
        for col in (state.xcol, state.ycol):
            if col not in df.columns:
                raise ValueError(f"df must contain column {col!r}")

        x = df[state.xcol]
        y = pd.to_numeric(df[state.ycol], errors="coerce")

        fig = go.Figure()
        fig.add_trace(go.Scatter(
            x=x.tolist(),
            y=y.tolist(),
            mode="lines+markers" if state.show_markers else "lines",
            line=dict(shape=state.line_shape, color=state.palette[0], width=2),
            name=state.y_axis_title,
        ))

        layout = self._base_layout()
        if pd.api.types.is_datetime64_any_dtype(x):
            layout["xaxis"] = dict(type="date", tickformat="%m/%d", dtick=86400000)
        fig.update_layout(**layout)
        return fig.to_dict()

    def error_figure(self, message: str) -> dict:
        """Empty figure carrying an error message, same size as the chart."""
        state = self.state
        fig = go.Figure()
        fig.update_layout(
            width=state.width,
            height=state.height,
            xaxis=dict(visible=False),
            yaxis=dict(visible=False),
            annotations=[dict(
                text=message,
                xref="paper",
                yref="paper",
                x=0.5,
                y=0.5,
                showarrow=False,
                font=dict(color="firebrick"),
            )],
        )
        return fig.to_dict()
