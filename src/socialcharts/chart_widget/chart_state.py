"""Chart state for the social media charts.

This module defines the ChartType enum, the Margin dataclass and the
ChartState dataclass used to serialize and manage chart configuration.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

# Categorical palette for post types (matplotlib/plotly "tab10" first three).
DEFAULT_PALETTE = ["#1f77b4", "#ff7f0e", "#2ca02c"]

# Box plot stroke/fill colors.
BOX_LINE_COLOR = "#333"
BOX_FILL_COLOR = "#ffffff"
BOX_MEDIAN_COLOR = "#1b1f24"

LEGEND_PLACEMENTS = ("right", "top-right", "none")


class ChartType(Enum):
    """Enumeration of available chart types."""
    BOX_PLOT = "box_plot"
    GROUPED_BAR = "grouped_bar"
    LINE = "line"


@dataclass(frozen=True)
class Margin:
    """Plot area margins in pixels."""
    top: int = 30
    right: int = 30
    bottom: int = 60
    left: int = 60

    def to_dict(self) -> dict[str, int]:
        return {"top": self.top, "right": self.right, "bottom": self.bottom, "left": self.left}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Margin":
        return cls(
            top=int(data.get("top", 30)),
            right=int(data.get("right", 30)),
            bottom=int(data.get("bottom", 60)),
            left=int(data.get("left", 60)),
        )


@dataclass
class ChartState:
    """Configuration state for a single chart.

    Holds data selection (csv file, x/y/color columns), chart type, and the
    geometry and styling the render step needs.
    """
    chart_type: ChartType
    csv_file: str
    xcol: str
    ycol: str
    color_col: Optional[str] = None     # second categorical level (grouped bar only)
    x_title: Optional[str] = None       # defaults to xcol
    y_title: Optional[str] = None       # defaults to ycol
    width: int = 700
    height: int = 400
    margin: Margin = field(default_factory=Margin)
    legend: str = "none"                # one of LEGEND_PLACEMENTS
    palette: list[str] = field(default_factory=lambda: list(DEFAULT_PALETTE))
    x_tickangle: int = 0
    box_width_fraction: float = 0.6     # box width relative to its band
    band_padding: float = 0.3           # gap between bands (box and bar)
    line_shape: str = "spline"          # "spline" ~ natural curve; "linear" for straight segments
    show_markers: bool = True           # line chart only

    def __post_init__(self) -> None:
        if self.legend not in LEGEND_PLACEMENTS:
            raise ValueError(f"legend must be one of {LEGEND_PLACEMENTS}, got {self.legend!r}")

    @property
    def x_axis_title(self) -> str:
        return self.x_title or self.xcol

    @property
    def y_axis_title(self) -> str:
        return self.y_title or self.ycol

    def to_dict(self) -> dict[str, Any]:
        """Serialize ChartState to a JSON-friendly dictionary."""
        return {
            "chart_type": self.chart_type.value,
            "csv_file": self.csv_file,
            "xcol": self.xcol,
            "ycol": self.ycol,
            "color_col": self.color_col,
            "x_title": self.x_title,
            "y_title": self.y_title,
            "width": self.width,
            "height": self.height,
            "margin": self.margin.to_dict(),
            "legend": self.legend,
            "palette": list(self.palette),
            "x_tickangle": self.x_tickangle,
            "box_width_fraction": self.box_width_fraction,
            "band_padding": self.band_padding,
            "line_shape": self.line_shape,
            "show_markers": self.show_markers,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ChartState":
        """Deserialize ChartState from dictionary.

        Raises:
            ValueError: If chart_type is missing or unknown.
        """
        chart_type = ChartType(data.get("chart_type"))
        margin = data.get("margin")
        palette = data.get("palette")
        return cls(
            chart_type=chart_type,
            csv_file=str(data.get("csv_file", "")),
            xcol=str(data.get("xcol", "")),
            ycol=str(data.get("ycol", "")),
            color_col=data.get("color_col"),  # Can be None
            x_title=data.get("x_title"),
            y_title=data.get("y_title"),
            width=int(data.get("width", 700)),
            height=int(data.get("height", 400)),
            margin=Margin.from_dict(margin) if isinstance(margin, dict) else Margin(),
            legend=str(data.get("legend", "none")),
            palette=[str(c) for c in palette] if isinstance(palette, list) and palette else list(DEFAULT_PALETTE),
            x_tickangle=int(data.get("x_tickangle", 0)),
            box_width_fraction=float(data.get("box_width_fraction", 0.6)),
            band_padding=float(data.get("band_padding", 0.3)),
            line_shape=str(data.get("line_shape", "spline")),
            show_markers=bool(data.get("show_markers", True)),
        )
