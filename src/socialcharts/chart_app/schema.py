"""Schema and data loading for the chart app.

Provides CSV discovery and loading, the default ChartState for each dataset,
and build_chart() which runs load -> prepare -> render for one chart.

Run to (re)derive socialMediaAvg.csv and socialMediaTime.csv from socialMedia.csv:
    python -m socialcharts.chart_app.schema
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import pandas as pd

from socialcharts.utils.logging import get_logger
from socialcharts.chart_widget.algorithms.group_summary import summarize_groups
from socialcharts.chart_widget.chart_state import ChartState, ChartType, Margin
from socialcharts.chart_widget.dataframe_processor import DataFrameProcessor
from socialcharts.chart_widget.figure_generator import FigureGenerator

logger = get_logger(__name__)

SOCIAL_MEDIA_CSV = "socialMedia.csv"
SOCIAL_MEDIA_AVG_CSV = "socialMediaAvg.csv"
SOCIAL_MEDIA_TIME_CSV = "socialMediaTime.csv"


def get_data_dir() -> Path:
    """Resolve <project root>/data/.

    Package layout: <root>/src/socialcharts/chart_app/schema.py
    """
    # schema.py -> chart_app -> socialcharts -> src -> project root
    return Path(__file__).resolve().parent.parent.parent.parent / "data"


def get_data_csv_files(data_dir: Optional[Path] = None) -> list[str]:
    """List .csv filenames in the data dir (sorted)."""
    data_dir = data_dir or get_data_dir()
    if not data_dir.exists():
        return []
    return sorted(f.name for f in data_dir.iterdir() if f.suffix.lower() == ".csv")


def load_csv_for_file(filename: str, data_dir: Optional[Path] = None) -> pd.DataFrame:
    """Load a CSV from the data dir.

    Raises:
        FileNotFoundError: If the file does not exist.
    """
    path = (data_dir or get_data_dir()) / filename
    if not path.exists():
        raise FileNotFoundError(f"CSV not found: {path}")
    df = pd.read_csv(path)
    logger.debug(f"Loaded {path}: shape={df.shape}")
    return df


def derive_csvs(data_dir: Optional[Path] = None) -> dict[str, pd.DataFrame]:
    """Write socialMediaAvg.csv and socialMediaTime.csv derived from socialMedia.csv.

    socialMediaAvg.csv: Platform, PostType, AvgLikes
    socialMediaTime.csv: Date, AvgLikes (one row per day)

    Returns:
        Map filename -> derived dataframe.
    """
    data_dir = data_dir or get_data_dir()
    proc = DataFrameProcessor(
        load_csv_for_file(SOCIAL_MEDIA_CSV, data_dir),
        required_columns=["Platform", "PostType", "Likes", "Date"],
    )

    avg = proc.average_by(["Platform", "PostType"], "Likes")
    daily = proc.daily_average("Date", "Likes")
    daily["Date"] = daily["Date"].dt.strftime("%Y-%m-%d")

    out = {SOCIAL_MEDIA_AVG_CSV: avg, SOCIAL_MEDIA_TIME_CSV: daily}
    for filename, df in out.items():
        path = data_dir / filename
        df.to_csv(path, index=False)
        logger.info(f"Wrote {path} ({len(df)} rows)")
    return out


# -----------------------------------------------------------------------------
# Default chart states
# -----------------------------------------------------------------------------

BOX_PLOT_STATE = ChartState(
    chart_type=ChartType.BOX_PLOT,
    csv_file=SOCIAL_MEDIA_CSV,
    xcol="AgeGroup",
    ycol="Likes",
    x_title="Age Group",
    margin=Margin(top=30, right=30, bottom=60, left=60),
)

GROUPED_BAR_STATE = ChartState(
    chart_type=ChartType.GROUPED_BAR,
    csv_file=SOCIAL_MEDIA_AVG_CSV,
    xcol="Platform",
    ycol="AvgLikes",
    color_col="PostType",
    y_title="Average Likes",
    margin=Margin(top=20, right=20, bottom=60, left=60),
    legend="top-right",
    band_padding=0.1,
)

LINE_STATE = ChartState(
    chart_type=ChartType.LINE,
    csv_file=SOCIAL_MEDIA_TIME_CSV,
    xcol="Date",
    ycol="AvgLikes",
    y_title="Average Likes",
    margin=Margin(top=20, right=30, bottom=80, left=60),
    x_tickangle=-45,
    line_shape="spline",
)

DEFAULT_CHART_STATES: list[ChartState] = [BOX_PLOT_STATE, GROUPED_BAR_STATE, LINE_STATE]


def get_state_for_csv(filename: str) -> Optional[ChartState]:
    """Default ChartState for a CSV filename, or None if the file has none."""
    for state in DEFAULT_CHART_STATES:
        if state.csv_file == filename:
            return state
    return None


def build_chart(state: ChartState, data_dir: Optional[Path] = None) -> dict:
    """Load the CSV for state, prepare its data and return the figure dict.

    Raises:
        FileNotFoundError: If the CSV is missing.
        ValueError: If required columns are missing.
        InvalidInputError: If a box plot has no usable observations.
    """
    df = load_csv_for_file(state.csv_file, data_dir)
    generator = FigureGenerator(state)

    if state.chart_type == ChartType.BOX_PLOT:
        proc = DataFrameProcessor(df, required_columns=[state.xcol, state.ycol])
        result = summarize_groups(proc.observations(state.xcol, state.ycol))
        return generator.make_figure(result)

    if state.chart_type == ChartType.GROUPED_BAR:
        required = [c for c in (state.xcol, state.ycol, state.color_col) if c]
        proc = DataFrameProcessor(df, required_columns=required)
        prepared = df.copy()
        prepared[state.ycol] = proc.get_values(state.ycol)
        return generator.make_figure(prepared)

    # LINE
    proc = DataFrameProcessor(df, required_columns=[state.xcol, state.ycol])
    prepared = proc.daily_average(state.xcol, state.ycol, out_col=state.ycol)
    return generator.make_figure(prepared)


if __name__ == "__main__":
    from socialcharts.utils.logging import configure_logging

    configure_logging(level="INFO")
    derive_csvs()
