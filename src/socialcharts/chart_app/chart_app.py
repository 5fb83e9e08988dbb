"""Chart app: standalone NiceGUI page with the three social media charts.

Runs in native or web mode via env vars. Uses @ui.page("/") pattern.

Run:
    python -m socialcharts.chart_app.chart_app

Env vars:
    SOCIALCHARTS_GUI_NATIVE: 1/0 (default 0)
    SOCIALCHARTS_GUI_RELOAD: 1/0 (default 0)
    SOCIALCHARTS_LOG_LEVEL: logging level (default INFO)
    HOST: bind host (default 127.0.0.1 native, 0.0.0.0 web)
    PORT: bind port (default find_open_port native, 8080 web)
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from nicegui import ui

from socialcharts.utils.logging import configure_logging, get_logger
from socialcharts.chart_app import schema
from socialcharts.chart_widget.chart_config import ChartConfig
from socialcharts.chart_widget.chart_state import ChartState
from socialcharts.chart_widget.figure_generator import FigureGenerator

logger = get_logger(__name__)

CHART_TITLES = {
    schema.SOCIAL_MEDIA_CSV: "Likes by Age Group",
    schema.SOCIAL_MEDIA_AVG_CSV: "Average Likes by Platform and Post Type",
    schema.SOCIAL_MEDIA_TIME_CSV: "Average Likes over Time",
}


def _env_bool(name: str, default: bool) -> bool:
    """Parse env var as bool; if unset/invalid returns default."""
    raw = os.getenv(name)
    if raw is None:
        return default
    v = raw.strip().lower()
    if v in {"1", "true", "yes", "on"}:
        return True
    if v in {"0", "false", "no", "off"}:
        return False
    return default


def _env_int(name: str, default: int) -> int:
    """Parse env var as int; if unset/invalid returns default."""
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def load_chart_states(config: Optional[ChartConfig] = None) -> tuple[list[ChartState], Optional[Path]]:
    """Chart states and data dir from the user config, falling back to defaults."""
    config = config or ChartConfig.load()
    states = config.get_chart_states() or list(schema.DEFAULT_CHART_STATES)
    return states, config.get_data_dir()


def error_message(state: ChartState, exc: Exception) -> str:
    return f"Error loading {state.csv_file} ({exc})"


def build_chart_card(state: ChartState, data_dir: Optional[Path] = None) -> None:
    """One card: title plus the chart, or the load error in its place."""
    with ui.card().classes("w-fit"):
        ui.label(CHART_TITLES.get(state.csv_file, state.csv_file)).classes("text-lg font-bold")
        try:
            figure = schema.build_chart(state, data_dir)
        except Exception as e:
            logger.exception("Failed to build chart for %s: %s", state.csv_file, e)
            message = error_message(state, e)
            ui.label(message).classes("text-negative")
            ui.plotly(FigureGenerator(state).error_figure(message)).classes("w-full")
            return
        ui.plotly(figure).classes("w-full")


# ---------------------------------------------------------------------------
# Page
# ---------------------------------------------------------------------------

@ui.page("/")
def home() -> None:
    """Home page: box plot, grouped bar chart and line chart."""
    ui.page_title("Social Media Charts")

    states, data_dir = load_chart_states()
    with ui.column().classes("w-full items-center gap-4 p-4"):
        for state in states:
            build_chart_card(state, data_dir)


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def main(*, reload: bool | None = None, native_bool: bool | None = None) -> None:
    """Start the chart application.

    Env vars (used when arg is None):
      - SOCIALCHARTS_GUI_NATIVE: 1/0
      - SOCIALCHARTS_GUI_RELOAD: 1/0
      - HOST: bind host
      - PORT: bind port
    """
    configure_logging()

    native_bool = _env_bool("SOCIALCHARTS_GUI_NATIVE", False) if native_bool is None else native_bool
    reload = _env_bool("SOCIALCHARTS_GUI_RELOAD", False) if reload is None else reload

    if native_bool:
        from nicegui import native as native_module
        port = _env_int("PORT", native_module.find_open_port())
    else:
        port = _env_int("PORT", 8080)

    default_host = "127.0.0.1" if native_bool else "0.0.0.0"
    host = os.getenv("HOST", default_host)

    logger.info("Starting chart app: host=%s port=%s reload=%s native=%s", host, port, reload, native_bool)

    run_kwargs: dict = {
        "host": host,
        "port": port,
        "reload": reload,
        "native": native_bool,
        "title": "Social Media Charts",
    }
    if native_bool:
        run_kwargs["window_size"] = (800, 1400)
    ui.run(**run_kwargs)


if __name__ in {"__main__", "__mp_main__"}:
    main()
