"""Unit tests for chart_app schema module (datasets, default states, build_chart)."""

from __future__ import annotations

import shutil
from pathlib import Path

import pandas as pd
import pytest

from socialcharts.chart_app.schema import (
    BOX_PLOT_STATE,
    DEFAULT_CHART_STATES,
    GROUPED_BAR_STATE,
    LINE_STATE,
    SOCIAL_MEDIA_AVG_CSV,
    SOCIAL_MEDIA_CSV,
    SOCIAL_MEDIA_TIME_CSV,
    build_chart,
    derive_csvs,
    get_data_csv_files,
    get_data_dir,
    get_state_for_csv,
    load_csv_for_file,
)
from socialcharts.chart_widget.algorithms.group_summary import InvalidInputError
from socialcharts.chart_widget.chart_state import ChartType


@pytest.fixture
def small_data_dir(tmp_path: Path) -> Path:
    """Data dir holding a tiny socialMedia.csv."""
    pd.DataFrame({
        "Platform": ["Facebook", "Facebook", "Twitter", "Twitter"],
        "PostType": ["Image", "Image", "Video", "Image"],
        "AgeGroup": ["18-24", "25-34", "18-24", "18-24"],
        "Likes": [10, 30, 50, 70],
        "Date": ["2024-03-02", "2024-03-01", "2024-03-01", "2024-03-02"],
    }).to_csv(tmp_path / SOCIAL_MEDIA_CSV, index=False)
    return tmp_path


def test_get_data_dir_returns_path_ending_in_data():
    data_dir = get_data_dir()
    assert isinstance(data_dir, Path)
    assert data_dir.name == "data"


def test_get_data_csv_files_includes_bundled_files():
    if not get_data_dir().exists():
        pytest.skip("data dir not found (run from repo with data)")
    files = get_data_csv_files()
    assert files == sorted(files)
    assert {SOCIAL_MEDIA_CSV, SOCIAL_MEDIA_AVG_CSV, SOCIAL_MEDIA_TIME_CSV} <= set(files)


def test_get_data_csv_files_missing_dir_is_empty(tmp_path):
    assert get_data_csv_files(tmp_path / "nope") == []


def test_load_csv_for_file_missing_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_csv_for_file("missing.csv", tmp_path)


def test_default_chart_states_cover_three_chart_types():
    assert [s.chart_type for s in DEFAULT_CHART_STATES] == [
        ChartType.BOX_PLOT,
        ChartType.GROUPED_BAR,
        ChartType.LINE,
    ]
    assert get_state_for_csv(SOCIAL_MEDIA_AVG_CSV) is GROUPED_BAR_STATE
    assert get_state_for_csv("other.csv") is None


def test_derive_csvs_writes_avg_and_time(small_data_dir):
    out = derive_csvs(small_data_dir)

    avg = pd.read_csv(small_data_dir / SOCIAL_MEDIA_AVG_CSV)
    assert list(avg.columns) == ["Platform", "PostType", "AvgLikes"]
    assert avg.values.tolist() == [
        ["Facebook", "Image", 20.0],
        ["Twitter", "Video", 50.0],
        ["Twitter", "Image", 70.0],
    ]

    daily = pd.read_csv(small_data_dir / SOCIAL_MEDIA_TIME_CSV)
    assert daily.values.tolist() == [["2024-03-01", 40.0], ["2024-03-02", 40.0]]
    assert set(out) == {SOCIAL_MEDIA_AVG_CSV, SOCIAL_MEDIA_TIME_CSV}


def test_build_chart_box_plot_from_summary(small_data_dir):
    fig = build_chart(BOX_PLOT_STATE, small_data_dir)
    traces = fig["data"]
    assert [t["name"] for t in traces] == ["18-24", "25-34"]
    # 18-24: [10, 50, 70] -> median 50
    assert list(traces[0]["median"]) == [pytest.approx(50)]
    assert list(traces[1]["q1"]) == [pytest.approx(30)]


def test_build_chart_bar_and_line_after_derive(small_data_dir):
    derive_csvs(small_data_dir)
    bar = build_chart(GROUPED_BAR_STATE, small_data_dir)
    assert [t["name"] for t in bar["data"]] == ["Image", "Video"]

    line = build_chart(LINE_STATE, small_data_dir)
    assert list(line["data"][0]["y"]) == [40.0, 40.0]


def test_build_chart_missing_csv_raises(small_data_dir):
    with pytest.raises(FileNotFoundError):
        build_chart(LINE_STATE, small_data_dir)


def test_build_chart_box_plot_no_numeric_values_raises(tmp_path):
    pd.DataFrame({"AgeGroup": ["18-24"], "Likes": ["n/a"]}).to_csv(tmp_path / SOCIAL_MEDIA_CSV, index=False)
    with pytest.raises(InvalidInputError):
        build_chart(BOX_PLOT_STATE, tmp_path)


def test_build_chart_bundled_data(tmp_path):
    data_dir = get_data_dir()
    if not (data_dir / SOCIAL_MEDIA_CSV).exists():
        pytest.skip("bundled data not found")
    for name in (SOCIAL_MEDIA_CSV, SOCIAL_MEDIA_AVG_CSV, SOCIAL_MEDIA_TIME_CSV):
        shutil.copy(data_dir / name, tmp_path / name)
    for state in DEFAULT_CHART_STATES:
        fig = build_chart(state, tmp_path)
        assert fig["data"], state.chart_type
