"""Unit tests for the group summary algorithm (five-number summary + IQR per group)."""

import math

import numpy as np
import pandas as pd
import pytest

from socialcharts.chart_widget.algorithms.group_summary import (
    SUMMARY_COLUMNS,
    GroupedResult,
    GroupSummary,
    InvalidInputError,
    Observation,
    observations_from_frame,
    partition_observations,
    quantile_sorted,
    summarize_groups,
    summarize_values,
)


def _obs(pairs):
    return [Observation(g, v) for g, v in pairs]


def test_four_values_interpolated_quartiles():
    """G1=[10,20,30,40] -> q1=17.5, median=25, q3=32.5, iqr=15."""
    result = summarize_groups(_obs([("G1", 10), ("G1", 20), ("G1", 30), ("G1", 40)]))
    s = result["G1"]
    assert s.min == 10
    assert s.q1 == pytest.approx(17.5)
    assert s.median == pytest.approx(25)
    assert s.q3 == pytest.approx(32.5)
    assert s.max == 40
    assert s.iqr == pytest.approx(15)
    assert s.count == 4


def test_single_observation_collapses_summary():
    """A single value gives min=q1=median=q3=max and iqr=0."""
    s = summarize_groups(_obs([("G1", 5)]))["G1"]
    assert s.min == s.q1 == s.median == s.q3 == s.max == 5
    assert s.iqr == 0


def test_empty_input_raises():
    with pytest.raises(InvalidInputError):
        summarize_groups([])


def test_invalid_input_error_is_value_error():
    with pytest.raises(ValueError):
        summarize_groups(iter([]))


def test_two_groups_keys_and_single_value_group():
    """G1=[1,2,3], G2=[100] -> keys exactly {G1, G2}; G2 iqr=0."""
    result = summarize_groups(_obs([("G1", 1), ("G1", 2), ("G1", 3), ("G2", 100)]))
    assert set(result) == {"G1", "G2"}
    assert result["G2"].iqr == 0
    assert result["G1"].median == 2


def test_group_order_is_first_seen():
    """Keys keep first-seen order, not alphabetical order."""
    result = summarize_groups(_obs([("b", 1), ("a", 2), ("c", 3), ("b", 4), ("a", 5)]))
    assert list(result) == ["b", "a", "c"]


def test_unsorted_input_is_sorted_per_group():
    s = summarize_groups(_obs([("g", 40), ("g", 10), ("g", 30), ("g", 20)]))["g"]
    assert (s.min, s.max) == (10, 40)
    assert s.q1 == pytest.approx(17.5)


@pytest.mark.parametrize("bad", [float("nan"), float("inf"), -float("inf")])
def test_non_finite_value_raises(bad):
    with pytest.raises(InvalidInputError) as exc_info:
        summarize_groups(_obs([("g", 1.0), ("g", bad)]))
    assert "'g'" in str(exc_info.value)


@pytest.mark.parametrize("seed", range(5))
def test_summary_ordering_invariant_random(seed):
    """min <= q1 <= median <= q3 <= max and iqr = q3 - q1 >= 0 for random inputs."""
    rng = np.random.default_rng(seed)
    groups = [f"g{i}" for i in range(4)]
    obs = [
        Observation(str(rng.choice(groups)), float(v))
        for v in rng.normal(100, 50, size=int(rng.integers(1, 60)))
    ]
    result = summarize_groups(obs)

    assert set(result) == {o.group for o in obs}
    for s in result.values():
        assert s.min <= s.q1 <= s.median <= s.q3 <= s.max
        assert s.iqr == pytest.approx(s.q3 - s.q1)
        assert s.iqr >= 0


def test_summarize_groups_is_idempotent():
    obs = _obs([("x", 3), ("y", 1), ("x", 7), ("y", 9), ("x", 2)])
    assert summarize_groups(obs) == summarize_groups(obs)


def test_summarize_groups_matches_numpy_linear_percentiles():
    values = [12.0, 3.0, 7.5, 41.0, 19.0, 8.0, 22.0]
    s = summarize_groups(_obs([("g", v) for v in values]))["g"]
    assert s.q1 == pytest.approx(np.percentile(values, 25))
    assert s.median == pytest.approx(np.median(values))
    assert s.q3 == pytest.approx(np.percentile(values, 75))


def test_summarize_values_empty_raises():
    with pytest.raises(InvalidInputError):
        summarize_values([])


def test_partition_keeps_relative_order():
    groups = partition_observations(_obs([("a", 3), ("b", 1), ("a", 1), ("a", 2)]))
    assert groups == {"a": [3, 1, 2], "b": [1]}
    assert list(groups) == ["a", "b"]


def test_quantile_sorted_interpolates_at_p_times_n_minus_one():
    values = [10.0, 20.0, 30.0, 40.0]
    assert quantile_sorted(values, 0.0) == 10.0
    assert quantile_sorted(values, 1.0) == 40.0
    # index 0.25 * 3 = 0.75 -> 10 + 0.75 * 10
    assert quantile_sorted(values, 0.25) == pytest.approx(17.5)


def test_quantile_sorted_rejects_bad_input():
    with pytest.raises(InvalidInputError):
        quantile_sorted([], 0.5)
    with pytest.raises(InvalidInputError):
        quantile_sorted([1.0, 2.0], 1.5)


def test_grouped_result_is_read_only():
    result = summarize_groups(_obs([("g", 1)]))
    with pytest.raises(TypeError):
        result["g"] = GroupSummary(0, 0, 0, 0, 0, 0)  # type: ignore[index]


def test_grouped_result_to_frame():
    result = summarize_groups(_obs([("G1", 10), ("G1", 20), ("G1", 30), ("G1", 40), ("G2", 5)]))
    df = result.to_frame()
    assert list(df.columns) == SUMMARY_COLUMNS
    assert list(df.index) == ["G1", "G2"]
    assert df.loc["G1", "q3"] == pytest.approx(32.5)
    assert df.loc["G2", "count"] == 1


def test_grouped_result_to_dict():
    result = summarize_groups(_obs([("g", 2), ("g", 4)]))
    d = result.to_dict()
    assert d["g"]["median"] == pytest.approx(3.0)
    assert set(d["g"]) == set(SUMMARY_COLUMNS)


def test_grouped_result_empty_is_allowed_as_container():
    assert len(GroupedResult({})) == 0


def test_observations_from_frame_coerces_and_drops_missing():
    df = pd.DataFrame({
        "AgeGroup": ["18-24", "25-34", None, "18-24", "25-34"],
        "Likes": ["10", "abc", "5", 30, 40.5],
    })
    obs = observations_from_frame(df, "AgeGroup", "Likes")
    assert obs == [
        Observation("18-24", 10.0),
        Observation("18-24", 30.0),
        Observation("25-34", 40.5),
    ]
    assert all(math.isfinite(o.value) for o in obs)


def test_observations_from_frame_group_keys_are_strings():
    df = pd.DataFrame({"g": [1, 2, 1], "v": [1.0, 2.0, 3.0]})
    obs = observations_from_frame(df, "g", "v")
    assert [o.group for o in obs] == ["1", "2", "1"]


def test_observations_from_frame_missing_column_raises():
    df = pd.DataFrame({"g": ["a"], "v": [1.0]})
    with pytest.raises(ValueError) as exc_info:
        observations_from_frame(df, "g", "Likes")
    assert "Likes" in str(exc_info.value)
