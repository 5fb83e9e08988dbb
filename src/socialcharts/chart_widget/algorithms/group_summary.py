"""
Group summary algorithm: pure pandas/numpy, no plotly.

Computes the five-number summary (min, q1, median, q3, max) plus the
interquartile range for every group of labeled observations. This is the
data behind the box plot: FigureGenerator.box_figure() only maps these
numbers onto plotly box traces.

  1. Partition observations by group key (first-seen order of keys,
     relative order kept within each group).
  2. Sort each group's values ascending.
  3. min = first, max = last.
  4. q1, median, q3 by linear interpolation at index p * (n - 1).
  5. iqr = q3 - q1.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import asdict, dataclass

import numpy as np
import pandas as pd

from socialcharts.utils.logging import get_logger

logger = get_logger(__name__)

# Columns of GroupedResult.to_frame(), in display order.
SUMMARY_COLUMNS = ["count", "min", "q1", "median", "q3", "max", "iqr"]


class InvalidInputError(ValueError):
    """Raised when observations cannot be summarized (empty input or group, non-finite value)."""


@dataclass(frozen=True)
class Observation:
    """One labeled numeric value, e.g. (AgeGroup, Likes) for a single post."""
    group: str
    value: float


@dataclass(frozen=True)
class GroupSummary:
    """Five-number summary plus IQR for one group."""
    min: float
    q1: float
    median: float
    q3: float
    max: float
    iqr: float
    count: int = 0

    def to_dict(self) -> dict[str, float]:
        return asdict(self)


class GroupedResult(Mapping):
    """Read-only mapping group key -> GroupSummary, in first-seen key order."""

    def __init__(self, summaries: Mapping[str, GroupSummary]) -> None:
        self._summaries: dict[str, GroupSummary] = dict(summaries)

    def __getitem__(self, key: str) -> GroupSummary:
        return self._summaries[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._summaries)

    def __len__(self) -> int:
        return len(self._summaries)

    def __repr__(self) -> str:
        return f"GroupedResult({self._summaries!r})"

    def to_dict(self) -> dict[str, dict[str, float]]:
        """JSON-friendly copy: {group: {min, q1, median, q3, max, iqr, count}}."""
        return {k: s.to_dict() for k, s in self._summaries.items()}

    def to_frame(self) -> pd.DataFrame:
        """Summary table with index = group labels and columns = SUMMARY_COLUMNS."""
        rows = [s.to_dict() for s in self._summaries.values()]
        df = pd.DataFrame(rows, index=pd.Index(list(self._summaries), name="group"))
        return df.reindex(columns=SUMMARY_COLUMNS)


# -----------------------------------------------------------------------------
# Quantiles
# -----------------------------------------------------------------------------


def quantile_sorted(values: Sequence[float], p: float) -> float:
    """
    Quantile at fraction p of an ascending sequence.

    The quantile sits at index p * (n - 1); a fractional index interpolates
    linearly between the two bracketing elements (numpy method="linear").

    Raises:
        InvalidInputError: if values is empty or p is outside [0, 1].
    """
    if len(values) == 0:
        raise InvalidInputError("Cannot compute a quantile of an empty sequence")
    if not 0.0 <= p <= 1.0:
        raise InvalidInputError(f"Quantile fraction must be in [0, 1], got {p!r}")
    return float(np.quantile(np.asarray(values, dtype=float), p, method="linear"))


def summarize_values(values: Iterable[float]) -> GroupSummary:
    """Sort values ascending and compute their GroupSummary.

    Raises:
        InvalidInputError: if values is empty.
    """
    arr = np.sort(np.asarray(list(values), dtype=float))
    if arr.size == 0:
        raise InvalidInputError("Cannot summarize an empty group")

    q1, median, q3 = (
        float(q) for q in np.quantile(arr, [0.25, 0.50, 0.75], method="linear")
    )
    return GroupSummary(
        min=float(arr[0]),
        q1=q1,
        median=median,
        q3=q3,
        max=float(arr[-1]),
        iqr=q3 - q1,
        count=int(arr.size),
    )


# -----------------------------------------------------------------------------
# Grouping
# -----------------------------------------------------------------------------


def partition_observations(observations: Iterable[Observation]) -> dict[str, list[float]]:
    """Partition values by group key.

    Keys keep the order in which they are first seen; values keep their
    relative order within each group.
    """
    groups: dict[str, list[float]] = {}
    for obs in observations:
        groups.setdefault(obs.group, []).append(obs.value)
    return groups


def summarize_groups(observations: Iterable[Observation]) -> GroupedResult:
    """
    Compute a GroupSummary for every distinct group key.

    Pure function of its input: the same observations in the same order
    always produce the same GroupedResult.

    Raises:
        InvalidInputError: if observations is empty, a value is not finite,
            or a partitioned group ends up empty.
    """
    observations = list(observations)
    if not observations:
        raise InvalidInputError("No observations to summarize")

    for obs in observations:
        if not math.isfinite(obs.value):
            raise InvalidInputError(
                f"Non-finite value {obs.value!r} in group {obs.group!r}"
            )

    summaries: dict[str, GroupSummary] = {}
    for group, values in partition_observations(observations).items():
        if not values:
            raise InvalidInputError(f"Group {group!r} has no values")
        summaries[group] = summarize_values(values)

    logger.debug(f"summarize_groups: {len(observations)} observations -> {len(summaries)} groups")
    return GroupedResult(summaries)


def observations_from_frame(
    df: pd.DataFrame,
    group_col: str,
    value_col: str,
) -> list[Observation]:
    """
    Build observations from two dataframe columns.

    Group labels are compared as strings; values go through
    pd.to_numeric(errors="coerce"). Rows with a missing group or value are
    dropped.

    Raises:
        ValueError: if either column is missing from df.
    """
    for col in (group_col, value_col):
        if col not in df.columns:
            raise ValueError(f"df must contain column {col!r}")

    tmp = pd.DataFrame({
        "group": df[group_col],
        "value": pd.to_numeric(df[value_col], errors="coerce"),
    }).dropna(subset=["group", "value"])

    dropped = len(df) - len(tmp)
    if dropped:
        logger.warning(f"Dropped {dropped} rows with missing {group_col!r} or {value_col!r}")

    return [
        Observation(group=str(g), value=float(v))
        for g, v in zip(tmp["group"].tolist(), tmp["value"].tolist())
    ]
