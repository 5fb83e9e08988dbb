"""DataFrame processing for the social media charts.

This module provides the DataFrameProcessor class for the data preparation
each chart needs (numeric coercion, category domains, per-key averages),
separating data shaping from figure generation.
"""

from __future__ import annotations

from typing import Optional, Sequence

import pandas as pd

from socialcharts.utils.logging import get_logger
from socialcharts.chart_widget.algorithms.group_summary import (
    Observation,
    observations_from_frame,
)

logger = get_logger(__name__)


class DataFrameProcessor:
    """Prepares a loaded CSV DataFrame for plotting.

    Attributes:
        df: The source DataFrame.
    """

    def __init__(
        self,
        df: pd.DataFrame,
        *,
        required_columns: Optional[Sequence[str]] = None,
    ) -> None:
        """Initialize DataFrameProcessor.

        Args:
            df: DataFrame loaded from one of the CSV datasets.
            required_columns: Columns that must be present.

        Raises:
            ValueError: If a required column is missing.
        """
        self.df = df
        missing = [c for c in (required_columns or []) if c not in df.columns]
        if missing:
            raise ValueError(f"df is missing required columns {missing!r}")

    def _require(self, *cols: str) -> None:
        for col in cols:
            if col not in self.df.columns:
                raise ValueError(f"Unknown column {col!r}; have {list(self.df.columns)!r}")

    def get_values(self, col: str) -> pd.Series:
        """Column as numbers; unparsable entries become NaN."""
        self._require(col)
        return pd.to_numeric(self.df[col], errors="coerce")

    def unique_in_order(self, col: str) -> list[str]:
        """Distinct non-null values of col as strings, in first-seen order."""
        self._require(col)
        return [str(v) for v in self.df[col].dropna().unique()]

    def observations(self, group_col: str, value_col: str) -> list[Observation]:
        """(group, value) observations for the group summary."""
        self._require(group_col, value_col)
        return observations_from_frame(self.df, group_col, value_col)

    def average_by(
        self,
        keys: Sequence[str],
        value_col: str,
        out_col: str = "AvgLikes",
    ) -> pd.DataFrame:
        """Mean of value_col for every combination of keys.

        Rows come out in first-seen order of the key combinations. Rows whose
        value is not numeric are ignored.

        Returns:
            DataFrame with columns [*keys, out_col].
        """
        keys = list(keys)
        self._require(*keys, value_col)
        tmp = self.df[keys].astype(str).copy()
        tmp[out_col] = self.get_values(value_col)
        tmp = tmp.dropna(subset=[out_col])
        agg = tmp.groupby(keys, sort=False)[out_col].mean().reset_index()
        logger.debug(f"average_by {keys}: {len(self.df)} rows -> {len(agg)} rows")
        return agg

    def daily_average(
        self,
        date_col: str,
        value_col: str,
        out_col: str = "AvgLikes",
    ) -> pd.DataFrame:
        """Mean of value_col per calendar day, sorted chronologically.

        Unparsable dates are dropped.

        Returns:
            DataFrame with columns [date_col, out_col]; date_col holds
            normalized Timestamps.
        """
        self._require(date_col, value_col)
        dates = pd.to_datetime(self.df[date_col], errors="coerce")
        tmp = pd.DataFrame({date_col: dates.dt.normalize(), out_col: self.get_values(value_col)})
        bad = int(tmp[date_col].isna().sum())
        if bad:
            logger.warning(f"Dropped {bad} rows with unparsable {date_col!r}")
        tmp = tmp.dropna(subset=[date_col, out_col])
        return tmp.groupby(date_col, sort=True)[out_col].mean().reset_index()
