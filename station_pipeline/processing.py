import logging
import math
from typing import Dict, Iterable, Optional, Tuple

import numpy as np
import pandas as pd

from utils.constants import MAX_SUMMARY_COLUMNS, ROWS_PER_PAGE
from .inference import ColumnClassification, is_number

logger = logging.getLogger(__name__)


def _numeric_values(df: pd.DataFrame, column: str) -> pd.Series:
    values = df[column]
    if not pd.api.types.is_numeric_dtype(values):
        values = values[values.map(is_number).astype(bool)]
    return values.dropna().astype(float)


def column_summary(df: pd.DataFrame, column: str) -> Dict[str, object]:
    """
    Mean/min/max of a numeric column plus its trend: percent change of the
    second half's mean against the first half's.
    """
    values = _numeric_values(df, column).to_numpy()
    if len(values) == 0:
        return {"name": column, "mean": np.nan, "min": np.nan, "max": np.nan,
                "change": np.nan, "trend": "neutral"}

    mid = len(values) // 2
    first, second = values[:mid], values[mid:]
    change = np.nan
    if len(first) and first.mean() != 0:
        change = (second.mean() - first.mean()) / abs(first.mean()) * 100
    if math.isnan(change) or change == 0:
        trend = "neutral"
    else:
        trend = "up" if change > 0 else "down"
    return {
        "name": column,
        "mean": float(values.mean()),
        "min": float(values.min()),
        "max": float(values.max()),
        "change": float(change),
        "trend": trend,
    }


def summarize_columns(
    df: pd.DataFrame, classification: ColumnClassification, limit: int = MAX_SUMMARY_COLUMNS
) -> pd.DataFrame:
    """Stat-card table for the first `limit` numeric columns, indexed by column name."""
    rows = [column_summary(df, c) for c in classification.numeric_columns[:limit] if c in df.columns]
    if not rows:
        return pd.DataFrame(columns=["mean", "min", "max", "change", "trend"])
    return pd.DataFrame(rows).set_index("name")


def _cell_text(value) -> str:
    if isinstance(value, pd.Timestamp):
        return value.isoformat().lower()
    return str(value).lower()


def search_rows(df: pd.DataFrame, term: Optional[str]) -> pd.DataFrame:
    """Rows where any cell contains `term` (case-insensitive)."""
    if not term or df.empty:
        return df
    needle = term.lower()
    mask = df.apply(lambda row: any(needle in _cell_text(v) for v in row), axis=1)
    return df[mask.astype(bool)]


def paginate(df: pd.DataFrame, page: int, rows_per_page: int = ROWS_PER_PAGE) -> Tuple[pd.DataFrame, int]:
    """1-based page of `df`; out-of-range pages are clamped. Returns (page_df, total_pages)."""
    total_pages = max(1, math.ceil(len(df) / rows_per_page))
    page = min(max(page, 1), total_pages)
    start = (page - 1) * rows_per_page
    return df.iloc[start:start + rows_per_page], total_pages


def time_series_frame(
    df: pd.DataFrame, classification: ColumnClassification, columns: Optional[Iterable[str]] = None
) -> pd.DataFrame:
    """Time column plus numeric columns, sorted by time, for a charting library."""
    time_col = classification.time_column
    if time_col is None or time_col not in df.columns:
        return pd.DataFrame()
    wanted = list(columns) if columns is not None else classification.numeric_columns
    missing = [c for c in wanted if c not in df.columns]
    if missing:
        logger.warning(f"Ignoring unknown columns {missing}")
    value_cols = [c for c in wanted if c in df.columns and c != time_col]
    out = df[[time_col] + value_cols]
    if pd.api.types.is_datetime64_any_dtype(out[time_col]):
        out = out.sort_values(time_col, kind="stable")
    return out.reset_index(drop=True)
