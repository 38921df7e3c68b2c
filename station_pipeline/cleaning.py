import logging
from typing import Optional, Tuple

import pandas as pd

from .inference import ColumnClassification, ColumnKind, FieldVocabulary, infer_column_types

logger = logging.getLogger(__name__)


def _coerce_numeric(series: pd.Series) -> pd.Series:
    # Unparseable and empty values become 0 rather than failing the batch
    stripped = series.map(lambda v: v.strip() if isinstance(v, str) else v)
    return pd.to_numeric(stripped, errors="coerce").fillna(0)


def parse_temporal(series: pd.Series) -> pd.Series:
    """
    Parse non-empty strings into UTC Timestamps, keeping the original text
    where parsing fails. Non-string values are left untouched. A column that
    ends up all Timestamps is returned as datetime64[ns, UTC].
    """
    if pd.api.types.is_datetime64_any_dtype(series):
        return series
    text_mask = series.map(lambda v: isinstance(v, str) and v.strip() != "").astype(bool)
    out = series.astype(object).copy()
    if text_mask.any():
        parsed = pd.to_datetime(series[text_mask], errors="coerce", utc=True, format="mixed")
        ok = parsed.notna()
        if ok.any():
            out.loc[parsed.index[ok]] = list(parsed[ok])
        if not ok.all():
            logger.debug(f"{int((~ok).sum())} values in '{series.name}' are not dates; kept as text")
    if len(out) and out.map(lambda v: isinstance(v, pd.Timestamp)).all():
        return pd.to_datetime(out, utc=True)
    return out


def coerce_dataset(df: pd.DataFrame, classification: ColumnClassification) -> pd.DataFrame:
    """
    Return a copy of `df` with numeric columns as numbers (bad cells -> 0) and
    temporal columns parsed to Timestamps where the text is a valid date.
    Never raises for malformed cells; coercing twice gives the same frame.
    """
    out = df.copy()
    for col, kind in classification.kinds.items():
        if col not in out.columns:
            continue
        if kind is ColumnKind.NUMERIC:
            out[col] = _coerce_numeric(out[col])
        elif kind is ColumnKind.TEMPORAL:
            out[col] = parse_temporal(out[col])
    return out


def normalize_dataset(
    df: pd.DataFrame, vocabulary: Optional[FieldVocabulary] = None
) -> Tuple[pd.DataFrame, ColumnClassification]:
    """Infer column kinds and coerce in one pass."""
    classification = infer_column_types(df, vocabulary=vocabulary)
    logger.info(
        f"Classified {len(classification.kinds)} columns: "
        f"numeric={classification.numeric_columns}, time={classification.time_column}"
    )
    return coerce_dataset(df, classification), classification
