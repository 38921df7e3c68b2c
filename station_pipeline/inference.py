"""
Column classification for station datasets.

Source CSVs are inconsistently typed (numbers quoted as strings, sparse early
rows), so each column is classified by combining field-name knowledge with a
sample of its values:

1. names containing time/date/timestamp are temporal;
2. names from the station vocabulary are numeric;
3. remaining columns are numeric when a sampled value is a number, else text;
4. with no numeric column, every non time/date/name/id column is numeric;
5. with no temporal column, the first column is the time axis. A numeric
   first column stays numeric, a text one becomes temporal.
"""
import enum
import logging
import math
import numbers
import os
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

import pandas as pd

from utils.constants import (
    FIELD_UNITS,
    NON_MEASUREMENT_TOKENS,
    SAMPLE_ROWS,
    TIME_NAME_TOKENS,
    TYPE_TAGS,
    WEATHER_FIELDS,
)

logger = logging.getLogger(__name__)


class ColumnKind(enum.Enum):
    NUMERIC = 'numeric'
    TEMPORAL = 'temporal'
    TEXT = 'text'

    @property
    def tag(self) -> str:
        return TYPE_TAGS[self.value]


def _normalize(name: str) -> str:
    return name.lower().replace(" ", "").replace("_", "")


def _has_fragment(name: str, fragments: Iterable[str]) -> bool:
    lowered = name.lower()
    return any(f in lowered for f in fragments)


def is_time_name(name: str) -> bool:
    return _has_fragment(name, TIME_NAME_TOKENS)


def is_number(value) -> bool:
    """True for int/float values (numpy scalars included), but not bool or NaN."""
    if isinstance(value, bool) or not isinstance(value, numbers.Number):
        return False
    try:
        return not math.isnan(value)
    except TypeError:
        return True


@dataclass(frozen=True)
class FieldVocabulary:
    """Measurement field names that always classify as numeric."""

    fields: Tuple[str, ...] = WEATHER_FIELDS

    def matches(self, name: str) -> bool:
        lowered = name.lower()
        normalized = _normalize(name)
        return any(
            f.lower() in lowered or normalized == _normalize(f)
            for f in self.fields
        )

    def extended(self, extra: Iterable[str]) -> "FieldVocabulary":
        added = tuple(f for f in extra if f and f not in self.fields)
        return FieldVocabulary(self.fields + added)


def load_vocabulary(env_var: str = "STATION_EXTRA_FIELDS") -> FieldVocabulary:
    """Default vocabulary extended with comma-separated fields from the environment."""
    raw = os.environ.get(env_var, "")
    extra = [f.strip() for f in raw.split(",") if f.strip()]
    if extra:
        logger.info(f"Extending field vocabulary with {extra}")
    return FieldVocabulary().extended(extra)


@dataclass(frozen=True)
class ColumnClassification:
    kinds: Dict[str, ColumnKind] = field(default_factory=dict)
    time_column: Optional[str] = None

    def _of_kind(self, kind: ColumnKind) -> List[str]:
        return [c for c, k in self.kinds.items() if k is kind]

    @property
    def numeric_columns(self) -> List[str]:
        return self._of_kind(ColumnKind.NUMERIC)

    @property
    def temporal_columns(self) -> List[str]:
        return self._of_kind(ColumnKind.TEMPORAL)

    @property
    def text_columns(self) -> List[str]:
        return self._of_kind(ColumnKind.TEXT)

    def type_tags(self) -> Dict[str, str]:
        return {c: k.tag for c, k in self.kinds.items()}


def _sampled_numeric(series: pd.Series, sample_size: int) -> bool:
    return any(is_number(v) for v in series.head(sample_size))


def infer_column_types(
    df: pd.DataFrame,
    vocabulary: Optional[FieldVocabulary] = None,
    sample_size: int = SAMPLE_ROWS,
) -> ColumnClassification:
    """Classify every column of `df` as numeric, temporal or text."""
    columns = list(df.columns)
    if df.empty or not columns:
        return ColumnClassification()
    vocabulary = vocabulary or FieldVocabulary()

    kinds: Dict[str, ColumnKind] = {}
    for col in columns:
        if is_time_name(str(col)):
            kinds[col] = ColumnKind.TEMPORAL
        elif vocabulary.matches(str(col)):
            kinds[col] = ColumnKind.NUMERIC
        elif _sampled_numeric(df[col], sample_size):
            kinds[col] = ColumnKind.NUMERIC
        else:
            kinds[col] = ColumnKind.TEXT

    temporal = [c for c in columns if kinds[c] is ColumnKind.TEMPORAL]
    time_column = temporal[0] if temporal else columns[0]

    if not any(k is ColumnKind.NUMERIC for k in kinds.values()):
        forced = [c for c in columns if not _has_fragment(str(c), NON_MEASUREMENT_TOKENS)]
        # Keep the fallback axis as labels unless it is the only candidate
        if not temporal and len(forced) > 1 and time_column in forced:
            forced.remove(time_column)
        for col in forced:
            kinds[col] = ColumnKind.NUMERIC
        logger.warning(f"No numeric columns detected; forcing {forced}")

    if not temporal:
        logger.info(f"No time column by name; using first column '{time_column}'")
        # A numeric first column stays numeric and still serves as the axis
        if kinds[time_column] is ColumnKind.TEXT:
            kinds[time_column] = ColumnKind.TEMPORAL

    return ColumnClassification(kinds=kinds, time_column=time_column)


def field_unit(name: str) -> str:
    """Display unit for a measurement field, '' when unknown."""
    lowered = name.lower()
    for fragment, unit in FIELD_UNITS:
        if fragment not in lowered:
            continue
        if fragment == "wind" and "direction" in lowered:
            continue
        return unit
    return ""
