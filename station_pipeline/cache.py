"""
Time-boxed dataset cache.

The dataset is stored as a JSON array of records under `timeSeriesData` and the
capture time as ISO-8601 under `timeSeriesDataTimestamp`. Storage is text-only,
so `load()` re-parses dates and re-runs coercion on the way back.
"""
import datetime as dt
import json
import logging
import math
from typing import Any, Callable, Dict, List, Optional, Protocol

import numpy as np
import pandas as pd

from utils.constants import CACHE_DATA_KEY, CACHE_TIMESTAMP_KEY, CACHE_TTL
from .cleaning import normalize_dataset, parse_temporal
from .errors import CacheError
from .inference import FieldVocabulary, is_time_name

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


class MemoryStore:
    """In-process store, mostly for tests."""

    def __init__(self):
        self._data: Dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)


def _utcnow() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


def _jsonable(value: Any) -> Any:
    if isinstance(value, (pd.Timestamp, dt.datetime)):
        return value.isoformat()
    if isinstance(value, np.generic):
        value = value.item()
    if isinstance(value, float) and math.isnan(value):
        return None
    return value


def serialize_records(df: pd.DataFrame) -> List[Dict[str, Any]]:
    """Records with Timestamps as ISO-8601 strings and plain Python scalars."""
    return [
        {str(k): _jsonable(v) for k, v in row.items()}
        for row in df.to_dict(orient="records")
    ]


class DatasetCache:
    def __init__(
        self,
        store: Optional[KeyValueStore] = None,
        clock: Optional[Callable[[], dt.datetime]] = None,
        ttl: dt.timedelta = CACHE_TTL,
        vocabulary: Optional[FieldVocabulary] = None,
    ):
        self.store = store if store is not None else MemoryStore()
        self.clock = clock or _utcnow
        self.ttl = ttl
        self.vocabulary = vocabulary

    def save(self, df: pd.DataFrame) -> bool:
        """Store the dataset with the current time. Returns False instead of raising."""
        try:
            payload = json.dumps(serialize_records(df), allow_nan=False)
        except (TypeError, ValueError, OverflowError) as e:
            logger.error(f"Error serializing data for cache: {e}")
            return False
        try:
            self.store.set(CACHE_DATA_KEY, payload)
            self.store.set(CACHE_TIMESTAMP_KEY, self.clock().isoformat())
        except CacheError as e:
            logger.error(f"Error saving data to cache: {e}")
            # A half-written entry must not pair new data with an old timestamp
            self.invalidate()
            return False
        logger.info(f"Cached {len(df)} rows")
        return True

    def load(self) -> Optional[pd.DataFrame]:
        try:
            payload = self.store.get(CACHE_DATA_KEY)
        except CacheError as e:
            logger.warning(f"Cache unavailable: {e}")
            return None
        if not payload:
            return None
        try:
            records = json.loads(payload)
        except ValueError as e:
            logger.warning(f"Discarding unreadable cache entry: {e}")
            return None
        if not isinstance(records, list) or not all(isinstance(r, dict) for r in records):
            logger.warning("Discarding cache entry that is not an array of records")
            return None

        # Text-only storage: start from plain objects like a fresh parse
        df = pd.DataFrame.from_records(records).astype(object)
        for col in df.columns:
            if is_time_name(str(col)):
                df[col] = parse_temporal(df[col])
        data, _ = normalize_dataset(df, vocabulary=self.vocabulary)
        return data

    def captured_at(self) -> Optional[dt.datetime]:
        try:
            raw = self.store.get(CACHE_TIMESTAMP_KEY)
        except CacheError as e:
            logger.warning(f"Cache unavailable: {e}")
            return None
        if not raw:
            return None
        try:
            stamp = dt.datetime.fromisoformat(raw.replace("Z", "+00:00"))
        except ValueError:
            logger.warning(f"Invalid cache timestamp {raw!r}")
            return None
        if stamp.tzinfo is None:
            stamp = stamp.replace(tzinfo=dt.timezone.utc)
        return stamp

    def is_fresh(self) -> bool:
        captured = self.captured_at()
        if captured is None:
            return False
        return self.clock() - captured < self.ttl

    def invalidate(self) -> None:
        for key in (CACHE_DATA_KEY, CACHE_TIMESTAMP_KEY):
            try:
                self.store.delete(key)
            except CacheError as e:
                logger.warning(f"Could not remove {key}: {e}")
