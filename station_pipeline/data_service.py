import datetime as dt
import logging
import os
import threading
from dataclasses import dataclass, field
from typing import Callable, Optional

import pandas as pd
import requests

from utils.constants import DEFAULT_CSV_URL
from .cache import DatasetCache, MemoryStore
from .cleaning import normalize_dataset
from .db import SqliteStore
from .downloader import fetch_csv
from .errors import CacheError
from .inference import ColumnClassification, FieldVocabulary, load_vocabulary
from .parsing import parse_csv
from .sample_data import generate_sample_data

logger = logging.getLogger(__name__)

CSV_URL = os.environ.get("STATION_CSV_URL", DEFAULT_CSV_URL)


@dataclass(frozen=True)
class LoadResult:
    dataset: pd.DataFrame
    classification: ColumnClassification
    source: str  # 'cache' | 'remote' | 'sample'
    loaded_at: dt.datetime = field(default_factory=lambda: dt.datetime.now(dt.timezone.utc))


class DataService:
    """
    Facade for the station pipeline.
    - load: serve the cached dataset while fresh, else fetch -> parse -> coerce -> cache
    - refresh: drop the cache and reload from the source
    - use_sample_data: synthetic fallback when the source is unavailable

    Each load cycle takes a generation number; only a cycle newer than the last
    published one may replace `current`, so a slow initial load cannot
    overwrite a forced refresh that finished first.
    """

    def __init__(
        self,
        url: Optional[str] = None,
        cache: Optional[DatasetCache] = None,
        session: Optional[requests.Session] = None,
        fetcher: Optional[Callable[[str], str]] = None,
        vocabulary: Optional[FieldVocabulary] = None,
    ):
        self.url = url or CSV_URL
        self.vocabulary = vocabulary or load_vocabulary()
        self.cache = cache or DatasetCache(vocabulary=self.vocabulary)
        self.session = session
        self._fetcher = fetcher or (lambda u: fetch_csv(u, session=self.session))
        self._lock = threading.Lock()
        self._generation = 0
        self._published = 0
        self._current: Optional[LoadResult] = None

    @classmethod
    def with_local_cache(cls, db_path: Optional[str] = None, **kwargs) -> "DataService":
        """Service whose cache persists in the local SQLite file (STATION_CACHE_PATH)."""
        vocabulary = kwargs.pop("vocabulary", None) or load_vocabulary()
        try:
            store = SqliteStore(db_path)
        except CacheError as e:
            logger.warning(f"Local cache unavailable, using memory store: {e}")
            store = MemoryStore()
        cache = DatasetCache(store=store, vocabulary=vocabulary)
        return cls(cache=cache, vocabulary=vocabulary, **kwargs)

    @property
    def current(self) -> Optional[LoadResult]:
        with self._lock:
            return self._current

    def load(self, force_refresh: bool = False) -> LoadResult:
        generation = self._next_generation()

        if force_refresh:
            self.cache.invalidate()
        elif self.cache.is_fresh():
            cached = self.cache.load()
            if cached is not None and not cached.empty:
                logger.info(f"Using cached dataset ({len(cached)} rows)")
                result = self._result(cached, "cache")
                self._publish(generation, result)
                return result
            logger.warning("Fresh cache timestamp but no usable data; refetching")

        # FetchError / ParseError propagate so the caller can retry or fall back
        text = self._fetcher(self.url)
        raw = parse_csv(text)
        dataset, classification = normalize_dataset(raw, vocabulary=self.vocabulary)
        result = LoadResult(dataset, classification, "remote")
        # A stale cycle must not overwrite the cache written by a newer one
        if self._publish(generation, result) and not self.cache.save(dataset):
            logger.warning("Dataset loaded but could not be cached")
        return result

    def refresh(self) -> LoadResult:
        return self.load(force_refresh=True)

    def use_sample_data(self, rows: int = 100, seed: Optional[int] = None) -> LoadResult:
        generation = self._next_generation()
        result = self._result(generate_sample_data(rows=rows, seed=seed), "sample")
        self._publish(generation, result)
        return result

    # Helpers ------------------------------------------------------------
    def _result(self, df: pd.DataFrame, source: str) -> LoadResult:
        dataset, classification = normalize_dataset(df, vocabulary=self.vocabulary)
        return LoadResult(dataset, classification, source)

    def _next_generation(self) -> int:
        with self._lock:
            self._generation += 1
            return self._generation

    def _publish(self, generation: int, result: LoadResult) -> bool:
        with self._lock:
            if generation < self._published:
                logger.warning(
                    f"Discarding stale {result.source} result (cycle {generation}, "
                    f"cycle {self._published} already published)"
                )
                return False
            self._published = generation
            self._current = result
            return True
