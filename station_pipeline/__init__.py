"""
Data pipeline package for downloading, parsing, classifying, coercing and
caching weather-station CSV data for dashboard consumers.

Modules:
- downloader: Fetch the raw CSV text over HTTP
- parsing: CSV -> DataFrame with per-value numeric typing
- inference: Column classification (numeric / temporal / text) and field units
- cleaning: Type coercion driven by the classification
- db: SQLite key-value store backing the cache
- cache: Time-boxed dataset cache (1 hour freshness window)
- data_service: Facade used by consumers (cache-or-fetch, forced refresh, sample fallback)
- sample_data: Synthetic station readings
- processing: Stat-card summaries, table search and pagination, chart frames
- export: Offline JSON artifact and metadata
- scheduler: Optional background refresh once per freshness window
"""
