import datetime as dt
import logging
from typing import Iterable, Optional

import numpy as np
import pandas as pd

from utils.constants import DEFAULT_SAMPLE_RANGE, SAMPLE_RANGES, WEATHER_FIELDS

logger = logging.getLogger(__name__)


def generate_sample_data(
    rows: int = 100,
    fields: Optional[Iterable[str]] = None,
    seed: Optional[int] = None,
    now: Optional[dt.datetime] = None,
) -> pd.DataFrame:
    """
    Synthetic hourly station readings going back `rows` hours from `now`,
    newest first. Used when the live source is unavailable.
    """
    rng = np.random.default_rng(seed)
    fields = list(fields) if fields is not None else list(WEATHER_FIELDS)
    now = pd.Timestamp(now or dt.datetime.now(dt.timezone.utc))
    if now.tzinfo is None:
        now = now.tz_localize("UTC")

    data = {"timestamp": [now - pd.Timedelta(hours=i) for i in range(rows)]}
    for name in fields:
        low, high = SAMPLE_RANGES.get(name, DEFAULT_SAMPLE_RANGE)
        if isinstance(low, int) and isinstance(high, int):
            data[name] = rng.integers(low, high, size=rows)
        else:
            data[name] = np.round(rng.uniform(low, high, size=rows), 2)
    logger.info(f"Generated {rows} sample rows for {len(fields)} fields")
    return pd.DataFrame(data)
