import logging
from typing import Optional

import requests

from .errors import FetchError

logger = logging.getLogger(__name__)


def fetch_csv(url: str, session: Optional[requests.Session] = None, timeout: Optional[float] = None) -> str:
    """
    Download the raw CSV text at `url`.
    Raises FetchError on a transport failure or a status >= 400. No retries;
    without `timeout` the transport default applies.
    """
    http = session or requests.Session()
    try:
        response = http.get(url, timeout=timeout)
    except requests.RequestException as exc:
        logger.error(f"Request for {url} failed: {exc}")
        raise FetchError(f"Failed to fetch CSV: {exc}") from exc

    if response.status_code >= 400:
        logger.error(f"Source returned {response.status_code} for {url}")
        raise FetchError(f"Failed to fetch CSV: {response.status_code} {response.reason or ''}".rstrip())

    text = response.text
    logger.info(f"Fetched {len(text)} characters from {url}")
    return text
