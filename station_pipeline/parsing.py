import io
import logging
import re
from typing import Any, Dict, List, Union

import pandas as pd

from .errors import ParseError

logger = logging.getLogger(__name__)

# Optional minus sign, digits with optional fraction (or a bare fraction), optional exponent
_NUMBER_RE = re.compile(r"^\s*-?(\d+\.?\d*|\.\d+)([eE][-+]?\d+)?\s*$")
_FIELD_COUNT_RE = re.compile(r"Expected (\d+) fields in line (\d+), saw (\d+)")


def _dynamic_type(token: Any) -> Union[int, float, str]:
    """Turn a raw CSV token into an int/float when it is a clean numeric literal."""
    if not isinstance(token, str) or not _NUMBER_RE.match(token):
        return token
    text = token.strip()
    if re.search(r"[.eE]", text):
        return float(text)
    return int(text)


def _read(text: str, **kwargs) -> pd.DataFrame:
    return pd.read_csv(
        io.StringIO(text),
        sep=",",
        dtype=str,
        keep_default_na=False,
        skip_blank_lines=True,
        index_col=False,
        engine="c",
        **kwargs,
    )


def _log_ragged_row(text: str, match: re.Match) -> None:
    expected, line_no, seen = (int(g) for g in match.groups())
    lines = text.splitlines()
    line = lines[line_no - 1] if 0 < line_no <= len(lines) else ""
    logger.warning(
        f"Line {line_no} has {seen} fields, expected {expected}; "
        f"dropping the extra fields of {line!r}"
    )


def parse_csv(text: str) -> pd.DataFrame:
    """
    Parse CSV text with a header row into a DataFrame of loosely typed values.
    Numeric tokens become int/float, everything else stays str ('' for empty
    fields). Blank lines are skipped, short rows are padded and rows with too
    many fields are cut to the header width.
    """
    if not text or not text.strip():
        raise ParseError("No data found in CSV file")
    try:
        try:
            raw = _read(text)
        except pd.errors.ParserError as exc:
            match = _FIELD_COUNT_RE.search(str(exc))
            if match is None:
                raise
            _log_ragged_row(text, match)
            # Selecting the header's columns makes the tokenizer drop extras
            width = len(_read(text, nrows=0).columns)
            raw = _read(text, usecols=list(range(width)))
    except (pd.errors.ParserError, pd.errors.EmptyDataError) as exc:
        raise ParseError(f"Error parsing CSV: {exc}") from exc

    if raw.empty:
        raise ParseError("No data found in CSV file")

    # Short rows come back as NaN even with keep_default_na=False
    raw = raw.fillna("")
    df = raw.apply(lambda col: col.map(_dynamic_type).astype(object))
    logger.info(f"Parsed {len(df)} rows x {len(df.columns)} columns")
    return df


def to_records(df: pd.DataFrame) -> List[Dict[str, Any]]:
    """Ordered list-of-dicts view of a dataset."""
    return df.to_dict(orient="records")
