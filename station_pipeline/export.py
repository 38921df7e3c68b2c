"""Offline JSON artifact: the dataset plus a small metadata file describing its columns."""
import datetime as dt
import json
import logging
import os
from pathlib import Path
from typing import Optional, Tuple

import pandas as pd

from utils.constants import ARTIFACT_DATA_FILE, ARTIFACT_DIR, ARTIFACT_METADATA_FILE
from .cache import serialize_records
from .cleaning import normalize_dataset
from .inference import ColumnClassification, FieldVocabulary

logger = logging.getLogger(__name__)


def artifact_paths(out_dir: Optional[str] = None) -> Tuple[Path, Path]:
    base = Path(out_dir or os.path.join(os.getcwd(), ARTIFACT_DIR))
    return base / ARTIFACT_DATA_FILE, base / ARTIFACT_METADATA_FILE


def build_metadata(df: pd.DataFrame, classification: ColumnClassification) -> dict:
    return {
        "totalRows": int(len(df)),
        "columns": classification.type_tags(),
        "lastUpdated": dt.datetime.now(dt.timezone.utc).isoformat(),
    }


def write_artifacts(
    df: pd.DataFrame, classification: ColumnClassification, out_dir: Optional[str] = None
) -> Tuple[Path, Path]:
    data_path, meta_path = artifact_paths(out_dir)
    data_path.parent.mkdir(parents=True, exist_ok=True)
    with open(data_path, "w", encoding="utf-8") as f:
        json.dump(serialize_records(df), f, indent=2)
    logger.info(f"JSON data saved to {data_path}")
    if len(df):
        with open(meta_path, "w", encoding="utf-8") as f:
            json.dump(build_metadata(df, classification), f, indent=2)
        logger.info(f"Metadata saved to {meta_path}")
    return data_path, meta_path


def artifacts_exist(out_dir: Optional[str] = None) -> bool:
    data_path, _ = artifact_paths(out_dir)
    return data_path.exists()


def read_artifact(
    out_dir: Optional[str] = None, vocabulary: Optional[FieldVocabulary] = None
) -> Tuple[pd.DataFrame, ColumnClassification]:
    """Load the artifact back as a coerced dataset."""
    data_path, _ = artifact_paths(out_dir)
    with open(data_path, encoding="utf-8") as f:
        records = json.load(f)
    return normalize_dataset(pd.DataFrame.from_records(records).astype(object), vocabulary=vocabulary)
