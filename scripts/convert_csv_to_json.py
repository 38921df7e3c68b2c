#!/usr/bin/env python3
"""Small CLI to fetch the station CSV and write the offline JSON artifact.

Usage: python scripts/convert_csv_to_json.py [OUT_DIR] [URL]
"""
import sys
import logging

from dotenv import load_dotenv
load_dotenv()  # before pipeline imports, which read env at import time

from station_pipeline.data_service import CSV_URL
from station_pipeline.downloader import fetch_csv
from station_pipeline.cleaning import normalize_dataset
from station_pipeline.errors import PipelineError
from station_pipeline.export import write_artifacts
from station_pipeline.inference import load_vocabulary
from station_pipeline.parsing import parse_csv

logging.basicConfig(level=logging.INFO)


def main(argv=None):
    args = list(sys.argv[1:] if argv is None else argv)
    if args and args[0] in ("-h", "--help"):
        print("Usage: convert_csv_to_json.py [OUT_DIR] [URL]")
        return 0
    out_dir = args[0] if args else None
    url = args[1] if len(args) > 1 else CSV_URL
    print("Fetching CSV data...")
    try:
        raw = parse_csv(fetch_csv(url))
    except PipelineError as e:
        print(f"Error in conversion process: {e}")
        return 1
    dataset, classification = normalize_dataset(raw, vocabulary=load_vocabulary())
    data_path, meta_path = write_artifacts(dataset, classification, out_dir)
    print(f"Wrote {len(dataset)} rows to {data_path}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
