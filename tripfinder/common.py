"""
Common helpers for reading GTFS text files.
"""
import csv
import os
from typing import Dict, Iterator, Optional, Sequence

from tripfinder.logger import get_logger

logger = get_logger("common")


def iter_feed_rows(feed_dir: str, filename: str, required_columns: Sequence[str],
                   required: bool = True) -> Iterator[tuple[int, Dict[str, str]]]:
    """
    Yield (line_number, row) pairs from a GTFS text file.

    Args:
        feed_dir: Path to the unzipped feed directory
        filename: GTFS file name, e.g. 'stops.txt'
        required_columns: Columns that must be present in the header
        required: If False, a missing file yields nothing instead of failing

    Raises:
        FileNotFoundError: If a required file is missing.
        KeyError: If the header lacks one of the required columns.
    """
    file_path = os.path.join(feed_dir, filename)
    if not os.path.exists(file_path):
        if required:
            raise FileNotFoundError(f"Required file not found: {file_path}")
        logger.info(f"{filename} not found, skipping")
        return

    # utf-8-sig strips the BOM some exporters write
    with open(file_path, 'r', encoding='utf-8-sig', newline='') as f:
        reader = csv.DictReader(f)
        header = [column.strip() for column in (reader.fieldnames or [])]
        reader.fieldnames = header

        missing_columns = [col for col in required_columns if col not in header]
        if missing_columns:
            raise KeyError(f"Missing required column(s) in {filename}: {missing_columns}")

        for line_number, row in enumerate(reader, start=2):
            yield line_number, row


def optional_value(row: Dict[str, str], column: str) -> Optional[str]:
    """Return a stripped cell value, or None when the column is absent or blank."""
    value = row.get(column)
    if value is None:
        return None
    value = value.strip()
    return value or None
