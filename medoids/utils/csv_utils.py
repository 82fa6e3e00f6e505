# medoids/utils/csv_utils.py
"""
CSV and file reading utilities.
"""
import csv
from typing import List, Optional


def detect_encoding(file_bytes: bytes, fallback: str = 'utf-8') -> str:
    """
    Detect the encoding of a byte string.

    Args:
        file_bytes: Raw bytes to analyze
        fallback: Fallback encoding if detection fails

    Returns:
        Detected or fallback encoding string
    """
    # utf-8-sig first so a BOM does not end up in the first column name
    encodings = ['utf-8-sig', 'utf-8', 'cp1252', 'latin1']

    for encoding in encodings:
        try:
            file_bytes.decode(encoding)
            return encoding
        except (UnicodeDecodeError, LookupError):
            continue

    return fallback


def detect_delimiter(text_sample: str, candidates: Optional[List[str]] = None) -> str:
    """
    Detect the CSV delimiter from a text sample.

    Args:
        text_sample: Sample of CSV text (first few KB)
        candidates: List of candidate delimiters to try

    Returns:
        Detected delimiter character
    """
    if candidates is None:
        candidates = [',', ';', '\t']

    try:
        dialect = csv.Sniffer().sniff(text_sample, delimiters=''.join(candidates))
        return dialect.delimiter
    except csv.Error:
        pass

    # Fallback: count occurrences of each candidate in the header line
    header = text_sample.splitlines()[0] if text_sample else ''
    best_delimiter = candidates[0]
    max_count = 0

    for delim in candidates:
        count = header.count(delim)
        if count > max_count:
            max_count = count
            best_delimiter = delim

    return best_delimiter
