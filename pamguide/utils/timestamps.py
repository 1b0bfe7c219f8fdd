"""
Filename timestamps.

Recorders such as AMAR name files "<PREFIX>.<TIMESTAMP>.wav";
the part after the first dot of the stem is parsed with strptime.
"""

from datetime import datetime
from pathlib import Path
from typing import Optional
import logging

logger = logging.getLogger(__name__)


def parse_timestamp_from_filename(path: str | Path, fmt: str) -> Optional[datetime]:
    """
    Parse the start time encoded in a filename.

    Args:
        path: Audio file path, e.g. "AMAR394.20240717T164721Z.wav"
        fmt: strptime format, e.g. "%Y%m%dT%H%M%SZ"

    Returns:
        Naive datetime (UTC by convention), or None if it cannot be parsed
    """
    stem = Path(path).stem
    parts = stem.split(".", 1)
    if len(parts) != 2:
        logger.warning("Could not extract timestamp part from filename stem: %s", stem)
        return None

    timestamp_str = parts[1]
    try:
        return datetime.strptime(timestamp_str, fmt)
    except ValueError as e:
        logger.warning(
            "Timestamp parse error for '%s' (extracted: '%s') with format '%s': %s",
            stem, timestamp_str, fmt, e,
        )
        return None
