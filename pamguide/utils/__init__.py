"""
Utility module for PAMGuide.

Contains output formatting, filename timestamps and CSV export.
"""

from .csv_export import write_csv
from .formatting import (
    format_time_cell,
    format_frequency,
    format_db,
    output_filename,
    summary_filename,
)
from .timestamps import parse_timestamp_from_filename

__all__ = [
    "write_csv",
    "format_time_cell",
    "format_frequency",
    "format_db",
    "output_filename",
    "summary_filename",
    "parse_timestamp_from_filename",
]
