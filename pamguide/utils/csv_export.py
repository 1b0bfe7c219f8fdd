"""
CSV export of result matrices.
"""

from pathlib import Path
import csv

from ..core.results import ResultMatrix
from .formatting import format_header_cell, format_level_cell, format_time_cell


def write_csv(path: str | Path, matrix: ResultMatrix) -> Path:
    """
    Write a result matrix without column names.

    The first line holds the frequencies (blank time cell), every further
    line a formatted time followed by levels with four decimals.

    Returns:
        Path of the written file
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(format_header_cell(v) for v in matrix.header)
        for row in matrix.rows:
            writer.writerow(
                [format_time_cell(row[0])] + [format_level_cell(v) for v in row[1:]]
            )

    return path
