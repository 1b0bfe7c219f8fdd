"""
Result Matrices

Assembles decibel levels into the output matrix and concatenates
per-file matrices into a batch summary.

Matrix layout:
- Row 0 is the header: 0.0 in the time column, then the selected
  frequencies (PSD) or a single 0.0 placeholder (broadband)
- Every further row holds the time in seconds (relative, or seconds
  since the Unix epoch when the file start time is known) followed by
  the levels of one segment or Welch group
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional, Sequence
import warnings
import numpy as np

from .config import AnalysisConfig, AnalysisType
from .errors import ColumnMismatchError


@dataclass(frozen=True)
class ResultMatrix:
    """
    Output of one analysis (or a concatenated batch summary).

    Attributes:
        values: Header row plus data rows, Shape: (rows + 1, columns + 1)
        analysis_type: PSD or broadband
        start_time: Absolute start of the first row, if known
    """
    values: np.ndarray
    analysis_type: AnalysisType
    start_time: Optional[datetime] = None

    @property
    def header(self) -> np.ndarray:
        return self.values[0]

    @property
    def rows(self) -> np.ndarray:
        """Data rows without the header."""
        return self.values[1:]

    @property
    def times(self) -> np.ndarray:
        return self.values[1:, 0]

    @property
    def levels(self) -> np.ndarray:
        """Levels in dB, Shape: (rows, columns)."""
        return self.values[1:, 1:]

    @property
    def frequencies(self) -> Optional[np.ndarray]:
        """Frequency columns in Hz (None for broadband)."""
        if self.analysis_type is AnalysisType.PSD:
            return self.values[0, 1:]
        return None

    @property
    def num_rows(self) -> int:
        return self.values.shape[0] - 1

    @property
    def num_columns(self) -> int:
        return self.values.shape[1]


def epoch_seconds(moment: datetime) -> float:
    """Seconds since the Unix epoch; naive datetimes are taken as UTC."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.timestamp()


def _freeze(values: np.ndarray) -> np.ndarray:
    values.setflags(write=False)
    return values


def assemble_result(
    levels: np.ndarray,
    analysis_type: AnalysisType,
    frequencies: np.ndarray,
    row_time_step: float,
    start_time: Optional[datetime] = None,
) -> ResultMatrix:
    """
    Build the output matrix from per-row levels.

    Args:
        levels: Levels in dB, Shape: (rows, bins) or (rows, 1)
        analysis_type: PSD or broadband
        frequencies: Selected frequencies (used for the PSD header)
        row_time_step: Seconds between rows (step/fs · Welch multiplier)
        start_time: Absolute file start time, if known

    Returns:
        ResultMatrix with a read-only value array
    """
    num_rows, num_cols = levels.shape

    values = np.zeros((num_rows + 1, num_cols + 1))
    if analysis_type is AnalysisType.PSD:
        values[0, 1:] = frequencies

    times = np.arange(num_rows) * row_time_step
    if start_time is not None:
        times = epoch_seconds(start_time) + times

    values[1:, 0] = times
    values[1:, 1:] = levels

    return ResultMatrix(
        values=_freeze(values),
        analysis_type=analysis_type,
        start_time=start_time,
    )


def concatenate(
    matrices: Sequence[ResultMatrix],
    config: AnalysisConfig,
) -> ResultMatrix:
    """
    Stack the data rows of several results below the first header.

    Only config.analysis_type is read from the configuration.

    Results are ordered by start time if every result has one;
    otherwise they keep their given order and a UserWarning is issued.

    Raises:
        ValueError: No results given
        ColumnMismatchError: PSD results with different column counts
    """
    if not matrices:
        raise ValueError("No results to concatenate")

    analysis_type = config.analysis_type

    ordered = list(matrices)
    if all(m.start_time is not None for m in ordered):
        ordered.sort(key=lambda m: epoch_seconds(m.start_time))
    else:
        warnings.warn(
            "Not all files had parseable timestamps. "
            "Concatenating in directory order.",
            UserWarning,
        )

    first = ordered[0]
    if analysis_type is AnalysisType.PSD:
        for matrix in ordered:
            if matrix.num_columns != first.num_columns:
                raise ColumnMismatchError(
                    f"Mismatched frequency bins between files "
                    f"({matrix.num_columns} vs {first.num_columns} cols). "
                    f"Cannot concatenate PSD results."
                )

    values = np.vstack([first.header[np.newaxis, :]] + [m.rows for m in ordered])

    return ResultMatrix(
        values=_freeze(values),
        analysis_type=analysis_type,
        start_time=first.start_time,
    )
