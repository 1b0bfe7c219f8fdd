"""
Formatting functions for output cells, log messages and filenames.
"""

from datetime import datetime, timezone
from pathlib import Path

from ..core.config import AnalysisConfig, WindowUnit

# Time values above this are seconds since the Unix epoch
ABSOLUTE_TIME_THRESHOLD = 1e9


def format_time_cell(seconds: float) -> str:
    """
    Format the time column of a data row.

    Args:
        seconds: Relative seconds or seconds since the Unix epoch

    Returns:
        "2024-07-17 16:47:21.500" for absolute times, "12.500" otherwise
    """
    if seconds > ABSOLUTE_TIME_THRESHOLD:
        try:
            moment = datetime.fromtimestamp(seconds, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return f"{seconds:.3f}"
        return moment.strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]
    return f"{seconds:.3f}"


def format_header_cell(value: float) -> str:
    """Header cells: blank placeholder for 0.0, otherwise a frequency."""
    if value == 0.0:
        return ""
    return f"{value:.4f}"


def format_level_cell(db: float) -> str:
    return f"{db:.4f}"


def format_frequency(hz: float) -> str:
    """
    Formatiere Frequenz in lesbares Format.

    Args:
        hz: Frequenz in Hz

    Returns:
        Formatierter String (z.B. "1.5 kHz" oder "250 Hz")
    """
    if hz >= 1000:
        return f"{hz/1000:.1f} kHz"
    else:
        return f"{hz:.0f} Hz"


def format_db(db: float, precision: int = 2) -> str:
    if db == float('-inf'):
        return "-∞ dB"
    return f"{db:.{precision}f} dB"


def output_filename(input_path: str | Path, config: AnalysisConfig) -> str:
    """
    CSV name of a single-file result.

    Example: "AMAR394.20240717T164721Z_PSD_1.00sHann_50PercentOverlap.csv"
    """
    stem = Path(input_path).stem
    if config.window_unit is WindowUnit.SECONDS:
        window_len = f"{config.window_length:.2f}s"
    else:
        window_len = f"{int(config.window_length)}samples"

    return (
        f"{stem}_{config.analysis_type.label}_{window_len}"
        f"{config.window_type.label}_{config.overlap_percentage:.0f}PercentOverlap.csv"
    )


def summary_filename(config: AnalysisConfig) -> str:
    """
    CSV name of a batch summary.

    Example: "PAMGuide_Batch_Broadband_1000Hz-10000Hz_Calibrated_Summary.csv"
    """
    mode = "Calibrated" if config.calibrated else "Relative"
    return (
        f"PAMGuide_Batch_{config.analysis_type.label}_"
        f"{config.low_cutoff:.0f}Hz-{config.high_cutoff:.0f}Hz_{mode}_Summary.csv"
    )
