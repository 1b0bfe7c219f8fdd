"""
Signal Statistics

Descriptive statistics of raw and windowed signals, used by the
diagnostics report.
"""

from dataclasses import dataclass
import numpy as np


@dataclass(frozen=True)
class SignalStatistics:
    minimum: float
    maximum: float
    mean: float
    rms: float


def compute_rms(data: np.ndarray, as_db: bool = False) -> float:
    """
    Compute RMS (Root Mean Square) of the signal.

    Args:
        data: Audio data
        as_db: If True, return in dB (reference: 1.0)

    Returns:
        RMS value (linear or dB)
    """
    rms = float(np.sqrt(np.mean(np.square(data))))

    if as_db:
        if rms == 0:
            return -np.inf
        return 20 * np.log10(rms)

    return rms


def compute_statistics(data: np.ndarray) -> SignalStatistics:
    """Minimum, maximum, mean (DC offset) and RMS of a signal."""
    return SignalStatistics(
        minimum=float(np.min(data)),
        maximum=float(np.max(data)),
        mean=float(np.mean(data)),
        rms=compute_rms(data),
    )
