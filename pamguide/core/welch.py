"""
Welch Time Averaging

Averages groups of consecutive segment spectra, trading time resolution
for lower variance. The last group may hold fewer spectra than the factor.
"""

from typing import Optional
import math
import numpy as np


def welch_is_active(factor: Optional[int], num_segments: int) -> bool:
    """Averaging applies only for 1 < factor <= num_segments."""
    return factor is not None and 1 < factor <= num_segments


def welch_average(
    powers: np.ndarray,
    factor: Optional[int],
) -> tuple[np.ndarray, int]:
    """
    Average consecutive rows of a power matrix in groups of `factor`.

    Args:
        powers: Linear power, Shape: (num_segments, bins)
        factor: Welch grouping factor, None to disable

    Returns:
        Tuple of (averaged power, time multiplier). When averaging is
        skipped the input is returned unchanged with multiplier 1.
    """
    num_segments = powers.shape[0]
    if not welch_is_active(factor, num_segments):
        return powers, 1

    num_groups = math.ceil(num_segments / factor)
    averaged = np.empty((num_groups, powers.shape[1]))
    for group in range(num_groups):
        start = group * factor
        end = min(start + factor, num_segments)
        averaged[group] = np.mean(powers[start:end], axis=0)

    return averaged, factor
