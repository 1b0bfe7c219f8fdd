"""
Signal Segmentation

Splits a signal into overlapping segments and computes the selected
power spectrum of every segment in parallel.

Segments never extend past the end of the signal (no zero padding);
trailing samples that do not fill a complete segment are ignored.
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Optional
import math
import numpy as np

from .errors import InvalidWindowError, SignalTooShortError, ZeroStepError
from .spectral import FrequencySelection, compute_spectrum, single_sided_power
from .windows import Window


def round_half_up(value: float) -> int:
    """Round a non-negative value to the nearest integer, halves away from zero."""
    return int(math.floor(value + 0.5))


@dataclass(frozen=True)
class SegmentPlan:
    """
    Segment layout of one signal.

    Attributes:
        window_length: Samples per segment (N)
        step: Samples between consecutive segment starts
        num_segments: Number of complete segments
    """
    window_length: int
    step: int
    num_segments: int

    def bounds(self, index: int) -> tuple[int, int]:
        """Half-open sample range [start, end) of a segment."""
        start = index * self.step
        return start, start + self.window_length


def plan_segments(
    total_samples: int,
    window_length: int,
    overlap_ratio: float,
) -> SegmentPlan:
    """
    Derive step size and segment count.

    Args:
        total_samples: Signal length T
        window_length: Window length N in samples
        overlap_ratio: Overlap as fraction in [0, 1)

    Raises:
        InvalidWindowError: N <= 0 or N > T
        ZeroStepError: Overlap rounds the step to zero
        SignalTooShortError: No complete segment fits
    """
    if window_length <= 0 or window_length > total_samples:
        raise InvalidWindowError(
            f"Invalid window length {window_length} for signal length {total_samples}"
        )

    step = round_half_up(window_length * (1.0 - overlap_ratio))
    if step == 0:
        raise ZeroStepError("Overlap results in zero step size")

    if total_samples >= window_length:
        num_segments = (total_samples - window_length) // step + 1
    else:
        num_segments = 0
    if num_segments == 0:
        raise SignalTooShortError(
            "Audio signal too short for specified window length and overlap"
        )

    return SegmentPlan(window_length=window_length, step=step, num_segments=num_segments)


def segment_power(
    samples: np.ndarray,
    window: Window,
    plan: SegmentPlan,
    selection: FrequencySelection,
    index: int,
) -> np.ndarray:
    """Selected single-sided power spectrum of one segment."""
    start, end = plan.bounds(index)
    windowed = samples[start:end] * window.coefficients
    power = single_sided_power(compute_spectrum(windowed))
    return power[selection.slice]


def compute_segment_powers(
    samples: np.ndarray,
    window: Window,
    plan: SegmentPlan,
    selection: FrequencySelection,
    max_workers: Optional[int] = None,
) -> np.ndarray:
    """
    Power spectra of all segments, computed on a thread pool.

    Every task reads only the shared signal, window and selection and
    returns its own row; rows are collected in segment order.

    Returns:
        Linear power, Shape: (num_segments, selected bins)
    """
    def task(index: int) -> np.ndarray:
        return segment_power(samples, window, plan, selection, index)

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        rows = list(executor.map(task, range(plan.num_segments)))

    return np.vstack(rows)
