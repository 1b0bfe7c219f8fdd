"""
Core Analysis

Runs the full pipeline for one mono signal:
window → segmentation (parallel spectra) → Welch averaging →
level conversion → result matrix.

The function is pure: configuration and sensitivity are passed in,
nothing is cached between calls.
"""

from datetime import datetime
from typing import Optional
import logging
import numpy as np

from .config import AnalysisConfig, AnalysisType
from .levels import broadband_levels, psd_levels
from .results import ResultMatrix, assemble_result
from .segmentation import compute_segment_powers, plan_segments
from .spectral import select_frequency_range
from .welch import welch_average
from .windows import generate_window

logger = logging.getLogger(__name__)


def analyze_file(
    samples: np.ndarray,
    sample_rate: int,
    config: AnalysisConfig,
    sensitivity_db: float,
    start_time: Optional[datetime] = None,
    max_workers: Optional[int] = None,
) -> ResultMatrix:
    """
    Compute calibrated PSD or broadband levels of a signal.

    Args:
        samples: Normalised mono samples in [-1.0, 1.0], Shape: (T,)
        sample_rate: Sample rate in Hz
        config: Analysis configuration
        sensitivity_db: System sensitivity S (see calibration)
        start_time: Absolute start of the recording, if known
        max_workers: Thread count for the segment fan-out

    Returns:
        ResultMatrix (header row + one row per segment or Welch group)

    Raises:
        ValueError: Signal is not 1D
        AnalysisError: Invalid window, zero step, too short signal
            or empty frequency range
    """
    samples = np.asarray(samples, dtype=np.float64)
    if samples.ndim != 1:
        raise ValueError("Analysis requires 1D signal (mono)")

    fs = float(sample_rate)
    window_length = config.window_samples(fs)
    plan = plan_segments(len(samples), window_length, config.overlap_ratio)
    window = generate_window(config.window_type, window_length)
    selection = select_frequency_range(
        fs, window_length, config.low_cutoff, config.high_cutoff
    )

    logger.debug(
        "%d segments of %d samples (step %d), %d frequency bins",
        plan.num_segments, plan.window_length, plan.step, selection.num_bins,
    )

    powers = compute_segment_powers(samples, window, plan, selection, max_workers)

    powers, welch_multiplier = welch_average(powers, config.welch_factor)
    if welch_multiplier > 1:
        logger.info("Applied Welch averaging with factor %d", welch_multiplier)

    reference = config.reference_pressure
    if config.analysis_type is AnalysisType.PSD:
        levels = psd_levels(
            powers, selection.delf, window.noise_bandwidth, reference, sensitivity_db
        )
    else:
        levels = broadband_levels(powers, reference, sensitivity_db)

    return assemble_result(
        levels,
        config.analysis_type,
        selection.frequencies,
        row_time_step=plan.step / fs * welch_multiplier,
        start_time=start_time,
    )
