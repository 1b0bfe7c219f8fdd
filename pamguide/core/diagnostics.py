"""
Broadband Diagnostics

Step-by-step walkthrough of the broadband computation for one signal.
Every intermediate value (window scalars, bin selection, first segment,
segment power statistics) is collected so that level discrepancies
against reference tools can be traced.
"""

from dataclasses import dataclass
import numpy as np

from .calibration import system_sensitivity_db
from .config import AnalysisConfig
from .levels import power_to_db
from .segmentation import compute_segment_powers, plan_segments
from .signal_processing import SignalStatistics, compute_statistics
from .spectral import compute_spectrum, select_frequency_range, single_sided_power
from .windows import generate_window

NUM_PREVIEW_VALUES = 5


@dataclass(frozen=True)
class BroadbandDiagnostics:
    sample_rate: float
    num_samples: int
    raw_statistics: SignalStatistics
    sensitivity_db: float
    window_length: int
    step: int
    num_segments: int
    alpha: float
    noise_bandwidth: float
    window_preview: np.ndarray
    delf: float
    low_index: int
    high_index: int
    low_frequency: float
    high_frequency: float
    reference_pressure: float
    windowed_statistics: SignalStatistics
    spectrum_preview: np.ndarray
    power_preview: np.ndarray
    first_segment_power: float
    first_segment_level: float
    segment_powers: np.ndarray

    @property
    def mean_power(self) -> float:
        return float(np.mean(self.segment_powers))

    @property
    def mean_level(self) -> float:
        """Level of the mean segment power, after sensitivity."""
        return power_to_db(self.mean_power, self.reference_pressure) - self.sensitivity_db

    def format_report(self) -> str:
        """Human-readable report of all intermediate values."""
        raw = self.raw_statistics
        win = self.windowed_statistics
        lines = [
            "=== BROADBAND ANALYSIS TEST ===",
            f"  Sample rate: {self.sample_rate:g} Hz",
            f"  Number of samples: {self.num_samples}",
            f"  Duration: {self.num_samples / self.sample_rate:.2f} seconds",
            "",
            "RAW AUDIO DATA STATISTICS:",
            f"  Min: {raw.minimum}",
            f"  Max: {raw.maximum}",
            f"  Mean: {raw.mean}",
            f"  RMS: {raw.rms}",
            "",
            "SYSTEM SENSITIVITY:",
            f"  S = {self.sensitivity_db:.2f} dB",
            "",
            "WINDOW PARAMETERS:",
            f"  Window length: {self.window_length} samples "
            f"({self.window_length / self.sample_rate:.4f} seconds)",
            f"  Step size: {self.step} samples",
            f"  Number of segments: {self.num_segments}",
            f"  Alpha (scaling factor): {self.alpha:.4f}",
            f"  Noise power bandwidth (B): {self.noise_bandwidth:.6f}",
        ]
        lines += [f"    w[{i}] = {w:.6f}" for i, w in enumerate(self.window_preview)]
        lines += [
            "",
            "FREQUENCY PARAMETERS:",
            f"  Frequency bin width (delf): {self.delf:.4f} Hz",
            f"  Low cutoff index: {self.low_index} ({self.low_frequency:.2f} Hz)",
            f"  High cutoff index: {self.high_index} ({self.high_frequency:.2f} Hz)",
            f"  Number of selected frequency bins: {self.high_index - self.low_index + 1}",
            "",
            "REFERENCE PRESSURE:",
            f"  pref = {self.reference_pressure:.6e}",
            "",
            "FIRST SEGMENT:",
            f"  Windowed min/max/mean/RMS: {win.minimum} / {win.maximum} / "
            f"{win.mean} / {win.rms}",
        ]
        lines += [
            f"    X[{i}] = {x.real:.6f} + {x.imag:.6f}i (|X| = {abs(x):.6f})"
            for i, x in enumerate(self.spectrum_preview)
        ]
        lines += [f"    P[{i}] = {p:.6e}" for i, p in enumerate(self.power_preview)]
        lines += [
            f"  Sum of power: {self.first_segment_power:.6e}",
            f"  Broadband level: {self.first_segment_level:.2f} dB",
            "",
            "ALL SEGMENTS:",
            f"  Min power: {np.min(self.segment_powers):.6e}",
            f"  Max power: {np.max(self.segment_powers):.6e}",
            f"  Mean power: {self.mean_power:.6e}",
            f"  Mean broadband level: {self.mean_level:.2f} dB",
        ]
        return "\n".join(lines)


def broadband_diagnostics(
    samples: np.ndarray,
    sample_rate: int,
    config: AnalysisConfig,
) -> BroadbandDiagnostics:
    """
    Run the broadband computation and keep every intermediate value.

    Raises:
        AnalysisError: Same failures as analyze_file
    """
    samples = np.asarray(samples, dtype=np.float64)
    fs = float(sample_rate)
    sensitivity_db = system_sensitivity_db(config)

    window_length = config.window_samples(fs)
    plan = plan_segments(len(samples), window_length, config.overlap_ratio)
    window = generate_window(config.window_type, window_length)
    selection = select_frequency_range(
        fs, window_length, config.low_cutoff, config.high_cutoff
    )
    reference = config.reference_pressure

    start, end = plan.bounds(0)
    windowed = samples[start:end] * window.coefficients
    spectrum = compute_spectrum(windowed)
    selected_power = single_sided_power(spectrum)[selection.slice]
    first_power = float(np.sum(selected_power))

    powers = compute_segment_powers(samples, window, plan, selection)

    return BroadbandDiagnostics(
        sample_rate=fs,
        num_samples=len(samples),
        raw_statistics=compute_statistics(samples),
        sensitivity_db=sensitivity_db,
        window_length=window_length,
        step=plan.step,
        num_segments=plan.num_segments,
        alpha=window.alpha,
        noise_bandwidth=window.noise_bandwidth,
        window_preview=window.coefficients[:NUM_PREVIEW_VALUES].copy(),
        delf=selection.delf,
        low_index=selection.low_index,
        high_index=selection.high_index,
        low_frequency=float(selection.frequencies[0]),
        high_frequency=float(selection.frequencies[-1]),
        reference_pressure=reference,
        windowed_statistics=compute_statistics(windowed),
        spectrum_preview=spectrum[:NUM_PREVIEW_VALUES].copy(),
        power_preview=selected_power[:NUM_PREVIEW_VALUES].copy(),
        first_segment_power=first_power,
        first_segment_level=power_to_db(first_power, reference) - sensitivity_db,
        segment_powers=np.sum(powers, axis=1),
    )
