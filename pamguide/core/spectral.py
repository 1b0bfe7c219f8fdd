"""
Spectral Estimation Module

Computes single-sided power spectra of windowed segments and maps
cutoff frequencies to spectrum bins.

Technical assumptions:
- Full complex DFT of length N via scipy.fft (any N, not only powers of 2)
- Single-sided spectrum uses bins 1..N/2 inclusive; the DC bin is dropped
- Every retained bin is doubled, including the Nyquist bin for even N
- The frequency axis is linspace(0, fs/2, N/2 + 1); spectrum bin j maps
  to axis point j + 1
"""

from dataclasses import dataclass
import numpy as np
from scipy import fft

from .errors import InvalidFrequencyRangeError


@dataclass(frozen=True)
class FrequencySelection:
    """
    Selected sub-range of the single-sided power spectrum.

    Attributes:
        low_index: First selected spectrum bin (inclusive)
        high_index: Last selected spectrum bin (inclusive)
        frequencies: Frequencies of the selected bins in Hz
        delf: Bin width fs/N in Hz
    """
    low_index: int
    high_index: int
    frequencies: np.ndarray
    delf: float

    @property
    def slice(self) -> slice:
        """Slice into a single-sided power spectrum."""
        return slice(self.low_index, self.high_index + 1)

    @property
    def num_bins(self) -> int:
        return self.high_index - self.low_index + 1


def compute_spectrum(segment: np.ndarray) -> np.ndarray:
    """
    Forward DFT of a (windowed) segment.

    Args:
        segment: Real samples, Shape: (N,)

    Returns:
        Complex spectrum, Shape: (N,)
    """
    return fft.fft(segment)


def single_sided_power(spectrum: np.ndarray) -> np.ndarray:
    """
    Linear single-sided power spectrum P[k] = 2·|X[k]|²/N² for k = 1..N/2.

    Returns:
        Power values, Shape: (N/2,)
    """
    n = len(spectrum)
    return np.abs(spectrum[1:n // 2 + 1]) ** 2 / n ** 2 * 2.0


def spectrum_frequencies(sample_rate: float, window_length: int) -> np.ndarray:
    """Frequencies of the single-sided power spectrum bins."""
    axis = np.linspace(0.0, sample_rate / 2, window_length // 2 + 1)
    return axis[1:]


def select_frequency_range(
    sample_rate: float,
    window_length: int,
    low_cutoff: float,
    high_cutoff: float,
) -> FrequencySelection:
    """
    Map cutoff frequencies to an inclusive range of spectrum bins.

    The low index is the first bin at or above low_cutoff (0 if none),
    the high index the last bin at or below high_cutoff (last bin if none).

    Raises:
        InvalidFrequencyRangeError: Low index lies above high index
    """
    freqs = spectrum_frequencies(sample_rate, window_length)

    above = np.flatnonzero(freqs >= low_cutoff)
    below = np.flatnonzero(freqs <= high_cutoff)
    low_index = int(above[0]) if len(above) else 0
    high_index = int(below[-1]) if len(below) else len(freqs) - 1

    if low_index > high_index:
        raise InvalidFrequencyRangeError(
            f"Low cutoff {low_cutoff} Hz is >= high cutoff {high_cutoff} Hz "
            f"after mapping to FFT bins"
        )

    selected = freqs[low_index:high_index + 1].copy()
    selected.setflags(write=False)
    return FrequencySelection(
        low_index=low_index,
        high_index=high_index,
        frequencies=selected,
        delf=sample_rate / window_length,
    )
