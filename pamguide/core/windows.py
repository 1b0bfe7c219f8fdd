"""
Analysis Windows

Generates the alpha-scaled window functions used for spectral estimation.

Technical assumptions:
- Periodic windows from scipy.signal.windows (sym=False), i.e.
  cos(2π·i/N), not cos(2π·i/(N-1))
- Every coefficient is divided by the DC constant alpha of its family,
  so the windowed spectrum keeps the amplitude of the raw signal
- Noise power bandwidth is computed on the scaled window
"""

from dataclasses import dataclass
from enum import Enum
import numpy as np
from scipy import signal


class WindowType(Enum):
    """Supported window families."""
    HANN = "hann"
    HAMMING = "hamming"
    BLACKMAN = "blackman"
    RECTANGULAR = "rectangular"

    @property
    def label(self) -> str:
        """Capitalised name as used in output filenames."""
        return self.value.capitalize()


# DC normalisation constant (coefficient a0) of every family
WINDOW_ALPHA = {
    WindowType.RECTANGULAR: 1.0,
    WindowType.HANN: 0.5,
    WindowType.HAMMING: 0.54,
    WindowType.BLACKMAN: 0.42,
}


@dataclass(frozen=True)
class Window:
    """
    Scaled analysis window.

    Attributes:
        kind: Window family
        coefficients: Alpha-scaled coefficients, Shape: (N,)
        alpha: DC normalisation constant of the family
        noise_bandwidth: B = (1/N)·Σ w[n]² of the scaled window
    """
    kind: WindowType
    coefficients: np.ndarray
    alpha: float
    noise_bandwidth: float

    def __len__(self) -> int:
        return len(self.coefficients)


def raw_window(kind: WindowType, size: int) -> np.ndarray:
    """Unscaled periodic window coefficients of the given family."""
    if kind is WindowType.RECTANGULAR:
        return np.ones(size)
    elif kind is WindowType.HANN:
        return signal.windows.hann(size, sym=False)
    elif kind is WindowType.HAMMING:
        return signal.windows.hamming(size, sym=False)
    elif kind is WindowType.BLACKMAN:
        return signal.windows.blackman(size, sym=False)
    else:
        raise ValueError(f"Unknown window type: {kind}")


def generate_scaled_window(kind: WindowType, size: int) -> tuple[np.ndarray, float]:
    """
    Create a window divided by its alpha constant.

    Args:
        kind: Window family
        size: Window length N in samples (N >= 1)

    Returns:
        Tuple of (scaled coefficients, alpha)
    """
    alpha = WINDOW_ALPHA[kind]
    return raw_window(kind, size) / alpha, alpha


def noise_power_bandwidth(window: np.ndarray, size: int) -> float:
    """Noise power bandwidth B = (1/N)·Σ w[n]² of a (scaled) window."""
    return float(np.sum(np.square(window)) / size)


def generate_window(kind: WindowType, size: int) -> Window:
    """Create the scaled window together with its derived scalars."""
    coefficients, alpha = generate_scaled_window(kind, size)
    coefficients.setflags(write=False)
    return Window(
        kind=kind,
        coefficients=coefficients,
        alpha=alpha,
        noise_bandwidth=noise_power_bandwidth(coefficients, size),
    )
