"""
Audio I/O Module

Loads mono WAV recordings for level analysis.

Technical assumptions:
- WAV files are loaded with soundfile (libsndfile, no resampling)
- Integer PCM is normalised by soundfile to float64 in [-1.0, 1.0],
  dividing by 2^(bits-1) (16 bit: 1/32768, not 1/32767; about 0.0003 dB)
- Values outside [-1.0, 1.0] (float WAV) are clipped
- Multi-channel files are rejected; there is NO implicit downmix
"""

from dataclasses import dataclass
from pathlib import Path
import numpy as np
import soundfile as sf


@dataclass
class AudioFile:
    """
    A loaded mono recording.

    Attributes:
        data: Samples as float64, Shape: (samples,)
        sample_rate: Sample rate of the file in Hz
        duration_seconds: Duration in seconds
        num_samples: Number of samples
        file_path: Path to source file
    """
    data: np.ndarray
    sample_rate: int
    duration_seconds: float
    num_samples: int
    file_path: Path

    def __post_init__(self):
        if self.data.ndim != 1:
            raise ValueError("Audio data must be 1D (mono)")


def load_audio(file_path: str | Path) -> AudioFile:
    """
    Load a mono WAV file.

    Args:
        file_path: Path to audio file

    Returns:
        AudioFile object with all metadata

    Raises:
        FileNotFoundError: File does not exist
        ValueError: Unsupported format or more than one channel
    """
    path = Path(file_path)

    if not path.exists():
        raise FileNotFoundError(f"Audio file not found: {path}")

    suffix = path.suffix.lower()
    if suffix != ".wav":
        raise ValueError(f"Nicht unterstütztes Format: {suffix}")

    info = sf.info(path)
    if info.channels != 1:
        raise ValueError(
            f"Unsupported channel count: {info.channels}. "
            "Only mono files are currently supported."
        )

    data, sample_rate = sf.read(path, dtype='float64', always_2d=False)
    data = np.clip(data, -1.0, 1.0)

    return AudioFile(
        data=data,
        sample_rate=sample_rate,
        duration_seconds=len(data) / sample_rate,
        num_samples=len(data),
        file_path=path,
    )


def save_audio(
    data: np.ndarray,
    file_path: str | Path,
    sample_rate: int,
    subtype: str = "PCM_24",
) -> None:
    """
    Save mono audio data as WAV file (used for test recordings).

    Raises:
        ValueError: Data is not 1D float
    """
    if data.ndim != 1:
        raise ValueError("Audio must be 1D")
    if not np.issubdtype(data.dtype, np.floating):
        raise ValueError("Audio data must be float")

    if np.any(np.abs(data) > 1.0):
        import warnings
        warnings.warn(
            "Audio data exceeds [-1.0, 1.0]. Clipping will be applied.",
            UserWarning
        )
        data = np.clip(data, -1.0, 1.0)

    sf.write(Path(file_path), data, sample_rate, subtype=subtype)

