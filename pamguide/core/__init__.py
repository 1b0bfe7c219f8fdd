"""
Core analysis module - fully testable without file output.

This module contains all signal processing logic:
- Window generation and noise power bandwidth
- Segmentation and parallel spectral estimation
- Welch time averaging
- Calibration and level conversion
- Result matrix assembly and batch concatenation
"""

from .analysis import analyze_file
from .audio_io import AudioFile, load_audio
from .calibration import system_sensitivity_db
from .config import (
    AnalysisConfig,
    AnalysisType,
    CalibrationType,
    Environment,
    WindowUnit,
    load_config,
)
from .errors import (
    AnalysisError,
    ColumnMismatchError,
    ConfigError,
    InvalidFrequencyRangeError,
    InvalidWindowError,
    MissingCalibrationFieldError,
    SignalTooShortError,
    ZeroStepError,
)
from .levels import power_to_db
from .results import ResultMatrix, concatenate
from .windows import Window, WindowType, generate_window

__all__ = [
    "analyze_file",
    "AudioFile",
    "load_audio",
    "system_sensitivity_db",
    "AnalysisConfig",
    "AnalysisType",
    "CalibrationType",
    "Environment",
    "WindowUnit",
    "load_config",
    "AnalysisError",
    "ColumnMismatchError",
    "ConfigError",
    "InvalidFrequencyRangeError",
    "InvalidWindowError",
    "MissingCalibrationFieldError",
    "SignalTooShortError",
    "ZeroStepError",
    "power_to_db",
    "ResultMatrix",
    "concatenate",
    "Window",
    "WindowType",
    "generate_window",
]
