"""
Error taxonomy of the analysis engine.

All core errors derive from ValueError so that callers which only know
about "bad input" can still catch them.
"""


class AnalysisError(ValueError):
    """Base class for errors raised while analysing a single file."""


class InvalidWindowError(AnalysisError):
    """Window length is zero or longer than the signal."""


class ZeroStepError(AnalysisError):
    """Overlap rounds the segment step size down to zero samples."""


class SignalTooShortError(AnalysisError):
    """Signal does not contain a single complete segment."""


class InvalidFrequencyRangeError(AnalysisError):
    """Cutoff frequencies do not select any frequency bin."""


class MissingCalibrationFieldError(AnalysisError):
    """A field required by the selected calibration mode is absent."""

    def __init__(self, field_name: str, mode: str):
        self.field_name = field_name
        self.mode = mode
        super().__init__(f"{field_name} is required for {mode} calibration")


class ColumnMismatchError(AnalysisError):
    """PSD results with different frequency columns cannot be concatenated."""


class ConfigError(ValueError):
    """Configuration file could not be parsed or failed validation."""
