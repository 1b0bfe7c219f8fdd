"""
Analysis Configuration

Immutable description of one analysis run and its TOML loader.

All parameters are explicit. Defaults exist only for the DFT settings
(Hann, 1 s, 50 % overlap) and the output switches.
"""

from dataclasses import dataclass, fields
from enum import Enum
from pathlib import Path
from typing import Any, Optional
import tomllib

from .errors import ConfigError
from .segmentation import round_half_up
from .windows import WindowType


class AnalysisType(Enum):
    PSD = "psd"
    BROADBAND = "broadband"

    @property
    def label(self) -> str:
        return "PSD" if self is AnalysisType.PSD else "Broadband"


class Environment(Enum):
    AIR = "air"
    WATER = "wat"


class CalibrationType(Enum):
    """Calibration modes."""
    TS = "TS"  # transducer specifications
    EE = "EE"  # end-to-end system sensitivity
    RC = "RC"  # recorder sensitivity + transducer


class WindowUnit(Enum):
    SECONDS = "seconds"
    SAMPLES = "samples"


# Reference pressure in µPa; sensitivities are handled in dB re 1 V/µPa
REFERENCE_PRESSURE = {
    Environment.AIR: 20.0,
    Environment.WATER: 1.0,
}


@dataclass(frozen=True)
class AnalysisConfig:
    """
    Configuration of an analysis run.

    Attributes:
        analysis_type: PSD (per bin) or broadband (single level)
        environment: Air or water, selects the reference pressure
        low_cutoff: Lower frequency limit in Hz
        high_cutoff: Upper frequency limit in Hz
        calibrated: Apply system sensitivity
        calibration_type: TS, EE or RC (required if calibrated)
        mic_hydro_sensitivity: dB re 1 V/µPa (water) or 1 V/Pa (air)
        preamp_gain: Preamplifier gain in dB
        adc_vpeak: ADC peak voltage in V
        system_sensitivity: End-to-end or recorder sensitivity in dB
        window_type: Window family
        window_length: Window length in window_unit
        window_unit: Seconds or samples
        overlap_percentage: Segment overlap in [0, 100)
        welch_factor: Segments per Welch average (None = off)
        timestamp_format: strptime format of the filename timestamp
    """
    analysis_type: AnalysisType
    environment: Environment
    low_cutoff: float
    high_cutoff: float
    input_path: str = ""
    output_dir: str = "."
    write_csv: bool = True
    create_batch_summary_file: bool = True
    write_individual_batch_csvs: bool = False
    calibrated: bool = False
    calibration_type: Optional[CalibrationType] = None
    mic_hydro_sensitivity: Optional[float] = None
    preamp_gain: Optional[float] = None
    adc_vpeak: Optional[float] = None
    system_sensitivity: Optional[float] = None
    window_type: WindowType = WindowType.HANN
    window_length: float = 1.0
    window_unit: WindowUnit = WindowUnit.SECONDS
    overlap_percentage: float = 50.0
    welch_factor: Optional[int] = None
    timestamp_format: Optional[str] = None

    @property
    def overlap_ratio(self) -> float:
        """Overlap as fraction."""
        return self.overlap_percentage / 100.0

    @property
    def reference_pressure(self) -> float:
        return REFERENCE_PRESSURE[self.environment]

    def window_samples(self, sample_rate: float) -> int:
        """Window length in samples for the given sample rate."""
        if self.window_unit is WindowUnit.SAMPLES:
            return int(self.window_length)
        return round_half_up(self.window_length * sample_rate)


_ENUM_FIELDS = {
    "analysis_type": AnalysisType,
    "environment": Environment,
    "calibration_type": CalibrationType,
    "window_type": WindowType,
    "window_unit": WindowUnit,
}

_REQUIRED_FIELDS = ("analysis_type", "environment", "low_cutoff", "high_cutoff")

_NUMBER_FIELDS = (
    "low_cutoff", "high_cutoff", "mic_hydro_sensitivity", "preamp_gain",
    "adc_vpeak", "system_sensitivity", "window_length", "overlap_percentage",
)
_BOOL_FIELDS = (
    "write_csv", "create_batch_summary_file", "write_individual_batch_csvs",
    "calibrated",
)
_STRING_FIELDS = ("input_path", "output_dir", "timestamp_format")

# Fields each calibration mode needs, in reporting order
CALIBRATION_FIELDS = {
    CalibrationType.TS: ("mic_hydro_sensitivity", "preamp_gain", "adc_vpeak"),
    CalibrationType.EE: ("system_sensitivity",),
    CalibrationType.RC: ("mic_hydro_sensitivity", "system_sensitivity"),
}


def _parse_enum(enum_type: type[Enum], key: str, value: Any) -> Enum:
    text = str(value)
    for member in enum_type:
        if member.value.lower() == text.lower():
            return member
    options = ", ".join(m.value for m in enum_type)
    raise ConfigError(f"Invalid {key} '{value}'. Options: {options}")


def _check_scalars(values: dict[str, Any]) -> None:
    """Reject values of the wrong TOML type; integers are widened to float."""
    for key in _NUMBER_FIELDS:
        value = values.get(key)
        if value is None:
            continue
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ConfigError(f"{key} must be a number, got {value!r}")
        values[key] = float(value)

    for key in _BOOL_FIELDS:
        if key in values and not isinstance(values[key], bool):
            raise ConfigError(f"{key} must be true or false, got {values[key]!r}")

    for key in _STRING_FIELDS:
        value = values.get(key)
        if value is not None and not isinstance(value, str):
            raise ConfigError(f"{key} must be a string, got {value!r}")


def config_from_dict(values: dict[str, Any]) -> AnalysisConfig:
    """
    Build and validate a configuration from a plain mapping.

    Raises:
        ConfigError: Unknown keys, missing keys or invalid values
    """
    known = {f.name for f in fields(AnalysisConfig)}
    unknown = sorted(set(values) - known)
    if unknown:
        raise ConfigError(f"Unknown configuration keys: {', '.join(unknown)}")

    missing = [key for key in _REQUIRED_FIELDS if key not in values]
    if missing:
        raise ConfigError(f"Missing required settings: {', '.join(missing)}")

    parsed = dict(values)
    _check_scalars(parsed)
    for key, enum_type in _ENUM_FIELDS.items():
        if parsed.get(key) is not None:
            parsed[key] = _parse_enum(enum_type, key, parsed[key])

    try:
        config = AnalysisConfig(**parsed)
    except TypeError as e:
        raise ConfigError(str(e)) from e

    validate_config(config)
    return config


def validate_config(config: AnalysisConfig) -> None:
    """Check the invariants of a configuration."""
    if config.calibrated:
        if config.calibration_type is None:
            raise ConfigError("Calibration type must be specified when calibrated=true")
        required = CALIBRATION_FIELDS[config.calibration_type]
        absent = [name for name in required if getattr(config, name) is None]
        if absent:
            raise ConfigError(
                f"{', '.join(absent)} must be set for "
                f"{config.calibration_type.value} calibration type"
            )
        if config.calibration_type is CalibrationType.TS and config.adc_vpeak <= 0:
            raise ConfigError("adc_vpeak must be positive")

    if not 0.0 <= config.overlap_percentage < 100.0:
        raise ConfigError("overlap_percentage must be between 0.0 and 99.9")
    if config.low_cutoff >= config.high_cutoff:
        raise ConfigError("low_cutoff must be less than high_cutoff")
    if config.window_length <= 0:
        raise ConfigError("window_length must be positive")
    if config.welch_factor is not None and (
        isinstance(config.welch_factor, bool) or not isinstance(config.welch_factor, int)
    ):
        raise ConfigError("welch_factor must be an integer")


def load_config(path: str | Path) -> AnalysisConfig:
    """
    Load configuration from a TOML file.

    Raises:
        FileNotFoundError: File does not exist
        ConfigError: Invalid TOML or invalid settings
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    try:
        with open(path, "rb") as f:
            values = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e

    return config_from_dict(values)
