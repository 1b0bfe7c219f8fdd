"""
System Sensitivity

Computes the calibration offset S (dB) subtracted from every level.
Depends only on the configuration, never on signal data.

Documented simplification:
- TS mode validates adc_vpeak but does not add 20·log10(1/vADC);
  the ADC term is assumed to be absorbed by sample normalisation
"""

from .config import AnalysisConfig, CalibrationType, Environment
from .errors import ConfigError, MissingCalibrationFieldError

# Air sensitivities are given re 1 V/Pa, water re 1 V/µPa
AIR_SENSITIVITY_SHIFT_DB = -120.0


def _require(config: AnalysisConfig, name: str, mode: str) -> float:
    value = getattr(config, name)
    if value is None:
        raise MissingCalibrationFieldError(name, mode)
    return value


def system_sensitivity_db(config: AnalysisConfig) -> float:
    """
    Overall system sensitivity S in dB.

    - TS: S = Mh + G
    - EE: S = Si
    - RC: S = Si + Mh

    Returns:
        0.0 if calibration is disabled

    Raises:
        MissingCalibrationFieldError: Field required by the mode is absent
        ConfigError: adc_vpeak is not positive (TS)
    """
    if not config.calibrated:
        return 0.0

    cal_type = config.calibration_type
    if cal_type is None:
        raise MissingCalibrationFieldError("calibration_type", "calibrated")
    mode = cal_type.value

    mh = config.mic_hydro_sensitivity
    if mh is not None and config.environment is Environment.AIR:
        mh = mh + AIR_SENSITIVITY_SHIFT_DB

    if cal_type is CalibrationType.TS:
        if mh is None:
            raise MissingCalibrationFieldError("mic_hydro_sensitivity", mode)
        gain = _require(config, "preamp_gain", mode)
        vadc = _require(config, "adc_vpeak", mode)
        if vadc <= 0:
            raise ConfigError("adc_vpeak must be positive")
        return mh + gain
    elif cal_type is CalibrationType.EE:
        return _require(config, "system_sensitivity", mode)
    else:
        si = _require(config, "system_sensitivity", mode)
        if mh is None:
            raise MissingCalibrationFieldError("mic_hydro_sensitivity", mode)
        return si + mh
