"""
Level Conversion

Converts linear power to calibrated decibel levels.

Non-positive power (silent segments) maps to -inf instead of raising;
consumers have to tolerate infinite levels.
"""

import numpy as np


def power_to_db(value, reference: float):
    """
    10·log10(value / reference²), -inf where value <= 0 or reference <= 0.

    Accepts scalars and arrays; scalars return a float.
    """
    power = np.asarray(value, dtype=np.float64)

    if reference <= 0:
        result = np.full(power.shape, -np.inf)
    else:
        with np.errstate(divide="ignore", invalid="ignore"):
            db = 10 * np.log10(power / reference ** 2)
        result = np.where(power <= 0, -np.inf, db)

    if result.ndim == 0:
        return float(result)
    return result


def psd_levels(
    powers: np.ndarray,
    delf: float,
    noise_bandwidth: float,
    reference: float,
    sensitivity_db: float,
) -> np.ndarray:
    """
    Power spectral density levels in dB re reference²/Hz.

    Args:
        powers: Linear power, Shape: (rows, bins)
        delf: Bin width in Hz
        noise_bandwidth: Noise power bandwidth B of the window
        reference: Reference pressure
        sensitivity_db: System sensitivity S

    Returns:
        Levels, Shape: (rows, bins)
    """
    return power_to_db(powers / (delf * noise_bandwidth), reference) - sensitivity_db


def broadband_levels(
    powers: np.ndarray,
    reference: float,
    sensitivity_db: float,
) -> np.ndarray:
    """
    Broadband level of each row: power summed over all bins before the log.

    Returns:
        Levels, Shape: (rows, 1)
    """
    total = np.sum(powers, axis=1, keepdims=True)
    return power_to_db(total, reference) - sensitivity_db
