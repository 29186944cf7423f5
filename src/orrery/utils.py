"""
Utility functions and constants for the Orrery package.
"""

import warnings

import numpy as np

from .config import config

# Length and time constants
AU_KM = 149597870.7          # kilometres per astronomical unit
AU_M = 149597870700.0        # metres per astronomical unit
SECONDS_PER_DAY = 86400.0
DAYS_PER_YEAR = 365.25       # Julian year
TWO_PI = 2.0 * np.pi


def normalize_angle(angle: float) -> float:
    """
    Wrap an angle into [0, 2π).

    Parameters
    ----------
    angle : float
        Angle in radians, any real value

    Returns
    -------
    float
        Equivalent angle in [0, 2π)
    """
    wrapped = angle % TWO_PI
    # float modulo can round up to exactly 2π for tiny negative inputs
    if wrapped >= TWO_PI:
        wrapped = 0.0
    return float(wrapped)


def normalize_degrees(angle: float) -> float:
    """Wrap an angle in degrees into [0, 360)."""
    wrapped = angle % 360.0
    if wrapped >= 360.0:
        wrapped = 0.0
    return float(wrapped)


def validation_error(message: str):
    """
    Reject invalid orbital input.

    Raises ValueError under config.STRICT_VALIDATION (the default); otherwise
    issues a UserWarning pointing at the caller of the checking routine
    (OrbitalElements construction or a Kepler solve) and lets it continue.
    """
    if config.STRICT_VALIDATION:
        raise ValueError(message)
    else:
        warnings.warn(message, UserWarning, stacklevel=3)
