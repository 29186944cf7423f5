'''Orbital mechanics core for a solar-system orrery
Kepler equation solver'''

import logging
import math
from typing import NamedTuple, Optional

import numpy as np

from .config import config
from .utils import TWO_PI, normalize_angle, validation_error

logger = logging.getLogger(__name__)


class KeplerSolution(NamedTuple):
    """Result of a Newton-Raphson solve of Kepler's equation."""
    eccentric_anomaly: float
    iterations: int
    converged: bool


def _check_eccentricity(e):
    if not np.all(np.isfinite(e)):
        validation_error(f"Eccentricity must be finite, got {e}")
    if np.any(np.asarray(e) < 0) or np.any(np.asarray(e) >= 1):
        validation_error(
            f"Eccentricity must lie in [0, 1) for elliptic orbits, got {e}")


def solve_kepler_detailed(M: float, e: float,
                          tolerance: Optional[float] = None,
                          max_iterations: Optional[int] = None) -> KeplerSolution:
    """
    Solve Kepler's equation E - e·sin(E) = M for the eccentric anomaly.

    The mean anomaly is first wrapped into [0, 2π). Kepler's equation is
    symmetric under M -> 2π - M, E -> 2π - E, so mean anomalies past π are
    mirrored into [0, π] (initial guess 2π - M), solved there and mirrored
    back. The iteration starts from E0 = π instead when e exceeds
    config.HIGH_ECCENTRICITY.

    Parameters
    ----------
    M : float
        Mean anomaly [rad], any real value
    e : float
        Eccentricity, 0 <= e < 1
    tolerance : float, optional
        Stop once |ΔE| < tolerance [rad]. Defaults to config.KEPLER_TOLERANCE
    max_iterations : int, optional
        Iteration cap. Defaults to config.KEPLER_MAX_ITERATIONS

    Returns
    -------
    KeplerSolution
        Eccentric anomaly in [0, 2π], number of iterations used, and whether
        the tolerance was met. When the cap is reached the last estimate is
        returned with converged=False.

    Raises
    ------
    ValueError
        If e is outside [0, 1) or M is not finite
    """
    if tolerance is None:
        tolerance = config.KEPLER_TOLERANCE
    if max_iterations is None:
        max_iterations = config.KEPLER_MAX_ITERATIONS
    if not math.isfinite(M):
        validation_error(f"Mean anomaly must be finite, got {M}")
    _check_eccentricity(e)

    M = normalize_angle(M)
    mirrored = M > math.pi
    if mirrored:
        M = TWO_PI - M

    E = M
    if e > config.HIGH_ECCENTRICITY:
        E = math.pi

    delta = math.inf
    iterations = 0
    while abs(delta) >= tolerance and iterations < max_iterations:
        delta = (E - e * math.sin(E) - M) / (1.0 - e * math.cos(E))
        E -= delta
        iterations += 1

    converged = abs(delta) < tolerance
    if not converged:
        logger.warning(
            "Kepler solver stopped at iteration cap %d (M=%.9g, e=%.9g, "
            "last step %.3g); returning last estimate",
            max_iterations, M, e, abs(delta))

    if mirrored:
        E = TWO_PI - E
    return KeplerSolution(float(E), iterations, converged)


def solve_kepler(M: float, e: float,
                 tolerance: Optional[float] = None,
                 max_iterations: Optional[int] = None) -> float:
    """
    Eccentric anomaly [rad] for mean anomaly M and eccentricity e.

    Shortcut for solve_kepler_detailed(...).eccentric_anomaly. A result that
    hit the iteration cap is a reduced-precision estimate, not an error.
    """
    return solve_kepler_detailed(M, e, tolerance, max_iterations).eccentric_anomaly


def solve_kepler_array(M, e: float,
                       tolerance: Optional[float] = None,
                       max_iterations: Optional[int] = None) -> np.ndarray:
    """
    Vectorized Kepler solve for many mean anomalies sharing one eccentricity.

    Parameters
    ----------
    M : array-like
        Mean anomalies [rad]
    e : float
        Eccentricity, 0 <= e < 1

    Returns
    -------
    np.ndarray
        Eccentric anomalies [rad], same shape as M
    """
    if tolerance is None:
        tolerance = config.KEPLER_TOLERANCE
    if max_iterations is None:
        max_iterations = config.KEPLER_MAX_ITERATIONS
    M = np.asarray(M, dtype=float)
    if not np.all(np.isfinite(M)):
        validation_error("Mean anomalies must be finite")
    _check_eccentricity(e)

    M = np.mod(M, TWO_PI)
    M = np.where(M >= TWO_PI, 0.0, M)
    mirrored = M > np.pi
    M = np.where(mirrored, TWO_PI - M, M)

    if e > config.HIGH_ECCENTRICITY:
        E = np.full_like(M, np.pi)
    else:
        E = M.copy()

    active = np.ones(M.shape, dtype=bool)
    for _ in range(max_iterations):
        delta = (E - e * np.sin(E) - M) / (1.0 - e * np.cos(E))
        E = np.where(active, E - delta, E)
        active &= np.abs(delta) >= tolerance
        if not np.any(active):
            break
    else:
        logger.warning(
            "Vectorized Kepler solver stopped at iteration cap %d with %d "
            "unconverged values (e=%.9g)", max_iterations, int(active.sum()), e)

    return np.where(mirrored, TWO_PI - E, E)


def mean_anomaly(E, e):
    """Mean anomaly from eccentric anomaly (Kepler's equation, forward)."""
    return E - e * np.sin(E)


def true_anomaly(E, e):
    """
    True anomaly from eccentric anomaly.

    Uses the half-angle form, which stays well conditioned near E = π.

    Parameters
    ----------
    E : float or array-like
        Eccentric anomaly [rad]
    e : float
        Eccentricity, 0 <= e < 1

    Returns
    -------
    float or np.ndarray
        True anomaly [rad] in (-π, π]
    """
    half = np.asarray(E, dtype=float) / 2.0
    nu = 2.0 * np.arctan2(np.sqrt(1.0 + e) * np.sin(half),
                          np.sqrt(1.0 - e) * np.cos(half))
    if np.ndim(nu) == 0:
        return float(nu)
    return nu
