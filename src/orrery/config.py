"""
Global Configuration for Orrery Package
=======================================

This module provides package-wide configuration settings that users can modify
to control solver tolerances, validation behavior, and default plotting options.

Examples
--------
View current configuration:

>>> import orrery
>>> print(orrery.config)

Modify settings:

>>> orrery.config.KEPLER_TOLERANCE = 1e-12  # Tighter Newton-Raphson stop
>>> orrery.config.DEFAULT_ORBIT_POINTS = 512  # Smoother orbit lines

Reset to defaults:

>>> orrery.config.reset()

Temporarily modify settings:

>>> with orrery.temp_config(STRICT_VALIDATION=False):
...     # Invalid elements warn instead of raising for this block only
...     orrery.OE(a=1.0, e=1.2)

Notes
-----
These settings affect package-wide behavior. Modifying them will impact
all subsequent operations until changed again or reset.
"""

from dataclasses import dataclass
from contextlib import contextmanager


@dataclass
class OrreryConfig:
    """
    Global configuration for Orrery package.

    Attributes
    ----------
    KEPLER_TOLERANCE : float
        Newton-Raphson stopping threshold on the eccentric anomaly step [rad].
        Default: 1e-8
    KEPLER_MAX_ITERATIONS : int
        Iteration cap for the Kepler solver. Reaching it returns the last
        estimate rather than failing.
        Default: 100
    HIGH_ECCENTRICITY : float
        Above this eccentricity the solver starts from E = pi.
        Default: 0.8
    EQUALITY_RTOL : float
        Relative tolerance for floating-point equality comparisons.
        Default: 1e-12
    EQUALITY_ATOL : float
        Absolute tolerance for floating-point equality comparisons.
        Default: 1e-14
    STRICT_VALIDATION : bool
        If True, validation failures raise exceptions.
        If False, validation failures issue warnings.
        Default: True
    DEFAULT_ORBIT_POINTS : int
        Default number of samples along one orbital period.
        Default: 256
    DEFAULT_ORBIT_COLOR : str
        Default color for orbit lines in plots.
        Default: 'white'
    DEFAULT_ORBIT_OPACITY : float
        Default opacity for orbit lines (0.0 to 1.0).
        Default: 0.3
    DEFAULT_MARKER_SIZE : int
        Default marker size for body positions in plots.
        Default: 6
    """

    # Kepler solver
    KEPLER_TOLERANCE: float = 1e-8
    KEPLER_MAX_ITERATIONS: int = 100
    HIGH_ECCENTRICITY: float = 0.8

    # Numerical tolerance for equality comparisons
    EQUALITY_RTOL: float = 1e-12
    EQUALITY_ATOL: float = 1e-14

    # Validation behavior
    STRICT_VALIDATION: bool = True

    # Plotting defaults
    DEFAULT_ORBIT_POINTS: int = 256
    DEFAULT_ORBIT_COLOR: str = 'white'
    DEFAULT_ORBIT_OPACITY: float = 0.3
    DEFAULT_MARKER_SIZE: int = 6

    def reset(self):
        """
        Reset all configuration values to package defaults.

        Examples
        --------
        >>> import orrery
        >>> orrery.config.KEPLER_MAX_ITERATIONS = 5  # Modify
        >>> orrery.config.reset()  # Back to defaults
        >>> orrery.config.KEPLER_MAX_ITERATIONS
        100
        """
        defaults = OrreryConfig()
        for key in self.__dataclass_fields__:
            setattr(self, key, getattr(defaults, key))

    def __repr__(self):
        """Return formatted string showing all configuration values."""
        lines = ["OrreryConfig:"]
        lines.append("  Kepler Solver:")
        lines.append(f"    KEPLER_TOLERANCE = {self.KEPLER_TOLERANCE}")
        lines.append(f"    KEPLER_MAX_ITERATIONS = {self.KEPLER_MAX_ITERATIONS}")
        lines.append(f"    HIGH_ECCENTRICITY = {self.HIGH_ECCENTRICITY}")
        lines.append("  Numerical Tolerances:")
        lines.append(f"    EQUALITY_RTOL = {self.EQUALITY_RTOL}")
        lines.append(f"    EQUALITY_ATOL = {self.EQUALITY_ATOL}")
        lines.append("  Behavior:")
        lines.append(f"    STRICT_VALIDATION = {self.STRICT_VALIDATION}")
        lines.append("  Plotting:")
        lines.append(f"    DEFAULT_ORBIT_POINTS = {self.DEFAULT_ORBIT_POINTS}")
        lines.append(f"    DEFAULT_ORBIT_COLOR = '{self.DEFAULT_ORBIT_COLOR}'")
        lines.append(f"    DEFAULT_ORBIT_OPACITY = {self.DEFAULT_ORBIT_OPACITY}")
        lines.append(f"    DEFAULT_MARKER_SIZE = {self.DEFAULT_MARKER_SIZE}")
        return "\n".join(lines)


# Global configuration instance
config = OrreryConfig()


@contextmanager
def temp_config(**kwargs):
    """
    Context manager for temporarily modifying configuration values.

    Configuration is automatically restored when the context exits,
    even if an exception occurs.

    Parameters
    ----------
    **kwargs
        Configuration attributes to temporarily modify.

    Examples
    --------
    >>> import orrery
    >>> with orrery.temp_config(KEPLER_MAX_ITERATIONS=3):
    ...     E = orrery.solve_kepler(2.0, 0.95)  # Coarse estimate
    >>> # Original config restored here
    >>> orrery.config.KEPLER_MAX_ITERATIONS
    100

    Raises
    ------
    AttributeError
        If an invalid configuration attribute is specified.
    """
    old_values = {}
    for key, value in kwargs.items():
        if key not in config.__dataclass_fields__:
            raise AttributeError(
                f"OrreryConfig has no attribute '{key}'. "
                f"Valid attributes: {list(config.__dataclass_fields__.keys())}"
            )
        old_values[key] = getattr(config, key)
        setattr(config, key, value)

    try:
        yield config
    finally:
        for key, value in old_values.items():
            setattr(config, key, value)
