'''Orbital mechanics core for a solar-system orrery
OrbitalElements class definition'''

import numpy as np
from enum import Enum
from typing import Optional, Union

from .config import config
from .utils import AU_KM, AU_M, DAYS_PER_YEAR, validation_error


# define an enumerated list of length units
class DistanceUnit(Enum):
    AU = 'au'       # heliocentric elements
    KM = 'km'       # planetocentric elements
    M = 'm'         # render output

    @property
    def meters(self) -> float:
        """Length of one unit in metres"""
        return _UNIT_METERS[self]

    @classmethod
    def parse(cls, unit):
        """Convert string or enum to DistanceUnit enum"""
        if isinstance(unit, DistanceUnit):
            return unit
        elif isinstance(unit, str):
            unit_map = {
                'au': cls.AU,
                'AU': cls.AU,
                'km': cls.KM,
                'kilometers': cls.KM,
                'm': cls.M,
                'meters': cls.M,
            }
            if unit in unit_map:
                return unit_map[unit]
            raise ValueError(f"Unknown distance unit '{unit}'. "
                             f"Use: {list(unit_map.keys())}")
        else:
            raise TypeError(f"unit must be DistanceUnit or str, got {type(unit)}")


_UNIT_METERS = {
    DistanceUnit.AU: AU_M,
    DistanceUnit.KM: 1000.0,
    DistanceUnit.M: 1.0,
}


def convert_length(value, from_unit, to_unit):
    """
    Convert a length (scalar or array) between distance units.

    Parameters
    ----------
    value : float or array-like
    from_unit, to_unit : DistanceUnit or str

    Returns
    -------
    float or np.ndarray
    """
    from_unit = DistanceUnit.parse(from_unit)
    to_unit = DistanceUnit.parse(to_unit)
    if from_unit == to_unit:
        return value
    if {from_unit, to_unit} == {DistanceUnit.AU, DistanceUnit.KM}:
        # exact km/AU factor avoids a round trip through metres
        factor = AU_KM if from_unit == DistanceUnit.AU else 1.0 / AU_KM
        return np.asarray(value) * factor if np.ndim(value) else value * factor
    factor = from_unit.meters / to_unit.meters
    return np.asarray(value) * factor if np.ndim(value) else value * factor


class OrbitalElements:
    """
    Fixed (non-precessing) Keplerian elements of one body at the J2000 epoch.

    Angles are stored in degrees. The canonical orientation set is
    (inclination, longitude of perihelion, longitude of ascending node);
    use from_argument_of_perihelion() for catalogs that supply the argument
    of perihelion instead. OrbitalElements is immutable, create a new
    instance to change a value.

    Parameters
    ----------
    a : float
        Semi-major axis, in `unit`
    e : float, optional
        Eccentricity, 0 <= e < 1 (default 0)
    i : float, optional
        Inclination [deg] (default 0)
    varpi : float, optional
        Longitude of perihelion [deg] (default 0)
    node : float, optional
        Longitude of ascending node [deg] (default 0)
    L : float, optional
        Mean longitude at epoch [deg] (default 0)
    period : float, optional
        Orbital period [days]. Negative values encode retrograde motion.
        If omitted, derived from Kepler's third law, which assumes a solar
        primary and requires AU elements.
    unit : DistanceUnit or str, optional
        Length unit of `a` ('au' default, 'km' for moons)
    parent : str, optional
        Id of the body this one orbits; None means the system origin
    validate : bool, optional
        Whether to validate elements (default True)
    """
    # ========== CONSTRUCTION ==========
    def __init__(self, a, e=0.0, i=0.0, varpi=0.0, node=0.0, L=0.0,
                 period=None, unit=DistanceUnit.AU, parent=None, validate=True):
        self.elements = np.array([a, e, i, varpi, node, L], dtype=float)
        # Ensure immutability of elements array
        self.elements.flags.writeable = False
        self._period = None if period is None else float(period)
        self._unit = DistanceUnit.parse(unit)
        self._parent = parent
        # run validation checks on input parameters (if not flagged otherwise)
        if validate:
            self._validate()

    @classmethod
    def from_argument_of_perihelion(cls, a, e=0.0, i=0.0, w=0.0, node=0.0,
                                    M0=None, L=None, **kwargs):
        """
        Create elements from the argument-of-perihelion form.

        Parameters
        ----------
        w : float
            Argument of perihelion [deg]
        node : float
            Longitude of ascending node [deg]
        M0 : float, optional
            Mean anomaly at epoch [deg]. Mutually exclusive with L.
        L : float, optional
            Mean longitude at epoch [deg]
        **kwargs
            Passed through (period, unit, parent, validate)
        """
        if M0 is not None and L is not None:
            raise ValueError("Provide either M0 or L, not both")
        varpi = w + node
        if M0 is not None:
            L = M0 + varpi
        elif L is None:
            L = 0.0
        return cls(a, e=e, i=i, varpi=varpi, node=node, L=L, **kwargs)

    @classmethod
    def from_dict(cls, data, validate=True):
        """
        Create elements from a catalog-style mapping.

        Recognised keys are the short constructor names (a, e, i, varpi,
        node, L, period, unit, parent) or their long forms
        (semi_major_axis, eccentricity, inclination, longitude_of_perihelion,
        longitude_of_ascending_node, mean_longitude_at_epoch, orbital_period).
        Missing optional fields take their documented defaults.
        """
        aliases = {
            'semi_major_axis': 'a',
            'eccentricity': 'e',
            'inclination': 'i',
            'longitude_of_perihelion': 'varpi',
            'longitude_of_ascending_node': 'node',
            'mean_longitude_at_epoch': 'L',
            'orbital_period': 'period',
        }
        known = {'a', 'e', 'i', 'varpi', 'node', 'L', 'period', 'unit', 'parent'}
        kwargs = {}
        for key, value in data.items():
            name = aliases.get(key, key)
            if name not in known:
                raise ValueError(f"Unknown orbital element field '{key}'")
            if value is not None:
                kwargs[name] = value
        if 'a' not in kwargs:
            raise ValueError("Orbital elements require a semi-major axis")
        return cls(validate=validate, **kwargs)

    @classmethod
    def from_dataframe(cls, df, unit=DistanceUnit.AU, validate=True):
        """
        Create list of OrbitalElements from pandas DataFrame.

        Parameters
        ----------
        df : pd.DataFrame
            One row per body with columns a, e, i, varpi, node, L and
            optionally period and parent
        unit : DistanceUnit or str, optional
            Length unit of column a
        validate : bool, optional, defaults to True

        Returns
        -------
        list of OrbitalElements
        """
        required = ['a', 'e', 'i', 'varpi', 'node', 'L']
        missing = [c for c in required if c not in df.columns]
        if missing:
            raise ValueError(f"DataFrame is missing element columns {missing}")
        orbits = []
        for _, row in df.iterrows():
            period = row['period'] if 'period' in df.columns else None
            if period is not None and np.isnan(period):
                period = None
            parent = row['parent'] if 'parent' in df.columns else None
            if not isinstance(parent, str):
                parent = None
            orbits.append(cls(*(row[c] for c in required), period=period,
                              unit=unit, parent=parent, validate=validate))
        return orbits

    # ========== VALIDATION ==========
    def _validate(self):
        """Check that the elements describe a bound, finite orbit
        If validation fails inappropriately, set validate=False for constructor
        """
        if not np.all(np.isfinite(self.elements)):
            validation_error("Elements contain NaN or Inf")
            return
        a, e, i, varpi, node, L = self.elements
        if a <= 0:
            validation_error(f"Semi-major axis must be positive, got a={a}")
        if e < 0 or e >= 1:
            validation_error(
                f"Eccentricity must lie in [0, 1) for elliptic orbits, got e={e}")
        if i < 0 or i > 180:
            validation_error(f"Inclination out of range [0, 180] deg, got i={i}")
        if self._period is not None:
            if not np.isfinite(self._period) or self._period == 0:
                validation_error(
                    f"Orbital period must be finite and nonzero, got {self._period}")
        elif self._unit != DistanceUnit.AU:
            validation_error(
                f"Elements in {self._unit.value} need an explicit orbital period; "
                f"Kepler's third law derivation assumes AU about the Sun")

    # ========== PROPERTY ACCESS ==========
    @property
    def a(self):
        """Semi-major axis [unit]"""
        return self.elements[0]

    @property
    def e(self):
        """Eccentricity"""
        return self.elements[1]

    @property
    def i(self):
        """Inclination [deg]"""
        return self.elements[2]

    @property
    def varpi(self):
        """Longitude of perihelion [deg]"""
        return self.elements[3]

    @property
    def node(self):
        """Longitude of ascending node [deg]"""
        return self.elements[4]

    @property
    def L(self):
        """Mean longitude at epoch [deg]"""
        return self.elements[5]

    # long-form names
    semi_major_axis = a
    eccentricity = e
    inclination = i
    longitude_of_perihelion = varpi
    longitude_of_ascending_node = node
    mean_longitude_at_epoch = L

    @property
    def argument_of_perihelion(self):
        """Argument of perihelion ω = ϖ - Ω [deg]"""
        return self.varpi - self.node

    @property
    def mean_anomaly_at_epoch(self):
        """Mean anomaly at epoch M0 = L - ϖ [deg]"""
        return self.L - self.varpi

    @property
    def orbital_period(self) -> Optional[float]:
        """Orbital period as supplied [days], or None"""
        return self._period

    @property
    def unit(self) -> DistanceUnit:
        """Length unit of the semi-major axis"""
        return self._unit

    @property
    def parent(self) -> Optional[str]:
        """Id of the primary this body orbits (None for the system origin)"""
        return self._parent

    @property
    def is_retrograde(self) -> bool:
        """True when a negative period encodes retrograde motion"""
        return self._period is not None and self._period < 0

    # ========== ORBITAL PROPERTIES ==========
    def period(self) -> float:
        """
        Resolve the orbital period [days].

        Uses the supplied period when present, otherwise Kepler's third law
        for a solar primary, P = a^1.5 × 365.25 with a in AU.
        """
        if self._period is not None:
            return self._period
        a_au = self.a if self._unit == DistanceUnit.AU else \
            convert_length(float(self.a), self._unit, DistanceUnit.AU)
        return float(a_au ** 1.5 * DAYS_PER_YEAR)

    def mean_motion(self) -> float:
        """
        Mean motion n = 2π / P [rad/day]

        Negative for retrograde (negative period) orbits.
        """
        return 2 * np.pi / self.period()

    def perihelion_distance(self) -> float:
        """Closest approach q = a(1 - e) [unit]"""
        return self.a * (1 - self.e)

    def aphelion_distance(self) -> float:
        """Farthest distance Q = a(1 + e) [unit]"""
        return self.a * (1 + self.e)

    # ========== UTILITY METHODS ==========
    def copy(self):
        """Create a deep copy of the orbital elements"""
        return OrbitalElements(*self.elements.copy(), period=self._period,
                               unit=self._unit, parent=self._parent,
                               validate=False)

    def replace(self, **changes):
        """Return a new instance with the named fields replaced"""
        data = self.to_dict()
        data.update(changes)
        return OrbitalElements.from_dict(data)

    def to_dict(self) -> dict:
        """Catalog-style mapping of the element set"""
        a, e, i, varpi, node, L = (float(x) for x in self.elements)
        return {'a': a, 'e': e, 'i': i, 'varpi': varpi, 'node': node, 'L': L,
                'period': self._period, 'unit': self._unit.value,
                'parent': self._parent}

    # ========== BATCH OPERATIONS ==========
    class Batch:
        """
        Batch operations on collections of OrbitalElements.
        """
        @staticmethod
        def period(orbits):
            """Get resolved orbital periods for multiple orbits"""
            return np.array([o.period() for o in orbits])

        @staticmethod
        def mean_motion(orbits):
            """Get mean motions for multiple orbits"""
            return np.array([o.mean_motion() for o in orbits])

        @staticmethod
        def to_numpy(orbits):
            """
            Convert list of OrbitalElements to NumPy array.

            Returns
            -------
            np.ndarray
                Array of shape (n_orbits, 6): a, e, i, varpi, node, L
            """
            units = {o.unit for o in orbits}
            if len(units) > 1:
                raise ValueError("All orbits must share one distance unit")
            return np.array([o.elements for o in orbits])

        @staticmethod
        def to_dataframe(orbits, index=None):
            """
            Convert list of OrbitalElements to pandas DataFrame.

            Parameters
            ----------
            orbits : list of OrbitalElements
            index : array-like, optional
                Index for the DataFrame (e.g., body ids).
                If None, uses integer index.

            Returns
            -------
            pd.DataFrame
                Columns a, e, i, varpi, node, L, period, unit, parent
            """
            import pandas as pd
            columns = ['a', 'e', 'i', 'varpi', 'node', 'L',
                       'period', 'unit', 'parent']
            if not orbits:
                return pd.DataFrame(columns=columns)

            if index is not None and len(index) != len(orbits):
                raise ValueError(
                    f"Index length ({len(index)}) must match "
                    f"number of orbits ({len(orbits)})"
                )
            rows = [o.to_dict() for o in orbits]
            return pd.DataFrame(rows, columns=columns, index=index)

    # ========== SPECIAL METHODS ==========
    def __len__(self):
        return 6

    def __getitem__(self, key):
        return self.elements[key]

    def __iter__(self):
        return iter(self.elements)

    def __repr__(self):
        a, e, i, varpi, node, L = self.elements.tolist()
        return (f"OrbitalElements(a={a}, e={e}, i={i}, varpi={varpi}, "
                f"node={node}, L={L}, period={self._period}, "
                f"unit='{self._unit.value}', parent={self._parent!r})")

    def __str__(self):
        a, e, i, varpi, node, L = self.elements
        period = self.period()
        return (f"Orbital Elements (J2000):\n"
                f"  a     = {a:14.6f} {self._unit.value}\n"
                f"  e     = {e:14.6f}\n"
                f"  i     = {i:14.4f}°\n"
                f"  ϖ     = {varpi:14.4f}°\n"
                f"  Ω     = {node:14.4f}°\n"
                f"  L     = {L:14.4f}°\n"
                f"  P     = {period:14.4f} d")

    def __eq__(self, other):
        if not isinstance(other, OrbitalElements):
            return False
        if (self._unit != other._unit or self._parent != other._parent
                or (self._period is None) != (other._period is None)):
            return False
        if self._period is not None and not np.isclose(
                self._period, other._period,
                rtol=config.EQUALITY_RTOL, atol=config.EQUALITY_ATOL):
            return False
        return np.allclose(self.elements, other.elements,
                           rtol=config.EQUALITY_RTOL,
                           atol=config.EQUALITY_ATOL)

    def __hash__(self):
        # only the fields __eq__ compares exactly; tolerance-equal values
        # can straddle any rounding boundary
        return hash((self._unit, self._parent, self._period is None))
