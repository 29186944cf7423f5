'''Orbital mechanics core for a solar-system orrery
Orbital position calculator'''

import logging
from typing import Dict, Union

import numpy as np

from .catalog import Body, BodyCatalog
from .kepler import solve_kepler
from .orbital_elements import DistanceUnit, OrbitalElements, convert_length

logger = logging.getLogger(__name__)


def perifocal_rotation(elements: OrbitalElements) -> np.ndarray:
    """
    Direction cosine matrix from the orbital plane to the reference frame.

    The orbital-plane x axis points at perihelion. The composition is
    R3(Ω) · R1(i) · R3(ω): argument of perihelion in-plane, inclination
    tilt, then ascending node.

    Returns
    -------
    np.ndarray
        3x3 rotation matrix
    """
    i = np.radians(elements.i)
    node = np.radians(elements.node)
    w = np.radians(elements.argument_of_perihelion)
    # rotation about z-axis by longitude of ascending node
    R3_node = np.array([
        [np.cos(node), -np.sin(node), 0],
        [np.sin(node),  np.cos(node), 0],
        [0,             0,            1]
    ])
    # rotation about x-axis by inclination
    R1_i = np.array([
        [1,  0,          0         ],
        [0,  np.cos(i), -np.sin(i) ],
        [0,  np.sin(i),  np.cos(i) ]
    ])
    # rotation about z-axis by argument of perihelion
    R3_w = np.array([
        [np.cos(w), -np.sin(w), 0],
        [np.sin(w),  np.cos(w), 0],
        [0,          0,         1]
    ])
    return R3_node @ R1_i @ R3_w


def mean_anomaly_at(elements: OrbitalElements, t: float) -> float:
    """Mean anomaly M = (L - ϖ) + n·t [rad] at t days past epoch (unwrapped)"""
    M0 = np.radians(elements.mean_anomaly_at_epoch)
    return float(M0 + elements.mean_motion() * t)


def eccentric_anomaly_at(elements: OrbitalElements, t: float) -> float:
    """Eccentric anomaly [rad] at t days past epoch"""
    return solve_kepler(mean_anomaly_at(elements, t), float(elements.e))


def _plane_position(elements, E):
    a, e = float(elements.a), float(elements.e)
    return np.array([a * (np.cos(E) - e),
                     a * np.sqrt(1 - e**2) * np.sin(E),
                     0.0])


def _plane_velocity(elements, E):
    a, e = float(elements.a), float(elements.e)
    # dE/dt from differentiating Kepler's equation
    E_dot = elements.mean_motion() / (1 - e * np.cos(E))
    return np.array([-a * np.sin(E) * E_dot,
                     a * np.sqrt(1 - e**2) * np.cos(E) * E_dot,
                     0.0])


def relative_position(elements: OrbitalElements, t: float,
                      unit: Union[DistanceUnit, str, None] = None) -> np.ndarray:
    """
    Position relative to the primary at t days past the J2000 epoch.

    Parameters
    ----------
    elements : OrbitalElements
    t : float
        Days since epoch; any real value, including negative
    unit : DistanceUnit or str, optional
        Output length unit; defaults to the elements' own unit

    Returns
    -------
    np.ndarray
        (x, y, z) in the reference frame
    """
    E = eccentric_anomaly_at(elements, t)
    r = perifocal_rotation(elements) @ _plane_position(elements, E)
    if unit is not None:
        r = convert_length(r, elements.unit, unit)
    return r


def relative_velocity(elements: OrbitalElements, t: float,
                      unit: Union[DistanceUnit, str, None] = None) -> np.ndarray:
    """
    Velocity relative to the primary at t days past epoch [unit/day].

    Closed-form time derivative of relative_position(), evaluated at the
    same eccentric anomaly.
    """
    E = eccentric_anomaly_at(elements, t)
    v = perifocal_rotation(elements) @ _plane_velocity(elements, E)
    if unit is not None:
        v = convert_length(v, elements.unit, unit)
    return v


class PositionCalculator:
    """
    Resolves body positions through a catalog's parent hierarchy.

    A body's position is its parent's position at the same time plus its own
    relative position, converted to the calculator's output unit. Bodies
    without elements sit at their parent's position (the origin for roots).
    Every query is computed fresh; nothing is cached.

    Parameters
    ----------
    catalog : BodyCatalog
    unit : DistanceUnit or str, optional
        Output length unit (default AU)
    """
    def __init__(self, catalog: BodyCatalog,
                 unit: Union[DistanceUnit, str] = DistanceUnit.AU):
        self._catalog = catalog
        self._unit = DistanceUnit.parse(unit)

    @property
    def catalog(self) -> BodyCatalog:
        return self._catalog

    @property
    def unit(self) -> DistanceUnit:
        return self._unit

    def _lookup(self, body_id):
        body = self._catalog.get(body_id)
        if body is None:
            logger.warning("Body not found: %s; placing it at the origin", body_id)
        return body

    def _resolve_position(self, body: Body, t: float) -> np.ndarray:
        if body.elements is None:
            local = np.zeros(3)
        else:
            local = relative_position(body.elements, t, unit=self._unit)
        if body.parent is None:
            return local
        return self._resolve_position(self._catalog[body.parent], t) + local

    def _resolve_velocity(self, body: Body, t: float) -> np.ndarray:
        if body.elements is None:
            local = np.zeros(3)
        else:
            local = relative_velocity(body.elements, t, unit=self._unit)
        if body.parent is None:
            return local
        return self._resolve_velocity(self._catalog[body.parent], t) + local

    def position(self, body_id: str, t: float) -> np.ndarray:
        """
        Position of a body at t days past epoch, in the output unit.

        Unknown ids log a warning and return the origin.
        """
        body = self._lookup(body_id)
        if body is None:
            return np.zeros(3)
        return self._resolve_position(body, t)

    def velocity(self, body_id: str, t: float) -> np.ndarray:
        """Velocity [unit/day] including the parent chain's motion"""
        body = self._lookup(body_id)
        if body is None:
            return np.zeros(3)
        return self._resolve_velocity(body, t)

    def relative_position(self, body_id: str, t: float) -> np.ndarray:
        """Position relative to the body's parent, in the output unit"""
        body = self._lookup(body_id)
        if body is None or body.elements is None:
            return np.zeros(3)
        return relative_position(body.elements, t, unit=self._unit)

    def position_meters(self, body_id: str, t: float) -> np.ndarray:
        """position() converted to metres for rendering"""
        return convert_length(self.position(body_id, t), self._unit, DistanceUnit.M)

    def all_positions(self, t: float) -> Dict[str, np.ndarray]:
        """Positions of every catalog body at time t"""
        return {body.id: self._resolve_position(body, t) for body in self._catalog}

    def distance(self, body_a: str, body_b: str, t: float) -> float:
        """Separation between two bodies at time t, in the output unit"""
        return float(np.linalg.norm(self.position(body_b, t) -
                                    self.position(body_a, t)))

    def orbital_period(self, body_id: str) -> float:
        """Resolved orbital period [days]; 0 for unknown or fixed bodies"""
        body = self._catalog.get(body_id)
        if body is None or body.elements is None:
            return 0.0
        return body.elements.period()

    def positions_dataframe(self, t: float):
        """
        Snapshot of all positions as a pandas DataFrame.

        Returns
        -------
        pd.DataFrame
            Indexed by body id, columns x, y, z, r (distance from origin),
            parent and body_type
        """
        import pandas as pd
        rows = []
        for body in self._catalog:
            pos = self._resolve_position(body, t)
            rows.append({
                'id': body.id,
                'x': pos[0],
                'y': pos[1],
                'z': pos[2],
                'r': float(np.linalg.norm(pos)),
                'parent': body.parent,
                'body_type': body.body_type.value,
            })
        return pd.DataFrame(rows, columns=['id', 'x', 'y', 'z', 'r', 'parent',
                                           'body_type']).set_index('id')

    def __repr__(self):
        return f"PositionCalculator({self._catalog!r}, unit='{self._unit.value}')"
