'''Orbital mechanics core for a solar-system orrery
OrbitPath class definition'''

import numpy as np
import pandas as pd
from typing import Optional, TYPE_CHECKING
import plotly.graph_objects as go

from .config import config
from .kepler import solve_kepler_array
from .orbital_elements import OrbitalElements, convert_length
from .position import perifocal_rotation
if TYPE_CHECKING:
    from .position import PositionCalculator


def sample_relative_orbit(elements: OrbitalElements, times, unit=None) -> np.ndarray:
    """
    Relative positions at many times in one vectorized pass.

    Parameters
    ----------
    elements : OrbitalElements
    times : array-like
        Days since epoch
    unit : DistanceUnit or str, optional
        Output length unit; defaults to the elements' own unit

    Returns
    -------
    np.ndarray
        Array of shape (n_times, 3)
    """
    times = np.asarray(times, dtype=float)
    a, e = float(elements.a), float(elements.e)
    M = np.radians(elements.mean_anomaly_at_epoch) + elements.mean_motion() * times
    E = solve_kepler_array(M, e)
    plane = np.stack([a * (np.cos(E) - e),
                      a * np.sqrt(1 - e**2) * np.sin(E),
                      np.zeros_like(E)], axis=-1)
    positions = plane @ perifocal_rotation(elements).T
    if unit is not None:
        positions = convert_length(positions, elements.unit, unit)
    return positions


class OrbitPath:
    """
    One orbital period of a body sampled for drawing an orbit line.

    Positions are absolute (parent motion included at each sample time) and
    in the calculator's output unit.

    Attributes:
        body_id: Catalog id of the body
        times: Sample times [days since epoch]
        positions: Array of shape (n_points, 3)
        unit: Output length unit
    """
    # ========== CONSTRUCTION ==========
    def __init__(self, body_id: str, times: np.ndarray, positions: np.ndarray,
                 unit, color: Optional[str] = None):
        times = np.array(times, dtype=float)
        positions = np.array(positions, dtype=float)
        if positions.shape != (len(times), 3):
            raise ValueError(f"positions must have shape ({len(times)}, 3), "
                             f"got {positions.shape}")
        self._body_id = body_id
        self._times = times
        self._times.flags.writeable = False
        self._positions = positions
        self._positions.flags.writeable = False
        self._unit = unit
        self._color = color

    @classmethod
    def for_body(cls, calculator: "PositionCalculator", body_id: str,
                 t0: float = 0.0, n_points: Optional[int] = None,
                 relative: bool = False) -> "OrbitPath":
        """
        Sample a body's orbit over one period starting at t0.

        Parameters:
            calculator: PositionCalculator resolving the hierarchy
            body_id: Catalog id of the orbiting body
            t0: Start time [days since epoch] (default 0)
            n_points: Number of samples (default config.DEFAULT_ORBIT_POINTS);
                the first and last samples are one period apart
            relative: Sample the orbit relative to the parent, the closed
                ellipse drawn around a moving planet (default False)

        Raises:
            KeyError: If the body is not in the catalog
            ValueError: If the body has no orbit or n_points < 2
        """
        if n_points is None:
            n_points = config.DEFAULT_ORBIT_POINTS
        if n_points < 2:
            raise ValueError("n_points must be at least 2")
        body = calculator.catalog[body_id]
        if body.elements is None:
            raise ValueError(f"Body '{body_id}' has no orbit to sample")

        period = abs(body.elements.period())
        times = t0 + np.linspace(0.0, period, n_points)
        positions = sample_relative_orbit(body.elements, times, unit=calculator.unit)
        if not relative and body.parent is not None:
            positions = positions + np.array(
                [calculator.position(body.parent, t) for t in times])
        return cls(body_id, times, positions, calculator.unit, color=body.color_hex)

    # ========== PROPERTY ACCESS ==========
    @property
    def body_id(self) -> str:
        return self._body_id

    @property
    def times(self) -> np.ndarray:
        return self._times

    @property
    def positions(self) -> np.ndarray:
        return self._positions

    @property
    def unit(self):
        return self._unit

    @property
    def t0(self):
        return self._times[0]

    @property
    def tf(self):
        return self._times[-1]

    @property
    def duration(self):
        """Sampled time span [days]."""
        return self.tf - self.t0

    # ========== UTILITY METHODS ==========
    def radii(self) -> np.ndarray:
        """Distance from the origin at every sample"""
        return np.linalg.norm(self._positions, axis=1)

    def to_dataframe(self) -> pd.DataFrame:
        """
        Export the path to pandas DataFrame.

        Returns:
            DataFrame with columns time, x, y, z
        """
        return pd.DataFrame({
            'time': self._times,
            'x': self._positions[:, 0],
            'y': self._positions[:, 1],
            'z': self._positions[:, 2],
        })

    # ========== PLOTTING ==========
    def plot_3d(self, color: Optional[str] = None,
                opacity: Optional[float] = None) -> go.Figure:
        """
        Create a 3D plot of the orbit line with the primary at the origin.

        Parameters:
            color: Line color (default: body color, then config default)
            opacity: Line opacity (default: config.DEFAULT_ORBIT_OPACITY)

        Returns:
            Plotly Figure object
        """
        fig = go.Figure()
        fig.add_trace(go.Scatter3d(
            x=[0.0], y=[0.0], z=[0.0],
            mode='markers',
            marker=dict(size=config.DEFAULT_MARKER_SIZE, color='yellow'),
            name='Origin'
        ))
        self.add_to_plot(fig, color=color, opacity=opacity)
        units = self._unit.value
        fig.update_layout(
            scene=dict(
                xaxis_title=f'X [{units}]',
                yaxis_title=f'Y [{units}]',
                zaxis_title=f'Z [{units}]',
                aspectmode='data'
            ),
            title=f'Orbit of {self._body_id}',
            showlegend=True
        )
        return fig

    def add_to_plot(self, fig: go.Figure, color: Optional[str] = None,
                    opacity: Optional[float] = None,
                    name: Optional[str] = None, **kwargs) -> go.Figure:
        """
        Add this orbit line to an existing Plotly figure.

        Parameters:
            fig: Existing Plotly Figure object
            color: Line color (default: body color, then config default)
            opacity: Line opacity (default: config.DEFAULT_ORBIT_OPACITY)
            name: Legend name (default: the body id)
            **kwargs: Additional arguments passed to Scatter3d

        Returns:
            Updated Plotly Figure object (same object, modified in place)
        """
        if color is None:
            color = self._color or config.DEFAULT_ORBIT_COLOR
        if opacity is None:
            opacity = config.DEFAULT_ORBIT_OPACITY
        fig.add_trace(go.Scatter3d(
            x=self._positions[:, 0],
            y=self._positions[:, 1],
            z=self._positions[:, 2],
            mode='lines',
            line=dict(color=color, width=2),
            opacity=opacity,
            name=name or self._body_id,
            hovertemplate='x: %{x:.4f}<br>y: %{y:.4f}<br>z: %{z:.4f}<extra></extra>',
            **kwargs
        ))
        return fig

    # ========== SPECIAL METHODS ==========
    def __len__(self):
        return len(self._times)

    def __repr__(self):
        return (f"OrbitPath(body={self._body_id!r}, t0={self.t0}, "
                f"tf={self.tf}, n_points={len(self)})")


def plot_system(calculator: "PositionCalculator", t: float,
                body_ids=None, show_orbits: bool = True,
                n_points: Optional[int] = None) -> go.Figure:
    """
    Plot body positions at time t, optionally with their orbit lines.

    Parameters:
        calculator: PositionCalculator over the catalog to draw
        t: Time [days since epoch]
        body_ids: Bodies to include (default: every catalog body)
        show_orbits: Draw one period of each orbit (default: True)
        n_points: Samples per orbit line

    Returns:
        Plotly Figure object
    """
    if body_ids is None:
        body_ids = calculator.catalog.ids
    fig = go.Figure()
    for body_id in body_ids:
        body = calculator.catalog[body_id]
        if show_orbits and body.elements is not None:
            OrbitPath.for_body(calculator, body_id, t0=t,
                               n_points=n_points).add_to_plot(fig, showlegend=False)
        pos = calculator.position(body_id, t)
        fig.add_trace(go.Scatter3d(
            x=[pos[0]], y=[pos[1]], z=[pos[2]],
            mode='markers',
            marker=dict(size=config.DEFAULT_MARKER_SIZE, color=body.color_hex),
            name=body.name
        ))
    units = calculator.unit.value
    fig.update_layout(
        scene=dict(
            xaxis_title=f'X [{units}]',
            yaxis_title=f'Y [{units}]',
            zaxis_title=f'Z [{units}]',
            aspectmode='data'
        ),
        title=f'Solar System at t = {t:.2f} d',
        showlegend=True
    )
    return fig
