"""
Test suite for OrbitPath sampling, export and plotting.
"""

import numpy as np
import plotly.graph_objects as go
import pytest

from orrery import OE, OrbitPath, plot_system, relative_position, solar_system_calculator
from orrery.orbit_path import sample_relative_orbit


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture(scope="module")
def calc():
    return solar_system_calculator()


@pytest.fixture(scope="module")
def earth_path(calc):
    return OrbitPath.for_body(calc, 'earth', n_points=64)


# =============================================================================
# Sampling
# =============================================================================

class TestSampling:

    def test_vectorized_matches_scalar(self):
        oe = OE(a=2.2, e=0.85, i=11.8, varpi=160.0, node=334.0, L=20.0)
        times = np.linspace(-500.0, 1500.0, 37)
        sampled = sample_relative_orbit(oe, times)
        expected = np.array([relative_position(oe, t) for t in times])
        assert sampled.shape == (37, 3)
        assert np.allclose(sampled, expected, atol=1e-9)

    def test_closes_after_one_period(self, earth_path):
        assert np.allclose(earth_path.positions[0], earth_path.positions[-1],
                           atol=1e-9)

    def test_sample_times(self, earth_path):
        assert len(earth_path) == 64
        assert earth_path.t0 == 0.0
        assert np.isclose(earth_path.duration, 365.256)

    def test_start_time(self, calc):
        path = OrbitPath.for_body(calc, 'mars', t0=1000.0, n_points=8)
        assert path.t0 == 1000.0
        assert np.isclose(path.tf, 1000.0 + 686.98)

    def test_matches_calculator(self, calc):
        path = OrbitPath.for_body(calc, 'mars', t0=-200.0, n_points=16)
        for t, pos in zip(path.times, path.positions):
            assert np.allclose(pos, calc.position('mars', t), atol=1e-9)

    def test_earth_radii(self, earth_path):
        radii = earth_path.radii()
        assert radii.min() >= 0.983
        assert radii.max() <= 1.017

    def test_default_point_count(self, calc):
        assert len(OrbitPath.for_body(calc, 'venus')) == 256

    def test_moon_relative_and_absolute(self, calc):
        absolute = OrbitPath.for_body(calc, 'moon', n_points=12)
        relative = OrbitPath.for_body(calc, 'moon', n_points=12, relative=True)
        earth = np.array([calc.position('earth', t) for t in absolute.times])
        assert np.allclose(absolute.positions - relative.positions, earth,
                           atol=1e-12)
        assert np.all(relative.radii() < 0.003)

    def test_retrograde_duration(self, calc):
        path = OrbitPath.for_body(calc, 'triton', n_points=10, relative=True)
        assert np.isclose(path.duration, 5.88)

    def test_unit_follows_calculator(self):
        km_calc = solar_system_calculator(unit='km', include_comets=False)
        path = OrbitPath.for_body(km_calc, 'moon', n_points=8, relative=True)
        assert path.unit.value == 'km'
        assert np.all(path.radii() > 3.6e5)


class TestErrors:

    def test_body_without_orbit(self, calc):
        with pytest.raises(ValueError, match="no orbit"):
            OrbitPath.for_body(calc, 'sun')

    def test_unknown_body(self, calc):
        with pytest.raises(KeyError):
            OrbitPath.for_body(calc, 'vulcan')

    def test_too_few_points(self, calc):
        with pytest.raises(ValueError):
            OrbitPath.for_body(calc, 'earth', n_points=1)

    def test_shape_mismatch(self):
        with pytest.raises(ValueError, match="shape"):
            OrbitPath('x', np.zeros(3), np.zeros((4, 3)), 'au')

    def test_arrays_read_only(self, earth_path):
        with pytest.raises(ValueError):
            earth_path.positions[0, 0] = 5.0
        with pytest.raises(ValueError):
            earth_path.times[0] = 5.0


# =============================================================================
# Export and Plotting
# =============================================================================

class TestExport:

    def test_to_dataframe(self, earth_path):
        df = earth_path.to_dataframe()
        assert list(df.columns) == ['time', 'x', 'y', 'z']
        assert len(df) == 64
        assert df['x'].iloc[3] == earth_path.positions[3, 0]

    def test_repr(self, earth_path):
        assert repr(earth_path).startswith("OrbitPath(body='earth'")

    def test_plot_3d(self, earth_path):
        fig = earth_path.plot_3d()
        assert isinstance(fig, go.Figure)
        assert len(fig.data) == 2
        assert fig.data[1].name == 'earth'

    def test_add_to_plot(self, earth_path):
        fig = go.Figure()
        returned = earth_path.add_to_plot(fig, name='Earth orbit')
        assert returned is fig
        assert len(fig.data) == 1
        assert fig.data[0].name == 'Earth orbit'
        assert fig.data[0].line.color == '#6b93d6'

    def test_add_to_plot_color_override(self, earth_path):
        fig = earth_path.add_to_plot(go.Figure(), color='red', opacity=0.8)
        assert fig.data[0].line.color == 'red'
        assert fig.data[0].opacity == 0.8

    def test_plot_system(self, calc):
        fig = plot_system(calc, 0.0, body_ids=['sun', 'earth', 'mars'], n_points=16)
        assert len(fig.data) == 5
        names = [trace.name for trace in fig.data]
        assert 'Sun' in names and 'Mars' in names

    def test_plot_system_without_orbits(self, calc):
        fig = plot_system(calc, 10.0, body_ids=['sun', 'earth', 'mars'],
                          show_orbits=False)
        assert len(fig.data) == 3
