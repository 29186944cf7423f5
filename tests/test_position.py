"""
Test suite for element-to-position conversion and the PositionCalculator.

Tests include:
1. Relative positions for reference geometries (perihelion, aphelion,
   inclined and rotated orbits)
2. Orbit invariants (circular radius, periodicity, retrograde symmetry)
3. Velocity against finite differences
4. Hierarchy translation and unit conversion through the calculator
5. Default Solar System sanity checks
"""

import logging

import numpy as np
import pytest

from orrery import (OE, Body, BodyCatalog, BodyType, DistanceUnit,
                    PositionCalculator, relative_position, relative_velocity,
                    perifocal_rotation, solar_system_calculator)
from orrery.utils import AU_KM


# =============================================================================
# Test Configuration
# =============================================================================

ATOL = 1e-9

TIMES = [-1000.0, -12.5, 0.0, 3.3, 91.0, 200.0, 5000.0]


@pytest.fixture
def earth_simple():
    """Earth-like orbit with perihelion at epoch."""
    return OE(a=1.0, e=0.0167, period=365.25, L=0.0, varpi=0.0)


@pytest.fixture
def hierarchy():
    """Star, planet, moon and sub-moon chain with mixed units."""
    star = Body('star', 'Star', BodyType.STAR)
    planet = Body('planet', 'Planet', BodyType.PLANET,
                  OE(a=1.0, e=0.1, i=3.0, varpi=50.0, node=20.0, L=10.0,
                     period=365.25, parent='star'),
                  moons=('moon',))
    moon = Body('moon', 'Moon', BodyType.MOON,
                OE(a=400000.0, e=0.05, i=5.0, period=27.0, unit='km',
                   parent='planet'))
    pebble = Body('pebble', 'Pebble', BodyType.MOON,
                  OE(a=2000.0, e=0.0, period=1.5, unit='km', parent='moon'))
    return BodyCatalog([star, planet, moon, pebble])


@pytest.fixture(scope="module")
def solar():
    return solar_system_calculator()


# =============================================================================
# Reference Geometries
# =============================================================================

class TestRelativePosition:

    def test_perihelion_at_epoch(self, earth_simple):
        r = relative_position(earth_simple, 0.0)
        assert np.allclose(r, [0.9833, 0.0, 0.0], atol=1e-12)
        assert 0.983 <= np.linalg.norm(r) <= 0.984

    def test_aphelion_at_half_period(self, earth_simple):
        r = relative_position(earth_simple, 365.25 / 2)
        assert 1.016 <= np.linalg.norm(r) <= 1.017
        assert np.allclose(r, [-1.0167, 0.0, 0.0], atol=1e-9)

    def test_polar_orbit_quarter_turn(self):
        """i = 90° carries the in-plane y axis onto +z."""
        oe = OE(a=1.0, i=90.0, L=90.0, period=365.25)
        assert np.allclose(relative_position(oe, 0.0), [0.0, 0.0, 1.0], atol=ATOL)

    def test_node_rotation(self):
        """Ω = ϖ = 90° with M0 = 0 places perihelion on +y."""
        oe = OE(a=1.0, node=90.0, varpi=90.0, L=90.0, period=365.25)
        assert np.allclose(relative_position(oe, 0.0), [0.0, 1.0, 0.0], atol=ATOL)

    def test_planar_orbit_stays_in_plane(self):
        oe = OE(a=2.0, e=0.3, varpi=40.0, L=75.0)
        for t in TIMES:
            assert abs(relative_position(oe, t)[2]) < 1e-15

    def test_output_unit(self):
        oe = OE(a=384400.0, e=0.055, i=5.1, period=27.3, unit='km')
        km = relative_position(oe, 4.0)
        au = relative_position(oe, 4.0, unit='au')
        assert np.allclose(au * AU_KM, km, rtol=1e-12)


class TestOrbitInvariants:

    @pytest.mark.parametrize("t", TIMES)
    def test_circular_radius_constant(self, t):
        oe = OE(a=5.2, e=0.0, i=1.3, varpi=14.7, node=100.5, L=34.4)
        assert np.isclose(np.linalg.norm(relative_position(oe, t)), 5.2, rtol=1e-12)

    @pytest.mark.parametrize("t", TIMES)
    def test_radius_between_apsides(self, t):
        oe = OE(a=1.5, e=0.4, i=10.0, varpi=200.0, node=30.0, L=5.0)
        r = np.linalg.norm(relative_position(oe, t))
        assert oe.perihelion_distance() - ATOL <= r <= oe.aphelion_distance() + ATOL

    @pytest.mark.parametrize("t", TIMES)
    def test_periodicity(self, earth_simple, t):
        P = earth_simple.period()
        assert np.allclose(relative_position(earth_simple, t + P),
                           relative_position(earth_simple, t), atol=ATOL)

    @pytest.mark.parametrize("t", TIMES)
    def test_retrograde_runs_time_backwards(self, t):
        """A negative period at t matches the positive period at -t."""
        prograde = OE(a=354759.0, e=0.2, i=157.0, varpi=20.0, node=80.0,
                      L=45.0, period=5.88, unit='km')
        retrograde = prograde.replace(period=-5.88)
        assert np.allclose(relative_position(retrograde, t),
                           relative_position(prograde, -t), atol=1e-6)

    def test_negative_time(self, earth_simple):
        """Times before the epoch wrap onto the same orbit."""
        P = earth_simple.period()
        assert np.allclose(relative_position(earth_simple, -P / 4),
                           relative_position(earth_simple, 3 * P / 4), atol=ATOL)

    def test_rotation_is_orthonormal(self):
        oe = OE(a=1.0, e=0.2, i=33.0, varpi=250.0, node=120.0)
        R = perifocal_rotation(oe)
        assert np.allclose(R @ R.T, np.eye(3), atol=1e-14)
        assert np.isclose(np.linalg.det(R), 1.0, atol=1e-14)


# =============================================================================
# Velocity
# =============================================================================

class TestVelocity:

    @pytest.mark.parametrize("t", [0.0, 50.0, 180.0, -75.0])
    def test_matches_finite_difference(self, t):
        oe = OE(a=1.0, e=0.2, i=7.0, varpi=77.0, node=48.0, L=252.0,
                period=365.25)
        h = 1e-3
        numeric = (relative_position(oe, t + h) -
                   relative_position(oe, t - h)) / (2 * h)
        assert np.allclose(relative_velocity(oe, t), numeric, atol=1e-9)

    def test_circular_speed(self):
        oe = OE(a=2.0, period=100.0)
        v = relative_velocity(oe, 13.0)
        assert np.isclose(np.linalg.norm(v), 2.0 * 2 * np.pi / 100.0, rtol=1e-12)

    def test_calculator_adds_parent_velocity(self, hierarchy):
        calc = PositionCalculator(hierarchy)
        moon = hierarchy['moon'].elements
        expected = (calc.velocity('planet', 30.0) +
                    relative_velocity(moon, 30.0, unit='au'))
        assert np.allclose(calc.velocity('moon', 30.0), expected, atol=1e-15)


# =============================================================================
# PositionCalculator
# =============================================================================

class TestPositionCalculator:

    def test_root_at_origin(self, hierarchy):
        calc = PositionCalculator(hierarchy)
        assert np.array_equal(calc.position('star', 123.0), np.zeros(3))

    @pytest.mark.parametrize("t", TIMES)
    def test_parent_translation(self, hierarchy, t):
        """Absolute position = parent's absolute position + relative offset."""
        calc = PositionCalculator(hierarchy)
        for body_id, parent_id in [('planet', 'star'), ('moon', 'planet'),
                                   ('pebble', 'moon')]:
            expected = calc.position(parent_id, t) + calc.relative_position(body_id, t)
            assert np.allclose(calc.position(body_id, t), expected,
                               rtol=1e-14, atol=1e-15)

    def test_moon_converted_from_km(self, hierarchy):
        calc = PositionCalculator(hierarchy)
        offset = calc.position('moon', 2.0) - calc.position('planet', 2.0)
        km = relative_position(hierarchy['moon'].elements, 2.0)
        assert np.allclose(offset * AU_KM, km, rtol=1e-9)

    def test_output_in_kilometres(self, hierarchy):
        au_calc = PositionCalculator(hierarchy)
        km_calc = PositionCalculator(hierarchy, unit='km')
        assert km_calc.unit == DistanceUnit.KM
        assert np.allclose(km_calc.position('pebble', 8.0),
                           au_calc.position('pebble', 8.0) * AU_KM, rtol=1e-12)

    def test_position_meters(self, hierarchy):
        calc = PositionCalculator(hierarchy)
        assert np.allclose(calc.position_meters('planet', 0.0),
                           calc.position('planet', 0.0) * 149597870700.0,
                           rtol=1e-12)

    def test_unknown_body_at_origin(self, hierarchy, caplog):
        calc = PositionCalculator(hierarchy)
        with caplog.at_level(logging.WARNING, logger="orrery.position"):
            pos = calc.position('vulcan', 10.0)
        assert np.array_equal(pos, np.zeros(3))
        assert "vulcan" in caplog.text

    def test_unknown_body_velocity(self, hierarchy):
        calc = PositionCalculator(hierarchy)
        assert np.array_equal(calc.velocity('vulcan', 0.0), np.zeros(3))

    def test_deterministic(self, hierarchy):
        calc = PositionCalculator(hierarchy)
        first = calc.position('pebble', 777.7)
        calc.position('planet', 1.0)
        assert np.array_equal(calc.position('pebble', 777.7), first)

    def test_orbital_period(self, hierarchy):
        calc = PositionCalculator(hierarchy)
        assert calc.orbital_period('planet') == 365.25
        assert calc.orbital_period('star') == 0.0
        assert calc.orbital_period('vulcan') == 0.0

    def test_all_positions(self, hierarchy):
        calc = PositionCalculator(hierarchy)
        positions = calc.all_positions(42.0)
        assert set(positions) == {'star', 'planet', 'moon', 'pebble'}
        assert np.allclose(positions['moon'], calc.position('moon', 42.0))

    def test_distance(self, hierarchy):
        calc = PositionCalculator(hierarchy)
        d = calc.distance('planet', 'moon', 5.0)
        r = np.linalg.norm(calc.relative_position('moon', 5.0))
        assert np.isclose(d, r, rtol=1e-9)

    def test_positions_dataframe(self, hierarchy):
        calc = PositionCalculator(hierarchy)
        df = calc.positions_dataframe(0.0)
        assert list(df.columns) == ['x', 'y', 'z', 'r', 'parent', 'body_type']
        assert list(df.index) == ['star', 'planet', 'moon', 'pebble']
        assert df.loc['moon', 'parent'] == 'planet'
        assert df.loc['star', 'body_type'] == 'star'
        assert np.isclose(df.loc['planet', 'r'],
                          np.linalg.norm(calc.position('planet', 0.0)))


# =============================================================================
# Default Solar System
# =============================================================================

class TestSolarSystem:

    def test_sun_at_origin(self, solar):
        assert np.array_equal(solar.position('sun', 1234.5), np.zeros(3))

    @pytest.mark.parametrize("t", [0.0, 7.0, 14.0, 100.0, -3650.0])
    def test_earth_moon_distance(self, solar, t):
        d = solar.distance('earth', 'moon', t)
        assert 0.00242 <= d <= 0.00272

    def test_earth_distance_from_sun(self, solar):
        for t in np.linspace(0.0, 365.0, 13):
            r = np.linalg.norm(solar.position('earth', t))
            assert 0.983 <= r <= 1.017

    def test_every_body_resolves(self, solar):
        for body_id, pos in solar.all_positions(2451.0).items():
            assert pos.shape == (3,)
            assert np.all(np.isfinite(pos)), body_id

    def test_triton_is_retrograde(self, solar):
        triton = solar.catalog['triton'].elements
        assert triton.is_retrograde
        assert solar.orbital_period('triton') == -5.88
