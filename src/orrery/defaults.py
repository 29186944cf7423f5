"""
Default Solar System Catalog
============================

Predefined bodies of the Solar System and factory functions that assemble
them into a BodyCatalog or a ready-to-use PositionCalculator.

Planetary elements are the J2000 mean elements of Standish (JPL, "Keplerian
Elements for Approximate Positions of the Major Planets"), held fixed.
Moon elements are planetocentric, in kilometres, with mean longitude and
orientation angles left at zero where the catalog has no value. Negative
periods mark retrograde satellites.

Examples
--------
>>> from orrery import solar_system, solar_system_calculator
>>> catalog = solar_system()
>>> calc = solar_system_calculator()
>>> calc.position('earth', 0.0)
"""
from .catalog import Body, BodyCatalog, BodyType
from .orbital_elements import OrbitalElements, DistanceUnit
from .position import PositionCalculator

KM = DistanceUnit.KM

"""
Star
"""
SUN = Body(
    id='sun', name='Sun', body_type=BodyType.STAR,
    radius=696340000.0, mass=1.989e30, color=0xFFDD00,
)

"""
Planets
Angles in degrees, a in AU, sidereal periods in days
"""
MERCURY = Body(
    id='mercury', name='Mercury', body_type=BodyType.PLANET,
    elements=OrbitalElements(
        a=0.38709927, e=0.20563593, i=7.00497902,
        varpi=77.45779628, node=48.33076593, L=252.25032350,
        period=87.969, parent='sun'),
    radius=2440000.0, mass=3.301e23, color=0xB5B5B5,
)

VENUS = Body(
    id='venus', name='Venus', body_type=BodyType.PLANET,
    elements=OrbitalElements(
        a=0.72333566, e=0.00677672, i=3.39467605,
        varpi=131.60246718, node=76.67984255, L=181.97909950,
        period=224.701, parent='sun'),
    radius=6052000.0, mass=4.867e24, color=0xE6C229,
)

EARTH = Body(
    id='earth', name='Earth', body_type=BodyType.PLANET,
    elements=OrbitalElements(
        a=1.00000261, e=0.01671123, i=0.0,
        varpi=102.93768193, node=0.0, L=100.46457166,
        period=365.256, parent='sun'),
    radius=6371000.0, mass=5.972e24, color=0x6B93D6,
    moons=('moon',),
)

MARS = Body(
    id='mars', name='Mars', body_type=BodyType.PLANET,
    elements=OrbitalElements(
        a=1.52371034, e=0.09339410, i=1.84969142,
        varpi=-23.94362959, node=49.55953891, L=-4.55343205,
        period=686.980, parent='sun'),
    radius=3390000.0, mass=6.39e23, color=0xC1440E,
    moons=('phobos', 'deimos'),
)

JUPITER = Body(
    id='jupiter', name='Jupiter', body_type=BodyType.PLANET,
    elements=OrbitalElements(
        a=5.20288700, e=0.04838624, i=1.30439695,
        varpi=14.72847983, node=100.47390909, L=34.39644051,
        period=4332.589, parent='sun'),
    radius=69911000.0, mass=1.898e27, color=0xD8CA9D,
    moons=('io', 'europa', 'ganymede', 'callisto'),
)

SATURN = Body(
    id='saturn', name='Saturn', body_type=BodyType.PLANET,
    elements=OrbitalElements(
        a=9.53667594, e=0.05386179, i=2.48599187,
        varpi=92.59887831, node=113.66242448, L=49.95424423,
        period=10759.22, parent='sun'),
    radius=58232000.0, mass=5.683e26, color=0xEAD6B8,
    moons=('mimas', 'enceladus', 'tethys', 'dione', 'rhea', 'titan', 'iapetus'),
)

URANUS = Body(
    id='uranus', name='Uranus', body_type=BodyType.PLANET,
    elements=OrbitalElements(
        a=19.18916464, e=0.04725744, i=0.77263783,
        varpi=170.95427630, node=74.01692503, L=313.23810451,
        period=30685.4, parent='sun'),
    radius=25362000.0, mass=8.681e25, color=0xD1E7E7,
    moons=('miranda', 'ariel', 'umbriel', 'titania', 'oberon'),
)

NEPTUNE = Body(
    id='neptune', name='Neptune', body_type=BodyType.PLANET,
    elements=OrbitalElements(
        a=30.06992276, e=0.00859048, i=1.77004347,
        varpi=44.96476227, node=131.78422574, L=-55.12002969,
        period=60189.0, parent='sun'),
    radius=24622000.0, mass=1.024e26, color=0x5B5DDF,
    moons=('triton', 'proteus', 'nereid'),
)

PLUTO = Body(
    id='pluto', name='Pluto', body_type=BodyType.DWARF_PLANET,
    elements=OrbitalElements(
        a=39.48211675, e=0.24882730, i=17.14001206,
        varpi=224.06891629, node=110.30393684, L=238.92903833,
        period=90560.0, parent='sun'),
    radius=1188300.0, mass=1.303e22, color=0xC2B280,
)

PLANETS = (MERCURY, VENUS, EARTH, MARS, JUPITER, SATURN, URANUS, NEPTUNE)

"""
Moons
a in km, periods in days
"""
MOONS = (
    Body('moon', 'Moon', BodyType.MOON,
         OrbitalElements(a=384400, e=0.055, i=5.1, period=27.3,
                         unit=KM, parent='earth'),
         radius=1737000.0, mass=7.34e22, color=0xAAAAAA),
    Body('phobos', 'Phobos', BodyType.MOON,
         OrbitalElements(a=9376, e=0.015, i=1.1, period=0.32,
                         unit=KM, parent='mars'),
         radius=11267.0, mass=1.07e16, color=0x8B7355),
    Body('deimos', 'Deimos', BodyType.MOON,
         OrbitalElements(a=23458, e=0.0002, i=1.788, period=1.263,
                         unit=KM, parent='mars'),
         radius=6200.0, mass=1.48e15, color=0x8B8378),
    Body('io', 'Io', BodyType.MOON,
         OrbitalElements(a=421700, e=0.004, i=0.04, period=1.77,
                         unit=KM, parent='jupiter'),
         radius=1821600.0, mass=8.93e22, color=0xFFE135),
    Body('europa', 'Europa', BodyType.MOON,
         OrbitalElements(a=671034, e=0.009, i=0.47, period=3.55,
                         unit=KM, parent='jupiter'),
         radius=1560800.0, mass=4.8e22, color=0xC9A659),
    Body('ganymede', 'Ganymede', BodyType.MOON,
         OrbitalElements(a=1070412, e=0.001, i=0.2, period=7.15,
                         unit=KM, parent='jupiter'),
         radius=2631200.0, mass=1.48e23, color=0x8A8A8A),
    Body('callisto', 'Callisto', BodyType.MOON,
         OrbitalElements(a=1882709, e=0.007, i=0.19, period=16.69,
                         unit=KM, parent='jupiter'),
         radius=2410300.0, mass=1.08e23, color=0x6E6E6E),
    Body('mimas', 'Mimas', BodyType.MOON,
         OrbitalElements(a=185539, e=0.02, i=1.57, period=0.94,
                         unit=KM, parent='saturn'),
         radius=198200.0, mass=3.75e19, color=0xB8B8B8),
    Body('enceladus', 'Enceladus', BodyType.MOON,
         OrbitalElements(a=237948, e=0.005, i=0.01, period=1.37,
                         unit=KM, parent='saturn'),
         radius=252100.0, mass=1.08e20, color=0xFFFFFF),
    Body('tethys', 'Tethys', BodyType.MOON,
         OrbitalElements(a=294619, e=0.0001, i=1.09, period=1.89,
                         unit=KM, parent='saturn'),
         radius=531000.0, mass=6.17e20, color=0xB8B8B8),
    Body('dione', 'Dione', BodyType.MOON,
         OrbitalElements(a=377396, e=0.002, i=0.02, period=2.74,
                         unit=KM, parent='saturn'),
         radius=561400.0, mass=1.1e21, color=0xB8B8B8),
    Body('rhea', 'Rhea', BodyType.MOON,
         OrbitalElements(a=527108, e=0.001, i=0.35, period=4.52,
                         unit=KM, parent='saturn'),
         radius=763800.0, mass=2.31e21, color=0xA8A8A8),
    Body('titan', 'Titan', BodyType.MOON,
         OrbitalElements(a=1221870, e=0.029, i=0.31, period=15.95,
                         unit=KM, parent='saturn'),
         radius=2574700.0, mass=1.35e23, color=0xE8C776),
    Body('iapetus', 'Iapetus', BodyType.MOON,
         OrbitalElements(a=3560820, e=0.029, i=15.5, period=79.3,
                         unit=KM, parent='saturn'),
         radius=734500.0, mass=1.81e21, color=0x8B8378),
    Body('miranda', 'Miranda', BodyType.MOON,
         OrbitalElements(a=129390, e=0.001, i=4.23, period=1.41,
                         unit=KM, parent='uranus'),
         radius=235800.0, mass=6.59e19, color=0xA8A8A8),
    Body('ariel', 'Ariel', BodyType.MOON,
         OrbitalElements(a=191020, e=0.001, i=0.04, period=2.52,
                         unit=KM, parent='uranus'),
         radius=578900.0, mass=1.35e21, color=0xB8B8B8),
    Body('umbriel', 'Umbriel', BodyType.MOON,
         OrbitalElements(a=266000, e=0.004, i=0.13, period=4.14,
                         unit=KM, parent='uranus'),
         radius=584700.0, mass=1.17e21, color=0x787878),
    Body('titania', 'Titania', BodyType.MOON,
         OrbitalElements(a=435910, e=0.001, i=0.08, period=8.71,
                         unit=KM, parent='uranus'),
         radius=788400.0, mass=3.53e21, color=0xA8A8A8),
    Body('oberon', 'Oberon', BodyType.MOON,
         OrbitalElements(a=583520, e=0.001, i=0.07, period=13.46,
                         unit=KM, parent='uranus'),
         radius=761400.0, mass=3.01e21, color=0x8B8B8B),
    # retrograde: negative period
    Body('triton', 'Triton', BodyType.MOON,
         OrbitalElements(a=354759, e=0.00002, i=157, period=-5.88,
                         unit=KM, parent='neptune'),
         radius=1353400.0, mass=2.14e22, color=0xB5B5B5),
    Body('proteus', 'Proteus', BodyType.MOON,
         OrbitalElements(a=117646, e=0.0005, i=0.03, period=1.12,
                         unit=KM, parent='neptune'),
         radius=210000.0, mass=4.4e19, color=0x787878),
    Body('nereid', 'Nereid', BodyType.MOON,
         OrbitalElements(a=5513400, e=0.751, i=32.6, period=360.1,
                         unit=KM, parent='neptune'),
         radius=170000.0, mass=2.7e19, color=0x787878),
)

"""
Periodic comets
a in AU, periods in days
"""
COMETS = (
    Body('halley', "Halley's Comet", BodyType.COMET,
         OrbitalElements(a=17.8, e=0.967, i=162.3, period=27500, parent='sun'),
         radius=5500.0, color=0xFFFFFF),
    Body('hale_bopp', 'Comet Hale-Bopp', BodyType.COMET,
         OrbitalElements(a=186, e=0.995, i=89.4, period=926500, parent='sun'),
         radius=30000.0, color=0x88CCFF),
    Body('encke', 'Comet Encke', BodyType.COMET,
         OrbitalElements(a=2.21, e=0.847, i=11.8, period=1206, parent='sun'),
         radius=2400.0, color=0xFFFFFF),
    Body('swift_tuttle', 'Comet Swift-Tuttle', BodyType.COMET,
         OrbitalElements(a=26.09, e=0.963, i=113.5, period=48680, parent='sun'),
         radius=13500.0, color=0xFFFFFF),
    Body('tempel_tuttle', 'Comet Tempel-Tuttle', BodyType.COMET,
         OrbitalElements(a=10.33, e=0.905, i=162.5, period=12130, parent='sun'),
         radius=2300.0, color=0xFFFFFF),
)


def solar_system(include_moons=True, include_comets=True):
    """
    Build the default Solar System catalog.

    Parameters
    ----------
    include_moons : bool, optional
        Include planetary satellites (default True). When False, planets
        are listed without moons.
    include_comets : bool, optional
        Include periodic comets (default True)

    Returns
    -------
    BodyCatalog
        Sun, eight planets, Pluto and the optional groups
    """
    bodies = [SUN, *PLANETS, PLUTO]
    if include_moons:
        bodies.extend(MOONS)
    else:
        bodies = [Body(b.id, b.name, b.body_type, b.elements, b.radius,
                       b.mass, b.color) for b in bodies]
    if include_comets:
        bodies.extend(COMETS)
    return BodyCatalog(bodies)


def solar_system_calculator(unit=DistanceUnit.AU, **kwargs):
    """
    Create a PositionCalculator over the default catalog.

    Parameters
    ----------
    unit : DistanceUnit or str, optional
        Output length unit (default AU)
    **kwargs
        Passed to solar_system()

    Returns
    -------
    PositionCalculator
    """
    return PositionCalculator(solar_system(**kwargs), unit=unit)
