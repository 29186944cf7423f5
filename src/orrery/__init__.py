"""
Orrery: Keplerian Solar-System Positions

A Python package for computing where solar-system bodies are at any
simulation time: Kepler's equation solver, element-to-position conversion
through a parent hierarchy, and a simulation clock for driving animations.
"""

# Configuration
from .config import config, temp_config

# Core classes
from .orbital_elements import OrbitalElements, OrbitalElements as OE
from .orbital_elements import DistanceUnit, convert_length
from .kepler import (
    KeplerSolution,
    solve_kepler,
    solve_kepler_detailed,
    solve_kepler_array,
    true_anomaly,
)
from .position import (
    PositionCalculator,
    relative_position,
    relative_velocity,
    perifocal_rotation,
)
from .catalog import Body, BodyCatalog, BodyType
from .clock import SimulationClock, ClockState, TIME_SCALE_PRESETS
from .orbit_path import OrbitPath, plot_system

# Default catalog
from .defaults import SUN, EARTH, MARS, JUPITER
from .defaults import solar_system, solar_system_calculator

# Package metadata
__version__ = "0.1.0"

# Define what gets imported with "from orrery import *"
__all__ = [
    # Configuration
    "config",
    "temp_config",
    # Classes
    "OrbitalElements",
    "DistanceUnit",
    "KeplerSolution",
    "PositionCalculator",
    "Body",
    "BodyCatalog",
    "BodyType",
    "SimulationClock",
    "ClockState",
    "OrbitPath",
    # Abbreviations
    "OE",
    # Functions
    "convert_length",
    "solve_kepler",
    "solve_kepler_detailed",
    "solve_kepler_array",
    "true_anomaly",
    "relative_position",
    "relative_velocity",
    "perifocal_rotation",
    "plot_system",
    "solar_system",
    "solar_system_calculator",
    # Constants
    "TIME_SCALE_PRESETS",
    "SUN",
    "EARTH",
    "MARS",
    "JUPITER",
]
