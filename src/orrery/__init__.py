"""
Orrery - Keplerian ephemeris engine for the Solar System planets

Computes heliocentric ecliptic positions of the eight major planets at
any instant from JPL's J2000.0 approximate orbital elements.
"""

__version__ = "0.1.0"

from orrery.astro import (
    calculate_all_planet_positions,
    calculate_heliocentric_position,
    date_to_julian_day,
)
from orrery.config import SolverSettings
from orrery.exceptions import ConfigError, InvalidInstantError, OrreryError

__all__ = [
    "calculate_all_planet_positions",
    "calculate_heliocentric_position",
    "date_to_julian_day",
    "SolverSettings",
    "OrreryError",
    "ConfigError",
    "InvalidInstantError",
    "__version__",
]
