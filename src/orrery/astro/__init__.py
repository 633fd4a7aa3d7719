"""Orbital mechanics core for orrery."""

from orrery.astro.elements import (
    PLANET_INFO,
    PLANET_KEYS,
    PLANETS,
    OrbitalElements,
    OsculatingElements,
    PlanetInfo,
    load_element_table,
)
from orrery.astro.ephemeris import (
    HeliocentricPosition,
    KeplerianEphemeris,
    OrbitalState,
    PlanetPosition,
    PositionResult,
    calculate_all_planet_positions,
    calculate_heliocentric_position,
    calculate_planet_positions,
    normalize_angle,
    orbital_state,
    osculating_elements,
)
from orrery.astro.kepler import KeplerSolution, solve_kepler, solve_orbit
from orrery.astro.timescale import (
    J2000_JD,
    date_to_julian_day,
    ensure_datetime,
    julian_centuries,
    julian_day_from_calendar,
)

__all__ = [
    "PLANETS",
    "PLANET_KEYS",
    "PLANET_INFO",
    "OrbitalElements",
    "OsculatingElements",
    "PlanetInfo",
    "load_element_table",
    "KeplerianEphemeris",
    "HeliocentricPosition",
    "PlanetPosition",
    "PositionResult",
    "OrbitalState",
    "calculate_heliocentric_position",
    "calculate_all_planet_positions",
    "calculate_planet_positions",
    "normalize_angle",
    "orbital_state",
    "osculating_elements",
    "KeplerSolution",
    "solve_kepler",
    "solve_orbit",
    "J2000_JD",
    "date_to_julian_day",
    "ensure_datetime",
    "julian_centuries",
    "julian_day_from_calendar",
]
