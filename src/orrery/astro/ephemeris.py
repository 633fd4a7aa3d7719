"""
Keplerian ephemeris for the major planets.

This module propagates J2000.0 orbital elements to an instant, solves
Kepler's equation and rotates the result into the heliocentric ecliptic
frame. Every query is a pure function of (planet, instant): the element
table is read-only and nothing is cached between calls.

Unknown planet keys are not errors. Single-planet queries return None,
tagged batch queries return ``PositionResult(found=False)`` and
:func:`calculate_all_planet_positions` omits the entry.
"""

import logging
from datetime import timedelta
from typing import Iterable, Mapping, Optional

import numpy as np
from astropy import units as u
from pydantic import BaseModel, ConfigDict

from orrery.astro.elements import (
    PLANET_KEYS,
    OrbitalElements,
    OsculatingElements,
    active_table,
    get_elements,
    normalize_key,
)
from orrery.astro.frames import ecliptic_longitude, orbital_to_ecliptic
from orrery.astro.kepler import solve_orbit
from orrery.astro.timescale import Instant, date_to_julian_day, ensure_datetime, julian_centuries
from orrery.config import SolverSettings, load_solver_settings

logger = logging.getLogger(__name__)


# ── Pydantic schemas ────────────────────────────────────────────────


class HeliocentricPosition(BaseModel):
    """Ecliptic position in AU with the raw longitude angle in degrees."""

    model_config = ConfigDict(frozen=True)

    x: float
    y: float
    z: float
    r: float
    angle: float

    def to_km(self) -> tuple[float, float, float]:
        """Position converted from AU to km."""
        xyz = (np.array([self.x, self.y, self.z]) * u.AU).to(u.km).value
        return float(xyz[0]), float(xyz[1]), float(xyz[2])


class PlanetPosition(HeliocentricPosition):
    """Position plus the longitude normalized into [0, 360)."""

    normalized_angle: float


class OrbitalState(BaseModel):
    """Every intermediate of one ephemeris query (angles in radians unless noted)."""

    model_config = ConfigDict(frozen=True)

    planet: str
    jd: float
    elements: OsculatingElements
    M: float
    E: float
    nu: float
    r: float
    x_orbital: float
    y_orbital: float
    x: float
    y: float
    z: float
    angle: float
    normalized_angle: float
    converged: bool

    def position(self) -> HeliocentricPosition:
        return HeliocentricPosition(x=self.x, y=self.y, z=self.z, r=self.r, angle=self.angle)


class PositionResult(BaseModel):
    """Tagged per-planet result of a batch query."""

    model_config = ConfigDict(frozen=True)

    planet: str
    found: bool
    position: Optional[PlanetPosition] = None


def normalize_angle(angle: float) -> float:
    """Wrap an angle in degrees into [0, 360)."""
    return ((angle % 360.0) + 360.0) % 360.0


# ── Ephemeris ───────────────────────────────────────────────────────


class KeplerianEphemeris:
    """
    Planet positions from osculating Keplerian elements.

    Example:
        >>> eph = KeplerianEphemeris()
        >>> pos = eph.position("mars", "2026-07-01")
        >>> 1.38 < pos.r < 1.67
        True
    """

    def __init__(
        self,
        table: Optional[Mapping[str, OrbitalElements]] = None,
        settings: Optional[SolverSettings] = None,
    ):
        """
        Initialize the ephemeris.

        Args:
            table: Element table keyed by planet. If None, uses the
                   ORRERY_ELEMENTS_PATH file or the built-in table.
            settings: Kepler solver precision. If None, read from the
                      ORRERY_KEPLER_* environment variables.
        """
        self.table = table if table is not None else active_table()
        self.settings = settings or load_solver_settings()

    @property
    def available_bodies(self) -> list[str]:
        """Planet keys in table order."""
        return list(self.table.keys())

    def osculating_elements(self, planet: str, instant: Instant = None) -> Optional[OsculatingElements]:
        """Elements propagated to ``instant``, or None for an unknown planet."""
        reference = get_elements(planet, self.table)
        if reference is None:
            logger.debug("Unknown planet requested: %r", planet)
            return None
        return reference.at(julian_centuries(date_to_julian_day(instant)))

    def orbital_state(self, planet: str, instant: Instant = None) -> Optional[OrbitalState]:
        """Full orbital state of ``planet`` at ``instant``, or None if unknown."""
        instant = ensure_datetime(instant)
        elements = self.osculating_elements(planet, instant)
        if elements is None:
            return None

        M = np.radians(elements.mean_anomaly)
        solution = solve_orbit(elements.a, elements.e, float(M), self.settings)

        x_orbital = solution.r * np.cos(solution.nu)
        y_orbital = solution.r * np.sin(solution.nu)

        x, y, z = orbital_to_ecliptic(
            x_orbital,
            y_orbital,
            np.radians(elements.arg_peri),
            np.radians(elements.I),
            np.radians(elements.long_node),
        )
        angle = ecliptic_longitude(x, y)

        return OrbitalState(
            planet=normalize_key(planet),
            jd=date_to_julian_day(instant),
            elements=elements,
            M=solution.M,
            E=solution.E,
            nu=solution.nu,
            r=solution.r,
            x_orbital=float(x_orbital),
            y_orbital=float(y_orbital),
            x=x,
            y=y,
            z=z,
            angle=angle,
            normalized_angle=normalize_angle(angle),
            converged=solution.converged,
        )

    def position(self, planet: str, instant: Instant = None) -> Optional[HeliocentricPosition]:
        """Heliocentric ecliptic position, or None for an unknown planet."""
        state = self.orbital_state(planet, instant)
        return state.position() if state is not None else None

    def positions(self, planets: Iterable[str], instant: Instant = None) -> dict[str, PositionResult]:
        """Tagged results for each requested key; unknown keys have ``found=False``."""
        instant = ensure_datetime(instant)
        results = {}
        for planet in planets:
            position = self.position(planet, instant)
            if position is None:
                results[planet] = PositionResult(planet=planet, found=False)
            else:
                results[planet] = PositionResult(
                    planet=planet,
                    found=True,
                    position=PlanetPosition(
                        **position.model_dump(),
                        normalized_angle=normalize_angle(position.angle),
                    ),
                )
        return results

    def all_positions(self, instant: Instant = None) -> dict[str, PlanetPosition]:
        """Positions of every planet in :data:`PLANET_KEYS` found in the table."""
        results = self.positions(PLANET_KEYS, instant)
        return {key: result.position for key, result in results.items() if result.found}

    def sample_angles(
        self,
        planet: str,
        start: Instant,
        step: timedelta,
        count: int,
    ) -> Optional[np.ndarray]:
        """Raw longitude angles (degrees) at ``count`` instants spaced by ``step``."""
        if normalize_key(planet) not in self.table:
            return None
        start = ensure_datetime(start)
        return np.array([
            self.position(planet, start + i * step).angle for i in range(count)
        ])


# ── Module-level API ────────────────────────────────────────────────


def osculating_elements(planet: str, instant: Instant = None) -> Optional[OsculatingElements]:
    """Osculating elements of ``planet`` at ``instant`` (None if unknown)."""
    return KeplerianEphemeris().osculating_elements(planet, instant)


def orbital_state(
    planet: str,
    instant: Instant = None,
    settings: Optional[SolverSettings] = None,
) -> Optional[OrbitalState]:
    """Full orbital state of ``planet`` at ``instant`` (None if unknown)."""
    return KeplerianEphemeris(settings=settings).orbital_state(planet, instant)


def calculate_heliocentric_position(
    planet: str,
    instant: Instant = None,
    settings: Optional[SolverSettings] = None,
) -> Optional[HeliocentricPosition]:
    """Heliocentric ecliptic ``{x, y, z, r, angle}`` of one planet (None if unknown)."""
    return KeplerianEphemeris(settings=settings).position(planet, instant)


def calculate_planet_positions(
    planets: Iterable[str],
    instant: Instant = None,
    settings: Optional[SolverSettings] = None,
) -> dict[str, PositionResult]:
    """Tagged positions for arbitrary keys; never fails for unknown ones."""
    return KeplerianEphemeris(settings=settings).positions(planets, instant)


def calculate_all_planet_positions(
    instant: Instant = None,
    settings: Optional[SolverSettings] = None,
) -> dict[str, PlanetPosition]:
    """Positions of all eight planets with normalized angles attached."""
    return KeplerianEphemeris(settings=settings).all_positions(instant)
