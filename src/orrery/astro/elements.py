"""
Keplerian orbital elements for the major planets.

Reference-epoch values and secular rates are the J2000.0 approximate
elements published by JPL (valid 1800 AD - 2050 AD):
https://ssd.jpl.nasa.gov/planets/approx_pos.html

The table is built once at import time and exposed as a read-only
mapping of frozen pydantic models.
"""

import json
import logging
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from orrery.astro.timescale import DAYS_PER_JULIAN_CENTURY
from orrery.config import get_elements_path
from orrery.exceptions import ConfigError

logger = logging.getLogger(__name__)


# ── Pydantic schemas ────────────────────────────────────────────────


class ElementSet(BaseModel):
    """Six classical elements: AU for ``a``, degrees for the angles."""

    model_config = ConfigDict(frozen=True)

    a: float
    e: float
    I: float
    L: float
    long_peri: float
    long_node: float


class OsculatingElements(ElementSet):
    """Elements evaluated at ``T`` Julian centuries from J2000.0."""

    T: float

    @property
    def arg_peri(self) -> float:
        """Argument of perihelion ω = ϖ - Ω (degrees)."""
        return self.long_peri - self.long_node

    @property
    def mean_anomaly(self) -> float:
        """Mean anomaly M = L - ϖ (degrees, not wrapped)."""
        return self.L - self.long_peri


class OrbitalElements(ElementSet):
    """Reference-epoch elements plus their linear rates per Julian century."""

    e: float = Field(..., ge=0.0, lt=1.0)

    a_dot: float = 0.0
    e_dot: float = 0.0
    I_dot: float = 0.0
    L_dot: float = 0.0
    long_peri_dot: float = 0.0
    long_node_dot: float = 0.0

    def at(self, T: float) -> OsculatingElements:
        """Propagate linearly: ``value(T) = value(0) + rate * T``."""
        return OsculatingElements(
            a=self.a + self.a_dot * T,
            e=self.e + self.e_dot * T,
            I=self.I + self.I_dot * T,
            L=self.L + self.L_dot * T,
            long_peri=self.long_peri + self.long_peri_dot * T,
            long_node=self.long_node + self.long_node_dot * T,
            T=T,
        )

    @property
    def perihelion(self) -> float:
        """Perihelion distance a(1 - e) in AU."""
        return self.a * (1.0 - self.e)

    @property
    def aphelion(self) -> float:
        """Aphelion distance a(1 + e) in AU."""
        return self.a * (1.0 + self.e)

    @property
    def mean_motion(self) -> float:
        """Mean motion in degrees per day."""
        return self.L_dot / DAYS_PER_JULIAN_CENTURY

    @property
    def sidereal_period_days(self) -> float:
        """Days for the mean longitude to advance one full turn."""
        return 360.0 / self.mean_motion


class PlanetInfo(BaseModel):
    """Display metadata shown alongside a planet in the orrery."""

    model_config = ConfigDict(frozen=True)

    name: str
    period_days: float = Field(..., gt=0.0, description="Nominal orbital period in Earth days")


# ── Reference data ──────────────────────────────────────────────────


PLANET_KEYS = (
    "mercury",
    "venus",
    "earth",
    "mars",
    "jupiter",
    "saturn",
    "uranus",
    "neptune",
)

PLANETS: Mapping[str, OrbitalElements] = MappingProxyType({
    "mercury": OrbitalElements(
        a=0.38709927, e=0.20563593, I=7.00497902,
        L=252.25032350, long_peri=77.45779628, long_node=48.33076593,
        a_dot=0.00000037, e_dot=0.00001906, I_dot=-0.00594749,
        L_dot=149472.67411175, long_peri_dot=0.16047689, long_node_dot=-0.12534081,
    ),
    "venus": OrbitalElements(
        a=0.72333566, e=0.00677672, I=3.39467605,
        L=181.97909950, long_peri=131.60246718, long_node=76.67984255,
        a_dot=0.00000390, e_dot=-0.00004107, I_dot=-0.00078890,
        L_dot=58517.81538729, long_peri_dot=0.00268329, long_node_dot=-0.27769418,
    ),
    "earth": OrbitalElements(
        a=1.00000261, e=0.01671123, I=-0.00001531,
        L=100.46457166, long_peri=102.93768193, long_node=0.0,
        a_dot=0.00000562, e_dot=-0.00004392, I_dot=-0.01294668,
        L_dot=35999.37244981, long_peri_dot=0.32327364, long_node_dot=0.0,
    ),
    "mars": OrbitalElements(
        a=1.52371034, e=0.09339410, I=1.84969142,
        L=-4.55343205, long_peri=-23.94362959, long_node=49.55953891,
        a_dot=0.00001847, e_dot=0.00007882, I_dot=-0.00813131,
        L_dot=19140.30268499, long_peri_dot=0.44441088, long_node_dot=-0.29257343,
    ),
    "jupiter": OrbitalElements(
        a=5.20288700, e=0.04838624, I=1.30439695,
        L=34.39644051, long_peri=14.72847983, long_node=100.47390909,
        a_dot=-0.00011607, e_dot=-0.00013253, I_dot=-0.00183714,
        L_dot=3034.74612775, long_peri_dot=0.21252668, long_node_dot=0.20469106,
    ),
    "saturn": OrbitalElements(
        a=9.53667594, e=0.05386179, I=2.48599187,
        L=49.95424423, long_peri=92.59887831, long_node=113.66242448,
        a_dot=-0.00125060, e_dot=-0.00050991, I_dot=0.00193609,
        L_dot=1222.49362201, long_peri_dot=-0.41897216, long_node_dot=-0.28867794,
    ),
    "uranus": OrbitalElements(
        a=19.18916464, e=0.04725744, I=0.77263783,
        L=313.23810451, long_peri=170.95427630, long_node=74.01692503,
        a_dot=-0.00196176, e_dot=-0.00004397, I_dot=-0.00242939,
        L_dot=428.48202785, long_peri_dot=0.40805281, long_node_dot=0.04240589,
    ),
    "neptune": OrbitalElements(
        a=30.06992276, e=0.00859048, I=1.77004347,
        L=-55.12002969, long_peri=44.96476227, long_node=131.78422574,
        a_dot=0.00026291, e_dot=0.00005105, I_dot=0.00035372,
        L_dot=218.45945325, long_peri_dot=-0.32241464, long_node_dot=-0.00508664,
    ),
})

PLANET_INFO: Mapping[str, PlanetInfo] = MappingProxyType({
    "mercury": PlanetInfo(name="Mercury", period_days=88),
    "venus": PlanetInfo(name="Venus", period_days=225),
    "earth": PlanetInfo(name="Earth", period_days=365.25),
    "mars": PlanetInfo(name="Mars", period_days=687),
    "jupiter": PlanetInfo(name="Jupiter", period_days=4332),
    "saturn": PlanetInfo(name="Saturn", period_days=10759),
    "uranus": PlanetInfo(name="Uranus", period_days=30687),
    "neptune": PlanetInfo(name="Neptune", period_days=60190),
})

_TABLE_ADAPTER = TypeAdapter(dict[str, OrbitalElements])


def normalize_key(planet: str) -> str:
    """Canonical planet key: stripped and lower-cased."""
    return planet.strip().lower()


def load_element_table(path: str | Path) -> Mapping[str, OrbitalElements]:
    """
    Load an element table from a JSON file.

    The file maps planet keys to objects with the fields of
    :class:`OrbitalElements`; omitted rates default to zero.

    Raises:
        ConfigError: If the file cannot be read or fails validation.
    """
    path = Path(path)
    try:
        raw = json.loads(path.read_text())
        table = _TABLE_ADAPTER.validate_python(raw)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"Cannot read element table {path}: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"Invalid element table {path}: {e}") from e

    logger.info("Loaded %d element sets from %s", len(table), path)
    return MappingProxyType({normalize_key(k): v for k, v in table.items()})


@lru_cache(maxsize=8)
def _cached_table(path: Path, mtime_ns: Optional[int]) -> Mapping[str, OrbitalElements]:
    return load_element_table(path)


def active_table() -> Mapping[str, OrbitalElements]:
    """
    Element table from ``ORRERY_ELEMENTS_PATH`` if set, else :data:`PLANETS`.

    Loaded tables are cached per (path, modification time), so an edited
    file is re-read on the next call.
    """
    path = get_elements_path()
    if path is None:
        return PLANETS
    try:
        mtime_ns = path.stat().st_mtime_ns
    except OSError:
        mtime_ns = None
    return _cached_table(path, mtime_ns)


def get_elements(
    planet: str,
    table: Optional[Mapping[str, OrbitalElements]] = None,
) -> Optional[OrbitalElements]:
    """Reference elements for ``planet``, or None if the key is unknown."""
    table = PLANETS if table is None else table
    return table.get(normalize_key(planet))
