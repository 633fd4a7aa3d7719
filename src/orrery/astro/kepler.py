"""
Kepler's equation and the anomaly chain M -> E -> ν.

The solver is Newton-Raphson started at E₀ = M. The root always lies in
[M - e, M + e]; a Newton step that would leave the current bracket is
replaced by bisection, which keeps high eccentricities from diverging.
Running out of iterations is not an error: the last estimate is returned with
``converged=False`` and a warning is logged. All eccentricities in the
planet table are below 0.21, where convergence takes a handful of steps.
"""

import logging
from typing import Optional

import numpy as np
from pydantic import BaseModel, ConfigDict

from orrery.config import DEFAULT_MAX_ITERATIONS, DEFAULT_TOLERANCE, SolverSettings

logger = logging.getLogger(__name__)


class KeplerSolution(BaseModel):
    """Anomalies (radians) and radius vector (AU) for one orbit position."""

    model_config = ConfigDict(frozen=True)

    M: float
    E: float
    nu: float
    r: float
    iterations: int
    converged: bool


def newton_raphson(
    M: float,
    e: float,
    tolerance: float = DEFAULT_TOLERANCE,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
) -> tuple[float, int, bool]:
    """
    Iterate bracketed Newton-Raphson on M = E - e·sin(E).

    Returns:
        ``(E, iterations, converged)``; ``converged`` is False when the
        cap was reached before a correction fell below ``tolerance``.
    """
    E = M
    lo, hi = M - e, M + e
    for i in range(1, max_iterations + 1):
        f = E - e * np.sin(E) - M
        if f < 0.0:
            lo = E
        elif f > 0.0:
            hi = E

        E_next = E - f / (1.0 - e * np.cos(E))
        newton_step = lo - tolerance <= E_next <= hi + tolerance
        if not newton_step:
            E_next = 0.5 * (lo + hi)
        delta = E - E_next
        E = E_next
        if newton_step and abs(delta) < tolerance:
            return float(E), i, True

    logger.warning(
        "Kepler solver hit %d iterations without converging (M=%.6f, e=%.6f)",
        max_iterations, M, e,
    )
    return float(E), max_iterations, False


def solve_kepler(
    M: float,
    e: float,
    tolerance: float = DEFAULT_TOLERANCE,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
) -> float:
    """
    Solve Kepler's equation for the eccentric anomaly.

    Args:
        M: Mean anomaly in radians (any real value).
        e: Eccentricity, 0 <= e < 1.
        tolerance: Stop once the Newton correction is below this (radians).
        max_iterations: Iteration cap; the best estimate is returned when hit.

    Returns:
        Eccentric anomaly E in radians.

    Example:
        >>> solve_kepler(0.0, 0.5)
        0.0
    """
    E, _, _ = newton_raphson(M, e, tolerance, max_iterations)
    return E


def true_anomaly(E: float, e: float) -> float:
    """True anomaly ν from E via the half-angle relation (radians)."""
    return float(2.0 * np.arctan2(
        np.sqrt(1.0 + e) * np.sin(E / 2.0),
        np.sqrt(1.0 - e) * np.cos(E / 2.0),
    ))


def radius_vector(a: float, e: float, E: float) -> float:
    """Heliocentric distance r = a(1 - e·cos E)."""
    return float(a * (1.0 - e * np.cos(E)))


def solve_orbit(
    a: float,
    e: float,
    M: float,
    settings: Optional[SolverSettings] = None,
) -> KeplerSolution:
    """Run the full anomaly chain for mean anomaly ``M`` (radians)."""
    settings = settings or SolverSettings()
    E, iterations, converged = newton_raphson(M, e, settings.tolerance, settings.max_iterations)

    return KeplerSolution(
        M=M,
        E=E,
        nu=true_anomaly(E, e),
        r=radius_vector(a, e, E),
        iterations=iterations,
        converged=converged,
    )
