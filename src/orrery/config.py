"""Configuration: Kepler solver precision and element-table path from environment."""

import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from orrery.exceptions import ConfigError

# Defaults match the reference solver; env vars override.
DEFAULT_TOLERANCE = 1e-8
DEFAULT_MAX_ITERATIONS = 100

TOLERANCE_ENV = "ORRERY_KEPLER_TOLERANCE"
MAX_ITERATIONS_ENV = "ORRERY_KEPLER_MAX_ITERATIONS"
ELEMENTS_PATH_ENV = "ORRERY_ELEMENTS_PATH"


class SolverSettings(BaseModel):
    """Precision settings for the Newton-Raphson Kepler solver.

    Exceeding ``max_iterations`` is not an error: the solver returns its
    best estimate and flags it as not converged.
    """

    model_config = ConfigDict(frozen=True)

    tolerance: float = Field(DEFAULT_TOLERANCE, gt=0.0, description="Stop when |dE| < tolerance (radians)")
    max_iterations: int = Field(DEFAULT_MAX_ITERATIONS, ge=1, description="Iteration cap")


def load_solver_settings() -> SolverSettings:
    """Build solver settings from ``ORRERY_KEPLER_*`` env vars or defaults.

    Raises:
        ConfigError: If an env var is set but is not a valid value.
    """
    values = {}
    tolerance = os.environ.get(TOLERANCE_ENV, "").strip()
    if tolerance:
        values["tolerance"] = tolerance
    max_iterations = os.environ.get(MAX_ITERATIONS_ENV, "").strip()
    if max_iterations:
        values["max_iterations"] = max_iterations

    try:
        return SolverSettings(**values)
    except ValidationError as e:
        raise ConfigError(f"Invalid Kepler solver settings in environment: {e}") from e


def get_elements_path() -> Optional[Path]:
    """Return the element-table JSON file from ``ORRERY_ELEMENTS_PATH``, if set."""
    path = os.environ.get(ELEMENTS_PATH_ENV, "").strip()
    return Path(path) if path else None
