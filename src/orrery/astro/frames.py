"""
Orbital-plane to heliocentric ecliptic transformation.

The perifocal frame has x toward perihelion and z along the orbit
normal. It is carried into the ecliptic frame by the rotation
R3(-Ω) · R1(-I) · R3(-ω).
"""

import numpy as np


def perifocal_to_ecliptic_matrix(
    arg_peri: float,
    inclination: float,
    long_node: float,
) -> np.ndarray:
    """
    Rotation matrix from the perifocal frame to the ecliptic frame.

    Parameters
    ----------
    arg_peri : float
        Argument of perihelion ω in radians.
    inclination : float
        Inclination I in radians.
    long_node : float
        Longitude of the ascending node Ω in radians.

    Returns
    -------
    ndarray
        3x3 rotation matrix.
    """
    cos_w, sin_w = np.cos(arg_peri), np.sin(arg_peri)
    cos_i, sin_i = np.cos(inclination), np.sin(inclination)
    cos_n, sin_n = np.cos(long_node), np.sin(long_node)

    return np.array([
        [
            cos_n * cos_w - sin_n * sin_w * cos_i,
            -cos_n * sin_w - sin_n * cos_w * cos_i,
            sin_n * sin_i,
        ],
        [
            sin_n * cos_w + cos_n * sin_w * cos_i,
            -sin_n * sin_w + cos_n * cos_w * cos_i,
            -cos_n * sin_i,
        ],
        [
            sin_w * sin_i,
            cos_w * sin_i,
            cos_i,
        ],
    ])


def orbital_to_ecliptic(
    x_orbital: float,
    y_orbital: float,
    arg_peri: float,
    inclination: float,
    long_node: float,
) -> tuple[float, float, float]:
    """
    Rotate an in-plane position into heliocentric ecliptic coordinates.

    Angles are in radians; the returned ``(x, y, z)`` share the units of
    the input coordinates.
    """
    rotation = perifocal_to_ecliptic_matrix(arg_peri, inclination, long_node)
    x, y, z = rotation @ np.array([x_orbital, y_orbital, 0.0])
    return float(x), float(y), float(z)


def ecliptic_longitude(x: float, y: float) -> float:
    """Heliocentric ecliptic longitude atan2(y, x) in degrees, in (-180, 180]."""
    return float(np.degrees(np.arctan2(y, x)))
