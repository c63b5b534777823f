"""
Single-Hop Take-Off Angle Geometry

Converts between ground distance and take-off angle for a single F2-layer
hop over a spherical Earth of 40000 km circumference, reflecting at the
peak height hmF2.

    earth_angle  = distance / C * 2π                  (central angle)
    horizontal   = R sin(earth_angle / 2)             (half chord, across)
    vertical     = horizontal / tan((π - earth_angle/2) / 2)
    take-off     = atan((vertical + hmF2) / horizontal) - earth_angle / 2

The forward direction is closed form. The inverse has no closed form and
is found by searching integer kilometres; take-off angle is
non-increasing in distance, which makes the search well defined.
"""

import bisect
from typing import Union

import numpy as np

from ..common.constants import (
    EARTH_CIRCUMFERENCE_KM,
    EARTH_RADIUS_KM,
    MAX_SCAN_DISTANCE_KM,
    RAD_TO_DEG,
)

ArrayLike = Union[float, np.ndarray]


def take_off_angle(distance_km: ArrayLike, hmf2_km: ArrayLike) -> ArrayLike:
    """
    Single-hop take-off angle to a station distance_km away

    Args:
        distance_km: Ground distance (km), scalar or array
        hmf2_km: Peak height of the F2 layer (km)

    Returns:
        Degrees above the horizon (float for scalar input, else ndarray)
    """
    earth_angle = np.asarray(distance_km, dtype=np.float64) / EARTH_CIRCUMFERENCE_KM * (2 * np.pi)
    horizontal = EARTH_RADIUS_KM * np.sin(earth_angle / 2)
    tangent_angle = (np.pi - earth_angle / 2) / 2
    vertical = horizontal / (np.sin(tangent_angle) / np.cos(tangent_angle))

    # distance 0 is straight up
    with np.errstate(divide='ignore', invalid='ignore'):
        angle = np.arctan((vertical + hmf2_km) / horizontal) - earth_angle / 2

    degrees = angle * RAD_TO_DEG
    if np.ndim(degrees) == 0:
        return float(degrees)
    return degrees


def distance_for_take_off_angle(toa_deg: float, hmf2_km: float) -> float:
    """
    Ground distance reached by a single hop at take-off angle toa_deg

    Returns the largest whole-km distance d in [0, MAX_SCAN_DISTANCE_KM)
    whose take-off angle is still >= toa_deg, i.e. one less than the
    first distance (counting from 1 km) whose angle drops below it.
    If no distance below MAX_SCAN_DISTANCE_KM undershoots the angle, the
    bound itself is returned as a close-enough answer.

    Args:
        toa_deg: Take-off angle (degrees above horizon)
        hmf2_km: Peak height of the F2 layer (km)

    Returns:
        Distance in km
    """
    distances = range(1, MAX_SCAN_DISTANCE_KM)
    first_below = bisect.bisect_left(
        distances, True, key=lambda d: take_off_angle(d, hmf2_km) < toa_deg
    )

    if first_below == len(distances):
        # close enough
        return float(MAX_SCAN_DISTANCE_KM)

    return float(distances[first_below] - 1)


def take_off_angle_profile(distances_km, hmf2_km: float) -> np.ndarray:
    """Take-off angle for each distance in distances_km (degrees)."""
    return np.atleast_1d(take_off_angle(np.asarray(distances_km, dtype=np.float64), hmf2_km))
