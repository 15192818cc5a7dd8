# repeater_los/domain/geometry.py
"""
Earth-curvature and Fresnel-zone geometry shared by the profile analyzer
and the quick screen.

All lengths are in meters unless the function name says otherwise.
"""

import math

import numpy as np
from numpy.typing import ArrayLike, NDArray

from repeater_los.domain.constants import (
    EARTH_RADIUS_M,
    HORIZON_COEFFICIENT_OPTICAL,
    HORIZON_COEFFICIENT_STANDARD,
    OPTICAL_K_FACTOR,
    SPEED_OF_LIGHT,
    STANDARD_K_FACTOR,
)
from repeater_los.domain.models.units import Feet, MHz, Meters, Miles


def effective_earth_radius(k_factor: float) -> Meters:
    """Earth radius scaled by the refraction k-factor."""
    return Meters(k_factor * EARTH_RADIUS_M)


def wavelength(frequency_mhz: MHz) -> Meters:
    return Meters(SPEED_OF_LIGHT / (frequency_mhz * 1e6))


def curvature_bulge(distances_m: ArrayLike, k_factor: float) -> NDArray[np.float64]:
    """
    Earth-curvature sag relative to the straight chord between the path ends.

    Uses the symmetric parabolic approximation h = x * (D - x) / (2 * Reff),
    where x is the distance from the first sample and D the path length.

    Args:
        distances_m: 1D array of distances along the path in meters.
        k_factor: Effective earth radius multiplier.

    Returns:
        1D array of bulge heights in meters, zero at both ends.
    """
    distances = np.asarray(distances_m, dtype=np.float64)
    if distances.size < 2:
        return np.zeros_like(distances)

    x = distances - distances[0]
    total = distances[-1] - distances[0]
    return x * (total - x) / (2 * effective_earth_radius(k_factor))


def fresnel_radius(
    distances_m: ArrayLike, total_m: float, frequency_mhz: float
) -> NDArray[np.float64]:
    """
    Radius of the first Fresnel zone at each sample: sqrt(lambda * d1 * d2 / D).

    Args:
        distances_m: 1D array of distances from endpoint A in meters.
        total_m: Path length D in meters, must be positive.
        frequency_mhz: Carrier frequency in MHz, must be positive.

    Returns:
        1D array of radii in meters. Zero at d1 = 0 and d1 = D.
    """
    lam = wavelength(frequency_mhz)
    d1 = np.asarray(distances_m, dtype=np.float64)
    d2 = np.maximum(0.0, total_m - d1)
    return np.sqrt(lam * d1 * d2 / total_m)


def midpoint_bulge(distance_m: float, k_factor: float) -> Meters:
    """Curvature sag at x = D/2: D^2 / (8 * Reff)."""
    return Meters(distance_m**2 / (8 * effective_earth_radius(k_factor)))


def midpoint_fresnel_radius(distance_m: float, frequency_mhz: float) -> Meters:
    """First Fresnel radius at x = D/2: sqrt(lambda * D / 4)."""
    return Meters(math.sqrt(wavelength(frequency_mhz) * max(0.0, distance_m) / 4))


def horizon_coefficient(k_factor: float = STANDARD_K_FACTOR) -> float:
    """
    Coefficient C of the radio-horizon rule d(mi) = C * (sqrt(h1) + sqrt(h2)).

    Anchored at C=1.06 for k=1 and C=1.23 for k=4/3. Other k values are
    interpolated linearly along 1/sqrt(k), with the interpolation fraction
    clamped to [0, 1].
    """
    t = (1 / math.sqrt(k_factor) - 1) / (1 / math.sqrt(STANDARD_K_FACTOR) - 1)
    t = max(0.0, min(1.0, t))
    if math.isclose(k_factor, OPTICAL_K_FACTOR):
        t = 0.0
    elif math.isclose(k_factor, STANDARD_K_FACTOR):
        t = 1.0
    return HORIZON_COEFFICIENT_OPTICAL + (
        HORIZON_COEFFICIENT_STANDARD - HORIZON_COEFFICIENT_OPTICAL
    ) * t


def horizon_distance(
    h1_ft: Feet, h2_ft: Feet, k_factor: float = STANDARD_K_FACTOR
) -> Miles:
    """Radio-horizon distance in miles for two antenna heights in feet."""
    coefficient = horizon_coefficient(k_factor)
    return Miles(
        coefficient * (math.sqrt(max(0.0, h1_ft)) + math.sqrt(max(0.0, h2_ft)))
    )


def straight_line(
    distances_m: ArrayLike, start_height_m: float, end_height_m: float
) -> NDArray[np.float64]:
    """Linear interpolation between the two antenna tops along the path."""
    distances = np.asarray(distances_m, dtype=np.float64)
    total = distances[-1] - distances[0] if distances.size else 0.0
    if total <= 0:
        return np.full_like(distances, start_height_m)
    t = (distances - distances[0]) / total
    return start_height_m + (end_height_m - start_height_m) * t
