"""Input validation utilities for line-of-sight calculations."""

import math

import numpy as np
from numpy.typing import NDArray

from repeater_los.domain.exceptions import InvalidInput
from repeater_los.domain.models.coordinates import Coordinates
from repeater_los.domain.models.units import Elevation, Meters


def _require_number(value: float, name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float, np.floating, np.integer)):
        raise InvalidInput(f"{name} must be numeric, got {type(value).__name__}")
    if not math.isfinite(value):
        raise InvalidInput(f"{name} must be finite, got {value}")
    return float(value)


def validate_positive(value: float, name: str) -> None:
    """Validate a strictly positive scalar.

    Raises:
        InvalidInput: If value is not a finite number greater than zero
    """
    if _require_number(value, name) <= 0:
        raise InvalidInput(f"{name} must be positive, got {value}")


def validate_non_negative(value: float, name: str) -> None:
    if _require_number(value, name) < 0:
        raise InvalidInput(f"{name} must be non-negative, got {value}")


def validate_fresnel_fraction(fraction: float) -> None:
    """Validate the target fraction of the first Fresnel zone, (0, 1]."""
    value = _require_number(fraction, "fresnel_fraction")
    if not 0 < value <= 1:
        raise InvalidInput(
            f"fresnel_fraction must be in range (0, 1], got {fraction}"
        )


def validate_path_parameters(params) -> None:
    """Validate a PathParameters instance.

    Raises:
        InvalidInput: On non-positive step, frequency or k-factor, or a
            Fresnel fraction outside (0, 1]
    """
    validate_positive(params.step_m, "step_m")
    validate_positive(params.frequency_mhz, "frequency_mhz")
    validate_positive(params.k_factor, "k_factor")
    validate_fresnel_fraction(params.fresnel_fraction)


def validate_terrain_profile(profile) -> None:
    """Validate the parallel arrays of a TerrainProfile.

    Checks:
        - 1D arrays of equal length, at least two samples
        - No NaN or Inf values
        - Distances start at zero and strictly increase (so the path
          length is positive)

    Raises:
        InvalidInput: If any check fails
    """
    arrays = {
        "distances_m": profile.distances_m,
        "ground_elevations_m": profile.ground_elevations_m,
        "straight_line_m": profile.straight_line_m,
    }
    for name, array in arrays.items():
        if array.ndim != 1:
            raise InvalidInput(f"`{name}` must be a 1D array, got {array.ndim}D")
        if not np.all(np.isfinite(array)):
            bad = np.where(~np.isfinite(array))[0]
            raise InvalidInput(
                f"`{name}` contains non-finite values at indices: {bad[:10].tolist()}"
            )

    sizes = {name: array.size for name, array in arrays.items()}
    if len(set(sizes.values())) != 1:
        raise InvalidInput(f"Profile arrays must have the same length, got {sizes}")

    distances = profile.distances_m
    if distances.size < 2:
        raise InvalidInput(
            f"Profile must contain at least two samples, got {distances.size}"
        )
    if not np.isclose(distances[0], 0.0, atol=1e-9):
        raise InvalidInput(
            f"Profile distances must start at 0, got {distances[0]}"
        )

    steps = np.diff(distances)
    if np.any(steps <= 0):
        bad = np.where(steps <= 0)[0]
        raise InvalidInput(
            "Profile distances must be strictly increasing. "
            f"First offending indices: {bad[:5].tolist()}"
        )


def validate_coordinates(coord: Coordinates) -> None:
    """Validate geographic coordinates.

    Raises:
        InvalidInput: If coordinates are out of valid range
    """
    if not isinstance(coord, Coordinates):
        raise InvalidInput(f"Expected Coordinates, got {type(coord)}")

    if not -90 <= coord.lat <= 90:
        raise InvalidInput(
            f"Invalid latitude {coord.lat}°. Must be in range [-90, 90]"
        )

    if not -180 <= coord.lon <= 180:
        raise InvalidInput(
            f"Invalid longitude {coord.lon}°. Must be in range [-180, 180]"
        )


def validate_elevation_array(
    elevations: NDArray[np.float64], max_jump: Meters = Meters(1000)
) -> None:
    """Validate an array of fetched elevations for data quality.

    Args:
        elevations: Array of elevation values in meters
        max_jump: Maximum allowed elevation change between adjacent points (default: 1000m)

    Raises:
        InvalidInput: If elevation data is invalid

    Checks:
        - No NaN or Inf values
        - Values within plausible Earth elevation range
        - No suspicious jumps between adjacent points
    """
    if not isinstance(elevations, np.ndarray):
        raise InvalidInput(f"Expected numpy array, got {type(elevations)}")

    if elevations.size == 0:
        raise InvalidInput("Elevation array is empty")

    if not np.all(np.isfinite(elevations)):
        bad = np.where(~np.isfinite(elevations))[0]
        raise InvalidInput(
            f"Elevation array contains non-finite values at indices: {bad[:10].tolist()}"
        )

    invalid_mask = (elevations < Elevation(Meters(-500))) | (
        elevations > Elevation(Meters(9000))
    )
    if np.any(invalid_mask):
        invalid_indices = np.where(invalid_mask)[0]
        raise InvalidInput(
            f"Implausible elevations (range: -500 to 9000 m). "
            f"Found {len(invalid_indices)} invalid values. "
            f"First 5 indices: {invalid_indices[:5].tolist()}, "
            f"values: {elevations[invalid_indices][:5].tolist()}"
        )

    if elevations.size > 1:
        diffs = np.abs(np.diff(elevations))
        jump_mask = diffs > max_jump
        if np.any(jump_mask):
            jump_indices = np.where(jump_mask)[0]
            raise InvalidInput(
                f"Suspicious elevation jumps (>{max_jump}m between adjacent points). "
                f"Found {len(jump_indices)} jumps. "
                f"First 5 at indices: {jump_indices[:5].tolist()}, "
                f"magnitudes: {diffs[jump_indices][:5].tolist()} m"
            )


def validate_arccos_domain(value: float) -> float:
    """Clip value to valid arccos domain [-1, 1].

    Note:
        Numerical precision errors can push cos() results slightly outside [-1, 1].
        This function safely clips with a small epsilon tolerance.
    """
    epsilon = 1e-10

    if value < -1 - epsilon or value > 1 + epsilon:
        raise InvalidInput(
            f"Value {value} is far outside arccos domain [-1, 1]. "
            "This indicates a serious calculation error, not just floating-point precision."
        )

    return float(np.clip(value, -1.0, 1.0))
