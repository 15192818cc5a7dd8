"""Terrain profile and clearance result models"""

import math
from dataclasses import dataclass
from collections.abc import Iterable, Mapping
from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from repeater_los.domain.exceptions import InvalidInput
from repeater_los.domain import geometry
from repeater_los.domain.constants import RATING_FRESNEL_FRACTION

from .base import BaseModel
from .coordinates import Coordinates
from .units import Meters


def _frozen_array(values: ArrayLike) -> NDArray[np.float64]:
    array = np.array(values, dtype=np.float64)
    array.setflags(write=False)
    return array


@dataclass(frozen=True, slots=True, eq=False)
class TerrainProfile(BaseModel):
    """
    Sampled terrain between endpoint A and endpoint B.

    :param distances_m: Distance of each sample from A, first 0, last = path length
    :param ground_elevations_m: Ground elevation at each sample
    :param straight_line_m: Unadjusted straight line between the two antenna tops
    :param coordinates: Optional ``n x 2`` (lat, lon) of each sample
    """

    distances_m: NDArray[np.float64]
    ground_elevations_m: NDArray[np.float64]
    straight_line_m: NDArray[np.float64]
    coordinates: NDArray[np.float64] | None = None

    def __post_init__(self):
        for name in ("distances_m", "ground_elevations_m", "straight_line_m"):
            try:
                array = _frozen_array(getattr(self, name))
            except (TypeError, ValueError) as e:
                raise InvalidInput(f"`{name}` must be numeric: {e}") from e
            object.__setattr__(self, name, array)

        if self.coordinates is not None:
            try:
                coordinates = _frozen_array(self.coordinates)
            except (TypeError, ValueError) as e:
                raise InvalidInput(f"`coordinates` must be numeric: {e}") from e
            if coordinates.shape != (self.distances_m.size, 2):
                raise InvalidInput(
                    f"`coordinates` must have shape ({self.distances_m.size}, 2), "
                    f"got {coordinates.shape}"
                )
            object.__setattr__(self, "coordinates", coordinates)

    @classmethod
    def from_ground(
        cls,
        distances_m: ArrayLike,
        ground_elevations_m: ArrayLike,
        start_height_m: float,
        end_height_m: float,
        coordinates: ArrayLike | None = None,
    ) -> "TerrainProfile":
        """
        Build a profile whose reference line joins two antenna tops (ASL).
        """
        distances = np.asarray(distances_m, dtype=np.float64)
        return cls(
            distances_m=distances,
            ground_elevations_m=ground_elevations_m,
            straight_line_m=geometry.straight_line(distances, start_height_m, end_height_m),
            coordinates=coordinates,
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | Iterable[Mapping[str, Any]]) -> "TerrainProfile":
        """
        Parse a line-of-sight service payload.

        Accepts either the DTO form ``{"profile": {"distM", "elevM", "losM"}}``
        or a legacy list of points carrying ``dFromA``/``distM``/``d``,
        ``ground``/``groundM``/``elevM`` and ``lineEff``/``losM`` keys.
        """
        if isinstance(data, Mapping):
            profile = data.get("profile")
            if isinstance(profile, Mapping) and all(
                key in profile for key in ("distM", "elevM", "losM")
            ):
                return cls(
                    distances_m=profile["distM"],
                    ground_elevations_m=profile["elevM"],
                    straight_line_m=profile["losM"],
                )
            points = data.get("points")
        else:
            points = data

        if points is None:
            raise InvalidInput("Unexpected line-of-sight payload: no profile or points")

        def pick(point: Mapping[str, Any], *keys: str) -> float:
            for key in keys:
                if point.get(key) is not None:
                    return float(point[key])
            return 0.0

        points = list(points)
        return cls(
            distances_m=[pick(p, "dFromA", "distM", "d") for p in points],
            ground_elevations_m=[pick(p, "ground", "groundM", "elevM") for p in points],
            straight_line_m=[pick(p, "lineEff", "losM") for p in points],
        )

    @property
    def size(self) -> int:
        return int(self.distances_m.size)

    @property
    def total_distance_m(self) -> Meters:
        if self.distances_m.size == 0:
            return Meters(0.0)
        return Meters(float(self.distances_m[-1] - self.distances_m[0]))

    def reversed(self) -> "TerrainProfile":
        """The same path seen from endpoint B, distances measured from B."""
        distances = self.distances_m[-1] - self.distances_m[::-1]
        return TerrainProfile(
            distances_m=distances,
            ground_elevations_m=self.ground_elevations_m[::-1],
            straight_line_m=self.straight_line_m[::-1],
            coordinates=None if self.coordinates is None else self.coordinates[::-1],
        )

    def connects(
        self, start: Coordinates, end: Coordinates, tolerance_deg: float = 1e-6
    ) -> bool:
        """
        Whether the profile runs from ``start`` to ``end``.

        False when the samples carry no coordinates.
        """
        if self.coordinates is None or self.size == 0:
            return False
        actual = self.coordinates[[0, -1]]
        expected = np.array([start, end], dtype=np.float64)
        delta = actual - expected
        # longitudes compared modulo 360
        delta[:, 1] = (delta[:, 1] + 180.0) % 360.0 - 180.0
        return bool(np.all(np.abs(delta) <= tolerance_deg))

    def to_dict(self) -> dict[str, Any]:
        return {
            "distM": self.distances_m.tolist(),
            "elevM": self.ground_elevations_m.tolist(),
            "losM": self.straight_line_m.tolist(),
        }

    def __repr__(self) -> str:
        return (
            f"TerrainProfile(samples={self.size}, "
            f"total_distance_m={self.total_distance_m:.1f})"
        )


@dataclass(frozen=True, slots=True, eq=False)
class ClearanceResult(BaseModel):
    """
    Clearance curve of one path (immutable).

    Per-sample arrays share the indexing of the analysed TerrainProfile.
    ``fresnel_radius_m`` is the envelope half-width at the target fraction,
    forced to zero at both antennas.
    """

    distances_m: NDArray[np.float64]
    curvature_bulge_m: NDArray[np.float64]
    effective_line_of_sight_m: NDArray[np.float64]
    effective_terrain_m: NDArray[np.float64]
    fresnel_radius_m: NDArray[np.float64]
    fresnel_lower_m: NDArray[np.float64]
    fresnel_upper_m: NDArray[np.float64]
    clearance_m: NDArray[np.float64]
    has_line_of_sight: bool
    min_clearance_m: float
    worst_sample_index: int
    total_distance_m: float
    frequency_mhz: float
    fresnel_fraction: float
    k_factor: float

    def __post_init__(self):
        for name in (
            "distances_m",
            "curvature_bulge_m",
            "effective_line_of_sight_m",
            "effective_terrain_m",
            "fresnel_radius_m",
            "fresnel_lower_m",
            "fresnel_upper_m",
            "clearance_m",
        ):
            object.__setattr__(self, name, _frozen_array(getattr(self, name)))

    @property
    def chord_m(self) -> NDArray[np.float64]:
        """Straight chord between the two curved antenna tops."""
        los = self.effective_line_of_sight_m
        return geometry.straight_line(self.distances_m, los[0], los[-1])

    @property
    def target_radius_at_worst_m(self) -> float:
        return float(self.fresnel_radius_m[self.worst_sample_index])

    @property
    def full_radius_at_worst_m(self) -> float:
        """Full first-Fresnel radius at the worst sample."""
        return self.target_radius_at_worst_m / self.fresnel_fraction

    @property
    def margin_ratio(self) -> float:
        """
        Worst clearance relative to 60% of the first Fresnel zone there.

        -inf when the zone has no width at the worst sample.
        """
        required = RATING_FRESNEL_FRACTION * self.full_radius_at_worst_m
        if required <= 0:
            return -math.inf
        return self.min_clearance_m / required
