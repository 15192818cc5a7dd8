import math

import numpy as np

from repeater_los.domain.exceptions import InvalidInput
from repeater_los.domain.interfaces import BaseElevationsApiClient
from repeater_los.domain.models.coordinates import Endpoint
from repeater_los.domain.models.parameters import PathParameters
from repeater_los.domain.models.profile import TerrainProfile
from repeater_los.domain.validators import validate_elevation_array, validate_positive
from repeater_los.logging_config import get_logger

from .coordinates import CoordinatesService

logger = get_logger(__name__)


class PathProfileService:
    """
    Builds a TerrainProfile between two endpoints from sampled elevations.
    """

    def __init__(
        self,
        elevations_api_client: BaseElevationsApiClient,
        block_size: int = 100,
        max_points: int = 1024,
    ):
        self.elevations_api_client = elevations_api_client
        self.block_size = block_size
        self.max_points = max_points

    def points_number(self, distance_m: float, step_m: float) -> int:
        """
        Number of samples for the path, both endpoints included.

        Capped at ``max_points``; the effective spacing then grows.
        """
        validate_positive(step_m, "step_m")
        points_num = math.ceil(distance_m / step_m) + 1
        if points_num > self.max_points:
            logger.warning(
                f"{points_num} samples requested, limited to {self.max_points} "
                f"(spacing {distance_m / (self.max_points - 1):.1f} m)"
            )
            points_num = self.max_points
        return max(points_num, 2)

    async def get_profile(
        self, home: Endpoint, target: Endpoint, params: PathParameters
    ) -> TerrainProfile:
        """
        Entry point that samples the path, fetches ground elevations and
        draws the straight line between the two antenna tops.

        Endpoints with unknown ground elevation take the first/last
        fetched elevation.
        """
        coordinates_service = CoordinatesService(home.coordinates, target.coordinates)
        distance = coordinates_service.get_distance()
        if home.coordinates == target.coordinates or distance <= 0:
            raise InvalidInput(
                f"Endpoints {home.id!r} and {target.id!r} coincide, path length is zero"
            )

        points_num = self.points_number(distance, params.step_m)
        coord_vect = coordinates_service.linspace(points_num)
        logger.debug(
            f"Sampling {points_num} points over {distance:.1f} m "
            f"between {home.coordinates} and {target.coordinates}"
        )

        elevations = await self.elevations_api_client.fetch_elevations(
            coord_vect, self.block_size
        )
        elevations = np.asarray(elevations, dtype=np.float64)
        if elevations.shape != (points_num,):
            raise InvalidInput(
                f"Expected {points_num} elevations, got {elevations.size}"
            )
        validate_elevation_array(elevations)

        return TerrainProfile.from_ground(
            distances_m=np.linspace(0.0, distance, points_num),
            ground_elevations_m=elevations,
            start_height_m=home.antenna_top_m(fallback_ground_m=float(elevations[0])),
            end_height_m=target.antenna_top_m(fallback_ground_m=float(elevations[-1])),
            coordinates=coord_vect,
        )
