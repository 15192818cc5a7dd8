import math
from typing import Any

import numpy as np
from numpy.typing import NDArray

from repeater_los.domain.constants import EARTH_RADIUS_M
from repeater_los.domain.models.coordinates import Coordinates
from repeater_los.domain.models.units import Meters
from repeater_los.domain.validators import validate_arccos_domain, validate_coordinates


class CoordinatesService:
    """
    Great-circle distance between two points on a spherical Earth, and the
    sample points along the path between them.
    More info: http://gis-lab.info/qa/great-circles.html
    """

    def __init__(
        self,
        coord_a: Coordinates,
        coord_b: Coordinates,
    ):
        """
        Precompute values for two coordinates given in decimal degrees.
        """
        validate_coordinates(coord_a)
        validate_coordinates(coord_b)

        self.earth_radius: Meters = Meters(EARTH_RADIUS_M)
        self.coord_a = coord_a
        self.coord_b = coord_b

        lat_1 = math.radians(coord_a.lat)
        lat_2 = math.radians(coord_b.lat)
        delta = math.radians(coord_b.lon - coord_a.lon)

        self.cos_lat_1 = math.cos(lat_1)
        self.cos_lat_2 = math.cos(lat_2)
        self.sin_lat_1 = math.sin(lat_1)
        self.sin_lat_2 = math.sin(lat_2)
        self.cos_delta = math.cos(delta)

    def get_distance(self) -> Meters:
        """
        Calculates the distance between two coordinates in meters.
        """
        return Meters(self.earth_radius * self.get_angle())

    def get_angle(self) -> float:
        """
        Calculates the angular separation (in radians) between two coordinates.
        """
        cos_angle = (
            self.sin_lat_1 * self.sin_lat_2
            + self.cos_lat_1 * self.cos_lat_2 * self.cos_delta
        )
        # Protect against floating-point errors pushing cos_angle outside [-1, 1]
        cos_angle = validate_arccos_domain(cos_angle)
        return float(np.arccos(cos_angle))

    def get_extended_coordinates(self) -> tuple[Coordinates, Coordinates]:
        """
        Shifts negative longitudes by 360 degrees when the path crosses the
        antimeridian, so that linear interpolation follows the short way.
        """
        lat_a, lon_a = self.coord_a
        lat_b, lon_b = self.coord_b

        if lon_a < 0 and abs(lon_a + 360 - lon_b) < 180:
            lon_a += 360
        if lon_b < 0 and abs(lon_b + 360 - lon_a) < 180:
            lon_b += 360

        return Coordinates(lat_a, lon_a), Coordinates(lat_b, lon_b)

    def linspace(self, points_num: int) -> NDArray[np.floating[Any]]:
        """
        Evenly spaced (lat, lon) rows from A to B inclusive.
        """
        coord_a, coord_b = self.get_extended_coordinates()
        lat_vector = np.linspace(coord_a.lat, coord_b.lat, points_num)
        lon_vector = np.linspace(coord_a.lon, coord_b.lon, points_num)

        # Getting back normal longitude
        lon_vector = np.where(
            lon_vector > 180, self.normalize_longitude_180(lon_vector), lon_vector
        )
        return np.column_stack((lat_vector, lon_vector))

    @staticmethod
    def normalize_longitude_180(lon):
        """
        Normalize longitude value(s) to the range [-180, 180).
        """
        return ((lon + 180) % 360) - 180
