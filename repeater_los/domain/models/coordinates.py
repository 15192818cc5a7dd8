from dataclasses import dataclass
from typing import NamedTuple

from repeater_los.domain.exceptions import InvalidInput

from .base import BaseModel
from .units import Meters


class Coordinates(NamedTuple):
    lat: float
    lon: float


@dataclass(frozen=True, slots=True)
class Endpoint(BaseModel):
    """
    A terminal of the radio path (home location or repeater site).

    :param id: Caller-side identifier
    :param latitude: Latitude in decimal degrees
    :param longitude: Longitude in decimal degrees
    :param ground_elevation_m: Ground elevation above sea level, None if unknown
    :param antenna_height_m: Antenna height above ground level (AGL)
    """

    id: str
    latitude: float
    longitude: float
    ground_elevation_m: Meters | None = None
    antenna_height_m: Meters = Meters(1.5)

    @property
    def coordinates(self) -> Coordinates:
        return Coordinates(self.latitude, self.longitude)

    def antenna_top_m(self, fallback_ground_m: float | None = None) -> Meters:
        """Antenna height above sea level, using fallback ground when unknown."""
        ground = self.ground_elevation_m
        if ground is None:
            ground = fallback_ground_m
        if ground is None:
            raise InvalidInput(f"Ground elevation of endpoint {self.id!r} is unknown")
        return Meters(ground + self.antenna_height_m)
