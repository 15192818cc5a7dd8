"""Abstract collaborators the application layer depends on."""

from abc import ABC, abstractmethod
from typing import Any

import numpy as np
from numpy.typing import NDArray

from repeater_los.domain.models.profile import TerrainProfile


class BaseElevationsApiClient(ABC):
    """Supplies ground elevations for a vector of (lat, lon) points."""

    def __init__(self, api_url: str, api_key: str):
        self.api_url = api_url
        self.api_key = api_key

    @abstractmethod
    async def fetch_elevations(
        self, coord_vect: NDArray[np.floating[Any]], block_size: int
    ) -> NDArray[np.float64]:
        """Return one elevation in meters per row of ``coord_vect``."""


class BaseProfileStorage(ABC):
    @abstractmethod
    async def load(self, name: str) -> TerrainProfile:
        pass

    @abstractmethod
    async def store(self, name: str, profile: TerrainProfile) -> None:
        pass
