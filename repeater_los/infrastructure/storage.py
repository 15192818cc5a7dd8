import json
from pathlib import Path

import aiofiles
import numpy as np

from repeater_los.domain.exceptions import InvalidInput
from repeater_los.domain.interfaces import BaseProfileStorage
from repeater_los.domain.models.profile import TerrainProfile


class FileProfileStorage(BaseProfileStorage):
    """
    Caches terrain profiles as raw float64 ``n x 5`` matrices
    (lat, lon, distance, ground elevation, straight line) in
    ``<name>.profile`` files. Profiles without sample coordinates are
    written with NaN in the first two columns.
    """

    suffix = ".profile"
    columns = 5

    def __init__(self, output_dir: str = "."):
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)

    def path_for(self, name: str) -> Path:
        return self.output_dir / (name + self.suffix)

    async def load(self, name: str) -> TerrainProfile:
        file_path = self.path_for(name)
        async with aiofiles.open(file_path, "rb") as f:
            content = await f.read()

        try:
            tmp = np.frombuffer(content, dtype=np.float64).reshape((-1, self.columns))
        except ValueError as e:
            raise InvalidInput(
                f"Corrupt profile file {file_path}: {len(content)} bytes is not "
                f"a whole number of {self.columns}-column float64 rows"
            ) from e
        if tmp.shape[0] == 0:
            raise InvalidInput(f"Profile file {file_path} is empty")

        coordinates = tmp[:, :2]
        return TerrainProfile(
            distances_m=tmp[:, 2],
            ground_elevations_m=tmp[:, 3],
            straight_line_m=tmp[:, 4],
            coordinates=None if np.all(np.isnan(coordinates)) else coordinates,
        )

    async def store(self, name: str, profile: TerrainProfile) -> None:
        if profile.coordinates is None:
            coordinates = np.full((profile.size, 2), np.nan)
        else:
            coordinates = profile.coordinates
        tmp = np.hstack(
            (
                coordinates,
                np.column_stack(
                    (
                        profile.distances_m,
                        profile.ground_elevations_m,
                        profile.straight_line_m,
                    )
                ),
            )
        ).astype(np.float64)

        async with aiofiles.open(self.path_for(name), "wb") as f:
            await f.write(tmp.tobytes())

    @staticmethod
    async def load_json(path: str | Path) -> TerrainProfile:
        """Read a profile exported by the line-of-sight web service."""
        async with aiofiles.open(path, "r") as f:
            content = await f.read()
        return TerrainProfile.from_dict(json.loads(content))
