"""Application settings read from the environment (.env supported)."""

from dataclasses import dataclass

from environs import Env

from repeater_los.domain.constants import (
    DEFAULT_FRESNEL_FRACTION,
    OUTPUT_DATA_DIR,
    STANDARD_K_FACTOR,
)
from repeater_los.domain.models.parameters import PathParameters


@dataclass(slots=True)
class Settings:
    """
    Defaults the application applies before calling into the analyzers.

    Environment keys: ELEVATION_API_URL, ELEVATION_API_KEY, OUTPUT_DATA_DIR,
    LOS_STEP_METERS, LOS_FREQUENCY_MHZ, LOS_K_FACTOR, LOS_FRESNEL_FRACTION,
    LOS_HOME_AGL_M, LOS_TARGET_AGL_M.
    """

    elevation_api_url: str = ""
    elevation_api_key: str = ""
    output_dir: str = OUTPUT_DATA_DIR
    step_m: float = 200.0
    frequency_mhz: float = 146.0
    k_factor: float = STANDARD_K_FACTOR
    fresnel_fraction: float = DEFAULT_FRESNEL_FRACTION
    home_agl_m: float = 1.5
    target_agl_m: float = 15.0

    @classmethod
    def from_env(cls, env: Env) -> "Settings":
        return cls(
            elevation_api_url=env.str("ELEVATION_API_URL", ""),
            elevation_api_key=env.str("ELEVATION_API_KEY", ""),
            output_dir=env.str("OUTPUT_DATA_DIR", OUTPUT_DATA_DIR),
            step_m=env.float("LOS_STEP_METERS", 200.0),
            frequency_mhz=env.float("LOS_FREQUENCY_MHZ", 146.0),
            k_factor=env.float("LOS_K_FACTOR", STANDARD_K_FACTOR),
            fresnel_fraction=env.float("LOS_FRESNEL_FRACTION", DEFAULT_FRESNEL_FRACTION),
            home_agl_m=env.float("LOS_HOME_AGL_M", 1.5),
            target_agl_m=env.float("LOS_TARGET_AGL_M", 15.0),
        )

    def path_parameters(self, **overrides) -> PathParameters:
        """PathParameters from these defaults; None overrides are ignored."""
        values = {
            "step_m": self.step_m,
            "frequency_mhz": self.frequency_mhz,
            "k_factor": self.k_factor,
            "fresnel_fraction": self.fresnel_fraction,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return PathParameters(**values)
