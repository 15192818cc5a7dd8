from dataclasses import dataclass

from repeater_los.domain.constants import DEFAULT_FRESNEL_FRACTION, STANDARD_K_FACTOR

from .base import BaseModel


@dataclass(frozen=True, slots=True)
class PathParameters(BaseModel):
    """
    Tunable physical parameters of one path analysis.

    The analyzer validates these strictly; defaults follow common RF
    planning practice (standard refraction, 60% first Fresnel clearance).
    """

    step_m: float = 200.0  # sample spacing along the path
    frequency_mhz: float = 146.0
    k_factor: float = STANDARD_K_FACTOR
    fresnel_fraction: float = DEFAULT_FRESNEL_FRACTION
