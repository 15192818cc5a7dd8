"""Quick screen (horizon + mid-path Fresnel) models"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, NamedTuple

from repeater_los.domain.constants import (
    DEFAULT_FRESNEL_FRACTION,
    OPTICAL_K_FACTOR,
    STANDARD_K_FACTOR,
)
from repeater_los.domain import units as conversions

from .base import BaseModel
from .coordinates import Endpoint
from .parameters import PathParameters
from .units import Feet, Meters, Miles


class Verdict(str, Enum):
    DROP = "drop"
    MAYBE = "maybe"
    KEEP = "keep"


class ScreenReason(str, Enum):
    BEYOND_HORIZON = "beyond_horizon"
    WITHIN_STRICT = "within_strict"
    MID_FRESNEL_FAIL = "mid_fresnel_fail"
    MID_FRESNEL_PASS = "mid_fresnel_pass"


class HorizonScreenResult(NamedTuple):
    """Outcome of the curvature-only stage."""

    verdict: Verdict
    strict_horizon_mi: Miles
    standard_horizon_mi: Miles


@dataclass(frozen=True, slots=True)
class FresnelMidpointResult(BaseModel):
    """
    Fresnel clearance evaluated at the path midpoint only.

    Heights are in feet; the Fresnel radius is reported in meters.
    """

    passed: bool
    clearance_ft: Feet
    required_ft: Feet
    fresnel_radius_m: Meters
    bulge_ft: Feet

    @property
    def clearance_m(self) -> Meters:
        return conversions.feet_to_meters(self.clearance_ft)

    @property
    def required_m(self) -> Meters:
        return conversions.feet_to_meters(self.required_ft)

    @property
    def bulge_m(self) -> Meters:
        return conversions.feet_to_meters(self.bulge_ft)


@dataclass(frozen=True, slots=True)
class ScreenInputs(BaseModel):
    """
    Endpoint heights and distance for the quick screen, in feet and miles.

    ``h1_asl_ft``/``h2_asl_ft`` are ground elevations; the midpoint ray
    height uses them only when both are known.
    """

    distance_mi: Miles
    frequency_mhz: float
    h1_agl_ft: Feet
    h2_agl_ft: Feet
    h1_asl_ft: Feet | None = None
    h2_asl_ft: Feet | None = None
    fresnel_fraction: float = DEFAULT_FRESNEL_FRACTION
    k_horizon_strict: float = OPTICAL_K_FACTOR
    k_horizon_generous: float = STANDARD_K_FACTOR
    k_fresnel: float = STANDARD_K_FACTOR

    @classmethod
    def from_endpoints(
        cls,
        home: Endpoint,
        target: Endpoint,
        distance_m: Meters,
        params: PathParameters,
    ) -> "ScreenInputs":
        """Convert metric endpoint geometry to the screen's feet/miles."""
        both_known = (
            home.ground_elevation_m is not None
            and target.ground_elevation_m is not None
        )
        return cls(
            distance_mi=conversions.meters_to_miles(distance_m),
            frequency_mhz=params.frequency_mhz,
            h1_agl_ft=conversions.meters_to_feet(home.antenna_height_m),
            h2_agl_ft=conversions.meters_to_feet(target.antenna_height_m),
            h1_asl_ft=conversions.meters_to_feet(home.ground_elevation_m) if both_known else None,
            h2_asl_ft=conversions.meters_to_feet(target.ground_elevation_m) if both_known else None,
            fresnel_fraction=params.fresnel_fraction,
            k_fresnel=params.k_factor,
        )


@dataclass(frozen=True, slots=True)
class ScreenResult(BaseModel):
    """Combined verdict of the quick screen."""

    verdict: Verdict
    reason: ScreenReason
    strict_horizon_mi: Miles
    standard_horizon_mi: Miles
    fresnel: FresnelMidpointResult | None = None

    def to_dict(self) -> dict[str, Any]:
        data = BaseModel.to_dict(self)
        if self.fresnel is None:
            data.pop("fresnel")
        return data
