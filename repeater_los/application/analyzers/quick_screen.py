from repeater_los.domain import geometry
from repeater_los.domain.constants import OPTICAL_K_FACTOR, STANDARD_K_FACTOR
from repeater_los.domain.models.screening import (
    FresnelMidpointResult,
    HorizonScreenResult,
    ScreenInputs,
    ScreenReason,
    ScreenResult,
    Verdict,
)
from repeater_los.domain.models.units import Feet, Miles
from repeater_los.domain.units import meters_to_feet, miles_to_meters
from repeater_los.domain.validators import (
    validate_fresnel_fraction,
    validate_non_negative,
    validate_positive,
)
from repeater_los.logging_config import get_logger

logger = get_logger(__name__)


class QuickScreen:
    """
    Two-stage Keep/Maybe/Drop classifier that needs no terrain profile.

    Stage 1 compares the distance against the radio horizon for k=1
    (strict) and k=4/3 (generous). Stage 2 checks Fresnel clearance over
    a smooth earth at the path midpoint only.

    Works in feet and miles; metric geometry is shared with the profile
    analyzer through ``repeater_los.domain.geometry``.
    """

    @staticmethod
    def horizon_distance(
        h1_ft: Feet, h2_ft: Feet, k_factor: float = STANDARD_K_FACTOR
    ) -> Miles:
        """Radio horizon in miles for antenna heights in feet."""
        validate_non_negative(h1_ft, "h1_ft")
        validate_non_negative(h2_ft, "h2_ft")
        validate_positive(k_factor, "k_factor")
        return geometry.horizon_distance(h1_ft, h2_ft, k_factor)

    def horizon_screen(
        self,
        h1_ft: Feet,
        h2_ft: Feet,
        distance_mi: Miles,
        k_strict: float = OPTICAL_K_FACTOR,
        k_generous: float = STANDARD_K_FACTOR,
    ) -> HorizonScreenResult:
        """
        Curvature-only stage.

        Drop beyond the generous horizon, Keep within the strict one
        (both bounds inclusive), Maybe in between.
        """
        validate_non_negative(distance_mi, "distance_mi")
        strict = self.horizon_distance(h1_ft, h2_ft, k_strict)
        standard = self.horizon_distance(h1_ft, h2_ft, k_generous)

        if distance_mi > standard:
            verdict = Verdict.DROP
        elif distance_mi <= strict:
            verdict = Verdict.KEEP
        else:
            verdict = Verdict.MAYBE

        return HorizonScreenResult(verdict, strict, standard)

    def fresnel_midpoint_screen(self, inputs: ScreenInputs) -> FresnelMidpointResult:
        """
        Smooth-earth Fresnel clearance at x = D/2.

        The ray height is the mean of the two antenna tops (ASL when both
        ground elevations are known, AGL otherwise); the midpoint earth
        bulge is subtracted from it and compared with the required
        fraction of the first Fresnel radius.
        """
        self._validate_inputs(inputs)

        distance_m = miles_to_meters(inputs.distance_mi)
        radius_m = geometry.midpoint_fresnel_radius(distance_m, inputs.frequency_mhz)
        required_ft = meters_to_feet(inputs.fresnel_fraction * radius_m)
        bulge_ft = meters_to_feet(geometry.midpoint_bulge(distance_m, inputs.k_fresnel))

        if inputs.h1_asl_ft is not None and inputs.h2_asl_ft is not None:
            ray_ft = (
                (inputs.h1_asl_ft + inputs.h1_agl_ft)
                + (inputs.h2_asl_ft + inputs.h2_agl_ft)
            ) / 2
        else:
            ray_ft = (inputs.h1_agl_ft + inputs.h2_agl_ft) / 2
        clearance_ft = Feet(ray_ft - bulge_ft)

        return FresnelMidpointResult(
            passed=clearance_ft >= required_ft,
            clearance_ft=clearance_ft,
            required_ft=required_ft,
            fresnel_radius_m=radius_m,
            bulge_ft=bulge_ft,
        )

    def classify(self, inputs: ScreenInputs) -> ScreenResult:
        """
        Combine both stages.

        Verdict matrix:
            horizon Drop                  -> Drop  (beyond_horizon)
            horizon Keep,  midpoint pass  -> Keep  (mid_fresnel_pass)
            horizon Keep,  midpoint fail  -> Maybe (mid_fresnel_fail)
            horizon Maybe, midpoint pass  -> Maybe (mid_fresnel_pass)
            horizon Maybe, midpoint fail  -> Drop  (mid_fresnel_fail)
        """
        self._validate_inputs(inputs)
        horizon = self.horizon_screen(
            inputs.h1_agl_ft,
            inputs.h2_agl_ft,
            inputs.distance_mi,
            k_strict=inputs.k_horizon_strict,
            k_generous=inputs.k_horizon_generous,
        )

        if horizon.verdict is Verdict.DROP:
            result = ScreenResult(
                verdict=Verdict.DROP,
                reason=ScreenReason.BEYOND_HORIZON,
                strict_horizon_mi=horizon.strict_horizon_mi,
                standard_horizon_mi=horizon.standard_horizon_mi,
            )
        else:
            fresnel = self.fresnel_midpoint_screen(inputs)
            if horizon.verdict is Verdict.KEEP:
                verdict = Verdict.KEEP if fresnel.passed else Verdict.MAYBE
            else:
                verdict = Verdict.MAYBE if fresnel.passed else Verdict.DROP
            reason = (
                ScreenReason.MID_FRESNEL_PASS
                if fresnel.passed
                else ScreenReason.MID_FRESNEL_FAIL
            )
            result = ScreenResult(
                verdict=verdict,
                reason=reason,
                strict_horizon_mi=horizon.strict_horizon_mi,
                standard_horizon_mi=horizon.standard_horizon_mi,
                fresnel=fresnel,
            )

        logger.debug(
            f"Screened {inputs.distance_mi:.2f} mi path: "
            f"{result.verdict.value} ({result.reason.value})"
        )
        return result

    @staticmethod
    def _validate_inputs(inputs: ScreenInputs) -> None:
        validate_non_negative(inputs.distance_mi, "distance_mi")
        validate_positive(inputs.frequency_mhz, "frequency_mhz")
        validate_non_negative(inputs.h1_agl_ft, "h1_agl_ft")
        validate_non_negative(inputs.h2_agl_ft, "h2_agl_ft")
        validate_fresnel_fraction(inputs.fresnel_fraction)
        validate_positive(inputs.k_horizon_strict, "k_horizon_strict")
        validate_positive(inputs.k_horizon_generous, "k_horizon_generous")
        validate_positive(inputs.k_fresnel, "k_fresnel")
