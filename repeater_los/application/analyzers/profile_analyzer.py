import numpy as np

from repeater_los.domain.geometry import curvature_bulge, fresnel_radius
from repeater_los.domain.models.parameters import PathParameters
from repeater_los.domain.models.profile import ClearanceResult, TerrainProfile
from repeater_los.domain.validators import (
    validate_path_parameters,
    validate_terrain_profile,
)
from repeater_los.logging_config import get_logger

logger = get_logger(__name__)


class ProfileAnalyzer:
    """
    Computes the first-Fresnel-zone clearance curve of a terrain profile.

    Earth curvature (scaled by the k-factor) is applied to both the line of
    sight and the terrain, so clearance is measured in the same curved
    reference frame. Stateless: one instance may serve any number of
    callers.
    """

    def analyze(self, profile: TerrainProfile, params: PathParameters) -> ClearanceResult:
        """
        Args:
            profile: Terrain samples from endpoint A to endpoint B.
            params: Frequency, k-factor and target Fresnel fraction.

        Returns:
            ClearanceResult with per-sample curves and the path summary.

        Raises:
            InvalidInput: If the profile or the parameters are malformed.
        """
        validate_path_parameters(params)
        validate_terrain_profile(profile)

        distances = profile.distances_m - profile.distances_m[0]
        total = float(distances[-1])

        bulge = curvature_bulge(distances, params.k_factor)
        line_of_sight = profile.straight_line_m + bulge
        terrain = profile.ground_elevations_m + bulge

        half_width = params.fresnel_fraction * fresnel_radius(
            distances, total, params.frequency_mhz
        )
        # Zero-width envelope at the antennas themselves
        half_width[0] = 0.0
        half_width[-1] = 0.0

        lower = line_of_sight - half_width
        upper = line_of_sight + half_width
        clearance = lower - terrain

        worst = int(np.argmin(clearance))
        min_clearance = float(clearance[worst])

        logger.debug(
            f"Analyzed {distances.size} samples over {total:.1f} m: "
            f"min clearance {min_clearance:.2f} m at index {worst}"
        )

        return ClearanceResult(
            distances_m=distances,
            curvature_bulge_m=bulge,
            effective_line_of_sight_m=line_of_sight,
            effective_terrain_m=terrain,
            fresnel_radius_m=half_width,
            fresnel_lower_m=lower,
            fresnel_upper_m=upper,
            clearance_m=clearance,
            has_line_of_sight=min_clearance >= 0,
            min_clearance_m=min_clearance,
            worst_sample_index=worst,
            total_distance_m=total,
            frequency_mhz=float(params.frequency_mhz),
            fresnel_fraction=float(params.fresnel_fraction),
            k_factor=float(params.k_factor),
        )
