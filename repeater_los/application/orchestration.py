"""Orchestration service (coordinates workflow with dependency injection)"""

from typing import Optional

from repeater_los.application.analyzers import ProfileAnalyzer, QuickScreen
from repeater_los.application.services.coordinates import CoordinatesService
from repeater_los.application.services.profile import PathProfileService
from repeater_los.domain.interfaces import BaseProfileStorage
from repeater_los.domain.models.assessment import LinkAssessment
from repeater_los.domain.models.coordinates import Endpoint
from repeater_los.domain.models.parameters import PathParameters
from repeater_los.domain.models.profile import TerrainProfile
from repeater_los.domain.models.screening import ScreenInputs, Verdict
from repeater_los.infrastructure.output.formatters import OutputFormatter
from repeater_los.logging_config import get_logger

logger = get_logger(__name__)


class OrchestrationService:
    """
    Screens a home/target pair and, when warranted, analyses its terrain.

    Uses dependency injection to decouple components and enable testing.
    All I/O dependencies (elevation client, storage, formatter) are injected.
    """

    def __init__(
        self,
        profile_service: PathProfileService,
        analyzer: Optional[ProfileAnalyzer] = None,
        quick_screen: Optional[QuickScreen] = None,
        storage: Optional[BaseProfileStorage] = None,
        output_formatter: Optional[OutputFormatter] = None,
    ):
        """
        Args:
            profile_service: Service building terrain profiles from elevations
            analyzer: Full-profile clearance analyzer
            quick_screen: Terrain-free pre-classifier
            storage: Optional cache of fetched profiles
            output_formatter: Optional formatter for console output
        """
        self.profile_service = profile_service
        self.analyzer = analyzer or ProfileAnalyzer()
        self.quick_screen = quick_screen or QuickScreen()
        self.storage = storage
        self.output_formatter = output_formatter

    async def _get_profile(
        self,
        home: Endpoint,
        target: Endpoint,
        params: PathParameters,
        profile_name: Optional[str],
    ) -> TerrainProfile:
        if self.storage is not None and profile_name:
            try:
                profile = await self.storage.load(profile_name)
            except FileNotFoundError:
                logger.info(f"No stored profile {profile_name!r}, fetching elevations")
            else:
                if profile.connects(home.coordinates, target.coordinates):
                    logger.info(f"Loaded stored profile {profile_name!r}")
                    return profile
                logger.warning(
                    f"Stored profile {profile_name!r} does not run from "
                    f"{home.coordinates} to {target.coordinates}, fetching elevations"
                )

        profile = await self.profile_service.get_profile(home, target, params)

        if self.storage is not None and profile_name:
            await self.storage.store(profile_name, profile)
        return profile

    async def process(
        self,
        home: Endpoint,
        target: Endpoint,
        params: PathParameters,
        force: bool = False,
        profile: Optional[TerrainProfile] = None,
        profile_name: Optional[str] = None,
        display_output: bool = False,
    ) -> LinkAssessment:
        """
        Execute the assessment workflow.

        Steps:
        1. Quick screen from endpoint heights and great-circle distance
        2. Stop on Drop unless ``force`` is set
        3. Obtain the terrain profile (given, stored or fetched)
        4. Full clearance analysis
        5. Format output (if formatter provided)

        Returns:
            LinkAssessment: screen verdict and, unless dropped, the clearance curve
        """
        if profile is not None:
            distance = profile.total_distance_m
        else:
            distance = CoordinatesService(
                home.coordinates, target.coordinates
            ).get_distance()

        screen = self.quick_screen.classify(
            ScreenInputs.from_endpoints(home, target, distance, params)
        )
        logger.info(
            f"{home.id} -> {target.id}: quick screen {screen.verdict.value} "
            f"({screen.reason.value})"
        )

        clearance = None
        if screen.verdict is not Verdict.DROP or force:
            if profile is None:
                profile = await self._get_profile(home, target, params, profile_name)
            clearance = self.analyzer.analyze(profile, params)
            logger.info(
                f"{home.id} -> {target.id}: line of sight "
                f"{'yes' if clearance.has_line_of_sight else 'no'}, "
                f"min clearance {clearance.min_clearance_m:.1f} m"
            )

        if display_output and self.output_formatter:
            self.output_formatter.format_result(
                screen=screen, clearance=clearance, home=home, target=target
            )

        return LinkAssessment(
            home=home,
            target=target,
            params=params,
            distance_m=float(distance),
            screen=screen,
            clearance=clearance,
        )
