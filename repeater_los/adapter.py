"""Facade adapter for simplified API integration."""

from environs import Env

from repeater_los.application.analyzers import ProfileAnalyzer, QuickScreen
from repeater_los.application.orchestration import OrchestrationService
from repeater_los.application.services.profile import PathProfileService
from repeater_los.config import Settings
from repeater_los.domain.exceptions import InvalidInput
from repeater_los.domain.interfaces import BaseElevationsApiClient, BaseProfileStorage
from repeater_los.domain.models.assessment import LinkAssessment
from repeater_los.domain.models.coordinates import Endpoint
from repeater_los.domain.models.parameters import PathParameters
from repeater_los.domain.models.profile import ClearanceResult, TerrainProfile
from repeater_los.domain.models.screening import ScreenInputs, ScreenResult
from repeater_los.infrastructure.api.clients import AsyncElevationsApiClient
from repeater_los.infrastructure.storage import FileProfileStorage


class RepeaterLosAPI:
    """
    Simplified facade for external integration.

    Hides dependency wiring behind plain function-call semantics: screen a
    candidate without terrain, analyse a ready profile, or assess a
    home/repeater pair end to end.
    """

    def __init__(
        self,
        elevations_api_client: BaseElevationsApiClient,
        storage: BaseProfileStorage | None = None,
        settings: Settings | None = None,
    ):
        """
        Args:
            elevations_api_client: Client for fetching ground elevations
            storage: Optional cache for fetched terrain profiles
            settings: Application defaults (frequency, k-factor, AGL, ...)
        """
        self.settings = settings or Settings()
        self._storage = storage
        self._analyzer = ProfileAnalyzer()
        self._quick_screen = QuickScreen()
        self._orchestrator = OrchestrationService(
            profile_service=PathProfileService(elevations_api_client),
            analyzer=self._analyzer,
            quick_screen=self._quick_screen,
            storage=storage,
        )

    @classmethod
    def create_from_env(cls, env: Env) -> "RepeaterLosAPI":
        """
        Factory method: one-line initialization from environment.

        Example:
            >>> from environs import Env
            >>> env = Env()
            >>> env.read_env()
            >>> facade = RepeaterLosAPI.create_from_env(env)
        """
        settings = Settings.from_env(env)
        if not settings.elevation_api_url:
            raise InvalidInput("ELEVATION_API_URL is not configured")
        elevations_client = AsyncElevationsApiClient(
            settings.elevation_api_url, settings.elevation_api_key
        )
        storage = FileProfileStorage(output_dir=settings.output_dir)
        return cls(elevations_client, storage, settings)

    def screen(
        self,
        h1_ft: float,
        h2_ft: float,
        distance_mi: float,
        frequency_mhz: float | None = None,
        fresnel_fraction: float | None = None,
    ) -> ScreenResult:
        """
        Classify a candidate path from antenna heights (ft AGL) and distance (mi).
        """
        inputs = ScreenInputs(
            distance_mi=distance_mi,
            frequency_mhz=(
                self.settings.frequency_mhz if frequency_mhz is None else frequency_mhz
            ),
            h1_agl_ft=h1_ft,
            h2_agl_ft=h2_ft,
            fresnel_fraction=(
                self.settings.fresnel_fraction
                if fresnel_fraction is None
                else fresnel_fraction
            ),
            k_fresnel=self.settings.k_factor,
        )
        return self._quick_screen.classify(inputs)

    def analyze_profile(
        self, profile: TerrainProfile, params: PathParameters | None = None
    ) -> ClearanceResult:
        """Run the full clearance analysis on an already sampled profile."""
        return self._analyzer.analyze(profile, params or self.settings.path_parameters())

    async def assess(
        self,
        home: tuple[float, float],
        target: tuple[float, float],
        home_agl_m: float | None = None,
        target_agl_m: float | None = None,
        home_elevation_m: float | None = None,
        target_elevation_m: float | None = None,
        params: PathParameters | None = None,
        profile_name: str | None = None,
        force: bool = False,
    ) -> LinkAssessment:
        """
        Screen a home/repeater pair and analyse its terrain unless dropped.

        Args:
            home: (lat, lon) of the home location
            target: (lat, lon) of the repeater
            home_agl_m: Home antenna height AGL (default from settings)
            target_agl_m: Repeater antenna height AGL (default from settings)
            home_elevation_m: Known home ground elevation, fetched if None
            target_elevation_m: Known repeater ground elevation, fetched if None
            params: Path parameters (default from settings)
            profile_name: Cache key for the terrain profile
            force: Analyse terrain even when the quick screen drops the pair
        """
        home_endpoint = Endpoint(
            id="home",
            latitude=home[0],
            longitude=home[1],
            ground_elevation_m=home_elevation_m,
            antenna_height_m=(
                self.settings.home_agl_m if home_agl_m is None else home_agl_m
            ),
        )
        target_endpoint = Endpoint(
            id="target",
            latitude=target[0],
            longitude=target[1],
            ground_elevation_m=target_elevation_m,
            antenna_height_m=(
                self.settings.target_agl_m if target_agl_m is None else target_agl_m
            ),
        )
        return await self._orchestrator.process(
            home_endpoint,
            target_endpoint,
            params or self.settings.path_parameters(),
            force=force,
            profile_name=profile_name,
        )
