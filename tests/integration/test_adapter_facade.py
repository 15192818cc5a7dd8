"""
Integration tests for the RepeaterLosAPI.

These tests verify that the facade wires the screen, the profile service
and the analyzer together behind plain function calls.
"""

import numpy as np
import pytest
from environs import Env

from repeater_los import RepeaterLosAPI
from repeater_los.config import Settings
from repeater_los.domain.exceptions import InvalidInput
from repeater_los.domain.models.parameters import PathParameters
from repeater_los.domain.models.profile import TerrainProfile
from repeater_los.domain.models.screening import ScreenReason, Verdict
from repeater_los.infrastructure.storage import FileProfileStorage
from tests.mocks import FlatElevationsApiClient, MockElevationsApiClient


@pytest.fixture
def api():
    return RepeaterLosAPI(MockElevationsApiClient())


@pytest.mark.asyncio
class TestAdapterFacade:
    """Test suite for the RepeaterLosAPI."""

    async def test_assess_nearby_repeater(self, api: RepeaterLosAPI):
        assessment = await api.assess(
            home=(50.0, 14.0), target=(50.03, 14.0), home_agl_m=10.0, target_agl_m=40.0
        )

        assert assessment.verdict is not Verdict.DROP
        assert assessment.clearance is not None
        assert assessment.home.antenna_height_m == 10.0
        assert assessment.target.id == "target"
        assert assessment.clearance.total_distance_m == pytest.approx(3_336, rel=0.01)

    async def test_assess_distant_repeater_is_dropped(self, api: RepeaterLosAPI):
        assessment = await api.assess(home=(50.0, 14.0), target=(51.0, 14.0))

        assert assessment.verdict is Verdict.DROP
        assert assessment.clearance is None

    async def test_assess_force_returns_clearance(self):
        api = RepeaterLosAPI(FlatElevationsApiClient(300.0))
        assessment = await api.assess(
            home=(50.0, 14.0), target=(51.0, 14.0), force=True
        )

        assert assessment.verdict is Verdict.DROP
        assert not assessment.clearance.has_line_of_sight

    async def test_assess_uses_known_ground_elevations(self, api: RepeaterLosAPI):
        assessment = await api.assess(
            home=(50.0, 14.0),
            target=(50.03, 14.0),
            home_elevation_m=120.0,
            target_elevation_m=400.0,
        )

        assert assessment.screen.fresnel is not None
        profile_line = assessment.clearance.effective_line_of_sight_m
        assert profile_line[0] == pytest.approx(121.5)
        assert profile_line[-1] == pytest.approx(415.0)

    async def test_assess_caches_profile(self, tmp_path):
        client = MockElevationsApiClient()
        storage = FileProfileStorage(str(tmp_path))
        api = RepeaterLosAPI(client, storage=storage)

        for _ in range(2):
            await api.assess(home=(50.0, 14.0), target=(50.03, 14.0), profile_name="cached")

        assert client.calls == 1
        assert storage.path_for("cached").exists()


def test_screen_uses_settings_defaults():
    api = RepeaterLosAPI(MockElevationsApiClient(), settings=Settings(frequency_mhz=440.0))

    result = api.screen(h1_ft=300.0, h2_ft=300.0, distance_mi=5.0)

    assert result.verdict is Verdict.KEEP
    assert result.reason is ScreenReason.MID_FRESNEL_PASS
    assert result.fresnel.fresnel_radius_m == pytest.approx(37.0, abs=0.1)


def test_screen_explicit_zero_is_not_replaced(api: RepeaterLosAPI):
    with pytest.raises(InvalidInput):
        api.screen(h1_ft=30.0, h2_ft=30.0, distance_mi=2.0, fresnel_fraction=0.0)


def test_analyze_profile(api: RepeaterLosAPI):
    distances = np.linspace(0.0, 4_000.0, 21)
    profile = TerrainProfile.from_ground(distances, np.full(21, 250.0), 300.0, 290.0)

    result = api.analyze_profile(profile)
    strict = api.analyze_profile(profile, PathParameters(fresnel_fraction=1.0))

    assert result.has_line_of_sight
    assert result.fresnel_fraction == 0.6
    assert strict.min_clearance_m < result.min_clearance_m


def test_create_from_env(monkeypatch, tmp_path):
    monkeypatch.setenv("ELEVATION_API_URL", "https://api.example.com/elevations")
    monkeypatch.setenv("ELEVATION_API_KEY", "test_key")
    monkeypatch.setenv("OUTPUT_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("LOS_HOME_AGL_M", "6")

    api = RepeaterLosAPI.create_from_env(Env())

    assert api.settings.home_agl_m == 6.0
    assert api.settings.output_dir == str(tmp_path)


def test_create_from_env_requires_url(monkeypatch):
    monkeypatch.delenv("ELEVATION_API_URL", raising=False)
    with pytest.raises(InvalidInput):
        RepeaterLosAPI.create_from_env(Env())
