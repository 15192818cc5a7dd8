import pytest
from environs import Env, EnvError

from repeater_los.config import Settings
from repeater_los.domain.models.parameters import PathParameters


def test_defaults():
    settings = Settings()
    assert settings.path_parameters() == PathParameters(
        step_m=200.0, frequency_mhz=146.0, k_factor=4 / 3, fresnel_fraction=0.6
    )
    assert settings.home_agl_m == 1.5
    assert settings.target_agl_m == 15.0


def test_from_env(monkeypatch):
    monkeypatch.setenv("ELEVATION_API_URL", "https://api.example.com/elevations")
    monkeypatch.setenv("ELEVATION_API_KEY", "secret")
    monkeypatch.setenv("LOS_FREQUENCY_MHZ", "446.0")
    monkeypatch.setenv("LOS_K_FACTOR", "1.0")
    monkeypatch.setenv("LOS_TARGET_AGL_M", "30")

    settings = Settings.from_env(Env())

    assert settings.elevation_api_url == "https://api.example.com/elevations"
    assert settings.elevation_api_key == "secret"
    assert settings.frequency_mhz == 446.0
    assert settings.k_factor == 1.0
    assert settings.target_agl_m == 30.0
    assert settings.step_m == 200.0


def test_path_parameter_overrides_skip_none():
    params = Settings(frequency_mhz=440.0).path_parameters(step_m=50.0, frequency_mhz=None)
    assert params.step_m == 50.0
    assert params.frequency_mhz == 440.0


def test_invalid_env_value(monkeypatch):
    monkeypatch.setenv("LOS_STEP_METERS", "fast")
    with pytest.raises(EnvError):
        Settings.from_env(Env())
