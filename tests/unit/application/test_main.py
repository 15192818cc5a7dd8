import json
from unittest.mock import patch

import numpy as np
import pytest
import pytest_asyncio

from repeater_los.domain.models.profile import TerrainProfile
from repeater_los.infrastructure.storage import FileProfileStorage
from repeater_los.main import build_parser, main
from tests.mocks import FlatElevationsApiClient


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """Runs main() in an empty directory with output redirected to tmp_path."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("OUTPUT_DATA_DIR", str(tmp_path / "out"))
    monkeypatch.delenv("ELEVATION_API_URL", raising=False)
    return tmp_path


@pytest_asyncio.fixture
async def stored_profile(workdir):
    distances = np.linspace(0.0, 8_000.0, 41)
    profile = TerrainProfile.from_ground(distances, np.zeros(41), 40.0, 60.0)
    await FileProfileStorage(str(workdir / "out")).store("ridge", profile)
    return profile


def test_parser_requires_a_command():
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


def test_parser_analyze_sources_are_exclusive():
    with pytest.raises(SystemExit):
        build_parser().parse_args(
            ["analyze", "--profile", "a", "--home", "50", "14"]
        )


@pytest.mark.asyncio
async def test_screen_command_prints_verdict(workdir, capsys):
    code = await main(["screen", "--h1-ft", "5", "--h2-ft", "5", "--distance-mi", "50"])

    out = capsys.readouterr().out
    assert code == 0
    assert "DROP" in out
    assert "beyond_horizon" in out


@pytest.mark.asyncio
async def test_screen_command_reports_invalid_input(workdir, capsys):
    code = await main(["screen", "--h1-ft", "-5", "--h2-ft", "5", "--distance-mi", "5"])

    assert code == 2
    assert "Error:" in capsys.readouterr().out


@pytest.mark.asyncio
@pytest.mark.usefixtures("stored_profile")
async def test_analyze_stored_profile(workdir, capsys):
    code = await main(["analyze", "--profile", "ridge"])

    out = capsys.readouterr().out
    assert code == 0
    assert "Terrain Clearance" in out
    assert "Line of sight:" in out


@pytest.mark.asyncio
async def test_analyze_missing_profile(workdir, capsys):
    code = await main(["analyze", "--profile", "nowhere"])

    assert code == 1
    assert "profile not found" in capsys.readouterr().out


@pytest.mark.asyncio
@pytest.mark.usefixtures("stored_profile")
async def test_analyze_save_json(workdir, capsys):
    code = await main(["analyze", "--profile", "ridge", "--save-json", "--name", "ridge"])

    assert code == 0
    saved = json.loads((workdir / "out" / "ridge.json").read_text())
    assert isinstance(saved["clearance"]["line_of_sight"], bool)
    assert len(saved["profile"]["clearance_m"]) == 41


@pytest.mark.asyncio
async def test_analyze_home_requires_target(workdir, capsys):
    code = await main(["analyze", "--home", "50.0", "14.0"])

    assert code == 2
    assert "--target" in capsys.readouterr().out


@pytest.mark.asyncio
async def test_analyze_coordinates_fetches_elevations(workdir, monkeypatch, capsys):
    monkeypatch.setenv("ELEVATION_API_URL", "https://api.example.com/elevations")

    with patch(
        "repeater_los.main.AsyncElevationsApiClient",
        return_value=FlatElevationsApiClient(200.0),
    ):
        code = await main(
            [
                "analyze",
                "--home", "50.0", "14.0",
                "--target", "50.03", "14.0",
                "--home-agl-m", "30",
                "--target-agl-m", "30",
                "--name", "short",
            ]
        )

    out = capsys.readouterr().out
    assert code == 0
    assert "Quick Screen" in out
    assert "Terrain Clearance" in out
    assert (workdir / "out" / "short.profile").exists()
