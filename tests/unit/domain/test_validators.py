import math

import numpy as np
import pytest

from repeater_los.domain.exceptions import InvalidInput
from repeater_los.domain.models.coordinates import Coordinates
from repeater_los.domain.models.parameters import PathParameters
from repeater_los.domain.models.profile import TerrainProfile
from repeater_los.domain.validators import (
    validate_coordinates,
    validate_elevation_array,
    validate_fresnel_fraction,
    validate_non_negative,
    validate_path_parameters,
    validate_positive,
    validate_terrain_profile,
)


def make_profile(distances, ground=None, line=None):
    distances = np.asarray(distances, dtype=float)
    if ground is None:
        ground = np.zeros_like(distances)
    if line is None:
        line = np.full_like(distances, 10.0)
    return TerrainProfile(distances, ground, line)


def test_invalid_input_is_a_value_error():
    assert issubclass(InvalidInput, ValueError)


@pytest.mark.parametrize("value", [0, -1.0, math.nan, math.inf, True, "5"])
def test_validate_positive_rejects(value):
    with pytest.raises(InvalidInput):
        validate_positive(value, "x")


def test_validate_non_negative_accepts_zero():
    validate_non_negative(0.0, "x")
    with pytest.raises(InvalidInput, match="x must be non-negative"):
        validate_non_negative(-0.1, "x")


@pytest.mark.parametrize("fraction", [0.0, -0.2, 1.01, math.nan])
def test_validate_fresnel_fraction_rejects(fraction):
    with pytest.raises(InvalidInput):
        validate_fresnel_fraction(fraction)


@pytest.mark.parametrize("fraction", [0.01, 0.6, 1.0])
def test_validate_fresnel_fraction_accepts(fraction):
    validate_fresnel_fraction(fraction)


@pytest.mark.parametrize(
    "params",
    [
        PathParameters(step_m=0),
        PathParameters(frequency_mhz=-146.0),
        PathParameters(k_factor=0.0),
        PathParameters(fresnel_fraction=1.5),
    ],
)
def test_validate_path_parameters_rejects(params):
    with pytest.raises(InvalidInput):
        validate_path_parameters(params)


def test_validate_terrain_profile_accepts_well_formed():
    validate_terrain_profile(make_profile([0.0, 100.0, 200.0]))


def test_validate_terrain_profile_rejects_single_sample():
    with pytest.raises(InvalidInput, match="at least two"):
        validate_terrain_profile(make_profile([0.0]))


def test_validate_terrain_profile_rejects_mismatched_lengths():
    profile = TerrainProfile([0.0, 1.0, 2.0], [0.0, 0.0], [1.0, 1.0, 1.0])
    with pytest.raises(InvalidInput, match="same length"):
        validate_terrain_profile(profile)


def test_validate_terrain_profile_rejects_non_increasing_distances():
    with pytest.raises(InvalidInput):
        validate_terrain_profile(make_profile([0.0, 200.0, 200.0]))
    with pytest.raises(InvalidInput):
        validate_terrain_profile(make_profile([0.0, 300.0, 200.0]))


def test_validate_terrain_profile_rejects_offset_start():
    with pytest.raises(InvalidInput):
        validate_terrain_profile(make_profile([50.0, 100.0, 200.0]))


def test_validate_terrain_profile_rejects_nan():
    with pytest.raises(InvalidInput):
        validate_terrain_profile(make_profile([0.0, 100.0], ground=[0.0, np.nan]))


def test_validate_coordinates():
    validate_coordinates(Coordinates(50.0, 14.0))
    with pytest.raises(InvalidInput):
        validate_coordinates(Coordinates(91.0, 14.0))
    with pytest.raises(InvalidInput):
        validate_coordinates(Coordinates(50.0, 400.0))


def test_validate_elevation_array():
    validate_elevation_array(np.array([100.0, 120.0, 90.0]))
    with pytest.raises(InvalidInput):
        validate_elevation_array(np.array([]))
    with pytest.raises(InvalidInput):
        validate_elevation_array(np.array([100.0, np.inf]))
    with pytest.raises(InvalidInput):
        validate_elevation_array(np.array([100.0, 12_000.0]))
