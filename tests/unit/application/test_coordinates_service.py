import math

import numpy as np
import pytest
from numpy.testing import assert_allclose

from repeater_los.application.services.coordinates import CoordinatesService
from repeater_los.domain.constants import EARTH_RADIUS_M
from repeater_los.domain.exceptions import InvalidInput
from repeater_los.domain.models.coordinates import Coordinates


def test_distance_along_equator():
    service = CoordinatesService(Coordinates(0.0, 0.0), Coordinates(0.0, 1.0))
    assert service.get_distance() == pytest.approx(EARTH_RADIUS_M * math.pi / 180)


def test_distance_is_symmetric():
    a = Coordinates(50.08, 14.42)
    b = Coordinates(49.19, 16.61)
    forward = CoordinatesService(a, b).get_distance()
    backward = CoordinatesService(b, a).get_distance()
    assert forward == pytest.approx(backward)
    assert forward == pytest.approx(185_000, rel=0.01)


def test_same_point_has_zero_distance():
    service = CoordinatesService(Coordinates(45.0, 7.0), Coordinates(45.0, 7.0))
    assert service.get_distance() == pytest.approx(0.0, abs=1.0)


def test_linspace_includes_both_ends():
    service = CoordinatesService(Coordinates(50.0, 14.0), Coordinates(50.2, 14.4))
    points = service.linspace(5)

    assert points.shape == (5, 2)
    assert_allclose(points[0], [50.0, 14.0])
    assert_allclose(points[-1], [50.2, 14.4])
    assert_allclose(points[2], [50.1, 14.2])


def test_linspace_across_antimeridian():
    service = CoordinatesService(Coordinates(0.0, 179.0), Coordinates(0.0, -179.0))
    points = service.linspace(3)

    assert_allclose(points[:, 1], [179.0, 180.0, -179.0])


def test_normalize_longitude():
    assert_allclose(
        CoordinatesService.normalize_longitude_180(np.array([181.0, 360.0, -190.0])),
        [-179.0, 0.0, 170.0],
    )


def test_rejects_invalid_coordinates():
    with pytest.raises(InvalidInput):
        CoordinatesService(Coordinates(95.0, 0.0), Coordinates(0.0, 0.0))
