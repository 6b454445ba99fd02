"""
Tests for GeoPoint value object.
Covers: factory validation, haversine distance (including antipodes), offset_north,
immutability.
"""

import math

import pytest
from pydantic import ValidationError

from src.domain.matching import GeoPoint
from src.domain.matching.constants import EARTH_RADIUS_KM
from src.domain.shared.exceptions import InvalidInputError


# ============================================================================
# HAPPY PATH TESTS
# ============================================================================


def test_create_valid_point():
    point = GeoPoint.create(35.681236, 139.767125)

    assert point.latitude == 35.681236
    assert point.longitude == 139.767125


def test_create_accepts_numeric_strings():
    point = GeoPoint.create("35.5", "139.5")

    assert point.to_dict() == {"latitude": 35.5, "longitude": 139.5}


def test_distance_to_itself_is_zero():
    point = GeoPoint.create(35.0, 139.0)

    assert point.distance_km(point) == 0.0


def test_distance_tokyo_station_to_shinjuku():
    tokyo_station = GeoPoint.create(35.681236, 139.767125)
    shinjuku = GeoPoint.create(35.689487, 139.691706)

    assert tokyo_station.distance_km(shinjuku) == pytest.approx(6.88, abs=0.05)


def test_distance_is_symmetric():
    a = GeoPoint.create(35.0, 139.0)
    b = GeoPoint.create(34.7, 135.5)

    assert a.distance_km(b) == pytest.approx(b.distance_km(a))


def test_offset_north_is_exact_along_meridian():
    origin = GeoPoint.create(35.681236, 139.767125)

    assert origin.distance_km(origin.offset_north(5.0)) == pytest.approx(5.0, abs=1e-9)


@pytest.mark.parametrize("latitude", [-89, -82, -12, -8, 0, 8, 12, 82, 89])
def test_distance_between_antipodal_points_is_half_circumference(latitude):
    point = GeoPoint.create(latitude, 0.0)
    antipode = GeoPoint.create(-latitude, 180.0)

    distance = point.distance_km(antipode)

    assert distance == pytest.approx(math.pi * EARTH_RADIUS_KM, rel=1e-9)
    assert distance == pytest.approx(20015.1, abs=0.5)


def test_geo_point_is_immutable():
    point = GeoPoint.create(0.0, 0.0)

    with pytest.raises(ValidationError):
        point.latitude = 10.0


# ============================================================================
# VALIDATION TESTS
# ============================================================================


@pytest.mark.parametrize(
    "latitude, longitude, field_name",
    [
        (91.0, 0.0, "latitude"),
        (-90.5, 0.0, "latitude"),
        (0.0, 181.0, "longitude"),
        (math.nan, 0.0, "latitude"),
        (0.0, math.inf, "longitude"),
        (None, 0.0, "latitude"),
        ("north", 0.0, "latitude"),
        (True, 0.0, "latitude"),
    ],
)
def test_create_rejects_invalid_coordinates(latitude, longitude, field_name):
    with pytest.raises(InvalidInputError) as exc_info:
        GeoPoint.create(latitude, longitude)

    assert exc_info.value.field_name == field_name
