from __future__ import annotations

import math

import pytest

from balloonwind.analysis.velocity import estimate_velocity, haversine_km
from balloonwind.models.point import PointRecord
from balloonwind.models.track import Track


def _track(*points: tuple[float, float, int]) -> Track:
    return Track(
        entity_id="A",
        points=tuple(PointRecord(entity_id="A", lat=lat, lon=lon, hour_offset=hour) for lat, lon, hour in points),
    )


def test_haversine_zero_for_same_point() -> None:
    assert haversine_km(45.0, 7.0, 45.0, 7.0) == 0.0


@pytest.mark.parametrize(
    ("p1", "p2"),
    [((10, 20), (10, 21)), ((-33.9, 151.2), (51.5, -0.1)), ((89.9, 0), (-89.9, 179.9)), ((0, -179.5), (0, 179.5))],
)
def test_haversine_is_symmetric(p1: tuple[float, float], p2: tuple[float, float]) -> None:
    assert haversine_km(*p1, *p2) == pytest.approx(haversine_km(*p2, *p1), abs=1e-9)


def test_haversine_one_degree_of_longitude_on_equator() -> None:
    expected = 6371.0 * math.radians(1.0)
    assert haversine_km(0, 0, 0, 1) == pytest.approx(expected, rel=1e-9)


def test_haversine_antipodal_points() -> None:
    assert haversine_km(0, 0, 0, 180) == pytest.approx(math.pi * 6371.0, rel=1e-9)


def test_speed_uses_two_most_recent_points() -> None:
    track = _track((10, 21, 1), (10, 20, 0), (50, 50, 6))

    estimate = estimate_velocity(track)

    assert estimate is not None
    assert estimate.elapsed_hours == 1.0
    assert estimate.speed_kmh == pytest.approx(haversine_km(10, 20, 10, 21))


def test_speed_divides_by_hour_gap() -> None:
    estimate = estimate_velocity(_track((0, 0, 2), (0, 1, 6)))

    assert estimate is not None
    assert estimate.elapsed_hours == 4.0
    assert estimate.speed_kmh == pytest.approx(haversine_km(0, 0, 0, 1) / 4)


def test_same_hour_points_use_minimum_elapsed_time() -> None:
    estimate = estimate_velocity(_track((0, 0, 0), (0, 0.01, 0)))

    assert estimate is not None
    assert estimate.elapsed_hours == pytest.approx(0.1)
    assert estimate.speed_kmh == pytest.approx(haversine_km(0, 0, 0, 0.01) / 0.1)


def test_single_point_track_has_no_estimate() -> None:
    assert estimate_velocity(_track((10, 10, 0))) is None


def test_stationary_track_has_zero_speed_estimate() -> None:
    estimate = estimate_velocity(_track((10, 10, 0), (10, 10, 1)))

    assert estimate is not None
    assert estimate.speed_kmh == 0.0
