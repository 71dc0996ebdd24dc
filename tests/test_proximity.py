from __future__ import annotations

from routequest.core.types import Coordinate, Waypoint
from routequest.mission.proximity import DEFAULT_PROXIMITY_M, ProximityGate, is_near

PLAZA_MAYOR = Waypoint(name="Plaza Mayor", lat=40.4154, lon=-3.7074)


def test_unknown_position_is_never_near():
    assert not is_near(None, PLAZA_MAYOR)
    assert not is_near(Coordinate(lat=float("nan"), lon=-3.7074), PLAZA_MAYOR)
    assert not is_near(None, PLAZA_MAYOR, threshold_m=1e9)


def test_waypoint_without_coordinate_is_never_near():
    assert not is_near(Coordinate(lat=40.4154, lon=-3.7074), Waypoint(name="Sin mapa"))


def test_within_default_threshold():
    assert DEFAULT_PROXIMITY_M == 100.0
    assert is_near(Coordinate(lat=40.4155, lon=-3.7074), PLAZA_MAYOR)
    assert not is_near(Coordinate(lat=40.4168, lon=-3.7038), PLAZA_MAYOR)


def test_threshold_override():
    far = Coordinate(lat=40.4168, lon=-3.7038)  # ~342 m away
    assert is_near(far, PLAZA_MAYOR, threshold_m=400.0)
    gate = ProximityGate(threshold_m=300.0)
    assert not gate(far, PLAZA_MAYOR)


def test_zero_latitude_is_a_real_coordinate():
    wp = Waypoint(name="Null Island", lat=0.0, lon=0.0)
    assert is_near(Coordinate(lat=0.0, lon=0.0), wp)


def test_infinite_coordinates_are_never_near():
    inf = float("inf")
    assert not is_near(Coordinate(lat=inf, lon=-3.7074), PLAZA_MAYOR)
    assert not is_near(Coordinate(lat=40.4154, lon=-inf), PLAZA_MAYOR, threshold_m=1e12)
    assert not is_near(Coordinate(lat=40.4154, lon=-3.7074), Waypoint(name="Lejos", lat=inf, lon=0.0))
    assert not Coordinate(lat=inf, lon=0.0).is_known()
