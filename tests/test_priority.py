import pytest

from swachhsnap.models.complaint import ComplaintPriority
from swachhsnap.services.priority import (
    EARTH_RADIUS_METERS,
    SENSITIVE_ZONES,
    SensitiveZone,
    classify_priority,
    haversine_distance,
    nearest_zone,
)

METERS_PER_DEGREE_LAT = EARTH_RADIUS_METERS * 3.141592653589793 / 180
HOSPITAL = SENSITIVE_ZONES[0]


def north_of(zone, meters):
    return zone.latitude + meters / METERS_PER_DEGREE_LAT, zone.longitude


def test_haversine_zero_for_same_point():
    assert haversine_distance(12.9716, 77.5946, 12.9716, 77.5946) == 0


def test_haversine_one_degree_of_latitude():
    assert haversine_distance(0, 0, 1, 0) == pytest.approx(METERS_PER_DEGREE_LAT, rel=1e-9)


def test_haversine_is_symmetric():
    a = haversine_distance(12.9716, 77.5946, 12.9352, 77.6245)
    b = haversine_distance(12.9352, 77.6245, 12.9716, 77.5946)
    assert a == pytest.approx(b)


def test_report_at_city_hospital_is_high():
    assert classify_priority(12.9716, 77.5946) == ComplaintPriority.HIGH


def test_report_near_global_school_is_high():
    assert classify_priority(12.9355, 77.6245) == ComplaintPriority.HIGH


@pytest.mark.parametrize("meters, expected", [
    (150, ComplaintPriority.HIGH),
    (199, ComplaintPriority.HIGH),
    (201, ComplaintPriority.NORMAL),
    (2500, ComplaintPriority.NORMAL),
])
def test_distance_from_hospital(meters, expected):
    assert classify_priority(*north_of(HOSPITAL, meters)) == expected


def test_point_exactly_on_radius_is_normal():
    zone = SensitiveZone("Clinic", 10.0, 20.0)
    lat, lon = 10.001, 20.001
    distance = haversine_distance(lat, lon, zone.latitude, zone.longitude)

    assert classify_priority(lat, lon, zones=[zone], radius_meters=distance) == ComplaintPriority.NORMAL
    assert classify_priority(lat, lon, zones=[zone], radius_meters=distance + 0.01) == ComplaintPriority.HIGH


def test_no_zones_is_normal():
    assert classify_priority(12.9716, 77.5946, zones=[]) == ComplaintPriority.NORMAL


def test_nearest_zone_picks_closest():
    zone, distance = nearest_zone(12.9350, 77.6240)
    assert zone.name == "Global School"
    assert distance < 100


def test_nearest_zone_without_zones():
    assert nearest_zone(12.9, 77.6, zones=[]) is None
