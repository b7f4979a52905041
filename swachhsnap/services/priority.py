"""Geolocation helpers and the complaint priority rule."""
import math
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from swachhsnap.core.config import settings
from swachhsnap.models.complaint import ComplaintPriority

EARTH_RADIUS_METERS = 6_371_000.0


@dataclass(frozen=True)
class SensitiveZone:
    """A location (hospital, school, ...) whose surroundings raise priority."""

    name: str
    latitude: float
    longitude: float


SENSITIVE_ZONES: Tuple[SensitiveZone, ...] = (
    SensitiveZone("City Hospital", 12.9716, 77.5946),
    SensitiveZone("Global School", 12.9352, 77.6245),
)


def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance between two coordinates, in meters."""
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = (
        math.sin(d_phi / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_METERS * c


def nearest_zone(
    latitude: float,
    longitude: float,
    zones: Iterable[SensitiveZone] = SENSITIVE_ZONES,
) -> Optional[Tuple[SensitiveZone, float]]:
    """Return the closest zone and its distance in meters, or None without zones."""
    best: Optional[Tuple[SensitiveZone, float]] = None
    for zone in zones:
        distance = haversine_distance(latitude, longitude, zone.latitude, zone.longitude)
        if best is None or distance < best[1]:
            best = (zone, distance)
    return best


def classify_priority(
    latitude: float,
    longitude: float,
    zones: Iterable[SensitiveZone] = SENSITIVE_ZONES,
    radius_meters: Optional[float] = None,
) -> ComplaintPriority:
    """
    Classify a complaint coordinate.

    HIGH when strictly closer than the radius to any sensitive zone,
    NORMAL otherwise (a point exactly on the radius is NORMAL).
    """
    radius = settings.PRIORITY_RADIUS_METERS if radius_meters is None else radius_meters
    for zone in zones:
        if haversine_distance(latitude, longitude, zone.latitude, zone.longitude) < radius:
            return ComplaintPriority.HIGH
    return ComplaintPriority.NORMAL
