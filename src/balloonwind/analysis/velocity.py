"""Great-circle distance and ground-speed estimation."""

from __future__ import annotations

import math

from balloonwind._constants import EARTH_RADIUS_KM, MIN_ELAPSED_HOURS
from balloonwind.models.track import Track, VelocityEstimate


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in km between two points given in degrees.

    Uses the haversine formula on a sphere of radius 6371 km. Accuracy
    degrades slightly for nearly antipodal points.
    """
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    dlat = math.radians(lat2 - lat1)
    dlon = math.radians(lon2 - lon1)
    a = math.sin(dlat / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlon / 2) ** 2
    # Rounding can push a fraction above 1 for antipodal points.
    a = min(1.0, a)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def estimate_velocity(track: Track, *, min_elapsed_hours: float = MIN_ELAPSED_HOURS) -> VelocityEstimate | None:
    """Ground speed between the two most recent points of *track*.

    Returns ``None`` ("no estimate") for single-point tracks, which is distinct
    from an estimate whose speed is ``0.0``.
    """
    latest = track.latest
    previous = track.previous
    if previous is None:
        return None

    distance = haversine_km(latest.lat, latest.lon, previous.lat, previous.lon)
    elapsed = max(abs(latest.hour_offset - previous.hour_offset), min_elapsed_hours)
    return VelocityEstimate(
        speed_kmh=distance / elapsed,
        distance_km=distance,
        elapsed_hours=float(elapsed),
    )
