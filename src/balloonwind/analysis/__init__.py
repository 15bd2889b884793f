"""Velocity estimation and wind correlation scoring."""

from balloonwind.analysis.correlation import (
    analyze,
    average_score,
    estimate_fleet_velocities,
    match_score,
    plan_wind_queries,
    score_entity,
)
from balloonwind.analysis.velocity import estimate_velocity, haversine_km

__all__ = [
    "analyze",
    "average_score",
    "estimate_fleet_velocities",
    "estimate_velocity",
    "haversine_km",
    "match_score",
    "plan_wind_queries",
    "score_entity",
]
